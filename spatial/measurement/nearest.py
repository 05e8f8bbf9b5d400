"""
Nearest-feature searches for spatial.
Closest points, point-to-line distances, polygon tangents and plane interpolation.
"""

import copy
import math
from typing import Optional

from spatial.exceptions import InvalidArgumentError, InvalidGeoJSONError
from spatial.helpers import Properties, feature, feature_collection, line_string, point
from spatial.invariant import feature_of, get_coord, get_coords, get_type
from spatial.measurement.distance import (
    bearing,
    distance,
    rhumb_bearing,
    rhumb_distance,
)
from spatial.measurement.projection import to_mercator, to_wgs84
from spatial.meta import feature_each, geom_each, segment_each
from spatial.models.units import bearing_to_azimuth, convert_length, degrees_to_radians


def nearest_point(target, points: dict) -> dict:
    """
    Find the point of a collection closest to a target point.

    Args:
        target: Reference Coord
        points: FeatureCollection of Points

    Returns:
        Copy of the closest point with featureIndex and distanceToPoint (kilometers)
        added to its properties
    """
    if not target:
        raise InvalidGeoJSONError("targetPoint is required")
    if not points or not points.get("features"):
        raise InvalidGeoJSONError("points is required")

    best_index = 0
    min_dist = math.inf
    for index, pt in enumerate(points["features"]):
        dist = distance(target, pt, "kilometers")
        if dist < min_dist:
            best_index = index
            min_dist = dist

    nearest = copy.deepcopy(points["features"][best_index])
    nearest["properties"] = {
        **(nearest.get("properties") or {}),
        "featureIndex": best_index,
        "distanceToPoint": min_dist,
    }
    return nearest


def _closest_on_segment(pt, start, stop) -> tuple[list, float]:
    # local equirectangular frame centred on pt; t is the fraction along start->stop
    scale = math.cos(math.radians(pt[1]))
    ax, ay = (start[0] - pt[0]) * scale, start[1] - pt[1]
    bx, by = (stop[0] - pt[0]) * scale, stop[1] - pt[1]
    dx, dy = bx - ax, by - ay
    seg_len2 = dx * dx + dy * dy
    if seg_len2 == 0:
        return list(start), 0.0
    t = max(0.0, min(1.0, -(ax * dx + ay * dy) / seg_len2))
    return [start[0] + t * (stop[0] - start[0]), start[1] + t * (stop[1] - start[1])], t


def nearest_point_on_line(lines, pt, units: Optional[str] = None) -> dict:
    """
    Find the point on a (Multi)LineString closest to a given point.

    Args:
        lines: LineString or MultiLineString Feature or geometry
        pt: Coord to snap onto the line
        units: Length unit of the dist and location properties

    Returns:
        Point Feature with properties:
            index: index of the segment start vertex the point lies on
            dist: distance from pt to the snapped point
            location: distance along the line to the snapped point
    """
    line_type = get_type(lines, "lines")
    if line_type not in ("LineString", "MultiLineString"):
        raise InvalidGeoJSONError("lines must be LineString or MultiLineString")
    pt_coords = get_coord(pt)

    closest = point([math.inf, math.inf], {"dist": math.inf, "index": -1, "location": -1})
    travelled = 0.0
    coords = get_coords(lines)
    parts = [coords] if line_type == "LineString" else coords
    for part in parts:
        for i in range(len(part) - 1):
            start, stop = part[i], part[i + 1]
            snapped, t = _closest_on_segment(pt_coords, start, stop)
            dist = distance(pt_coords, snapped, units)
            if dist < closest["properties"]["dist"]:
                index = i + 1 if t == 1 else i
                closest = point(
                    snapped,
                    {
                        "dist": dist,
                        "index": index,
                        "location": travelled + distance(start, snapped, units),
                    },
                )
            travelled += distance(start, stop, units)
    return closest


def _euclidean_distance(start, end, units: Optional[str]) -> float:
    delta = 0
    if abs(start[0]) >= 180:
        delta = -180 if start[0] > 0 else 180
    if abs(end[0]) >= 180:
        delta = -180 if end[0] > 0 else 180
    p1 = to_mercator([start[0] + delta, start[1]])
    p2 = to_mercator([end[0] + delta, end[1]])
    d = math.hypot(p1[0] - p2[0], p1[1] - p2[1])
    return convert_length(d, "meters", units)


def _euclidean_foot(a, b, p) -> list:
    px, py = b[0] - a[0], b[1] - a[1]
    u = ((p[0] - a[0]) * px + (p[1] - a[1]) * py) / (px * px + py * py)
    return [a[0] + u * px, a[1] + u * py]


def _mercator_perpendicular(a, b, p, units: Optional[str]) -> float:
    delta = 0
    if abs(a[0]) >= 180 or abs(b[0]) >= 180 or abs(p[0]) >= 180:
        delta = -180 if (a[0] > 0 or b[0] > 0 or p[0] > 0) else 180
    foot = to_wgs84(
        _euclidean_foot(
            to_mercator([a[0] + delta, a[1]]),
            to_mercator([b[0] + delta, b[1]]),
            to_mercator([p[0] + delta, p[1]]),
        )
    )
    foot[0] -= delta
    return rhumb_distance(p, foot, units)


def _distance_to_segment(p, a, b, units: Optional[str], mercator: bool) -> float:
    measure = _euclidean_distance if mercator else distance
    heading = rhumb_bearing if mercator else bearing

    distance_ap = measure(a, p, units)
    azimuth_ap = bearing_to_azimuth(heading(a, p))
    azimuth_ab = bearing_to_azimuth(heading(a, b))
    angle_a = abs(azimuth_ap - azimuth_ab)
    # the perpendicular foot falls before a
    if angle_a > 90:
        return distance_ap

    azimuth_ba = (azimuth_ab + 180) % 360
    azimuth_bp = bearing_to_azimuth(heading(b, p))
    angle_b = abs(azimuth_bp - azimuth_ba)
    if angle_b > 180:
        angle_b = abs(angle_b - 360)
    # the perpendicular foot falls after b
    if angle_b > 90:
        return measure(p, b, units)

    if not mercator:
        return distance_ap * math.sin(degrees_to_radians(angle_a))
    return _mercator_perpendicular(a, b, p, units)


def point_to_line_distance(pt, line, units: Optional[str] = None, mercator: bool = False) -> float:
    """
    Get the shortest distance between a point and a LineString.

    Args:
        pt: Point Feature, Point geometry or position
        line: LineString Feature, geometry or list of positions
        units: Length unit of the result
        mercator: Measure on the Web Mercator plane instead of the sphere

    Returns:
        Distance from the point to the closest segment
    """
    if not pt:
        raise InvalidGeoJSONError("pt is required")
    if isinstance(pt, (list, tuple)):
        pt = point(pt)
    elif pt.get("type") == "Point":
        pt = feature(pt)
    else:
        feature_of(pt, "Point", "point")

    if not line:
        raise InvalidGeoJSONError("line is required")
    if isinstance(line, (list, tuple)):
        line = line_string(line)
    elif line.get("type") == "LineString":
        line = feature(line)
    else:
        feature_of(line, "LineString", "line")

    p = pt["geometry"]["coordinates"]
    result = math.inf
    for segment in segment_each(line):
        a, b = segment["geometry"]["coordinates"]
        result = min(result, _distance_to_segment(p, a, b, units, mercator))
    return result


def _point_collection(points: dict) -> list[dict]:
    ptype = points["geometry"]["type"] if points.get("geometry") else points.get("type")
    if ptype == "GeometryCollection":
        return [feature(geom) for geom, _, _ in geom_each(points) if geom and geom["type"] == "Point"]
    if ptype == "FeatureCollection":
        return [f for f in feature_each(points) if f["geometry"]["type"] == "Point"]
    raise InvalidGeoJSONError("points must be a Point Collection")


def nearest_point_to_line(
    points: dict, line, units: Optional[str] = None, properties: Properties = None
) -> Optional[dict]:
    """
    Find the point of a collection closest to a line.

    Args:
        points: FeatureCollection or GeometryCollection of Points
        line: LineString Feature or geometry
        units: Length unit of the dist property
        properties: Extra properties written on the returned point

    Returns:
        Copy of the closest point with a dist property
    """
    if not points:
        raise InvalidGeoJSONError("points is required")
    candidates = _point_collection(points)
    if not candidates:
        raise InvalidGeoJSONError("points must contain features")
    if not line:
        raise InvalidGeoJSONError("line is required")
    if get_type(line) != "LineString":
        raise InvalidGeoJSONError("line must be a LineString")

    best = None
    best_dist = math.inf
    for candidate in candidates:
        d = point_to_line_distance(candidate, line, units)
        if d < best_dist:
            best_dist = d
            best = candidate
    if best is None:
        return None
    best = copy.deepcopy(best)
    best["properties"] = {"dist": best_dist, **(best.get("properties") or {}), **(properties or {})}
    return best


def _is_left(p1, p2, p3) -> float:
    return (p2[0] - p1[0]) * (p3[1] - p1[1]) - (p3[0] - p1[0]) * (p2[1] - p1[1])


def _ring_tangents(ring, pt, eprev, rtan, ltan):
    for i, current in enumerate(ring):
        following = ring[0] if i == len(ring) - 1 else ring[i + 1]
        enext = _is_left(current, following, pt)
        if eprev <= 0 and enext > 0:
            if not _is_left(pt, current, rtan) < 0:
                rtan = current
        elif eprev > 0 and enext <= 0:
            if not _is_left(pt, current, ltan) > 0:
                ltan = current
        eprev = enext
    return rtan, ltan


def polygon_tangents(pt, polygon) -> dict:
    """
    Find the tangent vertices of a (Multi)Polygon as seen from a point.

    Args:
        pt: Coord outside the polygon
        polygon: Polygon or MultiPolygon Feature or geometry

    Returns:
        FeatureCollection of the right and left tangent Points
    """
    pt_coords = get_coords(pt)
    poly_coords = get_coords(polygon)
    poly_type = get_type(polygon)
    if poly_type == "Polygon":
        outer = poly_coords[0]
        rtan = ltan = outer[0]
        eprev = _is_left(outer[0], outer[-1], pt_coords)
        rtan, ltan = _ring_tangents(outer, pt_coords, eprev, rtan, ltan)
    elif poly_type == "MultiPolygon":
        first = poly_coords[0][0]
        rtan = ltan = first[0]
        eprev = _is_left(first[0], first[-1], pt_coords)
        for poly in poly_coords:
            rtan, ltan = _ring_tangents(poly[0], pt_coords, eprev, rtan, ltan)
    else:
        raise InvalidGeoJSONError("polygon must be a Polygon or MultiPolygon")
    return feature_collection([point(rtan), point(ltan)])


def planepoint(pt, triangle: dict) -> float:
    """
    Interpolate the z value of a point on the plane defined by a triangle.

    Args:
        pt: Coord inside the triangle
        triangle: Polygon Feature of three vertices with a, b and c properties
            holding the z values of each vertex

    Returns:
        Interpolated z value
    """
    x, y = get_coord(pt)[:2]
    ring = get_coords(triangle)[0]
    (x1, y1), (x2, y2), (x3, y3) = (c[:2] for c in ring[:3])
    properties = triangle.get("properties") or {}
    try:
        z1, z2, z3 = properties["a"], properties["b"], properties["c"]
    except KeyError:
        raise InvalidArgumentError("triangle properties a, b and c are required") from None

    numerator = (
        z3 * (x - x1) * (y - y2)
        + z1 * (x - x2) * (y - y3)
        + z2 * (x - x3) * (y - y1)
        - z2 * (x - x1) * (y - y3)
        - z3 * (x - x2) * (y - y1)
        - z1 * (x - x3) * (y - y2)
    )
    denominator = (
        (x - x1) * (y - y2)
        + (x - x2) * (y - y3)
        + (x - x3) * (y - y1)
        - (x - x1) * (y - y3)
        - (x - x2) * (y - y1)
        - (x - x3) * (y - y2)
    )
    return numerator / denominator
