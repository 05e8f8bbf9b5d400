"""
Shape generation for spatial.
Circles, ellipses, sectors and arcs built from geodesic destinations, plus
line smoothing, offsetting, chunking, simplification and clipping.
"""

import copy
import logging
import math
from typing import Optional

import shapely
from shapely.geometry import LineString as ShapelyLineString
from shapely.geometry import MultiPoint as ShapelyMultiPoint

from spatial.config import get_settings
from spatial.exceptions import InvalidArgumentError, InvalidGeoJSONError
from spatial.helpers import (
    BBox,
    Properties,
    feature,
    feature_collection,
    is_number,
    line_string,
    multi_line_string,
    polygon,
)
from spatial.invariant import get_coord, get_coords, get_geom, get_type
from spatial.measurement.distance import destination, rhumb_destination
from spatial.measurement.length import length, line_slice_along
from spatial.meta import coord_all, flatten_each, geom_each
from spatial.models.units import length_to_degrees
from spatial.overlay.adapter import from_shape, to_shape


logger = logging.getLogger(__name__)


def _steps(steps: Optional[int]) -> int:
    if steps is None:
        steps = get_settings().default_steps
    if not is_number(steps) or steps < 1:
        raise InvalidArgumentError("steps must be a positive number")
    return int(steps)


def _properties_of(center) -> dict:
    if isinstance(center, dict) and center.get("type") == "Feature":
        return center.get("properties") or {}
    return {}


def circle(
    center,
    radius: float,
    steps: Optional[int] = None,
    units: Optional[str] = None,
    properties: Properties = None,
) -> dict:
    """
    Approximate a circle of a given ground radius with a polygon.

    Args:
        center: Coord of the circle center
        radius: Radius of the circle
        steps: Number of vertices, the configured default_steps when None
        units: Length unit of radius
        properties: Properties of the polygon, those of a center Feature by default

    Returns:
        Polygon Feature with a counter-clockwise ring
    """
    if not center:
        raise InvalidGeoJSONError("center is required")
    if radius is None or not is_number(radius):
        raise InvalidArgumentError("radius is required")
    steps = _steps(steps)
    if properties is None:
        properties = _properties_of(center)

    coordinates = [
        destination(center, radius, i * -360 / steps, units)["geometry"]["coordinates"]
        for i in range(steps)
    ]
    coordinates.append(coordinates[0])
    return polygon([coordinates], properties)


def ellipse(
    center,
    x_semi_axis: float,
    y_semi_axis: float,
    angle: float = 0,
    steps: Optional[int] = None,
    units: Optional[str] = None,
    properties: Properties = None,
) -> dict:
    """
    Approximate an ellipse with a polygon.

    Semi-axes given in a ground unit are converted to degrees along rhumb lines
    east and north of the center; in "degrees" they are used as is.

    Args:
        center: Coord of the ellipse center
        x_semi_axis: Semi-axis along the x direction
        y_semi_axis: Semi-axis along the y direction
        angle: Clockwise rotation of the ellipse in decimal degrees
        steps: Number of vertices, the configured default_steps when None
        units: Length unit of the semi-axes
        properties: Properties of the polygon

    Returns:
        Polygon Feature
    """
    if not center:
        raise InvalidGeoJSONError("center is required")
    if not is_number(x_semi_axis) or x_semi_axis <= 0:
        raise InvalidArgumentError("x_semi_axis must be a positive number")
    if not is_number(y_semi_axis) or y_semi_axis <= 0:
        raise InvalidArgumentError("y_semi_axis must be a positive number")
    if not is_number(angle):
        raise InvalidArgumentError("angle must be a number")
    steps = _steps(steps)
    if properties is None:
        properties = _properties_of(center)

    cx, cy = get_coord(center)[:2]
    if units == "degrees":
        a, b = x_semi_axis, y_semi_axis
    else:
        a = rhumb_destination(center, x_semi_axis, 90, units)["geometry"]["coordinates"][0] - cx
        b = rhumb_destination(center, y_semi_axis, 0, units)["geometry"]["coordinates"][1] - cy

    rotation = math.radians(angle)
    cos_r, sin_r = math.cos(rotation), math.sin(rotation)
    coordinates = []
    for i in range(steps):
        phi = 2 * math.pi * i / steps
        radius = a * b / math.sqrt((b * math.cos(phi)) ** 2 + (a * math.sin(phi)) ** 2)
        x, y = radius * math.cos(phi), radius * math.sin(phi)
        coordinates.append([cx + x * cos_r + y * sin_r, cy + y * cos_r - x * sin_r])
    coordinates.append(coordinates[0])
    return polygon([coordinates], properties)


def _angle_to_360(alpha: float) -> float:
    return alpha % 360


def line_arc(
    center,
    radius: float,
    bearing1: float,
    bearing2: float,
    steps: Optional[int] = None,
    units: Optional[str] = None,
) -> dict:
    """
    Build the arc of a circle between two bearings, clockwise from bearing1.

    Equal bearings give the whole circle as a closed LineString.

    Args:
        center: Coord of the circle center
        radius: Radius of the circle
        bearing1: Start bearing in decimal degrees
        bearing2: End bearing in decimal degrees
        steps: Number of vertices of the full circle
        units: Length unit of radius

    Returns:
        LineString Feature carrying the properties of a center Feature
    """
    steps = _steps(steps)
    properties = _properties_of(center)
    angle1 = _angle_to_360(bearing1)
    angle2 = _angle_to_360(bearing2)
    if angle1 == angle2:
        ring = circle(center, radius, steps, units)["geometry"]["coordinates"][0]
        return line_string(ring, properties)

    end = angle2 if angle1 < angle2 else angle2 + 360
    coordinates = []
    alpha = angle1
    i = 0
    while alpha < end:
        coordinates.append(destination(center, radius, alpha, units)["geometry"]["coordinates"])
        i += 1
        alpha = angle1 + i * 360 / steps
    # the arc always ends exactly on bearing2
    coordinates.append(destination(center, radius, end, units)["geometry"]["coordinates"])
    return line_string(coordinates, properties)


def sector(
    center,
    radius: float,
    bearing1: float,
    bearing2: float,
    steps: Optional[int] = None,
    units: Optional[str] = None,
    properties: Properties = None,
) -> dict:
    """
    Build a circular sector between two bearings.

    Args:
        center: Coord of the circle center
        radius: Radius of the circle
        bearing1: Start bearing in decimal degrees
        bearing2: End bearing in decimal degrees
        steps: Number of vertices of the full circle
        units: Length unit of radius
        properties: Properties of the polygon

    Returns:
        Polygon Feature, a full circle when both bearings are equal
    """
    if not center:
        raise InvalidGeoJSONError("center is required")
    if not is_number(bearing1) or not is_number(bearing2):
        raise InvalidArgumentError("bearing1 and bearing2 are required")
    if properties is None:
        properties = _properties_of(center)
    if _angle_to_360(bearing1) == _angle_to_360(bearing2):
        return circle(center, radius, steps, units, properties)

    origin = list(get_coord(center))
    arc = line_arc(center, radius, bearing1, bearing2, steps, units)
    ring = [origin, *arc["geometry"]["coordinates"], origin]
    return polygon([ring], properties)


def _spline_controls(points: list, sharpness: float) -> list:
    centers = [
        [(p1[0] + p2[0]) / 2, (p1[1] + p2[1]) / 2] for p1, p2 in zip(points[:-1], points[1:])
    ]
    controls = [[points[0], points[0]]]
    for i in range(len(centers) - 1):
        pt = points[i + 1]
        dx = pt[0] - (centers[i][0] + centers[i + 1][0]) / 2
        dy = pt[1] - (centers[i][1] + centers[i + 1][1]) / 2
        controls.append([
            [(1 - sharpness) * pt[0] + sharpness * (centers[i][0] + dx),
             (1 - sharpness) * pt[1] + sharpness * (centers[i][1] + dy)],
            [(1 - sharpness) * pt[0] + sharpness * (centers[i + 1][0] + dx),
             (1 - sharpness) * pt[1] + sharpness * (centers[i + 1][1] + dy)],
        ])
    controls.append([points[-1], points[-1]])
    return controls


def _cubic(p0, c0, c1, p1, t: float) -> list:
    u = 1 - t
    return [
        u ** 3 * p0[i] + 3 * u * u * t * c0[i] + 3 * u * t * t * c1[i] + t ** 3 * p1[i]
        for i in range(2)
    ]


def bezier_spline(line, resolution: int = 10000, sharpness: float = 0.85, properties: Properties = None) -> dict:
    """
    Smooth a LineString into a curve passing through all of its vertices.

    Each segment becomes a cubic Bezier curve whose control points are pulled
    towards the neighbouring segments by sharpness.

    Args:
        line: LineString Feature or geometry
        resolution: Time in milliseconds between points, higher gives more vertices
        sharpness: Curvature of the splines between 0 and 1
        properties: Properties of the result, those of the line by default

    Returns:
        LineString Feature
    """
    if get_type(line, "line") != "LineString":
        raise InvalidGeoJSONError("line must be a LineString")
    if not is_number(resolution) or resolution <= 0:
        raise InvalidArgumentError("resolution must be a positive number")
    if not is_number(sharpness):
        raise InvalidArgumentError("sharpness must be a number")
    if properties is None:
        properties = line.get("properties") if line.get("type") == "Feature" else None

    points = [list(c[:2]) for c in get_coords(line)]
    controls = _spline_controls(points, sharpness)
    segments = len(points) - 1
    samples = max(1, int(resolution / 20 / segments))

    coordinates = [points[0]]
    for i in range(segments):
        for step in range(1, samples + 1):
            coordinates.append(_cubic(points[i], controls[i][1], controls[i + 1][0], points[i + 1], step / samples))
    return line_string(coordinates, properties)


def _offset_segment(p1, p2, offset: float) -> list:
    seg_length = math.hypot(p1[0] - p2[0], p1[1] - p2[1])
    dx = offset * (p2[1] - p1[1]) / seg_length
    dy = offset * (p1[0] - p2[0]) / seg_length
    return [[p1[0] + dx, p1[1] + dy], [p2[0] + dx, p2[1] + dy]]


def _line_intersection(a: list, b: list) -> Optional[list]:
    """Intersection of the infinite lines through two segments, None when parallel."""
    rx, ry = a[1][0] - a[0][0], a[1][1] - a[0][1]
    sx, sy = b[1][0] - b[0][0], b[1][1] - b[0][1]
    cross = rx * sy - ry * sx
    if cross == 0:
        return None
    qx, qy = b[0][0] - a[0][0], b[0][1] - a[0][1]
    t = (qx * sy - qy * sx) / cross
    return [a[0][0] + t * rx, a[0][1] + t * ry]


def _offset_line(coords: list, offset: float) -> list:
    # repeated vertices give zero-length segments without a direction
    coords = [c for i, c in enumerate(coords) if i == 0 or list(c[:2]) != list(coords[i - 1][:2])]
    if len(coords) < 2:
        raise InvalidGeoJSONError("line must have two distinct positions")
    segments = [_offset_segment(p1, p2, offset) for p1, p2 in zip(coords[:-1], coords[1:])]
    for previous, segment in zip(segments[:-1], segments[1:]):
        joint = _line_intersection(segment, previous)
        if joint is not None:
            previous[1] = joint
            segment[0] = joint
    return [segments[0][0]] + [segment[1] for segment in segments]


def line_offset(geojson, distance: float, units: Optional[str] = None) -> dict:
    """
    Offset a line by a distance, to the right for positive values.

    Args:
        geojson: LineString or MultiLineString Feature or geometry
        distance: Offset distance, negative values offset to the left
        units: Length unit of distance

    Returns:
        Feature of the same type as the input, carrying its properties
    """
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    if distance is None or not is_number(distance):
        raise InvalidArgumentError("distance is required")

    gtype = get_type(geojson)
    properties = geojson.get("properties") if geojson.get("type") == "Feature" else None
    offset = length_to_degrees(distance, units)
    if gtype == "LineString":
        return line_string(_offset_line(get_coords(geojson), offset), properties)
    if gtype == "MultiLineString":
        return multi_line_string([_offset_line(line, offset) for line in get_coords(geojson)], properties)
    raise InvalidGeoJSONError(f"geometry {gtype} is not supported")


def line_chunk(geojson, segment_length: float, units: Optional[str] = None, reverse: bool = False) -> dict:
    """
    Cut lines into pieces of a fixed length.

    Args:
        geojson: LineString, MultiLineString or a FeatureCollection of them
        segment_length: Length of each piece
        units: Length unit of segment_length
        reverse: Start cutting from the end of each line

    Returns:
        FeatureCollection of LineStrings, the last piece of a line may be shorter
    """
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    if not is_number(segment_length) or segment_length <= 0:
        raise InvalidArgumentError("segment_length must be greater than 0")

    results = []
    for feat in flatten_each(geojson):
        if feat["geometry"]["type"] != "LineString":
            raise InvalidGeoJSONError(f"geometry {feat['geometry']['type']} is not supported")
        line = copy.deepcopy(feat)
        if reverse:
            line["geometry"]["coordinates"].reverse()
        line_length = length(line, units)
        if line_length <= segment_length:
            results.append(line)
            continue
        count = math.ceil(line_length / segment_length)
        for i in range(count):
            results.append(line_slice_along(line, segment_length * i, segment_length * (i + 1), units))
    return feature_collection(results)


def _valid_ring(ring: list) -> bool:
    return len(ring) >= 4 and ring[0] == ring[-1]


def _simplify_coords(coords: list, tolerance: float, high_quality: bool) -> list:
    if len(coords) <= 2:
        return coords
    simple = ShapelyLineString(coords).simplify(tolerance, preserve_topology=high_quality)
    return [list(c) for c in simple.coords]


def _simplify_ring(ring: list, tolerance: float, high_quality: bool) -> list:
    simple = _simplify_coords(ring, tolerance, high_quality)
    # shrink the tolerance until the ring keeps enough vertices to stay a polygon
    while not _valid_ring(simple) and tolerance > 1e-12:
        tolerance -= tolerance * 0.01
        simple = _simplify_coords(ring, tolerance, high_quality)
    if not _valid_ring(simple):
        return ring
    return simple


def _simplify_geometry(geom: dict, tolerance: float, high_quality: bool) -> None:
    gtype = geom["type"]
    coords = geom["coordinates"]
    if gtype == "LineString":
        geom["coordinates"] = _simplify_coords(coords, tolerance, high_quality)
    elif gtype == "MultiLineString":
        geom["coordinates"] = [_simplify_coords(line, tolerance, high_quality) for line in coords]
    elif gtype == "Polygon":
        geom["coordinates"] = [_simplify_ring(ring, tolerance, high_quality) for ring in coords]
    elif gtype == "MultiPolygon":
        geom["coordinates"] = [[_simplify_ring(ring, tolerance, high_quality) for ring in poly] for poly in coords]


def simplify(geojson: dict, tolerance: float = 1, high_quality: bool = False, mutate: bool = False) -> dict:
    """
    Reduce the number of vertices of lines and polygons (Douglas-Peucker).

    Polygon rings never drop below four positions; points are left untouched.

    Args:
        geojson: Any GeoJSON object
        tolerance: Simplification tolerance in degrees
        high_quality: Keep the result free of self-intersections
        mutate: Update the input in place instead of working on a copy

    Returns:
        Simplified GeoJSON object
    """
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    if not is_number(tolerance) or tolerance < 0:
        raise InvalidArgumentError("invalid tolerance")
    if not mutate:
        geojson = copy.deepcopy(geojson)
    for geom, _, _ in geom_each(geojson):
        if geom is not None and "coordinates" in geom:
            _simplify_geometry(geom, tolerance, high_quality)
    return geojson


def bbox_clip(geojson, bbox: BBox) -> dict:
    """
    Clip a line or polygon to a bounding box.

    Args:
        geojson: (Multi)LineString or (Multi)Polygon Feature or geometry
        bbox: [west, south, east, north]

    Returns:
        Feature of the clipped geometry carrying the input properties; lines
        cut into several pieces become a MultiLineString
    """
    gtype = get_type(geojson, "geojson")
    if gtype not in ("LineString", "MultiLineString", "Polygon", "MultiPolygon"):
        raise InvalidGeoJSONError(f"geometry {gtype} not supported")
    properties = geojson.get("properties") if geojson.get("type") == "Feature" else None

    clipped = shapely.clip_by_rect(to_shape(get_geom(geojson)), *bbox)
    if clipped.is_empty:
        empty_type = "MultiLineString" if "LineString" in gtype else gtype
        return feature({"type": empty_type, "coordinates": []}, properties)
    return feature(from_shape(clipped), properties)


def convex(geojson, properties: Properties = None) -> Optional[dict]:
    """
    Build the convex hull of every position of a GeoJSON object.

    Returns:
        Polygon Feature, None when the positions do not span an area
    """
    hull = ShapelyMultiPoint([tuple(c[:2]) for c in coord_all(geojson)]).convex_hull
    if hull.geom_type != "Polygon":
        logger.debug("Convex hull degenerates to a %s", hull.geom_type)
        return None
    return feature(from_shape(hull), properties)
