"""
Line overlay operations for spatial.
Segmenting, intersecting, overlapping and splitting lines, and finding self-intersections.
Segment lookups go through a shapely STRtree.
"""

import copy
from typing import Optional

from shapely.geometry import LineString as ShapelyLineString
from shapely.geometry import Point as ShapelyPoint
from shapely.strtree import STRtree

from spatial.booleans.point import boolean_point_on_line
from spatial.exceptions import InvalidGeoJSONError
from spatial.helpers import feature_collection, line_string, point
from spatial.invariant import get_coord, get_coords, get_geom, get_type
from spatial.measurement.bounds import bbox, square
from spatial.measurement.nearest import nearest_point_on_line
from spatial.meta import flatten_each, line_each, segment_each
from spatial.transformation.coords import truncate


def line_segment(geojson: dict) -> dict:
    """
    Split lines and polygon rings into two-vertex segments.

    Args:
        geojson: Any line or polygon GeoJSON object

    Returns:
        FeatureCollection of LineStrings, each with its bbox and the properties
        of the feature it came from
    """
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    segments = []
    for segment in segment_each(geojson):
        (x1, y1, *_), (x2, y2, *_) = segment["geometry"]["coordinates"]
        segment["bbox"] = [min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2)]
        segment["id"] = len(segments)
        segments.append(segment)
    return feature_collection(segments)


def _segment_intersection(c1, c2) -> Optional[list]:
    (x1, y1), (x2, y2) = c1[0][:2], c1[1][:2]
    (x3, y3), (x4, y4) = c2[0][:2], c2[1][:2]
    denom = (y4 - y3) * (x2 - x1) - (x4 - x3) * (y2 - y1)
    if denom == 0:
        return None
    ua = ((x4 - x3) * (y1 - y3) - (y4 - y3) * (x1 - x3)) / denom
    ub = ((x2 - x1) * (y1 - y3) - (y2 - y1) * (x1 - x3)) / denom
    if 0 <= ua <= 1 and 0 <= ub <= 1:
        return [x1 + ua * (x2 - x1), y1 + ua * (y2 - y1)]
    return None


def _segment_tree(segments: list[dict]) -> STRtree:
    return STRtree([ShapelyLineString(s["geometry"]["coordinates"]) for s in segments])


def line_intersect(line1, line2) -> dict:
    """
    Find the points where two line or polygon objects cross.

    Args:
        line1: LineString, MultiLineString, Polygon, MultiPolygon or a collection of them
        line2: LineString, MultiLineString, Polygon, MultiPolygon or a collection of them

    Returns:
        FeatureCollection of Points without duplicates
    """
    segments1 = line_segment(line1)["features"]
    segments2 = line_segment(line2)["features"]
    if not segments1 or not segments2:
        return feature_collection([])

    tree = _segment_tree(segments2)
    seen = set()
    results = []
    for seg in segments1:
        coords = seg["geometry"]["coordinates"]
        for idx in tree.query(ShapelyLineString(coords)):
            hit = _segment_intersection(coords, segments2[int(idx)]["geometry"]["coordinates"])
            if hit is None:
                continue
            key = (hit[0], hit[1])
            if key not in seen:
                seen.add(key)
                results.append(point(hit))
    return feature_collection(results)


def _concat_segment(line: dict, segment: dict) -> Optional[dict]:
    coords = segment["geometry"]["coordinates"]
    geom = line["geometry"]["coordinates"]
    start, end = geom[0], geom[-1]
    if coords[0] == start:
        geom.insert(0, coords[1])
    elif coords[0] == end:
        geom.append(coords[1])
    elif coords[1] == start:
        geom.insert(0, coords[0])
    elif coords[1] == end:
        geom.append(coords[0])
    else:
        return None
    return line


def _within_tolerance(coords: list, target: dict, tolerance: float) -> bool:
    if tolerance == 0:
        return all(boolean_point_on_line(c, target) for c in coords)
    return all(
        nearest_point_on_line(target, c, "kilometers")["properties"]["dist"] <= tolerance for c in coords
    )


def line_overlap(line1, line2, tolerance: float = 0) -> dict:
    """
    Find the segments two line or polygon objects share.

    Consecutive shared segments are merged into a single LineString.

    Args:
        line1: LineString, MultiLineString, Polygon or MultiPolygon
        line2: LineString, MultiLineString, Polygon or MultiPolygon
        tolerance: Distance in kilometers within which segments count as shared

    Returns:
        FeatureCollection of LineStrings
    """
    if tolerance < 0:
        raise InvalidGeoJSONError("tolerance must be a positive number")
    candidates = line_segment(line1)["features"]
    if not candidates:
        return feature_collection([])
    tree = _segment_tree(candidates)

    features = []
    overlap = None
    for segment in segment_each(line2):
        overlaps = False
        coords_segment = sorted(segment["geometry"]["coordinates"])
        for idx in tree.query(ShapelyLineString(segment["geometry"]["coordinates"])):
            if overlaps:
                break
            match = candidates[int(idx)]
            coords_match = sorted(match["geometry"]["coordinates"])
            if coords_segment == coords_match or _within_tolerance(coords_segment, match, tolerance):
                overlaps = True
                part = segment
            elif _within_tolerance(coords_match, segment, tolerance):
                overlaps = True
                part = copy.deepcopy(match)
            else:
                continue
            if overlap is None:
                overlap = part
            else:
                overlap = _concat_segment(overlap, part) or overlap

        if not overlaps and overlap is not None:
            features.append(overlap)
            overlap = None

    if overlap is not None:
        features.append(overlap)
    return feature_collection([line_string(f["geometry"]["coordinates"]) for f in features])


def _closest_feature(pt, features: list[dict]) -> dict:
    if len(features) == 1:
        return features[0]
    return min(features, key=lambda f: nearest_point_on_line(f, pt)["properties"]["dist"])


def _split_with_point(line: dict, splitter) -> list[dict]:
    coords = get_coords(line)
    splitter_coords = get_coord(splitter)
    start, end = coords[0], coords[-1]
    if list(start[:2]) == list(splitter_coords[:2]) or list(end[:2]) == list(splitter_coords[:2]):
        return [line]

    segments = line_segment(line)["features"]
    tree = _segment_tree(segments)
    found = [segments[int(i)] for i in tree.query(ShapelyPoint(splitter_coords[:2]))]
    if not found:
        return [line]
    closest_id = _closest_feature(splitter_coords, found)["id"]

    lines = []
    current = [start]
    for index, segment in enumerate(segments):
        segment_end = segment["geometry"]["coordinates"][1]
        if index == closest_id:
            current.append(splitter_coords)
            lines.append(line_string(current))
            if list(splitter_coords[:2]) == list(segment_end[:2]):
                current = [splitter_coords]
            else:
                current = [splitter_coords, segment_end]
        else:
            current.append(segment_end)
    if len(current) > 1:
        lines.append(line_string(current))
    return lines


def _split_with_points(line: dict, splitter: dict) -> list[dict]:
    results: list[dict] = []
    for pt in flatten_each(splitter):
        if not results:
            results = _split_with_point(line, pt)
            continue
        x, y = get_coord(pt)[:2]
        found = []
        for candidate in results:
            west, south, east, north = square(bbox(candidate))
            if west <= x <= east and south <= y <= north:
                found.append(candidate)
        if found:
            closest = _closest_feature(pt, found)
            results = [f for f in results if f is not closest]
            results.extend(_split_with_point(closest, pt))
    return results


def line_split(line, splitter) -> dict:
    """
    Split a LineString by a Point, MultiPoint, line or polygon.

    Splitters touching the first or last vertex do not split the line.

    Args:
        line: LineString Feature or geometry
        splitter: Point, MultiPoint, (Multi)LineString or (Multi)Polygon

    Returns:
        FeatureCollection of LineStrings
    """
    if not line:
        raise InvalidGeoJSONError("line is required")
    if not splitter:
        raise InvalidGeoJSONError("splitter is required")
    line_type = get_type(line)
    splitter_type = get_type(splitter)
    if line_type != "LineString":
        raise InvalidGeoJSONError("line must be LineString")
    if splitter_type == "FeatureCollection":
        raise InvalidGeoJSONError("splitter cannot be a FeatureCollection")
    if splitter_type == "GeometryCollection":
        raise InvalidGeoJSONError("splitter cannot be a GeometryCollection")
    if line.get("type") != "Feature":
        line = line_string(get_coords(line))

    # drop excess decimals so points found by intersection match segment envelopes
    truncated = truncate(splitter, precision=7)
    if splitter_type == "Point":
        return feature_collection(_split_with_point(line, truncated))
    if splitter_type == "MultiPoint":
        return feature_collection(_split_with_points(line, truncated))
    return feature_collection(_split_with_points(line, line_intersect(line, truncated)))


def kinks(geojson) -> dict:
    """
    Find the self-intersections of a line or polygon.

    Args:
        geojson: LineString, MultiLineString, Polygon or MultiPolygon

    Returns:
        FeatureCollection of Points where the shape crosses itself
    """
    geom = get_geom(geojson)
    if geom["type"] not in ("LineString", "MultiLineString", "Polygon", "MultiPolygon"):
        raise InvalidGeoJSONError("Input must be a LineString, MultiLineString, Polygon, or MultiPolygon Feature or Geometry")
    rings = [coords for coords, _ in line_each(geojson)]

    results = []
    for r1, ring1 in enumerate(rings):
        for r2 in range(r1, len(rings)):
            ring2 = rings[r2]
            same = r1 == r2
            closed = list(ring1[0]) == list(ring1[-1])
            for i in range(len(ring1) - 1):
                for k in range(i + 1 if same else 0, len(ring2) - 1):
                    if same and (k - i == 1 or (closed and i == 0 and k == len(ring1) - 2)):
                        continue
                    hit = _strict_intersection(ring1[i], ring1[i + 1], ring2[k], ring2[k + 1])
                    if hit is not None:
                        results.append(point(hit))
    return feature_collection(results)


def _strict_intersection(a1, a2, b1, b2) -> Optional[list]:
    denom = (b2[1] - b1[1]) * (a2[0] - a1[0]) - (b2[0] - b1[0]) * (a2[1] - a1[1])
    if denom == 0:
        return None
    a = ((b2[0] - b1[0]) * (a1[1] - b1[1]) - (b2[1] - b1[1]) * (a1[0] - b1[0])) / denom
    b = ((a2[0] - a1[0]) * (a1[1] - b1[1]) - (a2[1] - a1[1]) * (a1[0] - b1[0])) / denom
    if 0 < a < 1 and 0 < b < 1:
        return [a1[0] + a * (a2[0] - a1[0]), a1[1] + a * (a2[1] - a1[1])]
    return None
