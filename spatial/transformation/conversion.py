"""
Geometry conversion for spatial.
Switching between lines and polygons, merging and exploding multi-geometries,
and moving properties between points and the polygons that contain them.
"""

import copy
import random
from typing import Optional

from spatial.booleans.point import boolean_point_in_polygon
from spatial.exceptions import InvalidArgumentError, InvalidGeoJSONError
from spatial.helpers import (
    Properties,
    feature,
    feature_collection,
    line_string,
    multi_line_string,
    multi_polygon,
    point,
    polygon,
)
from spatial.invariant import collection_of, get_coords, get_geom, get_type
from spatial.measurement.bounds import bbox
from spatial.meta import coord_each, feature_each, flatten_each


def _properties(geojson) -> Optional[dict]:
    if isinstance(geojson, dict) and geojson.get("type") == "Feature":
        return geojson.get("properties")
    return None


def _rings_to_line(rings: list, properties: Properties) -> dict:
    if len(rings) > 1:
        return multi_line_string(rings, properties)
    return line_string(rings[0], properties)


def polygon_to_line(poly, properties: Properties = None) -> dict:
    """
    Turn polygon rings into lines.

    Args:
        poly: Polygon, MultiPolygon Feature/geometry or a FeatureCollection of them
        properties: Properties of the result, those of the input Feature by default

    Returns:
        LineString (single ring) or MultiLineString Feature for a Polygon,
        a FeatureCollection for a MultiPolygon or FeatureCollection
    """
    if poly.get("type") == "FeatureCollection":
        return feature_collection([polygon_to_line(f, properties) for f in poly["features"]])

    geom = get_geom(poly)
    if properties is None:
        properties = _properties(poly)
    if geom["type"] == "Polygon":
        return _rings_to_line(geom["coordinates"], properties)
    if geom["type"] == "MultiPolygon":
        return feature_collection([_rings_to_line(rings, properties) for rings in geom["coordinates"]])
    raise InvalidGeoJSONError("invalid poly")


def _ring_area(ring: list) -> float:
    west, south, east, north = bbox({"type": "LineString", "coordinates": ring})
    return abs(west - east) * abs(south - north)


def _close(ring: list) -> list:
    ring = [list(c) for c in ring]
    if ring[0][:2] != ring[-1][:2]:
        ring.append(list(ring[0]))
    return ring


def _lines_to_rings(lines: list, auto_complete: bool, order_coords: bool) -> list:
    rings = [_close(line) if auto_complete else [list(c) for c in line] for line in lines]
    if order_coords:
        rings.sort(key=_ring_area, reverse=True)
    return rings


def line_to_polygon(
    lines,
    properties: Properties = None,
    auto_complete: bool = True,
    order_coords: bool = True,
) -> dict:
    """
    Turn closed lines into a polygon.

    Args:
        lines: LineString or MultiLineString Feature/geometry, or a FeatureCollection of them
        properties: Properties of the result, those of the input Feature by default
        auto_complete: Close rings whose first and last positions differ
        order_coords: Use the line with the largest bbox as the exterior ring

    Returns:
        Polygon Feature, a MultiPolygon Feature for a FeatureCollection
    """
    if not lines:
        raise InvalidGeoJSONError("lines is required")
    if lines.get("type") == "FeatureCollection":
        polys = [line_to_polygon(f, None, auto_complete, order_coords) for f in lines["features"]]
        return multi_polygon([p["geometry"]["coordinates"] for p in polys], properties)

    if properties is None:
        properties = _properties(lines) or {}
    gtype = get_type(lines)
    coords = get_coords(lines)
    if gtype == "LineString":
        return polygon(_lines_to_rings([coords], auto_complete, False), properties)
    if gtype == "MultiLineString":
        return polygon(_lines_to_rings(coords, auto_complete, order_coords), properties)
    raise InvalidGeoJSONError(f"geometry type {gtype} is not supported")


# Multi-geometry each single type is gathered into by combine
_MULTI = {
    "Point": "MultiPoint",
    "LineString": "MultiLineString",
    "Polygon": "MultiPolygon",
}


def combine(fc: dict) -> dict:
    """
    Merge the features of a collection into one multi-geometry per geometry family.

    Returns:
        FeatureCollection of MultiLineString, MultiPoint and MultiPolygon
        features (sorted by type), each holding the source properties in
        collectedProperties
    """
    groups: dict[str, dict[str, list]] = {}
    for feat in feature_each(fc):
        geom = feat.get("geometry")
        if not geom:
            continue
        gtype = geom["type"]
        if gtype in _MULTI.values():
            group = groups.setdefault(gtype, {"coordinates": [], "properties": []})
            group["coordinates"].extend(geom["coordinates"])
        elif gtype in _MULTI:
            group = groups.setdefault(_MULTI[gtype], {"coordinates": [], "properties": []})
            group["coordinates"].append(geom["coordinates"])
        else:
            continue
        group["properties"].append(feat.get("properties"))

    return feature_collection([
        feature(
            {"type": key, "coordinates": groups[key]["coordinates"]},
            {"collectedProperties": groups[key]["properties"]},
        )
        for key in sorted(groups)
        if groups[key]["coordinates"]
    ])


def explode(geojson: dict) -> dict:
    """Turn every position into a Point Feature carrying the properties of its feature."""
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    points = []
    if geojson.get("type") == "FeatureCollection":
        for feat in feature_each(geojson):
            points.extend(point(list(c), feat.get("properties")) for c in coord_each(feat))
    else:
        points.extend(point(list(c), _properties(geojson)) for c in coord_each(geojson))
    return feature_collection(points)


def flatten(geojson: dict) -> dict:
    """Split every multi-geometry into single-geometry features."""
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    return feature_collection([copy.deepcopy(f) for f in flatten_each(geojson)])


def _in_bbox(coords, box) -> bool:
    return box[0] <= coords[0] <= box[2] and box[1] <= coords[1] <= box[3]


def collect(polygons: dict, points: dict, in_property: str, out_property: str) -> dict:
    """
    Gather a property of the points falling inside each polygon.

    Args:
        polygons: FeatureCollection of Polygons
        points: FeatureCollection of Points
        in_property: Point property to collect
        out_property: Polygon property receiving the list of collected values

    Returns:
        Copy of polygons with out_property set on every feature
    """
    collection_of(polygons, "Polygon", "collect")
    collection_of(points, "Point", "collect")
    result = copy.deepcopy(polygons)
    for poly in result["features"]:
        box = bbox(poly)
        values = []
        for pt in points["features"]:
            coords = pt["geometry"]["coordinates"]
            if _in_bbox(coords, box) and boolean_point_in_polygon(coords, poly):
                values.append((pt.get("properties") or {}).get(in_property))
        if poly.get("properties") is None:
            poly["properties"] = {}
        poly["properties"][out_property] = values
    return result


def tag(points: dict, polygons: dict, field: str, out_field: str) -> dict:
    """
    Copy a property of the polygon containing each point onto the point.

    Points outside every polygon are left untouched; when polygons overlap
    the first containing polygon wins.

    Returns:
        Copy of points
    """
    collection_of(points, "Point", "tag")
    collection_of(polygons, "Polygon", "tag")
    result = copy.deepcopy(points)
    for pt in result["features"]:
        if pt.get("properties") is None:
            pt["properties"] = {}
        for poly in polygons["features"]:
            if boolean_point_in_polygon(pt, poly):
                pt["properties"][out_field] = (poly.get("properties") or {}).get(field)
                break
    return result


def sample(fc: dict, n: int) -> dict:
    """Pick n random features from a FeatureCollection without replacement."""
    if not fc or fc.get("type") != "FeatureCollection":
        raise InvalidGeoJSONError("fc must be a FeatureCollection")
    if n < 0 or n > len(fc["features"]):
        raise InvalidArgumentError("n must be between 0 and the number of features")
    return feature_collection(random.sample(fc["features"], n))


def points_within_polygon(points: dict, polygons: dict) -> dict:
    """
    Find the points that fall inside any of the polygons.

    Args:
        points: Point Feature or FeatureCollection of Points
        polygons: (Multi)Polygon Feature or FeatureCollection of them

    Returns:
        FeatureCollection of the points inside, each listed once
    """
    areas = list(feature_each(polygons))
    inside = []
    for pt in feature_each(points):
        if any(boolean_point_in_polygon(pt, area) for area in areas):
            inside.append(pt)
    return feature_collection(inside)
