"""
Rhumb-line affine transforms for spatial.
Rotate, scale and translate GeoJSON objects on the sphere.
"""

import copy
from typing import Optional, Union

from spatial.exceptions import InvalidArgumentError, InvalidGeoJSONError
from spatial.helpers import is_number
from spatial.invariant import get_coord, get_type
from spatial.measurement.bounds import bbox as compute_bbox
from spatial.measurement.centers import center, centroid
from spatial.measurement.distance import rhumb_bearing, rhumb_destination, rhumb_distance
from spatial.meta import coord_each


# Named origins accepted by transform_scale, mapped to bbox corners
_CORNERS = {
    "sw": (0, 1), "southwest": (0, 1), "westsouth": (0, 1), "bottomleft": (0, 1),
    "se": (2, 1), "southeast": (2, 1), "eastsouth": (2, 1), "bottomright": (2, 1),
    "nw": (0, 3), "northwest": (0, 3), "westnorth": (0, 3), "topleft": (0, 3),
    "ne": (2, 3), "northeast": (2, 3), "eastnorth": (2, 3), "topright": (2, 3),
}


def transform_rotate(geojson: dict, angle: float, pivot=None, mutate: bool = False) -> dict:
    """
    Rotate a GeoJSON object around a pivot along rhumb lines.

    Args:
        geojson: Any GeoJSON object
        angle: Rotation in decimal degrees, positive clockwise
        pivot: Coord to rotate around, the centroid by default
        mutate: Update the input in place instead of working on a copy

    Returns:
        Rotated GeoJSON object
    """
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    if angle is None or not is_number(angle):
        raise InvalidArgumentError("angle is required")
    if angle == 0:
        return geojson

    if not pivot:
        pivot = centroid(geojson)
    if not mutate:
        geojson = copy.deepcopy(geojson)

    for coords in coord_each(geojson):
        final_angle = rhumb_bearing(pivot, coords) + angle
        dist = rhumb_distance(pivot, coords)
        new_coords = rhumb_destination(pivot, dist, final_angle)["geometry"]["coordinates"]
        coords[0], coords[1] = new_coords[0], new_coords[1]
    return geojson


def _define_origin(geojson: dict, origin) -> list:
    if origin is None:
        origin = "centroid"
    if isinstance(origin, (list, tuple, dict)):
        return get_coord(origin)

    if origin in _CORNERS:
        box = geojson.get("bbox") or compute_bbox(geojson)
        x, y = _CORNERS[origin]
        return [box[x], box[y]]
    if origin == "center":
        return center(geojson)["geometry"]["coordinates"]
    if origin == "centroid":
        return centroid(geojson)["geometry"]["coordinates"]
    raise InvalidArgumentError("invalid origin")


def _scale(feature: dict, factor: float, origin) -> dict:
    is_point = get_type(feature) == "Point"
    origin_coords = _define_origin(feature, origin)
    if factor == 1 or is_point:
        return feature

    for coords in coord_each(feature):
        original_distance = rhumb_distance(origin_coords, coords)
        heading = rhumb_bearing(origin_coords, coords)
        new_coords = rhumb_destination(origin_coords, original_distance * factor, heading)["geometry"]["coordinates"]
        coords[0], coords[1] = new_coords[0], new_coords[1]
        if len(coords) == 3:
            coords[2] *= factor
    return feature


def transform_scale(
    geojson: dict,
    factor: float,
    origin: Optional[Union[str, list, dict]] = None,
    mutate: bool = False,
) -> dict:
    """
    Scale a GeoJSON object from an origin along rhumb lines.

    Args:
        geojson: Any GeoJSON object
        factor: Scale factor, 2 doubles every distance to the origin
        origin: Coord or one of sw/se/nw/ne (and their long names), center or centroid
        mutate: Update the input in place instead of working on a copy

    Returns:
        Scaled GeoJSON object; FeatureCollections are scaled feature by feature
        unless the origin is a Coord
    """
    if not geojson:
        raise InvalidGeoJSONError("geojson required")
    if not is_number(factor) or factor == 0:
        raise InvalidArgumentError("invalid factor")
    origin_is_point = isinstance(origin, (list, tuple, dict))

    if not mutate:
        geojson = copy.deepcopy(geojson)

    if geojson.get("type") == "FeatureCollection" and not origin_is_point:
        geojson["features"] = [_scale(f, factor, origin) for f in geojson["features"]]
        return geojson
    return _scale(geojson, factor, origin)


def transform_translate(
    geojson: dict,
    distance: float,
    direction: float,
    units: Optional[str] = None,
    z_translation: float = 0,
    mutate: bool = False,
) -> dict:
    """
    Move every position of a GeoJSON object along a rhumb line.

    Args:
        geojson: Any GeoJSON object
        distance: Length of the move, negative values move the opposite way
        direction: Bearing of the move in decimal degrees
        units: Length unit of distance
        z_translation: Amount added to elevation values
        mutate: Update the input in place instead of working on a copy

    Returns:
        Translated GeoJSON object
    """
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    if distance is None or not is_number(distance):
        raise InvalidArgumentError("distance is required")
    if direction is None or not is_number(direction):
        raise InvalidArgumentError("direction is required")
    if z_translation and not is_number(z_translation):
        raise InvalidArgumentError("z_translation is not a number")

    if distance == 0 and z_translation == 0:
        return geojson
    if distance < 0:
        distance = -distance
        direction = direction + 180

    if not mutate:
        geojson = copy.deepcopy(geojson)

    for coords in coord_each(geojson):
        new_coords = rhumb_destination(coords, distance, direction, units)["geometry"]["coordinates"]
        coords[0], coords[1] = new_coords[0], new_coords[1]
        if z_translation and len(coords) == 3:
            coords[2] += z_translation
    return geojson
