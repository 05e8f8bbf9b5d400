"""
Bounding boxes for spatial.
"""

import math
from typing import Optional

from spatial.exceptions import InvalidArgumentError, InvalidGeoJSONError
from spatial.helpers import BBox, Id, Properties, polygon, validate_bbox
from spatial.measurement.distance import distance
from spatial.meta import coord_each


def bbox(geojson: dict) -> list[float]:
    """
    Calculate the bounding box of any GeoJSON object.

    Args:
        geojson: Any GeoJSON object

    Returns:
        [west, south, east, north]
    """
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    result = [math.inf, math.inf, -math.inf, -math.inf]
    for coord in coord_each(geojson):
        result[0] = min(result[0], coord[0])
        result[1] = min(result[1], coord[1])
        result[2] = max(result[2], coord[0])
        result[3] = max(result[3], coord[1])
    return result


def bbox_polygon(bbox: BBox, properties: Properties = None, id: Id = None) -> dict:
    """
    Build the Polygon covering a bounding box.

    Raises:
        InvalidArgumentError: for a three-dimensional (6 position) bbox
    """
    validate_bbox(bbox)
    if len(bbox) == 6:
        raise InvalidArgumentError("bbox_polygon does not support BBox with 6 positions")
    west, south, east, north = (float(v) for v in bbox)

    low_left = [west, south]
    top_left = [west, north]
    top_right = [east, north]
    low_right = [east, south]
    return polygon([[low_left, low_right, top_right, top_left, low_left]], properties, id=id)


def envelope(geojson: dict, properties: Optional[dict] = None) -> dict:
    """Get the rectangular Polygon enclosing every vertex of a GeoJSON object."""
    return bbox_polygon(bbox(geojson), properties)


def square(bbox: BBox) -> list[float]:
    """
    Grow a bounding box into the smallest square bbox that contains it.

    The shorter side (measured on the ground) is extended around its midpoint.
    """
    validate_bbox(bbox)
    west, south, east, north = bbox[:4]

    horizontal_distance = distance([west, south], [east, south])
    vertical_distance = distance([west, south], [west, north])
    if horizontal_distance >= vertical_distance:
        vertical_midpoint = (south + north) / 2
        return [
            west,
            vertical_midpoint - (east - west) / 2,
            east,
            vertical_midpoint + (east - west) / 2,
        ]
    horizontal_midpoint = (west + east) / 2
    return [
        horizontal_midpoint - (north - south) / 2,
        south,
        horizontal_midpoint + (north - south) / 2,
        north,
    ]
