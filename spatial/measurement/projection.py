"""
Web Mercator projection for spatial.
Converts positions and GeoJSON objects between WGS84 (EPSG:4326) and Web Mercator (EPSG:3857).
"""

import copy
from functools import lru_cache

from pyproj import Transformer

from spatial.exceptions import InvalidGeoJSONError
from spatial.meta import coord_each


# Extent of the Web Mercator plane in meters
MAX_EXTENT = 20037508.342789244
MAX_LATITUDE = 89.99999


@lru_cache(maxsize=2)
def _get_transformer(source: str, target: str) -> Transformer:
    return Transformer.from_crs(source, target, always_xy=True)


def _project_position(position, source: str, target: str) -> list:
    x, y = position[0], position[1]
    if source == "EPSG:4326":
        y = max(-MAX_LATITUDE, min(MAX_LATITUDE, y))
    px, py = _get_transformer(source, target).transform(x, y)
    if target == "EPSG:3857":
        px = max(-MAX_EXTENT, min(MAX_EXTENT, px))
        py = max(-MAX_EXTENT, min(MAX_EXTENT, py))
    return [px, py, *position[2:]]


def _convert(geojson, source: str, target: str, mutate: bool):
    if geojson is None:
        raise InvalidGeoJSONError("geojson is required")
    if isinstance(geojson, (list, tuple)):
        return _project_position(geojson, source, target)
    if not mutate:
        geojson = copy.deepcopy(geojson)
    for position in coord_each(geojson):
        position[:] = _project_position(position, source, target)
    return geojson


def to_mercator(geojson, mutate: bool = False):
    """
    Project a position or GeoJSON object from WGS84 to Web Mercator.

    Latitudes are clamped just short of the poles, where the projection is undefined.

    Args:
        geojson: [lon, lat] position or any GeoJSON object
        mutate: Update the input in place instead of working on a copy

    Returns:
        Projected position or GeoJSON object
    """
    return _convert(geojson, "EPSG:4326", "EPSG:3857", mutate)


def to_wgs84(geojson, mutate: bool = False):
    """
    Project a position or GeoJSON object from Web Mercator to WGS84.

    Args:
        geojson: [x, y] position in meters or any GeoJSON object
        mutate: Update the input in place instead of working on a copy

    Returns:
        Position or GeoJSON object in longitude/latitude
    """
    return _convert(geojson, "EPSG:3857", "EPSG:4326", mutate)
