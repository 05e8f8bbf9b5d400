"""
Iteration helpers for spatial.
Generators walking the coordinates, geometries, features and segments of any GeoJSON object.
"""

from typing import Any, Callable, Iterator, Optional, TypeVar

from spatial.exceptions import InvalidGeoJSONError
from spatial.helpers import feature, line_string


T = TypeVar("T")


def geom_each(geojson: dict) -> Iterator[tuple[Optional[dict], dict, int]]:
    """
    Iterate over each geometry in a GeoJSON object.

    GeometryCollections are expanded into their member geometries.

    Args:
        geojson: Any GeoJSON object

    Yields:
        Tuples of (geometry, properties of the owning feature, feature index)
    """
    gtype = geojson.get("type")
    if gtype == "FeatureCollection":
        items = [(f.get("geometry"), f.get("properties") or {}) for f in geojson["features"]]
    elif gtype == "Feature":
        items = [(geojson.get("geometry"), geojson.get("properties") or {})]
    else:
        items = [(geojson, {})]

    for index, (geom, properties) in enumerate(items):
        if geom is None:
            yield None, properties, index
        elif geom.get("type") == "GeometryCollection":
            for member in geom["geometries"]:
                yield member, properties, index
        else:
            yield geom, properties, index


def coord_each(geojson: dict, exclude_wrap_coord: bool = False) -> Iterator[list]:
    """
    Iterate over every position of a GeoJSON object.

    The yielded positions are the input's own lists, so callers working on a
    copy may update them in place.

    Args:
        geojson: Any GeoJSON object
        exclude_wrap_coord: Skip the closing position of polygon rings
    """
    for geom, _, _ in geom_each(geojson):
        if geom is None:
            continue
        yield from _geometry_coords(geom, exclude_wrap_coord)


def _geometry_coords(geom: dict, exclude_wrap_coord: bool) -> Iterator[list]:
    gtype = geom["type"]
    coords = geom.get("coordinates")
    wrap = 1 if exclude_wrap_coord else 0
    if gtype == "Point":
        yield coords
    elif gtype in ("LineString", "MultiPoint"):
        yield from coords
    elif gtype == "MultiLineString":
        for line in coords:
            yield from line
    elif gtype == "Polygon":
        for ring in coords:
            yield from ring[:len(ring) - wrap]
    elif gtype == "MultiPolygon":
        for poly in coords:
            for ring in poly:
                yield from ring[:len(ring) - wrap]
    elif gtype == "GeometryCollection":
        for member in geom["geometries"]:
            yield from _geometry_coords(member, exclude_wrap_coord)
    else:
        raise InvalidGeoJSONError("Unknown Geometry Type")


def coord_all(geojson: dict) -> list[list]:
    """Get all positions of a GeoJSON object as a list."""
    return list(coord_each(geojson))


def feature_each(geojson: dict) -> Iterator[dict]:
    """Iterate over the features of a FeatureCollection, or the Feature itself."""
    if geojson.get("type") == "FeatureCollection":
        yield from geojson["features"]
    elif geojson.get("type") == "Feature":
        yield geojson
    else:
        raise InvalidGeoJSONError("geojson must be a Feature or FeatureCollection")


def flatten_each(geojson: dict) -> Iterator[dict]:
    """
    Iterate over every single-part geometry as a Feature.

    Multi-geometries are split into one Feature per part; each carries the
    properties of the feature it came from.
    """
    for geom, properties, _ in geom_each(geojson):
        if geom is None:
            continue
        gtype = geom["type"]
        if gtype in ("Point", "LineString", "Polygon"):
            yield feature(geom, properties)
        else:
            single = gtype.replace("Multi", "")
            for coords in geom["coordinates"]:
                yield feature({"type": single, "coordinates": coords}, properties)


def line_each(geojson: dict) -> Iterator[tuple[list, dict]]:
    """Iterate over every LineString and polygon ring as (coordinates, properties)."""
    for feat in flatten_each(geojson):
        geom = feat["geometry"]
        if geom["type"] == "LineString":
            yield geom["coordinates"], feat["properties"]
        elif geom["type"] == "Polygon":
            for ring in geom["coordinates"]:
                yield ring, feat["properties"]


def segment_each(geojson: dict) -> Iterator[dict]:
    """Iterate over every two-vertex segment of lines and polygon rings as LineString Features."""
    for coords, properties in line_each(geojson):
        for start, end in zip(coords[:-1], coords[1:]):
            yield line_string([start, end], properties)


def segment_reduce(geojson: dict, callback: Callable[[T, dict], T], initial_value: T) -> T:
    """Reduce the segments of a GeoJSON object."""
    value = initial_value
    for segment in segment_each(geojson):
        value = callback(value, segment)
    return value


def prop_each(geojson: dict) -> Iterator[dict[str, Any]]:
    """Iterate over the properties of every feature."""
    for feat in feature_each(geojson):
        yield feat.get("properties") or {}
