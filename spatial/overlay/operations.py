"""
Polygon overlay operations for spatial.
Feature-level intersect, union, difference, dissolve, mask and buffer built on
the planar overlay engine.
"""

import logging
import math
from collections import OrderedDict
from typing import Optional

import numpy as np
import shapely
from pyproj import CRS, Transformer
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry

from spatial.config import get_settings
from spatial.exceptions import InvalidArgumentError, InvalidGeoJSONError
from spatial.helpers import Properties, feature, feature_collection, polygon
from spatial.invariant import collection_of, get_geom
from spatial.measurement.bounds import bbox
from spatial.meta import feature_each, flatten_each
from spatial.models.units import length_to_radians, radians_to_length
from spatial.overlay.adapter import from_model, from_shape, to_shape
from spatial.overlay.engine import PlanarOverlayEngine
from spatial.transformation.coords import clean_coords, truncate


logger = logging.getLogger(__name__)

# Exterior ring covering the whole WGS84 plane
WORLD_RING = [[180.0, 90.0], [-180.0, 90.0], [-180.0, -90.0], [180.0, -90.0], [180.0, 90.0]]


def _collapses(geom: dict, precision: int = 4) -> bool:
    """True when a polygon loses its area once rounded to a few decimals."""
    if geom["type"] not in ("Polygon", "MultiPolygon"):
        return False
    try:
        rounded = clean_coords(truncate(geom, precision=precision))
    except InvalidGeoJSONError:
        return True
    coords = [rounded["coordinates"]] if geom["type"] == "Polygon" else rounded["coordinates"]
    return any(len(poly[0]) < 4 for poly in coords)


def intersect(poly1, poly2, properties: Properties = None) -> Optional[dict]:
    """
    Get the area shared by two (Multi)Polygons.

    Inputs are truncated to the configured overlay precision first. Polygons
    too narrow to survive rounding to 4 decimals intersect nothing.

    Args:
        poly1: Polygon or MultiPolygon Feature or geometry
        poly2: Polygon or MultiPolygon Feature or geometry
        properties: Properties of the returned feature

    Returns:
        Feature of the shared geometry (Polygon, or LineString/Point when the
        inputs only touch), None when they do not meet
    """
    geom1 = get_geom(poly1)
    geom2 = get_geom(poly2)
    if _collapses(geom2) or _collapses(geom1):
        logger.debug("intersect input collapses at 4 decimals, returning None")
        return None

    precision = get_settings().overlay_precision
    result = PlanarOverlayEngine().intersection(
        truncate(geom1, precision=precision), truncate(geom2, precision=precision)
    )
    if result is None:
        return None
    return feature(from_model(result), properties)


def union(*polygons, properties: Properties = None) -> dict:
    """
    Merge one or more (Multi)Polygons.

    Args:
        polygons: Polygon or MultiPolygon Features
        properties: Properties of the result, those of the first input when None

    Returns:
        Polygon or MultiPolygon Feature
    """
    if not polygons:
        raise InvalidGeoJSONError("at least one polygon is required")
    if properties is None:
        properties = polygons[0].get("properties") if polygons[0].get("type") == "Feature" else None

    engine = PlanarOverlayEngine()
    if len(polygons) == 1:
        merged = engine.union_shape(polygons[0])
        return feature(from_shape(merged), properties)
    return feature(from_model(engine.union(*polygons)), properties)


def difference(poly1, poly2) -> Optional[dict]:
    """
    Clip the second (Multi)Polygon out of the first.

    Returns:
        Feature carrying the properties of poly1, None when nothing remains
    """
    result = PlanarOverlayEngine().difference(poly1, poly2)
    if result is None:
        return None
    properties = poly1.get("properties") if poly1.get("type") == "Feature" else None
    return feature(from_model(result), properties)


def _polygon_parts(shape: BaseGeometry) -> list[BaseGeometry]:
    if shape.geom_type == "Polygon":
        return [shape]
    return [g for g in getattr(shape, "geoms", []) if g.geom_type == "Polygon"]


def dissolve(fc: dict, property_name: Optional[str] = None) -> dict:
    """
    Merge overlapping or touching polygons.

    Args:
        fc: FeatureCollection of Polygons
        property_name: Only merge polygons sharing the same value of this property

    Returns:
        FeatureCollection of Polygons, each carrying the properties of the first
        feature merged into it
    """
    collection_of(fc, "Polygon", "dissolve")
    groups: "OrderedDict[object, list[dict]]" = OrderedDict()
    for feat in feature_each(fc):
        key = (feat.get("properties") or {}).get(property_name) if property_name else None
        groups.setdefault(key, []).append(feat)

    engine = PlanarOverlayEngine()
    features = []
    for members in groups.values():
        merged = engine.union_shape(*members)
        for part in _polygon_parts(merged):
            # keep the properties of the first member overlapping this part
            owner = next(
                (m for m in members if to_shape(m).intersects(part)),
                members[0],
            )
            features.append(feature(from_shape(part), owner.get("properties")))
    return feature_collection(features)


def mask(polygons, mask: Optional[dict] = None) -> dict:
    """
    Turn polygons into holes of a mask polygon.

    Args:
        polygons: Polygon, MultiPolygon or FeatureCollection of Polygons
        mask: Polygon to carve the holes into, the whole world when None

    Returns:
        Polygon Feature
    """
    if mask is not None:
        outer = get_geom(mask)["coordinates"][0]
    else:
        outer = WORLD_RING

    parts = [f for f in flatten_each(polygons) if f["geometry"]["type"] == "Polygon"]
    if not parts:
        raise InvalidGeoJSONError("polygons must contain a Polygon")
    merged = PlanarOverlayEngine().union_shape(*parts)
    holes = [from_shape(Polygon(p.exterior))["coordinates"][0] for p in _polygon_parts(merged)]
    return polygon([outer, *holes])


def _transform_geometry(geometry: BaseGeometry, transformer: Transformer) -> BaseGeometry:
    """
    Transform a geometry using a pyproj Transformer.

    Args:
        geometry: Input Shapely geometry
        transformer: pyproj Transformer object

    Returns:
        Transformed geometry
    """
    return shapely.transform(geometry, lambda xy: np.column_stack(transformer.transform(xy[:, 0], xy[:, 1])))


def _buffer_feature(feat: dict, radius_m: float, steps: int) -> Optional[dict]:
    geom = feat.get("geometry")
    if geom is None:
        return None
    if geom["type"] == "GeometryCollection":
        raise InvalidGeoJSONError("GeometryCollection is not supported by buffer")

    lon, lat = _center_of(feat)
    aeqd = CRS(proj="aeqd", lat_0=lat, lon_0=lon, datum="WGS84", units="m")
    forward = Transformer.from_crs("EPSG:4326", aeqd, always_xy=True)
    inverse = Transformer.from_crs(aeqd, "EPSG:4326", always_xy=True)

    projected = _transform_geometry(to_shape(geom), forward)
    buffered = projected.buffer(radius_m, quad_segs=steps)
    if buffered.is_empty:
        return None
    return feature(from_shape(_transform_geometry(buffered, inverse)), feat.get("properties"))


def _center_of(feat: dict) -> tuple[float, float]:
    west, south, east, north = bbox(feat)
    return (west + east) / 2, (south + north) / 2


def buffer(geojson: dict, radius: float, units: Optional[str] = None, steps: int = 8):
    """
    Buffer a feature by a ground distance.

    Each feature is projected to an azimuthal-equidistant plane centered on its
    bbox center, buffered there in meters and projected back.

    Args:
        geojson: Feature, geometry or FeatureCollection
        radius: Buffer distance, negative values shrink polygons
        units: Length unit of radius
        steps: Segments used per quarter circle

    Returns:
        Buffered Feature (None when the buffer is empty) or FeatureCollection
    """
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    if steps <= 0:
        raise InvalidArgumentError("steps must be greater than 0")
    if math.isnan(radius):
        raise InvalidArgumentError("radius must be a number")

    sign = -1 if radius < 0 else 1
    radius_m = sign * radians_to_length(length_to_radians(abs(radius), units), "meters")

    if geojson.get("type") == "FeatureCollection":
        buffered = [_buffer_feature(f, radius_m, steps) for f in feature_each(geojson)]
        return feature_collection([f for f in buffered if f is not None])
    if geojson.get("type") != "Feature":
        geojson = feature(geojson)
    return _buffer_feature(geojson, radius_m, steps)
