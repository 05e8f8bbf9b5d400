"""
Polygon building for spatial.
Splitting self-intersecting polygons and assembling polygons from line work.
"""

import logging

from shapely.geometry import LineString as ShapelyLineString
from shapely.ops import polygonize as shapely_polygonize
from shapely.ops import unary_union

from spatial.booleans.point import in_ring
from spatial.exceptions import InvalidGeoJSONError
from spatial.helpers import feature, feature_collection
from spatial.meta import flatten_each, geom_each
from spatial.overlay.adapter import from_shape


logger = logging.getLogger(__name__)


def _faces(rings: list) -> list:
    noded = unary_union([ShapelyLineString([tuple(c[:2]) for c in ring]) for ring in rings])
    return list(shapely_polygonize(noded))


def unkink_polygon(geojson: dict) -> dict:
    """
    Split self-intersecting polygons into simple polygons.

    Faces are kept with the even-odd rule, so areas enclosed by holes are dropped.

    Args:
        geojson: Polygon, MultiPolygon or FeatureCollection of them

    Returns:
        FeatureCollection of Polygons carrying the properties of their source feature
    """
    features = []
    for feat in flatten_each(geojson):
        geom = feat["geometry"]
        if geom["type"] != "Polygon":
            raise InvalidGeoJSONError("geojson must be Polygon or MultiPolygon")
        rings = geom["coordinates"]
        faces = _faces(rings)
        kept = 0
        for face in faces:
            pt = face.representative_point()
            crossings = sum(in_ring((pt.x, pt.y), ring, True) for ring in rings)
            if crossings % 2 == 1:
                features.append(feature(from_shape(face), feat["properties"]))
                kept += 1
        if kept > 1:
            logger.debug("Split a self-intersecting polygon into %d parts", kept)
    return feature_collection(features)


def polygonize(geojson: dict) -> dict:
    """
    Build the polygons enclosed by a set of lines.

    The lines are noded before the faces are assembled; holes are kept.

    Args:
        geojson: (Multi)LineString Feature/geometry or FeatureCollection of them

    Returns:
        FeatureCollection of Polygons
    """
    lines = []
    for geom, _, _ in geom_each(geojson):
        if geom is None:
            continue
        if geom["type"] == "LineString":
            lines.append(ShapelyLineString(geom["coordinates"]))
        elif geom["type"] == "MultiLineString":
            lines.extend(ShapelyLineString(line) for line in geom["coordinates"])
        else:
            raise InvalidGeoJSONError("Invalid input type")
    if not lines:
        return feature_collection([])
    faces = shapely_polygonize(unary_union(lines))
    return feature_collection([feature(from_shape(face)) for face in faces])
