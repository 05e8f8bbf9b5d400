"""
Spatial relationship predicates for spatial.
DE-9IM predicates are evaluated by shapely; overlap and parallelism follow
segment-by-segment comparisons.
"""

import shapely
from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry

from spatial.exceptions import InvalidGeoJSONError
from spatial.invariant import get_geom, get_type
from spatial.measurement.distance import rhumb_bearing
from spatial.meta import coord_all
from spatial.models.units import bearing_to_azimuth


def _shape(geojson, name: str) -> BaseGeometry:
    if not geojson:
        raise InvalidGeoJSONError(f"{name} is required")
    geom = get_geom(geojson)
    if geom is None:
        raise InvalidGeoJSONError(f"{name} must have a geometry")
    return shape(geom)


def boolean_contains(feature1, feature2) -> bool:
    """True when no point of feature2 lies outside feature1 and their interiors meet."""
    return _shape(feature1, "feature1").contains(_shape(feature2, "feature2"))


def boolean_within(feature1, feature2) -> bool:
    """True when feature1 lies completely inside feature2."""
    return _shape(feature1, "feature1").within(_shape(feature2, "feature2"))


def boolean_crosses(feature1, feature2) -> bool:
    """
    True when the features share some but not all interior points.

    Only meaningful for line/line, line/polygon and point/line combinations;
    every other combination is False.
    """
    return _shape(feature1, "feature1").crosses(_shape(feature2, "feature2"))


def boolean_disjoint(feature1, feature2) -> bool:
    """True when the features have no point in common."""
    return _shape(feature1, "feature1").disjoint(_shape(feature2, "feature2"))


def boolean_equal(feature1, feature2, precision: int = 6) -> bool:
    """
    Test whether two geometries are the same.

    Ring start vertex and orientation do not matter; coordinates are
    compared up to the given number of decimals.

    Args:
        feature1: Feature or geometry
        feature2: Feature or geometry
        precision: Decimals compared

    Returns:
        True when the geometries are equal
    """
    if get_type(feature1, "feature1") != get_type(feature2, "feature2"):
        return False
    shape1 = _shape(feature1, "feature1").normalize()
    shape2 = _shape(feature2, "feature2").normalize()
    return shape1.equals_exact(shape2, tolerance=10 ** -precision)


def boolean_overlap(feature1, feature2) -> bool:
    """
    Test whether two geometries of the same type overlap.

    MultiPoints overlap when they share a position, lines when they share a
    segment and polygons when their boundaries meet. Equal geometries do not
    overlap.

    Raises:
        InvalidGeoJSONError: for mixed types or Point inputs
    """
    if not feature1:
        raise InvalidGeoJSONError("feature1 is required")
    if not feature2:
        raise InvalidGeoJSONError("feature2 is required")
    type1 = get_type(feature1)
    type2 = get_type(feature2)
    if type1 != type2:
        raise InvalidGeoJSONError("features must be of the same type")
    if type1 == "Point":
        raise InvalidGeoJSONError("Point geometry not supported")

    if boolean_equal(feature1, feature2, precision=6):
        return False

    if type1 == "MultiPoint":
        coords2 = {tuple(c[:2]) for c in coord_all(feature2)}
        return any(tuple(c[:2]) in coords2 for c in coord_all(feature1))

    shape1 = _shape(feature1, "feature1")
    shape2 = _shape(feature2, "feature2")
    if type1 in ("LineString", "MultiLineString"):
        # a shared stretch of line has dimension 1, crossings only dimension 0
        return shapely.get_dimensions(shape1.intersection(shape2)) >= 1
    if type1 in ("Polygon", "MultiPolygon"):
        return shape1.boundary.intersects(shape2.boundary)
    raise InvalidGeoJSONError(f"{type1} geometry not supported")


def boolean_parallel(line1, line2) -> bool:
    """
    Test whether two LineStrings are parallel, segment by segment.

    Segments are paired in order after removing redundant vertices and
    compared by rhumb bearing; extra segments of the longer line are ignored.
    """
    from spatial.transformation.coords import clean_coords

    if not line1:
        raise InvalidGeoJSONError("line1 is required")
    if not line2:
        raise InvalidGeoJSONError("line2 is required")
    if get_type(line1, "line1") != "LineString":
        raise InvalidGeoJSONError("line1 must be a LineString")
    if get_type(line2, "line2") != "LineString":
        raise InvalidGeoJSONError("line2 must be a LineString")

    coords1 = get_geom(clean_coords(line1))["coordinates"]
    coords2 = get_geom(clean_coords(line2))["coordinates"]
    for (a1, b1), (a2, b2) in zip(zip(coords1[:-1], coords1[1:]), zip(coords2[:-1], coords2[1:])):
        slope1 = bearing_to_azimuth(rhumb_bearing(a1, b1))
        slope2 = bearing_to_azimuth(rhumb_bearing(a2, b2))
        if slope1 != slope2:
            return False
    return True
