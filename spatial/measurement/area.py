"""
Geodesic area for spatial.
Areas are computed on the WGS84 ellipsoid using pyproj.
"""

from pyproj import Geod

from spatial.exceptions import InvalidGeoJSONError
from spatial.meta import geom_each


GEOD = Geod(ellps="WGS84")


def _ring_area(ring) -> float:
    if len(ring) < 4:
        return 0.0
    lons = [c[0] for c in ring]
    lats = [c[1] for c in ring]
    ring_area, _ = GEOD.polygon_area_perimeter(lons, lats)
    return abs(ring_area)


def _polygon_area(rings) -> float:
    if not rings:
        return 0.0
    return _ring_area(rings[0]) - sum(_ring_area(hole) for hole in rings[1:])


def area(geojson: dict) -> float:
    """
    Calculate the area of the polygons of a GeoJSON object.

    Points and lines contribute nothing; holes are subtracted from their polygon.

    Args:
        geojson: Any GeoJSON object

    Returns:
        Area in square meters
    """
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    total = 0.0
    for geom, _, _ in geom_each(geojson):
        if geom is None:
            continue
        if geom["type"] == "Polygon":
            total += _polygon_area(geom["coordinates"])
        elif geom["type"] == "MultiPolygon":
            total += sum(_polygon_area(poly) for poly in geom["coordinates"])
    return total
