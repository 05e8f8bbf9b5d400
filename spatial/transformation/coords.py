"""
Coordinate clean-up for spatial.
Redundant vertex removal, axis flipping, ring winding and precision truncation.
"""

import copy
import math

from spatial.exceptions import InvalidArgumentError, InvalidGeoJSONError
from spatial.booleans.point import boolean_clockwise
from spatial.invariant import get_geom
from spatial.meta import coord_each, geom_each


def clone(geojson: dict) -> dict:
    """Deep copy a GeoJSON object."""
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    return copy.deepcopy(geojson)


def _collinear(start, end, pt) -> bool:
    dxc, dyc = pt[0] - start[0], pt[1] - start[1]
    dxl, dyl = end[0] - start[0], end[1] - start[1]
    if dxc * dyl - dyc * dxl != 0:
        return False
    if abs(dxl) >= abs(dyl):
        return start[0] <= pt[0] <= end[0] if dxl > 0 else end[0] <= pt[0] <= start[0]
    return start[1] <= pt[1] <= end[1] if dyl > 0 else end[1] <= pt[1] <= start[1]


def _same(a, b) -> bool:
    return a[0] == b[0] and a[1] == b[1]


def _clean_line(points: list, is_ring: bool) -> list:
    if len(points) == 2 and not _same(points[0], points[1]):
        return list(points)

    cleaned = [points[0]]
    for pt in points[1:-1]:
        if _same(pt, cleaned[-1]):
            continue
        cleaned.append(pt)
        if len(cleaned) > 2 and _collinear(cleaned[-3], cleaned[-1], cleaned[-2]):
            del cleaned[-2]
    cleaned.append(points[-1])

    if is_ring and _same(points[0], points[-1]) and len(cleaned) < 4:
        raise InvalidGeoJSONError("invalid polygon")
    if len(cleaned) > 2 and _collinear(cleaned[-3], cleaned[-1], cleaned[-2]):
        del cleaned[-2]
    return cleaned


def _clean_multi_point(points: list) -> list:
    unique = []
    for pt in points:
        if not any(_same(pt, seen) for seen in unique):
            unique.append(pt)
    return unique


def clean_coords(geojson: dict, mutate: bool = False) -> dict:
    """
    Remove duplicate and collinear vertices.

    Args:
        geojson: Feature or geometry
        mutate: Update the input in place instead of working on a copy

    Returns:
        Cleaned Feature or geometry

    Raises:
        InvalidGeoJSONError: if a polygon ring collapses below four positions
    """
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    if not mutate:
        geojson = copy.deepcopy(geojson)
    geom = get_geom(geojson)
    gtype = geom["type"]
    coords = geom.get("coordinates")

    if gtype == "LineString":
        geom["coordinates"] = _clean_line(coords, False)
    elif gtype == "MultiLineString":
        geom["coordinates"] = [_clean_line(line, False) for line in coords]
    elif gtype == "Polygon":
        geom["coordinates"] = [_clean_line(ring, True) for ring in coords]
    elif gtype == "MultiPolygon":
        geom["coordinates"] = [[_clean_line(ring, True) for ring in poly] for poly in coords]
    elif gtype == "MultiPoint":
        geom["coordinates"] = _clean_multi_point(coords)
    elif gtype != "Point":
        raise InvalidGeoJSONError(f"{gtype} geometry not supported")
    return geojson


def flip(geojson: dict, mutate: bool = False) -> dict:
    """Swap the x and y of every position."""
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    if not mutate:
        geojson = copy.deepcopy(geojson)
    for coord in coord_each(geojson):
        coord[0], coord[1] = coord[1], coord[0]
    return geojson


def _rewind_geometry(geom: dict, reverse: bool) -> None:
    gtype = geom["type"]
    coords = geom["coordinates"]
    if gtype == "LineString":
        if boolean_clockwise(coords) == reverse:
            coords.reverse()
    elif gtype == "Polygon":
        _rewind_polygon(coords, reverse)
    elif gtype == "MultiPolygon":
        for poly in coords:
            _rewind_polygon(poly, reverse)


def _rewind_polygon(rings: list, reverse: bool) -> None:
    if boolean_clockwise(rings[0]) != reverse:
        rings[0].reverse()
    for hole in rings[1:]:
        if boolean_clockwise(hole) == reverse:
            hole.reverse()


def rewind(geojson: dict, reverse: bool = False, mutate: bool = False) -> dict:
    """
    Rewind rings to the RFC 7946 winding order.

    Exterior rings become counter-clockwise and holes clockwise (the opposite
    when reverse is set). LineStrings are wound clockwise, or counter-clockwise
    when reversed.

    Args:
        geojson: Any GeoJSON object
        reverse: Use the opposite winding
        mutate: Update the input in place instead of working on a copy

    Returns:
        Rewound GeoJSON object
    """
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    if not mutate:
        geojson = copy.deepcopy(geojson)
    for geom, _, _ in geom_each(geojson):
        if geom is not None:
            _rewind_geometry(geom, reverse)
    return geojson


def truncate(geojson: dict, precision: int = 6, coordinates: int = 3, mutate: bool = False) -> dict:
    """
    Round positions to a number of decimals and drop extra dimensions.

    Args:
        geojson: Any GeoJSON object
        precision: Decimals kept
        coordinates: Maximum number of values per position (2 drops elevation)
        mutate: Update the input in place instead of working on a copy

    Returns:
        Truncated GeoJSON object
    """
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    if precision < 0:
        raise InvalidArgumentError("precision must be a positive number")
    if coordinates < 2:
        raise InvalidArgumentError("coordinates must be at least 2")
    if not mutate:
        geojson = copy.deepcopy(geojson)

    factor = 10 ** precision
    for coord in coord_each(geojson):
        del coord[coordinates:]
        for i, value in enumerate(coord):
            coord[i] = math.floor(value * factor + 0.5) / factor
    return geojson
