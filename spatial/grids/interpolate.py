"""
Inverse distance weighting for spatial.
"""

import copy
from typing import Optional

import numpy as np

from spatial.exceptions import InvalidArgumentError, InvalidGeoJSONError
from spatial.grids.grids import hex_grid, point_grid, square_grid, triangle_grid
from spatial.helpers import feature_collection, is_number
from spatial.invariant import collection_of
from spatial.measurement.bounds import bbox
from spatial.measurement.centers import centroid
from spatial.models.units import get_factor


# Grid builders by grid type name, singular and plural
GRID_BUILDERS = {
    "point": point_grid,
    "points": point_grid,
    "square": square_grid,
    "squares": square_grid,
    "hex": hex_grid,
    "hexes": hex_grid,
    "triangle": triangle_grid,
    "triangles": triangle_grid,
}


def _haversine(origins: np.ndarray, targets: np.ndarray) -> np.ndarray:
    """Central angles in radians between every origin (rows) and every target (columns)."""
    lon1, lat1 = np.radians(origins[:, 0])[:, None], np.radians(origins[:, 1])[:, None]
    lon2, lat2 = np.radians(targets[:, 0])[None, :], np.radians(targets[:, 1])[None, :]
    a = np.sin((lat2 - lat1) / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin((lon2 - lon1) / 2) ** 2
    return 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))


def _z_values(points: dict, property: str) -> np.ndarray:
    values = []
    for index, pt in enumerate(points["features"]):
        value = (pt.get("properties") or {}).get(property)
        if value is None:
            coords = pt["geometry"]["coordinates"]
            value = coords[2] if len(coords) > 2 else None
        if value is None:
            raise InvalidGeoJSONError(f"zValue is missing for feature index {index}")
        values.append(value)
    return np.asarray(values, dtype=float)


def interpolate(
    points: dict,
    cell_size: float,
    grid_type: str = "square",
    property: str = "elevation",
    weight: float = 1,
    units: Optional[str] = None,
) -> dict:
    """
    Estimate values on a grid from scattered points by inverse distance weighting.

    The value of each grid cell is read from the property of the points, or
    their third coordinate when the property is missing. A cell sitting
    exactly on a point takes the value of that point.

    Args:
        points: FeatureCollection of Points
        cell_size: Size of the grid cells
        grid_type: point, square, hex or triangle
        property: Property holding the value to interpolate, also written to the cells
        weight: Exponent of the distance decay
        units: Length unit of cell_size

    Returns:
        FeatureCollection of grid cells carrying the interpolated property
    """
    if not points:
        raise InvalidGeoJSONError("points is required")
    collection_of(points, "Point", "interpolate")
    if not cell_size:
        raise InvalidArgumentError("cell_size is required")
    if not is_number(weight):
        raise InvalidArgumentError("weight must be a number")
    builder = GRID_BUILDERS.get(grid_type)
    if builder is None:
        raise InvalidArgumentError("invalid grid_type")

    grid = builder(bbox(points), cell_size, units)
    if not grid["features"]:
        return feature_collection([])

    samples = np.asarray([pt["geometry"]["coordinates"][:2] for pt in points["features"]], dtype=float)
    z = _z_values(points, property)
    if builder is point_grid:
        targets = [cell["geometry"]["coordinates"][:2] for cell in grid["features"]]
    else:
        targets = [centroid(cell)["geometry"]["coordinates"][:2] for cell in grid["features"]]

    distances = _haversine(np.asarray(targets, dtype=float), samples) * get_factor(units)
    exact = distances == 0
    with np.errstate(divide="ignore", invalid="ignore"):
        weights = 1.0 / np.power(distances, weight)
        weights[exact] = 0.0
        values = (weights @ z) / weights.sum(axis=1)
    # cells lying on a sample take its value
    hit_rows, hit_cols = np.nonzero(exact)
    values[hit_rows] = z[hit_cols]

    results = []
    for cell, value in zip(grid["features"], values.tolist()):
        cell = copy.deepcopy(cell)
        cell["properties"] = dict(cell.get("properties") or {})
        cell["properties"][property] = value
        results.append(cell)
    return feature_collection(results)
