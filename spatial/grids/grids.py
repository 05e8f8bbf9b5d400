"""
Regular grids for spatial.
Point, square, hexagon and triangle grids covering a bounding box, sized by a
ground distance and optionally restricted to a mask polygon.
"""

import math
from typing import Optional

import numpy as np

from spatial.booleans.point import boolean_point_in_polygon
from spatial.booleans.relate import boolean_disjoint
from spatial.exceptions import InvalidArgumentError, InvalidGeoJSONError
from spatial.helpers import BBox, Properties, feature_collection, is_number, point, polygon
from spatial.invariant import get_type
from spatial.measurement.distance import distance


def _validate(bbox: BBox, cell_side: float, mask: Optional[dict]) -> None:
    if cell_side is None:
        raise InvalidArgumentError("cell_side is required")
    if not is_number(cell_side) or cell_side <= 0:
        raise InvalidArgumentError("cell_side is invalid")
    if not bbox:
        raise InvalidArgumentError("bbox is required")
    if not isinstance(bbox, (list, tuple)):
        raise InvalidArgumentError("bbox must be array")
    if len(bbox) != 4:
        raise InvalidArgumentError("bbox must contain 4 numbers")
    if mask and get_type(mask) not in ("Polygon", "MultiPolygon"):
        raise InvalidGeoJSONError("mask must be a (Multi)Polygon")


def _cell_size(bbox: BBox, cell_side: float, units: Optional[str]) -> tuple[float, float]:
    """Width and height in degrees of a cell_side cell measured along the south and west edges."""
    west, south, east, north = bbox
    x_fraction = cell_side / distance([west, south], [east, south], units)
    y_fraction = cell_side / distance([west, south], [west, north], units)
    return x_fraction * (east - west), y_fraction * (north - south)


def _keep(cell: dict, mask: Optional[dict]) -> bool:
    return mask is None or not boolean_disjoint(mask, cell)


def point_grid(
    bbox: BBox,
    cell_side: float,
    units: Optional[str] = None,
    mask: Optional[dict] = None,
    properties: Properties = None,
) -> dict:
    """
    Build a grid of points centered in a bounding box.

    Args:
        bbox: [west, south, east, north]
        cell_side: Distance between points
        units: Length unit of cell_side
        mask: (Multi)Polygon the points must fall inside
        properties: Properties of every point

    Returns:
        FeatureCollection of Points, column by column from the south-west
    """
    _validate(bbox, cell_side, mask)
    west, south, east, north = bbox
    cell_width, cell_height = _cell_size(bbox, cell_side, units)
    columns = math.floor((east - west) / cell_width)
    rows = math.floor((north - south) / cell_height)
    delta_x = ((east - west) - columns * cell_width) / 2
    delta_y = ((north - south) - rows * cell_height) / 2

    results = []
    current_x = west + delta_x
    while current_x <= east:
        current_y = south + delta_y
        while current_y <= north:
            cell = point([current_x, current_y], properties)
            if mask is None or boolean_point_in_polygon(cell, mask, ignore_boundary=True):
                results.append(cell)
            current_y += cell_height
        current_x += cell_width
    return feature_collection(results)


def square_grid(
    bbox: BBox,
    cell_side: float,
    units: Optional[str] = None,
    mask: Optional[dict] = None,
    properties: Properties = None,
) -> dict:
    """
    Build a grid of square cells centered in a bounding box.

    Args:
        bbox: [west, south, east, north]
        cell_side: Side length of each cell
        units: Length unit of cell_side
        mask: (Multi)Polygon the cells must intersect
        properties: Properties of every cell

    Returns:
        FeatureCollection of Polygons
    """
    _validate(bbox, cell_side, mask)
    west, south, east, north = bbox
    cell_width, cell_height = _cell_size(bbox, cell_side, units)
    columns = math.floor((east - west) / cell_width)
    rows = math.floor((north - south) / cell_height)
    delta_x = ((east - west) - columns * cell_width) / 2
    delta_y = ((north - south) - rows * cell_height) / 2

    results = []
    current_x = west + delta_x
    for _ in range(columns):
        current_y = south + delta_y
        for _ in range(rows):
            cell = polygon([[
                [current_x, current_y],
                [current_x, current_y + cell_height],
                [current_x + cell_width, current_y + cell_height],
                [current_x + cell_width, current_y],
                [current_x, current_y],
            ]], properties)
            if _keep(cell, mask):
                results.append(cell)
            current_y += cell_height
        current_x += cell_width
    return feature_collection(results)


def _hexagon(center: list, rx: float, ry: float, properties: Properties, cosines, sines) -> dict:
    vertices = [[center[0] + rx * c, center[1] + ry * s] for c, s in zip(cosines, sines)]
    vertices.append(list(vertices[0]))
    return polygon([vertices], properties)


def _hex_triangles(center: list, rx: float, ry: float, properties: Properties, cosines, sines) -> list:
    triangles = []
    for i in range(6):
        j = (i + 1) % 6
        triangles.append(polygon([[
            list(center),
            [center[0] + rx * cosines[i], center[1] + ry * sines[i]],
            [center[0] + rx * cosines[j], center[1] + ry * sines[j]],
            list(center),
        ]], properties))
    return triangles


def hex_grid(
    bbox: BBox,
    cell_side: float,
    units: Optional[str] = None,
    mask: Optional[dict] = None,
    properties: Properties = None,
    triangles: bool = False,
) -> dict:
    """
    Build a grid of flat-topped hexagons fitted inside a bounding box.

    Args:
        bbox: [west, south, east, north]
        cell_side: Length of a hexagon side, also the distance from its center to a vertex
        units: Length unit of cell_side
        mask: (Multi)Polygon the cells must intersect
        properties: Properties of every cell
        triangles: Split every hexagon into six triangles

    Returns:
        FeatureCollection of Polygons
    """
    _validate(bbox, cell_side, mask)
    west, south, east, north = bbox
    center_y = (south + north) / 2
    center_x = (west + east) / 2

    x_fraction = cell_side * 2 / distance([west, center_y], [east, center_y], units)
    cell_width = x_fraction * (east - west)
    y_fraction = cell_side * 2 / distance([center_x, south], [center_x, north], units)
    cell_height = y_fraction * (north - south)
    radius = cell_width / 2
    hex_width = radius * 2
    hex_height = math.sqrt(3) / 2 * cell_height

    box_width = east - west
    box_height = north - south
    x_interval = 3 / 4 * hex_width
    y_interval = hex_height

    # shift the grid so every hexagon stays inside the bbox
    x_count = math.floor((box_width - hex_width) / (hex_width - radius / 2))
    x_adjust = ((x_count * x_interval - radius / 2) - box_width) / 2 - radius / 2 + x_interval / 2
    y_count = math.floor((box_height - hex_height) / hex_height)
    y_adjust = (box_height - y_count * hex_height) / 2
    has_offset_y = y_count * hex_height - box_height > hex_height / 2
    if has_offset_y:
        y_adjust -= hex_height / 4

    angles = np.arange(6) * (2 * math.pi / 6)
    cosines = np.cos(angles).tolist()
    sines = np.sin(angles).tolist()

    results = []
    for x in range(x_count + 1):
        for y in range(y_count + 1):
            is_odd = x % 2 == 1
            if y == 0 and (is_odd or has_offset_y):
                continue
            hex_x = x * x_interval + west - x_adjust
            hex_y = y * y_interval + south + y_adjust
            if is_odd:
                hex_y -= hex_height / 2
            if triangles:
                cells = _hex_triangles([hex_x, hex_y], cell_width / 2, cell_height / 2, properties, cosines, sines)
            else:
                cells = [_hexagon([hex_x, hex_y], cell_width / 2, cell_height / 2, properties, cosines, sines)]
            results.extend(cell for cell in cells if _keep(cell, mask))
    return feature_collection(results)


def _cell_triangles(x: float, y: float, w: float, h: float, xi: int, yi: int) -> tuple[list, list]:
    if xi % 2 == 0 and yi % 2 == 0:
        return (
            [[x, y], [x, y + h], [x + w, y], [x, y]],
            [[x, y + h], [x + w, y + h], [x + w, y], [x, y + h]],
        )
    if xi % 2 == 0:
        return (
            [[x, y], [x + w, y + h], [x + w, y], [x, y]],
            [[x, y], [x, y + h], [x + w, y + h], [x, y]],
        )
    if yi % 2 == 0:
        return (
            [[x, y], [x, y + h], [x + w, y + h], [x, y]],
            [[x, y], [x + w, y + h], [x + w, y], [x, y]],
        )
    return (
        [[x, y], [x, y + h], [x + w, y], [x, y]],
        [[x, y + h], [x + w, y + h], [x + w, y], [x, y + h]],
    )


def triangle_grid(
    bbox: BBox,
    cell_side: float,
    units: Optional[str] = None,
    mask: Optional[dict] = None,
    properties: Properties = None,
) -> dict:
    """
    Build a grid of right triangles, two per cell, alternating their diagonal.

    Args:
        bbox: [west, south, east, north]
        cell_side: Side length of the cells the triangles split
        units: Length unit of cell_side
        mask: (Multi)Polygon the triangles must intersect
        properties: Properties of every triangle

    Returns:
        FeatureCollection of Polygons
    """
    _validate(bbox, cell_side, mask)
    west, south, east, north = bbox
    cell_width, cell_height = _cell_size(bbox, cell_side, units)

    results = []
    xi = 0
    current_x = west
    while current_x <= east:
        yi = 0
        current_y = south
        while current_y <= north:
            for ring in _cell_triangles(current_x, current_y, cell_width, cell_height, xi, yi):
                cell = polygon([ring], properties)
                if _keep(cell, mask):
                    results.append(cell)
            current_y += cell_height
            yi += 1
        current_x += cell_width
        xi += 1
    return feature_collection(results)
