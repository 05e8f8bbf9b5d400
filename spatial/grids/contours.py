"""
Contouring for spatial.
Isolines by marching squares and isobands by clipping the grid triangles to
each band, over a regular grid of points carrying a value.
"""

import logging
from typing import Optional

import numpy as np
from shapely.geometry import MultiLineString as ShapelyMultiLineString
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.ops import linemerge, unary_union

from spatial.exceptions import InvalidArgumentError, InvalidGeoJSONError
from spatial.helpers import feature_collection, is_object, multi_line_string, multi_polygon
from spatial.invariant import collection_of


logger = logging.getLogger(__name__)


class ValueGrid:
    """
    Regular grid of values read from a FeatureCollection of Points.

    Attributes:
        xs: Sorted column x coordinates
        ys: Sorted row y coordinates
        z: Values indexed [row, column]
    """

    def __init__(self, points: dict, z_property: str):
        values = {}
        for pt in points["features"]:
            coords = pt["geometry"]["coordinates"]
            value = (pt.get("properties") or {}).get(z_property)
            if value is None and len(coords) > 2:
                value = coords[2]
            if value is None:
                raise InvalidGeoJSONError(f"points must carry a {z_property} value")
            values[(coords[0], coords[1])] = value

        self.xs = sorted({x for x, _ in values})
        self.ys = sorted({y for _, y in values})
        if len(self.xs) < 2 or len(self.ys) < 2:
            raise InvalidGeoJSONError("points must form a grid of at least 2 x 2 points")
        if len(values) != len(self.xs) * len(self.ys):
            raise InvalidGeoJSONError("points must form a regular grid")
        self.z = np.array([[values[(x, y)] for x in self.xs] for y in self.ys], dtype=float)

    def __repr__(self) -> str:
        return f"ValueGrid(columns={len(self.xs)}, rows={len(self.ys)})"

    def cells(self):
        """Yield the corners of every cell as (x, y, z) in bl, br, tr, tl order."""
        for j in range(len(self.ys) - 1):
            for i in range(len(self.xs) - 1):
                yield [
                    (self.xs[i], self.ys[j], self.z[j, i]),
                    (self.xs[i + 1], self.ys[j], self.z[j, i + 1]),
                    (self.xs[i + 1], self.ys[j + 1], self.z[j + 1, i + 1]),
                    (self.xs[i], self.ys[j + 1], self.z[j + 1, i]),
                ]


def _crossing(a: tuple, b: tuple, threshold: float) -> tuple[float, float]:
    """Point where the value interpolated along a-b equals threshold."""
    # interpolate from a fixed end so neighbouring cells produce identical points
    if (b[0], b[1]) < (a[0], a[1]):
        a, b = b, a
    t = (threshold - a[2]) / (b[2] - a[2])
    return (a[0] + t * (b[0] - a[0]), a[1] + t * (b[1] - a[1]))


def _label(value) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def _validate(points: dict, breaks, common_properties, breaks_properties, name: str) -> None:
    collection_of(points, "Point", name)
    if breaks is None:
        raise InvalidArgumentError("breaks is required")
    if not isinstance(breaks, (list, tuple)):
        raise InvalidArgumentError("breaks is not an Array")
    if not is_object(common_properties):
        raise InvalidArgumentError("common_properties is not an Object")
    if not isinstance(breaks_properties, (list, tuple)):
        raise InvalidArgumentError("breaks_properties is not an Array")
    for props in breaks_properties:
        if props is not None and not is_object(props):
            raise InvalidArgumentError("Each mapped property is required to be an Object")


def _cell_segments(corners: list, threshold: float) -> list:
    bl, br, tr, tl = corners
    edges = {"bottom": (bl, br), "right": (br, tr), "top": (tr, tl), "left": (tl, bl)}
    hits = {
        name: _crossing(a, b, threshold)
        for name, (a, b) in edges.items()
        if (a[2] >= threshold) != (b[2] >= threshold)
    }
    if len(hits) == 2:
        return [tuple(hits.values())]
    if len(hits) != 4:
        return []

    # saddle, resolved with the mean of the corners
    center_above = sum(c[2] for c in corners) / 4 >= threshold
    if (bl[2] >= threshold) == center_above:
        pairs = [("bottom", "right"), ("top", "left")]
    else:
        pairs = [("left", "bottom"), ("right", "top")]
    return [(hits[p], hits[q]) for p, q in pairs]


def isolines(
    points: dict,
    breaks: list,
    z_property: str = "elevation",
    common_properties: Optional[dict] = None,
    breaks_properties: Optional[list] = None,
) -> dict:
    """
    Trace the lines of equal value through a grid of points (marching squares).

    Args:
        points: FeatureCollection of Points laid out on a regular grid
        breaks: Values to trace
        z_property: Property holding the value of each point
        common_properties: Properties shared by every isoline
        breaks_properties: Properties for each break, in the order of breaks

    Returns:
        FeatureCollection with one MultiLineString per break, its value stored in z_property
    """
    common_properties = common_properties if common_properties is not None else {}
    breaks_properties = breaks_properties if breaks_properties is not None else []
    _validate(points, breaks, common_properties, breaks_properties, "isolines")
    grid = ValueGrid(points, z_property)

    results = []
    for index, threshold in enumerate(breaks):
        threshold = float(threshold)
        segments = []
        for corners in grid.cells():
            segments.extend(s for s in _cell_segments(corners, threshold) if s[0] != s[1])
        lines = []
        if segments:
            merged = linemerge(ShapelyMultiLineString(segments))
            parts = merged.geoms if hasattr(merged, "geoms") else [merged]
            lines = [[list(c) for c in part.coords] for part in parts]
        line_props = breaks_properties[index] if index < len(breaks_properties) else None
        properties = {**common_properties, **(line_props or {})}
        properties[z_property] = breaks[index]
        results.append(multi_line_string(lines, properties))
    logger.debug("Traced %d isolines over %r", len(results), grid)
    return feature_collection(results)


def _band_piece(triangle: list, lower: float, upper: float) -> list:
    """Vertices of the part of a triangle whose interpolated value lies in [lower, upper]."""
    vertices = []
    for k in range(3):
        a, b = triangle[k], triangle[(k + 1) % 3]
        if lower <= a[2] <= upper:
            vertices.append((a[0], a[1]))
        crossings = []
        for threshold in (lower, upper):
            if (a[2] - threshold) * (b[2] - threshold) < 0:
                crossings.append(((threshold - a[2]) / (b[2] - a[2]), _crossing(a, b, threshold)))
        vertices.extend(p for _, p in sorted(crossings))
    return vertices


def _polygon_parts(shape) -> list:
    if shape.is_empty:
        return []
    if shape.geom_type == "Polygon":
        return [shape]
    return [g for g in getattr(shape, "geoms", []) if g.geom_type == "Polygon"]


def _group_rings(shape) -> list:
    """Polygons ordered by outer ring area, each holding its holes ordered by area."""
    groups = []
    for poly in sorted(_polygon_parts(shape), key=lambda p: ShapelyPolygon(p.exterior).area, reverse=True):
        holes = sorted(poly.interiors, key=lambda r: ShapelyPolygon(r).area, reverse=True)
        groups.append([[list(c) for c in ring.coords] for ring in [poly.exterior, *holes]])
    return groups


def isobands(
    points: dict,
    breaks: list,
    z_property: str = "elevation",
    common_properties: Optional[dict] = None,
    breaks_properties: Optional[list] = None,
) -> dict:
    """
    Build the areas between consecutive break values over a grid of points.

    Every grid cell is split into two triangles, each triangle is clipped to
    the band with linear interpolation and the pieces are merged.

    Args:
        points: FeatureCollection of Points laid out on a regular grid
        breaks: Band limits, len(breaks) - 1 bands are built
        z_property: Property holding the value of each point
        common_properties: Properties shared by every band
        breaks_properties: Properties for each band, in order

    Returns:
        FeatureCollection with one MultiPolygon per band whose z_property holds
        the "lower-upper" label
    """
    common_properties = common_properties if common_properties is not None else {}
    breaks_properties = breaks_properties if breaks_properties is not None else []
    _validate(points, breaks, common_properties, breaks_properties, "isobands")
    grid = ValueGrid(points, z_property)

    triangles = []
    for bl, br, tr, tl in grid.cells():
        triangles.append((bl, br, tr))
        triangles.append((bl, tr, tl))

    results = []
    for index in range(1, len(breaks)):
        lower, upper = float(breaks[index - 1]), float(breaks[index])
        last = index == len(breaks) - 1
        pieces = []
        for triangle in triangles:
            # flat areas on a shared limit belong to the upper band only
            if not last and min(v[2] for v in triangle) >= upper:
                continue
            vertices = _band_piece(triangle, lower, upper)
            if len(vertices) >= 3:
                piece = ShapelyPolygon(vertices)
                if piece.area > 0:
                    pieces.append(piece)
        groups = _group_rings(unary_union(pieces)) if pieces else []

        band_props = breaks_properties[index - 1] if index - 1 < len(breaks_properties) else None
        properties = {**common_properties, **(band_props or {})}
        properties[z_property] = f"{_label(breaks[index - 1])}-{_label(breaks[index])}"
        results.append(multi_polygon(groups, properties))
    logger.debug("Built %d isobands over %r", len(results), grid)
    return feature_collection(results)
