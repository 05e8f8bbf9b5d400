"""
Point predicates for spatial.
Ray casting and segment tests working directly on coordinates.
"""

from typing import Optional

from spatial.exceptions import InvalidGeoJSONError
from spatial.invariant import get_coord, get_coords, get_geom


def _in_bbox(pt, bbox) -> bool:
    return bbox[0] <= pt[0] and bbox[1] <= pt[1] and bbox[2] >= pt[0] and bbox[3] >= pt[1]


def in_ring(pt, ring, ignore_boundary: bool) -> bool:
    """Even-odd ray casting test of a point against a single ring."""
    inside = False
    if list(ring[0]) == list(ring[-1]):
        ring = ring[:-1]
    j = len(ring) - 1
    for i in range(len(ring)):
        xi, yi = ring[i][0], ring[i][1]
        xj, yj = ring[j][0], ring[j][1]
        on_boundary = (
            pt[1] * (xi - xj) + yi * (xj - pt[0]) + yj * (pt[0] - xi) == 0
            and (xi - pt[0]) * (xj - pt[0]) <= 0
            and (yi - pt[1]) * (yj - pt[1]) <= 0
        )
        if on_boundary:
            return not ignore_boundary
        if (yi > pt[1]) != (yj > pt[1]) and pt[0] < (xj - xi) * (pt[1] - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def boolean_point_in_polygon(point, polygon, ignore_boundary: bool = False) -> bool:
    """
    Test whether a point lies inside a (Multi)Polygon, holes excluded.

    Args:
        point: Coord to test
        polygon: Polygon or MultiPolygon Feature or geometry
        ignore_boundary: Treat points on the boundary as outside

    Returns:
        True when the point is inside
    """
    if not point:
        raise InvalidGeoJSONError("point is required")
    if not polygon:
        raise InvalidGeoJSONError("polygon is required")

    pt = get_coord(point)
    geom = get_geom(polygon)
    gtype = geom.get("type")
    bbox = polygon.get("bbox")
    if bbox and not _in_bbox(pt, bbox):
        return False

    if gtype == "Polygon":
        polys = [geom["coordinates"]]
    elif gtype == "MultiPolygon":
        polys = geom["coordinates"]
    else:
        raise InvalidGeoJSONError(f"Invalid input to boolean_point_in_polygon: must be a Polygon, given {gtype}")

    for poly in polys:
        if in_ring(pt, poly[0], ignore_boundary):
            in_hole = any(in_ring(pt, hole, not ignore_boundary) for hole in poly[1:])
            if not in_hole:
                return True
    return False


def _on_segment(start, end, pt, exclude_boundary, epsilon: Optional[float]) -> bool:
    x, y = pt[0], pt[1]
    x1, y1 = start[0], start[1]
    x2, y2 = end[0], end[1]
    dxc, dyc = x - x1, y - y1
    dxl, dyl = x2 - x1, y2 - y1
    cross = dxc * dyl - dyc * dxl
    if epsilon is not None:
        if abs(cross) > epsilon:
            return False
    elif cross != 0:
        return False

    # compare along the dominant axis of the segment
    if abs(dxl) >= abs(dyl):
        lo, hi, v, forward = (x1, x2, x, dxl > 0)
    else:
        lo, hi, v, forward = (y1, y2, y, dyl > 0)
    if not forward:
        lo, hi = hi, lo
        exclude_boundary = {"start": "end", "end": "start"}.get(exclude_boundary, exclude_boundary)

    if not exclude_boundary:
        return lo <= v <= hi
    if exclude_boundary == "start":
        return lo < v <= hi
    if exclude_boundary == "end":
        return lo <= v < hi
    return lo < v < hi


def boolean_point_on_line(
    point, line, ignore_end_vertices: bool = False, epsilon: Optional[float] = None
) -> bool:
    """
    Test whether a point lies on a LineString.

    Args:
        point: Coord to test
        line: LineString Feature or geometry
        ignore_end_vertices: Treat the first and last vertex of the line as off the line
        epsilon: Tolerance on the cross product, exact comparison when None

    Returns:
        True when the point is on one of the segments
    """
    pt = get_coord(point)
    coords = get_coords(line)
    last = len(coords) - 1
    for i in range(last):
        exclude = False
        if ignore_end_vertices:
            if i == 0:
                exclude = "start"
            if i == last - 1:
                exclude = "end"
            if i == 0 and i + 1 == last:
                exclude = "both"
        if _on_segment(coords[i], coords[i + 1], pt, exclude, epsilon):
            return True
    return False


def boolean_clockwise(line) -> bool:
    """Test whether a ring (LineString, ring Feature or list of positions) winds clockwise."""
    ring = get_coords(line)
    total = 0.0
    for prev, curr in zip(ring[:-1], ring[1:]):
        total += (curr[0] - prev[0]) * (curr[1] + prev[1])
    return total > 0
