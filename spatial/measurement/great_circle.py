"""
Great circle paths for spatial.
Geodesic paths on the WGS84 ellipsoid using geographiclib.
"""

import logging
from typing import Optional

from geographiclib.geodesic import Geodesic

from spatial.exceptions import InvalidArgumentError
from spatial.helpers import Properties, line_string, multi_line_string
from spatial.invariant import get_coord


logger = logging.getLogger(__name__)

WGS84 = Geodesic.WGS84


def _split_at_antimeridian(points: list[list[float]]) -> list[list[list[float]]]:
    parts = [[points[0]]]
    for prev, curr in zip(points[:-1], points[1:]):
        lon_diff = curr[0] - prev[0]
        if abs(lon_diff) > 180:
            # shift the next vertex next to the previous one to find where the path meets 180
            edge = 180.0 if prev[0] > 0 else -180.0
            shifted_lon = curr[0] + (360.0 if lon_diff < 0 else -360.0)
            ratio = (edge - prev[0]) / (shifted_lon - prev[0])
            lat = prev[1] + ratio * (curr[1] - prev[1])
            parts[-1].append([edge, lat])
            parts.append([[-edge, lat]])
        parts[-1].append(curr)
    return parts


def great_circle(start, end, npoints: int = 100, properties: Properties = None) -> dict:
    """
    Create the geodesic (great circle) path between two points.

    Paths crossing the antimeridian are split into a MultiLineString.

    Args:
        start: Origin Coord
        end: Destination Coord
        npoints: Number of vertices along the path
        properties: Properties of the returned feature

    Returns:
        LineString or MultiLineString Feature
    """
    if npoints < 2:
        raise InvalidArgumentError("npoints must be at least 2")
    lon1, lat1 = get_coord(start)[:2]
    lon2, lat2 = get_coord(end)[:2]

    # Calculate the geodesic line
    line = WGS84.InverseLine(lat1, lon1, lat2, lon2)
    total_distance = line.s13

    points = []
    for i in range(npoints):
        s = total_distance * i / (npoints - 1)
        pos = line.Position(s)
        points.append([pos["lon2"], pos["lat2"]])

    parts = _split_at_antimeridian(points)
    if len(parts) == 1:
        return line_string(points, properties)
    logger.debug("Great circle (%s, %s) -> (%s, %s) split at the antimeridian into %d parts", lon1, lat1, lon2, lat2, len(parts))
    return multi_line_string(parts, properties)
