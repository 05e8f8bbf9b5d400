"""
Line length and along-line measurements for spatial.
"""

from typing import Optional

from spatial.exceptions import InvalidArgumentError, InvalidGeoJSONError
from spatial.helpers import line_string, point
from spatial.invariant import get_coords, get_geom
from spatial.measurement.distance import bearing, destination, distance
from spatial.measurement.nearest import nearest_point_on_line
from spatial.meta import segment_each


def length(geojson: dict, units: Optional[str] = None) -> float:
    """
    Measure the length of every line and polygon ring of a GeoJSON object.

    Args:
        geojson: Any GeoJSON object
        units: Length unit of the result

    Returns:
        Summed length of all segments
    """
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    total = 0.0
    for segment in segment_each(geojson):
        coords = segment["geometry"]["coordinates"]
        total += distance(coords[0], coords[1], units)
    return total


def _line_coords(line: dict) -> list:
    geom = get_geom(line) if isinstance(line, dict) else None
    if geom is None or geom.get("type") != "LineString":
        raise InvalidGeoJSONError("line must be a LineString")
    return geom["coordinates"]


def _interpolate_back(coords: list, i: int, overshot: float, units: Optional[str]) -> list:
    # step backwards from vertex i towards vertex i - 1
    direction = bearing(coords[i], coords[i - 1]) - 180
    return destination(coords[i], overshot, direction, units)["geometry"]["coordinates"]


def along(line: dict, distance_along: float, units: Optional[str] = None) -> dict:
    """
    Get the point at a distance along a line.

    A distance beyond the end of the line returns the last vertex.

    Args:
        line: LineString Feature or geometry
        distance_along: Distance from the start of the line
        units: Length unit of distance_along

    Returns:
        Point Feature
    """
    coords = _line_coords(line)
    travelled = 0.0
    for i in range(len(coords)):
        if distance_along >= travelled and i == len(coords) - 1:
            break
        if travelled >= distance_along:
            overshot = distance_along - travelled
            if not overshot:
                return point(coords[i])
            return point(_interpolate_back(coords, i, overshot, units))
        travelled += distance(coords[i], coords[i + 1], units)
    return point(coords[-1])


def line_slice_along(line: dict, start_dist: float, stop_dist: float, units: Optional[str] = None) -> dict:
    """
    Take the part of a line between two distances along it.

    Args:
        line: LineString Feature or geometry
        start_dist: Distance along the line to the start of the slice
        stop_dist: Distance along the line to the end of the slice
        units: Length unit of the distances

    Returns:
        LineString Feature of the sliced part

    Raises:
        InvalidArgumentError: if start_dist lies beyond the end of the line
    """
    coords = _line_coords(line)
    sliced: list = []
    travelled = 0.0
    for i in range(len(coords)):
        if start_dist >= travelled and i == len(coords) - 1:
            break
        if travelled > start_dist and not sliced:
            overshot = start_dist - travelled
            if not overshot:
                sliced.append(coords[i])
                return line_string(sliced)
            sliced.append(_interpolate_back(coords, i, overshot, units))

        if travelled >= stop_dist:
            overshot = stop_dist - travelled
            if not overshot:
                sliced.append(coords[i])
                return line_string(sliced)
            sliced.append(_interpolate_back(coords, i, overshot, units))
            return line_string(sliced)

        if travelled >= start_dist:
            sliced.append(coords[i])

        if i == len(coords) - 1:
            return line_string(sliced)

        travelled += distance(coords[i], coords[i + 1], units)

    if travelled < start_dist:
        raise InvalidArgumentError("Start position is beyond line")
    last = coords[-1]
    return line_string([last, last])


def line_slice(start_pt, stop_pt, line: dict) -> dict:
    """
    Take the part of a line between the points nearest to start_pt and stop_pt.

    The start and stop points do not need to fall exactly on the line.

    Args:
        start_pt: Coord where the slice starts
        stop_pt: Coord where the slice stops
        line: LineString Feature or geometry

    Returns:
        LineString Feature carrying the properties of the input line
    """
    coords = get_coords(line)
    if get_geom(line).get("type") != "LineString":
        raise InvalidGeoJSONError("line must be a LineString")

    start_vertex = nearest_point_on_line(line, start_pt)
    stop_vertex = nearest_point_on_line(line, stop_pt)
    if start_vertex["properties"]["index"] <= stop_vertex["properties"]["index"]:
        ends = (start_vertex, stop_vertex)
    else:
        ends = (stop_vertex, start_vertex)

    clip_coords = [ends[0]["geometry"]["coordinates"]]
    for i in range(ends[0]["properties"]["index"] + 1, ends[1]["properties"]["index"] + 1):
        clip_coords.append(coords[i])
    clip_coords.append(ends[1]["geometry"]["coordinates"])
    properties = line.get("properties") if line.get("type") == "Feature" else None
    return line_string(clip_coords, properties)
