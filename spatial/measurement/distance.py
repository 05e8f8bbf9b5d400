"""
Distance and bearing formulas for spatial.
Great-circle (haversine) and rhumb-line calculations on a spherical Earth.
"""

import math
from typing import Optional

from spatial.helpers import Properties, point
from spatial.invariant import get_coord
from spatial.models.units import (
    EARTH_RADIUS,
    convert_length,
    degrees_to_radians,
    length_to_radians,
    radians_to_degrees,
    radians_to_length,
)


def distance(start, end, units: Optional[str] = None) -> float:
    """
    Calculate the great-circle distance between two points (haversine formula).

    Args:
        start: Origin Coord
        end: Destination Coord
        units: Length unit of the result

    Returns:
        Distance between the points
    """
    coords1 = get_coord(start)
    coords2 = get_coord(end)
    d_lat = degrees_to_radians(coords2[1] - coords1[1])
    d_lon = degrees_to_radians(coords2[0] - coords1[0])
    lat1 = degrees_to_radians(coords1[1])
    lat2 = degrees_to_radians(coords2[1])

    a = math.sin(d_lat / 2) ** 2 + math.sin(d_lon / 2) ** 2 * math.cos(lat1) * math.cos(lat2)
    return radians_to_length(2 * math.atan2(math.sqrt(a), math.sqrt(1 - a)), units)


def bearing(start, end, final: bool = False) -> float:
    """
    Calculate the initial great-circle bearing between two points.

    Args:
        start: Origin Coord
        end: Destination Coord
        final: Return the bearing on arrival instead

    Returns:
        Bearing in decimal degrees, between -180 and 180 (positive clockwise from north)
    """
    if final:
        return (bearing(end, start) + 180) % 360

    coords1 = get_coord(start)
    coords2 = get_coord(end)
    lon1 = degrees_to_radians(coords1[0])
    lon2 = degrees_to_radians(coords2[0])
    lat1 = degrees_to_radians(coords1[1])
    lat2 = degrees_to_radians(coords2[1])
    a = math.sin(lon2 - lon1) * math.cos(lat2)
    b = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(lon2 - lon1)
    return radians_to_degrees(math.atan2(a, b))


def destination(
    origin,
    distance: float,
    bearing: float,
    units: Optional[str] = None,
    properties: Properties = None,
) -> dict:
    """
    Calculate the point reached from an origin after a distance along a bearing.

    Args:
        origin: Starting Coord
        distance: Distance from the origin
        bearing: Bearing in degrees, -180 to 180
        units: Length unit of distance
        properties: Properties of the returned point

    Returns:
        Destination Point Feature
    """
    coords = get_coord(origin)
    lon1 = degrees_to_radians(coords[0])
    lat1 = degrees_to_radians(coords[1])
    bearing_rad = degrees_to_radians(bearing)
    radians = length_to_radians(distance, units)

    lat2 = math.asin(
        math.sin(lat1) * math.cos(radians)
        + math.cos(lat1) * math.sin(radians) * math.cos(bearing_rad)
    )
    lon2 = lon1 + math.atan2(
        math.sin(bearing_rad) * math.sin(radians) * math.cos(lat1),
        math.cos(radians) - math.sin(lat1) * math.sin(lat2),
    )
    return point([radians_to_degrees(lon2), radians_to_degrees(lat2)], properties)


def midpoint(point1, point2) -> dict:
    """Get the point halfway along the great circle between two points."""
    dist = distance(point1, point2)
    heading = bearing(point1, point2)
    return destination(point1, dist / 2, heading)


def rhumb_distance(start, end, units: Optional[str] = None) -> float:
    """
    Calculate the distance along a rhumb line (constant bearing) between two points.

    The destination longitude is wrapped so the shorter path across the
    antimeridian is measured.
    """
    origin = get_coord(start)
    dest = list(get_coord(end))
    if dest[0] - origin[0] > 180:
        dest[0] -= 360
    elif origin[0] - dest[0] > 180:
        dest[0] += 360
    distance_in_meters = _rhumb_distance_meters(origin, dest)
    return convert_length(distance_in_meters, "meters", units)


def rhumb_bearing(start, end, final: bool = False) -> float:
    """
    Calculate the bearing of the rhumb line between two points.

    Args:
        start: Origin Coord
        end: Destination Coord
        final: Return the bearing on arrival instead

    Returns:
        Bearing in decimal degrees, between -180 and 180
    """
    if final:
        bear_360 = _rhumb_bearing(get_coord(end), get_coord(start))
    else:
        bear_360 = _rhumb_bearing(get_coord(start), get_coord(end))
    return -(360 - bear_360) if bear_360 > 180 else bear_360


def rhumb_destination(
    origin,
    distance: float,
    bearing: float,
    units: Optional[str] = None,
    properties: Properties = None,
) -> dict:
    """
    Calculate the point reached from an origin along a rhumb line.

    Args:
        origin: Starting Coord
        distance: Distance from the origin, negative values travel backwards
        bearing: Constant bearing in degrees
        units: Length unit of distance
        properties: Properties of the returned point

    Returns:
        Destination Point Feature
    """
    coords = get_coord(origin)
    meters = convert_length(abs(distance), units, "meters")
    if distance < 0:
        meters = -meters
    dest = _rhumb_destination(coords, meters, bearing)
    # compensate the crossing of the 180th meridian
    if dest[0] - coords[0] > 180:
        dest[0] -= 360
    elif coords[0] - dest[0] > 180:
        dest[0] += 360
    return point(dest, properties)


def _mercator_stretch(phi1: float, phi2: float) -> float:
    return math.log(math.tan(phi2 / 2 + math.pi / 4) / math.tan(phi1 / 2 + math.pi / 4))


def _rhumb_distance_meters(origin, dest, radius: float = EARTH_RADIUS) -> float:
    phi1 = origin[1] * math.pi / 180
    phi2 = dest[1] * math.pi / 180
    d_phi = phi2 - phi1
    d_lambda = abs(dest[0] - origin[0]) * math.pi / 180
    if d_lambda > math.pi:
        d_lambda -= 2 * math.pi

    d_psi = _mercator_stretch(phi1, phi2)
    q = d_phi / d_psi if abs(d_psi) > 10e-12 else math.cos(phi1)
    delta = math.sqrt(d_phi * d_phi + q * q * d_lambda * d_lambda)
    return delta * radius


def _rhumb_bearing(start, end) -> float:
    phi1 = degrees_to_radians(start[1])
    phi2 = degrees_to_radians(end[1])
    d_lambda = degrees_to_radians(end[0] - start[0])
    if d_lambda > math.pi:
        d_lambda -= 2 * math.pi
    if d_lambda < -math.pi:
        d_lambda += 2 * math.pi

    d_psi = _mercator_stretch(phi1, phi2)
    theta = math.atan2(d_lambda, d_psi)
    return (radians_to_degrees(theta) + 360) % 360


def _rhumb_destination(origin, distance_m: float, bearing: float, radius: float = EARTH_RADIUS) -> list:
    delta = distance_m / radius
    lambda1 = origin[0] * math.pi / 180
    phi1 = degrees_to_radians(origin[1])
    theta = degrees_to_radians(bearing)

    d_phi = delta * math.cos(theta)
    phi2 = phi1 + d_phi
    # going past a pole wraps back onto the other side
    if abs(phi2) > math.pi / 2:
        phi2 = math.pi - phi2 if phi2 > 0 else -math.pi - phi2

    d_psi = _mercator_stretch(phi1, phi2)
    q = d_phi / d_psi if abs(d_psi) > 10e-12 else math.cos(phi1)
    d_lambda = delta * math.sin(theta) / q
    lambda2 = lambda1 + d_lambda
    return [math.fmod(lambda2 * 180 / math.pi + 540, 360) - 180, phi2 * 180 / math.pi]
