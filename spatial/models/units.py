"""
Unit models for spatial.
Length and area units with their conversion factors.
"""

import math
from enum import Enum
from typing import Optional, Union

from spatial.config import get_settings
from spatial.exceptions import InvalidArgumentError


# Mean Earth radius in meters
EARTH_RADIUS = 6371008.8


class Units(str, Enum):
    """Supported length units."""
    METERS = "meters"
    METRES = "metres"
    MILLIMETERS = "millimeters"
    MILLIMETRES = "millimetres"
    CENTIMETERS = "centimeters"
    CENTIMETRES = "centimetres"
    KILOMETERS = "kilometers"
    KILOMETRES = "kilometres"
    MILES = "miles"
    NAUTICAL_MILES = "nauticalmiles"
    INCHES = "inches"
    YARDS = "yards"
    FEET = "feet"
    RADIANS = "radians"
    DEGREES = "degrees"


class AreaUnits(str, Enum):
    """Supported area units."""
    METERS = "meters"
    METRES = "metres"
    MILLIMETERS = "millimeters"
    CENTIMETERS = "centimeters"
    KILOMETERS = "kilometers"
    KILOMETRES = "kilometres"
    ACRES = "acres"
    HECTARES = "hectares"
    MILES = "miles"
    YARDS = "yards"
    FEET = "feet"
    INCHES = "inches"


# Units of length per radian of arc on the Earth's surface
FACTORS: dict[Units, float] = {
    Units.METERS: EARTH_RADIUS,
    Units.METRES: EARTH_RADIUS,
    Units.MILLIMETERS: EARTH_RADIUS * 1000,
    Units.MILLIMETRES: EARTH_RADIUS * 1000,
    Units.CENTIMETERS: EARTH_RADIUS * 100,
    Units.CENTIMETRES: EARTH_RADIUS * 100,
    Units.KILOMETERS: EARTH_RADIUS / 1000,
    Units.KILOMETRES: EARTH_RADIUS / 1000,
    Units.MILES: EARTH_RADIUS / 1609.344,
    Units.NAUTICAL_MILES: EARTH_RADIUS / 1852,
    Units.INCHES: EARTH_RADIUS * 39.370,
    Units.YARDS: EARTH_RADIUS / 1.0936,
    Units.FEET: EARTH_RADIUS * 3.28084,
    Units.RADIANS: 1.0,
    Units.DEGREES: EARTH_RADIUS / 111325,
}

# Area units per square meter
AREA_FACTORS: dict[AreaUnits, float] = {
    AreaUnits.METERS: 1.0,
    AreaUnits.METRES: 1.0,
    AreaUnits.MILLIMETERS: 1000000.0,
    AreaUnits.CENTIMETERS: 10000.0,
    AreaUnits.KILOMETERS: 0.000001,
    AreaUnits.KILOMETRES: 0.000001,
    AreaUnits.ACRES: 0.000247105,
    AreaUnits.HECTARES: 0.0001,
    AreaUnits.MILES: 3.86e-7,
    AreaUnits.YARDS: 1.195990046,
    AreaUnits.FEET: 10.763910417,
    AreaUnits.INCHES: 1550.003100006,
}


def get_factor(units: Optional[Union[Units, str]] = None) -> float:
    """
    Get the length-per-radian factor for a unit.

    Args:
        units: Length unit; the configured default when None

    Returns:
        Factor converting radians of arc to the unit
    """
    if units is None:
        units = get_settings().default_units
    try:
        return FACTORS[Units(units)]
    except ValueError:
        raise InvalidArgumentError(f"{units} units is invalid") from None


def radians_to_length(radians: float, units: Optional[Union[Units, str]] = None) -> float:
    """Convert an angle in radians to a real-world length."""
    return radians * get_factor(units)


def length_to_radians(distance: float, units: Optional[Union[Units, str]] = None) -> float:
    """Convert a real-world length to an angle in radians."""
    return distance / get_factor(units)


def length_to_degrees(distance: float, units: Optional[Union[Units, str]] = None) -> float:
    """Convert a real-world length to an angle in degrees."""
    return radians_to_degrees(length_to_radians(distance, units))


def bearing_to_azimuth(bearing: float) -> float:
    """Convert a bearing in (-180, 180] to an azimuth in [0, 360)."""
    angle = bearing % 360
    if angle < 0:
        angle += 360
    return angle


def radians_to_degrees(radians: float) -> float:
    """Convert radians to degrees, wrapping at a full turn."""
    return math.fmod(radians, 2 * math.pi) * 180 / math.pi


def degrees_to_radians(degrees: float) -> float:
    """Convert degrees to radians, wrapping at a full turn."""
    return math.fmod(degrees, 360) * math.pi / 180


def convert_length(
    length: float,
    original_unit: Union[Units, str] = Units.KILOMETERS,
    final_unit: Union[Units, str] = Units.KILOMETERS,
) -> float:
    """
    Convert a length between units.

    Args:
        length: Length to convert, must be positive
        original_unit: Unit of the input length
        final_unit: Unit of the result

    Returns:
        Converted length
    """
    if length < 0:
        raise InvalidArgumentError("length must be a positive number")
    return radians_to_length(length_to_radians(length, original_unit), final_unit)


def convert_area(
    area: float,
    original_unit: Union[AreaUnits, str] = AreaUnits.METERS,
    final_unit: Union[AreaUnits, str] = AreaUnits.KILOMETERS,
) -> float:
    """
    Convert an area between units.

    Args:
        area: Area to convert, must be positive
        original_unit: Unit of the input area
        final_unit: Unit of the result

    Returns:
        Converted area
    """
    if area < 0:
        raise InvalidArgumentError("area must be a positive number")
    try:
        start = AREA_FACTORS[AreaUnits(original_unit)]
    except ValueError:
        raise InvalidArgumentError("invalid original units") from None
    try:
        finish = AREA_FACTORS[AreaUnits(final_unit)]
    except ValueError:
        raise InvalidArgumentError("invalid final units") from None
    return (area / start) * finish
