"""
Input invariants for spatial.
Unwrap coordinates and geometries and enforce expected GeoJSON types.
"""

from typing import Any, Optional

from spatial.exceptions import InvalidGeoJSONError
from spatial.helpers import is_number


def get_coord(obj: Any) -> list:
    """
    Unwrap a coordinate from a Point Feature, Point geometry or a single position.

    Args:
        obj: Point Feature, Point geometry or [x, y] position

    Returns:
        The position

    Raises:
        InvalidGeoJSONError: if obj does not describe a single position
    """
    if not obj:
        raise InvalidGeoJSONError("obj is required")
    coordinates = get_coords(obj)
    if len(coordinates) > 1 and is_number(coordinates[0]) and is_number(coordinates[1]):
        return coordinates
    raise InvalidGeoJSONError("Coordinate is not a valid Point")


def get_coords(obj: Any) -> list:
    """
    Unwrap coordinates from a Feature, a geometry or a list of numbers.

    Raises:
        InvalidGeoJSONError: if no coordinates are found
    """
    if not obj:
        raise InvalidGeoJSONError("obj is required")
    coordinates = None
    if isinstance(obj, (list, tuple)):
        coordinates = obj
    elif isinstance(obj, dict):
        if obj.get("coordinates"):
            coordinates = obj["coordinates"]
        elif obj.get("geometry") and obj["geometry"].get("coordinates"):
            coordinates = obj["geometry"]["coordinates"]
    if coordinates:
        contains_number(coordinates)
        return coordinates
    raise InvalidGeoJSONError("No valid coordinates")


def contains_number(coordinates: Any) -> bool:
    """True when the (nested) coordinates bottom out in numbers, raises otherwise."""
    if len(coordinates) > 1 and is_number(coordinates[0]) and is_number(coordinates[1]):
        return True
    if isinstance(coordinates[0], (list, tuple)) and len(coordinates[0]):
        return contains_number(coordinates[0])
    raise InvalidGeoJSONError("coordinates must only contain numbers")


def geojson_type(value: Any, type: str, name: str) -> None:
    """
    Enforce the type of a GeoJSON object.

    Args:
        value: Any GeoJSON object
        type: Expected GeoJSON type
        name: Name of the calling function, used in the error message
    """
    if not type or not name:
        raise InvalidGeoJSONError("type and name required")
    if not value or value.get("type") != type:
        given = value.get("type") if value else None
        raise InvalidGeoJSONError(f"Invalid input to {name}: must be a {type}, given {given}")


def feature_of(feature: Any, type: str, name: str) -> None:
    """Enforce that a Feature carries a geometry of the expected type."""
    if not feature:
        raise InvalidGeoJSONError("No feature passed")
    if not name:
        raise InvalidGeoJSONError(".feature_of() requires a name")
    if feature.get("type") != "Feature" or not feature.get("geometry"):
        raise InvalidGeoJSONError(f"Invalid input to {name}, Feature with geometry required")
    if feature["geometry"].get("type") != type:
        raise InvalidGeoJSONError(
            f"Invalid input to {name}: must be a {type}, given {feature['geometry'].get('type')}"
        )


def collection_of(feature_collection: Any, type: str, name: str) -> None:
    """Enforce that every Feature of a FeatureCollection has the expected geometry type."""
    if not feature_collection:
        raise InvalidGeoJSONError("No featureCollection passed")
    if not name:
        raise InvalidGeoJSONError(".collection_of() requires a name")
    if feature_collection.get("type") != "FeatureCollection":
        raise InvalidGeoJSONError(f"Invalid input to {name}, FeatureCollection required")
    for feature in feature_collection["features"]:
        if not feature or feature.get("type") != "Feature" or not feature.get("geometry"):
            raise InvalidGeoJSONError(f"Invalid input to {name}, Feature with geometry required")
        if feature["geometry"].get("type") != type:
            raise InvalidGeoJSONError(
                f"Invalid input to {name}: must be a {type}, given {feature['geometry'].get('type')}"
            )


def get_geom(geojson: Any) -> Optional[dict]:
    """Get the geometry of a Feature, or the geometry itself."""
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    if "geometry" in geojson:
        return geojson["geometry"]
    if geojson.get("coordinates") is not None or geojson.get("geometries") is not None:
        return geojson
    raise InvalidGeoJSONError("geojson must be a valid Feature or Geometry Object")


def get_type(geojson: Any, name: Optional[str] = None) -> str:
    """
    Get the type of a GeoJSON object, preferring the geometry type of a Feature.

    Args:
        geojson: GeoJSON object
        name: Name of the variable for error messages
    """
    if not geojson:
        raise InvalidGeoJSONError(f"{name or 'geojson'} is required")
    geom = geojson.get("geometry")
    if geom and geom.get("type"):
        return geom["type"]
    if geojson.get("type"):
        return geojson["type"]
    raise InvalidGeoJSONError(f"{name or 'geojson'} is invalid")
