"""
Shapely adapter for spatial.
Translates between GeoJSON mappings, pydantic geometry models and shapely geometries.
"""

from typing import Any, Union

from pydantic import BaseModel
from shapely.geometry import mapping, shape
from shapely.geometry.base import BaseGeometry

from spatial.exceptions import InvalidGeoJSONError
from spatial.models.geometry import Feature, Geometry, parse_geometry


GeometryLike = Union[BaseGeometry, BaseModel, dict]


def _as_lists(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [_as_lists(v) for v in value]
    return value


def to_shape(geom: GeometryLike) -> BaseGeometry:
    """
    Convert a Feature, geometry mapping or geometry model to a shapely geometry.

    Args:
        geom: GeoJSON Feature/geometry mapping, pydantic model or shapely geometry

    Returns:
        Shapely geometry

    Raises:
        InvalidGeoJSONError: for features without geometry or unreadable input
    """
    if isinstance(geom, BaseGeometry):
        return geom
    if isinstance(geom, BaseModel):
        if isinstance(geom, Feature):
            geom = geom.geometry
            if geom is None:
                raise InvalidGeoJSONError("Feature with geometry required")
        geom = from_model(geom)
    if not isinstance(geom, dict):
        raise InvalidGeoJSONError(f"Cannot convert {type(geom).__name__} to a geometry")
    if geom.get("type") == "Feature":
        geom = geom.get("geometry")
        if geom is None:
            raise InvalidGeoJSONError("Feature with geometry required")
    try:
        return shape(geom)
    except (KeyError, ValueError, TypeError, AttributeError) as exc:
        raise InvalidGeoJSONError(f"Invalid geometry: {exc}") from exc


def from_shape(geom: BaseGeometry) -> dict:
    """
    Convert a shapely geometry to a GeoJSON geometry mapping.

    Coordinates come back as nested lists.
    """
    gj = mapping(geom)
    if gj["type"] == "GeometryCollection":
        return {"type": "GeometryCollection", "geometries": [from_shape(g) for g in geom.geoms]}
    return {"type": gj["type"], "coordinates": _as_lists(gj["coordinates"])}


def to_model(geom: BaseGeometry) -> Geometry:
    """Convert a shapely geometry to a frozen geometry model."""
    return parse_geometry(from_shape(geom))


def from_model(model: BaseModel) -> dict:
    """Convert a geometry model to a GeoJSON geometry mapping (JSON mode dumps tuples as lists)."""
    return model.to_dict()
