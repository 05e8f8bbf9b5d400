"""
GeoJSON models for spatial.
Frozen Pydantic models forming a tagged union over the GeoJSON types.
Coordinates are stored as tuples so a parsed geometry cannot be modified in place.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from spatial.exceptions import InvalidGeoJSONError


def _check_position(value: tuple[float, ...]) -> tuple[float, ...]:
    if len(value) < 2:
        raise ValueError("position must contain at least two numbers")
    return value


Position = Annotated[tuple[float, ...], AfterValidator(_check_position)]
BBox = tuple[float, ...]


class _GeoJSONBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    bbox: Optional[BBox] = Field(None, description="Bounding box of the object")

    def to_dict(self) -> dict[str, Any]:
        """Dump the model as a plain GeoJSON mapping."""
        return self.model_dump(mode="json", exclude_none=True)


class Point(_GeoJSONBase):
    type: Literal["Point"] = "Point"
    coordinates: Position


class MultiPoint(_GeoJSONBase):
    type: Literal["MultiPoint"] = "MultiPoint"
    coordinates: tuple[Position, ...]


class LineString(_GeoJSONBase):
    type: Literal["LineString"] = "LineString"
    coordinates: tuple[Position, ...]

    @field_validator("coordinates")
    @classmethod
    def validate_length(cls, v: tuple[Position, ...]) -> tuple[Position, ...]:
        if len(v) < 2:
            raise ValueError("LineString must have 2 or more positions")
        return v


class MultiLineString(_GeoJSONBase):
    type: Literal["MultiLineString"] = "MultiLineString"
    coordinates: tuple[tuple[Position, ...], ...]


def _check_ring(ring: tuple[Position, ...]) -> tuple[Position, ...]:
    if len(ring) < 4:
        raise ValueError("Each LinearRing of a Polygon must have 4 or more Positions.")
    if tuple(ring[0]) != tuple(ring[-1]):
        raise ValueError("First and last Position are not equivalent.")
    return ring


class Polygon(_GeoJSONBase):
    type: Literal["Polygon"] = "Polygon"
    coordinates: tuple[tuple[Position, ...], ...]

    @field_validator("coordinates")
    @classmethod
    def validate_rings(cls, v):
        for ring in v:
            _check_ring(ring)
        return v


class MultiPolygon(_GeoJSONBase):
    type: Literal["MultiPolygon"] = "MultiPolygon"
    coordinates: tuple[tuple[tuple[Position, ...], ...], ...]

    @field_validator("coordinates")
    @classmethod
    def validate_rings(cls, v):
        for polygon in v:
            for ring in polygon:
                _check_ring(ring)
        return v


class GeometryCollection(_GeoJSONBase):
    type: Literal["GeometryCollection"] = "GeometryCollection"
    geometries: tuple["Geometry", ...]


Geometry = Annotated[
    Union[Point, MultiPoint, LineString, MultiLineString, Polygon, MultiPolygon, GeometryCollection],
    Field(discriminator="type"),
]

GeometryCollection.model_rebuild()


class Feature(_GeoJSONBase):
    type: Literal["Feature"] = "Feature"
    geometry: Optional[Geometry] = None
    properties: Optional[dict[str, Any]] = None
    id: Optional[Union[str, int]] = None

    def to_dict(self) -> dict[str, Any]:
        # null geometry and properties are meaningful on a Feature
        data = self.model_dump(mode="json", exclude_none=True)
        data.setdefault("geometry", None)
        data.setdefault("properties", None)
        return data


class FeatureCollection(_GeoJSONBase):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: tuple[Feature, ...]

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json", exclude_none=True, exclude={"features"})
        data["features"] = [feature.to_dict() for feature in self.features]
        return data


GeoJSON = Annotated[
    Union[
        Point, MultiPoint, LineString, MultiLineString, Polygon, MultiPolygon,
        GeometryCollection, Feature, FeatureCollection,
    ],
    Field(discriminator="type"),
]

_geojson_adapter = TypeAdapter(GeoJSON)
_geometry_adapter = TypeAdapter(Geometry)


def parse_geojson(obj: Any) -> GeoJSON:
    """
    Validate a GeoJSON mapping into its model.

    Args:
        obj: Any GeoJSON object (Geometry, Feature or FeatureCollection)

    Returns:
        The matching frozen model

    Raises:
        InvalidGeoJSONError: if the mapping is not valid GeoJSON
    """
    try:
        return _geojson_adapter.validate_python(obj)
    except ValidationError as e:
        raise InvalidGeoJSONError(f"invalid GeoJSON: {e.errors()[0]['msg']}") from e


def parse_geometry(obj: Any) -> Geometry:
    """Validate a GeoJSON geometry mapping into its model."""
    try:
        return _geometry_adapter.validate_python(obj)
    except ValidationError as e:
        raise InvalidGeoJSONError(f"invalid geometry: {e.errors()[0]['msg']}") from e
