"""
GeoJSON constructors for spatial.
Every constructor returns a new plain GeoJSON mapping.
"""

import math
from numbers import Number
from typing import Any, Optional, Sequence, Union

from spatial.exceptions import InvalidArgumentError, InvalidGeoJSONError


Position = Sequence[float]
Properties = Optional[dict[str, Any]]
BBox = Sequence[float]
Id = Optional[Union[str, int]]

GEOMETRY_TYPES = (
    "Point",
    "MultiPoint",
    "LineString",
    "MultiLineString",
    "Polygon",
    "MultiPolygon",
)


def feature(
    geom: Optional[dict],
    properties: Properties = None,
    bbox: Optional[BBox] = None,
    id: Id = None,
) -> dict:
    """
    Wrap a geometry in a GeoJSON Feature.

    Args:
        geom: GeoJSON geometry, or None for a feature without geometry
        properties: Feature properties (an empty dict when None)
        bbox: Optional bounding box
        id: Optional feature identifier

    Returns:
        GeoJSON Feature
    """
    if id is not None:
        validate_id(id)
    feat: dict[str, Any] = {"type": "Feature"}
    if id is not None:
        feat["id"] = id
    if bbox is not None:
        validate_bbox(bbox)
        feat["bbox"] = list(bbox)
    feat["properties"] = dict(properties) if properties else {}
    feat["geometry"] = geom
    return feat


def geometry(type: str, coordinates: list) -> dict:
    """Create a GeoJSON geometry from a type name and coordinates."""
    if not type:
        raise InvalidGeoJSONError("type is required")
    if coordinates is None:
        raise InvalidGeoJSONError("coordinates is required")
    if type not in GEOMETRY_TYPES:
        raise InvalidGeoJSONError(f"{type} is invalid")
    return {"type": type, "coordinates": coordinates}


def point(coordinates: Position, properties: Properties = None, bbox: Optional[BBox] = None, id: Id = None) -> dict:
    """Create a Point Feature from a position."""
    if coordinates is None:
        raise InvalidGeoJSONError("coordinates is required")
    if not isinstance(coordinates, (list, tuple)):
        raise InvalidGeoJSONError("coordinates must be an Array")
    if len(coordinates) < 2:
        raise InvalidGeoJSONError("coordinates must be at least 2 numbers long")
    if not is_number(coordinates[0]) or not is_number(coordinates[1]):
        raise InvalidGeoJSONError("coordinates must contain numbers")
    return feature({"type": "Point", "coordinates": list(coordinates)}, properties, bbox, id)


def points(coordinates: Sequence[Position], properties: Properties = None, bbox: Optional[BBox] = None) -> dict:
    """Create a FeatureCollection of Points from a list of positions."""
    if coordinates is None:
        raise InvalidGeoJSONError("coordinates is required")
    return feature_collection([point(coords, properties) for coords in coordinates], bbox)


def line_string(
    coordinates: Sequence[Position], properties: Properties = None, bbox: Optional[BBox] = None, id: Id = None
) -> dict:
    """Create a LineString Feature from two or more positions."""
    if coordinates is None:
        raise InvalidGeoJSONError("coordinates is required")
    if len(coordinates) < 2:
        raise InvalidGeoJSONError("coordinates must be an array of two or more positions")
    if any(len(position) < 2 for position in coordinates):
        raise InvalidGeoJSONError("coordinates must be at least 2 numbers long")
    if not is_number(coordinates[0][1]) or not is_number(coordinates[1][1]):
        raise InvalidGeoJSONError("coordinates must contain numbers")
    return feature(
        {"type": "LineString", "coordinates": [list(c) for c in coordinates]}, properties, bbox, id
    )


def line_strings(
    coordinates: Sequence[Sequence[Position]], properties: Properties = None, bbox: Optional[BBox] = None
) -> dict:
    """Create a FeatureCollection of LineStrings."""
    if coordinates is None:
        raise InvalidGeoJSONError("coordinates is required")
    return feature_collection([line_string(coords, properties) for coords in coordinates], bbox)


def polygon(
    coordinates: Sequence[Sequence[Position]],
    properties: Properties = None,
    bbox: Optional[BBox] = None,
    id: Id = None,
) -> dict:
    """
    Create a Polygon Feature from an array of LinearRings.

    Raises:
        InvalidGeoJSONError: if a ring has fewer than four positions or is not closed
    """
    if coordinates is None:
        raise InvalidGeoJSONError("coordinates is required")
    for ring in coordinates:
        if len(ring) < 4:
            raise InvalidGeoJSONError("Each LinearRing of a Polygon must have 4 or more Positions.")
        if list(ring[-1]) != list(ring[0]):
            raise InvalidGeoJSONError("First and last Position are not equivalent.")
    return feature(
        {"type": "Polygon", "coordinates": [[list(c) for c in ring] for ring in coordinates]},
        properties,
        bbox,
        id,
    )


def polygons(
    coordinates: Sequence[Sequence[Sequence[Position]]], properties: Properties = None, bbox: Optional[BBox] = None
) -> dict:
    """Create a FeatureCollection of Polygons."""
    if coordinates is None:
        raise InvalidGeoJSONError("coordinates is required")
    return feature_collection([polygon(coords, properties) for coords in coordinates], bbox)


def multi_point(coordinates: Sequence[Position], properties: Properties = None, bbox: Optional[BBox] = None, id: Id = None) -> dict:
    if coordinates is None:
        raise InvalidGeoJSONError("coordinates is required")
    return feature({"type": "MultiPoint", "coordinates": [list(c) for c in coordinates]}, properties, bbox, id)


def multi_line_string(
    coordinates: Sequence[Sequence[Position]], properties: Properties = None, bbox: Optional[BBox] = None, id: Id = None
) -> dict:
    if coordinates is None:
        raise InvalidGeoJSONError("coordinates is required")
    return feature(
        {"type": "MultiLineString", "coordinates": [[list(c) for c in line] for line in coordinates]},
        properties,
        bbox,
        id,
    )


def multi_polygon(
    coordinates: Sequence[Sequence[Sequence[Position]]],
    properties: Properties = None,
    bbox: Optional[BBox] = None,
    id: Id = None,
) -> dict:
    if coordinates is None:
        raise InvalidGeoJSONError("coordinates is required")
    return feature(
        {
            "type": "MultiPolygon",
            "coordinates": [[[list(c) for c in ring] for ring in poly] for poly in coordinates],
        },
        properties,
        bbox,
        id,
    )


def geometry_collection(
    geometries: Sequence[dict], properties: Properties = None, bbox: Optional[BBox] = None, id: Id = None
) -> dict:
    """Create a GeometryCollection Feature from a list of geometries."""
    if geometries is None:
        raise InvalidGeoJSONError("geometries is required")
    if not isinstance(geometries, (list, tuple)):
        raise InvalidGeoJSONError("geometries must be an Array")
    return feature({"type": "GeometryCollection", "geometries": list(geometries)}, properties, bbox, id)


def feature_collection(features: Sequence[dict], bbox: Optional[BBox] = None, id: Id = None) -> dict:
    """Wrap a list of Features in a FeatureCollection."""
    if features is None:
        raise InvalidGeoJSONError("No features passed")
    if not isinstance(features, (list, tuple)):
        raise InvalidGeoJSONError("features must be an Array")
    fc: dict[str, Any] = {"type": "FeatureCollection"}
    if id is not None:
        validate_id(id)
        fc["id"] = id
    if bbox is not None:
        validate_bbox(bbox)
        fc["bbox"] = list(bbox)
    fc["features"] = list(features)
    return fc


def round_(num: float, precision: int = 0) -> float:
    """Round half away from zero to a number of decimals."""
    if precision < 0:
        raise InvalidArgumentError("precision must be a positive number")
    multiplier = 10 ** precision
    return math.floor(abs(num) * multiplier + 0.5) / multiplier * (1 if num >= 0 else -1)


def is_number(num: Any) -> bool:
    """True for real numbers other than NaN and booleans."""
    if isinstance(num, bool) or not isinstance(num, Number):
        return False
    return not math.isnan(num)


def is_object(value: Any) -> bool:
    return isinstance(value, dict)


def validate_bbox(bbox: Any) -> None:
    """
    Validate a BBox.

    Raises:
        InvalidArgumentError: if the bbox is not a list of 4 or 6 numbers
    """
    if not bbox:
        raise InvalidArgumentError("bbox is required")
    if not isinstance(bbox, (list, tuple)):
        raise InvalidArgumentError("bbox must be an Array")
    if len(bbox) not in (4, 6):
        raise InvalidArgumentError("bbox must be an Array of 4 or 6 numbers")
    if not all(is_number(num) for num in bbox):
        raise InvalidArgumentError("bbox must only contain numbers")


def validate_id(id: Any) -> None:
    """Validate a feature id (string or number)."""
    if id is None:
        raise InvalidArgumentError("id is required")
    if not isinstance(id, str) and not is_number(id):
        raise InvalidArgumentError("id must be a number or a string")
