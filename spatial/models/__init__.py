"""
Models package for spatial.
Contains Pydantic models for GeoJSON objects, units and outputs.
"""

from spatial.models.geometry import (
    Point,
    MultiPoint,
    LineString,
    MultiLineString,
    Polygon,
    MultiPolygon,
    GeometryCollection,
    Feature,
    FeatureCollection,
    Geometry,
    GeoJSON,
    parse_geojson,
    parse_geometry,
)

from spatial.models.units import (
    EARTH_RADIUS,
    Units,
    AreaUnits,
    radians_to_length,
    length_to_radians,
    length_to_degrees,
    bearing_to_azimuth,
    radians_to_degrees,
    degrees_to_radians,
    convert_length,
    convert_area,
)

from spatial.models.outputs import StandardDeviationalEllipseProperties

__all__ = [
    # GeoJSON
    "Point",
    "MultiPoint",
    "LineString",
    "MultiLineString",
    "Polygon",
    "MultiPolygon",
    "GeometryCollection",
    "Feature",
    "FeatureCollection",
    "Geometry",
    "GeoJSON",
    "parse_geojson",
    "parse_geometry",
    # Units
    "EARTH_RADIUS",
    "Units",
    "AreaUnits",
    "radians_to_length",
    "length_to_radians",
    "length_to_degrees",
    "bearing_to_azimuth",
    "radians_to_degrees",
    "degrees_to_radians",
    "convert_length",
    "convert_area",
    # Outputs
    "StandardDeviationalEllipseProperties",
]
