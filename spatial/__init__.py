"""
spatial: GeoJSON geometry functions.

Measurements, predicates, polygon overlay, transformations, grids and
clustering over GeoJSON-shaped dicts. Every function returns new objects
unless called with mutate=True.
"""

import logging

from spatial.config import SpatialSettings, get_settings
from spatial.exceptions import (
    SpatialError,
    InvalidGeoJSONError,
    InvalidArgumentError,
    OverlayError,
)

from spatial.models import (
    EARTH_RADIUS,
    Units,
    AreaUnits,
    Geometry,
    parse_geojson,
    parse_geometry,
    radians_to_length,
    length_to_radians,
    length_to_degrees,
    bearing_to_azimuth,
    radians_to_degrees,
    degrees_to_radians,
    convert_length,
    convert_area,
)

from spatial.helpers import (
    feature,
    geometry,
    point,
    points,
    line_string,
    line_strings,
    polygon,
    polygons,
    multi_point,
    multi_line_string,
    multi_polygon,
    geometry_collection,
    feature_collection,
    round_,
    is_number,
    is_object,
    validate_bbox,
    validate_id,
)

from spatial.invariant import (
    get_coord,
    get_coords,
    contains_number,
    geojson_type,
    feature_of,
    collection_of,
    get_geom,
    get_type,
)

from spatial.meta import (
    coord_each,
    coord_all,
    geom_each,
    feature_each,
    flatten_each,
    line_each,
    segment_each,
    segment_reduce,
    prop_each,
)

from spatial.measurement import (
    distance,
    bearing,
    destination,
    midpoint,
    rhumb_distance,
    rhumb_bearing,
    rhumb_destination,
    to_mercator,
    to_wgs84,
    nearest_point,
    nearest_point_on_line,
    point_to_line_distance,
    nearest_point_to_line,
    polygon_tangents,
    planepoint,
    length,
    along,
    line_slice_along,
    line_slice,
    area,
    bbox,
    bbox_polygon,
    envelope,
    square,
    center,
    centroid,
    center_of_mass,
    center_mean,
    center_median,
    point_on_feature,
    standard_deviational_ellipse,
    great_circle,
)

from spatial.booleans import (
    boolean_point_in_polygon,
    boolean_point_on_line,
    boolean_clockwise,
    boolean_contains,
    boolean_within,
    boolean_crosses,
    boolean_disjoint,
    boolean_equal,
    boolean_overlap,
    boolean_parallel,
)

from spatial.transformation import (
    clone,
    clean_coords,
    flip,
    rewind,
    truncate,
    transform_rotate,
    transform_scale,
    transform_translate,
    circle,
    ellipse,
    sector,
    line_arc,
    bezier_spline,
    line_offset,
    line_chunk,
    simplify,
    bbox_clip,
    convex,
    polygon_to_line,
    line_to_polygon,
    combine,
    explode,
    flatten,
    collect,
    tag,
    sample,
    points_within_polygon,
)

from spatial.overlay import (
    PlanarOverlayEngine,
    intersect,
    union,
    difference,
    dissolve,
    mask,
    buffer,
    line_segment,
    line_intersect,
    line_overlap,
    line_split,
    kinks,
    unkink_polygon,
    polygonize,
)

from spatial.grids import (
    point_grid,
    square_grid,
    hex_grid,
    triangle_grid,
    interpolate,
    isolines,
    isobands,
    tin,
    voronoi,
)

from spatial.clusters import (
    get_cluster,
    cluster_each,
    cluster_reduce,
    clusters_dbscan,
    clusters_kmeans,
)

from spatial.data import (
    read_geojson,
    write_geojson,
    to_geodataframe,
    from_geodataframe,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Configuration and errors
    "SpatialSettings",
    "get_settings",
    "SpatialError",
    "InvalidGeoJSONError",
    "InvalidArgumentError",
    "OverlayError",
    # Models and units
    "EARTH_RADIUS",
    "Units",
    "AreaUnits",
    "Geometry",
    "parse_geojson",
    "parse_geometry",
    "radians_to_length",
    "length_to_radians",
    "length_to_degrees",
    "bearing_to_azimuth",
    "radians_to_degrees",
    "degrees_to_radians",
    "convert_length",
    "convert_area",
    # Helpers
    "feature",
    "geometry",
    "point",
    "points",
    "line_string",
    "line_strings",
    "polygon",
    "polygons",
    "multi_point",
    "multi_line_string",
    "multi_polygon",
    "geometry_collection",
    "feature_collection",
    "round_",
    "is_number",
    "is_object",
    "validate_bbox",
    "validate_id",
    # Invariant
    "get_coord",
    "get_coords",
    "contains_number",
    "geojson_type",
    "feature_of",
    "collection_of",
    "get_geom",
    "get_type",
    # Meta
    "coord_each",
    "coord_all",
    "geom_each",
    "feature_each",
    "flatten_each",
    "line_each",
    "segment_each",
    "segment_reduce",
    "prop_each",
    # Measurement
    "distance",
    "bearing",
    "destination",
    "midpoint",
    "rhumb_distance",
    "rhumb_bearing",
    "rhumb_destination",
    "to_mercator",
    "to_wgs84",
    "nearest_point",
    "nearest_point_on_line",
    "point_to_line_distance",
    "nearest_point_to_line",
    "polygon_tangents",
    "planepoint",
    "length",
    "along",
    "line_slice_along",
    "line_slice",
    "area",
    "bbox",
    "bbox_polygon",
    "envelope",
    "square",
    "center",
    "centroid",
    "center_of_mass",
    "center_mean",
    "center_median",
    "point_on_feature",
    "standard_deviational_ellipse",
    "great_circle",
    # Booleans
    "boolean_point_in_polygon",
    "boolean_point_on_line",
    "boolean_clockwise",
    "boolean_contains",
    "boolean_within",
    "boolean_crosses",
    "boolean_disjoint",
    "boolean_equal",
    "boolean_overlap",
    "boolean_parallel",
    # Transformation
    "clone",
    "clean_coords",
    "flip",
    "rewind",
    "truncate",
    "transform_rotate",
    "transform_scale",
    "transform_translate",
    "circle",
    "ellipse",
    "sector",
    "line_arc",
    "bezier_spline",
    "line_offset",
    "line_chunk",
    "simplify",
    "bbox_clip",
    "convex",
    "polygon_to_line",
    "line_to_polygon",
    "combine",
    "explode",
    "flatten",
    "collect",
    "tag",
    "sample",
    "points_within_polygon",
    # Overlay
    "PlanarOverlayEngine",
    "intersect",
    "union",
    "difference",
    "dissolve",
    "mask",
    "buffer",
    "line_segment",
    "line_intersect",
    "line_overlap",
    "line_split",
    "kinks",
    "unkink_polygon",
    "polygonize",
    # Grids
    "point_grid",
    "square_grid",
    "hex_grid",
    "triangle_grid",
    "interpolate",
    "isolines",
    "isobands",
    "tin",
    "voronoi",
    # Clusters
    "get_cluster",
    "cluster_each",
    "cluster_reduce",
    "clusters_dbscan",
    "clusters_kmeans",
    # Data
    "read_geojson",
    "write_geojson",
    "to_geodataframe",
    "from_geodataframe",
]
