"""
Measurement package for spatial.
Distances, bearings, lengths, areas, bounding boxes, centers and nearest-feature searches.
"""

from spatial.measurement.distance import (
    distance,
    bearing,
    destination,
    midpoint,
    rhumb_distance,
    rhumb_bearing,
    rhumb_destination,
)

from spatial.measurement.projection import to_mercator, to_wgs84

from spatial.measurement.nearest import (
    nearest_point,
    nearest_point_on_line,
    point_to_line_distance,
    nearest_point_to_line,
    polygon_tangents,
    planepoint,
)

from spatial.measurement.length import (
    length,
    along,
    line_slice_along,
    line_slice,
)

from spatial.measurement.area import area

from spatial.measurement.bounds import (
    bbox,
    bbox_polygon,
    envelope,
    square,
)

from spatial.measurement.centers import (
    center,
    centroid,
    center_of_mass,
    center_mean,
    center_median,
    point_on_feature,
    standard_deviational_ellipse,
)

from spatial.measurement.great_circle import great_circle

__all__ = [
    # Distance
    "distance",
    "bearing",
    "destination",
    "midpoint",
    "rhumb_distance",
    "rhumb_bearing",
    "rhumb_destination",
    # Projection
    "to_mercator",
    "to_wgs84",
    # Nearest
    "nearest_point",
    "nearest_point_on_line",
    "point_to_line_distance",
    "nearest_point_to_line",
    "polygon_tangents",
    "planepoint",
    # Length
    "length",
    "along",
    "line_slice_along",
    "line_slice",
    # Area and bounds
    "area",
    "bbox",
    "bbox_polygon",
    "envelope",
    "square",
    # Centers
    "center",
    "centroid",
    "center_of_mass",
    "center_mean",
    "center_median",
    "point_on_feature",
    "standard_deviational_ellipse",
    # Great circle
    "great_circle",
]
