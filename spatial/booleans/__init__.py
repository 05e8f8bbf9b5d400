"""
Booleans package for spatial.
Predicates testing how points, lines and polygons relate.
"""

from spatial.booleans.point import (
    boolean_point_in_polygon,
    boolean_point_on_line,
    boolean_clockwise,
)

from spatial.booleans.relate import (
    boolean_contains,
    boolean_within,
    boolean_crosses,
    boolean_disjoint,
    boolean_equal,
    boolean_overlap,
    boolean_parallel,
)

__all__ = [
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
]
