"""
Overlay package for spatial.
Planar boolean operations on polygons and lines, backed by shapely.
"""

from spatial.overlay.adapter import (
    to_shape,
    from_shape,
    to_model,
    from_model,
)

from spatial.overlay.engine import PlanarOverlayEngine

from spatial.overlay.operations import (
    intersect,
    union,
    difference,
    dissolve,
    mask,
    buffer,
)

from spatial.overlay.lines import (
    line_segment,
    line_intersect,
    line_overlap,
    line_split,
    kinks,
)

from spatial.overlay.polygons import (
    unkink_polygon,
    polygonize,
)

__all__ = [
    # Adapter
    "to_shape",
    "from_shape",
    "to_model",
    "from_model",
    # Engine
    "PlanarOverlayEngine",
    # Polygon operations
    "intersect",
    "union",
    "difference",
    "dissolve",
    "mask",
    "buffer",
    # Lines
    "line_segment",
    "line_intersect",
    "line_overlap",
    "line_split",
    "kinks",
    # Polygons
    "unkink_polygon",
    "polygonize",
]
