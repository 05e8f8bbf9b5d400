"""
Transformation package for spatial.
Coordinate clean-up, rhumb-line affine transforms, shape generation and geometry conversion.
"""

# coords has to load first, the overlay package depends on it
from spatial.transformation.coords import (
    clone,
    clean_coords,
    flip,
    rewind,
    truncate,
)

from spatial.transformation.affine import (
    transform_rotate,
    transform_scale,
    transform_translate,
)

from spatial.transformation.shapes import (
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
)

from spatial.transformation.conversion import (
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

__all__ = [
    # Coordinates
    "clone",
    "clean_coords",
    "flip",
    "rewind",
    "truncate",
    # Affine
    "transform_rotate",
    "transform_scale",
    "transform_translate",
    # Shapes
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
    # Conversion
    "polygon_to_line",
    "line_to_polygon",
    "combine",
    "explode",
    "flatten",
    "collect",
    "tag",
    "sample",
    "points_within_polygon",
]
