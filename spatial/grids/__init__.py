"""
Grids package for spatial.
Regular grids, inverse distance weighting, contouring and triangulation.
"""

from spatial.grids.grids import (
    point_grid,
    square_grid,
    hex_grid,
    triangle_grid,
)

from spatial.grids.interpolate import interpolate

from spatial.grids.contours import ValueGrid, isolines, isobands

from spatial.grids.triangulation import tin, voronoi

__all__ = [
    # Grids
    "point_grid",
    "square_grid",
    "hex_grid",
    "triangle_grid",
    # Interpolation
    "interpolate",
    # Contours
    "ValueGrid",
    "isolines",
    "isobands",
    # Triangulation
    "tin",
    "voronoi",
]
