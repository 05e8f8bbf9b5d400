"""
Planar overlay engine for spatial.
Boolean set operations (intersection, union, difference) over planar geometries,
backed by shapely/GEOS.

Robustness policy:
    - invalid inputs (self-intersections, bad ring orientation) are repaired with
      make_valid before the operation
    - a topology failure is retried once with every input snapped to a precision grid
    - empty results are reported as None
    - inputs touching along a border yield lower-dimensional results (LineString, Point)
    - a failure after the retry raises OverlayError
"""

import logging
from typing import Callable, Optional

import shapely
from shapely.errors import GEOSException
from shapely.geometry.base import BaseGeometry
from shapely.validation import explain_validity, make_valid

from spatial.config import get_settings
from spatial.exceptions import InvalidArgumentError, OverlayError
from spatial.models.geometry import Geometry
from spatial.overlay.adapter import GeometryLike, to_model, to_shape


logger = logging.getLogger(__name__)


class PlanarOverlayEngine:
    """
    Boolean set operations on planar geometries.

    Args:
        grid_size: Precision grid every operation snaps to; full floating point
            precision when None (the configured overlay_grid_size by default)
    """

    def __init__(self, grid_size: Optional[float] = None):
        settings = get_settings()
        if grid_size is None:
            grid_size = settings.overlay_grid_size
        if grid_size is not None and grid_size <= 0:
            raise InvalidArgumentError("grid_size must be a positive number")
        self.grid_size = grid_size
        # grid used for the single retry after a topology failure
        self.retry_grid_size = grid_size * 10 if grid_size else 10 ** -settings.overlay_precision

    def __repr__(self) -> str:
        return f"PlanarOverlayEngine(grid_size={self.grid_size})"

    def prepare(self, geom: GeometryLike) -> BaseGeometry:
        """Convert an input to shapely, repairing it when it is invalid."""
        shape = to_shape(geom)
        if not shape.is_valid:
            logger.debug("Repairing invalid %s: %s", shape.geom_type, explain_validity(shape))
            shape = make_valid(shape)
        return shape

    def _run(self, name: str, operation: Callable[..., BaseGeometry], *shapes: BaseGeometry) -> BaseGeometry:
        try:
            return operation(*shapes, grid_size=self.grid_size)
        except GEOSException as exc:
            logger.warning(
                "%s failed (%s), retrying on a %g precision grid", name, exc, self.retry_grid_size
            )
        snapped = [shapely.set_precision(s, self.retry_grid_size) for s in shapes]
        try:
            return operation(*snapped, grid_size=self.retry_grid_size)
        except GEOSException as exc:
            raise OverlayError(
                f"{name} failed after snapping to a {self.retry_grid_size} grid: {exc}"
            ) from exc

    @staticmethod
    def _result(shape: BaseGeometry) -> Optional[Geometry]:
        if shape is None or shape.is_empty:
            return None
        return to_model(shape)

    def intersection_shape(self, a: GeometryLike, b: GeometryLike) -> BaseGeometry:
        return self._run("intersection", shapely.intersection, self.prepare(a), self.prepare(b))

    def union_shape(self, *geoms: GeometryLike) -> BaseGeometry:
        shapes = [self.prepare(g) for g in geoms]
        return self._run("union", lambda *s, grid_size: shapely.union_all(s, grid_size=grid_size), *shapes)

    def difference_shape(self, a: GeometryLike, b: GeometryLike) -> BaseGeometry:
        return self._run("difference", shapely.difference, self.prepare(a), self.prepare(b))

    def intersection(self, a: GeometryLike, b: GeometryLike) -> Optional[Geometry]:
        """
        Get the area (or border) shared by two geometries.

        Args:
            a: First geometry
            b: Second geometry

        Returns:
            Shared geometry, None when the inputs do not meet
        """
        return self._result(self.intersection_shape(a, b))

    def union(self, a: GeometryLike, b: GeometryLike, *more: GeometryLike) -> Geometry:
        """
        Merge two or more geometries.

        Raises:
            OverlayError: if every input is empty
        """
        result = self._result(self.union_shape(a, b, *more))
        if result is None:
            raise OverlayError("union of empty geometries")
        return result

    def difference(self, a: GeometryLike, b: GeometryLike) -> Optional[Geometry]:
        """
        Clip the second geometry out of the first.

        Returns:
            Remaining geometry, None when nothing is left
        """
        return self._result(self.difference_shape(a, b))
