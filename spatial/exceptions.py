"""
Exceptions raised by spatial functions.
"""


class SpatialError(Exception):
    """Base spatial exception."""


class InvalidGeoJSONError(SpatialError, ValueError):
    """Raised when an input is not the expected GeoJSON object."""


class InvalidArgumentError(SpatialError, ValueError):
    """Raised when a non-geometry argument is missing or out of range."""


class OverlayError(SpatialError):
    """Raised when the overlay engine cannot produce a result."""
