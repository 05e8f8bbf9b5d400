"""
Output models for spatial.
Structured properties attached to generated features.
"""

from pydantic import BaseModel, Field


class StandardDeviationalEllipseProperties(BaseModel):
    """Statistics stored on a standard deviational ellipse feature."""
    mean_center_coordinates: list[float] = Field(..., description="Mean center [x, y]")
    semi_major_axis: float = Field(..., ge=0, description="Semi-major axis in degrees")
    semi_minor_axis: float = Field(..., ge=0, description="Semi-minor axis in degrees")
    number_of_features: int = Field(..., ge=0, description="Number of input points")
    angle: float = Field(..., description="Rotation angle in degrees")
    percentage_within_ellipse: float = Field(
        ..., ge=0, le=100, description="Share of input points inside the ellipse"
    )
