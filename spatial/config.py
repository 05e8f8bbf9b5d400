"""
Configuration for spatial.
Defaults can be overridden with SPATIAL_* environment variables.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SpatialSettings(BaseSettings):
    """Library-wide defaults."""
    model_config = SettingsConfigDict(env_prefix="SPATIAL_", extra="ignore")

    default_units: str = Field("kilometers", description="Units used when a function is called without units")
    default_steps: int = Field(64, gt=0, description="Vertices used to approximate circles and arcs")
    overlay_precision: int = Field(6, ge=0, description="Decimals kept on overlay inputs")
    overlay_grid_size: Optional[float] = Field(
        None, gt=0, description="Snapping grid used by the overlay engine (None = full precision)"
    )


@lru_cache(maxsize=1)
def get_settings() -> SpatialSettings:
    """Get the cached settings instance."""
    return SpatialSettings()
