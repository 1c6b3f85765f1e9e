"""Snapping configuration loaded from the environment."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# On-screen snap distance in pixels, divided by zoom to get scene units
SNAP_DISTANCE = 8.0

# Tolerance for floating point errors when comparing offsets
SNAP_PRECISION = 0.01


class SnapSettings(BaseSettings):
    """Snapping settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SNAP_",
        extra="ignore",
    )

    distance: float = Field(default=SNAP_DISTANCE, gt=0, description="Snap distance in screen pixels")
    precision: float = Field(default=SNAP_PRECISION, gt=0, description="Offset comparison tolerance")


@lru_cache()
def get_snap_settings() -> SnapSettings:
    """Get cached settings instance."""
    return SnapSettings()
