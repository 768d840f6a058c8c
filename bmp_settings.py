"""Environment-driven settings for the BMP processor.

Values are read from environment variables with the ``BMP_`` prefix, e.g.
``BMP_CLAMP_CHANNELS=1`` or ``BMP_LOG_LEVEL=DEBUG``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProcessorSettings(BaseSettings):
    """Codec and transform options."""

    model_config = SettingsConfigDict(env_prefix="BMP_")

    clamp_channels: bool = False
    """Clamp transform results to 0-255 instead of wrapping them like the 8-bit store does."""
    strict_header: bool = False
    """Also reject files with planes != 1, compression != 0 or a short DIB header."""
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    default_scale_factor: float = Field(default=0.5, ge=0.0)
    """Value pre-filled in the viewer when an operation asks for a scale factor."""


@lru_cache(maxsize=1)
def get_settings() -> ProcessorSettings:
    return ProcessorSettings()
