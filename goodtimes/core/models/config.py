"""
Configuration models.

Provides Pydantic models for goodtimes configuration with validation.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import ConfigDict, Field, field_validator
from pydantic_settings import NoDecode

from .base import GoodtimesBaseModel

LogLevel = Literal["debug", "info", "warning", "error"]


class ConfigBaseModel(GoodtimesBaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML/env types
        validate_assignment=True,
        extra="ignore",  # Ignore unknown fields in config files
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class BuildConfig(ConfigBaseModel):
    """Build configuration section."""

    profile: str = "dev"
    # NoDecode: env values arrive as "a,b", not JSON
    features: Annotated[list[str], NoDecode] = Field(default_factory=list)
    all_features: bool = False
    include_deps: bool = False

    @field_validator("features", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: Any) -> list[str]:
        """Parse comma-separated string to list."""
        if isinstance(v, str):
            return [x.strip() for x in v.split(",") if x.strip()]
        return v if v else []


class OutputConfig(ConfigBaseModel):
    """Report output configuration section."""

    open_browser: bool = True
    assets_dir: str | None = None
    report_dir: str = "cargo-goodtimes"


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = True
    file: bool = False
