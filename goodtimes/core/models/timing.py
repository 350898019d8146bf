"""
Timing report models.

Rows of the ``UNIT_DATA`` array that cargo embeds in
``cargo-timings/cargo-timing.html``. Cargo emits one row per compiled
unit (lib, build script, proc-macro, bin), so a package can own several.
"""

from __future__ import annotations

from pydantic import Field

from .base import ExternalModel

BUILD_SCRIPT_LABEL = "build script"


class UnitTiming(ExternalModel):
    """Timing of one compiled unit."""

    name: str = Field(description="Package name")
    version: str = Field(description="Package version")
    target: str = Field(description='Target label, e.g. " (check)" or " build script"')
    start: float = Field(ge=0, description="Seconds from build start")
    duration: float = Field(ge=0, description="Seconds spent compiling the unit")

    @property
    def key(self) -> tuple[str, str]:
        return self.name, self.version

    @property
    def is_build_script(self) -> bool:
        return BUILD_SCRIPT_LABEL in self.target
