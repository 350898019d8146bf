"""
Click context extension for the goodtimes CLI.

Provides GoodtimesContext dataclass that holds run-wide data passed
through the Click command chain via ctx.obj.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.settings import GoodtimesSettings, load_settings


@dataclass
class GoodtimesContext:
    """Extended context passed through Click command chain.

    Attributes:
        cwd: Current working directory
        settings: Settings merged from config file and environment
    """

    cwd: Path
    settings: GoodtimesSettings

    @classmethod
    def create(
        cls,
        cwd: Path | None = None,
        config_path: Path | None = None,
    ) -> GoodtimesContext:
        """Create a GoodtimesContext for the current environment.

        Args:
            cwd: Working directory override (defaults to Path.cwd())
            config_path: Explicit config file, skips the directory search

        Returns:
            Configured GoodtimesContext instance
        """
        if cwd is None:
            cwd = Path.cwd()

        settings = load_settings(config_path=config_path, start_dir=str(cwd))
        return cls(cwd=cwd, settings=settings)
