"""
Logger interface for diagnostic output.

Diagnostics (phase progress, skipped crates, dropped edges) go through
ILogger and are filtered by the configured level. What the user asked for,
the critical path table or the report location, goes through IPresenter.
"""

from abc import ABC, abstractmethod
from typing import Any

LOG_LEVELS = ("debug", "info", "warning", "error")


class ILogger(ABC):
    """
    Interface for diagnostic logging.

    Implementations only provide :meth:`log` and :meth:`set_level`; the
    per-level helpers delegate to :meth:`log`.
    """

    @abstractmethod
    def log(self, level: str, message: str, *args: Any) -> None:
        """
        Log ``message % args`` at ``level``.

        Args:
            level: One of LOG_LEVELS
        """

    @abstractmethod
    def set_level(self, level: str) -> None:
        """Change the minimum level that is emitted."""

    def debug(self, message: str, *args: Any) -> None:
        self.log("debug", message, *args)

    def info(self, message: str, *args: Any) -> None:
        self.log("info", message, *args)

    def warning(self, message: str, *args: Any) -> None:
        self.log("warning", message, *args)

    def error(self, message: str, *args: Any) -> None:
        self.log("error", message, *args)
