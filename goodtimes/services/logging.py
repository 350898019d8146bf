"""
Diagnostic logger for goodtimes.

Backed by the stdlib ``goodtimes`` logger. Messages can go to stderr, to a
rotating file under ``~/.goodtimes``, or both; each handler filters on the
configured level while the logger itself passes everything through.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from ..core.interfaces.logger import ILogger

DEFAULT_LOG_FILE = Path.home() / ".goodtimes" / "goodtimes.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level_number(level: str) -> int:
    """Map a config level name to a logging constant, defaulting to WARNING."""
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.WARNING


class GoodtimesLogger(ILogger):
    """ILogger on top of stdlib logging with stderr and file handlers."""

    max_bytes = 10 * 1024 * 1024
    backup_count = 3

    def __init__(
        self,
        name: str = "goodtimes",
        level: str = "warning",
        console_enabled: bool = True,
        file_enabled: bool = False,
        log_file: Path | None = None,
    ) -> None:
        """
        Args:
            name: stdlib logger name
            level: Minimum level (debug, info, warning, error)
            console_enabled: Write to stderr
            file_enabled: Write to ``log_file``
            log_file: Defaults to ~/.goodtimes/goodtimes.log
        """
        self._logger = logging.getLogger(name)
        # Re-creating the logger (e.g. per CLI invocation) must not stack handlers.
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False

        self._handlers: list[logging.Handler] = []
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        if console_enabled:
            self._add_handler(logging.StreamHandler(sys.stderr), formatter)
        if file_enabled:
            path = log_file or DEFAULT_LOG_FILE
            path.parent.mkdir(parents=True, exist_ok=True)
            self._add_handler(
                RotatingFileHandler(
                    path, maxBytes=self.max_bytes, backupCount=self.backup_count
                ),
                formatter,
            )

        self.set_level(level)

    def _add_handler(self, handler: logging.Handler, formatter: logging.Formatter) -> None:
        handler.setFormatter(formatter)
        self._logger.addHandler(handler)
        self._handlers.append(handler)

    def log(self, level: str, message: str, *args: Any) -> None:
        self._logger.log(_level_number(level), message, *args)

    def set_level(self, level: str) -> None:
        number = _level_number(level)
        for handler in self._handlers:
            handler.setLevel(number)


class NullLogger(ILogger):
    """Discards everything. Used when no logger is registered."""

    def log(self, level: str, message: str, *args: Any) -> None:
        pass

    def set_level(self, level: str) -> None:
        pass
