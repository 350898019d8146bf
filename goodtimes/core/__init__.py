"""
Core infrastructure for goodtimes.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Application bootstrap for initialization
- Interface definitions for logger and presenter
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container, resolve, try_resolve
from .exceptions import (
    CargoCommandError,
    ConfigFileError,
    GoodtimesException,
    MalformedRecordError,
    ManifestNotFoundError,
    ReportMissingError,
    ReportParseError,
    ReportParseFailure,
    ReportRenderError,
    ResolutionError,
)

__all__ = [
    "CargoCommandError",
    "ConfigFileError",
    "GoodtimesException",
    "MalformedRecordError",
    "ManifestNotFoundError",
    "ReportMissingError",
    "ReportParseError",
    "ReportParseFailure",
    "ReportRenderError",
    "ResolutionError",
    "ServiceContainer",
    "bootstrap",
    "get_container",
    "is_initialized",
    "reset",
    "resolve",
    "try_resolve",
]
