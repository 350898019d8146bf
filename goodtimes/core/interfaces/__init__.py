"""
Interface definitions for goodtimes' pluggable services.
"""

from .logger import ILogger
from .presenter import IPresenter

__all__ = [
    "ILogger",
    "IPresenter",
]
