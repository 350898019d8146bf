"""
Click command implementations for the goodtimes CLI.
"""

from .goodtimes import goodtimes

COMMANDS = [
    goodtimes,
]

__all__ = [
    "COMMANDS",
    "goodtimes",
]
