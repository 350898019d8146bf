"""
Text helpers for terminal output of compile timings.
"""

from __future__ import annotations

UNKNOWN = "?"


def format_duration(seconds: float | None) -> str:
    """Render seconds as ``45.5s``, ``2m 5s`` or ``1h 2m``.

    Examples:
        >>> format_duration(45.5)
        '45.5s'
        >>> format_duration(125)
        '2m 5s'
        >>> format_duration(3725)
        '1h 2m'
    """
    if seconds is None:
        return UNKNOWN
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(seconds, 60)
    if minutes < 60:
        return f"{int(minutes)}m {secs:.0f}s"
    hours, minutes = divmod(int(minutes), 60)
    return f"{hours}h {minutes}m"


def format_ms(ms: float | None) -> str:
    """Render a node's millisecond field; below one second stays in ms.

    Examples:
        >>> format_ms(250.0)
        '250ms'
        >>> format_ms(2500.0)
        '2.5s'
    """
    if ms is None:
        return UNKNOWN
    if ms < 1000:
        return f"{ms:.0f}ms"
    return format_duration(ms / 1000.0)


def truncate_string(s: str, max_len: int = 50, suffix: str = "...") -> str:
    """Cut ``s`` to ``max_len`` characters, ending in ``suffix`` when cut.

    >>> truncate_string("serde_derive_internals", 12)
    'serde_der...'
    """
    if len(s) <= max_len:
        return s
    return s[: max_len - len(suffix)] + suffix
