"""Formatting utilities for the fixed-width coverage report.

Design principles:
- Report rows fit an 80-column terminal
- Deeply nested paths keep their tail (the file name stays recognizable)
- Grammatically correct (1 file vs 2 files)
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ctlcov.config.constants import ELLIPSIS


def truncate_path_tail(path: str, max_len: int = 58, marker: str = ELLIPSIS) -> str:
    """Truncate path to max_len, keeping the tail and prefixing marker.

    Examples:
        scripts/libs/very/deep/tree/foo.ctl (max_len=20) -> ...deep/tree/foo.ctl
        scripts/foo.ctl -> scripts/foo.ctl (unchanged)
    """
    if len(path) <= max_len:
        return path
    keep = max_len - len(marker)
    if keep <= 0:
        return marker[:max_len]
    return marker + path[-keep:]


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return grammatically correct singular/plural form.

    Args:
        count: The number of items
        singular: Singular form (e.g., "file")
        plural: Plural form (default: singular + "s")

    Returns:
        Formatted string like "1 file" or "3 files"
    """
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"


def round_half_up(value: float, places: int) -> str:
    """Fixed-point text for value with exact ties rounded up.

    The float is converted exactly, so 0.03125 (1/32) becomes ``0.0313`` at
    four places where ``f"{value:.4f}"`` would give ``0.0312``.
    """
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_percent(rate: float) -> str:
    """Format a 0-100 rate with one decimal, e.g. ``66.7%``."""
    return f"{round_half_up(rate, 1)}%"
