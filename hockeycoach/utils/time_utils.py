"""
Utility functions for the Hockey Coach substitution schedule application.

This module contains common time helpers used throughout the application.
"""
import math


def fmt_mmss(seconds: float) -> str:
    """
    Format seconds as MM:SS string.

    Args:
        seconds: Number of seconds to format (fractions are dropped)

    Returns:
        Formatted time string in MM:SS format, or "--:--" for NaN and
        infinite input

    Example:
        >>> fmt_mmss(90)
        '01:30'
        >>> fmt_mmss(3661)
        '61:01'
    """
    if not math.isfinite(seconds):
        return "--:--"
    total = max(0, int(seconds))
    m = total // 60
    s = total % 60
    return f"{m:02d}:{s:02d}"
