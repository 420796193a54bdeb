"""Display helpers for free-text position tokens."""

from .constants import (
    DEFAULT_POSITION_COLOR,
    POSITION_DISPLAY_NAMES,
    POSITION_GROUP_COLORS,
    POSITION_GROUPS,
)


def position_group(position: str) -> str:
    """Return the line (goalkeeper/defender/midfielder/forward) for a token, or ""."""
    safe = (position or "").lower()
    for group, fragments in POSITION_GROUPS:
        if any(fragment in safe for fragment in fragments):
            return group
    return ""


def position_color(position: str) -> str:
    return POSITION_GROUP_COLORS.get(position_group(position), DEFAULT_POSITION_COLOR)


def position_display_name(position: str) -> str:
    """
    Translate a stored position token into its display label.

    Unknown tokens are shown as-is; an empty token becomes "Onbekend".
    """
    safe = (position or "").lower()
    return POSITION_DISPLAY_NAMES.get(safe, position or "Onbekend")
