"""
Utilities package for the Hockey Coach substitution schedule application.

This package contains utility functions and constants used throughout the application.
"""
from .time_utils import fmt_mmss
from .positions import position_color, position_display_name, position_group
from .constants import (
    DEFAULT_QUARTER_COUNT, DEFAULT_SUBS_PER_QUARTER,
    DEFAULT_QUARTER_SECONDS, DEFAULT_MATCH_SECONDS, DEFAULT_LOOKAHEAD_SECONDS,
    UPCOMING_WINDOW_SECONDS, PLAYBACK_SKIP_SECONDS, PLAYBACK_TICK_SECONDS,
    SCHEDULE_METADATA_KEYS,
)

__all__ = [
    "fmt_mmss", "position_color", "position_display_name", "position_group",
    "DEFAULT_QUARTER_COUNT", "DEFAULT_SUBS_PER_QUARTER",
    "DEFAULT_QUARTER_SECONDS", "DEFAULT_MATCH_SECONDS", "DEFAULT_LOOKAHEAD_SECONDS",
    "UPCOMING_WINDOW_SECONDS", "PLAYBACK_SKIP_SECONDS", "PLAYBACK_TICK_SECONDS",
    "SCHEDULE_METADATA_KEYS",
]
