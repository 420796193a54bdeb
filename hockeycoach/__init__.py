"""
Hockey Coach Substitution Schedule

Reconstructs who plays where during a field hockey match from the sparse
substitution schedule stored with each match, and drives the live playback
view of that schedule.

This package provides the reconstruction services and a Flask web API.
"""
from .models import MatchSchedule, Player, TimelineEvent
from .services import (
    PlaybackService, ScheduleReconstructor, active_players_at_time,
    generate_timeline, parse_schedule, upcoming_substitutions,
)
from .ui import create_app, run_web_app
from .utils import fmt_mmss

__version__ = "1.0.0"

__all__ = [
    "MatchSchedule", "Player", "TimelineEvent",
    "PlaybackService", "ScheduleReconstructor", "active_players_at_time",
    "generate_timeline", "parse_schedule", "upcoming_substitutions",
    "create_app", "run_web_app", "fmt_mmss",
]
