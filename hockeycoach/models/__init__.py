"""
Models package for the Hockey Coach substitution schedule application.

This package contains the core data models used throughout the application.
"""
from .player import Player, convert_players_data_to_array
from .schedule import (
    ParsedSchedule, ScheduleKey, TimelineEvent,
    flatten_schedule, format_schedule_key, parse_schedule_key,
)
from .match_schedule import MatchSchedule

__all__ = [
    "Player", "convert_players_data_to_array",
    "ParsedSchedule", "ScheduleKey", "TimelineEvent",
    "flatten_schedule", "format_schedule_key", "parse_schedule_key",
    "MatchSchedule",
]
