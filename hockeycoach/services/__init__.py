"""
Services package for the Hockey Coach substitution schedule application.

This package contains service classes and functions that handle business logic.
"""
from .schedule_reconstructor import (
    ScheduleReconstructor, active_players_at_time, current_quarter,
    generate_timeline, parse_schedule, upcoming_substitutions,
)
from .schedule_validator import ScheduleValidationError, ScheduleValidator
from .playback_service import PlaybackService
from .match_record_service import MatchRecordError, MatchRecordService
from .service_factory import ServiceFactory

__all__ = [
    "ScheduleReconstructor", "active_players_at_time", "current_quarter",
    "generate_timeline", "parse_schedule", "upcoming_substitutions",
    "ScheduleValidationError", "ScheduleValidator", "PlaybackService",
    "MatchRecordError", "MatchRecordService", "ServiceFactory",
]
