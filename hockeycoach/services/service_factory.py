"""
Service Factory for dependency injection.

This module provides a factory for creating properly configured service
instances with their dependencies injected.
"""
from typing import Any, Optional

from ..models import MatchSchedule
from .match_record_service import MatchRecordService
from .playback_service import PlaybackService
from .schedule_reconstructor import ScheduleReconstructor
from .schedule_validator import ScheduleValidator


class ServiceFactory:
    """
    Factory for creating service instances with proper dependency injection.

    The record service and validator are shared; reconstructors and playback
    clocks are created per match.
    """

    def __init__(self, record_service: Optional[MatchRecordService] = None):
        """Initialize factory with default configurations."""
        self._record_service: Optional[MatchRecordService] = record_service
        self._validator: Optional[ScheduleValidator] = None

    def create_reconstructor(self, match_schedule: MatchSchedule) -> ScheduleReconstructor:
        return ScheduleReconstructor(match_schedule)

    def create_playback_service(self, reconstructor: ScheduleReconstructor) -> PlaybackService:
        return PlaybackService(reconstructor)

    def create_schedule_suite(self, record: Any) -> dict:
        """
        Create the services needed to display one match schedule.

        Args:
            record: Match row or MatchSchedule

        Returns:
            Dictionary containing the configured services
        """
        match_schedule = record if isinstance(record, MatchSchedule) else MatchSchedule.from_record(record)
        reconstructor = self.create_reconstructor(match_schedule)
        return {
            "reconstructor": reconstructor,
            "playback": self.create_playback_service(reconstructor),
            "validator": self.get_validator(),
        }

    def get_record_service(self) -> MatchRecordService:
        """Get singleton record service."""
        if self._record_service is None:
            self._record_service = MatchRecordService()
        return self._record_service

    def get_validator(self) -> ScheduleValidator:
        """Get singleton schedule validator."""
        if self._validator is None:
            self._validator = ScheduleValidator()
        return self._validator

    def configure_record_service(self, service: MatchRecordService) -> None:
        self._record_service = service
