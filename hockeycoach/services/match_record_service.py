"""
Match record service for the Hockey Coach substitution schedule application.

This module reads match rows from the hosted backend's REST interface. It is
read-only; fetch failures are logged and reported to the caller, never
passed on to the reconstruction code.
"""
import logging
import os
import re
from typing import Optional

import requests

from ..models import MatchSchedule
from ..utils.constants import (
    BACKEND_KEY_ENV,
    BACKEND_TIMEOUT_ENV,
    BACKEND_URL_ENV,
    DEFAULT_BACKEND_TIMEOUT_SECONDS,
    MATCH_RECORD_FIELDS,
)

logger = logging.getLogger(__name__)

UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_valid_uuid(value: str) -> bool:
    """Return True for a well-formed UUID string."""
    return isinstance(value, str) and bool(UUID_RE.match(value))


class MatchRecordError(Exception):
    """Raised when a match record cannot be fetched from the backend."""
    pass


class MatchRecordService:
    """
    Service for loading match rows from the hosted backend.

    Connection settings come from the constructor or, when omitted, from
    the HOCKEYCOACH_BACKEND_* environment variables.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or os.environ.get(BACKEND_URL_ENV, "")).rstrip("/")
        self.api_key = api_key or os.environ.get(BACKEND_KEY_ENV, "")
        if timeout is None:
            try:
                timeout = float(os.environ.get(BACKEND_TIMEOUT_ENV, DEFAULT_BACKEND_TIMEOUT_SECONDS))
            except ValueError:
                timeout = DEFAULT_BACKEND_TIMEOUT_SECONDS
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and self.api_key)

    def _headers(self) -> dict:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    def fetch_match_or_raise(self, match_id: str) -> Optional[MatchSchedule]:
        """
        Fetch a match row and build its MatchSchedule.

        Args:
            match_id: UUID of the match

        Returns:
            MatchSchedule, or None if no match has this id

        Raises:
            MatchRecordError: If the id is invalid, the backend is not
                              configured, or the request fails
        """
        if not is_valid_uuid(match_id):
            raise MatchRecordError(f"Invalid match id: {match_id!r}")
        if not self.is_configured:
            raise MatchRecordError("Backend URL and key are not configured")

        url = f"{self.base_url}/rest/v1/matches"
        params = {"id": f"eq.{match_id}", "select": ",".join(MATCH_RECORD_FIELDS)}
        try:
            response = self.session.get(url, params=params, headers=self._headers(), timeout=self.timeout)
            response.raise_for_status()
            rows = response.json()
        except requests.RequestException as e:
            raise MatchRecordError(f"Error fetching match {match_id}: {e}") from e
        except ValueError as e:
            raise MatchRecordError(f"Backend returned invalid JSON for match {match_id}") from e

        if isinstance(rows, dict):
            rows = [rows]
        if not isinstance(rows, list):
            raise MatchRecordError(f"Unexpected response shape for match {match_id}")
        if not rows:
            logger.info("Match %s not found", match_id)
            return None
        return MatchSchedule.from_record(rows[0])

    def fetch_match(self, match_id: str) -> Optional[MatchSchedule]:
        """
        Fetch a match row, logging instead of raising on failure.

        Returns:
            MatchSchedule, or None if the match is missing or could not be loaded
        """
        try:
            return self.fetch_match_or_raise(match_id)
        except MatchRecordError as e:
            logger.error("Error fetching substitution schedule: %s", e)
            return None
