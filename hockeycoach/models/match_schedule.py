"""
MatchSchedule model for the Hockey Coach substitution schedule application.

This module contains the MatchSchedule dataclass, the read-only view of a
stored ``matches`` row that the schedule screens work from: the starting
lineup, the raw substitution schedule record and the match structure
settings (quarters, substitutions per quarter, quarter length).
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .player import Player, convert_players_data_to_array
from ..utils import DEFAULT_QUARTER_COUNT, DEFAULT_QUARTER_SECONDS, DEFAULT_SUBS_PER_QUARTER


def _positive_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


@dataclass
class MatchSchedule:
    """
    Represents the schedule-related part of a match record.

    Attributes:
        match_id: Backend identifier of the match (None for ad-hoc records)
        lineup: Normalized starting lineup
        reserve_players: Normalized bench
        schedule: Raw flat-key substitution schedule record
        quarters: Number of quarters in the match
        subs_per_quarter: Substitution slots per position per quarter
        quarter_duration_seconds: Length of one quarter
        formation_key: Formation the schedule was built for, if stored
    """
    match_id: Optional[str] = None
    lineup: List[Player] = field(default_factory=list)
    reserve_players: List[Player] = field(default_factory=list)
    schedule: Dict[str, Any] = field(default_factory=dict)
    quarters: int = DEFAULT_QUARTER_COUNT
    subs_per_quarter: int = DEFAULT_SUBS_PER_QUARTER
    quarter_duration_seconds: int = DEFAULT_QUARTER_SECONDS
    formation_key: Optional[str] = None

    @property
    def match_length_seconds(self) -> int:
        return self.quarters * self.quarter_duration_seconds

    @staticmethod
    def from_record(data: Any) -> "MatchSchedule":
        """
        Create a MatchSchedule from a stored match row.

        Settings are taken from the row when present, otherwise from the
        metadata keys stored inside the substitution schedule record.

        Args:
            data: Match row as returned by the backend (untyped)

        Returns:
            New MatchSchedule instance; missing pieces fall back to defaults
        """
        ms = MatchSchedule()
        if not isinstance(data, dict):
            return ms

        schedule = data.get("substitution_schedule")
        ms.schedule = schedule if isinstance(schedule, dict) else {}

        match_id = data.get("id")
        ms.match_id = str(match_id) if match_id else None
        ms.lineup = convert_players_data_to_array(data.get("lineup"))
        ms.reserve_players = convert_players_data_to_array(data.get("reserve_players"))

        def _setting(*keys: str) -> List[Any]:
            values = [data.get(k) for k in keys]
            values += [ms.schedule.get(k) for k in keys]
            return values

        ms.quarters = next(
            (q for q in map(_positive_int, _setting("quarters")) if q is not None),
            DEFAULT_QUARTER_COUNT,
        )
        ms.subs_per_quarter = next(
            (
                s for s in map(
                    _positive_int,
                    _setting("subs_per_quarter", "substitutions_per_quarter"),
                )
                if s is not None
            ),
            DEFAULT_SUBS_PER_QUARTER,
        )
        ms.quarter_duration_seconds = next(
            (
                d for d in map(_positive_int, _setting("quarter_duration_seconds"))
                if d is not None
            ),
            DEFAULT_QUARTER_SECONDS,
        )

        formation_key = next((f for f in _setting("formation_key") if f), None)
        ms.formation_key = str(formation_key) if formation_key else None
        return ms

    def to_json(self) -> dict:
        """
        Convert MatchSchedule to a JSON-serializable dictionary.

        Returns:
            Dictionary using the stored field names
        """
        return {
            "id": self.match_id,
            "lineup": [p.to_dict() for p in self.lineup],
            "reserve_players": [p.to_dict() for p in self.reserve_players],
            "substitution_schedule": dict(self.schedule),
            "quarters": self.quarters,
            "subs_per_quarter": self.subs_per_quarter,
            "quarter_duration_seconds": self.quarter_duration_seconds,
            "formation_key": self.formation_key,
        }
