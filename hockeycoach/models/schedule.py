"""
Schedule models for the Hockey Coach substitution schedule application.

Substitution schedules are stored as a flat record keyed by
``"{position}-{quarter}-{slot}"``. This module holds the key grammar, the
nested ParsedSchedule shape the record is normalized into, and the derived
TimelineEvent records used for live playback.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .player import Player
from ..utils.constants import MAX_SCHEDULE_QUARTER, MAX_SCHEDULE_SLOT


# position -> quarter -> slot-indexed players (None for empty slots)
ParsedSchedule = Dict[str, Dict[int, List[Optional[Player]]]]

ScheduleKey = Tuple[str, int, int]


def _parse_index(token: str, limit: int) -> Optional[int]:
    if not token.isascii() or not token.isdigit():
        return None
    if len(token.lstrip("0")) > len(str(limit)):
        return None
    value = int(token)
    return value if value <= limit else None


def parse_schedule_key(key: Any) -> Optional[ScheduleKey]:
    """
    Split a stored schedule key into its parts.

    Args:
        key: Record key, expected as "position-quarter-slot"

    Returns:
        (position, quarter, slot) tuple, or None when the key is malformed
        or its quarter or slot exceeds the allowed maximum

    Example:
        >>> parse_schedule_key("striker-2-1")
        ('striker', 2, 1)
        >>> parse_schedule_key("formation_key") is None
        True
    """
    if not isinstance(key, str):
        return None
    parts = key.split("-")
    if len(parts) < 3:
        return None

    position = parts[0]
    quarter = _parse_index(parts[1], MAX_SCHEDULE_QUARTER)
    slot = _parse_index(parts[2], MAX_SCHEDULE_SLOT)
    if not position or quarter is None or slot is None or quarter < 1:
        return None
    return position, quarter, slot


def format_schedule_key(position: str, quarter: int, slot: int) -> str:
    return f"{position}-{quarter}-{slot}"


def flatten_schedule(parsed: ParsedSchedule) -> Dict[str, Dict[str, Any]]:
    """
    Write a ParsedSchedule back to the stored flat-key convention.

    Empty slots are omitted, so parsing the result yields the same structure.
    """
    record: Dict[str, Dict[str, Any]] = {}
    for position, quarters in parsed.items():
        for quarter, slots in quarters.items():
            for slot, player in enumerate(slots):
                if player is not None:
                    record[format_schedule_key(position, quarter, slot)] = player.to_dict()
    return record


@dataclass(frozen=True)
class TimelineEvent:
    """
    A player taking a position at a point in the match.

    Attributes:
        time: Seconds from match start
        quarter: 1-based quarter the entry belongs to
        position: Position token
        slot: Slot index within the quarter (0 = starting occupant)
        player: Player snapshot taking the position
        is_substitution: True for every slot after the first
    """
    time: int
    quarter: int
    position: str
    slot: int
    player: Player
    is_substitution: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "quarter": self.quarter,
            "position": self.position,
            "slot": self.slot,
            "player": self.player.to_dict(),
            "is_substitution": self.is_substitution,
        }
