"""
Schedule reconstruction for the Hockey Coach substitution schedule application.

Turns a sparse, stringly-keyed substitution schedule record plus a starting
lineup into a position x quarter grid for display and a time-ordered event
stream that answers "who is on the pitch at second T".

Every function here is total over its input: malformed keys and values are
skipped, never raised.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from ..models import MatchSchedule, ParsedSchedule, Player, TimelineEvent, parse_schedule_key
from ..utils import DEFAULT_LOOKAHEAD_SECONDS

logger = logging.getLogger(__name__)

ActivePlayers = Dict[str, Player]


def iter_schedule_entries(record: Any) -> Iterator[Tuple[str, int, int, Player]]:
    """
    Yield the valid entries of a schedule record in record order.

    Args:
        record: Raw substitution schedule mapping (untyped)

    Yields:
        (position, quarter, slot, player) for each well-formed entry
    """
    if not isinstance(record, dict):
        return

    for key, value in record.items():
        parsed_key = parse_schedule_key(key)
        if parsed_key is None:
            logger.debug("Skipping schedule key %r: not position-quarter-slot", key)
            continue
        player = Player.try_parse(value)
        if player is None:
            logger.debug("Skipping schedule key %r: no player with an id", key)
            continue
        position, quarter, slot = parsed_key
        yield position, quarter, slot, player


def parse_schedule(record: Any) -> ParsedSchedule:
    """
    Normalize a flat schedule record into position -> quarter -> slots.

    Slots without a player are None. When two keys resolve to the same slot
    the later one wins.

    Args:
        record: Raw substitution schedule mapping

    Returns:
        ParsedSchedule (empty for missing or fully malformed input)
    """
    parsed: ParsedSchedule = {}
    for position, quarter, slot, player in iter_schedule_entries(record):
        slots = parsed.setdefault(position, {}).setdefault(quarter, [])
        if len(slots) <= slot:
            slots.extend([None] * (slot + 1 - len(slots)))
        slots[slot] = player
    return parsed


def slot_event_time(quarter: int, slot: int, quarter_duration_seconds: int, slots_per_quarter: int) -> int:
    """
    Seconds from match start at which a slot takes effect.

    A quarter is split into ``slots_per_quarter + 1`` equal segments and slot
    ``n`` lands at the end of segment ``n``, so the starting occupant (slot 0)
    is placed one interval past the quarter start. Fractions are truncated.
    """
    duration = max(0, int(quarter_duration_seconds))
    segments = max(0, int(slots_per_quarter)) + 1
    quarter_start = (quarter - 1) * duration
    return quarter_start + ((slot + 1) * duration) // segments


def generate_timeline(
    record: Any,
    quarter_duration_seconds: int,
    slots_per_quarter: int,
) -> List[TimelineEvent]:
    """
    Derive the chronologically ordered event stream for a schedule record.

    Args:
        record: Raw substitution schedule mapping
        quarter_duration_seconds: Length of one quarter
        slots_per_quarter: Substitution slots per position per quarter

    Returns:
        Events sorted by time; equal times keep record order
    """
    events = [
        TimelineEvent(
            time=slot_event_time(quarter, slot, quarter_duration_seconds, slots_per_quarter),
            quarter=quarter,
            position=position,
            slot=slot,
            player=player,
            is_substitution=slot > 0,
        )
        for position, quarter, slot, player in iter_schedule_entries(record)
    ]
    # sorted() is stable
    return sorted(events, key=lambda event: event.time)


def _lineup_players(starting_lineup: Iterable[Any]) -> Iterator[Player]:
    for entry in starting_lineup or []:
        player = entry if isinstance(entry, Player) else Player.try_parse(entry)
        if player is not None:
            yield player


def active_players_at_time(
    starting_lineup: Iterable[Any],
    timeline_events: Iterable[TimelineEvent],
    time: float,
) -> ActivePlayers:
    """
    Work out which player occupies each position at a point in the match.

    The starting lineup is always applied first. For ``time > 0`` every
    substitution event at or before ``time`` is then applied in time order,
    later events overwriting earlier ones.

    Args:
        starting_lineup: Players (or raw player dicts) on the pitch at kick-off
        timeline_events: Events from generate_timeline
        time: Seconds from match start

    Returns:
        Mapping of position -> Player
    """
    result: ActivePlayers = {}
    for player in _lineup_players(starting_lineup):
        if player.position:
            result[player.position] = player

    if time > 0:
        applied = sorted(
            (e for e in timeline_events if e.is_substitution and e.time <= time),
            key=lambda event: event.time,
        )
        for event in applied:
            result[event.position] = event.player

    return result


def upcoming_substitutions(
    timeline_events: Iterable[TimelineEvent],
    time: float,
    lookahead_seconds: float,
) -> List[TimelineEvent]:
    """Substitutions strictly after ``time`` and no later than ``time + lookahead_seconds``."""
    horizon = time + lookahead_seconds
    return sorted(
        (e for e in timeline_events if e.is_substitution and time < e.time <= horizon),
        key=lambda event: event.time,
    )


def current_quarter(time: float, quarter_duration_seconds: int, quarters: int) -> int:
    """
    Return the 1-based quarter a match time falls in.

    Quarter ``k`` covers ``((k-1)*d, k*d]``; time 0 is quarter 1 and times
    past the final whistle stay in the last quarter. A NaN time counts as
    kick-off.
    """
    last = max(1, int(quarters))
    duration = int(quarter_duration_seconds)
    if duration <= 0 or math.isnan(time) or time <= 0:
        return 1
    if math.isinf(time):
        return last
    quarter = int(-(-time // duration))
    return max(1, min(quarter, last))


class ScheduleReconstructor:
    """
    Reconstructs the grid and timeline of one match schedule.

    The record is parsed once on first use; all queries run against the
    cached structures.
    """

    def __init__(self, match_schedule: MatchSchedule):
        self.match_schedule = match_schedule
        self._parsed: Optional[ParsedSchedule] = None
        self._timeline: Optional[List[TimelineEvent]] = None

    @classmethod
    def from_record(cls, record: Any) -> "ScheduleReconstructor":
        return cls(MatchSchedule.from_record(record))

    # ------------------------------------------------------------------
    # Derived structures
    # ------------------------------------------------------------------
    @property
    def parsed(self) -> ParsedSchedule:
        if self._parsed is None:
            self._parsed = parse_schedule(self.match_schedule.schedule)
        return self._parsed

    @property
    def timeline(self) -> List[TimelineEvent]:
        if self._timeline is None:
            ms = self.match_schedule
            self._timeline = generate_timeline(
                ms.schedule, ms.quarter_duration_seconds, ms.subs_per_quarter
            )
            logger.debug(
                "Built timeline for match %s: %d events", ms.match_id, len(self._timeline)
            )
        return self._timeline

    # ------------------------------------------------------------------
    # Grid view
    # ------------------------------------------------------------------
    def positions(self) -> List[str]:
        """Scheduled positions, sorted by name."""
        return sorted(self.parsed.keys())

    def filter_positions(self, position_filter: Optional[str] = "all") -> List[str]:
        """Positions whose name contains ``position_filter``, ignoring case."""
        if not position_filter or position_filter == "all":
            return self.positions()
        needle = position_filter.lower()
        return [position for position in self.positions() if needle in position.lower()]

    def quarters(self) -> List[int]:
        return list(range(1, self.match_schedule.quarters + 1))

    def grid(self, position_filter: Optional[str] = "all") -> Dict[str, Dict[int, List[Optional[dict]]]]:
        """JSON-ready grid covering every configured quarter."""
        grid: Dict[str, Dict[int, List[Optional[dict]]]] = {}
        for position in self.filter_positions(position_filter):
            by_quarter = self.parsed.get(position, {})
            grid[position] = {
                quarter: [p.to_dict() if p is not None else None for p in by_quarter.get(quarter, [])]
                for quarter in self.quarters()
            }
        return grid

    # ------------------------------------------------------------------
    # Point-in-time queries
    # ------------------------------------------------------------------
    def active_players(self, time: float) -> ActivePlayers:
        return active_players_at_time(self.match_schedule.lineup, self.timeline, time)

    def upcoming(self, time: float, lookahead_seconds: float = DEFAULT_LOOKAHEAD_SECONDS) -> List[TimelineEvent]:
        return upcoming_substitutions(self.timeline, time, lookahead_seconds)

    def current_quarter(self, time: float) -> int:
        ms = self.match_schedule
        return current_quarter(time, ms.quarter_duration_seconds, ms.quarters)

    def snapshot(self, time: float, lookahead_seconds: float = DEFAULT_LOOKAHEAD_SECONDS) -> Dict[str, Any]:
        """
        Summarize the state of the match at ``time``.

        Returns:
            Dictionary with active players, upcoming substitutions, the
            current quarter and the counters shown in the stats bar
        """
        active = self.active_players(time)
        upcoming = self.upcoming(time, lookahead_seconds)
        return {
            "time": time,
            "current_quarter": self.current_quarter(time),
            "quarters": self.match_schedule.quarters,
            "active_players": {pos: player.to_dict() for pos, player in active.items()},
            "upcoming_substitutions": [event.to_dict() for event in upcoming],
            "active_count": len(active),
            "upcoming_count": len(upcoming),
        }
