"""
Strict validation for substitution schedule records.

Reconstruction itself never rejects data; callers that want to refuse a
schedule (for example before saving an edited one) run it through
ScheduleValidator first.
"""
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..models import Player, parse_schedule_key
from ..utils import DEFAULT_QUARTER_COUNT, DEFAULT_SUBS_PER_QUARTER, SCHEDULE_METADATA_KEYS


class ScheduleValidationError(Exception):
    """Raised when a schedule record fails strict validation."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid substitution schedule")


class ScheduleValidator:
    """
    Validates a flat schedule record against the match structure.

    Every check is reported; nothing stops at the first problem.
    """

    def __init__(self, metadata_keys: Iterable[str] = SCHEDULE_METADATA_KEYS):
        self.metadata_keys = set(metadata_keys)

    def validate_schedule(
        self,
        record: Any,
        quarters: int = DEFAULT_QUARTER_COUNT,
        subs_per_quarter: int = DEFAULT_SUBS_PER_QUARTER,
    ) -> List[str]:
        """
        Validate schedule data and return a list of validation errors.

        Args:
            record: Raw substitution schedule mapping
            quarters: Number of quarters in the match
            subs_per_quarter: Highest substitution slot allowed per quarter

        Returns:
            List of validation error messages (empty if valid)
        """
        if not isinstance(record, dict):
            return ["Substitution schedule must be a mapping"]

        errors: List[str] = []
        starters: Dict[Tuple[int, str], str] = {}

        for key, value in record.items():
            if key in self.metadata_keys:
                continue

            parsed_key = parse_schedule_key(key)
            if parsed_key is None:
                errors.append(f"Malformed schedule key: {key!r}")
                continue
            position, quarter, slot = parsed_key

            if quarter > quarters:
                errors.append(f"{key}: quarter {quarter} is outside 1-{quarters}")
            if slot > subs_per_quarter:
                errors.append(f"{key}: slot {slot} exceeds {subs_per_quarter} substitutions per quarter")

            if value is None:
                continue
            player = Player.try_parse(value)
            if player is None:
                errors.append(f"{key}: entry has no player id")
                continue

            if slot == 0:
                other = starters.get((quarter, player.id))
                if other is not None and other != position:
                    errors.append(
                        f"Player {player.name or player.id} starts quarter {quarter} "
                        f"at both {other} and {position}"
                    )
                starters.setdefault((quarter, player.id), position)

        return errors

    def ensure_valid(
        self,
        record: Any,
        quarters: int = DEFAULT_QUARTER_COUNT,
        subs_per_quarter: int = DEFAULT_SUBS_PER_QUARTER,
    ) -> None:
        """
        Raise ScheduleValidationError if the record has any problem.

        Raises:
            ScheduleValidationError: With every error found
        """
        errors = self.validate_schedule(record, quarters, subs_per_quarter)
        if errors:
            raise ScheduleValidationError(errors)

    def compare_with_lineup(self, record: Any, lineup: Iterable[Player]) -> List[str]:
        """
        Report first-quarter starters that differ from the starting lineup.

        The lineup stays authoritative during playback; this only surfaces
        the disagreement.
        """
        if not isinstance(record, dict):
            return []

        scheduled: Dict[str, Player] = {}
        for key, value in record.items():
            parsed_key = parse_schedule_key(key)
            if parsed_key is None:
                continue
            position, quarter, slot = parsed_key
            player = Player.try_parse(value)
            if quarter == 1 and slot == 0 and player is not None:
                scheduled[position] = player

        expected: Dict[str, Player] = {p.position: p for p in lineup if p.position}
        mismatches = []
        for position in sorted(set(scheduled) | set(expected)):
            in_lineup: Optional[Player] = expected.get(position)
            in_schedule: Optional[Player] = scheduled.get(position)
            if in_lineup is None or in_schedule is None:
                continue
            if in_lineup.id != in_schedule.id:
                mismatches.append(
                    f"{position}: lineup has {in_lineup.name or in_lineup.id}, "
                    f"schedule starts {in_schedule.name or in_schedule.id}"
                )
        return mismatches
