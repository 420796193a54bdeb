"""
Player model for the Hockey Coach substitution schedule application.

This module contains the Player dataclass, an immutable snapshot of a squad
member as stored in match records, together with the helpers that turn the
loosely-typed stored data into Player instances.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union


Number = Union[int, float]


def _to_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _to_condition(value: Any) -> Optional[Number]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


@dataclass(frozen=True)
class Player:
    """
    Represents a player snapshot attached to a lineup slot or schedule entry.

    Attributes:
        id: Unique identifier from the backend (required)
        name: Player's display name
        number: Shirt number (0 when unknown)
        position: Position token the player is assigned to (free text)
        condition: Optional fitness proxy on a 0-100 scale
        is_goalkeeper: Optional goalkeeper flag
    """
    id: str
    name: str = ""
    number: int = 0
    position: str = ""
    condition: Optional[Number] = None
    is_goalkeeper: Optional[bool] = None

    @classmethod
    def try_parse(cls, value: Any) -> Optional["Player"]:
        """
        Create a Player from an untyped stored value.

        Args:
            value: Anything found in a stored record

        Returns:
            Player instance, or None if value is not a mapping with an id
        """
        if not isinstance(value, dict):
            return None
        player_id = value.get("id")
        if not player_id:
            return None

        goalkeeper = value.get("isGoalkeeper", value.get("is_goalkeeper"))
        return cls(
            id=str(player_id),
            name=str(value.get("name") or ""),
            number=_to_int(value.get("number")),
            position=str(value.get("position") or ""),
            condition=_to_condition(value.get("condition")),
            is_goalkeeper=goalkeeper if isinstance(goalkeeper, bool) else None,
        )

    def with_position(self, position: str) -> "Player":
        """Return a copy of this snapshot assigned to another position."""
        return Player(
            id=self.id,
            name=self.name,
            number=self.number,
            position=position,
            condition=self.condition,
            is_goalkeeper=self.is_goalkeeper,
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert player to the stored dictionary shape.

        Returns:
            Dictionary representation; optional fields are left out when unset
        """
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "number": self.number,
            "position": self.position,
        }
        if self.condition is not None:
            data["condition"] = self.condition
        if self.is_goalkeeper is not None:
            data["isGoalkeeper"] = self.is_goalkeeper
        return data


def convert_players_data_to_array(players_data: Any) -> List[Player]:
    """
    Normalize a stored lineup into a list of players.

    Lineups are stored either as a list of player objects or as a mapping
    keyed by position. Entries without an id or a name are dropped.

    Args:
        players_data: Raw ``lineup``/``reserve_players`` value from a match record

    Returns:
        List of Player snapshots (empty for missing or unsupported data)
    """
    if not players_data:
        return []

    if isinstance(players_data, list):
        players = []
        for entry in players_data:
            if isinstance(entry, dict) and entry.get("name"):
                player = Player.try_parse(entry)
                if player is not None:
                    players.append(player)
        return players

    if isinstance(players_data, dict):
        players = []
        for position, entry in players_data.items():
            if not isinstance(entry, dict) or not entry.get("name"):
                continue
            player = Player.try_parse(entry)
            if player is None:
                continue
            if not player.position:
                player = player.with_position(str(position))
            players.append(player)
        return players

    return []
