"""A player on a team roster."""

# Team Pairing
# Copyright (C) 2025  Team Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from teampairing.utils import generate_id


@dataclass(frozen=True)
class Player:
    """Represents one player (and army list) on a team roster.

    Attributes:
        id: Unique identifier for the player
        name: Player's name
        army: Army the player brings
        list_name: Optional list name, used as the matchup matrix key
        battleplan_scores: Battleplan name -> score (1 = weak, 6 = strong)
    """

    id: str
    name: str
    army: str
    list_name: Optional[str] = None
    battleplan_scores: Mapping[str, int] = field(
        default_factory=dict, hash=False, compare=False
    )

    def __post_init__(self) -> None:
        # Read-only copy; snapshots share Player objects
        object.__setattr__(
            self,
            "battleplan_scores",
            MappingProxyType(dict(self.battleplan_scores)),
        )

    @classmethod
    def create(
        cls,
        name: str,
        army: str,
        list_name: Optional[str] = None,
        battleplan_scores: Optional[Mapping[str, int]] = None,
    ) -> "Player":
        """Create a player with a freshly generated ID."""
        return cls(
            id=generate_id(cls.__name__),
            name=name,
            army=army,
            list_name=list_name,
            battleplan_scores=battleplan_scores or {},
        )

    @property
    def list_key(self) -> str:
        """Key used for this player in matchup matrices."""
        return self.list_name or self.name

    @property
    def has_scores(self) -> bool:
        return bool(self.battleplan_scores)

    def score_for(self, battleplan_name: str) -> Optional[int]:
        """Get the player's score for a battleplan, or None if unscored."""
        return self.battleplan_scores.get(battleplan_name)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "army": self.army,
        }
        if self.list_name is not None:
            data["listName"] = self.list_name
        if self.battleplan_scores:
            data["battleplanScores"] = dict(self.battleplan_scores)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        return cls(
            id=data.get("id") or generate_id(cls.__name__),
            name=data["name"],
            army=data["army"],
            list_name=data.get("listName"),
            battleplan_scores=data.get("battleplanScores") or {},
        )

    def __str__(self) -> str:
        if self.list_name:
            return f"{self.name} ({self.army}, {self.list_name})"
        return f"{self.name} ({self.army})"
