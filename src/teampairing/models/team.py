"""A team: a named roster of players with an optional matchup matrix."""

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
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from teampairing.models.player import Player
from teampairing.utils import generate_id


def find_player(players: Iterable[Player], name: str) -> Optional[Player]:
    """Find a player by name, list name or army (case-insensitive).

    Names are checked first so that a player called like another
    player's army still resolves to the right person.
    """
    players = tuple(players)
    needle = name.strip().casefold()
    for attribute in ("name", "list_name", "army"):
        for player in players:
            value = getattr(player, attribute)
            if value and value.casefold() == needle:
                return player
    return None


@dataclass(frozen=True)
class Team:
    """A team roster.

    Attributes:
        id: Unique identifier for the team
        name: Team name
        players: Ordered roster (exactly 8 once imported)
        matchup_matrix: My list name -> opponent list name -> score (1-6).
            Stored on the opponent team; always read as "my lists vs
            their lists".
    """

    id: str
    name: str
    players: Tuple[Player, ...] = ()
    matchup_matrix: Mapping[str, Mapping[str, int]] = field(
        default_factory=dict, hash=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "players", tuple(self.players))
        object.__setattr__(
            self,
            "matchup_matrix",
            MappingProxyType(
                {
                    mine: MappingProxyType(dict(row))
                    for mine, row in self.matchup_matrix.items()
                }
            ),
        )

    @classmethod
    def create(
        cls,
        name: str,
        players: Iterable[Player],
        matchup_matrix: Optional[Mapping[str, Mapping[str, int]]] = None,
    ) -> "Team":
        """Create a team with a freshly generated ID."""
        return cls(
            id=generate_id(cls.__name__),
            name=name,
            players=tuple(players),
            matchup_matrix=matchup_matrix or {},
        )

    @property
    def has_matchup_matrix(self) -> bool:
        return bool(self.matchup_matrix)

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def find_player(self, name: str) -> Optional[Player]:
        return find_player(self.players, name)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team to dictionary."""
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "players": [p.to_dict() for p in self.players],
        }
        if self.matchup_matrix:
            data["matchupMatrix"] = {
                mine: dict(row) for mine, row in self.matchup_matrix.items()
            }
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        """Deserialize team from dictionary."""
        return cls(
            id=data.get("id") or generate_id(cls.__name__),
            name=data["name"],
            players=tuple(Player.from_dict(p) for p in data.get("players", [])),
            matchup_matrix=data.get("matchupMatrix") or {},
        )
