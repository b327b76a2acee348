"""A resolved match between one player from each team."""

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

from dataclasses import dataclass
from typing import Any, Dict

from teampairing.models.game_map import GameMap
from teampairing.models.player import Player
from teampairing.utils import generate_id


@dataclass(frozen=True)
class Pairing:
    """A pairing created during the tournament.

    Attributes:
        id: Unique identifier for the pairing
        map_id: ID of the battleplan played
        map_name: Name of the battleplan played
        round: Round number (1-4)
        my_player: Player from my team
        opponent_player: Player from the opponent team
        is_auto_paired: True when produced by the round-3 auto-pair rule
    """

    id: str
    map_id: str
    map_name: str
    round: int
    my_player: Player
    opponent_player: Player
    is_auto_paired: bool = False

    @classmethod
    def create(
        cls,
        game_map: GameMap,
        round_number: int,
        my_player: Player,
        opponent_player: Player,
        is_auto_paired: bool = False,
    ) -> "Pairing":
        return cls(
            id=generate_id(cls.__name__),
            map_id=game_map.id,
            map_name=game_map.name,
            round=round_number,
            my_player=my_player,
            opponent_player=opponent_player,
            is_auto_paired=is_auto_paired,
        )

    def involves(self, player_id: str) -> bool:
        return player_id in (self.my_player.id, self.opponent_player.id)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing to dictionary."""
        return {
            "id": self.id,
            "mapId": self.map_id,
            "mapName": self.map_name,
            "round": self.round,
            "myPlayer": self.my_player.to_dict(),
            "opponentPlayer": self.opponent_player.to_dict(),
            "isAutoPaired": self.is_auto_paired,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pairing":
        """Deserialize pairing from dictionary."""
        return cls(
            id=data["id"],
            map_id=data["mapId"],
            map_name=data["mapName"],
            round=data["round"],
            my_player=Player.from_dict(data["myPlayer"]),
            opponent_player=Player.from_dict(data["opponentPlayer"]),
            is_auto_paired=data.get("isAutoPaired", False),
        )

    def __str__(self) -> str:
        marker = " [auto]" if self.is_auto_paired else ""
        return (
            f"Round {self.round} ({self.map_name}): "
            f"{self.my_player} vs {self.opponent_player}{marker}"
        )
