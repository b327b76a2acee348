"""Tournament state: the immutable snapshot threaded through every transition."""

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
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from teampairing.constants import STATUS_IN_PROGRESS
from teampairing.models.game_map import GameMap
from teampairing.models.pairing import Pairing
from teampairing.models.player import Player
from teampairing.models.team import Team
from teampairing.type_hints import Status


class Phase(str, Enum):
    """Pairing phases a round moves through."""

    SELECT_MY_DEFENDER = "select-my-defender"
    SELECT_OPPONENT_DEFENDER = "select-opponent-defender"
    OFFER_MY_ATTACKERS = "offer-my-attackers"
    OFFER_OPPONENT_ATTACKERS = "offer-opponent-attackers"
    # My defender picks from the opponent's attackers
    I_CHOOSE = "i-choose"
    # Opponent defender picks from my attackers
    OPPONENT_CHOOSES = "opponent-chooses"
    ROUND_COMPLETE = "round-complete"
    TOURNAMENT_COMPLETE = "tournament-complete"


DEFENDER_PHASES = frozenset({Phase.SELECT_MY_DEFENDER, Phase.SELECT_OPPONENT_DEFENDER})
ATTACKER_PHASES = frozenset(
    {
        Phase.OFFER_MY_ATTACKERS,
        Phase.OFFER_OPPONENT_ATTACKERS,
        Phase.I_CHOOSE,
        Phase.OPPONENT_CHOOSES,
    }
)


def _player_or_none(data: Optional[Dict[str, Any]]) -> Optional[Player]:
    return Player.from_dict(data) if data else None


def _pair_or_none(data: Optional[list]) -> Optional[Tuple[Player, Player]]:
    if not data:
        return None
    first, second = data
    return Player.from_dict(first), Player.from_dict(second)


@dataclass(frozen=True)
class TournamentState:
    """Complete state of a tournament at one point in time.

    Transitions never modify a state; they return a new one built with
    ``dataclasses.replace``. Player pools are tuples whose order is
    preserved as players are removed, because the round-3 auto-pairing
    matches the last players by position.

    Attributes:
        my_team: My team roster
        opponent_team: Opponent roster (carries the matchup matrix)
        all_maps: Full battleplan pool
        selected_maps: The four battleplans, in round order
        current_round: Round in progress (1-4)
        phase: Current pairing phase
        my_defender: My defender for this round, once chosen
        opponent_defender: Opponent defender for this round, once chosen
        my_attackers: The two players I offered this round
        opponent_attackers: The two players the opponent offered this round
        my_available_players: My players not yet paired
        opponent_available_players: Opponent players not yet paired
        pairings: Every pairing created so far
        status: Overall tournament status
    """

    my_team: Team
    opponent_team: Team
    all_maps: Tuple[GameMap, ...]
    selected_maps: Tuple[GameMap, ...]
    current_round: int = 1
    phase: Phase = Phase.SELECT_MY_DEFENDER
    my_defender: Optional[Player] = None
    opponent_defender: Optional[Player] = None
    my_attackers: Optional[Tuple[Player, Player]] = None
    opponent_attackers: Optional[Tuple[Player, Player]] = None
    my_available_players: Tuple[Player, ...] = ()
    opponent_available_players: Tuple[Player, ...] = ()
    pairings: Tuple[Pairing, ...] = ()
    status: Status = STATUS_IN_PROGRESS

    @property
    def current_map(self) -> Optional[GameMap]:
        """Battleplan of the round in progress."""
        index = self.current_round - 1
        if 0 <= index < len(self.selected_maps):
            return self.selected_maps[index]
        return None

    @property
    def current_round_pairings(self) -> Tuple[Pairing, ...]:
        return tuple(p for p in self.pairings if p.round == self.current_round)

    def is_paired(self, player_id: str) -> bool:
        return any(p.involves(player_id) for p in self.pairings)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament state to dictionary."""
        return {
            "myTeam": self.my_team.to_dict(),
            "opponentTeam": self.opponent_team.to_dict(),
            "allMaps": [m.to_dict() for m in self.all_maps],
            "selectedMaps": [m.to_dict() for m in self.selected_maps],
            "currentRound": self.current_round,
            "phase": self.phase.value,
            "myDefender": self.my_defender.to_dict() if self.my_defender else None,
            "opponentDefender": (
                self.opponent_defender.to_dict() if self.opponent_defender else None
            ),
            "myAttackers": (
                [p.to_dict() for p in self.my_attackers] if self.my_attackers else None
            ),
            "opponentAttackers": (
                [p.to_dict() for p in self.opponent_attackers]
                if self.opponent_attackers
                else None
            ),
            "myAvailablePlayers": [p.to_dict() for p in self.my_available_players],
            "opponentAvailablePlayers": [
                p.to_dict() for p in self.opponent_available_players
            ],
            "pairings": [p.to_dict() for p in self.pairings],
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentState":
        """Deserialize tournament state from dictionary."""
        return cls(
            my_team=Team.from_dict(data["myTeam"]),
            opponent_team=Team.from_dict(data["opponentTeam"]),
            all_maps=tuple(GameMap.from_dict(m) for m in data.get("allMaps", [])),
            selected_maps=tuple(
                GameMap.from_dict(m) for m in data.get("selectedMaps", [])
            ),
            current_round=data.get("currentRound", 1),
            phase=Phase(data.get("phase", Phase.SELECT_MY_DEFENDER.value)),
            my_defender=_player_or_none(data.get("myDefender")),
            opponent_defender=_player_or_none(data.get("opponentDefender")),
            my_attackers=_pair_or_none(data.get("myAttackers")),
            opponent_attackers=_pair_or_none(data.get("opponentAttackers")),
            my_available_players=tuple(
                Player.from_dict(p) for p in data.get("myAvailablePlayers", [])
            ),
            opponent_available_players=tuple(
                Player.from_dict(p) for p in data.get("opponentAvailablePlayers", [])
            ),
            pairings=tuple(Pairing.from_dict(p) for p in data.get("pairings", [])),
            status=data.get("status", STATUS_IN_PROGRESS),
        )
