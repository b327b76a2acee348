"""Preview of the round-3 choices that decide the auto-paired final round."""

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

from dataclasses import dataclass
from typing import List, Optional, Tuple

from teampairing.constants import (
    AUTO_PAIR_POOL_SIZE,
    AUTO_PAIR_ROUND,
    NUM_ROUNDS,
    STATUS_COMPLETED,
)
from teampairing.models import GameMap, Phase, Player, TournamentState


def _without(
    players: Tuple[Player, ...], *excluded: Optional[Player]
) -> Tuple[Player, ...]:
    excluded_ids = {p.id for p in excluded if p is not None}
    return tuple(p for p in players if p.id not in excluded_ids)


@dataclass(frozen=True)
class ChoiceOutcome:
    """Players left for the final round if ``chosen`` is picked.

    Attributes:
        chosen: The attacker that would be picked
        my_final: My players that could still reach the final round
        opponent_final: Opponent players that could still reach the final round
    """

    chosen: Player
    my_final: Tuple[Player, ...]
    opponent_final: Tuple[Player, ...]

    @property
    def is_resolved(self) -> bool:
        """True once both sides are down to the two auto-paired players."""
        return (
            len(self.my_final) == AUTO_PAIR_POOL_SIZE
            and len(self.opponent_final) == AUTO_PAIR_POOL_SIZE
        )

    def final_pairings(self) -> List[Tuple[Player, Player]]:
        """The positional auto-pairings this choice leads to, if resolved."""
        if not self.is_resolved:
            return []
        return list(zip(self.my_final, self.opponent_final))


@dataclass(frozen=True)
class Round3Preview:
    """What the remaining round-3 decisions mean for the final round."""

    current_map: GameMap
    final_map: GameMap
    phase: Phase
    my_uncommitted: Tuple[Player, ...]
    opponent_uncommitted: Tuple[Player, ...]
    outcomes: Tuple[ChoiceOutcome, ...] = ()


def round3_preview(state: TournamentState) -> Optional[Round3Preview]:
    """Build the round-3 preview, or None outside an active round 3.

    Uncommitted players are those not yet named defender or attacker.
    While I choose, each outcome fixes the opponent's final pair and
    leaves my side open; while the opponent chooses, each outcome fixes
    both final pairs.
    """
    if state.current_round != AUTO_PAIR_ROUND or state.status == STATUS_COMPLETED:
        return None

    my_pool = state.my_available_players
    opponent_pool = state.opponent_available_players
    my_attackers = state.my_attackers or ()
    opponent_attackers = state.opponent_attackers or ()

    outcomes: Tuple[ChoiceOutcome, ...] = ()
    if state.phase == Phase.I_CHOOSE:
        outcomes = tuple(
            ChoiceOutcome(
                chosen=attacker,
                my_final=_without(my_pool, state.my_defender),
                opponent_final=_without(
                    opponent_pool, attacker, state.opponent_defender
                ),
            )
            for attacker in opponent_attackers
        )
    elif state.phase == Phase.OPPONENT_CHOOSES:
        outcomes = tuple(
            ChoiceOutcome(
                chosen=attacker,
                my_final=_without(my_pool, attacker),
                opponent_final=_without(opponent_pool, state.opponent_defender),
            )
            for attacker in my_attackers
        )

    return Round3Preview(
        current_map=state.current_map,
        final_map=state.selected_maps[NUM_ROUNDS - 1],
        phase=state.phase,
        my_uncommitted=_without(my_pool, state.my_defender, *my_attackers),
        opponent_uncommitted=_without(
            opponent_pool, state.opponent_defender, *opponent_attackers
        ),
        outcomes=outcomes,
    )
