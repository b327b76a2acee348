"""Pairing state machine.

Every transition takes a ``TournamentState`` plus the caller's player
selection and returns the next state. Inputs are never modified. A call
that is not valid for the current state is ignored: the input state is
returned unchanged and a warning is logged.
"""

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

from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from teampairing.constants import (
    ATTACKERS_OFFERED,
    AUTO_PAIR_POOL_SIZE,
    AUTO_PAIR_ROUND,
    MY_SIDE,
    NUM_ROUNDS,
    OPPONENT_SIDE,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
)
from teampairing.exceptions import TournamentSetupException
from teampairing.models import (
    DEFENDER_PHASES,
    GameMap,
    Pairing,
    Phase,
    Player,
    Team,
    TournamentState,
)
from teampairing.type_hints import Side
from teampairing.utils import setup_logger

logger = setup_logger(__name__)

PHASE_DESCRIPTIONS: Dict[Phase, str] = {
    Phase.SELECT_MY_DEFENDER: "Select your defender",
    Phase.SELECT_OPPONENT_DEFENDER: "Select opponent's defender",
    Phase.OFFER_MY_ATTACKERS: "Select 2 attackers to offer",
    Phase.OFFER_OPPONENT_ATTACKERS: "Select opponent's 2 attackers",
    Phase.OPPONENT_CHOOSES: "Opponent chooses from your attackers",
    Phase.I_CHOOSE: "Choose from opponent's attackers",
    Phase.ROUND_COMPLETE: "Round complete",
    Phase.TOURNAMENT_COMPLETE: "Tournament complete!",
}

_SELECTION_RULES: Dict[Phase, Tuple[int, Optional[Side]]] = {
    Phase.SELECT_MY_DEFENDER: (1, MY_SIDE),
    Phase.SELECT_OPPONENT_DEFENDER: (1, OPPONENT_SIDE),
    Phase.OFFER_MY_ATTACKERS: (ATTACKERS_OFFERED, MY_SIDE),
    Phase.OFFER_OPPONENT_ATTACKERS: (ATTACKERS_OFFERED, OPPONENT_SIDE),
    # I pick from the attackers the opponent offered, and vice versa
    Phase.I_CHOOSE: (1, OPPONENT_SIDE),
    Phase.OPPONENT_CHOOSES: (1, MY_SIDE),
    Phase.ROUND_COMPLETE: (0, None),
    Phase.TOURNAMENT_COMPLETE: (0, None),
}


# ========== Helpers ==========


def _contains(players: Iterable[Player], player: Player) -> bool:
    return any(p.id == player.id for p in players)


def _remove_player(players: Tuple[Player, ...], player_id: str) -> Tuple[Player, ...]:
    """Remove a player from a pool, keeping the order of the others."""
    return tuple(p for p in players if p.id != player_id)


def _reject(state: TournamentState, action: str, reason: str) -> TournamentState:
    logger.warning(
        "Ignoring %s in round %s (%s): %s",
        action,
        state.current_round,
        state.phase.value,
        reason,
    )
    return state


def _transition(state: TournamentState, **changes) -> TournamentState:
    new_state = replace(state, **changes)
    if new_state.phase != state.phase:
        logger.debug("Phase %s -> %s", state.phase.value, new_state.phase.value)
    return new_state


def _check_attackers(
    attackers: Sequence[Player],
    pool: Tuple[Player, ...],
    defender: Optional[Player],
) -> Optional[str]:
    """Return why an attacker offer is invalid, or None if it is valid."""
    if len(attackers) != ATTACKERS_OFFERED:
        return f"expected {ATTACKERS_OFFERED} attackers, got {len(attackers)}"
    first, second = attackers
    if first.id == second.id:
        return "the same player was offered twice"
    for attacker in attackers:
        if not _contains(pool, attacker):
            return f"{attacker.name} is not available"
        if defender is not None and attacker.id == defender.id:
            return f"{attacker.name} is already the defender"
    return None


# ========== Setup ==========


def create_tournament(
    my_team: Team,
    opponent_team: Team,
    selected_maps: Sequence[GameMap],
    all_maps: Optional[Sequence[GameMap]] = None,
) -> TournamentState:
    """Create the initial state of a tournament.

    Args:
        my_team: My team roster
        opponent_team: Opponent roster
        selected_maps: The battleplans in the order they will be played
        all_maps: Full battleplan pool (defaults to the selected maps)

    Returns:
        State at round 1, waiting for my defender

    Raises:
        TournamentSetupException: If the teams or maps cannot start a tournament
    """
    if my_team is None or opponent_team is None:
        raise TournamentSetupException("Both teams are required")
    if len(selected_maps) != NUM_ROUNDS:
        raise TournamentSetupException(
            f"Select exactly {NUM_ROUNDS} battleplans, got {len(selected_maps)}"
        )
    if len({m.id for m in selected_maps}) != NUM_ROUNDS:
        raise TournamentSetupException("The same battleplan was selected twice")

    state = TournamentState(
        my_team=my_team,
        opponent_team=opponent_team,
        all_maps=tuple(all_maps) if all_maps is not None else tuple(selected_maps),
        selected_maps=tuple(selected_maps),
        current_round=1,
        phase=Phase.SELECT_MY_DEFENDER,
        my_available_players=tuple(my_team.players),
        opponent_available_players=tuple(opponent_team.players),
        pairings=(),
        status=STATUS_IN_PROGRESS,
    )
    logger.info(
        "Tournament created: %s vs %s on %s",
        my_team.name,
        opponent_team.name,
        ", ".join(m.name for m in selected_maps),
    )
    return state


# ========== Defenders ==========


def set_my_defender(state: TournamentState, player: Player) -> TournamentState:
    """Set my defender for the current round.

    Defender selection is order independent: once both defenders are
    known the round moves on to attacker offers.
    """
    if state.phase not in DEFENDER_PHASES or state.my_defender is not None:
        return _reject(state, "my defender", "not selecting my defender")
    if not _contains(state.my_available_players, player):
        return _reject(state, "my defender", f"{player.name} is not available")

    next_phase = (
        Phase.OFFER_MY_ATTACKERS
        if state.opponent_defender
        else Phase.SELECT_OPPONENT_DEFENDER
    )
    return _transition(state, my_defender=player, phase=next_phase)


def set_opponent_defender(state: TournamentState, player: Player) -> TournamentState:
    """Set the opponent's defender for the current round."""
    if state.phase not in DEFENDER_PHASES or state.opponent_defender is not None:
        return _reject(state, "opponent defender", "not selecting opponent defender")
    if not _contains(state.opponent_available_players, player):
        return _reject(state, "opponent defender", f"{player.name} is not available")

    next_phase = (
        Phase.OFFER_MY_ATTACKERS if state.my_defender else Phase.SELECT_MY_DEFENDER
    )
    return _transition(state, opponent_defender=player, phase=next_phase)


# ========== Attackers ==========


def set_my_attackers(
    state: TournamentState, attackers: Sequence[Player]
) -> TournamentState:
    """Offer two of my players to the opponent's defender."""
    if state.phase != Phase.OFFER_MY_ATTACKERS:
        return _reject(state, "my attackers", "not offering my attackers")
    problem = _check_attackers(attackers, state.my_available_players, state.my_defender)
    if problem:
        return _reject(state, "my attackers", problem)

    return _transition(
        state,
        my_attackers=(attackers[0], attackers[1]),
        phase=Phase.OFFER_OPPONENT_ATTACKERS,
    )


def set_opponent_attackers(
    state: TournamentState, attackers: Sequence[Player]
) -> TournamentState:
    """Record the two players the opponent offers to my defender.

    I always choose first, so the round moves to ``i-choose``.
    """
    if state.phase != Phase.OFFER_OPPONENT_ATTACKERS:
        return _reject(state, "opponent attackers", "not offering opponent attackers")
    problem = _check_attackers(
        attackers, state.opponent_available_players, state.opponent_defender
    )
    if problem:
        return _reject(state, "opponent attackers", problem)

    return _transition(
        state,
        opponent_attackers=(attackers[0], attackers[1]),
        phase=Phase.I_CHOOSE,
    )


# ========== Choices ==========


def i_choose_attacker(state: TournamentState, chosen: Player) -> TournamentState:
    """My defender picks one of the opponent's attackers.

    Creates the pairing my defender vs ``chosen`` on the current map and
    removes both players from their pools.
    """
    if state.phase != Phase.I_CHOOSE:
        return _reject(state, "my choice", "not my turn to choose")
    if not state.opponent_attackers or not state.my_defender:
        return _reject(state, "my choice", "defender or attackers missing")
    if not _contains(state.opponent_attackers, chosen):
        return _reject(state, "my choice", f"{chosen.name} was not offered")

    current_map = state.current_map
    pairing = Pairing.create(
        current_map, state.current_round, state.my_defender, chosen
    )
    logger.info("Paired %s", pairing)

    return _transition(
        state,
        pairings=state.pairings + (pairing,),
        my_available_players=_remove_player(
            state.my_available_players, state.my_defender.id
        ),
        opponent_available_players=_remove_player(
            state.opponent_available_players, chosen.id
        ),
        opponent_attackers=None,
        my_defender=None,
        phase=Phase.OPPONENT_CHOOSES,
    )


def _auto_pair_final_round(
    state: TournamentState,
    my_pool: Tuple[Player, ...],
    opponent_pool: Tuple[Player, ...],
) -> List[Pairing]:
    """Pair the last players of each side by pool position.

    Index 0 meets index 0 and index 1 meets index 1, all on the last
    selected map. The result depends on pool order, which is why pools
    are only ever filtered, never reordered.
    """
    final_map = state.selected_maps[NUM_ROUNDS - 1]
    pairings = [
        Pairing.create(final_map, NUM_ROUNDS, mine, theirs, is_auto_paired=True)
        for mine, theirs in zip(my_pool, opponent_pool)
    ]
    for pairing in pairings:
        logger.info("Auto-paired %s", pairing)
    return pairings


def opponent_chooses_attacker(
    state: TournamentState, chosen: Player
) -> TournamentState:
    """The opponent's defender picks one of my attackers.

    Completes the round. When this resolves round 3 and exactly two
    players remain on each side, they are auto-paired for round 4 and the
    tournament ends immediately.
    """
    if state.phase != Phase.OPPONENT_CHOOSES:
        return _reject(state, "opponent choice", "not the opponent's turn to choose")
    if not state.my_attackers or not state.opponent_defender:
        return _reject(state, "opponent choice", "defender or attackers missing")
    if not _contains(state.my_attackers, chosen):
        return _reject(state, "opponent choice", f"{chosen.name} was not offered")

    pairing = Pairing.create(
        state.current_map, state.current_round, chosen, state.opponent_defender
    )
    logger.info("Paired %s", pairing)

    my_pool = _remove_player(state.my_available_players, chosen.id)
    opponent_pool = _remove_player(
        state.opponent_available_players, state.opponent_defender.id
    )
    pairings = state.pairings + (pairing,)

    if (
        state.current_round == AUTO_PAIR_ROUND
        and len(my_pool) == AUTO_PAIR_POOL_SIZE
        and len(opponent_pool) == AUTO_PAIR_POOL_SIZE
    ):
        pairings += tuple(_auto_pair_final_round(state, my_pool, opponent_pool))
        my_pool = ()
        opponent_pool = ()
        changes = {"phase": Phase.TOURNAMENT_COMPLETE, "status": STATUS_COMPLETED}
        logger.info("Tournament complete with %d pairings", len(pairings))
    else:
        changes = {"phase": Phase.ROUND_COMPLETE}

    return _transition(
        state,
        pairings=pairings,
        my_available_players=my_pool,
        opponent_available_players=opponent_pool,
        my_attackers=None,
        opponent_defender=None,
        **changes,
    )


# ========== Rounds ==========


def advance_to_next_round(state: TournamentState) -> TournamentState:
    """Start the next round, or finish the tournament after the last one."""
    if state.phase != Phase.ROUND_COMPLETE:
        return _reject(state, "next round", "round is not complete")

    if (
        state.current_round >= NUM_ROUNDS
        or not state.my_available_players
        or not state.opponent_available_players
    ):
        logger.info("Tournament complete with %d pairings", len(state.pairings))
        return _transition(
            state, status=STATUS_COMPLETED, phase=Phase.TOURNAMENT_COMPLETE
        )

    next_round = state.current_round + 1
    logger.info("Starting round %d", next_round)
    return _transition(
        state,
        current_round=next_round,
        phase=Phase.SELECT_MY_DEFENDER,
        my_defender=None,
        my_attackers=None,
        opponent_defender=None,
        opponent_attackers=None,
    )


def finish_tournament(state: TournamentState) -> TournamentState:
    """Mark a tournament whose pairing is done as completed."""
    if state.phase != Phase.TOURNAMENT_COMPLETE:
        return _reject(state, "finish", "pairing is not done")
    if state.status == STATUS_COMPLETED:
        return state
    return _transition(state, status=STATUS_COMPLETED)


# ========== Phase queries ==========


def get_phase_description(phase: Union[Phase, str]) -> str:
    """Human readable description of a phase.

    Unknown values are returned as given.
    """
    for known, description in PHASE_DESCRIPTIONS.items():
        if phase == known:
            return description
    return str(phase)


def required_selection_count(phase: Phase) -> int:
    """Number of players the caller must select before confirming."""
    return _SELECTION_RULES[Phase(phase)][0]


def selection_side(phase: Phase) -> Optional[Side]:
    """Roster the selection for ``phase`` is drawn from, if any."""
    return _SELECTION_RULES[Phase(phase)][1]


def selectable_players(state: TournamentState, side: Side) -> Tuple[Player, ...]:
    """Players on ``side`` that may be selected in the current phase."""
    if selection_side(state.phase) != side:
        return ()

    if state.phase in DEFENDER_PHASES:
        return (
            state.my_available_players
            if side == MY_SIDE
            else state.opponent_available_players
        )
    if state.phase == Phase.OFFER_MY_ATTACKERS:
        return _exclude(state.my_available_players, state.my_defender)
    if state.phase == Phase.OFFER_OPPONENT_ATTACKERS:
        return _exclude(state.opponent_available_players, state.opponent_defender)
    if state.phase == Phase.I_CHOOSE:
        return state.opponent_attackers or ()
    if state.phase == Phase.OPPONENT_CHOOSES:
        return state.my_attackers or ()
    return ()


def _exclude(
    players: Tuple[Player, ...], player: Optional[Player]
) -> Tuple[Player, ...]:
    if player is None:
        return players
    return _remove_player(players, player.id)


def apply_selection(
    state: TournamentState, selected_players: Sequence[Player]
) -> TournamentState:
    """Confirm the caller's selection for the current phase.

    Checks the selection count the phase requires, then dispatches to
    the matching transition. With nothing to select, a completed round
    advances and a finished pairing marks the tournament completed.
    """
    required = required_selection_count(state.phase)
    if len(selected_players) != required:
        return _reject(
            state,
            "selection",
            f"{required} player(s) required, {len(selected_players)} selected",
        )

    phase = state.phase
    if phase == Phase.SELECT_MY_DEFENDER:
        return set_my_defender(state, selected_players[0])
    if phase == Phase.SELECT_OPPONENT_DEFENDER:
        return set_opponent_defender(state, selected_players[0])
    if phase == Phase.OFFER_MY_ATTACKERS:
        return set_my_attackers(state, selected_players)
    if phase == Phase.OFFER_OPPONENT_ATTACKERS:
        return set_opponent_attackers(state, selected_players)
    if phase == Phase.I_CHOOSE:
        return i_choose_attacker(state, selected_players[0])
    if phase == Phase.OPPONENT_CHOOSES:
        return opponent_chooses_attacker(state, selected_players[0])
    if phase == Phase.ROUND_COMPLETE:
        return advance_to_next_round(state)
    return finish_tournament(state)


def pairings_by_round(
    state: TournamentState,
) -> List[Tuple[int, GameMap, Tuple[Pairing, ...]]]:
    """Group pairings by round, in round order, with each round's map."""
    return [
        (
            index + 1,
            game_map,
            tuple(p for p in state.pairings if p.round == index + 1),
        )
        for index, game_map in enumerate(state.selected_maps)
    ]
