"""Annotations that guide pairing choices.

Read-only queries over a player, the battleplans and the tournament
state: the best-battleplan star, the last-chance threshold and the
matchup medal. Nothing here modifies state; everything is recomputed on
each call.
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

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from teampairing.constants import (
    GOOD_SCORE_THRESHOLD,
    LAST_CHANCE_THRESHOLDS,
    MEDAL_BRONZE,
    MEDAL_GOLD,
    MEDAL_NAMES,
    MY_SIDE,
)
from teampairing.models import (
    ATTACKER_PHASES,
    DEFENDER_PHASES,
    Player,
    TournamentState,
)
from teampairing.type_hints import LastChanceThreshold, MatchupMatrix, MedalRank, Side

# ========== Battleplan scores ==========


def get_player_battleplan_score(
    player: Player, battleplan_name: str
) -> Optional[int]:
    """Score of ``player`` on a battleplan, or None when unscored."""
    if not player.battleplan_scores:
        return None
    return player.score_for(battleplan_name)


def is_good_score(score: Optional[int]) -> bool:
    return score is not None and score >= GOOD_SCORE_THRESHOLD


def is_best_battleplan_for_player(
    player: Player,
    current_battleplan_name: str,
    selected_battleplan_names: Sequence[str],
) -> bool:
    """Check whether the current battleplan is the player's best.

    Ties count: every battleplan sharing the top score is "best". A
    battleplan the player has no score for counts as 0, and a player
    with no positive score on any selected battleplan never qualifies.

    Args:
        player: Player to check
        current_battleplan_name: Battleplan of the round in progress
        selected_battleplan_names: All four battleplans of the tournament

    Returns:
        True if the current score equals the maximum over the selected
        battleplans and that maximum is above zero
    """
    current_score = get_player_battleplan_score(player, current_battleplan_name)
    if current_score is None:
        return False

    max_score = max(
        (
            get_player_battleplan_score(player, name) or 0
            for name in selected_battleplan_names
        ),
        default=0,
    )
    return current_score == max_score and max_score > 0


def get_last_chance_threshold(
    player: Player,
    current_battleplan_name: str,
    remaining_battleplan_names: Sequence[str],
) -> Optional[LastChanceThreshold]:
    """Highest threshold for which the current battleplan is the last chance.

    Thresholds are tried from 6 down to 4. The current battleplan is the
    last chance at threshold ``T`` when the player scores at least ``T``
    on it and on no other remaining battleplan.

    Args:
        player: Player to check
        current_battleplan_name: Battleplan of the round in progress
        remaining_battleplan_names: Current and future battleplans

    Returns:
        6, 5 or 4, or None if the current score is below 4 or no
        threshold is uniquely met
    """
    current_score = get_player_battleplan_score(player, current_battleplan_name)
    if current_score is None or current_score < GOOD_SCORE_THRESHOLD:
        return None

    for threshold in LAST_CHANCE_THRESHOLDS:
        if current_score < threshold:
            continue
        count_at_threshold = 0
        for name in remaining_battleplan_names:
            score = get_player_battleplan_score(player, name)
            if score is not None and score >= threshold:
                count_at_threshold += 1
        if count_at_threshold == 1:
            return threshold
    return None


def is_last_good_battleplan(
    player: Player,
    current_battleplan_name: str,
    remaining_battleplan_names: Sequence[str],
) -> bool:
    """True if no other remaining battleplan gives the player a good score."""
    current_score = get_player_battleplan_score(player, current_battleplan_name)
    if not is_good_score(current_score):
        return False
    return not any(
        is_good_score(get_player_battleplan_score(player, name))
        for name in remaining_battleplan_names
        if name != current_battleplan_name
    )


# ========== Matchups ==========


def get_matchup_score(
    matrix: Optional[MatchupMatrix], my_list_name: str, opponent_list_name: str
) -> Optional[int]:
    """Look up "my list vs their list" in a matchup matrix."""
    if not matrix:
        return None
    return matrix.get(my_list_name, {}).get(opponent_list_name)


def get_medal_rank(
    score: Optional[int], all_scores: Sequence[Optional[int]]
) -> Optional[MedalRank]:
    """Rank a matchup score among the distinct scores of its side.

    Ties share a rank: with scores ``[6, 6, 4, 2]`` both 6s are gold, 4
    is silver and 2 is bronze.

    Args:
        score: The player's matchup score, or None
        all_scores: Matchup scores of every available player on the side

    Returns:
        1 (gold), 2 (silver), 3 (bronze) or None
    """
    if score is None:
        return None
    distinct = sorted({s for s in all_scores if s is not None}, reverse=True)
    if score not in distinct:
        return None
    rank = distinct.index(score) + 1
    return rank if MEDAL_GOLD <= rank <= MEDAL_BRONZE else None


def medal_name(rank: Optional[int]) -> Optional[str]:
    return MEDAL_NAMES.get(rank) if rank is not None else None


# ========== State slices ==========


def current_battleplan_name(state: TournamentState) -> str:
    current_map = state.current_map
    return current_map.name if current_map else ""


def selected_battleplan_names(state: TournamentState) -> List[str]:
    return [m.name for m in state.selected_maps]


def remaining_battleplan_names(state: TournamentState) -> List[str]:
    """Battleplans of the current round and every round after it."""
    return [m.name for m in state.selected_maps[state.current_round - 1 :]]


def _pool(state: TournamentState, side: Side) -> Tuple[Player, ...]:
    if side == MY_SIDE:
        return state.my_available_players
    return state.opponent_available_players


def _facing_defender(state: TournamentState, side: Side) -> Optional[Player]:
    # My attackers face the opponent's defender and vice versa
    return state.opponent_defender if side == MY_SIDE else state.my_defender


def matchup_score_vs_defender(
    state: TournamentState, side: Side, player: Player
) -> Optional[int]:
    """Matchup score of ``player`` against the defender they would face.

    The matrix is the one stored on the opponent team. It is indexed by
    my list first, so for opponent players the lookup is reversed.
    """
    matrix = state.opponent_team.matchup_matrix
    defender = _facing_defender(state, side)
    if not matrix or defender is None:
        return None
    if side == MY_SIDE:
        return get_matchup_score(matrix, player.list_key, defender.list_key)
    return get_matchup_score(matrix, defender.list_key, player.list_key)


def matchup_scores_vs_defender(
    state: TournamentState, side: Side
) -> List[Optional[int]]:
    """Matchup scores of every available player on ``side``."""
    return [matchup_score_vs_defender(state, side, p) for p in _pool(state, side)]


# ========== Per-player annotation ==========


@dataclass(frozen=True)
class PlayerAnnotation:
    """Everything worth showing next to a player in the current state.

    Attributes:
        player: The annotated player
        side: Roster the player belongs to
        score: Score on the current battleplan
        is_available: Player has not been paired yet
        is_best_battleplan: Current battleplan is (tied) best for the player
        last_chance_threshold: 6/5/4 if this is the last chance at that score
        matchup_score: Score against the defender the player would face
        medal_rank: 1/2/3 rank of ``matchup_score`` on the player's side
    """

    player: Player
    side: Side
    score: Optional[int] = None
    is_available: bool = True
    is_best_battleplan: bool = False
    last_chance_threshold: Optional[LastChanceThreshold] = None
    matchup_score: Optional[int] = None
    medal_rank: Optional[MedalRank] = None

    @property
    def medal(self) -> Optional[str]:
        return medal_name(self.medal_rank)


def annotate_player(
    state: TournamentState,
    side: Side,
    player: Player,
    all_matchup_scores: Optional[Sequence[Optional[int]]] = None,
) -> PlayerAnnotation:
    """Compute the annotation of one player.

    The star is shown while defenders or attackers are being picked, the
    medal only while attackers are offered or chosen, and paired players
    get no star, last-chance or medal at all.

    Args:
        state: Current tournament state
        side: Roster the player belongs to
        player: Player to annotate
        all_matchup_scores: Precomputed ``matchup_scores_vs_defender`` for
            the side; computed when omitted

    Returns:
        PlayerAnnotation for the player
    """
    current = current_battleplan_name(state)
    paired = state.is_paired(player.id)
    annotation = PlayerAnnotation(
        player=player,
        side=side,
        score=get_player_battleplan_score(player, current),
        is_available=not paired,
    )
    if paired:
        return annotation

    in_defender_phase = state.phase in DEFENDER_PHASES
    in_attacker_phase = state.phase in ATTACKER_PHASES

    is_best = False
    if (in_defender_phase or in_attacker_phase) and player.has_scores:
        is_best = is_best_battleplan_for_player(
            player, current, selected_battleplan_names(state)
        )

    matchup_score = None
    medal_rank = None
    if in_attacker_phase:
        matchup_score = matchup_score_vs_defender(state, side, player)
        if all_matchup_scores is None:
            all_matchup_scores = matchup_scores_vs_defender(state, side)
        medal_rank = get_medal_rank(matchup_score, all_matchup_scores)

    return PlayerAnnotation(
        player=player,
        side=side,
        score=annotation.score,
        is_available=True,
        is_best_battleplan=is_best,
        last_chance_threshold=get_last_chance_threshold(
            player, current, remaining_battleplan_names(state)
        ),
        matchup_score=matchup_score,
        medal_rank=medal_rank,
    )


def annotate_team(state: TournamentState, side: Side) -> List[PlayerAnnotation]:
    """Annotate every player on a roster, in roster order."""
    team = state.my_team if side == MY_SIDE else state.opponent_team
    all_scores = (
        matchup_scores_vs_defender(state, side)
        if state.phase in ATTACKER_PHASES
        else []
    )
    return [annotate_player(state, side, p, all_scores) for p in team.players]


# ========== Roster detail views ==========


def matchup_scores_for_list(
    state: TournamentState, my_list_key: str
) -> List[Tuple[Player, Optional[int]]]:
    """Scores of one of my lists against every opponent player.

    Args:
        state: Current tournament state
        my_list_key: ``list_key`` of the friendly player to look at

    Returns:
        ``(opponent player, score)`` pairs in roster order; the score is
        None where the matrix has no entry
    """
    matrix = state.opponent_team.matchup_matrix
    return [
        (player, get_matchup_score(matrix, my_list_key, player.list_key))
        for player in state.opponent_team.players
    ]


def battleplan_scores_by_round(
    state: TournamentState, player: Player, remaining_only: bool = False
) -> List[Tuple[int, str, Optional[int]]]:
    """The player's score on each selected battleplan, in round order.

    Args:
        state: Current tournament state
        player: Player to look up
        remaining_only: Skip rounds before the current one

    Returns:
        ``(round number, battleplan name, score)`` triples
    """
    first_round = state.current_round if remaining_only else 1
    return [
        (
            round_number,
            game_map.name,
            get_player_battleplan_score(player, game_map.name),
        )
        for round_number, game_map in enumerate(state.selected_maps, 1)
        if round_number >= first_round
    ]
