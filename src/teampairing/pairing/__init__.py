"""Pairing state machine, annotations and round-3 preview."""

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

from teampairing.pairing.annotations import (
    PlayerAnnotation,
    annotate_player,
    annotate_team,
    battleplan_scores_by_round,
    current_battleplan_name,
    get_last_chance_threshold,
    get_matchup_score,
    get_medal_rank,
    get_player_battleplan_score,
    is_best_battleplan_for_player,
    is_good_score,
    is_last_good_battleplan,
    matchup_score_vs_defender,
    matchup_scores_for_list,
    matchup_scores_vs_defender,
    remaining_battleplan_names,
    selected_battleplan_names,
)
from teampairing.pairing.preview import ChoiceOutcome, Round3Preview, round3_preview
from teampairing.pairing.state_machine import (
    advance_to_next_round,
    apply_selection,
    create_tournament,
    finish_tournament,
    get_phase_description,
    i_choose_attacker,
    opponent_chooses_attacker,
    pairings_by_round,
    required_selection_count,
    selectable_players,
    selection_side,
    set_my_attackers,
    set_my_defender,
    set_opponent_attackers,
    set_opponent_defender,
)

__all__ = [
    "ChoiceOutcome",
    "PlayerAnnotation",
    "Round3Preview",
    "advance_to_next_round",
    "annotate_player",
    "annotate_team",
    "apply_selection",
    "battleplan_scores_by_round",
    "create_tournament",
    "current_battleplan_name",
    "finish_tournament",
    "get_last_chance_threshold",
    "get_matchup_score",
    "get_medal_rank",
    "get_phase_description",
    "get_player_battleplan_score",
    "i_choose_attacker",
    "is_best_battleplan_for_player",
    "is_good_score",
    "is_last_good_battleplan",
    "matchup_score_vs_defender",
    "matchup_scores_for_list",
    "matchup_scores_vs_defender",
    "opponent_chooses_attacker",
    "pairings_by_round",
    "remaining_battleplan_names",
    "required_selection_count",
    "round3_preview",
    "selectable_players",
    "selected_battleplan_names",
    "selection_side",
    "set_my_attackers",
    "set_my_defender",
    "set_opponent_attackers",
    "set_opponent_defender",
]
