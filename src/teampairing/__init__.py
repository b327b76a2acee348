"""Team Pairing: defender/attacker pairing for two-team, four-round tournaments."""

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

from teampairing.models import GameMap, Pairing, Phase, Player, Team, TournamentState
from teampairing.pairing import (
    advance_to_next_round,
    apply_selection,
    create_tournament,
    get_phase_description,
    i_choose_attacker,
    opponent_chooses_attacker,
    set_my_attackers,
    set_my_defender,
    set_opponent_attackers,
    set_opponent_defender,
)
from teampairing.storage import TournamentStorage

__version__ = "0.1.0"

__all__ = [
    "GameMap",
    "Pairing",
    "Phase",
    "Player",
    "Team",
    "TournamentState",
    "TournamentStorage",
    "advance_to_next_round",
    "apply_selection",
    "create_tournament",
    "get_phase_description",
    "i_choose_attacker",
    "opponent_chooses_attacker",
    "set_my_attackers",
    "set_my_defender",
    "set_opponent_attackers",
    "set_opponent_defender",
]
