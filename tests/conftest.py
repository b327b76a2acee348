"""Shared fixtures for the Team Pairing test suite."""

import pytest

from teampairing.models import GameMap, Player, Team
from teampairing.pairing import (
    create_tournament,
    i_choose_attacker,
    opponent_chooses_attacker,
    set_my_attackers,
    set_my_defender,
    set_opponent_attackers,
    set_opponent_defender,
)

MAP_NAMES = ["Passing Seasons", "Roiling Roots", "Lifecycle", "Noxious Nexus"]


def make_team(prefix, name, matchup_matrix=None):
    players = [
        Player.create(
            name=f"{prefix}{i}", army=f"Army {prefix}{i}", list_name=f"{prefix}{i} list"
        )
        for i in range(8)
    ]
    return Team.create(name=name, players=players, matchup_matrix=matchup_matrix)


def by_name(team, name):
    player = team.find_player(name)
    assert player is not None, name
    return player


def play_round(state, my_def, opp_def, my_atk, opp_atk, i_pick, opp_pick):
    """Drive one full round by player name, returning the state after it."""
    my_team, opp_team = state.my_team, state.opponent_team
    state = set_my_defender(state, by_name(my_team, my_def))
    state = set_opponent_defender(state, by_name(opp_team, opp_def))
    state = set_my_attackers(state, [by_name(my_team, n) for n in my_atk])
    state = set_opponent_attackers(state, [by_name(opp_team, n) for n in opp_atk])
    state = i_choose_attacker(state, by_name(opp_team, i_pick))
    state = opponent_chooses_attacker(state, by_name(my_team, opp_pick))
    return state


@pytest.fixture
def maps():
    return [GameMap.create(name) for name in MAP_NAMES]


@pytest.fixture
def my_team():
    return make_team("M", "Hammers")


@pytest.fixture
def opponent_team():
    return make_team("O", "Anvils")


@pytest.fixture
def state(my_team, opponent_team, maps):
    return create_tournament(my_team, opponent_team, maps)
