import pytest

from conftest import by_name, play_round
from teampairing.models import Phase
from teampairing.pairing import (
    advance_to_next_round,
    i_choose_attacker,
    round3_preview,
    set_my_attackers,
    set_my_defender,
    set_opponent_attackers,
    set_opponent_defender,
)


def _names(players):
    return [p.name for p in players]


@pytest.fixture
def round_three(state):
    state = play_round(state, "M0", "O0", ["M1", "M2"], ["O1", "O2"], "O1", "M1")
    state = advance_to_next_round(state)
    state = play_round(state, "M2", "O2", ["M3", "M4"], ["O3", "O4"], "O3", "M3")
    state = advance_to_next_round(state)
    assert state.current_round == 3
    return state


@pytest.fixture
def round_three_i_choose(round_three):
    my_team, opp_team = round_three.my_team, round_three.opponent_team
    state = set_my_defender(round_three, by_name(my_team, "M4"))
    state = set_opponent_defender(state, by_name(opp_team, "O4"))
    state = set_my_attackers(state, [by_name(my_team, "M5"), by_name(my_team, "M6")])
    state = set_opponent_attackers(
        state, [by_name(opp_team, "O5"), by_name(opp_team, "O6")]
    )
    assert state.phase == Phase.I_CHOOSE
    return state


def test_no_preview_outside_round_three(state):
    assert round3_preview(state) is None


def test_preview_before_choices(round_three):
    preview = round3_preview(round_three)

    assert preview is not None
    assert preview.current_map.name == "Lifecycle"
    assert preview.final_map.name == "Noxious Nexus"
    assert _names(preview.my_uncommitted) == ["M4", "M5", "M6", "M7"]
    assert preview.outcomes == ()


def test_preview_while_i_choose(round_three_i_choose):
    preview = round3_preview(round_three_i_choose)

    assert _names(preview.my_uncommitted) == ["M7"]
    assert _names(preview.opponent_uncommitted) == ["O7"]
    assert [o.chosen.name for o in preview.outcomes] == ["O5", "O6"]

    first = preview.outcomes[0]
    assert _names(first.opponent_final) == ["O6", "O7"]
    # My side stays open until the opponent picks
    assert not first.is_resolved
    assert first.final_pairings() == []


def test_preview_while_opponent_chooses(round_three_i_choose):
    state = i_choose_attacker(
        round_three_i_choose, by_name(round_three_i_choose.opponent_team, "O5")
    )
    preview = round3_preview(state)

    assert preview.phase == Phase.OPPONENT_CHOOSES
    outcomes = {o.chosen.name: o for o in preview.outcomes}
    assert set(outcomes) == {"M5", "M6"}

    pairs = [(m.name, o.name) for m, o in outcomes["M5"].final_pairings()]
    assert pairs == [("M6", "O6"), ("M7", "O7")]
    pairs = [(m.name, o.name) for m, o in outcomes["M6"].final_pairings()]
    assert pairs == [("M5", "O6"), ("M7", "O7")]


def test_no_preview_once_completed(round_three):
    state = play_round(
        round_three, "M4", "O4", ["M5", "M6"], ["O5", "O6"], "O5", "M5"
    )
    assert state.status == "completed"
    assert round3_preview(state) is None
