import dataclasses

import pytest

from conftest import by_name, play_round
from teampairing.constants import STATUS_COMPLETED, STATUS_IN_PROGRESS
from teampairing.exceptions import TournamentSetupException
from teampairing.models import Phase
from teampairing.pairing import (
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

ROUND_1 = ("M0", "O0", ["M1", "M2"], ["O1", "O2"], "O1", "M1")
ROUND_2 = ("M2", "O2", ["M3", "M4"], ["O3", "O4"], "O3", "M3")
ROUND_3 = ("M4", "O4", ["M5", "M6"], ["O5", "O6"], "O5", "M5")


def _names(players):
    return [p.name for p in players]


def test_initial_state(state, my_team, opponent_team):
    assert state.current_round == 1
    assert state.phase == Phase.SELECT_MY_DEFENDER
    assert state.status == STATUS_IN_PROGRESS
    assert state.my_available_players == my_team.players
    assert state.opponent_available_players == opponent_team.players
    assert state.pairings == ()
    assert state.current_map.name == "Passing Seasons"


def test_create_tournament_requires_four_distinct_maps(my_team, opponent_team, maps):
    with pytest.raises(TournamentSetupException):
        create_tournament(my_team, opponent_team, maps[:3])
    with pytest.raises(TournamentSetupException):
        create_tournament(my_team, opponent_team, maps[:3] + [maps[0]])


def test_all_maps_defaults_to_selection(state, maps):
    assert state.all_maps == tuple(maps)


def test_defender_selection_is_commutative(state, my_team, opponent_team):
    me, them = by_name(my_team, "M0"), by_name(opponent_team, "O0")

    mine_first = set_opponent_defender(set_my_defender(state, me), them)
    theirs_first = set_my_defender(set_opponent_defender(state, them), me)

    assert mine_first.phase == Phase.OFFER_MY_ATTACKERS
    assert theirs_first.phase == Phase.OFFER_MY_ATTACKERS
    assert mine_first.my_defender == theirs_first.my_defender == me
    assert mine_first.opponent_defender == theirs_first.opponent_defender == them


def test_single_defender_waits_for_sibling(state, my_team, opponent_team):
    after_mine = set_my_defender(state, by_name(my_team, "M0"))
    assert after_mine.phase == Phase.SELECT_OPPONENT_DEFENDER

    after_theirs = set_opponent_defender(state, by_name(opponent_team, "O0"))
    assert after_theirs.phase == Phase.SELECT_MY_DEFENDER


def test_transitions_do_not_mutate_input(state, my_team):
    snapshot = state.to_dict()
    set_my_defender(state, by_name(my_team, "M0"))
    assert state.to_dict() == snapshot


def test_attackers_flow_to_i_choose(state, my_team, opponent_team):
    state = set_my_defender(state, by_name(my_team, "M0"))
    state = set_opponent_defender(state, by_name(opponent_team, "O0"))
    state = set_my_attackers(state, [by_name(my_team, "M1"), by_name(my_team, "M2")])
    assert state.phase == Phase.OFFER_OPPONENT_ATTACKERS
    state = set_opponent_attackers(
        state, [by_name(opponent_team, "O1"), by_name(opponent_team, "O2")]
    )
    assert state.phase == Phase.I_CHOOSE
    assert _names(state.my_attackers) == ["M1", "M2"]
    assert _names(state.opponent_attackers) == ["O1", "O2"]


def test_attackers_must_be_two_distinct_non_defenders(state, my_team, opponent_team):
    state = set_my_defender(state, by_name(my_team, "M0"))
    state = set_opponent_defender(state, by_name(opponent_team, "O0"))
    m0, m1 = by_name(my_team, "M0"), by_name(my_team, "M1")

    assert set_my_attackers(state, [m1, m1]) is state
    assert set_my_attackers(state, [m0, m1]) is state
    assert set_my_attackers(state, [m1]) is state
    assert set_my_attackers(state, [by_name(opponent_team, "O1"), m1]) is state


def test_i_choose_creates_pairing(state, my_team, opponent_team):
    state = set_my_defender(state, by_name(my_team, "M0"))
    state = set_opponent_defender(state, by_name(opponent_team, "O0"))
    state = set_my_attackers(state, [by_name(my_team, "M1"), by_name(my_team, "M2")])
    state = set_opponent_attackers(
        state, [by_name(opponent_team, "O1"), by_name(opponent_team, "O2")]
    )

    state = i_choose_attacker(state, by_name(opponent_team, "O2"))

    assert state.phase == Phase.OPPONENT_CHOOSES
    (pairing,) = state.pairings
    assert pairing.my_player.name == "M0"
    assert pairing.opponent_player.name == "O2"
    assert pairing.round == 1
    assert pairing.map_name == "Passing Seasons"
    assert not pairing.is_auto_paired
    assert state.my_defender is None
    assert state.opponent_attackers is None
    assert "M0" not in _names(state.my_available_players)
    assert "O2" not in _names(state.opponent_available_players)
    assert len(state.my_available_players) == 7


def test_i_choose_rejects_player_not_offered(state, my_team, opponent_team):
    state = set_my_defender(state, by_name(my_team, "M0"))
    state = set_opponent_defender(state, by_name(opponent_team, "O0"))
    state = set_my_attackers(state, [by_name(my_team, "M1"), by_name(my_team, "M2")])
    state = set_opponent_attackers(
        state, [by_name(opponent_team, "O1"), by_name(opponent_team, "O2")]
    )

    assert i_choose_attacker(state, by_name(opponent_team, "O5")) is state


def test_opponent_choice_completes_round(state):
    state = play_round(state, *ROUND_1)

    assert state.phase == Phase.ROUND_COMPLETE
    assert len(state.pairings) == 2
    second = state.pairings[1]
    assert second.my_player.name == "M1"
    assert second.opponent_player.name == "O0"
    assert state.my_attackers is None
    assert state.opponent_defender is None


def test_out_of_phase_calls_are_ignored(state, my_team, opponent_team):
    assert set_my_attackers(state, list(my_team.players[:2])) is state
    assert i_choose_attacker(state, opponent_team.players[0]) is state
    assert opponent_chooses_attacker(state, my_team.players[0]) is state
    assert advance_to_next_round(state) is state
    assert finish_tournament(state) is state


def test_paired_player_cannot_defend_again(state, my_team):
    state = advance_to_next_round(play_round(state, *ROUND_1))
    assert set_my_defender(state, by_name(my_team, "M0")) is state


def test_advance_resets_round_selections(state):
    state = advance_to_next_round(play_round(state, *ROUND_1))

    assert state.current_round == 2
    assert state.phase == Phase.SELECT_MY_DEFENDER
    assert state.my_defender is None
    assert state.opponent_defender is None
    assert state.my_attackers is None
    assert state.opponent_attackers is None
    assert state.current_map.name == "Roiling Roots"


def test_pools_shrink_by_two_per_round_and_four_in_round_three(state):
    sizes = []
    for round_moves in (ROUND_1, ROUND_2):
        state = play_round(state, *round_moves)
        sizes.append(len(state.my_available_players))
        state = advance_to_next_round(state)
    state = play_round(state, *ROUND_3)
    sizes.append(len(state.my_available_players))

    assert sizes == [6, 4, 0]
    assert len(state.opponent_available_players) == 0


def test_full_tournament_auto_pairs_final_round(state):
    for round_moves in (ROUND_1, ROUND_2):
        state = advance_to_next_round(play_round(state, *round_moves))
    state = play_round(state, *ROUND_3)

    assert state.phase == Phase.TOURNAMENT_COMPLETE
    assert state.status == STATUS_COMPLETED
    assert len(state.pairings) == 8

    auto = [p for p in state.pairings if p.is_auto_paired]
    assert [(p.my_player.name, p.opponent_player.name) for p in auto] == [
        ("M6", "O6"),
        ("M7", "O7"),
    ]
    assert all(p.round == 4 and p.map_name == "Noxious Nexus" for p in auto)


def test_every_player_paired_exactly_once(state):
    for round_moves in (ROUND_1, ROUND_2):
        state = advance_to_next_round(play_round(state, *round_moves))
    state = play_round(state, *ROUND_3)

    my_ids = [p.my_player.id for p in state.pairings]
    opponent_ids = [p.opponent_player.id for p in state.pairings]
    assert sorted(my_ids) == sorted(p.id for p in state.my_team.players)
    assert sorted(opponent_ids) == sorted(p.id for p in state.opponent_team.players)


def test_round_three_resolution_from_constructed_state(state, my_team, opponent_team):
    my_left = tuple(p for p in my_team.players if p.name in ("M5", "M6", "M7"))
    opp_left = tuple(p for p in opponent_team.players if p.name in ("O4", "O6", "O7"))
    constructed = dataclasses.replace(
        state,
        current_round=3,
        phase=Phase.OPPONENT_CHOOSES,
        my_attackers=(by_name(my_team, "M5"), by_name(my_team, "M6")),
        opponent_defender=by_name(opponent_team, "O4"),
        my_available_players=my_left,
        opponent_available_players=opp_left,
    )

    result = opponent_chooses_attacker(constructed, by_name(my_team, "M6"))

    assert len(result.pairings) == len(constructed.pairings) + 3
    explicit, first_auto, second_auto = result.pairings[-3:]
    assert (explicit.my_player.name, explicit.opponent_player.name) == ("M6", "O4")
    assert (first_auto.my_player.name, first_auto.opponent_player.name) == ("M5", "O6")
    assert (second_auto.my_player.name, second_auto.opponent_player.name) == (
        "M7",
        "O7",
    )
    assert result.my_available_players == ()
    assert result.opponent_available_players == ()
    assert result.status == STATUS_COMPLETED


def test_advance_after_round_four_completes(state, my_team, opponent_team):
    finished_round = dataclasses.replace(
        state,
        current_round=4,
        phase=Phase.ROUND_COMPLETE,
        my_available_players=(),
        opponent_available_players=(),
    )
    result = advance_to_next_round(finished_round)
    assert result.phase == Phase.TOURNAMENT_COMPLETE
    assert result.status == STATUS_COMPLETED


def test_phase_descriptions_cover_every_phase():
    for phase in Phase:
        assert get_phase_description(phase)
    assert get_phase_description(Phase.SELECT_MY_DEFENDER) == "Select your defender"
    assert get_phase_description(Phase.TOURNAMENT_COMPLETE) == "Tournament complete!"


def test_phase_description_accepts_raw_values():
    assert get_phase_description("i-choose") == get_phase_description(Phase.I_CHOOSE)
    assert get_phase_description("warm-up") == "warm-up"


@pytest.mark.parametrize(
    "phase, count, side",
    [
        (Phase.SELECT_MY_DEFENDER, 1, "my"),
        (Phase.SELECT_OPPONENT_DEFENDER, 1, "opponent"),
        (Phase.OFFER_MY_ATTACKERS, 2, "my"),
        (Phase.OFFER_OPPONENT_ATTACKERS, 2, "opponent"),
        (Phase.I_CHOOSE, 1, "opponent"),
        (Phase.OPPONENT_CHOOSES, 1, "my"),
        (Phase.ROUND_COMPLETE, 0, None),
        (Phase.TOURNAMENT_COMPLETE, 0, None),
    ],
)
def test_selection_rules(phase, count, side):
    assert required_selection_count(phase) == count
    assert selection_side(phase) == side


def test_selectable_players_follow_phase(state, my_team, opponent_team):
    assert len(selectable_players(state, "my")) == 8
    assert selectable_players(state, "opponent") == ()

    state = set_my_defender(state, by_name(my_team, "M0"))
    state = set_opponent_defender(state, by_name(opponent_team, "O0"))
    offer = selectable_players(state, "my")
    assert "M0" not in _names(offer)
    assert len(offer) == 7

    state = set_my_attackers(state, [by_name(my_team, "M1"), by_name(my_team, "M2")])
    state = set_opponent_attackers(
        state, [by_name(opponent_team, "O1"), by_name(opponent_team, "O2")]
    )
    assert _names(selectable_players(state, "opponent")) == ["O1", "O2"]


def test_apply_selection_checks_count(state, my_team):
    assert apply_selection(state, []) is state
    assert apply_selection(state, list(my_team.players[:2])) is state

    result = apply_selection(state, [by_name(my_team, "M3")])
    assert result.my_defender.name == "M3"


def test_apply_selection_drives_whole_tournament(state):
    steps = [
        lambda s: [s.my_available_players[0]],
        lambda s: [s.opponent_available_players[0]],
        lambda s: [s.my_available_players[1], s.my_available_players[2]],
        lambda s: [s.opponent_available_players[1], s.opponent_available_players[2]],
        lambda s: [s.opponent_attackers[0]],
        lambda s: [s.my_attackers[0]],
        lambda s: [],
    ]
    for _ in range(3):
        for step in steps:
            # Round 3 ends the tournament before the round-advance step
            if state.phase == Phase.TOURNAMENT_COMPLETE:
                break
            new_state = apply_selection(state, step(state))
            assert new_state is not state
            state = new_state

    assert state.status == STATUS_COMPLETED
    assert len(state.pairings) == 8


def test_pairings_by_round(state):
    state = play_round(state, *ROUND_1)
    grouped = pairings_by_round(state)

    assert [(r, m.name) for r, m, _ in grouped] == [
        (1, "Passing Seasons"),
        (2, "Roiling Roots"),
        (3, "Lifecycle"),
        (4, "Noxious Nexus"),
    ]
    assert len(grouped[0][2]) == 2
    assert grouped[1][2] == ()


def test_state_survives_serialization(state):
    state = play_round(state, *ROUND_1)
    restored = type(state).from_dict(state.to_dict())

    assert restored.phase == state.phase
    assert restored.current_round == state.current_round
    assert _names(restored.my_available_players) == _names(state.my_available_players)
    assert [p.id for p in restored.pairings] == [p.id for p in state.pairings]
