import pytest

from conftest import by_name, make_team
from teampairing.models import GameMap, Pairing, Player, Team
from teampairing.pairing import create_tournament, set_my_defender


def test_player_keeps_own_score_copy():
    scores = {"Lifecycle": 4}
    player = Player.create("Ann", "Stormcast", battleplan_scores=scores)
    scores["Lifecycle"] = 1

    assert player.score_for("Lifecycle") == 4
    assert player.score_for("Roiling Roots") is None


def test_list_key_falls_back_to_name():
    assert Player.create("Ann", "Stormcast", "Ann SCE").list_key == "Ann SCE"
    assert Player.create("Ann", "Stormcast").list_key == "Ann"


def test_find_player_prefers_names():
    ann = Player.create("Ann", "Skaven")
    skaven = Player.create("Skaven", "Seraphon", list_name="Big Lizards")
    team = Team.create("Hammers", [ann, skaven])

    assert team.find_player("skaven") == skaven
    assert team.find_player(" big lizards ") == skaven
    assert team.find_player("Seraphon") == skaven
    assert team.find_player("Nobody") is None
    assert team.get_player(ann.id) == ann


def test_team_dict_round_trip():
    team = Team.create(
        "Anvils",
        [Player.create("Bob", "Skaven", battleplan_scores={"Lifecycle": 5})],
        matchup_matrix={"Ann SCE": {"Bob": 3}},
    )
    loaded = Team.from_dict(team.to_dict())

    assert loaded == team
    assert loaded.matchup_matrix == {"Ann SCE": {"Bob": 3}}
    assert loaded.players[0].battleplan_scores == {"Lifecycle": 5}


def test_map_dict_omits_unset_details():
    game_map = GameMap.create("Lifecycle", twist="Growth")
    data = game_map.to_dict()

    assert data == {"id": game_map.id, "name": "Lifecycle", "twist": "Growth"}
    assert GameMap.from_dict(data) == game_map


def test_pairing_involves_both_players():
    ann = Player.create("Ann", "Stormcast")
    bob = Player.create("Bob", "Skaven")
    pairing = Pairing.create(GameMap.create("Lifecycle"), 2, ann, bob)

    assert pairing.involves(ann.id)
    assert pairing.involves(bob.id)
    assert not pairing.involves("someone")
    assert not pairing.is_auto_paired
    assert Pairing.from_dict(pairing.to_dict()) == pairing


def test_scores_and_matrix_are_read_only():
    player = Player.create("Ann", "Stormcast", battleplan_scores={"Lifecycle": 4})
    team = Team.create("Anvils", [player], matchup_matrix={"Ann": {"Bob": 3}})

    with pytest.raises(TypeError):
        player.battleplan_scores["Lifecycle"] = 6
    with pytest.raises(TypeError):
        team.matchup_matrix["Ann"] = {}
    with pytest.raises(TypeError):
        team.matchup_matrix["Ann"]["Bob"] = 6


def test_later_snapshot_cannot_change_earlier_one(maps):
    matrix = {"M1 list": {"O0 list": 2}}
    state = create_tournament(
        make_team("M", "Hammers"), make_team("O", "Anvils", matrix), maps
    )
    after = set_my_defender(state, by_name(state.my_team, "M0"))

    with pytest.raises(TypeError):
        after.my_defender.battleplan_scores["Passing Seasons"] = 6
    with pytest.raises(TypeError):
        after.opponent_team.matchup_matrix["M1 list"]["O0 list"] = 6

    assert state.my_available_players[0].battleplan_scores == {}
    assert state.opponent_team.matchup_matrix == {"M1 list": {"O0 list": 2}}
