"""Roster and battleplan file import/export.

Roster files are JSON documents of the form::

    {
        "teamName": "Hammers",
        "players": [
            {"name": "Ann", "army": "Stormcast", "listName": "Ann SCE",
             "battleplanScores": {"Passing Seasons": 5}},
            ...
        ],
        "matchupMatrix": {"Ann SCE": {"Bob Skaven": 4}}
    }

Parsing fails closed: any problem raises ``InvalidRosterException`` and no
partially built team is ever returned.
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

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from teampairing.constants import TEAM_SIZE
from teampairing.exceptions import (
    FileLoadException,
    FileSaveException,
    InvalidMapsFileException,
    InvalidRosterException,
)
from teampairing.models import GameMap, Player, Team
from teampairing.type_hints import JsonDict
from teampairing.utils import setup_logger
from teampairing.utils.validation import (
    validate_score,
    validate_team_size,
    validate_text,
)

logger = setup_logger(__name__)

PathLike = Union[str, Path]


# ========== Field checks ==========


def _require_text(value: Any, field_name: str, required: bool = True) -> Any:
    result = validate_text(value, field_name, required=required)
    if not result:
        raise InvalidRosterException(result.error_message)
    return result.sanitized_value


def _parse_score_table(value: Any, field_name: str) -> Dict[str, int]:
    """Validate a ``name -> score`` mapping."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidRosterException(f"{field_name} must be an object")

    scores = {}
    for key, score in value.items():
        result = validate_score(score, f"{field_name}[{key!r}]")
        if not result:
            raise InvalidRosterException(result.error_message)
        scores[key] = result.sanitized_value
    return scores


def _parse_matchup_matrix(value: Any) -> Dict[str, Dict[str, int]]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidRosterException("matchupMatrix must be an object")
    return {
        my_list: _parse_score_table(row, f"matchupMatrix[{my_list!r}]")
        for my_list, row in value.items()
    }


def _parse_player(data: Any, index: int) -> Player:
    label = f"players[{index}]"
    if not isinstance(data, dict):
        raise InvalidRosterException(f"{label} must be an object")

    return Player.create(
        name=_require_text(data.get("name"), f"{label}.name"),
        army=_require_text(data.get("army"), f"{label}.army"),
        list_name=_require_text(
            data.get("listName"), f"{label}.listName", required=False
        ),
        battleplan_scores=_parse_score_table(
            data.get("battleplanScores"), f"{label}.battleplanScores"
        ),
    )


# ========== Rosters ==========


def parse_roster(data: Any, team_size: int = TEAM_SIZE) -> Team:
    """Build a team from roster file data.

    Args:
        data: Decoded JSON roster
        team_size: Exact number of players required

    Returns:
        A new Team with generated IDs

    Raises:
        InvalidRosterException: If any field is missing, mistyped or out of range
    """
    if not isinstance(data, dict):
        raise InvalidRosterException("Invalid roster file format")

    team_name = _require_text(data.get("teamName"), "teamName")
    players_data = data.get("players")
    if not isinstance(players_data, list):
        raise InvalidRosterException("Invalid roster file format: players must be a list")

    size_check = validate_team_size(len(players_data), team_size)
    if not size_check:
        raise InvalidRosterException(size_check.error_message)

    players = [_parse_player(p, i) for i, p in enumerate(players_data)]
    team = Team.create(
        name=team_name,
        players=players,
        matchup_matrix=_parse_matchup_matrix(data.get("matchupMatrix")),
    )
    logger.info(
        "Loaded roster %s (%d players%s)",
        team.name,
        len(team.players),
        ", with matchup matrix" if team.has_matchup_matrix else "",
    )
    return team


def roster_to_dict(team: Team) -> JsonDict:
    """Export a team in roster file form.

    Empty battleplan scores and an empty matchup matrix are left out.
    """
    players: List[Dict[str, Any]] = []
    for player in team.players:
        entry: Dict[str, Any] = {"name": player.name, "army": player.army}
        if player.list_name:
            entry["listName"] = player.list_name
        if player.battleplan_scores:
            entry["battleplanScores"] = dict(player.battleplan_scores)
        players.append(entry)

    data: JsonDict = {"teamName": team.name, "players": players}
    if team.matchup_matrix:
        data["matchupMatrix"] = {
            mine: dict(row) for mine, row in team.matchup_matrix.items()
        }
    return data


def _read_json(path: PathLike) -> Any:
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise FileLoadException(f"Cannot read {path}: {e}") from e


def _write_json(path: PathLike, data: Any) -> None:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        raise FileSaveException(f"Cannot write {path}: {e}") from e


def load_roster(path: PathLike, team_size: int = TEAM_SIZE) -> Team:
    """Load and validate a roster file.

    Raises:
        FileLoadException: If the file cannot be read or is not JSON
        InvalidRosterException: If the content is not a valid roster
    """
    return parse_roster(_read_json(path), team_size)


def save_roster(team: Team, path: PathLike) -> Path:
    """Write a team to a roster file and return the path written."""
    _write_json(path, roster_to_dict(team))
    logger.info("Saved roster %s to %s", team.name, path)
    return Path(path)


# ========== Battleplans ==========


def parse_maps_file(data: Any) -> Tuple[GameMap, ...]:
    """Build battleplans from a ``{"maps": [...]}`` document.

    Raises:
        InvalidMapsFileException: If the document or any map is malformed
    """
    if not isinstance(data, dict) or not isinstance(data.get("maps"), list):
        raise InvalidMapsFileException("Invalid maps file format: expected a maps list")

    maps = []
    seen = set()
    for index, entry in enumerate(data["maps"]):
        if not isinstance(entry, dict):
            raise InvalidMapsFileException(f"maps[{index}] must be an object")
        try:
            name = _require_text(entry.get("name"), f"maps[{index}].name")
            details = {
                attribute: _require_text(entry.get(key), f"maps[{index}].{key}", False)
                for attribute, key in (
                    ("description", "description"),
                    ("twist", "twist"),
                    ("scoring", "scoring"),
                    ("layout_image1", "layoutImage1"),
                    ("layout_image2", "layoutImage2"),
                )
            }
        except InvalidRosterException as e:
            raise InvalidMapsFileException(str(e)) from e
        if name in seen:
            raise InvalidMapsFileException(f"Duplicate battleplan name: {name}")
        seen.add(name)
        maps.append(GameMap.create(name, **details))
    return tuple(maps)


def maps_to_dict(maps: Tuple[GameMap, ...]) -> JsonDict:
    """Export battleplans in maps file form (without IDs)."""
    exported = []
    for game_map in maps:
        entry = game_map.to_dict()
        entry.pop("id", None)
        exported.append(entry)
    return {"maps": exported}


def load_maps(path: PathLike) -> Tuple[GameMap, ...]:
    """Load and validate a maps file."""
    maps = parse_maps_file(_read_json(path))
    logger.info("Loaded %d battleplans from %s", len(maps), path)
    return maps
