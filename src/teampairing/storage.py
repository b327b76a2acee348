"""File-based persistence for tournament state, undo history, teams and maps.

The pairing core never touches storage. Callers hand every new state to
``TournamentStorage.save_state`` (with ``add_to_history=True`` for
transitions) and step back with ``pop_history``.
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
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from dateutil import parser as date_parser

from teampairing.constants import (
    CUSTOM_MAPS_FILE,
    DEFAULT_DATA_DIR,
    HISTORY_FILE,
    MAX_HISTORY_ENTRIES,
    MY_TEAM_FILE,
    OPPONENT_TEAM_FILE,
    STATE_FILE,
)
from teampairing.exceptions import FileSaveException
from teampairing.models import GameMap, Team, TournamentState
from teampairing.utils import setup_logger

logger = setup_logger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class TournamentStorage:
    """Stores tournament data as JSON files in one directory.

    Attributes:
        directory: Directory holding the JSON files
        max_history: Maximum number of undo entries kept
    """

    def __init__(
        self,
        directory: Union[str, Path] = DEFAULT_DATA_DIR,
        max_history: int = MAX_HISTORY_ENTRIES,
    ):
        self.directory = Path(directory)
        self.max_history = max_history

    # ========== Low-level file access ==========

    def _path(self, filename: str) -> Path:
        return self.directory / filename

    def _read(self, filename: str) -> Optional[Any]:
        path = self._path(filename)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable %s: %s", path, e)
            return None

    def _write(self, filename: str, data: Any) -> None:
        path = self._path(filename)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            raise FileSaveException(f"Cannot write {path}: {e}") from e

    def _remove(self, filename: str) -> None:
        self._path(filename).unlink(missing_ok=True)

    # ========== Tournament state ==========

    def save_state(self, state: TournamentState, add_to_history: bool = False) -> None:
        """Store ``state`` as the current tournament state.

        Args:
            state: New state to store
            add_to_history: Push the previously stored state onto the
                undo history first
        """
        if add_to_history:
            previous = self._read(STATE_FILE)
            if previous is not None:
                self._push_history(previous)
        self._write(STATE_FILE, {"savedAt": _timestamp(), "state": state.to_dict()})
        logger.debug(
            "Saved state: round %s, %s", state.current_round, state.phase.value
        )

    def _decode_state(self, entry: Any) -> Optional[TournamentState]:
        try:
            return TournamentState.from_dict(entry["state"])
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring corrupt tournament state: %s", e)
            return None

    def load_state(self) -> Optional[TournamentState]:
        """Load the current tournament state, or None if there is none."""
        entry = self._read(STATE_FILE)
        if entry is None:
            return None
        return self._decode_state(entry)

    def last_saved(self) -> Optional[datetime]:
        """When the current state was stored, or None if unknown."""
        entry = self._read(STATE_FILE)
        if not isinstance(entry, dict) or not entry.get("savedAt"):
            return None
        try:
            return date_parser.isoparse(entry["savedAt"])
        except ValueError:
            logger.warning("Invalid savedAt timestamp: %s", entry["savedAt"])
            return None

    def clear_state(self) -> None:
        """Forget the current tournament and its undo history."""
        self._remove(STATE_FILE)
        self._remove(HISTORY_FILE)
        logger.info("Cleared tournament state and history")

    # ========== Undo history ==========

    def _load_history_entries(self) -> List[Dict[str, Any]]:
        entries = self._read(HISTORY_FILE)
        return entries if isinstance(entries, list) else []

    def _push_history(self, entry: Dict[str, Any]) -> None:
        entries = self._load_history_entries()
        entries.append(entry)
        # Oldest entries are dropped first
        if len(entries) > self.max_history:
            entries = entries[-self.max_history :]
        self._write(HISTORY_FILE, entries)

    def load_history(self) -> List[TournamentState]:
        """All undo states, oldest first."""
        states = []
        for entry in self._load_history_entries():
            state = self._decode_state(entry)
            if state is not None:
                states.append(state)
        return states

    @property
    def history_size(self) -> int:
        return len(self._load_history_entries())

    def can_undo(self) -> bool:
        return self.history_size > 0

    def pop_history(self) -> Optional[TournamentState]:
        """Remove and return the most recent undo state.

        The popped state also becomes the current state, without being
        pushed back onto the history.
        """
        entries = self._load_history_entries()
        if not entries:
            logger.warning("Cannot undo: history is empty")
            return None

        entry = entries.pop()
        self._write(HISTORY_FILE, entries)
        state = self._decode_state(entry)
        if state is not None:
            self.save_state(state, add_to_history=False)
            logger.info(
                "Undid to round %s, %s", state.current_round, state.phase.value
            )
        return state

    # ========== Teams and maps ==========

    def _save_team(self, filename: str, team: Team) -> None:
        self._write(filename, team.to_dict())

    def _load_team(self, filename: str) -> Optional[Team]:
        data = self._read(filename)
        if data is None:
            return None
        try:
            return Team.from_dict(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring corrupt team file %s: %s", filename, e)
            return None

    def save_my_team(self, team: Team) -> None:
        self._save_team(MY_TEAM_FILE, team)

    def load_my_team(self) -> Optional[Team]:
        return self._load_team(MY_TEAM_FILE)

    def save_opponent_team(self, team: Team) -> None:
        self._save_team(OPPONENT_TEAM_FILE, team)

    def load_opponent_team(self) -> Optional[Team]:
        return self._load_team(OPPONENT_TEAM_FILE)

    def save_custom_maps(self, maps: Sequence[GameMap]) -> None:
        self._write(CUSTOM_MAPS_FILE, [m.to_dict() for m in maps])

    def load_custom_maps(self) -> Optional[Tuple[GameMap, ...]]:
        data = self._read(CUSTOM_MAPS_FILE)
        if not isinstance(data, list):
            return None
        try:
            return tuple(GameMap.from_dict(m) for m in data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring corrupt custom maps: %s", e)
            return None

    def clear_all(self) -> None:
        """Remove every stored file."""
        for filename in (
            STATE_FILE,
            HISTORY_FILE,
            MY_TEAM_FILE,
            OPPONENT_TEAM_FILE,
            CUSTOM_MAPS_FILE,
        ):
            self._remove(filename)
        logger.info("Cleared all stored data in %s", self.directory)
