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

# --- Tournament format ---
NUM_ROUNDS = 4
TEAM_SIZE = 8
ATTACKERS_OFFERED = 2
# Round whose resolution auto-pairs the final round
AUTO_PAIR_ROUND = 3
AUTO_PAIR_POOL_SIZE = 2

# --- Scores (battleplan and matchup) ---
MIN_SCORE = 1
MAX_SCORE = 6
GOOD_SCORE_THRESHOLD = 4
LAST_CHANCE_THRESHOLDS = (6, 5, 4)

# Medal ranks for matchup scores
MEDAL_GOLD = 1
MEDAL_SILVER = 2
MEDAL_BRONZE = 3
MEDAL_NAMES = {
    MEDAL_GOLD: "gold",
    MEDAL_SILVER: "silver",
    MEDAL_BRONZE: "bronze",
}

# --- Sides ---
MY_SIDE = "my"
OPPONENT_SIDE = "opponent"

# --- Tournament status ---
STATUS_IN_PROGRESS = "in-progress"
STATUS_COMPLETED = "completed"

# --- Persistence ---
SAVE_FILE_EXTENSION = ".json"
DEFAULT_DATA_DIR = ".teampairing"
STATE_FILE = "tournament" + SAVE_FILE_EXTENSION
HISTORY_FILE = "history" + SAVE_FILE_EXTENSION
MY_TEAM_FILE = "my-team" + SAVE_FILE_EXTENSION
OPPONENT_TEAM_FILE = "opponent-team" + SAVE_FILE_EXTENSION
CUSTOM_MAPS_FILE = "custom-maps" + SAVE_FILE_EXTENSION
MAX_HISTORY_ENTRIES = 50
