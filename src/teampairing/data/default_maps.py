"""Default battleplan pool.

Can be replaced by a custom maps file (see ``teampairing.roster.load_maps``).
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

from typing import Tuple

from teampairing.models import GameMap

DEFAULT_MAP_NAMES: Tuple[str, ...] = (
    "Passing Seasons",
    "Paths of the Fey",
    "Roiling Roots",
    "Cyclic Shifts",
    "Surge of Slaughter",
    "Linked Ley Lines",
    "Noxious Nexus",
    "The Liferoots",
    "Bountiful Equinox",
    "Lifecycle",
    "Creeping Corruption",
    "Grasp of Thorns",
)


def default_maps() -> Tuple[GameMap, ...]:
    """Create the default battleplans, each with a fresh ID."""
    return tuple(GameMap.create(name) for name in DEFAULT_MAP_NAMES)
