"""Battleplan (map) reference data."""

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

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from teampairing.utils import generate_id

_OPTIONAL_FIELDS = (
    ("description", "description"),
    ("twist", "twist"),
    ("scoring", "scoring"),
    ("layout_image1", "layoutImage1"),
    ("layout_image2", "layoutImage2"),
)


@dataclass(frozen=True)
class GameMap:
    """A battleplan that one round of the tournament is played on.

    Attributes:
        id: Unique identifier for the map
        name: Battleplan name; also the key in player battleplan scores
        description: Optional short description
        twist: Optional battleplan twist rules text
        scoring: Optional scoring rules text
        layout_image1: Optional path to the first layout image
        layout_image2: Optional path to the second layout image
    """

    id: str
    name: str
    description: Optional[str] = None
    twist: Optional[str] = None
    scoring: Optional[str] = None
    layout_image1: Optional[str] = None
    layout_image2: Optional[str] = None

    @classmethod
    def create(cls, name: str, **details: Optional[str]) -> "GameMap":
        """Create a map with a freshly generated ID."""
        return cls(id=generate_id(cls.__name__), name=name, **details)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize map to dictionary, omitting unset details."""
        data: Dict[str, Any] = {"id": self.id, "name": self.name}
        for attribute, key in _OPTIONAL_FIELDS:
            value = getattr(self, attribute)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameMap":
        """Deserialize map from dictionary."""
        return cls(
            id=data.get("id") or generate_id(cls.__name__),
            name=data["name"],
            **{attribute: data.get(key) for attribute, key in _OPTIONAL_FIELDS},
        )
