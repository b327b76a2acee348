"""Exceptions for use in Team Pairing"""

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


# ========== Base Application Exception ==========


class TeamPairingException(Exception):
    """Base exception for all Team Pairing errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Tournament Exceptions ==========


class TournamentException(TeamPairingException):
    """Base exception for tournament-related errors."""

    pass


class TournamentSetupException(TournamentException):
    """Raised when a tournament cannot be created from the given teams and maps."""

    pass


class PlayerNotFoundException(TournamentException):
    """Raised when a named player cannot be found on a roster."""

    pass


# ========== Roster Exceptions ==========


class RosterException(TeamPairingException):
    """Base exception for roster file errors."""

    pass


class InvalidRosterException(RosterException):
    """Raised when roster data is malformed or has the wrong player count."""

    pass


class MapsFileException(TeamPairingException):
    """Base exception for battleplan file errors."""

    pass


class InvalidMapsFileException(MapsFileException):
    """Raised when a maps file is malformed."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(TeamPairingException):
    """Base exception for validation errors."""

    pass


class ScoreValidationException(ValidationException):
    """Raised when a battleplan or matchup score is out of range."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(TeamPairingException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(ResourceException):
    """Raised when a file cannot be saved."""

    pass
