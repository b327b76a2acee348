"""Shared helpers for Team Pairing: logging setup and ID generation."""

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

import logging
import uuid

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Return a module logger with a single stream handler attached.

    Args:
        name: Logger name, normally ``__name__`` of the calling module
        level: Initial logging level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(level)
        # Root handlers (e.g. pytest's caplog) still see records
        logger.propagate = True
    return logger


def set_log_level(level: int) -> None:
    """Apply ``level`` to every Team Pairing logger created so far."""
    logging.getLogger().setLevel(level)
    for name, existing in logging.Logger.manager.loggerDict.items():
        if name.startswith("teampairing") and isinstance(existing, logging.Logger):
            existing.setLevel(level)


def generate_id(prefix: str = "") -> str:
    """Generate a short unique identifier.

    Args:
        prefix: Optional prefix, e.g. the entity class name

    Returns:
        Identifier such as ``"Player-3f9a1c2b7"``
    """
    short = uuid.uuid4().hex[:9]
    return f"{prefix}-{short}" if prefix else short


__all__ = ["LOG_FORMAT", "generate_id", "set_log_level", "setup_logger"]
