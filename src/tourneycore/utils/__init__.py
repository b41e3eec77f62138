"""Shared helpers for Tourney Core: logging setup and id generation."""

# Tourney Core
# Copyright (C) 2025  Tourney Core developers
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
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Return the logger for a module.

    Handlers are left to the application; the package root logger only
    carries a ``NullHandler`` so that importing the library stays silent.

    Args:
        name: Logger name, normally ``__name__``
        level: Optional level to set on this logger

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def configure_logging(verbose: bool = False) -> None:
    """Attach a stream handler to the root logger for command line use."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )


def generate_id(prefix: str) -> str:
    """Generate a unique identifier such as ``tournament_3f2a9c...``.

    Args:
        prefix: Text placed before the random part, usually a class name

    Returns:
        A new identifier string
    """
    return f"{prefix.lower()}_{uuid.uuid4().hex[:12]}"
