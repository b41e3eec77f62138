"""Tourney Core - tournament scheduling engine.

Registers participants, builds single-elimination brackets or round-robin
schedules, records results and reports standings and winners.
"""

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

from tourneycore.controllers.tournament_controller import (
    OperationResult,
    TournamentController,
)
from tourneycore.models.participant.participant import Participant
from tourneycore.models.tournament.tournament import Tournament
from tourneycore.models.tournament.tournament_config import (
    PointsSystem,
    TournamentConfig,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Tournament",
    "TournamentConfig",
    "PointsSystem",
    "Participant",
    "TournamentController",
    "OperationResult",
    "__version__",
]
