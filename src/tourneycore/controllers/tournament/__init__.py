"""Scheduling and standings managers used by the Tournament class.

Each manager has a single responsibility and works on the data models it
is handed; none of them holds tournament state of its own.
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

from tourneycore.controllers.tournament.roster import ParticipantRoster
from tourneycore.controllers.tournament.bracket_scheduler import BracketScheduler
from tourneycore.controllers.tournament.round_robin_scheduler import (
    RoundRobinScheduler,
)
from tourneycore.controllers.tournament.standings_calculator import (
    StandingsCalculator,
)

__all__ = [
    "ParticipantRoster",
    "BracketScheduler",
    "RoundRobinScheduler",
    "StandingsCalculator",
]
