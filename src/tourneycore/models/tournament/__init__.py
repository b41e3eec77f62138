"""Tournament data models and the Tournament aggregate.

Matches, brackets and schedules are plain dataclasses. The Tournament
class owns one of each structure and drives the status lifecycle.
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

from tourneycore.models.tournament.match import Match, Slot
from tourneycore.models.tournament.bracket import Bracket
from tourneycore.models.tournament.schedule import RoundRobinSchedule
from tourneycore.models.tournament.standing import Standing
from tourneycore.models.tournament.tournament_config import (
    PointsSystem,
    TournamentConfig,
)
from tourneycore.models.tournament.tournament import Tournament

__all__ = [
    "Tournament",
    "TournamentConfig",
    "PointsSystem",
    "Bracket",
    "RoundRobinSchedule",
    "Match",
    "Slot",
    "Standing",
]
