"""Standings calculation for round-robin tournaments."""

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

from typing import Dict, List, Sequence

from tourneycore.models.participant.participant import Participant
from tourneycore.models.tournament.schedule import RoundRobinSchedule
from tourneycore.models.tournament.standing import Standing
from tourneycore.models.tournament.tournament_config import PointsSystem
from tourneycore.utils import setup_logger

logger = setup_logger(__name__)


class StandingsCalculator:
    """Derives a ranked standings table from completed round-robin matches.

    The table is rebuilt from the full match history on every call and is
    never patched in place, so a corrected result can never leave stale
    totals behind.

    Ordering:
    1. Points, highest first
    2. Wins, most first
    3. Losses, fewest first
    4. Seed, lowest first
    """

    def recompute(
        self,
        schedule: RoundRobinSchedule,
        participants: Sequence[Participant],
        points_system: PointsSystem,
    ) -> List[Standing]:
        """Build a fresh standings table.

        Args:
            schedule: Schedule whose completed matches are counted
            participants: Every participant to list, including those who
                have not played yet
            points_system: Points awarded per outcome

        Returns:
            Standings sorted and ranked from first to last
        """
        table: Dict[str, Standing] = {
            p.id: Standing(
                participant_id=p.id,
                name=p.name,
                seed=p.seed if p.seed is not None else index,
                points=0,
            )
            for index, p in enumerate(participants, start=1)
        }

        for match in schedule.completed_matches():
            rows = [table.get(pid) for pid in match.participant_ids]
            if len(rows) != 2 or None in rows:
                logger.warning(
                    f"Skipping match {match.match_id}: participant not in roster"
                )
                continue

            for row in rows:
                row.played += 1

            if match.is_draw:
                for row in rows:
                    row.draws += 1
                    row.points += points_system.draw
            elif match.winner_id is not None:
                winner = table[match.winner_id]
                loser = table[match.loser_id]
                winner.wins += 1
                winner.points += points_system.win
                loser.losses += 1
                loser.points += points_system.loss

        standings = sorted(table.values(), key=lambda s: s.sort_key)
        for rank, standing in enumerate(standings, start=1):
            standing.rank = rank

        return standings
