"""Round-robin schedule construction and result recording.

This module builds an all-play-all schedule with the circle method and
records results. Round-robin matches do not depend on each other, so
nothing is advanced; standings are recomputed by the caller.
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

from typing import List, Optional, Sequence

from tourneycore.constants import (
    DRAW,
    ROUND_ROBIN_MATCH_ID,
    STRUCTURAL_MIN_PARTICIPANTS,
)
from tourneycore.exceptions import (
    AlreadyResolvedException,
    CorrectionNotAllowedException,
    DuplicateParticipantException,
    InsufficientParticipantsException,
    InvalidWinnerException,
    MatchNotFoundException,
)
from tourneycore.models.participant.participant import Participant
from tourneycore.models.tournament.match import Match, Slot
from tourneycore.models.tournament.schedule import RoundRobinSchedule
from tourneycore.type_hints import Score
from tourneycore.utils import setup_logger

from .bracket_scheduler import seed_order

logger = setup_logger(__name__)


class RoundRobinScheduler:
    """Builds and maintains round-robin schedules.

    This class is responsible for:
    - Generating every pairing exactly once with the circle method
    - Dropping pairings against the padding bye for odd fields
    - Recording wins and draws
    - Awarding walkovers when a participant withdraws
    """

    def build(self, participants: Sequence[Participant]) -> RoundRobinSchedule:
        """Build the full schedule.

        Participant 0 stays fixed while the others rotate one place per
        round; each round pairs the two ends of the line inward. An odd
        field is padded with a bye, and any pairing with the bye is skipped.

        Args:
            participants: Participants in seed order, normally ``roster.list()``

        Returns:
            Schedule with ``n * (n - 1) / 2`` matches

        Raises:
            InsufficientParticipantsException: If fewer than two participants
            DuplicateParticipantException: If an id appears twice
        """
        if len(participants) < STRUCTURAL_MIN_PARTICIPANTS:
            raise InsufficientParticipantsException(
                f"A round robin needs at least {STRUCTURAL_MIN_PARTICIPANTS} "
                f"participants, got {len(participants)}"
            )

        line: List[Optional[str]] = [p.id for p in seed_order(participants)]
        if len(set(line)) != len(line):
            raise DuplicateParticipantException("Participant ids must be unique")

        if len(line) % 2:
            line.append(None)

        num_rounds = len(line) - 1
        half = len(line) // 2
        matches: List[Match] = []

        for round_index in range(num_rounds):
            position = 0
            for i in range(half):
                first = line[i]
                second = line[-1 - i]
                if first is None or second is None:
                    continue
                matches.append(
                    Match(
                        match_id=ROUND_ROBIN_MATCH_ID.format(number=len(matches) + 1),
                        round_number=round_index + 1,
                        position=position,
                        slots=[Slot(participant_id=first), Slot(participant_id=second)],
                    )
                )
                position += 1
            # Keep the first entry fixed, rotate the rest by one
            line.insert(1, line.pop())

        logger.info(
            f"Built round robin: {len(participants)} participants, "
            f"{num_rounds} rounds, {len(matches)} matches"
        )
        return RoundRobinSchedule(matches=matches, num_rounds=num_rounds)

    def submit_result(
        self,
        schedule: RoundRobinSchedule,
        match_id: str,
        winner_id: str,
        score: Score = None,
    ) -> Match:
        """Record the outcome of a match.

        Args:
            schedule: Schedule containing the match
            match_id: Match to record
            winner_id: Id of the winner, or ``DRAW`` for a drawn match
            score: Opaque score payload

        Raises:
            MatchNotFoundException: If no match has this id
            AlreadyResolvedException: If the match already has a result
            InvalidWinnerException: If the winner is not in the match
        """
        match = schedule.get_match(match_id)
        if match is None:
            raise MatchNotFoundException(f"Match '{match_id}' not found")
        if match.is_completed:
            raise AlreadyResolvedException(
                f"Match '{match_id}' already has a result"
            )
        self._check_winner(match, winner_id)

        self._record(match, winner_id, score)
        return match

    def correct_result(
        self,
        schedule: RoundRobinSchedule,
        match_id: str,
        winner_id: str,
        score: Score = None,
    ) -> Match:
        """Overwrite a played result.

        Raises:
            MatchNotFoundException: If no match has this id
            CorrectionNotAllowedException: If unplayed or a walkover
            InvalidWinnerException: If the winner is not in the match
        """
        match = schedule.get_match(match_id)
        if match is None:
            raise MatchNotFoundException(f"Match '{match_id}' not found")
        if not match.is_completed:
            raise CorrectionNotAllowedException(
                f"Match '{match_id}' has no result to correct"
            )
        if match.is_walkover:
            raise CorrectionNotAllowedException(
                f"Match '{match_id}' was a walkover and has no played result"
            )
        self._check_winner(match, winner_id)

        logger.info(f"Correcting result of match {match_id}")
        self._record(match, winner_id, score)
        return match

    def withdraw(self, schedule: RoundRobinSchedule, participant_id: str) -> List[Match]:
        """Forfeit every unplayed match of a participant.

        Returns:
            The matches awarded to opponents
        """
        forfeited = []
        for match in schedule.matches_for(participant_id):
            if match.is_completed:
                continue
            match.record(match.opponent_of(participant_id), is_walkover=True)
            forfeited.append(match)

        logger.info(
            f"{participant_id} withdrew, {len(forfeited)} matches awarded by walkover"
        )
        return forfeited

    @staticmethod
    def _check_winner(match: Match, winner_id: str) -> None:
        if winner_id != DRAW and winner_id not in match.participant_ids:
            raise InvalidWinnerException(
                f"'{winner_id}' is not a participant in match '{match.match_id}'"
            )

    @staticmethod
    def _record(match: Match, winner_id: str, score: Score) -> None:
        if winner_id == DRAW:
            match.record(None, score, is_draw=True)
            logger.info(f"Match {match.match_id}: draw (score: {score})")
        else:
            match.record(winner_id, score)
            logger.info(f"Match {match.match_id}: {winner_id} wins (score: {score})")
