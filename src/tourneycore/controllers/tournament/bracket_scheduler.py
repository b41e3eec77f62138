"""Single-elimination bracket construction and advancement.

This module builds the complete bracket up front, resolves byes and
propagates winners into the next round, cascading through chains of byes.
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
    BRACKET_MATCH_ID,
    DRAW,
    STRUCTURAL_MIN_PARTICIPANTS,
)
from tourneycore.exceptions import (
    AlreadyResolvedException,
    CorrectionNotAllowedException,
    DuplicateParticipantException,
    InsufficientParticipantsException,
    InvalidWinnerException,
    MatchNotFoundException,
    MatchNotReadyException,
)
from tourneycore.models.participant.participant import Participant
from tourneycore.models.tournament.bracket import Bracket
from tourneycore.models.tournament.match import Match, Slot
from tourneycore.type_hints import Score
from tourneycore.utils import setup_logger

logger = setup_logger(__name__)


def next_power_of_two(n: int) -> int:
    """Smallest power of two greater than or equal to ``n`` (minimum 1)."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def seed_order(participants: Sequence[Participant]) -> List[Participant]:
    """Participants sorted by seed, unseeded entries kept in given order last."""
    return sorted(
        participants,
        key=lambda p: (p.seed is None, p.seed if p.seed is not None else 0),
    )


class BracketScheduler:
    """Builds and maintains single-elimination brackets.

    This class is responsible for:
    - Padding the field to a power of two with byes
    - Auto-resolving matches that have a bye on one side
    - Propagating winners into the next round
    - Cascading resolution through consecutive byes, including byes that
      appear in later rounds after a withdrawal
    """

    def build(self, participants: Sequence[Participant]) -> Bracket:
        """Build a complete bracket.

        Round 1 is filled in seed order, pairing slots ``2i`` and ``2i + 1``.
        The ``size - n`` byes go to the top seeds, one per match, so every
        bye faces a real participant; the remaining participants are paired
        consecutively. With a power-of-two field this is plain seed order.

        Args:
            participants: Participants to place, normally ``roster.list()``

        Returns:
            The full bracket with every round created

        Raises:
            InsufficientParticipantsException: If fewer than two participants
            DuplicateParticipantException: If an id appears twice
        """
        if len(participants) < STRUCTURAL_MIN_PARTICIPANTS:
            raise InsufficientParticipantsException(
                f"A bracket needs at least {STRUCTURAL_MIN_PARTICIPANTS} "
                f"participants, got {len(participants)}"
            )

        ids = [p.id for p in seed_order(participants)]
        if len(set(ids)) != len(ids):
            raise DuplicateParticipantException("Participant ids must be unique")

        size = next_power_of_two(len(ids))
        num_byes = size - len(ids)

        entries: List[Optional[str]] = []
        for participant_id in ids[:num_byes]:
            entries.extend([participant_id, None])
        entries.extend(ids[num_byes:])

        rounds: List[List[Match]] = []
        first_round = []
        for position in range(size // 2):
            first_round.append(
                Match(
                    match_id=BRACKET_MATCH_ID.format(round=1, number=position + 1),
                    round_number=1,
                    position=position,
                    slots=[
                        self._initial_slot(entries[2 * position]),
                        self._initial_slot(entries[2 * position + 1]),
                    ],
                )
            )
        rounds.append(first_round)

        round_number = 2
        num_matches = size // 4
        while num_matches >= 1:
            rounds.append(
                [
                    Match(
                        match_id=BRACKET_MATCH_ID.format(
                            round=round_number, number=position + 1
                        ),
                        round_number=round_number,
                        position=position,
                    )
                    for position in range(num_matches)
                ]
            )
            round_number += 1
            num_matches //= 2

        bracket = Bracket(size=size, rounds=rounds)

        for match in first_round:
            if self._auto_resolve(match):
                self._advance(bracket, match)

        logger.info(
            f"Built bracket: {len(ids)} participants, size {size}, "
            f"{bracket.num_rounds} rounds, {num_byes} byes"
        )
        return bracket

    @staticmethod
    def _initial_slot(participant_id: Optional[str]) -> Slot:
        if participant_id is None:
            return Slot.bye()
        return Slot(participant_id=participant_id)

    # ========== Results ==========

    def submit_result(
        self,
        bracket: Bracket,
        match_id: str,
        winner_id: str,
        score: Score = None,
    ) -> Match:
        """Record the winner of a ready match and advance them.

        Every check runs before anything is written, so a failed call
        leaves the bracket untouched.

        Raises:
            MatchNotFoundException: If no match has this id
            AlreadyResolvedException: If the match already has a result
            MatchNotReadyException: If a slot is still waiting for a winner
            InvalidWinnerException: If the winner is not in the match
        """
        match = bracket.get_match(match_id)
        if match is None:
            raise MatchNotFoundException(f"Match '{match_id}' not found")
        if match.is_completed:
            raise AlreadyResolvedException(
                f"Match '{match_id}' already has a result"
            )
        if not match.is_ready:
            raise MatchNotReadyException(
                f"Match '{match_id}' is still waiting for a participant"
            )
        self._check_winner(match, winner_id)

        match.record(winner_id, score)
        logger.info(f"Match {match_id}: {winner_id} wins (score: {score})")
        self._advance(bracket, match)
        return match

    def correct_result(
        self,
        bracket: Bracket,
        match_id: str,
        winner_id: str,
        score: Score = None,
    ) -> Match:
        """Replace a recorded result while the next match is still undecided.

        Raises:
            MatchNotFoundException: If no match has this id
            CorrectionNotAllowedException: If there is nothing to correct, the
                match was a walkover, or the fed match is already decided
            InvalidWinnerException: If the winner is not in the match
        """
        match = bracket.get_match(match_id)
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

        link = bracket.next_slot(match)
        if link is not None and link[0].is_completed:
            raise CorrectionNotAllowedException(
                f"Match '{link[0].match_id}' fed by '{match_id}' is already decided"
            )

        previous = match.winner_id
        match.record(winner_id, score)
        if link is None:
            bracket.champion_id = winner_id
        else:
            target, slot_index = link
            target.slots[slot_index] = Slot(participant_id=winner_id)
        logger.info(f"Match {match_id}: result corrected from {previous} to {winner_id}")
        return match

    def withdraw(self, bracket: Bracket, participant_id: str) -> List[Match]:
        """Withdraw a participant from the bracket.

        An opponent who is already known wins the participant's open match
        by walkover. If the opponent is not known yet, the participant's
        slot becomes a bye so whoever arrives later advances automatically.

        Returns:
            Matches resolved by the withdrawal, in resolution order
        """
        match = self._open_match_for(bracket, participant_id)
        if match is None:
            logger.info(f"{participant_id} has no open match, nothing to withdraw")
            return []

        index = match.slot_index_of(participant_id)
        opponent = match.slots[1 - index]
        match.slots[index] = Slot.bye()
        bracket.withdrawn.append(participant_id)
        logger.info(f"{participant_id} withdrew from match {match.match_id}")

        resolved: List[Match] = []
        if opponent.is_filled or opponent.is_bye:
            self._auto_resolve(match)
            resolved = self._advance(bracket, match)
            resolved.insert(0, match)
        return resolved

    @staticmethod
    def _open_match_for(bracket: Bracket, participant_id: str) -> Optional[Match]:
        for match in bracket.matches():
            if not match.is_completed and match.involves(participant_id):
                return match
        return None

    @staticmethod
    def _check_winner(match: Match, winner_id: str) -> None:
        if winner_id == DRAW:
            raise InvalidWinnerException(
                f"Match '{match.match_id}' cannot end in a draw in an elimination bracket"
            )
        if winner_id not in match.participant_ids:
            raise InvalidWinnerException(
                f"'{winner_id}' is not a participant in match '{match.match_id}'"
            )

    # ========== Advancement ==========

    @staticmethod
    def _auto_resolve(match: Match) -> bool:
        """Resolve a match that has a bye on at least one side.

        A live participant facing a bye wins without a score. Two byes
        produce a resolved match with no winner, which passes a bye on.

        Returns:
            True if the match was resolved by this call
        """
        if match.is_completed or not match.has_bye:
            return False

        first, second = match.slots
        if first.is_bye and second.is_bye:
            match.record(None, is_walkover=True)
        elif first.is_bye and second.is_filled:
            match.record(second.participant_id, is_walkover=True)
        elif second.is_bye and first.is_filled:
            match.record(first.participant_id, is_walkover=True)
        else:
            return False

        logger.debug(
            f"Match {match.match_id} resolved by bye: winner {match.winner_id}"
        )
        return True

    def _advance(self, bracket: Bracket, match: Match) -> List[Match]:
        """Feed a resolved match's outcome forward until nothing else resolves.

        Returns:
            Matches auto-resolved by the cascade
        """
        cascaded: List[Match] = []
        pending = [match]
        while pending:
            current = pending.pop()
            link = bracket.next_slot(current)
            if link is None:
                bracket.champion_id = current.winner_id
                logger.info(f"Bracket resolved, champion: {current.winner_id}")
                continue

            target, slot_index = link
            if current.winner_id is not None:
                target.slots[slot_index] = Slot(participant_id=current.winner_id)
            else:
                target.slots[slot_index] = Slot.bye()

            if self._auto_resolve(target):
                cascaded.append(target)
                pending.append(target)
        return cascaded
