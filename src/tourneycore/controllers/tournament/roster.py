"""Participant roster for tournaments.

This module owns participant registration: uniqueness, capacity and seed
assignment.
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

import dataclasses
from typing import Any, Dict, Iterator, List, Optional, Tuple

from tourneycore.exceptions import (
    DuplicateParticipantException,
    InvalidParticipantDataException,
    RegistrationClosedException,
    RosterFullException,
)
from tourneycore.models.participant.participant import Participant
from tourneycore.utils import setup_logger

logger = setup_logger(__name__)


class ParticipantRoster:
    """Seed-ordered list of registered participants.

    This class is responsible for:
    - Rejecting duplicate ids
    - Enforcing the optional capacity
    - Assigning sequential 1-based seeds in registration order
    - Refusing registrations once closed
    """

    def __init__(self, max_participants: Optional[int] = None) -> None:
        """Initialize an empty, open roster.

        Args:
            max_participants: Capacity, or None for no limit
        """
        self.max_participants = max_participants
        self._participants: List[Participant] = []
        self._by_id: Dict[str, Participant] = {}
        self._is_open = True

    @property
    def is_open(self) -> bool:
        """Is the roster accepting registrations?"""
        return self._is_open

    @property
    def is_full(self) -> bool:
        return (
            self.max_participants is not None
            and len(self._participants) >= self.max_participants
        )

    def close(self) -> None:
        """Stop accepting registrations."""
        if self._is_open:
            self._is_open = False
            logger.info(f"Registration closed with {self.count()} participants")

    def register(self, participant: Participant) -> Participant:
        """Add a participant with the next sequential seed.

        Args:
            participant: Participant to register; any seed it carries is replaced

        Returns:
            The seeded participant stored in the roster

        Raises:
            RegistrationClosedException: If the roster is closed
            DuplicateParticipantException: If the id is already registered
            RosterFullException: If the roster is at capacity
        """
        if not isinstance(participant, Participant):
            raise InvalidParticipantDataException(
                f"Expected a Participant, got {type(participant).__name__}"
            )
        if not self._is_open:
            raise RegistrationClosedException(
                "Tournament is not accepting registrations"
            )
        if participant.id in self._by_id:
            raise DuplicateParticipantException(
                f"Participant '{participant.id}' is already registered"
            )
        if self.is_full:
            raise RosterFullException(
                f"Tournament is full ({self.max_participants} participants)"
            )

        seeded = dataclasses.replace(participant, seed=len(self._participants) + 1)
        self._participants.append(seeded)
        self._by_id[seeded.id] = seeded
        logger.info(f"Registered participant: {seeded.name} ({seeded.id}) seed {seeded.seed}")
        return seeded

    def count(self) -> int:
        return len(self._participants)

    def list(self) -> Tuple[Participant, ...]:
        """Return a read-only, seed-ordered view of the participants."""
        return tuple(self._participants)

    def get(self, participant_id: str) -> Optional[Participant]:
        return self._by_id.get(participant_id)

    def ids(self) -> List[str]:
        return [p.id for p in self._participants]

    def __len__(self) -> int:
        return len(self._participants)

    def __iter__(self) -> Iterator[Participant]:
        return iter(tuple(self._participants))

    def __contains__(self, participant_id: object) -> bool:
        return participant_id in self._by_id

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize roster to dictionary."""
        return {
            "max_participants": self.max_participants,
            "is_open": self._is_open,
            "participants": [p.to_dict() for p in self._participants],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParticipantRoster":
        """Deserialize roster from dictionary, keeping stored seeds."""
        roster = cls(max_participants=data.get("max_participants"))
        participants = [Participant.from_dict(p) for p in data.get("participants", [])]
        participants.sort(key=lambda p: p.seed if p.seed is not None else 0)
        for index, participant in enumerate(participants, start=1):
            if participant.seed != index:
                participant = dataclasses.replace(participant, seed=index)
            roster._participants.append(participant)
            roster._by_id[participant.id] = participant
        roster._is_open = data.get("is_open", True)
        return roster
