"""Match and slot data classes."""

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

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

from tourneycore.type_hints import Score


@dataclass
class Slot:
    """One side of a match.

    A slot is in exactly one of three states: it holds a participant id,
    it is a bye (permanently empty), or it is pending a winner from an
    earlier match.

    Attributes
    ----------
    participant_id : str or None
        Id of the participant occupying the slot.
    is_bye : bool
        True when no participant will ever occupy the slot.
    """

    participant_id: Optional[str] = None
    is_bye: bool = False

    @classmethod
    def bye(cls) -> "Slot":
        return cls(participant_id=None, is_bye=True)

    @property
    def is_filled(self) -> bool:
        return self.participant_id is not None

    @property
    def is_pending(self) -> bool:
        return self.participant_id is None and not self.is_bye

    def to_dict(self) -> Dict[str, Any]:
        return {"participant_id": self.participant_id, "is_bye": self.is_bye}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Slot":
        return cls(
            participant_id=data.get("participant_id"),
            is_bye=data.get("is_bye", False),
        )


def _pending_slots() -> List[Slot]:
    return [Slot(), Slot()]


@dataclass
class Match:
    """A single match between the occupants of two slots.

    Attributes
    ----------
    match_id : str
        Identifier, unique within its bracket or schedule.
    round_number : int
        Round the match belongs to (1-indexed).
    position : int
        Position within the round (0-indexed).
    slots : list of Slot
        The two sides of the match.
    winner_id : str or None
        Id of the winner. Stays ``None`` for draws and for a bye-vs-bye
        match, which resolves without producing a participant.
    score : Any
        Opaque score payload supplied with the result.
    is_completed : bool
        Whether the match has been resolved.
    is_draw : bool
        Whether a round-robin match ended level.
    is_walkover : bool
        Whether the match was resolved without being played.
    completed_at : datetime or None
        When the result was recorded.
    """

    match_id: str
    round_number: int
    position: int
    slots: List[Slot] = field(default_factory=_pending_slots)
    winner_id: Optional[str] = None
    score: Score = None
    is_completed: bool = False
    is_draw: bool = False
    is_walkover: bool = False
    completed_at: Optional[datetime] = None

    @property
    def participant_ids(self) -> List[str]:
        """Ids of the participants currently occupying a slot."""
        return [s.participant_id for s in self.slots if s.participant_id is not None]

    @property
    def is_ready(self) -> bool:
        """Both sides are known and the match has not been played."""
        return not self.is_completed and all(s.is_filled for s in self.slots)

    @property
    def has_bye(self) -> bool:
        return any(s.is_bye for s in self.slots)

    @property
    def loser_id(self) -> Optional[str]:
        if not self.is_completed or self.winner_id is None:
            return None
        return self.opponent_of(self.winner_id)

    def involves(self, participant_id: str) -> bool:
        return participant_id in self.participant_ids

    def slot_index_of(self, participant_id: str) -> Optional[int]:
        for index, slot in enumerate(self.slots):
            if slot.participant_id == participant_id:
                return index
        return None

    def opponent_of(self, participant_id: str) -> Optional[str]:
        index = self.slot_index_of(participant_id)
        if index is None:
            return None
        return self.slots[1 - index].participant_id

    def record(
        self,
        winner_id: Optional[str],
        score: Score = None,
        is_draw: bool = False,
        is_walkover: bool = False,
    ) -> None:
        """Store an outcome. Callers validate before recording."""
        self.winner_id = winner_id
        self.score = score
        self.is_draw = is_draw
        self.is_walkover = is_walkover
        self.is_completed = True
        self.completed_at = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "match_id": self.match_id,
            "round_number": self.round_number,
            "position": self.position,
            "slots": [s.to_dict() for s in self.slots],
            "winner_id": self.winner_id,
            "score": self.score,
            "is_completed": self.is_completed,
            "is_draw": self.is_draw,
            "is_walkover": self.is_walkover,
            "completed_at": (
                self.completed_at.isoformat() if self.completed_at else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        completed_at = data.get("completed_at")
        if isinstance(completed_at, str):
            completed_at = date_parser.isoparse(completed_at)
        return cls(
            match_id=data["match_id"],
            round_number=data["round_number"],
            position=data["position"],
            slots=[Slot.from_dict(s) for s in data.get("slots", [{}, {}])],
            winner_id=data.get("winner_id"),
            score=data.get("score"),
            is_completed=data.get("is_completed", False),
            is_draw=data.get("is_draw", False),
            is_walkover=data.get("is_walkover", False),
            completed_at=completed_at,
        )
