"""Data model for a round-robin schedule."""

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
from typing import Any, Dict, List, Optional

from .match import Match


@dataclass
class RoundRobinSchedule:
    """All-play-all schedule.

    Attributes
    ----------
    matches : list of Match
        Every match in play order; pairings against the padding bye are
        never stored.
    num_rounds : int
        Number of logical rounds, ``n - 1`` for an even field and ``n`` for
        an odd one.
    """

    matches: List[Match] = field(default_factory=list)
    num_rounds: int = 0

    @property
    def is_complete(self) -> bool:
        return bool(self.matches) and all(m.is_completed for m in self.matches)

    def get_match(self, match_id: str) -> Optional[Match]:
        for match in self.matches:
            if match.match_id == match_id:
                return match
        return None

    def round_matches(self, round_number: int) -> List[Match]:
        return [m for m in self.matches if m.round_number == round_number]

    def is_round_resolved(self, round_number: int) -> bool:
        matches = self.round_matches(round_number)
        return bool(matches) and all(m.is_completed for m in matches)

    def completed_matches(self) -> List[Match]:
        return [m for m in self.matches if m.is_completed]

    def matches_for(self, participant_id: str) -> List[Match]:
        return [m for m in self.matches if m.involves(participant_id)]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize schedule to dictionary."""
        return {
            "num_rounds": self.num_rounds,
            "matches": [m.to_dict() for m in self.matches],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundRobinSchedule":
        """Deserialize schedule from dictionary."""
        return cls(
            matches=[Match.from_dict(m) for m in data.get("matches", [])],
            num_rounds=data.get("num_rounds", 0),
        )
