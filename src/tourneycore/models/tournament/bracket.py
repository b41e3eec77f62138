"""Data model for a single-elimination bracket."""

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
from typing import Any, Dict, Iterator, List, Optional, Tuple

from tourneycore.type_hints import MatchAddress

from .match import Match


@dataclass
class Bracket:
    """Rounds of matches for a single-elimination bracket.

    Matches live in an arena addressed by ``(round_number, position)``.
    Forward links are never stored: the match at position ``p`` of round
    ``r`` always feeds slot ``p % 2`` of match ``p // 2`` in round ``r + 1``.

    Attributes
    ----------
    size : int
        Number of first-round slots, a power of two.
    rounds : list of list of Match
        Matches per round, round 1 first.
    champion_id : str or None
        Winner of the final once it is resolved.
    withdrawn : list of str
        Participants whose slot was turned into a bye by a withdrawal.
    """

    size: int
    rounds: List[List[Match]] = field(default_factory=list)
    champion_id: Optional[str] = None
    withdrawn: List[str] = field(default_factory=list)
    _index: Dict[str, MatchAddress] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self.reindex()

    def reindex(self) -> None:
        """Rebuild the match id lookup table."""
        self._index = {
            match.match_id: (match.round_number, match.position)
            for round_matches in self.rounds
            for match in round_matches
        }

    @property
    def num_rounds(self) -> int:
        return len(self.rounds)

    @property
    def final(self) -> Optional[Match]:
        if not self.rounds:
            return None
        return self.rounds[-1][0]

    @property
    def is_resolved(self) -> bool:
        """Has the final been decided?"""
        final = self.final
        return final is not None and final.is_completed

    @property
    def total_matches(self) -> int:
        return sum(len(r) for r in self.rounds)

    def matches(self) -> Iterator[Match]:
        """Iterate over all matches, round by round."""
        for round_matches in self.rounds:
            yield from round_matches

    def get_match(self, match_id: str) -> Optional[Match]:
        address = self._index.get(match_id)
        if address is None:
            return None
        return self.match_at(*address)

    def match_at(self, round_number: int, position: int) -> Match:
        return self.rounds[round_number - 1][position]

    def round_matches(self, round_number: int) -> List[Match]:
        if 1 <= round_number <= len(self.rounds):
            return self.rounds[round_number - 1]
        return []

    def is_round_resolved(self, round_number: int) -> bool:
        matches = self.round_matches(round_number)
        return bool(matches) and all(m.is_completed for m in matches)

    def next_slot(self, match: Match) -> Optional[Tuple[Match, int]]:
        """Return the match and slot index fed by ``match``'s winner.

        Returns ``None`` for the final.
        """
        if match.round_number >= self.num_rounds:
            return None
        target = self.match_at(match.round_number + 1, match.position // 2)
        return target, match.position % 2

    def to_dict(self) -> Dict[str, Any]:
        """Serialize bracket to dictionary."""
        return {
            "size": self.size,
            "champion_id": self.champion_id,
            "withdrawn": list(self.withdrawn),
            "rounds": [[m.to_dict() for m in r] for r in self.rounds],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bracket":
        """Deserialize bracket from dictionary."""
        return cls(
            size=data["size"],
            champion_id=data.get("champion_id"),
            withdrawn=list(data.get("withdrawn", [])),
            rounds=[
                [Match.from_dict(m) for m in round_data]
                for round_data in data.get("rounds", [])
            ],
        )
