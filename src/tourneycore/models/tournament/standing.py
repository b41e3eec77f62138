"""Standing data class."""

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

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass
class Standing:
    """One row of a round-robin standings table.

    Attributes
    ----------
    participant_id : str
        Id of the participant.
    name : str
        Display name at the time the table was computed.
    seed : int
        Registration seed, the final tie-break.
    played : int
        Completed matches, walkovers included.
    wins, losses, draws : int
        Outcome counts.
    points : float
        Points under the tournament's points system.
    rank : int
        1-based position in the sorted table.
    """

    participant_id: str
    name: str
    seed: int
    played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    points: float = 0
    rank: int = 0

    @property
    def sort_key(self) -> Tuple[float, int, int, int]:
        """Points desc, wins desc, losses asc, seed asc."""
        return (-self.points, -self.wins, self.losses, self.seed)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize standing to dictionary."""
        return {
            "participant_id": self.participant_id,
            "name": self.name,
            "seed": self.seed,
            "played": self.played,
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
            "points": self.points,
            "rank": self.rank,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Standing":
        """Deserialize standing from dictionary."""
        return cls(
            participant_id=data["participant_id"],
            name=data.get("name", data["participant_id"]),
            seed=data["seed"],
            played=data.get("played", 0),
            wins=data.get("wins", 0),
            losses=data.get("losses", 0),
            draws=data.get("draws", 0),
            points=data.get("points", 0),
            rank=data.get("rank", 0),
        )
