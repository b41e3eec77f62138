"""A registered tournament participant."""

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

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from dateutil import parser as date_parser

from tourneycore.utils import setup_logger
from tourneycore.utils.validation import validate_participant_strict

logger = setup_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Participant:
    """A player or team entered in a tournament.

    Participants are immutable. The roster hands out a seeded copy at
    registration time, so a seed never changes once assigned.

    Attributes
    ----------
    id : str
        Opaque identifier supplied by the caller's identity provider.
    name : str
        Display name.
    team_members : tuple of str
        Names of team members, empty for individual entries.
    registered_at : datetime
        When the participant was registered (timezone aware, UTC).
    seed : int or None
        1-based registration order, ``None`` until registered.
    """

    id: str
    name: str
    team_members: Tuple[str, ...] = ()
    registered_at: datetime = field(default_factory=_utc_now)
    seed: Optional[int] = None

    @classmethod
    def create(
        cls,
        participant_id: str,
        name: str,
        team_members: Optional[Any] = None,
        registered_at: Optional[datetime] = None,
    ) -> "Participant":
        """Create a validated, unseeded participant.

        Raises:
            InvalidParticipantDataException: If the id, name or team members are invalid
        """
        participant_id, name, members = validate_participant_strict(
            participant_id, name, team_members
        )
        return cls(
            id=participant_id,
            name=name,
            team_members=members,
            registered_at=registered_at or _utc_now(),
        )

    @property
    def is_team(self) -> bool:
        """Does this entry represent a team?"""
        return bool(self.team_members)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "team_members": list(self.team_members),
            "registered_at": self.registered_at.isoformat(),
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Deserialize participant from dictionary.

        ``registered_at`` may be any ISO-8601 string; naive timestamps are
        taken to be UTC.
        """
        registered_at = data.get("registered_at")
        if isinstance(registered_at, str):
            try:
                registered_at = date_parser.isoparse(registered_at)
            except ValueError:
                logger.warning(
                    "Invalid registration timestamp for %s: %s",
                    data.get("id"),
                    registered_at,
                )
                registered_at = None
        if isinstance(registered_at, datetime) and registered_at.tzinfo is None:
            registered_at = registered_at.replace(tzinfo=timezone.utc)

        participant_id, name, members = validate_participant_strict(
            data.get("id"), data.get("name"), data.get("team_members")
        )
        return cls(
            id=participant_id,
            name=name,
            team_members=members,
            registered_at=registered_at or _utc_now(),
            seed=data.get("seed"),
        )


#  LocalWords:  Participant
