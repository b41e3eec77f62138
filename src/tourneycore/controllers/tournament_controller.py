"""Boundary controller for tournament operations.

The controller is the seam between the engine and an outer surface such
as an HTTP handler or a command line tool. Every call returns an
``OperationResult``: engine exceptions are caught here and reduced to
their stable ``kind`` and message, so no traceback crosses the boundary.
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

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence

from tourneycore.exceptions import TourneyCoreException
from tourneycore.models.tournament.tournament import Tournament
from tourneycore.models.tournament.tournament_config import TournamentConfig
from tourneycore.type_hints import Score
from tourneycore.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class OperationResult:
    """Outcome of a controller call.

    Attributes:
        success: Whether the operation was applied
        data: JSON-serialisable payload on success
        error_kind: Stable error kind on failure, e.g. ``"AlreadyResolved"``
        message: Human readable error description on failure
    """

    success: bool
    data: Any = None
    error_kind: Optional[str] = None
    message: Optional[str] = None

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.success

    def __repr__(self) -> str:
        status = "SUCCESS" if self.success else f"FAILED({self.error_kind})"
        return f"OperationResult({status})"

    @classmethod
    def ok(cls, data: Any = None) -> "OperationResult":
        return cls(success=True, data=data)

    @classmethod
    def failed(cls, error: TourneyCoreException) -> "OperationResult":
        return cls(success=False, error_kind=error.kind, message=error.message)

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "data": self.data}
        return {
            "success": False,
            "error": {"kind": self.error_kind, "message": self.message},
        }


class TournamentController:
    """Exposes tournament operations as result-returning calls.

    Example:
        >>> controller = TournamentController.new({"name": "Spring Cup"})
        >>> controller.register("p1", "Alice").success
        True
        >>> controller.start().error_kind
        'InsufficientParticipants'
    """

    def __init__(self, tournament: Tournament) -> None:
        self.tournament = tournament

    @classmethod
    def new(cls, settings: Optional[Dict[str, Any]] = None) -> "TournamentController":
        """Create a controller around a fresh tournament.

        Args:
            settings: Configuration dictionary as accepted by
                ``TournamentConfig.from_dict``

        Raises:
            InvalidConfigurationException: If the settings are invalid
        """
        config = TournamentConfig.from_dict(settings or {})
        return cls(
            Tournament(
                name=config.name,
                tournament_format=config.tournament_format,
                points_system=config.points_system,
                min_participants=config.min_participants,
                max_participants=config.max_participants,
                description=config.description,
                start_date=config.start_date,
            )
        )

    def _run(self, operation: str, call: Callable[[], Any]) -> OperationResult:
        try:
            data = call()
        except TourneyCoreException as e:
            logger.warning(
                f"{operation} rejected on {self.tournament.name}: {e.kind}: {e.message}"
            )
            return OperationResult.failed(e)
        return OperationResult.ok(data)

    # ========== Commands ==========

    def register(
        self,
        participant_id: str,
        name: str,
        team_members: Optional[Sequence[str]] = None,
    ) -> OperationResult:
        return self._run(
            "register",
            lambda: self.tournament.add_participant(
                participant_id, name, team_members
            ).to_dict(),
        )

    def start(self) -> OperationResult:
        return self._run("start", lambda: self.tournament.start().to_dict())

    def submit_result(
        self, match_id: str, winner_id: str, score: Score = None
    ) -> OperationResult:
        return self._run(
            "submit_result",
            lambda: self.tournament.submit_result(match_id, winner_id, score).to_dict(),
        )

    def correct_result(
        self, match_id: str, winner_id: str, score: Score = None
    ) -> OperationResult:
        return self._run(
            "correct_result",
            lambda: self.tournament.correct_result(match_id, winner_id, score).to_dict(),
        )

    def withdraw(self, participant_id: str) -> OperationResult:
        return self._run(
            "withdraw",
            lambda: [m.to_dict() for m in self.tournament.withdraw(participant_id)],
        )

    def cancel(self) -> OperationResult:
        return self._run("cancel", lambda: self.tournament.cancel().to_dict())

    # ========== Queries ==========

    def get_bracket(self) -> OperationResult:
        return self._run("get_bracket", self.tournament.get_bracket)

    def get_standings(self) -> OperationResult:
        return self._run("get_standings", self.tournament.get_standings)

    def get_pending_matches(self) -> OperationResult:
        return self._run(
            "get_pending_matches",
            lambda: [m.to_dict() for m in self.tournament.get_pending_matches()],
        )

    def get_winner(self) -> OperationResult:
        def winner() -> Optional[Dict[str, Any]]:
            participant = self.tournament.get_winner()
            return participant.to_dict() if participant else None

        return self._run("get_winner", winner)

    def get_tournament(self) -> OperationResult:
        return self._run("get_tournament", self.tournament.to_dict)
