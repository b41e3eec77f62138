"""Main Tournament class - orchestrates all tournament operations.

This is the primary interface for tournament management. It owns the
roster and exactly one match structure, drives the status lifecycle and
delegates scheduling work to the specialised schedulers.
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

import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from dateutil import parser as date_parser

from tourneycore.constants import (
    DEFAULT_FORMAT,
    DEFAULT_MIN_PARTICIPANTS,
    DEFAULT_TOURNAMENT_NAME,
    FORMAT_ROUND_ROBIN,
    FORMAT_SINGLE_ELIMINATION,
    STATUS_ACTIVE,
    STATUS_CANCELLED,
    STATUS_COMPLETED,
    STATUS_REGISTRATION,
    TERMINAL_STATUSES,
)
from tourneycore.controllers.tournament.bracket_scheduler import BracketScheduler
from tourneycore.controllers.tournament.roster import ParticipantRoster
from tourneycore.controllers.tournament.round_robin_scheduler import (
    RoundRobinScheduler,
)
from tourneycore.controllers.tournament.standings_calculator import (
    StandingsCalculator,
)
from tourneycore.exceptions import (
    InsufficientParticipantsException,
    InvalidParticipantDataException,
    InvalidTransitionException,
    NotActiveException,
    RegistrationClosedException,
    WrongFormatException,
)
from tourneycore.models.participant.participant import Participant
from tourneycore.type_hints import BracketView, MatchDict, Score
from tourneycore.utils import generate_id, setup_logger

from .bracket import Bracket
from .match import Match
from .schedule import RoundRobinSchedule
from .standing import Standing
from .tournament_config import PointsSystem, TournamentConfig

logger = setup_logger(__name__)


class Tournament:
    """Main tournament management class.

    This class coordinates all tournament operations through specialized managers:
    - ParticipantRoster: registration and seeding
    - BracketScheduler: single-elimination brackets
    - RoundRobinScheduler: all-play-all schedules
    - StandingsCalculator: round-robin standings

    Status lifecycle::

        registration -> active -> completed
        registration -> cancelled
        active       -> cancelled

    Every mutating operation runs under a per-instance lock and validates
    before it writes, so an operation either applies fully or raises with
    no visible change. Tournaments share no state with each other.
    """

    def __init__(
        self,
        name: str = DEFAULT_TOURNAMENT_NAME,
        tournament_format: str = DEFAULT_FORMAT,
        points_system: Optional[PointsSystem] = None,
        min_participants: int = DEFAULT_MIN_PARTICIPANTS,
        max_participants: Optional[int] = None,
        description: str = "",
        start_date: Optional[datetime] = None,
        tournament_id: Optional[str] = None,
    ) -> None:
        """Initialize a new tournament in registration status.

        Args
        ----
        name: Tournament name
        tournament_format: 'single-elimination' or 'round-robin'
        points_system: Round-robin points, defaults to win 3 / loss 0 / draw 1
        min_participants: Participants required to start (default 4, floor 2)
        max_participants: Roster capacity, unlimited when None
        description: Free text
        start_date: Opaque scheduling metadata
        tournament_id: Existing id, generated when omitted

        Raises
        ------
        InvalidConfigurationException: If any setting is invalid
        """
        # Configuration
        self.config = TournamentConfig(
            name=name,
            tournament_format=tournament_format,
            points_system=points_system or PointsSystem(),
            min_participants=min_participants,
            max_participants=max_participants,
            description=description,
            start_date=start_date,
        )
        self.id: str = tournament_id or generate_id(self.__class__.__name__)

        # Participants
        self.roster = ParticipantRoster(max_participants=max_participants)

        # State
        self.status: str = STATUS_REGISTRATION
        self.bracket: Optional[Bracket] = None
        self.schedule: Optional[RoundRobinSchedule] = None
        self.standings: List[Standing] = []
        self.current_round: int = 0
        self.winner_id: Optional[str] = None
        self.created_at: datetime = datetime.now(timezone.utc)
        self.updated_at: datetime = self.created_at

        # Specialized managers
        self.bracket_scheduler = BracketScheduler()
        self.round_robin_scheduler = RoundRobinScheduler()
        self.standings_calculator = StandingsCalculator()

        self._lock = threading.RLock()

    # ========== Properties ==========

    @property
    def name(self) -> str:
        """Get tournament name."""
        return self.config.name

    @property
    def tournament_format(self) -> str:
        """Get tournament format."""
        return self.config.tournament_format

    @property
    def points_system(self) -> PointsSystem:
        return self.config.points_system

    @property
    def is_bracket(self) -> bool:
        return self.config.tournament_format == FORMAT_SINGLE_ELIMINATION

    @property
    def is_round_robin(self) -> bool:
        return self.config.tournament_format == FORMAT_ROUND_ROBIN

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE

    @property
    def is_finished(self) -> bool:
        """Is the tournament completed or cancelled?"""
        return self.status in TERMINAL_STATUSES

    # ========== Registration ==========

    def register(self, participant: Participant) -> Participant:
        """Register a participant.

        Args:
            participant: Participant to add

        Returns:
            The participant as stored, with its seed assigned

        Raises:
            RegistrationClosedException: If status is not 'registration'
            DuplicateParticipantException: If the id is already registered
            RosterFullException: If the roster is at capacity
        """
        with self._lock:
            if self.status != STATUS_REGISTRATION:
                raise RegistrationClosedException(
                    f"Tournament is {self.status}, registration is closed"
                )
            seeded = self.roster.register(participant)
            self._touch()
            return seeded

    def add_participant(
        self,
        participant_id: str,
        name: str,
        team_members: Optional[Sequence[str]] = None,
    ) -> Participant:
        """Create and register a participant from plain data.

        Raises:
            InvalidParticipantDataException: If the data is invalid
        """
        return self.register(Participant.create(participant_id, name, team_members))

    # ========== Lifecycle ==========

    def start(self) -> "Tournament":
        """Close registration and build the schedule.

        Raises:
            InvalidTransitionException: If status is not 'registration'
            InsufficientParticipantsException: If below the minimum participant count
        """
        with self._lock:
            if self.status != STATUS_REGISTRATION:
                raise InvalidTransitionException(
                    f"Cannot start a tournament that is {self.status}"
                )
            count = self.roster.count()
            if count < self.config.min_participants:
                raise InsufficientParticipantsException(
                    f"Minimum {self.config.min_participants} participants required "
                    f"to start tournament, {count} registered"
                )

            participants = self.roster.list()
            if self.is_bracket:
                self.bracket = self.bracket_scheduler.build(participants)
            else:
                self.schedule = self.round_robin_scheduler.build(participants)

            self.roster.close()
            self.status = STATUS_ACTIVE
            self.current_round = 1
            self._after_change()
            self._touch()

            logger.info(
                f"Started tournament {self.name} ({self.tournament_format}) "
                f"with {count} participants"
            )
            return self

    def cancel(self) -> "Tournament":
        """Cancel the tournament.

        Raises:
            InvalidTransitionException: If already completed or cancelled
        """
        with self._lock:
            if self.status not in (STATUS_REGISTRATION, STATUS_ACTIVE):
                raise InvalidTransitionException(
                    f"Cannot cancel a tournament that is {self.status}"
                )
            self.status = STATUS_CANCELLED
            self.roster.close()
            self._touch()
            logger.info(f"Cancelled tournament {self.name}")
            return self

    # ========== Results ==========

    def submit_result(
        self, match_id: str, winner_id: str, score: Score = None
    ) -> Match:
        """Record a match result.

        Args:
            match_id: Match to record
            winner_id: Winning participant id, or 'draw' in a round robin
            score: Opaque score payload

        Returns:
            The updated match

        Raises:
            NotActiveException: If the tournament is not active
            MatchNotFoundException: If the match does not exist
            AlreadyResolvedException: If the match already has a result
            MatchNotReadyException: If a bracket match still lacks a participant
            InvalidWinnerException: If the winner is not in the match
        """
        with self._lock:
            self._require_active("submit results")
            if self.is_bracket:
                match = self.bracket_scheduler.submit_result(
                    self.bracket, match_id, winner_id, score
                )
            else:
                match = self.round_robin_scheduler.submit_result(
                    self.schedule, match_id, winner_id, score
                )
            self._after_change()
            self._touch()
            return match

    def correct_result(
        self, match_id: str, winner_id: str, score: Score = None
    ) -> Match:
        """Replace a previously recorded result.

        Round-robin results can always be corrected while the tournament is
        active. A bracket result can be corrected until the match it feeds
        has been decided.

        Raises:
            NotActiveException: If the tournament is not active
            CorrectionNotAllowedException: If the result can no longer change
        """
        with self._lock:
            self._require_active("correct results")
            if self.is_bracket:
                match = self.bracket_scheduler.correct_result(
                    self.bracket, match_id, winner_id, score
                )
            else:
                match = self.round_robin_scheduler.correct_result(
                    self.schedule, match_id, winner_id, score
                )
            self._after_change()
            self._touch()
            return match

    def withdraw(self, participant_id: str) -> List[Match]:
        """Withdraw a participant from an active tournament.

        Returns:
            Matches resolved by walkover as a result

        Raises:
            NotActiveException: If the tournament is not active
            InvalidParticipantDataException: If the participant is not registered
        """
        with self._lock:
            self._require_active("withdraw participants")
            if participant_id not in self.roster:
                raise InvalidParticipantDataException(
                    f"Participant '{participant_id}' is not registered"
                )
            if self.is_bracket:
                resolved = self.bracket_scheduler.withdraw(self.bracket, participant_id)
            else:
                resolved = self.round_robin_scheduler.withdraw(
                    self.schedule, participant_id
                )
            self._after_change()
            self._touch()
            return resolved

    def _require_active(self, action: str) -> None:
        if self.status != STATUS_ACTIVE:
            raise NotActiveException(
                f"Cannot {action}: tournament is {self.status}"
            )

    def _after_change(self) -> None:
        """Advance the round pointer and detect completion."""
        if self.is_bracket:
            bracket = self.bracket
            while (
                self.current_round < bracket.num_rounds
                and bracket.is_round_resolved(self.current_round)
            ):
                self.current_round += 1
                logger.info(f"{self.name}: advanced to round {self.current_round}")
            if bracket.is_resolved:
                self._complete(bracket.champion_id)
        else:
            schedule = self.schedule
            self.standings = self.standings_calculator.recompute(
                schedule, self.roster.list(), self.points_system
            )
            while (
                self.current_round < schedule.num_rounds
                and schedule.is_round_resolved(self.current_round)
            ):
                self.current_round += 1
            if schedule.is_complete:
                self._complete(self.standings[0].participant_id)

    def _complete(self, winner_id: Optional[str]) -> None:
        self.status = STATUS_COMPLETED
        self.winner_id = winner_id
        logger.info(f"Tournament {self.name} completed, winner: {winner_id}")

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)

    # ========== Read Projections ==========

    def get_match(self, match_id: str) -> Optional[Match]:
        if self.bracket is not None:
            return self.bracket.get_match(match_id)
        if self.schedule is not None:
            return self.schedule.get_match(match_id)
        return None

    def get_matches(self) -> List[Match]:
        """All matches created so far, in round order."""
        if self.bracket is not None:
            return list(self.bracket.matches())
        if self.schedule is not None:
            return list(self.schedule.matches)
        return []

    def get_pending_matches(self) -> List[Match]:
        """Matches that have both participants and still need a result."""
        return [m for m in self.get_matches() if m.is_ready]

    def get_bracket(self) -> BracketView:
        """Bracket as rounds of match dictionaries, for rendering.

        Raises:
            WrongFormatException: If this is not an elimination tournament
        """
        if not self.is_bracket:
            raise WrongFormatException("Only elimination tournaments have brackets")
        if self.bracket is None:
            return []
        return [[m.to_dict() for m in r] for r in self.bracket.rounds]

    def get_standings(self) -> List[Dict[str, Any]]:
        """Current standings table as dictionaries.

        Raises:
            WrongFormatException: If this is not a round-robin tournament
        """
        if not self.is_round_robin:
            raise WrongFormatException("Only round-robin tournaments have standings")
        return [s.to_dict() for s in self.standings]

    def get_winner(self) -> Optional[Participant]:
        if self.winner_id is None:
            return None
        return self.roster.get(self.winner_id)

    def get_match_list(self) -> List[MatchDict]:
        return [m.to_dict() for m in self.get_matches()]

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary.

        Returns:
            Dictionary containing all tournament data
        """
        with self._lock:
            return {
                "id": self.id,
                "config": self.config.to_dict(),
                "status": self.status,
                "current_round": self.current_round,
                "winner_id": self.winner_id,
                "roster": self.roster.to_dict(),
                "bracket": self.bracket.to_dict() if self.bracket else None,
                "schedule": self.schedule.to_dict() if self.schedule else None,
                "standings": [s.to_dict() for s in self.standings],
                "created_at": self.created_at.isoformat(),
                "updated_at": self.updated_at.isoformat(),
            }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary.

        Args:
            data: Dictionary produced by ``to_dict``

        Returns:
            Reconstructed Tournament object
        """
        config = TournamentConfig.from_dict(data.get("config", {}))
        tournament = cls(
            name=config.name,
            tournament_format=config.tournament_format,
            points_system=config.points_system,
            min_participants=config.min_participants,
            max_participants=config.max_participants,
            description=config.description,
            start_date=config.start_date,
            tournament_id=data.get("id"),
        )

        tournament.roster = ParticipantRoster.from_dict(data.get("roster", {}))
        tournament.status = data.get("status", STATUS_REGISTRATION)
        tournament.current_round = data.get("current_round", 0)
        tournament.winner_id = data.get("winner_id")
        if data.get("bracket"):
            tournament.bracket = Bracket.from_dict(data["bracket"])
        if data.get("schedule"):
            tournament.schedule = RoundRobinSchedule.from_dict(data["schedule"])
        tournament.standings = [Standing.from_dict(s) for s in data.get("standings", [])]

        for attr in ("created_at", "updated_at"):
            value = data.get(attr)
            if isinstance(value, str):
                setattr(tournament, attr, date_parser.isoparse(value))

        logger.info(f"Loaded tournament: {tournament.name} ({tournament.status})")
        return tournament
