"""Exceptions for use in Tourney Core"""

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


# ========== Base Application Exception ==========


class TourneyCoreException(Exception):
    """Base exception for all Tourney Core errors.

    All custom exceptions in the engine inherit from this class. Each one
    carries a stable ``kind`` string which callers can rely on across the
    boundary, independently of the Python class hierarchy.
    """

    kind = "TourneyCoreError"

    @property
    def message(self) -> str:
        """Human readable description of the failure."""
        return str(self.args[0]) if self.args else self.kind


# ========== Roster Exceptions ==========


class RosterException(TourneyCoreException):
    """Base exception for participant registration errors."""

    pass


class DuplicateParticipantException(RosterException):
    """Raised when a participant id is already registered."""

    kind = "DuplicateParticipant"


class RegistrationClosedException(RosterException):
    """Raised when registering after the tournament left registration."""

    kind = "RegistrationClosed"


class RosterFullException(RosterException):
    """Raised when the roster has reached its configured capacity."""

    kind = "RosterFull"


class InvalidParticipantDataException(RosterException):
    """Raised when participant data is invalid or incomplete."""

    kind = "InvalidParticipantData"


# ========== Tournament Exceptions ==========


class TournamentException(TourneyCoreException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class NotActiveException(TournamentStateException):
    """Raised when a match operation is attempted on a tournament that is not active."""

    kind = "NotActive"


class InvalidTransitionException(TournamentStateException):
    """Raised when a status transition is not allowed from the current status."""

    kind = "InvalidTransition"


class InsufficientParticipantsException(TournamentException):
    """Raised when starting with fewer participants than required."""

    kind = "InsufficientParticipants"


class WrongFormatException(TournamentException):
    """Raised when a projection is requested that the format does not have."""

    kind = "WrongFormat"


# ========== Result Exceptions ==========


class ResultException(TourneyCoreException):
    """Base exception for result submission errors."""

    pass


class MatchNotFoundException(ResultException):
    """Raised when a match id does not exist in the schedule."""

    kind = "MatchNotFound"


class InvalidWinnerException(ResultException):
    """Raised when the winner is not one of the match's participants."""

    kind = "InvalidWinner"


class AlreadyResolvedException(ResultException):
    """Raised when submitting a result for a match that already has one."""

    kind = "AlreadyResolved"


class MatchNotReadyException(ResultException):
    """Raised when a match is still waiting for a participant."""

    kind = "MatchNotReady"


class CorrectionNotAllowedException(ResultException):
    """Raised when a result can no longer be corrected."""

    kind = "CorrectionNotAllowed"


# ========== Configuration Exceptions ==========


class ConfigurationException(TourneyCoreException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    kind = "InvalidConfiguration"
