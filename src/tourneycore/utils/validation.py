"""Validation utilities for Tourney Core.

This module provides reusable validation functions with consistent error handling.
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

from typing import Any, List, Optional

from tourneycore.constants import DRAW
from tourneycore.exceptions import InvalidParticipantDataException

MAX_NAME_LENGTH = 120


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Identifier Validation ==========


def validate_identifier(identifier: Any) -> ValidationResult:
    """Validate a participant identifier.

    Identifiers are opaque strings supplied by an external identity
    provider. They must be non-empty and may not collide with the draw
    sentinel used for round-robin results.

    Args:
        identifier: Value to validate

    Returns:
        ValidationResult with the stripped identifier
    """
    if not isinstance(identifier, str) or not identifier.strip():
        return ValidationResult(
            is_valid=False,
            error_message="Participant id must be a non-empty string",
        )

    identifier = identifier.strip()
    if identifier == DRAW:
        return ValidationResult(
            is_valid=False,
            error_message=f"'{DRAW}' is reserved and cannot be a participant id",
        )

    return ValidationResult(is_valid=True, sanitized_value=identifier)


# ========== Name Validation ==========


def validate_name(name: Any, required: bool = True) -> ValidationResult:
    """Validate a display name.

    Args:
        name: Name to validate
        required: Whether an empty name is invalid

    Returns:
        ValidationResult with the whitespace-normalised name
    """
    if name is None or (isinstance(name, str) and not name.strip()):
        if required:
            return ValidationResult(is_valid=False, error_message="Name is required")
        return ValidationResult(is_valid=True, sanitized_value=None)

    if not isinstance(name, str):
        return ValidationResult(
            is_valid=False, error_message=f"Name must be text, got {type(name).__name__}"
        )

    name = " ".join(name.split())
    if len(name) > MAX_NAME_LENGTH:
        return ValidationResult(
            is_valid=False,
            error_message=f"Name is too long (maximum {MAX_NAME_LENGTH} characters)",
        )

    return ValidationResult(is_valid=True, sanitized_value=name)


def validate_team_members(members: Any) -> ValidationResult:
    """Validate an optional list of team member names.

    Blank entries are dropped; anything other than a list or tuple of
    strings is rejected.
    """
    if members is None:
        return ValidationResult(is_valid=True, sanitized_value=())

    if not isinstance(members, (list, tuple)):
        return ValidationResult(
            is_valid=False, error_message="Team members must be a list of names"
        )

    cleaned: List[str] = []
    for member in members:
        result = validate_name(member, required=False)
        if not result:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid team member: {result.error_message}",
            )
        if result.sanitized_value:
            cleaned.append(result.sanitized_value)

    return ValidationResult(is_valid=True, sanitized_value=tuple(cleaned))


def validate_participant_strict(
    identifier: Any, name: Any, team_members: Any = None
) -> tuple:
    """Validate participant fields and raise on the first failure.

    Returns:
        Tuple of (identifier, name, team_members) in sanitised form

    Raises:
        InvalidParticipantDataException: If any field is invalid
    """
    errors = []
    id_result = validate_identifier(identifier)
    if not id_result:
        errors.append(id_result.error_message)
    name_result = validate_name(name)
    if not name_result:
        errors.append(name_result.error_message)
    members_result = validate_team_members(team_members)
    if not members_result:
        errors.append(members_result.error_message)

    if errors:
        raise InvalidParticipantDataException(
            f"Invalid participant data: {'; '.join(errors)}"
        )

    return (
        id_result.sanitized_value,
        name_result.sanitized_value,
        members_result.sanitized_value,
    )
