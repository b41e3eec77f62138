"""TournamentConfig and PointsSystem data classes."""

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
from datetime import datetime
from numbers import Real
from typing import Any, Dict, Optional

from dateutil import parser as date_parser

from tourneycore.constants import (
    DEFAULT_DRAW_POINTS,
    DEFAULT_FORMAT,
    DEFAULT_LOSS_POINTS,
    DEFAULT_MIN_PARTICIPANTS,
    DEFAULT_TOURNAMENT_NAME,
    DEFAULT_WIN_POINTS,
    FORMAT_DOUBLE_ELIMINATION,
    STRUCTURAL_MIN_PARTICIPANTS,
    SUPPORTED_FORMATS,
)
from tourneycore.exceptions import InvalidConfigurationException
from tourneycore.utils.validation import validate_name


@dataclass
class PointsSystem:
    """Points awarded for each round-robin outcome.

    Attributes
    ----------
    win : float
        Points for a win (default 3).
    loss : float
        Points for a loss (default 0).
    draw : float
        Points for a draw (default 1).
    """

    win: float = DEFAULT_WIN_POINTS
    loss: float = DEFAULT_LOSS_POINTS
    draw: float = DEFAULT_DRAW_POINTS

    def __post_init__(self) -> None:
        for label in ("win", "loss", "draw"):
            value = getattr(self, label)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise InvalidConfigurationException(
                    f"Points for a {label} must be a number, got {value!r}"
                )

    def to_dict(self) -> Dict[str, Any]:
        return {"win": self.win, "loss": self.loss, "draw": self.draw}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PointsSystem":
        data = data or {}
        return cls(
            win=data.get("win", DEFAULT_WIN_POINTS),
            loss=data.get("loss", DEFAULT_LOSS_POINTS),
            draw=data.get("draw", DEFAULT_DRAW_POINTS),
        )


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    tournament_format : str
        ``"single-elimination"`` or ``"round-robin"``.
    points_system : PointsSystem
        Weights used for round-robin standings.
    min_participants : int
        Participants required by ``Tournament.start()``. Defaults to 4;
        may be lowered to the structural floor of 2.
    max_participants : int or None
        Roster capacity, unlimited when ``None``.
    description : str
        Free text.
    start_date : datetime or None
        Opaque scheduling metadata, never enforced by the engine.
    """

    name: str = DEFAULT_TOURNAMENT_NAME
    tournament_format: str = DEFAULT_FORMAT
    points_system: PointsSystem = field(default_factory=PointsSystem)
    min_participants: int = DEFAULT_MIN_PARTICIPANTS
    max_participants: Optional[int] = None
    description: str = ""
    start_date: Optional[datetime] = None

    def __post_init__(self) -> None:
        name_result = validate_name(self.name)
        if not name_result:
            raise InvalidConfigurationException(
                f"Invalid tournament name: {name_result.error_message}"
            )
        self.name = name_result.sanitized_value

        if self.tournament_format == FORMAT_DOUBLE_ELIMINATION:
            raise InvalidConfigurationException(
                "Double elimination is not supported yet"
            )
        if self.tournament_format not in SUPPORTED_FORMATS:
            raise InvalidConfigurationException(
                f"Tournament format must be one of {', '.join(SUPPORTED_FORMATS)}, "
                f"got {self.tournament_format!r}"
            )

        if not isinstance(self.min_participants, int) or (
            self.min_participants < STRUCTURAL_MIN_PARTICIPANTS
        ):
            raise InvalidConfigurationException(
                f"Minimum participants must be an integer of at least "
                f"{STRUCTURAL_MIN_PARTICIPANTS}"
            )
        if self.max_participants is not None and (
            not isinstance(self.max_participants, int)
            or self.max_participants < self.min_participants
        ):
            raise InvalidConfigurationException(
                f"Maximum participants ({self.max_participants}) must be at least "
                f"the minimum ({self.min_participants})"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "tournament_format": self.tournament_format,
            "points_system": self.points_system.to_dict(),
            "min_participants": self.min_participants,
            "max_participants": self.max_participants,
            "description": self.description,
            "start_date": self.start_date.isoformat() if self.start_date else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        start_date = data.get("start_date")
        if isinstance(start_date, str):
            try:
                start_date = date_parser.parse(start_date)
            except (ValueError, OverflowError) as e:
                raise InvalidConfigurationException(
                    f"Invalid start date: {start_date}"
                ) from e
        return cls(
            name=data.get("name", DEFAULT_TOURNAMENT_NAME),
            tournament_format=data.get("tournament_format", DEFAULT_FORMAT),
            points_system=PointsSystem.from_dict(data.get("points_system")),
            min_participants=data.get("min_participants", DEFAULT_MIN_PARTICIPANTS),
            max_participants=data.get("max_participants"),
            description=data.get("description", ""),
            start_date=start_date,
        )
