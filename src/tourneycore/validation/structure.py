"""Structure checker for tournament match graphs.

This module verifies that a tournament's bracket or round-robin schedule
is internally consistent: round sizes, winner propagation, bye handling,
pairing coverage and standings. It is used by the random tournament
generator and the ``tourney-test validate`` command, and is handy when
loading state that was persisted elsewhere.
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

from dataclasses import dataclass, field
from enum import Enum
from itertools import combinations
from typing import Any, Dict, List, Optional, Set

from tourneycore.controllers.tournament.standings_calculator import (
    StandingsCalculator,
)
from tourneycore.models.tournament.bracket import Bracket
from tourneycore.models.tournament.schedule import RoundRobinSchedule
from tourneycore.models.tournament.tournament import Tournament
from tourneycore.utils import setup_logger

logger = setup_logger(__name__)


class CriterionStatus(Enum):
    """Status of a structure criterion."""

    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class ViolationType(Enum):
    """Types of structure violations."""

    STRUCTURAL = "STRUCTURAL"  # Broken match graph
    CONSISTENCY = "CONSISTENCY"  # Derived data out of date


@dataclass
class CriterionResult:
    """Result of checking a single criterion."""

    criterion: str
    status: CriterionStatus
    violation_type: Optional[ViolationType] = None
    description: str = ""
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def criterion_id(self) -> str:
        """Extract criterion ID from criterion string."""
        return self.criterion.split(":")[0].strip()

    @property
    def is_violation(self) -> bool:
        return self.status == CriterionStatus.VIOLATION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "criterion": self.criterion,
            "status": self.status.value,
            "violation_type": self.violation_type.value if self.violation_type else None,
            "description": self.description,
            "details": self.details,
        }


@dataclass
class ValidationReport:
    """Complete structure report for one tournament."""

    total_criteria: int
    compliant_count: int
    violations: List[CriterionResult]
    overall_status: CriterionStatus
    summary: str
    criteria_results: List[CriterionResult] = field(default_factory=list)

    @property
    def compliance_percentage(self) -> float:
        """Calculate compliance percentage."""
        if self.total_criteria == 0:
            return 100.0
        return (self.compliant_count / self.total_criteria) * 100.0

    @property
    def is_valid(self) -> bool:
        return self.overall_status != CriterionStatus.VIOLATION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall_status": self.overall_status.value,
            "summary": self.summary,
            "total_criteria": self.total_criteria,
            "compliant_count": self.compliant_count,
            "compliance_percentage": self.compliance_percentage,
            "criteria": [r.to_dict() for r in self.criteria_results],
        }


def _compliant(criterion: str, description: str) -> CriterionResult:
    return CriterionResult(
        criterion=criterion, status=CriterionStatus.COMPLIANT, description=description
    )


def _not_applicable(criterion: str, description: str) -> CriterionResult:
    return CriterionResult(
        criterion=criterion,
        status=CriterionStatus.NOT_APPLICABLE,
        description=description,
    )


def _violation(
    criterion: str,
    description: str,
    details: Optional[Dict[str, Any]] = None,
    violation_type: ViolationType = ViolationType.STRUCTURAL,
) -> CriterionResult:
    return CriterionResult(
        criterion=criterion,
        status=CriterionStatus.VIOLATION,
        violation_type=violation_type,
        description=description,
        details=details or {},
    )


class BracketCriteriaChecker:
    """Checks single-elimination brackets (B1-B4)."""

    def check_b1_round_sizes(self, bracket: Bracket) -> CriterionResult:
        """B1: Round r of a bracket of size S holds S / 2**r matches."""
        size = bracket.size
        if size < 2 or size & (size - 1):
            return _violation(
                "B1", f"Bracket size {size} is not a power of two", {"size": size}
            )

        expected_rounds = size.bit_length() - 1
        if bracket.num_rounds != expected_rounds:
            return _violation(
                "B1",
                f"Bracket of size {size} has {bracket.num_rounds} rounds, "
                f"expected {expected_rounds}",
                {"size": size, "rounds": bracket.num_rounds},
            )

        for round_number in range(1, expected_rounds + 1):
            matches = bracket.round_matches(round_number)
            expected = size >> round_number
            if len(matches) != expected:
                return _violation(
                    "B1",
                    f"Round {round_number} has {len(matches)} matches, expected {expected}",
                    {"round": round_number},
                )
            for position, match in enumerate(matches):
                if match.round_number != round_number or match.position != position:
                    return _violation(
                        "B1",
                        f"Match {match.match_id} is stored at round {round_number} "
                        f"position {position} but addressed as "
                        f"({match.round_number}, {match.position})",
                        {"match_id": match.match_id},
                    )

        return _compliant("B1", f"{expected_rounds} rounds of the expected size")

    def check_b2_feed_consistency(self, bracket: Bracket) -> CriterionResult:
        """B2: Every later-round slot holds exactly what its feeding match produced."""
        for match in bracket.matches():
            link = bracket.next_slot(match)
            if link is None:
                continue
            target, slot_index = link
            slot = target.slots[slot_index]

            if not match.is_completed:
                if not slot.is_pending:
                    return _violation(
                        "B2",
                        f"{target.match_id} slot {slot_index} is filled before "
                        f"{match.match_id} was decided",
                        {"match_id": target.match_id, "feeder": match.match_id},
                    )
            elif match.winner_id is None:
                if not slot.is_bye:
                    return _violation(
                        "B2",
                        f"{match.match_id} passed on a bye but {target.match_id} "
                        f"slot {slot_index} is not a bye",
                        {"match_id": target.match_id, "feeder": match.match_id},
                    )
            elif slot.is_bye and match.winner_id in bracket.withdrawn:
                continue
            elif slot.participant_id != match.winner_id:
                return _violation(
                    "B2",
                    f"Winner of {match.match_id} ({match.winner_id}) did not "
                    f"advance to {target.match_id}",
                    {
                        "match_id": target.match_id,
                        "feeder": match.match_id,
                        "expected": match.winner_id,
                        "found": slot.participant_id,
                    },
                )

        return _compliant("B2", "All winners propagated to the correct slot")

    def check_b3_bye_resolution(self, bracket: Bracket) -> CriterionResult:
        """B3: A match facing a bye is resolved as a walkover without a score."""
        for match in bracket.matches():
            if not match.has_bye or any(s.is_pending for s in match.slots):
                continue
            if not match.is_completed or not match.is_walkover:
                return _violation(
                    "B3",
                    f"Match {match.match_id} has a bye but was not auto-resolved",
                    {"match_id": match.match_id},
                )
            expected = next(
                (s.participant_id for s in match.slots if s.is_filled), None
            )
            if match.winner_id != expected or match.score is not None:
                return _violation(
                    "B3",
                    f"Bye match {match.match_id} has winner {match.winner_id}, "
                    f"expected {expected}",
                    {"match_id": match.match_id},
                )

        return _compliant("B3", "All bye matches auto-resolved")

    def check_b4_champion(self, bracket: Bracket) -> CriterionResult:
        """B4: The champion is the winner of the final, and only once it is decided."""
        final = bracket.final
        if final is None:
            return _not_applicable("B4", "Bracket has no rounds")
        if not final.is_completed:
            if bracket.champion_id is not None:
                return _violation(
                    "B4",
                    f"Champion {bracket.champion_id} set before the final was decided",
                )
            return _not_applicable("B4", "Final not decided yet")
        if bracket.champion_id != final.winner_id:
            return _violation(
                "B4",
                f"Champion {bracket.champion_id} is not the final winner "
                f"{final.winner_id}",
            )
        return _compliant("B4", f"Champion {bracket.champion_id} won the final")


class RoundRobinCriteriaChecker:
    """Checks round-robin schedules (R1-R4)."""

    def check_r1_pair_uniqueness(self, schedule: RoundRobinSchedule) -> CriterionResult:
        """R1: No two participants are paired more than once."""
        seen: Set[frozenset] = set()
        for match in schedule.matches:
            pair = frozenset(match.participant_ids)
            if pair in seen:
                return _violation(
                    "R1",
                    f"Repeat pairing in {match.match_id}: {' vs '.join(sorted(pair))}",
                    {"match_id": match.match_id, "participants": sorted(pair)},
                )
            seen.add(pair)
        return _compliant("R1", "No repeat pairings found")

    def check_r2_pair_completeness(
        self, schedule: RoundRobinSchedule, participant_ids: List[str]
    ) -> CriterionResult:
        """R2: Every pair of participants is scheduled."""
        scheduled = {frozenset(m.participant_ids) for m in schedule.matches}
        missing = [
            sorted(pair)
            for pair in (frozenset(p) for p in combinations(participant_ids, 2))
            if pair not in scheduled
        ]
        if missing:
            return _violation(
                "R2",
                f"{len(missing)} pairings missing from the schedule",
                {"missing": missing},
            )
        return _compliant(
            "R2", f"All {len(participant_ids) * (len(participant_ids) - 1) // 2} pairings scheduled"
        )

    def check_r3_no_bye_pairings(self, schedule: RoundRobinSchedule) -> CriterionResult:
        """R3: Pairings against the padding bye are never stored."""
        for match in schedule.matches:
            if len(match.participant_ids) != 2:
                return _violation(
                    "R3",
                    f"Match {match.match_id} does not have two participants",
                    {"match_id": match.match_id},
                )
        return _compliant("R3", "Every stored match has two participants")

    def check_r4_round_count(
        self, schedule: RoundRobinSchedule, participant_ids: List[str]
    ) -> CriterionResult:
        """R4: n - 1 rounds for an even field, n for odd, nobody twice in a round."""
        n = len(participant_ids)
        expected = n - 1 if n % 2 == 0 else n
        if schedule.num_rounds != expected:
            return _violation(
                "R4",
                f"{schedule.num_rounds} rounds scheduled for {n} participants, "
                f"expected {expected}",
                {"rounds": schedule.num_rounds, "expected": expected},
            )
        for round_number in range(1, expected + 1):
            seen: Set[str] = set()
            for match in schedule.round_matches(round_number):
                for participant_id in match.participant_ids:
                    if participant_id in seen:
                        return _violation(
                            "R4",
                            f"{participant_id} plays twice in round {round_number}",
                            {"round": round_number, "participant_id": participant_id},
                        )
                    seen.add(participant_id)
        return _compliant("R4", f"{expected} rounds, one match per participant per round")


class StructureValidator:
    """Main tournament structure validator."""

    def __init__(self) -> None:
        self.bracket_checker = BracketCriteriaChecker()
        self.round_robin_checker = RoundRobinCriteriaChecker()
        self.standings_calculator = StandingsCalculator()

    def check_s1_standings(self, tournament: Tournament) -> CriterionResult:
        """S1: Stored standings equal a fresh recomputation."""
        if tournament.schedule is None:
            return _not_applicable("S1", "No schedule built yet")
        expected = [
            s.to_dict()
            for s in self.standings_calculator.recompute(
                tournament.schedule, tournament.roster.list(), tournament.points_system
            )
        ]
        stored = [s.to_dict() for s in tournament.standings]
        if stored != expected:
            return _violation(
                "S1",
                "Stored standings differ from recomputed standings",
                {"stored": stored, "expected": expected},
                violation_type=ViolationType.CONSISTENCY,
            )
        return _compliant("S1", "Standings match the match history")

    def validate(self, tournament: Tournament) -> ValidationReport:
        """Validate a tournament's bracket or schedule."""
        logger.info(f"Starting structure validation for {tournament.name}")

        results: List[CriterionResult] = []
        if tournament.bracket is not None:
            bracket = tournament.bracket
            results.extend(
                [
                    self.bracket_checker.check_b1_round_sizes(bracket),
                    self.bracket_checker.check_b2_feed_consistency(bracket),
                    self.bracket_checker.check_b3_bye_resolution(bracket),
                    self.bracket_checker.check_b4_champion(bracket),
                ]
            )
        elif tournament.schedule is not None:
            schedule = tournament.schedule
            participant_ids = tournament.roster.ids()
            results.extend(
                [
                    self.round_robin_checker.check_r1_pair_uniqueness(schedule),
                    self.round_robin_checker.check_r2_pair_completeness(
                        schedule, participant_ids
                    ),
                    self.round_robin_checker.check_r3_no_bye_pairings(schedule),
                    self.round_robin_checker.check_r4_round_count(
                        schedule, participant_ids
                    ),
                    self.check_s1_standings(tournament),
                ]
            )
        else:
            results.append(
                _not_applicable("S0", f"Tournament is {tournament.status}, nothing built")
            )

        violations = [r for r in results if r.is_violation]
        compliant_count = sum(1 for r in results if r.status == CriterionStatus.COMPLIANT)
        overall_status = (
            CriterionStatus.VIOLATION if violations else CriterionStatus.COMPLIANT
        )

        if violations:
            summary = (
                f"Structure validation failed - {len(violations)} criteria violated "
                f"({' '.join(v.criterion_id for v in violations)})"
            )
        else:
            summary = "Structure validation complete"

        logger.info(f"Structure validation complete: {summary}")

        return ValidationReport(
            total_criteria=len(results),
            compliant_count=compliant_count,
            violations=violations,
            overall_status=overall_status,
            summary=summary,
            criteria_results=results,
        )


def create_structure_validator() -> StructureValidator:
    """Create structure validator instance."""
    return StructureValidator()


def validate_tournament_structure(tournament: Tournament) -> ValidationReport:
    """Quick validation function for a tournament."""
    return create_structure_validator().validate(tournament)
