"""Testing CLI for Tourney Core.

This module provides the ``tourney-test`` command line interface for
generating random tournaments and validating saved tournament state.
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

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from tourneycore.constants import FORMAT_SINGLE_ELIMINATION, SUPPORTED_FORMATS
from tourneycore.exceptions import TourneyCoreException
from tourneycore.utils import configure_logging, setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


def run_generate_command(args: argparse.Namespace) -> int:
    """Run the generate (RTG) command."""
    from tourneycore.testing.rtg import RandomTournamentGenerator, ResultPattern, RTGConfig

    print(f"\n{Colors.BOLD}Generating tournament...{Colors.ENDC}")

    config = RTGConfig(
        num_participants=args.participants,
        tournament_format=args.format,
        seed=args.seed,
        draw_percentage=args.draw_percentage,
        result_pattern=ResultPattern[args.pattern.upper()],
        withdraw_rate=args.withdraw_rate,
        team_size=args.team_size,
        validate=args.validate,
    )

    try:
        rtg = RandomTournamentGenerator(config)
        tournament_data = rtg.generate_complete_tournament()
    except (TourneyCoreException, ValueError) as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return 1

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(rtg.export_json_format(tournament_data), encoding="utf-8")
        print(f"{Colors.OKGREEN}Tournament saved to: {output_path}{Colors.ENDC}")

    tournament = tournament_data["tournament"]
    winner = tournament.get_winner()
    print(f"\n{Colors.BOLD}Tournament Generated:{Colors.ENDC}")
    print(f"  Participants: {tournament.roster.count()}")
    print(f"  Matches: {len(tournament.get_matches())}")
    print(f"  Status: {tournament.status}")
    print(f"  Winner: {winner.name if winner else 'N/A'}")

    if "validation_report" in tournament_data:
        report = tournament_data["validation_report"]
        print(f"\n{Colors.BOLD}Structure:{Colors.ENDC}")
        color = Colors.FAIL if report["overall_status"] == "VIOLATION" else Colors.OKGREEN
        print(f"  {color}{report['summary']}{Colors.ENDC}")
        if report["overall_status"] == "VIOLATION":
            return 1

    return 0


def run_validate_command(args: argparse.Namespace) -> int:
    """Run the validation command."""
    from tourneycore.models.tournament.tournament import Tournament
    from tourneycore.validation.structure import create_structure_validator

    file_path = Path(args.file)
    if not file_path.exists():
        print(f"{Colors.FAIL}Error: File not found: {file_path}{Colors.ENDC}")
        return 1

    print(f"\n{Colors.BOLD}Validating tournament: {file_path}{Colors.ENDC}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        # Files written by ``generate`` wrap the tournament state
        tournament = Tournament.from_dict(data.get("tournament", data))
    except (TourneyCoreException, KeyError, TypeError, ValueError) as e:
        print(f"{Colors.FAIL}Error: Could not load tournament: {e}{Colors.ENDC}")
        return 1

    report = create_structure_validator().validate(tournament)

    print(f"\n{Colors.BOLD}Validation Results:{Colors.ENDC}")
    print(f"  Compliance: {report.compliance_percentage:.1f}%")
    print(f"  Summary: {report.summary}")

    if args.detailed:
        print(f"\n{Colors.BOLD}Criteria:{Colors.ENDC}")
        for result in report.criteria_results:
            print(f"  - {result.criterion_id} [{result.status.value}]: {result.description}")

    if args.export:
        export_path = Path(args.export)
        if export_path.suffix == ".json":
            export_path.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")
        else:
            export_path.write_text(report.summary, encoding="utf-8")
        print(f"\n{Colors.OKGREEN}Report exported to: {export_path}{Colors.ENDC}")

    return 0 if report.is_valid else 1


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="tourney-test",
        description="Testing CLI for Tourney Core",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate and validate a bracket
  tourney-test generate --participants 13 --seed 7 --validate

  # Generate a round robin and save it
  tourney-test generate --format round-robin --participants 6 --output rr.json

  # Validate saved tournament state
  tourney-test validate --file rr.json --detailed
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    gen_parser = subparsers.add_parser("generate", help="Generate random tournaments")
    gen_parser.add_argument("--participants", type=int, default=8)
    gen_parser.add_argument(
        "--format", choices=list(SUPPORTED_FORMATS), default=FORMAT_SINGLE_ELIMINATION
    )
    gen_parser.add_argument(
        "--pattern",
        choices=["random", "predictable", "upset_friendly"],
        default="random",
    )
    gen_parser.add_argument("--seed", type=int)
    gen_parser.add_argument("--draw-percentage", type=int, default=10)
    gen_parser.add_argument("--withdraw-rate", type=float, default=0.0)
    gen_parser.add_argument("--team-size", type=int, default=0)
    gen_parser.add_argument("--output")
    gen_parser.add_argument("--validate", action="store_true")
    gen_parser.set_defaults(func=run_generate_command)

    val_parser = subparsers.add_parser("validate", help="Validate tournament structure")
    val_parser.add_argument("--file", required=True)
    val_parser.add_argument("--detailed", action="store_true")
    val_parser.add_argument("--export")
    val_parser.set_defaults(func=run_validate_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for tourney-test CLI."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
