"""
holidaycore CLI

Command-line interface for calculating holidays from packs.

Usage:
    holidaycore calc --pack us_federal --year 2026
    holidaycore calc --pack brazil --year 2024 --locality sp_city --json
    holidaycore easter --year 2025
    holidaycore validate-pack --pack path/to/pack.yaml
    holidaycore list-packs

Exit codes:
    0  success
    10 invalid input (year, locality key)
    11 pack could not be loaded or validated
    12 a holiday could not be calculated for the year
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Optional, Sequence

from .engine.operations import applies_to, calculate_observed_date, get_date_only
from .exceptions import CalendarError, PackError, PreconditionError
from .factory import easter_sunday
from .logging_config import configure_logging
from .packs import bundled_packs, load_pack

EXIT_OK = 0
EXIT_INPUT_INVALID = 10
EXIT_PACK_ERROR = 11
EXIT_CALENDAR_ERROR = 12


def _error(message: str) -> None:
    print(f"error: {message}", file=sys.stderr)


def cmd_calc(args: argparse.Namespace) -> int:
    """List nominal and observed dates of every pack holiday for a year."""
    pack = load_pack(args.pack)

    entries = list(pack.holidays.items())
    if args.locality:
        try:
            locality = pack.locality(args.locality)
        except KeyError:
            declared = ", ".join(pack.localities)
            _error(f"unknown locality '{args.locality}' (pack declares: {declared})")
            return EXIT_INPUT_INVALID
        entries = [(key, h) for key, h in entries if applies_to(h, locality)]

    rows: list[dict[str, Any]] = []
    failed = False
    for key, holiday in entries:
        row: dict[str, Any] = {"key": key, "name": holiday.name}
        try:
            result = calculate_observed_date(holiday, args.year)
        except CalendarError as e:
            row["error"] = e.message
            failed = True
        else:
            row.update(
                variant=holiday.variant.value,
                type=holiday.type.value,
                nominal_date=result.nominal_date.isoformat(),
                observed_date=result.observed_date.isoformat(),
                shifted=result.is_shifted,
            )
        rows.append(row)

    rows.sort(key=lambda r: (r.get("nominal_date", "9999-99-99"), r["key"]))

    if args.json:
        payload = {"pack": pack.id, "year": args.year, "holidays": rows}
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(f"{pack.name} - {args.year}")
        print("-" * 60)
        for row in rows:
            if "error" in row:
                print(f"{'ERROR':<12} {row['name']}: {row['error']}")
                continue
            line = f"{row['nominal_date']:<12} {row['name']}"
            if row["shifted"]:
                line += f" (observed {row['observed_date']})"
            print(line)

    return EXIT_CALENDAR_ERROR if failed else EXIT_OK


def cmd_easter(args: argparse.Namespace) -> int:
    """Print Easter Sunday for a year."""
    print(get_date_only(easter_sunday("United States"), args.year).isoformat())
    return EXIT_OK


def cmd_validate_pack(args: argparse.Namespace) -> int:
    """Load and validate a pack."""
    pack = load_pack(args.pack)
    print(f"OK {pack.id}: {len(pack.holidays)} holidays, {len(pack.localities)} localities")
    print(f"  hash: {pack.pack_hash[:12]}")
    return EXIT_OK


def cmd_list_packs(args: argparse.Namespace) -> int:
    """List available packs."""
    for name, path in bundled_packs().items():
        print(f"{name:<20} {path}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Holiday date calculation",
        prog="holidaycore",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Log level (default from HOLIDAYCORE_LOG_LEVEL)",
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default=None,
        help="Log format (default from HOLIDAYCORE_LOG_FORMAT)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Calc command
    calc_parser = subparsers.add_parser("calc", help="Calculate a pack's holidays for a year")
    calc_parser.add_argument("--pack", required=True, help="Pack file or bundled pack name")
    calc_parser.add_argument("--year", required=True, type=int, help="Target year")
    calc_parser.add_argument("--locality", help="Only holidays applying to this pack locality key")
    calc_parser.add_argument("--json", action="store_true", help="Emit JSON")
    calc_parser.set_defaults(func=cmd_calc)

    # Easter command
    easter_parser = subparsers.add_parser("easter", help="Print Easter Sunday for a year")
    easter_parser.add_argument("--year", required=True, type=int, help="Target year")
    easter_parser.set_defaults(func=cmd_easter)

    # Validate command
    validate_parser = subparsers.add_parser("validate-pack", help="Validate a holiday pack")
    validate_parser.add_argument("--pack", required=True, help="Pack file or bundled pack name")
    validate_parser.set_defaults(func=cmd_validate_pack)

    # List command
    list_parser = subparsers.add_parser("list-packs", help="List available packs")
    list_parser.set_defaults(func=cmd_list_packs)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        configure_logging(args.log_level, args.log_format)
    except ValueError as e:
        _error(f"Invalid settings: {e}")
        return EXIT_INPUT_INVALID

    try:
        return args.func(args)
    except PreconditionError as e:
        _error(str(e))
        return EXIT_INPUT_INVALID
    except PackError as e:
        _error(str(e))
        return EXIT_PACK_ERROR
    except CalendarError as e:
        _error(str(e))
        return EXIT_CALENDAR_ERROR


if __name__ == "__main__":
    sys.exit(main())
