"""Command-line interface for the tzoverlap working-hours overlap tool."""

import argparse
import logging
import sys
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfoNotFoundError

from tzoverlap.domain.directory import CityDirectory, slugify
from tzoverlap.domain.models import SLOTS_PER_DAY, MeetingSelection
from tzoverlap.engine.planner import OverlapPlanner, PlannerConfig
from tzoverlap.engine.resolver import first_future_slot
from tzoverlap.engine.session import TimezoneSession
from tzoverlap.output.formatting import (
    format_decimal_time,
    format_duration,
    get_time_options,
)
from tzoverlap.output.pdf_generator import PDFGenerator
from tzoverlap.output.text_generator import TextReportGenerator
from tzoverlap.storage.city_store import DEFAULT_STORE_PATH, CityStore, CityStoreError
from tzoverlap.validation.validator import CityValidator

logger = logging.getLogger(__name__)


def parse_time(value: str) -> float:
    """Parse "9", "9.5", "9:30" or "17:00" into decimal hours."""
    if ":" in value:
        hours, minutes = (int(part) for part in value.split(":", 1))
        if not 0 <= minutes < 60:
            raise argparse.ArgumentTypeError(f"minutes must be in [0, 60): {value}")
        result = hours + minutes / 60
    else:
        result = float(value)
    if not 0 <= result < 24:
        raise argparse.ArgumentTypeError(f"time must be in [0, 24): {value}")
    return result


def parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def open_session(store: CityStore, reference_date: Optional[date]) -> TimezoneSession:
    """Load the stored cities into a session that saves on every change."""
    return TimezoneSession(
        cities=store.load(),
        reference_date=reference_date,
        on_change=store.save,
    )


def create_planner(args: argparse.Namespace) -> OverlapPlanner:
    config = PlannerConfig(
        reference_timezone=args.reference_tz,
        check_holidays=not args.no_holidays,
    )
    return OverlapPlanner(config)


def run_grid(args: argparse.Namespace, session: TimezoneSession) -> int:
    """Print the overlap grid and optionally write a PDF."""
    validation = CityValidator().validate(session.cities)
    for warning in validation.warnings:
        print(f"  Warning: {warning}")
    if not validation.is_valid:
        print(f"Validation: FAILED ({len(validation.errors)} errors)")
        for error in validation.errors[:5]:
            print(f"    - {error}")
        return 1

    planner = create_planner(args)
    grid, stats = planner.plan_with_stats(session.cities, session.reference_date)

    report = TextReportGenerator(reference_timezone=args.reference_tz)
    print(report.generate_to_string(grid, session.cities))

    past = first_future_slot(session.reference_date, planner.resolver.now(), args.reference_tz)
    if past == SLOTS_PER_DAY:
        print("  Note: this date is already over.")
    elif past > 0:
        print(f"  Note: the first {past} slot(s) of today are already past.")

    print(f"  Everyone working: {format_duration(stats['full_overlap_minutes'])}")

    if args.output:
        PDFGenerator().generate(grid, session.cities, args.output)
        print(f"\nPDF saved to: {args.output}")
    if args.text_output:
        report.generate(grid, session.cities, args.text_output)
        print(f"Text report saved to: {args.text_output}")
    return 0


def run_meeting(args: argparse.Namespace, session: TimezoneSession) -> int:
    """Translate a slot range into every city's local time."""
    session.set_meeting(MeetingSelection(args.start_slot, args.end_slot))
    planner = create_planner(args)
    times = planner.translate(session.meeting, session.reference_date, session.cities)

    print(f"Selected Meeting ({format_duration(session.meeting.duration_minutes)})")
    for meeting in times:
        span = f"{meeting.start_label} - {meeting.end_label}"
        print(f"  {meeting.city.name:<20} {span:<17} {meeting.date_label}")

    if args.output:
        grid = planner.build_grid(session.cities, session.reference_date)
        PDFGenerator().generate(
            grid, session.cities, args.output,
            selection=session.meeting, meeting_times=times,
        )
        print(f"\nPDF saved to: {args.output}")
    return 0


def run_cities(args: argparse.Namespace, session: TimezoneSession) -> int:
    """List tracked cities."""
    if not session.cities:
        print("No cities tracked.")
        return 0
    for index, city in enumerate(session.cities):
        hours = f"{format_decimal_time(city.work_start)} - {format_decimal_time(city.work_end)}"
        print(f"  {index:>2} {city.id:<20} {city.name:<20} {city.timezone:<28} "
              f"{city.country_code:<3} {hours}")
    return 0


def run_search(args: argparse.Namespace, session: TimezoneSession) -> int:
    """Search the timezone directory."""
    results = CityDirectory().search(args.query, limit=args.limit)
    if not results:
        print(f"No matches for {args.query!r}")
        return 1
    for city in results:
        print(f"  {city.id:<24} {city.timezone:<32} {city.country_code}")
    return 0


def run_add(args: argparse.Namespace, session: TimezoneSession) -> int:
    """Add the best directory match for a query."""
    results = CityDirectory().search(args.query, limit=1)
    if not results:
        print(f"No matches for {args.query!r}")
        return 1

    city = results[0]
    if args.name:
        city = replace(city, id=slugify(args.name), name=args.name)
    if not session.add_city(city):
        print(f"City {city.id} is already tracked")
        return 1
    print(f"Added {city.name} ({city.timezone})")
    return 0


def run_remove(args: argparse.Namespace, session: TimezoneSession) -> int:
    if not session.remove_city(args.city_id):
        print(f"City {args.city_id} is not tracked")
        return 1
    print(f"Removed {args.city_id}")
    return 0


def run_hours(args: argparse.Namespace, session: TimezoneSession) -> int:
    if not session.update_working_hours(args.city_id, args.start, args.end):
        print(f"City {args.city_id} is not tracked")
        return 1
    print(f"{args.city_id}: {format_decimal_time(args.start)} - {format_decimal_time(args.end)}")
    return 0


def run_move(args: argparse.Namespace, session: TimezoneSession) -> int:
    session.reorder_cities(args.from_index, args.to_index)
    return run_cities(args, session)


def run_options(args: argparse.Namespace, session: TimezoneSession) -> int:
    """Print the half-hour choices accepted for working hours."""
    for option in get_time_options():
        print(f"  {option.value:>4}  {option.label}")
    return 0


COMMANDS = {
    "grid": run_grid,
    "meeting": run_meeting,
    "cities": run_cities,
    "search": run_search,
    "add": run_add,
    "remove": run_remove,
    "hours": run_hours,
    "move": run_move,
    "options": run_options,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tzoverlap",
        description="tzoverlap - Working Hours Overlap Across Time Zones",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s grid                          Show today's overlap grid
  %(prog)s --date 2025-01-07 grid        Show the grid for a given date
  %(prog)s grid --output overlap.pdf     Also write a PDF report

  %(prog)s meeting 38 39                 Translate 19:00-20:00 (reference time)
  %(prog)s search tokyo                  Search the timezone directory
  %(prog)s add tokyo                     Track the best match
  %(prog)s hours tokyo 22 6              Night shift for Tokyo
        """,
    )
    parser.add_argument(
        "--store",
        type=Path,
        default=DEFAULT_STORE_PATH,
        help=f"City list file (default: {DEFAULT_STORE_PATH})",
    )
    parser.add_argument(
        "--date", "-d",
        type=parse_date,
        default=None,
        help="Reference date YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--reference-tz", "-z",
        default="UTC",
        help="Timezone the 48 slots are laid out in (default: UTC)",
    )
    parser.add_argument(
        "--no-holidays",
        action="store_true",
        help="Ignore public holidays",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    grid_parser = subparsers.add_parser("grid", help="Show the working hours overlap grid")
    grid_parser.add_argument("--output", "-o", type=str, help="Output PDF file path")
    grid_parser.add_argument("--text-output", "-t", type=str, help="Output text file path")

    meeting_parser = subparsers.add_parser(
        "meeting",
        help="Translate a slot range into each city's local time",
    )
    meeting_parser.add_argument("start_slot", type=int, help="First slot (0-47)")
    meeting_parser.add_argument("end_slot", type=int, help="Last slot, inclusive (0-47)")
    meeting_parser.add_argument("--output", "-o", type=str, help="Output PDF file path")

    subparsers.add_parser("cities", help="List tracked cities")

    search_parser = subparsers.add_parser("search", help="Search the timezone directory")
    search_parser.add_argument("query")
    search_parser.add_argument("--limit", "-l", type=int, default=10)

    add_parser = subparsers.add_parser("add", help="Track the best match for a query")
    add_parser.add_argument("query")
    add_parser.add_argument("--name", "-n", help="Display name (default: from timezone)")

    remove_parser = subparsers.add_parser("remove", help="Stop tracking a city")
    remove_parser.add_argument("city_id")

    hours_parser = subparsers.add_parser("hours", help="Set a city's working hours")
    hours_parser.add_argument("city_id")
    hours_parser.add_argument("start", type=parse_time, help="Start, e.g. 9 or 9:30")
    hours_parser.add_argument("end", type=parse_time, help="End, e.g. 17 or 17:30")

    move_parser = subparsers.add_parser("move", help="Move a city to another position")
    move_parser.add_argument("from_index", type=int)
    move_parser.add_argument("to_index", type=int)

    subparsers.add_parser("options", help="List half-hour time options")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    store = CityStore(args.store)
    try:
        session = open_session(store, args.date)
        return handler(args, session)
    except (ValueError, IndexError, ZoneInfoNotFoundError, CityStoreError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
