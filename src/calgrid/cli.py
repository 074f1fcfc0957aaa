"""Command-line interface for the calgrid layout engine."""

import argparse
import json
import logging
import sys
from dataclasses import replace
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

from calgrid.config import LayoutConfig
from calgrid.domain.models import CALENDAR_COLORS, Calendar, Event
from calgrid.exceptions import CalgridError
from calgrid.layout.engine import LayoutEngine
from calgrid.logging_config import configure_logging
from calgrid.output.debug_generator import DebugGenerator
from calgrid.store.event_store import EventStore
from calgrid.validation.validator import LayoutValidator

logger = logging.getLogger(__name__)


def create_sample_store(start: Optional[date] = None) -> EventStore:
    """Create a store with sample calendars and events for demos.

    Args:
        start: Monday the sample week starts on. Defaults to the next Monday.
    """
    if start is None:
        today = date.today()
        start = today + timedelta(days=(7 - today.weekday()) % 7)

    store = EventStore()
    store.add_calendar(Calendar("work", "Work", "Project milestones", CALENDAR_COLORS[0], True))
    store.add_calendar(Calendar("home", "Home", "Personal", CALENDAR_COLORS[3], False))

    samples = [
        # (id, offset, length, calendar, title)
        ("design", 0, 4, "work", "Design review"),
        ("standup", 0, 1, "work", "Standup"),
        ("build", 2, 5, "work", "Build phase"),
        ("trip", 2, 2, "home", "Weekend trip"),
        ("dentist", 3, 1, "home", "Dentist"),
        ("release", 9, 1, "work", "Release"),
        ("visit", 5, 3, "home", "Family visit"),
    ]
    for event_id, offset, length, calendar_id, title in samples:
        store.add_event(
            Event(
                id=event_id,
                start_date=start + timedelta(days=offset),
                length_days=length,
                calendar_id=calendar_id,
                title=title,
            )
        )

    return store


def load_store(path: Path) -> EventStore:
    """Load calendars and events from a JSON file.

    The file holds ``{"calendars": [...], "events": [...]}`` records as the
    event store serves them.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise CalgridError(f"{path}: not UTF-8 text ({exc})") from exc
    except json.JSONDecodeError as exc:
        raise CalgridError(f"{path}: invalid JSON ({exc})") from exc

    if not isinstance(data, dict):
        raise CalgridError(f"{path}: expected an object with 'calendars' and 'events'")

    calendars = data.get("calendars", [])
    events = data.get("events", [])
    for key, records in (("calendars", calendars), ("events", events)):
        if not isinstance(records, list):
            raise CalgridError(f"{path}: '{key}' must be a list of records")

    store = EventStore()
    store.load_records(calendars, events)
    return store


def _print_layout(
    engine: LayoutEngine,
    store: EventStore,
    start: date,
    end: date,
    output_path: Optional[str] = None,
) -> bool:
    """Compute, validate and print a layout. Returns True if valid."""
    events = store.snapshot()
    layout, stats = engine.compute_layout_with_stats(events, start, end)

    validator = LayoutValidator(engine.business_day_policy)
    result = validator.validate(layout, events, start, end)

    generator = DebugGenerator()
    if output_path:
        generator.generate(layout, output_path, events)
        print(f"Layout written to {output_path}")
    else:
        print(generator.generate_to_string(layout, events))

    print(f"\nLayout {start} to {end}")
    print(f"  Events: {stats['visible_events']}/{stats['total_events']} visible")
    print(f"  Days: {stats['total_days']}, lanes: {stats['max_lanes']}, "
          f"placeholders: {stats['empty_slots']}")
    if stats["busiest_day"]:
        busiest = stats["busiest_day"]
        print(f"  Busiest day: {busiest} ({stats['events_per_day'][busiest]} events)")

    if result.is_valid:
        print("\n  Validation: PASSED")
    else:
        print(f"\n  Validation: FAILED ({len(result.errors)} errors)")
        for error in result.errors[:5]:
            print(f"    - {error}")
        if len(result.errors) > 5:
            print(f"    ... and {len(result.errors) - 5} more errors")

    return result.is_valid


def run_demo(config: LayoutConfig, start: Optional[date] = None, days: int = 14) -> bool:
    """Lay out the sample events over a number of days."""
    store = create_sample_store(start)
    first = min(event.start_date for event in store.events())
    print(f"Laying out {len(store.events())} sample events over {days} days...")

    engine = LayoutEngine(config)
    return _print_layout(engine, store, first, first + timedelta(days=days - 1))


def run_layout(
    config: LayoutConfig,
    input_path: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
    output_path: Optional[str] = None,
) -> bool:
    """Lay out events loaded from a JSON file.

    Missing range bounds come from the padded window around the events.
    """
    store = load_store(Path(input_path))
    engine = LayoutEngine(config)

    window = engine.visible_window(store.snapshot())
    start = start or window.start
    end = end or window.end
    logger.info("Laying out %d events from %s", len(store.events()), input_path)

    return _print_layout(engine, store, start, end, output_path)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    config = LayoutConfig.from_env()

    parser = argparse.ArgumentParser(
        description="calgrid - Calendar event lane layout",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s demo                         Lay out sample events for two weeks
  %(prog)s demo --start 2024-01-15      Sample week starting on a given Monday
  %(prog)s layout events.json           Lay out events from a JSON export
  %(prog)s layout events.json --start 2024-01-01 --end 2024-01-31
        """,
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help=f"Logging level (default: {config.log_level})",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Fail if the engine produces a layout that breaks its invariants",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Lay out sample events")
    demo_parser.add_argument(
        "--start",
        type=date.fromisoformat,
        help="Monday to start the sample week on (default: next Monday)",
    )
    demo_parser.add_argument(
        "--days", "-d",
        type=int,
        default=14,
        help="Number of days to show (default: 14)",
    )

    # Layout command
    layout_parser = subparsers.add_parser("layout", help="Lay out events from a JSON file")
    layout_parser.add_argument("input", help="JSON file with calendars and events")
    layout_parser.add_argument("--start", type=date.fromisoformat, help="First day (YYYY-MM-DD)")
    layout_parser.add_argument("--end", type=date.fromisoformat, help="Last day (YYYY-MM-DD)")
    layout_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Write the debug grid to a file instead of stdout",
    )

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.validate:
        config = replace(config, validate_output=True)

    try:
        if args.command == "demo":
            valid = run_demo(config, args.start, args.days)
        elif args.command == "layout":
            valid = run_layout(config, args.input, args.start, args.end, args.output)
        else:
            parser.print_help()
            return 1
    except (CalgridError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0 if valid else 1


if __name__ == "__main__":
    sys.exit(main())
