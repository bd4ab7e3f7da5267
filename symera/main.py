"""Symera calendar CLI entry point.

Usage:
    symera                              # Month view of today from the API
    symera --view week --date 2025-06-15
    symera --input snapshot.json --view day -o day.pdf
    symera --today 2025-06-15           # Pin "today" for reproducible output
"""

import argparse
import logging
import sys
from datetime import date
from typing import Optional

from symera.config import load_config
from symera.engine.clock import FixedClock, SystemClock, resolve_timezone
from symera.engine.navigation import ViewState
from symera.engine.store import SnapshotStore
from symera.engine.window import ViewMode
from symera.pdf_generator import CalendarPDFGenerator
from symera.sources.api_source import ApiSource
from symera.sources.base import CalendarData
from symera.sources.json_source import JsonFileSource

logger = logging.getLogger("symera")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="symera",
        description="Render a day, week or month calendar of Symera events and tasks to PDF.",
    )
    parser.add_argument(
        "--date",
        type=str,
        default=None,
        help="Date the view is anchored on, YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--selected",
        type=str,
        default=None,
        help="Date to highlight as selected, YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--today",
        type=str,
        default=None,
        help="Treat this date as today, YYYY-MM-DD (default: the system date)",
    )
    parser.add_argument(
        "--view",
        choices=[mode.value for mode in ViewMode],
        default=None,
        help="Calendar view (default: from config, month)",
    )
    parser.add_argument(
        "--input", "-i",
        type=str,
        default=None,
        help="Read events and tasks from a JSON snapshot instead of the API",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output PDF path (default: ./symera-<view>-YYYY-MM-DD.pdf)",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to config.json (default: ./config.json)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose/debug logging",
    )
    return parser.parse_args(argv)


def _parse_date(value: str, option: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.error("Invalid %s: %s (expected YYYY-MM-DD)", option, value)
        sys.exit(1)


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    config = load_config(args.config)
    local_tz = resolve_timezone(config.calendar.timezone)

    if args.today:
        clock = FixedClock(_parse_date(args.today, "--today"))
    else:
        clock = SystemClock(local_tz)
    today = clock.today()

    view_mode = ViewMode(args.view) if args.view else config.calendar.default_view
    anchor = _parse_date(args.date, "--date") if args.date else today

    selected = _parse_date(args.selected, "--selected") if args.selected else today
    state = ViewState(cursor_date=anchor, view_mode=view_mode, selected_date=selected)

    logger.info("Rendering %s view for %s", view_mode.value, anchor.isoformat())

    if args.input:
        source = JsonFileSource(args.input, local_tz=local_tz)
    else:
        source = ApiSource(config.api, local_tz=local_tz)

    store = SnapshotStore()
    generation = store.begin_refresh()
    data = CalendarData()
    try:
        source.fetch(data)
    except Exception as e:
        logger.error("Fetching events and tasks failed: %s", e)
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)
    store.apply(generation, data.events, data.tasks)

    output_path = args.output or f"symera-{view_mode.value}-{anchor.isoformat()}.pdf"
    generator = CalendarPDFGenerator(
        week_start=config.calendar.week_start,
        day_start_hour=config.render.day_start_hour,
        day_end_hour=config.render.day_end_hour,
    )
    pdf_path = generator.generate(
        store.index,
        state,
        today,
        output_path,
        max_visible=config.max_visible(view_mode),
    )
    logger.info("PDF saved to: %s", pdf_path)
    logger.info("Done!")


if __name__ == "__main__":
    main()
