"""Command line entry point for wcpe-now.

Shows what is airing on WCPE, The Classical Station, either right now
or at a given time of day.
"""

import argparse
import logging
import re
import sys
from datetime import datetime, timedelta
from typing import List, Optional

import pytz
from pydantic import ValidationError

from .config import Settings, get_settings
from .errors import WcpeNowError
from .logging_config import setup_logging
from .resolver import Program, resolve, resolve_at
from .schedule import Schedule, TimePoint
from .wcpe_client import MAX_DAYS_AGO, PlaylistClient


logger = logging.getLogger(__name__)

_TIME_ARG = re.compile(r"^(\d{1,2})(?::(\d{2}))?$")


def parse_time_arg(value: str) -> TimePoint:
    """Parse the ``--time`` argument, "HH:MM" or a bare hour."""
    match = _TIME_ARG.match(value.strip())
    if not match:
        raise argparse.ArgumentTypeError(f"{value}: Invalid argument")
    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    try:
        return TimePoint(hour, minute)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value}: Invalid argument")


def parse_days_ago(value: str) -> int:
    """Parse the ``--days-ago`` argument."""
    try:
        days = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value}: Invalid argument")
    if not 0 <= days <= MAX_DAYS_AGO:
        raise argparse.ArgumentTypeError(
            f"{value}: must be between 0 and {MAX_DAYS_AGO}")
    return days


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    """Create the command line argument parser."""
    parser = argparse.ArgumentParser(
        prog=settings.app_name,
        description="Show what is playing on WCPE - theclassicalstation.org",
    )
    parser.add_argument("-t", "--time", type=parse_time_arg, metavar="HH:MM",
                        help="Look up a specific time of day")
    parser.add_argument("-d", "--days-ago", type=parse_days_ago, default=0,
                        metavar="N",
                        help=f"Look up a day up to {MAX_DAYS_AGO} days ago")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {settings.app_version}")
    return parser


def format_program(program: Program, schedule: Optional[Schedule] = None) -> str:
    """Format a resolved program for the console."""
    start = str(program.start)
    end = str(program.end) if program.end is not None else "until further notice"
    if schedule is not None and schedule.base_date is not None:
        start_at = schedule.to_datetime(program.start_day, program.start)
        start = start_at.strftime("%H:%M %Z")
        if program.end is not None:
            end_at = schedule.to_datetime(program.end_day, program.end)
            end = end_at.strftime("%H:%M %Z")

    lines = [
        f"Program     {program.name}",
        f"Time        {start} - {end}",
    ]
    piece = program.piece
    if piece is not None:
        if piece.composer:
            lines.append(f"Composer    {piece.composer}")
        if piece.title:
            lines.append(f"Title       {piece.title}")
        if piece.performers:
            lines.append(f"Performers  {piece.performers}")
    return "\n".join(lines)


def lookup(
    client: PlaylistClient,
    query: Optional[TimePoint] = None,
    days_ago: int = 0,
    now: Optional[datetime] = None
):
    """Fetch the schedule and resolve the program for the requested time.

    Returns:
        Tuple of the schedule and the resolved program
    """
    now = now or datetime.now(pytz.UTC)
    today = client.today(now)
    day = today - timedelta(days=days_ago)

    schedule = client.fetch_schedule(day, today=today)

    if query is None and days_ago == 0:
        program = resolve_at(schedule, now)
    else:
        if query is None:
            local_now = now.astimezone(pytz.timezone(schedule.timezone))
            query = TimePoint(local_now.hour, local_now.minute)
        offset = (day - schedule.base_date).days
        program = resolve(schedule, query, offset)

    logger.info(f"Now playing: {program.name} from {program.start}")
    return schedule, program


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    args = build_parser(settings).parse_args(argv)

    setup_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        format_string=settings.log_format,
        log_file=settings.log_file or None
    )

    logger.debug(f"Starting {settings.app_name} v{settings.app_version}")

    client = PlaylistClient(
        base_url=settings.base_url,
        timeout=settings.request_timeout,
        timezone=settings.station_timezone
    )

    try:
        schedule, program = lookup(client, query=args.time, days_ago=args.days_ago)
    except WcpeNowError as e:
        logger.debug(f"Lookup failed: {e!r}")
        print(e, file=sys.stderr)
        return 1
    except Exception as e:
        logger.error(f"Unexpected error during lookup: {e}", exc_info=True)
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 1

    print(format_program(program, schedule))
    return 0


if __name__ == "__main__":
    sys.exit(main())
