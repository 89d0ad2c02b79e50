"""Resolve which program is airing at a given instant."""

import bisect
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import pytz

from .errors import NoScheduleDataError
from .schedule import MINUTES_PER_DAY, Piece, Schedule, TimePoint


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Program:
    """Program airing at the queried instant.

    ``end`` is None when the matched entry is the last one known, meaning
    the program airs until further notice.
    """
    name: str
    start: TimePoint
    end: Optional[TimePoint]
    start_day: int = 0
    end_day: Optional[int] = None
    piece: Optional[Piece] = None


def resolve(schedule: Schedule, query: TimePoint, day: int = 0) -> Program:
    """Find the program whose interval [start, next start) holds the query.

    Args:
        schedule: Schedule built by ``schedule.build``
        query: Time of day to look up
        day: Day offset of the query in the schedule's day numbering

    Returns:
        The matching program

    Raises:
        NoScheduleDataError: If the instant precedes every entry
    """
    instant = day * MINUTES_PER_DAY + query.minutes
    starts = [entry.minutes for entry in schedule.entries]

    if not starts:
        raise NoScheduleDataError("Schedule has no entries")

    index = bisect.bisect_right(starts, instant) - 1
    if index < 0:
        first = schedule.entries[0]
        raise NoScheduleDataError(
            f"No program found for {query} on day {day}; "
            f"schedule starts at {first.start} on day {first.day}")

    entry = schedule.entries[index]
    following = schedule.entries[index + 1] if index + 1 < len(starts) else None

    logger.debug(f"Resolved {query} (day {day}) to entry {index}: {entry.name}")

    return Program(
        name=entry.name,
        start=entry.start,
        end=following.start if following else None,
        start_day=entry.day,
        end_day=following.day if following else None,
        piece=entry.piece,
    )


def resolve_at(schedule: Schedule, when: datetime) -> Program:
    """Resolve the program airing at a calendar instant.

    Aware datetimes are converted to the station timezone; naive ones are
    taken to be station time already. Seconds are ignored.

    Raises:
        ValueError: If the schedule has no base date
        NoScheduleDataError: If the instant precedes every entry
    """
    if schedule.base_date is None:
        raise ValueError("Schedule has no base date")

    if when.tzinfo is not None:
        when = when.astimezone(pytz.timezone(schedule.timezone))

    day = (when.date() - schedule.base_date).days
    return resolve(schedule, TimePoint(when.hour, when.minute), day)
