"""Schedule data model and builder.

The station publishes its playlist as time-of-day labels in broadcast
order, without a date per row. This module turns such a listing into a
Schedule whose entries carry a day offset, so that a listing covering
more than one broadcast day keeps a strictly increasing order.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional, Sequence, Tuple

import pytz

from .errors import MalformedScheduleError, NoScheduleDataError


logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

_TIME_LABEL = re.compile(
    r"^(?P<hour>\d{1,2}):(?P<minute>\d{2})"
    r"(?:\s*(?P<meridiem>[ap])\.?\s*m\.?)?$",
    re.IGNORECASE,
)


@dataclass(frozen=True, order=True)
class TimePoint:
    """Wall-clock time in the station timezone."""
    hour: int
    minute: int

    def __post_init__(self):
        if not 0 <= self.hour <= 23:
            raise ValueError(f"hour out of range: {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"minute out of range: {self.minute}")

    @property
    def minutes(self) -> int:
        """Minutes elapsed since midnight."""
        return self.hour * 60 + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class Piece:
    """Musical piece listed on a playlist row."""
    composer: Optional[str] = None
    title: Optional[str] = None
    performers: Optional[str] = None


@dataclass(frozen=True)
class ScheduleEntry:
    """One program slot, airing from its start until the next entry."""
    start: TimePoint
    name: str
    day: int = 0
    piece: Optional[Piece] = None

    @property
    def minutes(self) -> int:
        """Absolute position in minutes from the first broadcast day."""
        return self.day * MINUTES_PER_DAY + self.start.minutes


@dataclass(frozen=True)
class Schedule:
    """Time-ordered schedule entries for one or more broadcast days."""
    entries: Tuple[ScheduleEntry, ...]
    base_date: Optional[date] = None
    timezone: str = "US/Eastern"

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __getitem__(self, index):
        return self.entries[index]

    @property
    def days(self) -> int:
        """Number of broadcast days the schedule touches."""
        return self.entries[-1].day + 1 if self.entries else 0

    def to_datetime(self, day: int, point: TimePoint) -> datetime:
        """Convert a day offset and time of day to an aware datetime.

        Raises:
            ValueError: If the schedule has no base date
        """
        if self.base_date is None:
            raise ValueError("Schedule has no base date")
        local_date = self.base_date + timedelta(days=day)
        tz = pytz.timezone(self.timezone)
        return tz.localize(datetime.combine(local_date, time(point.hour, point.minute)))


def parse_time_label(label: str) -> TimePoint:
    """Parse a playlist time label.

    Accepts 24-hour labels such as "06:00" or "9:30" and 12-hour labels
    such as "9:30 PM" or "12:05 a.m.".

    Raises:
        MalformedScheduleError: If the label is not a valid time
    """
    if not isinstance(label, str):
        raise MalformedScheduleError(f"Time label is not text: {label!r}")

    match = _TIME_LABEL.match(label.strip())
    if not match:
        raise MalformedScheduleError(f"Unrecognised time label: {label!r}")

    hour = int(match.group("hour"))
    minute = int(match.group("minute"))
    meridiem = match.group("meridiem")

    if meridiem:
        if not 1 <= hour <= 12:
            raise MalformedScheduleError(f"Invalid 12-hour time: {label!r}")
        hour = hour % 12
        if meridiem.lower() == "p":
            hour += 12

    try:
        return TimePoint(hour, minute)
    except ValueError as e:
        raise MalformedScheduleError(f"Invalid time label {label!r}: {e}")


def _unpack(raw: Sequence, index: int):
    """Split a raw entry into label, name and optional piece."""
    try:
        size = len(raw)
    except TypeError:
        raise MalformedScheduleError(f"Entry {index} is not a sequence: {raw!r}")

    if size == 2:
        label, name = raw
        piece = None
    elif size == 3:
        label, name, piece = raw
    else:
        raise MalformedScheduleError(
            f"Entry {index} must be (label, name) or (label, name, piece): {raw!r}")
    return label, name, piece


def build(
    raw_entries: Iterable[Sequence],
    base_date: Optional[date] = None,
    timezone: str = "US/Eastern",
    max_rollovers: int = 1
) -> Schedule:
    """Build a validated schedule from raw playlist entries.

    Entries must be in broadcast order. A time lower than the one before
    it marks the start of the next broadcast day; every following entry
    is shifted by one more day.

    Args:
        raw_entries: Ordered (label, name) or (label, name, piece) tuples
        base_date: Calendar date of the first broadcast day, if known
        timezone: Station timezone name
        max_rollovers: Number of day boundaries the listing may cross

    Returns:
        Schedule with strictly increasing entries

    Raises:
        NoScheduleDataError: If there are no entries
        MalformedScheduleError: On a bad label, blank name, repeated start
            time or too many day boundaries
    """
    entries = []
    day = 0
    previous: Optional[TimePoint] = None

    for index, raw in enumerate(raw_entries):
        label, name, piece = _unpack(raw, index)
        start = parse_time_label(label)

        name = name.strip() if isinstance(name, str) else ""
        if not name:
            raise MalformedScheduleError(
                f"Entry {index} at {start} has no program name")

        if previous is not None:
            if start == previous:
                raise MalformedScheduleError(
                    f"Duplicate start time {start} at entry {index}")
            if start < previous:
                day += 1
                if day > max_rollovers:
                    raise MalformedScheduleError(
                        f"Unexpected time decrease {previous} -> {start} "
                        f"at entry {index}")
                logger.debug(
                    f"Day rollover at entry {index}: {previous} -> {start}")

        entries.append(ScheduleEntry(start=start, name=name, day=day, piece=piece))
        previous = start

    if not entries:
        raise NoScheduleDataError("No schedule entries available")

    logger.debug(f"Built schedule with {len(entries)} entries over {day + 1} day(s)")
    return Schedule(entries=tuple(entries), base_date=base_date, timezone=timezone)
