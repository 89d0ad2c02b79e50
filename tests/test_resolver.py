"""Tests for resolving the program airing at a given time."""

from datetime import date, datetime

import pytest
import pytz

from wcpe_now.errors import NoScheduleDataError
from wcpe_now.resolver import Program, resolve, resolve_at
from wcpe_now.schedule import Piece, Schedule, TimePoint, build


EASTERN = pytz.timezone("US/Eastern")


@pytest.fixture
def overnight_schedule():
    """Schedule crossing midnight once, starting on 17 October 2026."""
    return build(
        [
            ("06:00", "Sunrise"),
            ("09:00", "Morning Concert"),
            ("23:30", "Late Night"),
            ("00:15", "Overnight"),
        ],
        base_date=date(2026, 10, 17),
        timezone="US/Eastern",
    )


class TestResolve:
    """Tests for resolve()."""

    def test_late_night_before_midnight(self, overnight_schedule):
        """A program crossing midnight ends at the next day's entry."""
        program = resolve(overnight_schedule, TimePoint(23, 45), 0)

        assert program == Program(
            name="Late Night",
            start=TimePoint(23, 30),
            end=TimePoint(0, 15),
            start_day=0,
            end_day=1,
        )

    def test_late_night_after_midnight(self, overnight_schedule):
        """Early next-day queries fall back to the previous day's program."""
        program = resolve(overnight_schedule, TimePoint(0, 10), 1)
        assert program.name == "Late Night"
        assert program.start_day == 0

    def test_overnight_has_open_end(self, overnight_schedule):
        """The last known entry airs until further notice."""
        program = resolve(overnight_schedule, TimePoint(0, 20), 1)

        assert program.name == "Overnight"
        assert program.end is None
        assert program.end_day is None

    def test_exact_start_time(self, overnight_schedule):
        """An entry's own start time resolves to that entry."""
        for entry in overnight_schedule:
            program = resolve(overnight_schedule, entry.start, entry.day)
            assert program.name == entry.name
            assert program.start == entry.start

    def test_minute_before_next_start(self, overnight_schedule):
        """Intervals are closed at the start and open at the end."""
        at_start = resolve(overnight_schedule, TimePoint(9, 0), 0)
        before_next = resolve(overnight_schedule, TimePoint(23, 29), 0)
        assert before_next == at_start

    def test_idempotent(self, overnight_schedule):
        first = resolve(overnight_schedule, TimePoint(12, 0), 0)
        second = resolve(overnight_schedule, TimePoint(12, 0), 0)
        assert first == second

    def test_before_first_entry(self, overnight_schedule):
        """Instants before every entry have no schedule data."""
        with pytest.raises(NoScheduleDataError):
            resolve(overnight_schedule, TimePoint(5, 59), 0)

    def test_previous_day_query(self, overnight_schedule):
        with pytest.raises(NoScheduleDataError):
            resolve(overnight_schedule, TimePoint(23, 0), -1)

    def test_empty_schedule(self):
        with pytest.raises(NoScheduleDataError):
            resolve(Schedule(entries=()), TimePoint(12, 0))

    def test_piece_returned(self):
        """Piece details of the matched row are part of the result."""
        piece = Piece(composer="Handel", title="Water Music", performers="English Concert")
        schedule = build([("10:00", "Classic Fare", piece), ("10:25", "Classic Fare")])

        program = resolve(schedule, TimePoint(10, 10))

        assert program.piece == piece
        assert program.end == TimePoint(10, 25)


class TestResolveAt:
    """Tests for resolve_at()."""

    def test_aware_datetime_converted(self, overnight_schedule):
        """UTC instants are converted to station time before lookup."""
        when = pytz.UTC.localize(datetime(2026, 10, 18, 4, 10))  # 00:10 EDT
        program = resolve_at(overnight_schedule, when)
        assert program.name == "Late Night"

    def test_localized_datetime(self, overnight_schedule):
        when = EASTERN.localize(datetime(2026, 10, 18, 0, 20, 59))
        assert resolve_at(overnight_schedule, when).name == "Overnight"

    def test_naive_datetime_is_station_time(self, overnight_schedule):
        when = datetime(2026, 10, 17, 9, 30)
        assert resolve_at(overnight_schedule, when).name == "Morning Concert"

    def test_requires_base_date(self):
        schedule = build([("06:00", "Sunrise")])
        with pytest.raises(ValueError):
            resolve_at(schedule, datetime(2026, 10, 17, 9, 30))
