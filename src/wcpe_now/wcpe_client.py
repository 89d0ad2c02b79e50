"""Client for retrieving WCPE playlist pages.

The station publishes one playlist page per weekday, overwritten every
week. This module downloads those pages and stitches consecutive days
into a single schedule so lookups just after midnight still find the
program that started the day before.
"""

import urllib.error
import urllib.request
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple

import pytz

from .errors import PlaylistFetchError, PlaylistUnavailableError
from .logging_config import LoggerMixin
from .playlist_parser import parse_playlist
from .schedule import Piece, Schedule, build


WEEKDAYS = ["mon", "tue", "wed", "thu", "fri", "sat", "sun"]

# Pages are rewritten weekly, so only the last seven days are published
MAX_DAYS_AGO = 6


class PlaylistClient(LoggerMixin):
    """Client for the station's playlist pages."""

    def __init__(
        self,
        base_url: str = "https://theclassicalstation.org",
        timeout: int = 30,
        timezone: str = "US/Eastern"
    ):
        """Initialize the playlist client.

        Args:
            base_url: Station website base URL
            timeout: Request timeout in seconds
            timezone: Station timezone name
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.timezone = timezone
        self._tz = pytz.timezone(timezone)

    def today(self, now: Optional[datetime] = None) -> date:
        """Current calendar date in the station timezone."""
        now = now or datetime.now(pytz.UTC)
        if now.tzinfo is None:
            now = pytz.UTC.localize(now)
        return now.astimezone(self._tz).date()

    def get_url(self, day: date) -> str:
        """Playlist page URL for the weekday of ``day``."""
        return f"{self.base_url}/playing_{WEEKDAYS[day.weekday()]}.shtml"

    def fetch_page(self, day: date) -> str:
        """Download the playlist page for ``day``.

        Raises:
            PlaylistFetchError: If the download fails
        """
        url = self.get_url(day)
        self.logger.info(f"Fetching playlist page {url}")

        try:
            with urllib.request.urlopen(url, timeout=self.timeout) as response:
                body = response.read()
        except urllib.error.HTTPError as e:
            raise PlaylistFetchError(f"Failed to download {url}: HTTP {e.code}")
        except (urllib.error.URLError, OSError) as e:
            raise PlaylistFetchError(f"Failed to download {url}: {e}")

        self.logger.debug(f"Retrieved {len(body):,} bytes from {url}")
        return body.decode("utf-8", errors="replace")

    def fetch_window(
        self,
        day: date,
        today: Optional[date] = None
    ) -> Tuple[date, List[Tuple[str, str, Piece]]]:
        """Fetch the playlist rows covering ``day`` and the day before.

        Args:
            day: Broadcast day being looked up
            today: Current station date, defaults to ``self.today()``

        Returns:
            Tuple of the window's first calendar date and its rows

        Raises:
            PlaylistUnavailableError: If ``day`` is no longer published
            PlaylistFetchError: If a download fails
            PlaylistParseError: If a page cannot be parsed
        """
        today = today or self.today()
        days_ago = (today - day).days
        if days_ago < 0 or days_ago > MAX_DAYS_AGO:
            raise PlaylistUnavailableError(
                f"Playlist for {day.isoformat()} is not available")

        rows = parse_playlist(self.fetch_page(day))

        # The previous weekday's page already holds this week's data
        if days_ago == MAX_DAYS_AGO:
            self.logger.info("Previous day no longer published, using single day")
            return day, rows

        previous = day - timedelta(days=1)
        previous_rows = parse_playlist(self.fetch_page(previous))
        return previous, previous_rows + rows

    def fetch_schedule(self, day: date, today: Optional[date] = None) -> Schedule:
        """Fetch and build the schedule window for ``day``."""
        base_date, rows = self.fetch_window(day, today=today)
        schedule = build(rows, base_date=base_date, timezone=self.timezone)
        self.logger.info(
            f"Schedule for {base_date.isoformat()} has {len(schedule)} entries "
            f"over {schedule.days} day(s)")
        return schedule
