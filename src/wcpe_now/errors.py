"""Exception types raised by wcpe-now.

Every failure the command line reports to the user derives from
WcpeNowError, so the entry point can handle them in one place.
"""


class WcpeNowError(Exception):
    """Base exception for wcpe-now errors."""
    pass


class ScheduleError(WcpeNowError):
    """Base exception for schedule building and resolution errors."""
    pass


class MalformedScheduleError(ScheduleError):
    """Raw schedule data violates the expected format or ordering."""
    pass


class NoScheduleDataError(ScheduleError):
    """No schedule data is available for the requested instant."""
    pass


class PlaylistError(WcpeNowError):
    """Base exception for playlist retrieval errors."""
    pass


class PlaylistFetchError(PlaylistError):
    """Downloading a playlist page failed."""
    pass


class PlaylistUnavailableError(PlaylistError):
    """The playlist for the requested day is no longer published."""
    pass


class PlaylistParseError(PlaylistError):
    """A playlist page could not be parsed."""
    pass
