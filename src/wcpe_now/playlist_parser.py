"""Parser for the station's published playlist pages.

The playlist is an HTML table with one row per piece. The program name
is only filled in on the first row of each program block, so it is
carried forward to the rows below it.
"""

import logging
import re
from typing import Dict, List, Optional, Tuple

from bs4 import BeautifulSoup

from .errors import PlaylistParseError
from .schedule import Piece


logger = logging.getLogger(__name__)

START_TIME_HEADER = "start time"
PROGRAM_HEADER = "program"
MISSING = "<missing>"

# The site spells the header "Perfomers"
_PIECE_HEADERS = {
    "composer": "composer",
    "title": "title",
    "performers": "performers",
    "perfomers": "performers",
}


def _clean_text(text: str) -> str:
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def _cell_text(cell) -> str:
    return _clean_text(cell.get_text(" "))


def _find_playlist_table(soup: BeautifulSoup):
    """Return the playlist table, its header row and lower-cased header names."""
    for row in soup.find_all("tr"):
        cells = row.find_all(["th", "td"], recursive=False)
        headers = [_cell_text(cell).lower() for cell in cells]
        if START_TIME_HEADER in headers and PROGRAM_HEADER in headers:
            return row.find_parent("table"), row, headers
    return None, None, None


def parse_playlist(html: str) -> List[Tuple[str, str, Piece]]:
    """Extract playlist rows from a playlist page.

    Args:
        html: Page content

    Returns:
        (start time label, program name, piece) tuples in page order

    Raises:
        PlaylistParseError: If the page has no playlist table
    """
    soup = BeautifulSoup(html or "", "html.parser")
    table, header_row, headers = _find_playlist_table(soup)
    if table is None:
        raise PlaylistParseError("Failed to find the playlist table in the page")

    rows = []
    program: Optional[str] = None
    passed_header = False

    for row in table.find_all("tr"):
        if row is header_row:
            passed_header = True
            continue
        if not passed_header:
            continue

        values: Dict[str, str] = {}
        for header, cell in zip(headers, row.find_all(["th", "td"], recursive=False)):
            values[header] = _cell_text(cell)

        label = values.get(START_TIME_HEADER, "")
        if not label:
            logger.debug("Skipping playlist row without start time")
            continue

        program = values.get(PROGRAM_HEADER) or program

        piece_fields = {}
        for header, field in _PIECE_HEADERS.items():
            if values.get(header):
                piece_fields[field] = values[header]

        rows.append((label, program or MISSING, Piece(**piece_fields)))

    logger.info(f"Parsed {len(rows)} playlist rows")
    return rows
