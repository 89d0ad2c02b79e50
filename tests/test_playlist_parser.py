"""Tests for the playlist page parser."""

import pytest

from wcpe_now.errors import PlaylistParseError
from wcpe_now.playlist_parser import MISSING, parse_playlist
from wcpe_now.schedule import Piece


PLAYLIST_PAGE = """
<html><body>
<table class="layout"><tr><td>
  <table>
    <tr>
      <td><p>Start Time
</p></td>
      <td><p>Program
</p></td>
      <td><p>Composer
</p></td>
      <td><p>Title
</p></td>
      <td><p>Perfomers
</p></td>
    </tr>
    <tr>
      <td>0:00</td><td>Music in the Night</td><td>Bach</td>
      <td>Orchestral Suite No. 3</td><td>Musica Antiqua Koln</td>
    </tr>
    <tr>
      <td>0:25</td><td>&nbsp;</td><td>Handel</td>
      <td>Water Music</td><td>English   Concert</td>
    </tr>
    <tr><td colspan="5">&nbsp;</td></tr>
    <tr>
      <td>6:00</td><td>Rise and Shine</td><td>Haydn</td>
      <td>Symphony No. 101</td><td></td>
    </tr>
  </table>
</td></tr></table>
</body></html>
"""


class TestParsePlaylist:
    """Tests for parse_playlist()."""

    def test_rows_parsed_in_order(self):
        rows = parse_playlist(PLAYLIST_PAGE)

        assert [(label, name) for label, name, _ in rows] == [
            ("0:00", "Music in the Night"),
            ("0:25", "Music in the Night"),
            ("6:00", "Rise and Shine"),
        ]

    def test_piece_details(self):
        """Whitespace is collapsed and the site's header spelling accepted."""
        rows = parse_playlist(PLAYLIST_PAGE)

        assert rows[1][2] == Piece(
            composer="Handel", title="Water Music", performers="English Concert")
        assert rows[2][2] == Piece(composer="Haydn", title="Symphony No. 101")

    def test_program_missing_before_first_name(self):
        page = """
        <table>
          <tr><th>Start Time</th><th>Program</th><th>Performers</th></tr>
          <tr><td>5:00</td><td></td><td>Someone</td></tr>
          <tr><td>5:30</td><td>Rise and Shine</td><td></td></tr>
        </table>
        """
        rows = parse_playlist(page)

        assert rows[0][1] == MISSING
        assert rows[0][2] == Piece(performers="Someone")
        assert rows[1][1] == "Rise and Shine"

    @pytest.mark.parametrize("html", ["", "<html></html>", "<table><tr><td>x</td></tr></table>"])
    def test_no_playlist_table(self, html):
        with pytest.raises(PlaylistParseError):
            parse_playlist(html)
