"""Tests for result finalization and display strings."""

import pytest

from matchplay.models import MatchStatus
from matchplay.results import finalize, format_to_par, live_status_text


class TestFinalize:
    """Tests for finalize()"""

    def test_open_match_has_no_result(self):
        assert finalize(MatchStatus(leader='teamA', margin=2, thru=10)) is None

    def test_early_finish(self):
        status = MatchStatus(leader='teamA', margin=3, thru=16, closed=True, closed_at=16,
                             holes_won_a=5, holes_won_b=2)
        result = finalize(status)
        assert result.winner == 'teamA'
        assert result.display_margin == '3 & 2'
        assert result.holes_won_a == 5
        assert result.holes_won_b == 2

    def test_finish_on_18(self):
        status = MatchStatus(leader='teamB', margin=2, thru=18, closed=True, closed_at=18)
        result = finalize(status)
        assert result.winner == 'teamB'
        assert result.display_margin == '2 UP'

    def test_halved(self):
        status = MatchStatus(leader=None, margin=0, thru=18, closed=True, closed_at=18)
        result = finalize(status)
        assert result.winner == 'AS'
        assert result.display_margin == 'Halved'

    def test_winner_matches_leader(self):
        """A closed match with a margin always names the leader as winner."""
        for leader in ('teamA', 'teamB'):
            for margin, thru in [(1, 18), (2, 17), (5, 14)]:
                status = MatchStatus(leader=leader, margin=margin, thru=thru,
                                     closed=True, closed_at=thru)
                assert finalize(status).winner == leader


class TestLiveStatusText:
    """Tests for live_status_text()"""

    def test_closed_match_shows_result(self):
        status = MatchStatus(leader='teamA', margin=4, thru=15, closed=True, closed_at=15)
        assert live_status_text(status) == '4 & 3'

    def test_in_progress(self):
        assert live_status_text(MatchStatus(leader='teamB', margin=2, thru=7)) == '2 UP thru 7'

    def test_dormie(self):
        status = MatchStatus(leader='teamA', margin=3, thru=15, dormie=True)
        assert live_status_text(status) == 'Dormie 3 UP'


class TestFormatToPar:
    """Tests for format_to_par()"""

    @pytest.mark.parametrize('value,expected', [
        (0, 'E'),
        (3, '+3'),
        (-2, '-2'),
        (None, '-'),
    ])
    def test_values(self, value, expected):
        assert format_to_par(value) == expected
