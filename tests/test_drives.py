"""Tests for drive tracking in scramble and shamble."""

import pytest

from matchplay.drives import DriveLedger
from matchplay.models import Format
from matchplay.schemas import empty_holes

from builders import make_match


class TestRecordDrive:
    """Tests for recording and toggling drives."""

    def test_record_and_read(self):
        ledger = DriveLedger(Format.SCRAMBLE)
        assert ledger.record_drive(1, 'teamA', 0) == 0
        assert ledger.drive_for(1, 'teamA') == 0
        assert ledger.drive_for(1, 'teamB') is None

    def test_same_player_toggles_off(self):
        """Selecting the recorded player again clears the hole."""
        ledger = DriveLedger(Format.SHAMBLE)
        ledger.record_drive(3, 'teamB', 1)
        assert ledger.record_drive(3, 'teamB', 1) is None
        assert ledger.drive_for(3, 'teamB') is None

    def test_switch_player(self):
        ledger = DriveLedger(Format.SCRAMBLE)
        ledger.record_drive(3, 'teamA', 0)
        assert ledger.record_drive(3, 'teamA', 1) == 1

    def test_none_clears(self):
        ledger = DriveLedger(Format.SCRAMBLE)
        ledger.record_drive(5, 'teamA', 1)
        assert ledger.record_drive(5, 'teamA', None) is None

    def test_rejected_for_best_ball(self):
        ledger = DriveLedger(Format.BEST_BALL)
        with pytest.raises(ValueError, match='does not track drives'):
            ledger.record_drive(1, 'teamA', 0)

    @pytest.mark.parametrize('hole,team,player', [
        (0, 'teamA', 0),
        (19, 'teamA', 0),
        (1, 'teamC', 0),
        (1, 'teamA', 2),
    ])
    def test_invalid_arguments(self, hole, team, player):
        ledger = DriveLedger(Format.SCRAMBLE)
        with pytest.raises(ValueError):
            ledger.record_drive(hole, team, player)


class TestDriveCounts:
    """Tests for drive totals and the per-player minimum."""

    def _ledger(self, drives, min_drives=6):
        ledger = DriveLedger(Format.SCRAMBLE, min_drives=min_drives)
        for number, player in enumerate(drives, start=1):
            ledger.record_drive(number, 'teamA', player)
        return ledger

    def test_drives_used(self):
        ledger = self._ledger([0, 0, 1, 0])
        assert ledger.drives_used('teamA') == [3, 1]
        assert ledger.drives_used('teamB') == [0, 0]
        assert ledger.holes_remaining('teamA') == 14

    def test_minimum_still_reachable(self):
        """Enough holes remain for both players to reach the minimum."""
        ledger = self._ledger([1] * 11)
        assert ledger.drives_still_needed('teamA') == [0, 0]
        assert ledger.shortfall_warnings() == []

    def test_unrecoverable_shortfall(self):
        ledger = self._ledger([0, 0] + [1] * 14)
        assert ledger.holes_remaining('teamA') == 2
        assert ledger.drives_still_needed('teamA') == [2, 0]
        warnings = ledger.shortfall_warnings()
        assert len(warnings) == 1
        assert 'teamA player 1' in warnings[0]
        assert '2 drive(s) short' in warnings[0]

    def test_explicit_holes_remaining(self):
        ledger = self._ledger([0])
        assert ledger.drives_still_needed('teamA', holes_remaining=0) == [5, 6]

    def test_minimum_from_config(self):
        ledger = self._ledger([0] * 17 + [1], min_drives=1)
        assert ledger.drives_still_needed('teamA') == [0, 0]


class TestHoleInputRoundTrip:
    """Tests for reading drives from and writing them to hole inputs."""

    def test_from_holes(self):
        match = make_match('twoManScramble', [4, 4, 4], [4, 4, 4],
                           drives={'teamA': [0, 1, 0], 'teamB': [1, None, 7]})
        ledger = DriveLedger.from_holes(Format.SCRAMBLE, match.holes)
        assert ledger.drives_used('teamA') == [2, 1]
        # Values other than 0/1 are not counted
        assert ledger.drives_used('teamB') == [0, 1]

    def test_apply_to(self):
        ledger = DriveLedger(Format.SHAMBLE)
        ledger.record_drive(2, 'teamB', 1)
        holes = ledger.apply_to(empty_holes())
        assert holes[1].team_b_drive == 1
        assert holes[0].team_a_drive is None
        assert len(holes) == 18

    def test_non_drive_format_ignores_fields(self):
        ledger = DriveLedger.from_holes(Format.SINGLES, empty_holes())
        assert ledger.drives_used('teamA') == [0, 0]
        assert ledger.shortfall_warnings() == []
