"""Tests for match document validators and input coercion."""

import pytest
from pydantic import ValidationError

from matchplay.schemas import (
    CourseDocument,
    HoleInput,
    MatchDocument,
    RosterEntry,
    ScoringConfig,
    normalize_holes,
)
from matchplay.validators import validate_hole_inputs, validate_match, validate_roster

from builders import make_match


class TestValidateRoster:
    """Tests for validate_roster()"""

    def test_valid_roster(self):
        match = make_match('twoManBestBall', [], [])
        assert validate_roster(match) == []

    def test_short_side(self):
        match = make_match('twoManBestBall', [], [],
                           player_ids={'teamA': ['a1', 'a2'], 'teamB': ['b1']})
        errors = validate_roster(match)
        assert len(errors) == 1
        assert 'teamB has 1 player(s)' in errors[0]

    def test_extra_players(self):
        match = make_match('twoManBestBall', [], [])
        errors = validate_roster(match, 'singles')
        assert len(errors) == 2
        assert 'singles uses 1' in errors[0]

    def test_empty_slot(self):
        match = MatchDocument(
            match_id='m1',
            format='singles',
            team_a_players=[{'playerId': None}],
            team_b_players=[{'playerId': 'b1'}],
        )
        errors = validate_roster(match)
        assert errors == ['m1: teamA slot 1 has no player']

    def test_invalid_stroke_value(self):
        match = MatchDocument(
            match_id='m1',
            format='singles',
            team_a_players=[RosterEntry(player_id='a1', strokes_received=[2] + [0] * 17)],
            team_b_players=[RosterEntry(player_id='b1')],
        )
        errors = validate_roster(match)
        assert errors == ['m1: a1 has invalid stroke value 2 on hole 1']

    def test_duplicate_players(self):
        match = make_match('singles', [], [], player_ids={'teamA': ['p1'], 'teamB': ['p1']})
        errors = validate_roster(match)
        assert any('duplicate players: p1' in e for e in errors)


class TestValidateHoleInputs:
    """Tests for validate_hole_inputs()"""

    def test_clean_inputs(self):
        match = make_match('twoManScramble', [4] * 18, [5] * 18, drives={'teamA': [0, 1]})
        assert validate_hole_inputs(match) == []

    def test_gross_out_of_range(self):
        match = make_match('singles', [0, 4, 25], [4, 4, 4])
        warnings = validate_hole_inputs(match)
        assert len(warnings) == 2
        assert 'hole 1 teamA gross 0' in warnings[0]
        assert 'hole 3 teamA gross 25' in warnings[1]

    def test_drive_on_best_ball(self):
        match = make_match('twoManBestBall', [], [])
        match = match.with_hole(1, HoleInput(team_a_drive=0))
        warnings = validate_hole_inputs(match)
        assert len(warnings) == 1
        assert 'does not track drives' in warnings[0]

    def test_drive_not_a_slot(self):
        match = make_match('twoManShamble', [], [], drives={'teamB': [None, 3]})
        warnings = validate_hole_inputs(match)
        assert warnings == ['m1: hole 2 teamB drive 3 is not a player slot']

    def test_validate_match_combines(self):
        match = make_match('singles', [30], [4], player_ids={'teamA': ['p1'], 'teamB': ['p1']})
        assert len(validate_match(match)) == 2


class TestInputCoercion:
    """Tests for how raw store values are read."""

    @pytest.mark.parametrize('raw,expected', [
        (4, 4),
        (4.0, 4),
        ('5', 5),
        (4.5, None),
        (float('nan'), None),
        ('', None),
        ('x', None),
        (True, None),
        (None, None),
    ])
    def test_score_values(self, raw, expected):
        assert HoleInput(teamAPlayerGross=raw).team_a_player_gross == expected

    def test_players_gross_padded(self):
        hole = HoleInput(teamAPlayersGross=[4])
        assert hole.team_a_players_gross == [4, None]
        assert HoleInput(teamBPlayersGross='bad').team_b_players_gross == [None, None]

    def test_drive_outside_slots_ignored(self):
        hole = HoleInput(teamADrive=2)
        assert hole.drive_for('teamA') is None
        assert hole.raw_drive_for('teamA') == 2

    def test_store_hole_map(self):
        holes = normalize_holes({
            '1': {'input': {'teamAPlayerGross': 4}},
            '3': {'teamAPlayerGross': 5},
            '19': {'teamAPlayerGross': 3},
            'notes': 'ignored',
        })
        assert len(holes) == 18
        assert holes[0] == {'teamAPlayerGross': 4}
        assert holes[1] == {}
        assert holes[2] == {'teamAPlayerGross': 5}

    def test_match_document_from_store(self):
        match = MatchDocument.model_validate({
            'matchId': 'm1',
            'roundId': 'r1',
            'format': 'singles',
            'teamAPlayers': [{'playerId': 'a1', 'strokesReceived': [1] * 18}],
            'teamBPlayers': [{'playerId': 'b1', 'strokesReceived': [0] * 10}],
            'holes': {'2': {'input': {'teamAPlayerGross': 5, 'teamBPlayerGross': 4}}},
            'status': {'leader': 'teamA'},
        })
        assert len(match.holes) == 18
        assert match.holes[1].team_a_player_gross == 5
        assert match.holes[0].has_any_score() is False
        assert match.roster.entry('teamB', 0).strokes_received == [0] * 18
        assert match.roster.entry('teamB', 1) is None


class TestReferenceDocuments:
    """Tests for course and config schemas."""

    def test_course_par(self):
        course = CourseDocument(holes=[{'number': n, 'par': 5 if n in (1, 10) else 4}
                                       for n in range(1, 19)])
        assert course.par == 74
        assert course.par_for(10) == 5
        assert CourseDocument().par == 72

    def test_duplicate_course_holes(self):
        with pytest.raises(ValidationError):
            CourseDocument(holes=[{'number': 1}, {'number': 1}])

    def test_config_rejects_nine_holes(self):
        with pytest.raises(ValidationError):
            ScoringConfig(holes_per_round=9)

    def test_config_rejects_unknown_keys(self):
        with pytest.raises(ValidationError):
            ScoringConfig(min_drives=6)
