"""Tests for the round recap."""

import pytest

from matchplay.models import Format
from matchplay.recap import Competitor, compute_hole_averages, compute_vs_all, recap
from matchplay.schemas import CourseDocument, RoundDocument

from builders import make_match


def _singles(match_id, a_id, b_id, team_a, team_b, **kwargs):
    return make_match('singles', team_a, team_b, match_id=match_id,
                      player_ids={'teamA': [a_id], 'teamB': [b_id]}, **kwargs)


@pytest.fixture
def singles_round():
    """Two closed singles matches: a1 71 vs b1 72 (1 UP), a3 72 vs b3 75 (2 UP)."""
    return [
        _singles('m1', 'a1', 'b1', [3] + [4] * 17, [4] * 18),
        _singles('m2', 'a3', 'b3', [4] * 18, [5] + [4] * 16 + [6]),
    ]


class TestVsAll:
    """Tests for the vs-all simulation."""

    def test_records(self):
        competitors = [
            Competitor(key='A', player_ids=('A',), scores=[4] * 18),
            Competitor(key='B', player_ids=('B',), scores=[5] * 18),
            Competitor(key='C', player_ids=('C',), scores=[4] * 17 + [None]),
        ]
        records = compute_vs_all(competitors)
        assert [(r.competitor_key, r.wins, r.losses, r.ties) for r in records] == [
            ('A', 1, 0, 1),
            ('C', 1, 0, 1),
            ('B', 0, 2, 0),
        ]
        assert records[1].holes == 17
        assert records[0].total == 72

    def test_wins_equal_losses(self):
        competitors = [
            Competitor(key=str(i), player_ids=(str(i),), scores=[4 + (i % 3)] * 18)
            for i in range(7)
        ]
        records = compute_vs_all(competitors)
        assert sum(r.wins for r in records) == sum(r.losses for r in records)
        for record in records:
            assert record.wins + record.losses + record.ties == len(competitors) - 1

    def test_no_common_holes_tie(self):
        competitors = [
            Competitor(key='A', player_ids=('A',), scores=[4] * 9 + [None] * 9),
            Competitor(key='B', player_ids=('B',), scores=[None] * 9 + [3] * 9),
        ]
        assert all(r.ties == 1 for r in compute_vs_all(competitors))


class TestSinglesRecap:
    """Tests for a recap built from singles matches."""

    def test_vs_all_order(self, singles_round):
        result = recap(singles_round, RoundDocument(round_id='r1', format='singles'))
        assert [(r.competitor_key, r.wins, r.losses, r.ties) for r in result.vs_all_records] == [
            ('a1', 3, 0, 0),
            ('a3', 1, 1, 1),
            ('b1', 1, 1, 1),
            ('b3', 0, 3, 0),
        ]
        assert result.matches_included == 2

    def test_birdie_leaders(self, singles_round):
        result = recap(singles_round, RoundDocument(round_id='r1', format='singles'))
        assert [(b.player_id, b.count, b.holes) for b in result.birdies_gross] == [('a1', 1, (1,))]
        assert [b.player_id for b in result.birdies_net] == ['a1']
        assert result.eagles_gross == []

    def test_net_birdies_from_strokes(self):
        matches = [_singles('m1', 'a1', 'b1', [4] * 18, [4] * 18, strokes={'b1': {2}})]
        result = recap(matches, RoundDocument(round_id='r1', format='singles'))
        assert result.birdies_gross == []
        assert [(b.player_id, b.holes) for b in result.birdies_net] == [('b1', (2,))]

    def test_hole_averages(self, singles_round):
        result = recap(singles_round, RoundDocument(round_id='r1', format='singles'))
        first = result.hole_averages[0]
        assert first.avg_gross == 4.0
        assert (first.lowest_gross, first.highest_gross) == (3, 5)
        assert first.scoring_count == 4
        assert result.hole_averages[17].avg_gross == 4.5
        assert result.worst_hole == (18, 0.5)
        assert result.best_hole == (1, 0.0)

    def test_course_pars(self, singles_round):
        course = CourseDocument(course_id='c1', holes=[
            {'number': n, 'par': 3 if n == 18 else 4} for n in range(1, 19)
        ])
        result = recap(singles_round, RoundDocument(round_id='r1', format='singles'), course)
        assert result.course_par == 71
        assert result.hole_averages[17].avg_vs_par == 1.5
        assert result.worst_hole == (18, 1.5)

    def test_default_pars_without_course(self, singles_round):
        result = recap(singles_round, RoundDocument(round_id='r1', format='singles'),
                       default_hole_par=5, default_course_par=90)
        assert result.course_par == 90
        assert result.hole_averages[1].par == 5
        assert result.hole_averages[1].avg_vs_par == -1.0

    def test_open_matches_skipped(self, singles_round):
        open_match = _singles('m3', 'a5', 'b5', [4] * 5, [4] * 5)
        result = recap(singles_round + [open_match], RoundDocument(round_id='r1', format='singles'))
        assert result.matches_included == 2
        assert len(result.vs_all_records) == 4

    def test_duplicate_competitor_counted_once(self, singles_round):
        duplicate = _singles('m9', 'a1', 'b9', [4] * 18, [5] * 18)
        result = recap(singles_round + [duplicate], RoundDocument(round_id='r1', format='singles'))
        keys = [r.competitor_key for r in result.vs_all_records]
        assert keys.count('a1') == 1
        assert 'b9' in keys


class TestTeamRecap:
    """Tests for recaps of team formats."""

    def test_scramble_teams(self):
        matches = [
            make_match('twoManScramble', [3] * 18, [4] * 18, match_id='m1'),
            make_match('twoManScramble', [4] * 18, [5] * 18, match_id='m2',
                       player_ids={'teamA': ['c2', 'c1'], 'teamB': ['d1', 'd2']}),
        ]
        result = recap(matches, RoundDocument(round_id='r1', format='twoManScramble'))
        keys = [r.competitor_key for r in result.vs_all_records]
        assert keys[0] == 'a1_a2'
        assert 'c1_c2' in keys
        # Averaged over the four teams, not the eight players
        assert result.hole_averages[0].scoring_count == 4
        assert result.hole_averages[0].avg_net is None
        assert result.birdies_net == []
        assert {b.player_id for b in result.birdies_gross} == {'a1', 'a2'}

    def test_best_ball_team_uses_net(self):
        matches = [
            make_match('twoManBestBall', [(5, 5)] * 18, [(5, 5)] * 18, match_id='m1',
                       strokes={'a1': set(range(1, 19))}),
        ]
        result = recap(matches, RoundDocument(round_id='r1', format='twoManBestBall'))
        top = result.vs_all_records[0]
        assert top.competitor_key == 'a1_a2'
        assert top.total == 72
        assert result.hole_averages[0].scoring_count == 4
        assert result.hole_averages[0].avg_net == 4.75

    def test_hole_averages_direct(self):
        match = make_match('twoManShamble', [(4, 6)] * 18, [(5, 5)] * 18)
        averages = compute_hole_averages(Format.SHAMBLE, [match], [4] * 18)
        assert averages[0].avg_gross == 5.0
        assert averages[0].avg_net is None
        assert averages[0].avg_vs_par == 1.0
