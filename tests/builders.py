"""Helpers for building match documents in tests."""

from matchplay.models import Format
from matchplay.schemas import HoleInput, MatchDocument, RosterEntry

DEFAULT_IDS = {'teamA': ['a1', 'a2'], 'teamB': ['b1', 'b2']}


def stroke_array(holes=()):
    """18-value stroke allocation with a stroke on the given hole numbers."""
    return [1 if n in holes else 0 for n in range(1, 19)]


def _at(scores, index):
    return scores[index] if index < len(scores) else None


def make_match(
    fmt,
    team_a,
    team_b,
    strokes=None,
    drives=None,
    player_ids=None,
    match_id='m1',
    round_id='r1',
):
    """
    Build a MatchDocument.

    team_a / team_b hold one entry per hole starting at hole 1: an int (or None)
    for singles and scramble, a (gross, gross) pair for best ball and shamble.
    strokes maps player id -> hole numbers with a stroke; drives maps side ->
    list of drive indices per hole.
    """
    fmt = Format(fmt)
    strokes = strokes or {}
    drives = drives or {}
    ids = player_ids or DEFAULT_IDS

    def side(team):
        return [
            RosterEntry(player_id=pid, strokes_received=stroke_array(strokes.get(pid, ())))
            for pid in ids[team][:fmt.players_per_side]
        ]

    holes = []
    for i in range(18):
        a = _at(team_a, i)
        b = _at(team_b, i)
        if fmt is Format.SINGLES:
            data = {'team_a_player_gross': a, 'team_b_player_gross': b}
        elif fmt is Format.SCRAMBLE:
            data = {'team_a_gross': a, 'team_b_gross': b}
        else:
            data = {
                'team_a_players_gross': list(a) if a else [None, None],
                'team_b_players_gross': list(b) if b else [None, None],
            }
        if fmt.tracks_drives:
            data['team_a_drive'] = _at(drives.get('teamA', []), i)
            data['team_b_drive'] = _at(drives.get('teamB', []), i)
        holes.append(HoleInput(**data))

    return MatchDocument(
        match_id=match_id,
        round_id=round_id,
        format=fmt,
        team_a_players=side('teamA'),
        team_b_players=side('teamB'),
        holes=holes,
    )
