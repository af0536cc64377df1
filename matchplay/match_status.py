"""Match status evaluation.

The status is always replayed from hole 1 through hole 18 so that a
correction to any hole, including one that reopens a closed match, is
reflected without any knowledge of the previously stored status.
"""

import logging
from collections.abc import Sequence
from typing import Optional

from .constants import BACK_NINE_ENTRY, COMEBACK_THRESHOLD, HOLES_PER_ROUND, TEAM_A, TEAM_B
from .formats import get_resolver, hole_winner
from .models import Format, MatchStatus
from .schemas import HoleInput, MatchDocument, MatchRoster

logger = logging.getLogger('matchplay.match_status')


def _pad_holes(holes: Sequence[HoleInput]) -> list[HoleInput]:
    padded = list(holes)[:HOLES_PER_ROUND]
    while len(padded) < HOLES_PER_ROUND:
        padded.append(HoleInput())
    return padded


def evaluate(
    fmt: Format | str,
    holes: Sequence[HoleInput],
    roster: MatchRoster,
    comeback_threshold: int = COMEBACK_THRESHOLD,
) -> MatchStatus:
    """
    Compute the match status from the full set of hole inputs.

    Holes are replayed in order. Incomplete holes leave a None in the margin
    history and do not move the margin. The match closes at the first
    complete hole where the lead exceeds the holes remaining, or once all 18
    holes are complete; input after the closing hole is ignored.

    Args:
        fmt: Round format
        holes: Hole inputs for holes 1..18 (index 0 is hole 1)
        roster: Both sides with stroke allocations
        comeback_threshold: Back-nine deficit/lead tracked for momentum stats

    Returns:
        MatchStatus for the current inputs
    """
    resolver = get_resolver(fmt)
    padded = _pad_holes(holes)

    margin = 0
    won_a = 0
    won_b = 0
    holes_complete = 0
    last_input = 0
    last_complete = 0
    closed_at: Optional[int] = None
    down_back9 = False
    up_back9 = False
    history: list[Optional[int]] = []

    for index, hole in enumerate(padded):
        number = index + 1
        if closed_at is not None:
            history.append(None)
            continue

        if hole.has_any_score():
            last_input = number

        winner = hole_winner(resolver.resolve(hole, roster, index))
        if winner is None:
            history.append(None)
            continue

        holes_complete += 1
        last_complete = number
        if winner == TEAM_A:
            margin += 1
            won_a += 1
        elif winner == TEAM_B:
            margin -= 1
            won_b += 1
        history.append(margin)

        if number >= BACK_NINE_ENTRY:
            if margin <= -comeback_threshold:
                down_back9 = True
            if margin >= comeback_threshold:
                up_back9 = True

        remaining = HOLES_PER_ROUND - number
        if abs(margin) > remaining or holes_complete == HOLES_PER_ROUND:
            closed_at = number

    closed = closed_at is not None
    thru = closed_at if closed_at is not None else max(last_input, last_complete)
    leader = TEAM_A if margin > 0 else TEAM_B if margin < 0 else None
    dormie = (
        not closed
        and margin != 0
        and abs(margin) == HOLES_PER_ROUND - last_complete
    )

    status = MatchStatus(
        leader=leader,
        margin=abs(margin),
        thru=thru,
        closed=closed,
        dormie=dormie,
        margin_history=tuple(history),
        holes_won_a=won_a,
        holes_won_b=won_b,
        holes_complete=holes_complete,
        closed_at=closed_at,
        was_team_a_down_back9=down_back9,
        was_team_a_up_back9=up_back9,
    )
    logger.debug(
        f'Evaluated {Format(fmt).value}: leader={leader} margin={abs(margin)} '
        f'thru={thru} closed={closed} dormie={dormie}'
    )
    return status


def evaluate_match(
    match: MatchDocument,
    fmt: Optional[Format | str] = None,
    comeback_threshold: int = COMEBACK_THRESHOLD,
) -> MatchStatus:
    """
    Evaluate a match document.

    The round's format wins over the format stored on the match; a match
    with neither is scored as two-man best ball.
    """
    fmt = fmt or match.format or Format.BEST_BALL
    return evaluate(fmt, match.holes, match.roster, comeback_threshold=comeback_threshold)
