"""Match results and status display strings."""

from typing import Optional

from .constants import ALL_SQUARE, HOLES_PER_ROUND
from .models import MatchResult, MatchStatus


def finalize(status: MatchStatus) -> Optional[MatchResult]:
    """
    Derive the final result of a closed match.

    Results:
        - margin 0: winner 'AS', "Halved"
        - closed before the 18th: "{margin} & {holes remaining}", e.g. "3 & 2"
        - closed on the 18th: "{margin} UP"

    Args:
        status: Status from evaluate()

    Returns:
        MatchResult, or None while the match is still open
    """
    if not status.closed:
        return None

    if status.margin == 0 or status.leader is None:
        return MatchResult(
            winner=ALL_SQUARE,
            display_margin='Halved',
            holes_won_a=status.holes_won_a,
            holes_won_b=status.holes_won_b,
        )

    if status.thru < HOLES_PER_ROUND:
        display = f'{status.margin} & {HOLES_PER_ROUND - status.thru}'
    else:
        display = f'{status.margin} UP'

    return MatchResult(
        winner=status.leader,
        display_margin=display,
        holes_won_a=status.holes_won_a,
        holes_won_b=status.holes_won_b,
    )


def live_status_text(status: MatchStatus) -> str:
    """Short status line for a match in progress (or its result once closed)."""
    if status.closed:
        result = finalize(status)
        return result.display_margin if result else ''
    if status.thru == 0:
        return 'Not started'
    if status.margin == 0:
        return f'AS thru {status.thru}'
    if status.dormie:
        return f'Dormie {status.margin} UP'
    return f'{status.margin} UP thru {status.thru}'


def format_to_par(strokes_vs_par: Optional[int]) -> str:
    """Format a strokes-vs-par value: 0 -> 'E', 3 -> '+3', -2 -> '-2'."""
    if strokes_vs_par is None:
        return '-'
    if strokes_vs_par == 0:
        return 'E'
    if strokes_vs_par > 0:
        return f'+{strokes_vs_par}'
    return str(strokes_vs_par)
