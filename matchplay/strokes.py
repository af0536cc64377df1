"""Handicap stroke lookups.

Course handicaps are distributed across holes upstream when a match is
created; a roster entry already carries one 0/1 value per hole. This module
only reads that allocation.
"""

from typing import Optional

from .constants import HOLES_PER_ROUND
from .schemas import RosterEntry


def stroke_at(entry: Optional[RosterEntry], hole_index: int) -> int:
    """
    Return the handicap stroke a player receives on a hole.

    Args:
        entry: Roster entry, or None for an empty roster slot
        hole_index: Zero-based hole index (0..17)

    Returns:
        1 if the stored allocation for the hole is exactly 1, otherwise 0.
        Never more than one stroke per hole.
    """
    if entry is None or not 0 <= hole_index < HOLES_PER_ROUND:
        return 0
    strokes = entry.strokes_received
    if hole_index >= len(strokes):
        return 0
    return 1 if strokes[hole_index] == 1 else 0


def strokes_given(entry: Optional[RosterEntry]) -> int:
    """Total strokes a player receives over the round."""
    if entry is None:
        return 0
    return sum(stroke_at(entry, i) for i in range(HOLES_PER_ROUND))


def net_score(gross: Optional[int], entry: Optional[RosterEntry], hole_index: int) -> Optional[int]:
    """Gross minus the hole's stroke, or None when there is no gross."""
    if gross is None:
        return None
    return gross - stroke_at(entry, hole_index)
