"""Drive tracking for scramble and shamble rounds.

Each side picks one player's drive per hole. Every player is expected to
contribute a minimum number of drives over the round; falling short is
reported as a warning and never affects the match score.
"""

import logging
from collections.abc import Sequence
from typing import Optional

from .constants import HOLES_PER_ROUND, MIN_DRIVES_PER_ROUND, SIDES, TEAM_A, TEAM_B
from .models import Format
from .schemas import HoleInput

logger = logging.getLogger('matchplay.drives')


class DriveLedger:
    """Which player's drive each side used on each hole."""

    def __init__(self, fmt: Format | str, min_drives: int = MIN_DRIVES_PER_ROUND):
        self.format = Format(fmt)
        self.min_drives = min_drives
        self._drives: dict[str, list[Optional[int]]] = {
            team: [None] * HOLES_PER_ROUND for team in SIDES
        }

    @classmethod
    def from_holes(
        cls,
        fmt: Format | str,
        holes: Sequence[HoleInput],
        min_drives: int = MIN_DRIVES_PER_ROUND,
    ) -> 'DriveLedger':
        """Build a ledger from the drive fields of a match's hole inputs."""
        ledger = cls(fmt, min_drives=min_drives)
        if not ledger.format.tracks_drives:
            return ledger
        for index, hole in enumerate(list(holes)[:HOLES_PER_ROUND]):
            for team in SIDES:
                ledger._drives[team][index] = hole.drive_for(team)
        return ledger

    def _check(self, hole_number: int, team: str) -> None:
        if not 1 <= hole_number <= HOLES_PER_ROUND:
            raise ValueError(f'Hole number must be 1-{HOLES_PER_ROUND}, got {hole_number}')
        if team not in SIDES:
            raise ValueError(f'Unknown side: {team}')

    def record_drive(self, hole_number: int, team: str, player_index: Optional[int]) -> Optional[int]:
        """
        Record whose drive a side used on a hole.

        Selecting the player already recorded clears the hole; None clears it
        as well.

        Args:
            hole_number: Hole number (1-18)
            team: 'teamA' or 'teamB'
            player_index: 0 or 1, or None to clear

        Returns:
            The drive now recorded for the hole (None if cleared)

        Raises:
            ValueError: If the format does not track drives or an argument is out of range
        """
        if not self.format.tracks_drives:
            raise ValueError(f'{self.format.value} does not track drives')
        self._check(hole_number, team)
        if player_index not in (0, 1, None):
            raise ValueError(f'Drive player index must be 0 or 1, got {player_index}')

        current = self._drives[team][hole_number - 1]
        selected = None if player_index is None or player_index == current else player_index
        self._drives[team][hole_number - 1] = selected
        return selected

    def drive_for(self, hole_number: int, team: str) -> Optional[int]:
        self._check(hole_number, team)
        return self._drives[team][hole_number - 1]

    def drives_used(self, team: str) -> list[int]:
        """Drives used per player slot, summed over all holes."""
        counts = [0, 0]
        for drive in self._drives[team]:
            if drive is not None:
                counts[drive] += 1
        return counts

    def holes_remaining(self, team: str) -> int:
        """Holes with no drive recorded yet for the side."""
        return sum(1 for drive in self._drives[team] if drive is None)

    def drives_still_needed(self, team: str, holes_remaining: Optional[int] = None) -> list[int]:
        """
        Drives each player is short that the remaining holes cannot make up.

        A non-zero value means the minimum can no longer be met even if the
        player's drive is used on every remaining hole.
        """
        if holes_remaining is None:
            holes_remaining = self.holes_remaining(team)
        return [
            max(0, self.min_drives - used - holes_remaining) for used in self.drives_used(team)
        ]

    def shortfall_warnings(self) -> list[str]:
        """Human-readable warnings for unrecoverable drive shortfalls."""
        warnings: list[str] = []
        if not self.format.tracks_drives:
            return warnings
        for team in SIDES:
            for index, needed in enumerate(self.drives_still_needed(team)):
                if needed:
                    warnings.append(
                        f'{team} player {index + 1} will finish {needed} drive(s) short '
                        f'of the {self.min_drives}-drive minimum'
                    )
        for message in warnings:
            logger.warning(message)
        return warnings

    def apply_to(self, holes: Sequence[HoleInput]) -> list[HoleInput]:
        """Return copies of the hole inputs with this ledger's drives written in."""
        updated = []
        for index, hole in enumerate(list(holes)[:HOLES_PER_ROUND]):
            updated.append(hole.model_copy(update={
                'team_a_drive': self._drives[TEAM_A][index],
                'team_b_drive': self._drives[TEAM_B][index],
            }))
        return updated
