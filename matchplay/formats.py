"""Per-format hole resolution.

Each format has one resolver that turns a hole's raw input plus the roster's
stroke allocation into a comparable score per side. The resolver is picked
once per match with get_resolver() and reused for every hole.
"""

from typing import Optional

from .constants import ALL_SQUARE, SIDES, TEAM_A, TEAM_B
from .models import Format, HoleResolution
from .schemas import HoleInput, MatchRoster
from .strokes import net_score

# (gross, net) for one player slot on one hole
PlayerLine = tuple[Optional[int], Optional[int]]


class FormatScoreResolver:
    """
    Base class for format resolvers.

    Subclasses implement side_score() and player_lines(). A side's score is
    None until every input that side needs is present; a hole is complete
    only when both sides have a score.
    """

    format: Format

    def side_score(
        self, hole: HoleInput, roster: MatchRoster, team: str, hole_index: int
    ) -> Optional[int]:
        raise NotImplementedError

    def player_lines(
        self, hole: HoleInput, roster: MatchRoster, team: str, hole_index: int
    ) -> list[PlayerLine]:
        """Gross and net for each player slot of a side (team formats share a ball in scramble)."""
        raise NotImplementedError

    def resolve(self, hole: HoleInput, roster: MatchRoster, hole_index: int) -> HoleResolution:
        """
        Resolve one hole.

        Args:
            hole: Raw hole input
            roster: Match roster with stroke allocations
            hole_index: Zero-based hole index

        Returns:
            HoleResolution with both side scores and the completeness flag
        """
        a = self.side_score(hole, roster, TEAM_A, hole_index)
        b = self.side_score(hole, roster, TEAM_B, hole_index)
        return HoleResolution(team_a_score=a, team_b_score=b, complete=a is not None and b is not None)

    def _has_slot(self, roster: MatchRoster, team: str, index: int) -> bool:
        return roster.entry(team, index) is not None


class SinglesResolver(FormatScoreResolver):
    """One player per side, net of handicap stroke."""

    format = Format.SINGLES

    def player_lines(self, hole, roster, team, hole_index):
        if not self._has_slot(roster, team, 0):
            return [(None, None)]
        gross = hole.player_gross_for(team)
        return [(gross, net_score(gross, roster.entry(team, 0), hole_index))]

    def side_score(self, hole, roster, team, hole_index):
        return self.player_lines(hole, roster, team, hole_index)[0][1]


class BestBallResolver(FormatScoreResolver):
    """Two players per side; the lower net counts."""

    format = Format.BEST_BALL

    def player_lines(self, hole, roster, team, hole_index):
        lines = []
        for index, gross in enumerate(hole.players_gross_for(team)):
            if not self._has_slot(roster, team, index):
                lines.append((None, None))
                continue
            lines.append((gross, net_score(gross, roster.entry(team, index), hole_index)))
        return lines

    def side_score(self, hole, roster, team, hole_index):
        nets = [net for _gross, net in self.player_lines(hole, roster, team, hole_index)]
        if any(n is None for n in nets):
            return None
        return min(nets)


class ShambleResolver(FormatScoreResolver):
    """Two players per side playing from the chosen drive; the lower gross counts, no strokes."""

    format = Format.SHAMBLE

    def player_lines(self, hole, roster, team, hole_index):
        lines = []
        for index, gross in enumerate(hole.players_gross_for(team)):
            if not self._has_slot(roster, team, index):
                lines.append((None, None))
                continue
            lines.append((gross, gross))
        return lines

    def side_score(self, hole, roster, team, hole_index):
        grosses = [gross for gross, _net in self.player_lines(hole, roster, team, hole_index)]
        if any(g is None for g in grosses):
            return None
        return min(grosses)


class ScrambleResolver(FormatScoreResolver):
    """One ball per side; the team gross counts as is."""

    format = Format.SCRAMBLE

    def player_lines(self, hole, roster, team, hole_index):
        gross = self.side_score(hole, roster, team, hole_index)
        return [(gross, gross) for _ in range(Format.SCRAMBLE.players_per_side)]

    def side_score(self, hole, roster, team, hole_index):
        if not roster.side(team):
            return None
        return hole.gross_for(team)


_RESOLVERS: dict[Format, FormatScoreResolver] = {
    Format.SINGLES: SinglesResolver(),
    Format.BEST_BALL: BestBallResolver(),
    Format.SHAMBLE: ShambleResolver(),
    Format.SCRAMBLE: ScrambleResolver(),
}


def get_resolver(fmt: Format | str) -> FormatScoreResolver:
    """
    Get the resolver for a format.

    Raises:
        ValueError: If the format tag is unknown
    """
    return _RESOLVERS[Format(fmt)]


def resolve_hole(
    fmt: Format | str, hole: HoleInput, roster: MatchRoster, hole_index: int
) -> HoleResolution:
    """Resolve a single hole for the given format."""
    return get_resolver(fmt).resolve(hole, roster, hole_index)


def hole_winner(resolution: HoleResolution) -> Optional[str]:
    """
    Decide a resolved hole.

    Returns:
        'teamA' or 'teamB' for the lower score, 'AS' for a halved hole,
        None when the hole is incomplete
    """
    if not resolution.complete:
        return None
    a, b = resolution.team_a_score, resolution.team_b_score
    if a < b:  # type: ignore[operator]
        return TEAM_A
    if b < a:  # type: ignore[operator]
        return TEAM_B
    return ALL_SQUARE


def side_result(winner: Optional[str], team: str) -> Optional[str]:
    """Translate a hole winner into 'win', 'loss' or 'halve' for one side."""
    if winner is None:
        return None
    if winner == ALL_SQUARE:
        return 'halve'
    if winner not in SIDES:
        return None
    return 'win' if winner == team else 'loss'
