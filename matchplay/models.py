"""Data models for the match-play scoring engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .constants import TEAM_A, TEAM_B


class Format(str, Enum):
    """Scoring format of a round. Values match the store's format tags."""

    SINGLES = 'singles'
    BEST_BALL = 'twoManBestBall'
    SHAMBLE = 'twoManShamble'
    SCRAMBLE = 'twoManScramble'

    @property
    def players_per_side(self) -> int:
        return 1 if self is Format.SINGLES else 2

    @property
    def tracks_drives(self) -> bool:
        return self in (Format.SHAMBLE, Format.SCRAMBLE)

    @property
    def uses_handicap(self) -> bool:
        """Whether handicap strokes are subtracted when deciding a hole."""
        return self in (Format.SINGLES, Format.BEST_BALL)

    @property
    def individual_scores(self) -> bool:
        """Whether every player records their own gross score."""
        return self is not Format.SCRAMBLE

    @property
    def is_team_format(self) -> bool:
        return self is not Format.SINGLES


def other_side(team: str) -> str:
    """Return the opposing side identifier."""
    return TEAM_B if team == TEAM_A else TEAM_A


@dataclass(frozen=True)
class HoleResolution:
    """Comparable team scores for one hole."""
    team_a_score: Optional[int]
    team_b_score: Optional[int]
    complete: bool


@dataclass(frozen=True)
class MatchStatus:
    """Live state of a match, recomputed from scratch on every evaluation."""
    leader: Optional[str] = None
    margin: int = 0
    thru: int = 0
    closed: bool = False
    dormie: bool = False
    # Signed margin after each hole (positive = teamA ahead), None when undetermined
    margin_history: tuple[Optional[int], ...] = ()
    holes_won_a: int = 0
    holes_won_b: int = 0
    holes_complete: int = 0
    closed_at: Optional[int] = None
    was_team_a_down_back9: bool = False
    was_team_a_up_back9: bool = False

    @property
    def signed_margin(self) -> int:
        if self.leader == TEAM_B:
            return -self.margin
        return self.margin


@dataclass(frozen=True)
class MatchResult:
    """Final result of a closed match."""
    winner: str  # teamA, teamB or AS
    display_margin: str
    holes_won_a: int = 0
    holes_won_b: int = 0


@dataclass(frozen=True)
class HolePerformance:
    """One player's line on one hole, stored with the match fact."""
    hole: int
    par: int
    gross: Optional[int] = None
    net: Optional[int] = None
    strokes: Optional[int] = None
    result: Optional[str] = None  # win, loss, halve
    drive_used: Optional[bool] = None


@dataclass(frozen=True)
class PlayerMatchFact:
    """Immutable per-player snapshot of a closed match."""
    match_id: str
    player_id: str
    team: str
    format: Format
    outcome: str  # win, loss, halve
    holes_won: int
    holes_lost: int
    holes_halved: int
    final_margin: int
    final_thru: int
    tournament_id: str = ''
    round_id: str = ''
    course_id: str = ''
    day: int = 0
    tournament_year: int = 0
    tournament_name: str = ''
    tournament_series: str = ''
    player_team_id: str = ''
    opponent_team_id: str = ''
    partner_ids: tuple[str, ...] = ()
    opponent_ids: tuple[str, ...] = ()
    points_earned: float = 0.0
    course_par: int = 0
    strokes_given: int = 0

    # Scoring totals
    total_gross: Optional[int] = None
    total_net: Optional[int] = None
    strokes_vs_par_gross: Optional[int] = None
    strokes_vs_par_net: Optional[int] = None
    team_total_gross: Optional[int] = None
    team_strokes_vs_par_gross: Optional[int] = None
    team_worst_ball_total: Optional[int] = None
    jekyll_and_hyde: bool = False

    # Momentum
    lead_changes: int = 0
    was_never_behind: bool = True
    comeback_win: bool = False
    blown_lead: bool = False
    winning_hole: Optional[int] = None
    decided_on_18: bool = False
    won_18th_hole: Optional[bool] = None

    # Ball and drive usage
    balls_used: Optional[int] = None
    balls_used_solo: Optional[int] = None
    balls_used_shared: Optional[int] = None
    balls_used_solo_won_hole: Optional[int] = None
    balls_used_solo_push: Optional[int] = None
    ball_used_on_18: Optional[bool] = None
    drives_used: Optional[int] = None

    birdies: int = 0
    eagles: int = 0
    birdies_net: Optional[int] = None
    eagles_net: Optional[int] = None

    hole_performance: tuple[HolePerformance, ...] = ()

    @property
    def key(self) -> tuple[str, str]:
        return (self.match_id, self.player_id)


@dataclass
class FormatRecord:
    """Win/loss/halve tally for one format."""
    wins: int = 0
    losses: int = 0
    halves: int = 0
    matches: int = 0


@dataclass
class PlayerStats:
    """Running totals for a player, rebuilt by folding match facts."""
    player_id: str
    series: Optional[str] = None
    wins: int = 0
    losses: int = 0
    halves: int = 0
    points: float = 0.0
    matches_played: int = 0
    format_breakdown: dict[str, FormatRecord] = field(default_factory=dict)

    holes_won: int = 0
    holes_lost: int = 0
    holes_halved: int = 0

    # Individual formats only (singles, best ball)
    total_gross: int = 0
    total_net: int = 0
    holes_played: int = 0
    strokes_vs_par_gross: int = 0
    strokes_vs_par_net: int = 0

    birdies: int = 0
    eagles: int = 0

    comeback_wins: int = 0
    blown_leads: int = 0
    never_behind_wins: int = 0
    jekyll_and_hydes: int = 0
    clutch_wins: int = 0

    drives_used: int = 0
    balls_used: int = 0
    balls_used_solo: int = 0

    @property
    def record(self) -> str:
        return f'{self.wins}-{self.losses}-{self.halves}'

    @property
    def win_pct(self) -> float:
        """Match win percentage with halves counted as half a win."""
        if not self.matches_played:
            return 0.0
        return (self.wins + 0.5 * self.halves) / self.matches_played


@dataclass
class VsAllRecord:
    """Simulated round-robin record of one competitor in a round."""
    competitor_key: str
    player_ids: tuple[str, ...]
    wins: int = 0
    losses: int = 0
    ties: int = 0
    total: Optional[int] = None
    holes: int = 0


@dataclass(frozen=True)
class BirdieEagleLeader:
    player_id: str
    count: int
    holes: tuple[int, ...] = ()


@dataclass(frozen=True)
class HoleAverage:
    """Scoring summary for one hole across a round."""
    hole_number: int
    par: int
    avg_gross: Optional[float] = None
    avg_net: Optional[float] = None
    lowest_gross: Optional[int] = None
    highest_gross: Optional[int] = None
    lowest_net: Optional[int] = None
    highest_net: Optional[int] = None
    scoring_count: int = 0

    @property
    def avg_vs_par(self) -> Optional[float]:
        if self.avg_gross is None:
            return None
        return round(self.avg_gross - self.par, 2)


@dataclass
class RoundRecap:
    """Aggregate statistics for every closed match of a round."""
    round_id: str
    format: Format
    course_par: int
    vs_all_records: list[VsAllRecord] = field(default_factory=list)
    hole_averages: list[HoleAverage] = field(default_factory=list)
    birdies_gross: list[BirdieEagleLeader] = field(default_factory=list)
    birdies_net: list[BirdieEagleLeader] = field(default_factory=list)
    eagles_gross: list[BirdieEagleLeader] = field(default_factory=list)
    eagles_net: list[BirdieEagleLeader] = field(default_factory=list)
    best_hole: Optional[tuple[int, float]] = None
    worst_hole: Optional[tuple[int, float]] = None
    matches_included: int = 0
