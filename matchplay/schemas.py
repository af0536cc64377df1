"""Pydantic schemas for the documents delivered by the tournament store."""

import math
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .constants import (
    DEFAULT_COURSE_PAR,
    DEFAULT_HOLE_PAR,
    HOLES_PER_ROUND,
    JEKYLL_AND_HYDE_THRESHOLD,
    COMEBACK_THRESHOLD,
    MIN_DRIVES_PER_ROUND,
    TEAM_A,
)
from .models import Format


def _coerce_score(value: Any) -> Optional[int]:
    """Turn a raw score cell into an int, or None when it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value) or not value.is_integer():
            return None
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _pair(value: Any) -> list[Optional[int]]:
    if not isinstance(value, (list, tuple)):
        return [None, None]
    scores = [_coerce_score(v) for v in list(value)[:2]]
    while len(scores) < 2:
        scores.append(None)
    return scores


class RosterEntry(BaseModel):
    """A player in a match with their per-hole stroke allocation."""

    player_id: str = Field(default='', alias='playerId')
    strokes_received: list[int] = Field(
        default_factory=lambda: [0] * HOLES_PER_ROUND, alias='strokesReceived'
    )

    @field_validator('player_id', mode='before')
    @classmethod
    def validate_player_id(cls, v):
        """Non-string ids mark an empty roster slot."""
        return v if isinstance(v, str) else ''

    @field_validator('strokes_received', mode='before')
    @classmethod
    def validate_strokes(cls, v):
        """Arrays of the wrong length are replaced with no strokes."""
        if not isinstance(v, (list, tuple)) or len(v) != HOLES_PER_ROUND:
            return [0] * HOLES_PER_ROUND
        return [_coerce_score(s) or 0 for s in v]

    class Config:
        populate_by_name = True
        extra = 'ignore'


class MatchRoster(BaseModel):
    """Both sides of a match."""

    team_a: list[RosterEntry] = Field(default_factory=list)
    team_b: list[RosterEntry] = Field(default_factory=list)

    def side(self, team: str) -> list[RosterEntry]:
        return self.team_a if team == TEAM_A else self.team_b

    def entry(self, team: str, index: int) -> Optional[RosterEntry]:
        """Return the roster slot, or None when the slot is missing."""
        players = self.side(team)
        if 0 <= index < len(players):
            return players[index]
        return None


class HoleInput(BaseModel):
    """Raw entry for one hole. Which fields are used depends on the format."""

    # Scramble
    team_a_gross: Optional[int] = Field(default=None, alias='teamAGross')
    team_b_gross: Optional[int] = Field(default=None, alias='teamBGross')
    # Scramble / shamble
    team_a_drive: Optional[int] = Field(default=None, alias='teamADrive')
    team_b_drive: Optional[int] = Field(default=None, alias='teamBDrive')
    # Singles
    team_a_player_gross: Optional[int] = Field(default=None, alias='teamAPlayerGross')
    team_b_player_gross: Optional[int] = Field(default=None, alias='teamBPlayerGross')
    # Best ball / shamble
    team_a_players_gross: list[Optional[int]] = Field(
        default_factory=lambda: [None, None], alias='teamAPlayersGross'
    )
    team_b_players_gross: list[Optional[int]] = Field(
        default_factory=lambda: [None, None], alias='teamBPlayersGross'
    )

    @field_validator(
        'team_a_gross', 'team_b_gross', 'team_a_player_gross', 'team_b_player_gross',
        mode='before',
    )
    @classmethod
    def validate_score(cls, v):
        return _coerce_score(v)

    @field_validator('team_a_drive', 'team_b_drive', mode='before')
    @classmethod
    def validate_drive(cls, v):
        return _coerce_score(v)

    @field_validator('team_a_players_gross', 'team_b_players_gross', mode='before')
    @classmethod
    def validate_players_gross(cls, v):
        return _pair(v)

    def gross_for(self, team: str) -> Optional[int]:
        """Team gross (scramble)."""
        return self.team_a_gross if team == TEAM_A else self.team_b_gross

    def player_gross_for(self, team: str) -> Optional[int]:
        """Singles gross, falling back to the first slot of a two-man entry."""
        gross = self.team_a_player_gross if team == TEAM_A else self.team_b_player_gross
        if gross is None:
            gross = self.players_gross_for(team)[0]
        return gross

    def players_gross_for(self, team: str) -> list[Optional[int]]:
        """Both player grosses for a side (best ball, shamble)."""
        return self.team_a_players_gross if team == TEAM_A else self.team_b_players_gross

    def drive_for(self, team: str) -> Optional[int]:
        """Index of the player whose drive was used, if a valid one is recorded."""
        drive = self.team_a_drive if team == TEAM_A else self.team_b_drive
        return drive if drive in (0, 1) else None

    def raw_drive_for(self, team: str) -> Optional[int]:
        return self.team_a_drive if team == TEAM_A else self.team_b_drive

    def has_any_score(self) -> bool:
        """Whether any score field at all has been entered."""
        singles = (self.team_a_gross, self.team_b_gross,
                   self.team_a_player_gross, self.team_b_player_gross)
        if any(s is not None for s in singles):
            return True
        return any(
            s is not None for s in self.team_a_players_gross + self.team_b_players_gross
        )

    class Config:
        populate_by_name = True
        extra = 'ignore'


def empty_holes() -> list[HoleInput]:
    """Return a blank 18-hole input set."""
    return [HoleInput() for _ in range(HOLES_PER_ROUND)]


def normalize_holes(raw: Any) -> list[Any]:
    """
    Normalize stored hole inputs into a fixed list of 18 entries.

    The store keys holes by stringified hole number ("1".."18") and wraps each
    entry as {"input": {...}}. Lists are taken as already ordered by hole.
    Keys outside 1..18 are dropped and missing holes are left blank.
    """
    holes: list[Any] = [{} for _ in range(HOLES_PER_ROUND)]

    if isinstance(raw, dict):
        items = []
        for key, value in raw.items():
            try:
                number = int(key)
            except (TypeError, ValueError):
                continue
            if str(number) != str(key).strip() or not 1 <= number <= HOLES_PER_ROUND:
                continue
            items.append((number, value))
    elif isinstance(raw, (list, tuple)):
        items = [(i + 1, v) for i, v in enumerate(list(raw)[:HOLES_PER_ROUND])]
    else:
        items = []

    for number, value in items:
        if isinstance(value, dict) and isinstance(value.get('input'), dict):
            value = value['input']
        if isinstance(value, (dict, HoleInput)):
            holes[number - 1] = value

    return holes


class MatchDocument(BaseModel):
    """A match as stored: roster, hole inputs and previously derived state."""

    match_id: str = Field(default='', alias='matchId')
    round_id: str = Field(default='', alias='roundId')
    tournament_id: str = Field(default='', alias='tournamentId')
    format: Optional[Format] = None
    team_a_players: list[RosterEntry] = Field(default_factory=list, alias='teamAPlayers')
    team_b_players: list[RosterEntry] = Field(default_factory=list, alias='teamBPlayers')
    holes: list[HoleInput] = Field(default_factory=empty_holes)

    @field_validator('holes', mode='before')
    @classmethod
    def validate_holes(cls, v):
        """Accept the store's string-keyed map as well as an ordered list."""
        return normalize_holes(v)

    @property
    def roster(self) -> MatchRoster:
        return MatchRoster(team_a=self.team_a_players, team_b=self.team_b_players)

    def with_hole(self, hole_number: int, hole: HoleInput) -> 'MatchDocument':
        """Return a copy with one hole's input replaced."""
        holes = list(self.holes)
        holes[hole_number - 1] = hole
        return self.model_copy(update={'holes': holes})

    class Config:
        populate_by_name = True
        extra = 'ignore'


class RoundDocument(BaseModel):
    """Round settings relevant to scoring."""

    round_id: str = Field(default='', alias='roundId')
    tournament_id: str = Field(default='', alias='tournamentId')
    format: Format = Format.BEST_BALL
    course_id: str = Field(default='', alias='courseId')
    course_par: Optional[int] = Field(default=None, ge=27, le=90, alias='coursePar')
    points_value: float = Field(default=1.0, ge=0, alias='pointsValue')
    track_drives: bool = Field(default=False, alias='trackDrives')
    locked: bool = False
    day: int = Field(default=0, ge=0)

    class Config:
        populate_by_name = True
        extra = 'ignore'


class CourseHole(BaseModel):
    """A hole on the course card."""

    number: int = Field(..., ge=1, le=HOLES_PER_ROUND)
    par: int = Field(default=DEFAULT_HOLE_PAR, ge=2, le=7)
    hcp_index: Optional[int] = Field(default=None, ge=1, le=HOLES_PER_ROUND, alias='hcpIndex')

    class Config:
        populate_by_name = True
        extra = 'ignore'


class CourseDocument(BaseModel):
    """Course card used for par lookups."""

    course_id: str = Field(default='', alias='courseId')
    name: str = ''
    par_override: Optional[int] = Field(default=None, alias='par')
    holes: list[CourseHole] = Field(default_factory=list)

    @field_validator('holes')
    @classmethod
    def validate_unique_holes(cls, v):
        """Ensure each hole number appears once."""
        numbers = [h.number for h in v]
        if len(numbers) != len(set(numbers)):
            raise ValueError(f'Duplicate hole numbers in course: {sorted(numbers)}')
        return v

    def par_for(self, hole_number: int) -> int:
        for hole in self.holes:
            if hole.number == hole_number:
                return hole.par
        return DEFAULT_HOLE_PAR

    @property
    def pars(self) -> list[int]:
        """Par of holes 1..18 in order."""
        return [self.par_for(n) for n in range(1, HOLES_PER_ROUND + 1)]

    @property
    def par(self) -> int:
        if self.par_override is not None:
            return self.par_override
        if not self.holes:
            return DEFAULT_COURSE_PAR
        return sum(self.pars)

    class Config:
        populate_by_name = True
        extra = 'ignore'


class TournamentDocument(BaseModel):
    """Tournament identity fields copied into match facts."""

    tournament_id: str = Field(default='', alias='tournamentId')
    name: str = ''
    year: int = 0
    series: str = ''
    team_a_id: str = Field(default='teamA', alias='teamAId')
    team_b_id: str = Field(default='teamB', alias='teamBId')

    class Config:
        populate_by_name = True
        extra = 'ignore'


class ScoringConfig(BaseModel):
    """Scoring thresholds loaded from data/scoring_config.json."""

    min_drives_per_round: int = Field(default=MIN_DRIVES_PER_ROUND, ge=0, le=9)
    comeback_threshold: int = Field(default=COMEBACK_THRESHOLD, ge=1, le=9)
    jekyll_and_hyde_threshold: int = Field(default=JEKYLL_AND_HYDE_THRESHOLD, ge=1)
    default_course_par: int = Field(default=DEFAULT_COURSE_PAR, ge=27, le=90)
    default_hole_par: int = Field(default=DEFAULT_HOLE_PAR, ge=2, le=7)
    holes_per_round: int = Field(default=HOLES_PER_ROUND)
    log_level: str = 'INFO'

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Normalize to an upper-case standard level name."""
        name = v.upper()
        if name not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f'Unknown log level: {v}')
        return name

    @field_validator('holes_per_round')
    @classmethod
    def validate_holes_per_round(cls, v):
        """Only regulation 18-hole rounds are supported."""
        if v != HOLES_PER_ROUND:
            raise ValueError(f'holes_per_round must be {HOLES_PER_ROUND}, got {v}')
        return v

    class Config:
        extra = 'forbid'
