from .models import (
    Format,
    HoleResolution,
    MatchStatus,
    MatchResult,
    HolePerformance,
    PlayerMatchFact,
    PlayerStats,
    VsAllRecord,
    BirdieEagleLeader,
    HoleAverage,
    RoundRecap,
)
from .schemas import (
    RosterEntry,
    MatchRoster,
    HoleInput,
    MatchDocument,
    RoundDocument,
    CourseDocument,
    TournamentDocument,
    ScoringConfig,
)
from .strokes import stroke_at, strokes_given
from .formats import FormatScoreResolver, get_resolver, resolve_hole, hole_winner
from .match_status import evaluate, evaluate_match
from .results import finalize, live_status_text, format_to_par
from .drives import DriveLedger
from .facts import FactStore, generate_player_facts
from .stats import aggregate_player_stats, aggregate_all, aggregate_by_series
from .recap import recap, compute_vs_all
from .pipeline import RoundScorer, MatchUpdate, compute_match, process_match_update, rebuild_stats

__all__ = [
    # Models
    'Format',
    'HoleResolution',
    'MatchStatus',
    'MatchResult',
    'HolePerformance',
    'PlayerMatchFact',
    'PlayerStats',
    'VsAllRecord',
    'BirdieEagleLeader',
    'HoleAverage',
    'RoundRecap',
    # Input documents
    'RosterEntry',
    'MatchRoster',
    'HoleInput',
    'MatchDocument',
    'RoundDocument',
    'CourseDocument',
    'TournamentDocument',
    'ScoringConfig',
    # Hole resolution
    'stroke_at',
    'strokes_given',
    'FormatScoreResolver',
    'get_resolver',
    'resolve_hole',
    'hole_winner',
    # Match status and result
    'evaluate',
    'evaluate_match',
    'finalize',
    'live_status_text',
    'format_to_par',
    'DriveLedger',
    # Facts, stats and recap
    'FactStore',
    'generate_player_facts',
    'aggregate_player_stats',
    'aggregate_all',
    'aggregate_by_series',
    'recap',
    'compute_vs_all',
    # Pipeline
    'RoundScorer',
    'MatchUpdate',
    'compute_match',
    'process_match_update',
    'rebuild_stats',
]
