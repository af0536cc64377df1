"""Scoring pipeline invoked whenever a match document changes.

Flow for one update:
    hole inputs -> evaluate() -> finalize() -> facts regenerated (closed)
    or removed (open) -> stats / recap rebuilt by the caller on demand.

Every step recomputes from the full inputs, so redundant or out-of-order
invocations for the same document converge on the same state.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from .drives import DriveLedger
from .facts import FactStore, generate_player_facts
from .match_status import evaluate
from .models import Format, MatchResult, MatchStatus, PlayerMatchFact, PlayerStats, RoundRecap
from .recap import recap
from .results import finalize
from .schemas import (
    CourseDocument,
    MatchDocument,
    RoundDocument,
    ScoringConfig,
    TournamentDocument,
)
from .stats import aggregate_all
from .validators import validate_match

logger = logging.getLogger('matchplay.pipeline')


@dataclass
class MatchUpdate:
    """Outcome of processing one match document."""
    match_id: str
    status: MatchStatus
    result: Optional[MatchResult]
    facts: list[PlayerMatchFact] = field(default_factory=list)
    newly_closed: bool = False
    reopened: bool = False
    warnings: list[str] = field(default_factory=list)


def compute_match(
    match: MatchDocument, fmt: Format | str, config: Optional[ScoringConfig] = None
) -> tuple[MatchStatus, Optional[MatchResult]]:
    """Evaluate a match and finalize it if closed."""
    config = config or ScoringConfig()
    status = evaluate(fmt, match.holes, match.roster, comeback_threshold=config.comeback_threshold)
    return status, finalize(status)


class RoundScorer:
    """
    Scores the matches of one round.

    Holds the round's reference documents and the fact store that facts are
    written to. The store may be shared between rounds to build tournament
    stats.
    """

    def __init__(
        self,
        round_doc: RoundDocument,
        course: Optional[CourseDocument] = None,
        tournament: Optional[TournamentDocument] = None,
        store: Optional[FactStore] = None,
        config: Optional[ScoringConfig] = None,
    ):
        self.round_doc = round_doc
        self.format = Format(round_doc.format)
        self.course = course
        self.tournament = tournament
        self.store = store if store is not None else FactStore()
        self.config = config or ScoringConfig()

    def process_match(self, match: MatchDocument) -> MatchUpdate:
        """
        Recompute a match and bring its facts in the store up to date.

        Args:
            match: Current match document

        Returns:
            MatchUpdate with the new status, result and facts
        """
        match_id = match.match_id
        had_facts = bool(self.store.facts_for_match(match_id))

        warnings = validate_match(match, self.format)
        for message in warnings:
            logger.warning(message)

        status, result = compute_match(match, self.format, self.config)

        if self.round_doc.track_drives and self.format.tracks_drives:
            ledger = DriveLedger.from_holes(
                self.format, match.holes, min_drives=self.config.min_drives_per_round
            )
            warnings = warnings + ledger.shortfall_warnings()

        facts = generate_player_facts(
            match,
            status,
            result,
            round_doc=self.round_doc,
            course=self.course,
            tournament=self.tournament,
            jekyll_and_hyde_threshold=self.config.jekyll_and_hyde_threshold,
            default_hole_par=self.config.default_hole_par,
            default_course_par=self.config.default_course_par,
        )
        removed = self.store.replace_match_facts(match_id, facts)

        update = MatchUpdate(
            match_id=match_id,
            status=status,
            result=result,
            facts=facts,
            newly_closed=status.closed and not had_facts,
            reopened=not status.closed and had_facts,
            warnings=warnings,
        )

        if update.newly_closed:
            logger.info(f'Match {match_id} closed: {result.display_margin} ({result.winner})')  # type: ignore[union-attr]
        elif update.reopened:
            logger.info(f'Match {match_id} reopened; removed {removed} facts')
        elif status.closed:
            logger.info(f'Match {match_id} re-evaluated; regenerated {len(facts)} facts')
        else:
            logger.debug(f'Match {match_id} in progress thru {status.thru}')

        return update

    def process_matches(self, matches: Iterable[MatchDocument]) -> list[MatchUpdate]:
        """Process several matches in order."""
        return [self.process_match(match) for match in matches]

    def player_stats(self, series: Optional[str] = None) -> dict[str, PlayerStats]:
        """Rebuild stats for every player from the current fact set."""
        return rebuild_stats(self.store, series=series)

    def round_recap(self, matches: Iterable[MatchDocument]) -> RoundRecap:
        """Build the recap for the round's matches."""
        return recap(
            matches,
            self.round_doc,
            self.course,
            default_hole_par=self.config.default_hole_par,
            default_course_par=self.config.default_course_par,
        )


def process_match_update(
    match: MatchDocument,
    round_doc: RoundDocument,
    course: Optional[CourseDocument] = None,
    tournament: Optional[TournamentDocument] = None,
    store: Optional[FactStore] = None,
    config: Optional[ScoringConfig] = None,
) -> MatchUpdate:
    """
    Handle one change notification for a match document.

    Entry point for an external trigger that fires whenever a match's hole
    inputs change. Pass the shared store so facts persist between calls.

    Example:
        store = FactStore()
        update = process_match_update(match, round_doc, store=store)
        if update.reopened:
            stats = rebuild_stats(store)
    """
    scorer = RoundScorer(round_doc, course=course, tournament=tournament, store=store, config=config)
    return scorer.process_match(match)


def rebuild_stats(store: FactStore, series: Optional[str] = None) -> dict[str, PlayerStats]:
    """Rebuild every player's stats from the store's current facts."""
    return aggregate_all(store.all_facts(), series=series)
