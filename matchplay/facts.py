"""Per-player match facts.

When a match closes, one immutable fact is derived for every player on the
roster. Facts are keyed by (match_id, player_id) and regenerated wholesale
whenever the match is re-evaluated, so a correction replaces the previous
facts instead of adding to them.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from .constants import (
    ALL_SQUARE,
    DEFAULT_COURSE_PAR,
    DEFAULT_HOLE_PAR,
    HOLES_PER_ROUND,
    JEKYLL_AND_HYDE_THRESHOLD,
    SIDES,
    TEAM_A,
    TEAM_B,
)
from .drives import DriveLedger
from .formats import get_resolver, hole_winner, side_result
from .models import Format, HolePerformance, MatchResult, MatchStatus, PlayerMatchFact, other_side
from .schemas import CourseDocument, MatchDocument, RoundDocument, TournamentDocument
from .strokes import stroke_at, strokes_given

logger = logging.getLogger('matchplay.facts')


@dataclass
class _SideTally:
    """Running per-side counters collected while replaying the holes."""
    gross: list[int] = field(default_factory=lambda: [0, 0])
    net: list[int] = field(default_factory=lambda: [0, 0])
    team_total: int = 0
    best_ball_total: int = 0
    worst_ball_total: int = 0
    balls_used: list[int] = field(default_factory=lambda: [0, 0])
    solo: list[int] = field(default_factory=lambda: [0, 0])
    shared: list[int] = field(default_factory=lambda: [0, 0])
    solo_won_hole: list[int] = field(default_factory=lambda: [0, 0])
    solo_push: list[int] = field(default_factory=lambda: [0, 0])
    used_on_18: list[Optional[bool]] = field(default_factory=lambda: [None, None])


def course_pars(course: Optional[CourseDocument], default_hole_par: int = DEFAULT_HOLE_PAR) -> list[int]:
    """Per-hole pars from the course card, or a flat default without one."""
    if course is None:
        return [default_hole_par] * HOLES_PER_ROUND
    return course.pars


def course_par_for(
    round_doc: Optional[RoundDocument],
    course: Optional[CourseDocument],
    default_course_par: int = DEFAULT_COURSE_PAR,
) -> int:
    """Round override, then the course card, then the configured default."""
    if round_doc is not None and round_doc.course_par is not None:
        return round_doc.course_par
    if course is not None:
        return course.par
    return default_course_par


def _tally_sides(fmt: Format, match: MatchDocument, final_thru: int) -> dict[str, _SideTally]:
    """Replay holes 1..final_thru collecting scoring totals and ball usage."""
    resolver = get_resolver(fmt)
    roster = match.roster
    tallies = {team: _SideTally() for team in SIDES}

    for index in range(final_thru):
        hole = match.holes[index]
        resolution = resolver.resolve(hole, roster, index)
        winner = hole_winner(resolution)

        for team in SIDES:
            tally = tallies[team]
            lines = resolver.player_lines(hole, roster, team, index)

            if fmt is Format.SCRAMBLE:
                gross = hole.gross_for(team)
                if gross is not None:
                    tally.team_total += gross
                continue

            for slot, (gross, net) in enumerate(lines):
                if gross is not None:
                    tally.gross[slot] += gross
                    tally.net[slot] += net

            if fmt is Format.SINGLES:
                continue

            grosses = [gross for gross, _net in lines if gross is not None]
            if grosses:
                # Shamble team total falls back to the single recorded ball
                tally.team_total += min(grosses)
            if len(grosses) == 2:
                tally.best_ball_total += min(grosses)
                tally.worst_ball_total += max(grosses)

            if winner is None:
                continue
            team_score = resolution.team_a_score if team == TEAM_A else resolution.team_b_score
            scores = [net for _gross, net in lines]
            for slot, score in enumerate(scores):
                if score == team_score:
                    tally.balls_used[slot] += 1
            if scores[0] == scores[1]:
                tally.shared[0] += 1
                tally.shared[1] += 1
                if index == HOLES_PER_ROUND - 1:
                    tally.used_on_18 = [True, True]
            else:
                slot = 0 if scores[0] < scores[1] else 1
                tally.solo[slot] += 1
                if winner == team:
                    tally.solo_won_hole[slot] += 1
                elif winner == ALL_SQUARE:
                    tally.solo_push[slot] += 1
                if index == HOLES_PER_ROUND - 1:
                    tally.used_on_18 = [slot == 0, slot == 1]

    return tallies


def count_lead_changes(margin_history: Iterable[Optional[int]]) -> int:
    """Count how often the lead crossed from one side to the other."""
    changes = 0
    last_sign = 0
    for margin in margin_history:
        if margin is None or margin == 0:
            continue
        sign = 1 if margin > 0 else -1
        if last_sign and sign != last_sign:
            changes += 1
        last_sign = sign
    return changes


def was_never_behind(margin_history: Iterable[Optional[int]], team: str) -> bool:
    """Whether the side's signed margin stayed at or above zero throughout."""
    direction = 1 if team == TEAM_A else -1
    return all(m is None or m * direction >= 0 for m in margin_history)


def _eighteenth_hole(
    fmt: Format, match: MatchDocument, status: MatchStatus, winning_hole: Optional[int]
) -> tuple[Optional[str], int]:
    """Winner of the 18th (None if not played within the match) and the margin going in."""
    if status.thru != HOLES_PER_ROUND or winning_hole not in (None, HOLES_PER_ROUND):
        return None, 0
    last = HOLES_PER_ROUND - 1
    if status.margin_history[last] is None:
        return None, 0
    margin_in = next(
        (m for m in reversed(status.margin_history[:last]) if m is not None), 0
    )
    resolution = get_resolver(fmt).resolve(match.holes[last], match.roster, last)
    return hole_winner(resolution), margin_in


def _decided_on_18(
    team: str, winner_18: Optional[str], margin_in: int
) -> tuple[bool, Optional[bool]]:
    """
    Whether the match outcome turned on the 18th hole, and if so whether the side won it.

    Decided when all square into the 18th and it was not halved, or when one
    up into the 18th and the trailing side won it.
    """
    if winner_18 is None:
        return False, None
    if margin_in == 0:
        if winner_18 == ALL_SQUARE:
            return False, None
        return True, winner_18 == team
    if abs(margin_in) == 1:
        trailing = TEAM_B if margin_in > 0 else TEAM_A
        if winner_18 == trailing:
            return True, winner_18 == team
    return False, None


def _birdies_eagles(scores: Iterable[tuple[Optional[int], int]]) -> tuple[int, int]:
    birdies = 0
    eagles = 0
    for score, par in scores:
        if score is None:
            continue
        diff = score - par
        if diff == -1:
            birdies += 1
        elif diff <= -2:
            eagles += 1
    return birdies, eagles


def _hole_performance(
    fmt: Format,
    match: MatchDocument,
    team: str,
    slot: int,
    pars: list[int],
    final_thru: int,
) -> tuple[HolePerformance, ...]:
    resolver = get_resolver(fmt)
    roster = match.roster
    entry = roster.entry(team, slot)
    performance = []

    for index, hole in enumerate(match.holes):
        result = None
        if index < final_thru:
            result = side_result(hole_winner(resolver.resolve(hole, roster, index)), team)

        gross = None
        net = None
        strokes = None
        drive_used = None
        if fmt is Format.SCRAMBLE:
            gross = hole.gross_for(team)
        elif fmt is Format.SINGLES:
            gross = hole.player_gross_for(team)
        else:
            gross = hole.players_gross_for(team)[slot]

        if gross is not None and fmt.uses_handicap:
            strokes = stroke_at(entry, index)
            net = gross - strokes
        if fmt.tracks_drives:
            drive_used = hole.drive_for(team) == slot

        performance.append(HolePerformance(
            hole=index + 1,
            par=pars[index],
            gross=gross,
            net=net,
            strokes=strokes,
            result=result,
            drive_used=drive_used,
        ))

    return tuple(performance)


def generate_player_facts(
    match: MatchDocument,
    status: MatchStatus,
    result: Optional[MatchResult],
    round_doc: Optional[RoundDocument] = None,
    course: Optional[CourseDocument] = None,
    tournament: Optional[TournamentDocument] = None,
    jekyll_and_hyde_threshold: int = JEKYLL_AND_HYDE_THRESHOLD,
    default_hole_par: int = DEFAULT_HOLE_PAR,
    default_course_par: int = DEFAULT_COURSE_PAR,
) -> list[PlayerMatchFact]:
    """
    Derive one fact per rostered player for a closed match.

    Args:
        match: Match document
        status: Status from evaluate() for the same inputs
        result: Result from finalize()
        round_doc: Round settings (format, points value, par)
        course: Course card for per-hole par
        tournament: Tournament identity and team ids
        jekyll_and_hyde_threshold: Worst-ball minus best-ball total that flags the badge
        default_hole_par: Par per hole when there is no course card
        default_course_par: Course par when neither round nor course gives one

    Returns:
        List of PlayerMatchFact; empty when the match is not closed
    """
    if not status.closed or result is None:
        return []

    if round_doc is not None:
        fmt = Format(round_doc.format)
    else:
        fmt = Format(match.format or Format.BEST_BALL)

    final_thru = status.thru
    pars = course_pars(course, default_hole_par)
    course_par = course_par_for(round_doc, course, default_course_par)
    points_value = round_doc.points_value if round_doc is not None else 1.0
    tallies = _tally_sides(fmt, match, final_thru)
    ledger = DriveLedger.from_holes(fmt, match.holes[:final_thru])

    winning_hole = status.closed_at if result.winner != ALL_SQUARE else None
    winner_18, margin_in_18 = _eighteenth_hole(fmt, match, status, winning_hole)
    lead_changes = count_lead_changes(status.margin_history)

    team_ids = {
        TEAM_A: tournament.team_a_id if tournament else TEAM_A,
        TEAM_B: tournament.team_b_id if tournament else TEAM_B,
    }
    holes_won = {TEAM_A: status.holes_won_a, TEAM_B: status.holes_won_b}
    trailed_back9 = {TEAM_A: status.was_team_a_down_back9, TEAM_B: status.was_team_a_up_back9}
    led_back9 = {TEAM_A: status.was_team_a_up_back9, TEAM_B: status.was_team_a_down_back9}

    facts: list[PlayerMatchFact] = []
    roster = match.roster

    for team in SIDES:
        opponent = other_side(team)
        side = roster.side(team)[:fmt.players_per_side]
        opponents = roster.side(opponent)[:fmt.players_per_side]
        opponent_ids = tuple(p.player_id for p in opponents if p.player_id)
        tally = tallies[team]

        if result.winner == ALL_SQUARE:
            outcome, points = 'halve', points_value / 2
        elif result.winner == team:
            outcome, points = 'win', points_value
        else:
            outcome, points = 'loss', 0.0

        won = holes_won[team]
        lost = holes_won[opponent]
        decided_on_18, won_18th = _decided_on_18(team, winner_18, margin_in_18)
        drives = ledger.drives_used(team)

        for slot, entry in enumerate(side):
            if not entry.player_id:
                continue

            performance = _hole_performance(fmt, match, team, slot, pars, final_thru)
            played = performance[:final_thru]
            birdies, eagles = _birdies_eagles((h.gross, h.par) for h in played)

            scoring: dict = {}
            if fmt.uses_handicap:
                birdies_net, eagles_net = _birdies_eagles((h.net, h.par) for h in played)
                scoring.update(
                    total_gross=tally.gross[slot],
                    total_net=tally.net[slot],
                    strokes_vs_par_gross=tally.gross[slot] - course_par,
                    strokes_vs_par_net=tally.net[slot] - course_par,
                    birdies_net=birdies_net,
                    eagles_net=eagles_net,
                )
            else:
                scoring.update(
                    team_total_gross=tally.team_total,
                    team_strokes_vs_par_gross=tally.team_total - course_par,
                )
                if fmt is Format.SHAMBLE:
                    scoring['total_gross'] = tally.gross[slot]

            if fmt in (Format.BEST_BALL, Format.SHAMBLE):
                scoring.update(
                    team_worst_ball_total=tally.worst_ball_total,
                    jekyll_and_hyde=(
                        tally.worst_ball_total - tally.best_ball_total >= jekyll_and_hyde_threshold
                    ),
                    balls_used=tally.balls_used[slot],
                    balls_used_solo=tally.solo[slot],
                    balls_used_shared=tally.shared[slot],
                    balls_used_solo_won_hole=tally.solo_won_hole[slot],
                    balls_used_solo_push=tally.solo_push[slot],
                    ball_used_on_18=tally.used_on_18[slot],
                )
            if fmt.tracks_drives:
                scoring['drives_used'] = drives[slot]

            facts.append(PlayerMatchFact(
                match_id=match.match_id,
                player_id=entry.player_id,
                team=team,
                format=fmt,
                outcome=outcome,
                holes_won=won,
                holes_lost=lost,
                holes_halved=final_thru - won - lost,
                final_margin=status.margin,
                final_thru=final_thru,
                tournament_id=match.tournament_id or (tournament.tournament_id if tournament else ''),
                round_id=match.round_id or (round_doc.round_id if round_doc else ''),
                course_id=course.course_id if course else (round_doc.course_id if round_doc else ''),
                day=round_doc.day if round_doc else 0,
                tournament_year=tournament.year if tournament else 0,
                tournament_name=tournament.name if tournament else '',
                tournament_series=tournament.series if tournament else '',
                player_team_id=team_ids[team],
                opponent_team_id=team_ids[opponent],
                partner_ids=tuple(
                    p.player_id for p in side if p.player_id and p.player_id != entry.player_id
                ),
                opponent_ids=opponent_ids,
                points_earned=points,
                course_par=course_par,
                strokes_given=strokes_given(entry),
                lead_changes=lead_changes,
                was_never_behind=was_never_behind(status.margin_history, team),
                comeback_win=outcome == 'win' and trailed_back9[team],
                blown_lead=outcome == 'loss' and led_back9[team],
                winning_hole=winning_hole,
                decided_on_18=decided_on_18,
                won_18th_hole=won_18th,
                birdies=birdies,
                eagles=eagles,
                hole_performance=performance,
                **scoring,
            ))

    logger.debug(f'Generated {len(facts)} facts for match {match.match_id}')
    return facts


class FactStore:
    """
    In-memory fact collection keyed by (match_id, player_id).

    Writing the facts of a match always replaces every fact previously held
    for that match, which keeps regeneration idempotent.
    """

    def __init__(self, facts: Iterable[PlayerMatchFact] = ()):
        self._facts: dict[tuple[str, str], PlayerMatchFact] = {}
        for fact in facts:
            self._facts[fact.key] = fact

    def replace_match_facts(self, match_id: str, facts: Iterable[PlayerMatchFact]) -> int:
        """
        Replace all facts for a match.

        Args:
            match_id: Match whose facts are replaced
            facts: New facts (empty to remove the match's facts)

        Returns:
            Number of facts removed

        Raises:
            ValueError: If a fact belongs to a different match
        """
        new_facts = list(facts)
        for fact in new_facts:
            if fact.match_id != match_id:
                raise ValueError(
                    f'Fact for match {fact.match_id} cannot be stored under match {match_id}'
                )

        stale = [key for key in self._facts if key[0] == match_id]
        for key in stale:
            del self._facts[key]
        for fact in new_facts:
            self._facts[fact.key] = fact
        return len(stale)

    def facts_for_match(self, match_id: str) -> list[PlayerMatchFact]:
        return [f for key, f in self._facts.items() if key[0] == match_id]

    def facts_for_player(self, player_id: str, series: Optional[str] = None) -> list[PlayerMatchFact]:
        return [
            f for f in self._facts.values()
            if f.player_id == player_id and (series is None or f.tournament_series == series)
        ]

    def facts_for_round(self, round_id: str) -> list[PlayerMatchFact]:
        return [f for f in self._facts.values() if f.round_id == round_id]

    def all_facts(self) -> list[PlayerMatchFact]:
        return list(self._facts.values())

    def __len__(self) -> int:
        return len(self._facts)

    def __contains__(self, key: object) -> bool:
        return key in self._facts
