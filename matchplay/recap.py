"""Round recap: vs-all rankings, birdie/eagle leaders and hole averages."""

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Optional

from .constants import DEFAULT_COURSE_PAR, DEFAULT_HOLE_PAR, HOLES_PER_ROUND, SIDES
from .facts import course_par_for, course_pars
from .formats import get_resolver
from .match_status import evaluate
from .models import BirdieEagleLeader, Format, HoleAverage, RoundRecap, VsAllRecord
from .schemas import CourseDocument, MatchDocument, RoundDocument

logger = logging.getLogger('matchplay.recap')


@dataclass
class Competitor:
    """A player (singles) or a side (team formats) with its per-hole scores."""
    key: str
    player_ids: tuple[str, ...]
    scores: list[Optional[int]]


@dataclass
class _PlayerCard:
    player_id: str
    gross: list[Optional[int]]
    net: list[Optional[int]]


def competitor_scores(match: MatchDocument, fmt: Format | str) -> list[Competitor]:
    """
    Extract the competitors of a match with their per-hole scores.

    Singles competitors are players scored net of strokes. In team formats the
    competitor is the side, keyed by its sorted player ids joined with '_',
    and scored with the format's resolved team score.
    """
    fmt = Format(fmt)
    resolver = get_resolver(fmt)
    roster = match.roster
    competitors = []

    for team in SIDES:
        side = roster.side(team)[:fmt.players_per_side]
        player_ids = tuple(sorted(p.player_id for p in side if p.player_id))
        if not player_ids:
            continue
        scores = [
            resolver.side_score(hole, roster, team, index)
            for index, hole in enumerate(match.holes)
        ]
        competitors.append(Competitor(key='_'.join(player_ids), player_ids=player_ids, scores=scores))

    return competitors


def _player_cards(match: MatchDocument, fmt: Format) -> list[_PlayerCard]:
    """Per-player gross/net lines; scramble players share the team ball."""
    resolver = get_resolver(fmt)
    roster = match.roster
    cards = []

    for team in SIDES:
        for slot, entry in enumerate(roster.side(team)[:fmt.players_per_side]):
            if not entry.player_id:
                continue
            gross: list[Optional[int]] = []
            net: list[Optional[int]] = []
            for index, hole in enumerate(match.holes):
                lines = resolver.player_lines(hole, roster, team, index)
                g, n = lines[slot] if slot < len(lines) else (None, None)
                gross.append(g)
                net.append(n if fmt.uses_handicap else None)
            cards.append(_PlayerCard(player_id=entry.player_id, gross=gross, net=net))

    return cards


def compute_vs_all(competitors: Sequence[Competitor]) -> list[VsAllRecord]:
    """
    Simulate every competitor against every other one.

    Each pair is compared on the total of the holes both completed; the lower
    total wins and equal totals tie. Pairs without a common completed hole tie.

    Returns:
        Records sorted by wins (desc), losses (asc), then key
    """
    records = []
    for a in competitors:
        played = [s for s in a.scores if s is not None]
        record = VsAllRecord(
            competitor_key=a.key,
            player_ids=a.player_ids,
            total=sum(played) if played else None,
            holes=len(played),
        )
        for b in competitors:
            if b is a:
                continue
            common = [
                i for i in range(HOLES_PER_ROUND)
                if i < len(a.scores) and i < len(b.scores)
                and a.scores[i] is not None and b.scores[i] is not None
            ]
            total_a = sum(a.scores[i] for i in common)  # type: ignore[misc]
            total_b = sum(b.scores[i] for i in common)  # type: ignore[misc]
            if total_a < total_b:
                record.wins += 1
            elif total_b < total_a:
                record.losses += 1
            else:
                record.ties += 1
        records.append(record)

    records.sort(key=lambda r: (-r.wins, r.losses, r.competitor_key))
    return records


def _leaders(
    cards: Iterable[_PlayerCard], pars: list[int], kind: str, max_diff: int, exact: bool
) -> list[BirdieEagleLeader]:
    holes_by_player: dict[str, list[int]] = defaultdict(list)
    for card in cards:
        scores = card.gross if kind == 'gross' else card.net
        for index, score in enumerate(scores):
            if score is None:
                continue
            diff = score - pars[index]
            if (exact and diff == max_diff) or (not exact and diff <= max_diff):
                holes_by_player[card.player_id].append(index + 1)

    leaders = [
        BirdieEagleLeader(player_id=pid, count=len(holes), holes=tuple(holes))
        for pid, holes in holes_by_player.items()
        if holes
    ]
    leaders.sort(key=lambda leader: (-leader.count, leader.player_id))
    return leaders


def _summarize(values: list[int]) -> tuple[Optional[float], Optional[int], Optional[int]]:
    if not values:
        return None, None, None
    return round(sum(values) / len(values), 2), min(values), max(values)


def compute_hole_averages(
    fmt: Format,
    matches: Sequence[MatchDocument],
    pars: list[int],
) -> list[HoleAverage]:
    """
    Per-hole scoring averages across the round.

    Scramble holes are averaged over teams; every other format over the
    individual players. Net figures are only produced for handicap formats.
    """
    gross_by_hole: list[list[int]] = [[] for _ in range(HOLES_PER_ROUND)]
    net_by_hole: list[list[int]] = [[] for _ in range(HOLES_PER_ROUND)]

    for match in matches:
        if fmt is Format.SCRAMBLE:
            for competitor in competitor_scores(match, fmt):
                for index, score in enumerate(competitor.scores):
                    if score is not None:
                        gross_by_hole[index].append(score)
            continue
        for card in _player_cards(match, fmt):
            for index in range(HOLES_PER_ROUND):
                if card.gross[index] is not None:
                    gross_by_hole[index].append(card.gross[index])  # type: ignore[arg-type]
                if card.net[index] is not None:
                    net_by_hole[index].append(card.net[index])  # type: ignore[arg-type]

    averages = []
    for index in range(HOLES_PER_ROUND):
        avg_gross, low_gross, high_gross = _summarize(gross_by_hole[index])
        avg_net, low_net, high_net = _summarize(net_by_hole[index])
        averages.append(HoleAverage(
            hole_number=index + 1,
            par=pars[index],
            avg_gross=avg_gross,
            avg_net=avg_net,
            lowest_gross=low_gross,
            highest_gross=high_gross,
            lowest_net=low_net,
            highest_net=high_net,
            scoring_count=len(gross_by_hole[index]),
        ))
    return averages


def easiest_and_hardest(
    averages: Sequence[HoleAverage],
) -> tuple[Optional[tuple[int, float]], Optional[tuple[int, float]]]:
    """(hole, avg vs par) of the easiest and hardest hole; lower hole number wins ties."""
    scored = [a for a in averages if a.avg_vs_par is not None]
    if not scored:
        return None, None
    best = min(scored, key=lambda a: (a.avg_vs_par, a.hole_number))
    worst = min(scored, key=lambda a: (-a.avg_vs_par, a.hole_number))  # type: ignore[operator]
    return (best.hole_number, best.avg_vs_par), (worst.hole_number, worst.avg_vs_par)  # type: ignore[return-value]


def recap(
    matches: Iterable[MatchDocument],
    round_doc: RoundDocument,
    course: Optional[CourseDocument] = None,
    default_hole_par: int = DEFAULT_HOLE_PAR,
    default_course_par: int = DEFAULT_COURSE_PAR,
) -> RoundRecap:
    """
    Build the recap for a round from its closed matches.

    Args:
        matches: Matches of the round (open matches are skipped)
        round_doc: Round settings; supplies the format
        course: Course card for par lookups
        default_hole_par: Par per hole when there is no course card
        default_course_par: Course par when neither round nor course gives one

    Returns:
        RoundRecap with vs-all records, leaders and hole averages
    """
    fmt = Format(round_doc.format)
    pars = course_pars(course, default_hole_par)
    course_par = course_par_for(round_doc, course, default_course_par)

    closed = []
    for match in matches:
        if evaluate(fmt, match.holes, match.roster).closed:
            closed.append(match)
        else:
            logger.debug(f'Skipping open match {match.match_id} in recap')

    competitors: list[Competitor] = []
    seen: set[str] = set()
    for match in closed:
        for competitor in competitor_scores(match, fmt):
            if competitor.key in seen:
                logger.warning(f'Competitor {competitor.key} appears in more than one match; using first')
                continue
            seen.add(competitor.key)
            competitors.append(competitor)

    cards = [card for match in closed for card in _player_cards(match, fmt)]
    averages = compute_hole_averages(fmt, closed, pars)
    best_hole, worst_hole = easiest_and_hardest(averages)

    result = RoundRecap(
        round_id=round_doc.round_id,
        format=fmt,
        course_par=course_par,
        vs_all_records=compute_vs_all(competitors),
        hole_averages=averages,
        birdies_gross=_leaders(cards, pars, 'gross', -1, exact=True),
        eagles_gross=_leaders(cards, pars, 'gross', -2, exact=False),
        best_hole=best_hole,
        worst_hole=worst_hole,
        matches_included=len(closed),
    )
    if fmt.uses_handicap:
        result.birdies_net = _leaders(cards, pars, 'net', -1, exact=True)
        result.eagles_net = _leaders(cards, pars, 'net', -2, exact=False)

    logger.info(
        f'Round {round_doc.round_id} recap: {len(closed)} matches, {len(competitors)} competitors'
    )
    return result
