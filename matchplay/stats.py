"""Player statistics aggregated from match facts.

Stats are always rebuilt by folding the complete current fact set. Because
facts are replaced rather than appended when a match is corrected, a full
fold can never count a match twice.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from typing import Optional

from .models import Format, FormatRecord, PlayerMatchFact, PlayerStats

logger = logging.getLogger('matchplay.stats')


def _apply_fact(stats: PlayerStats, fact: PlayerMatchFact) -> None:
    stats.matches_played += 1
    stats.points += fact.points_earned

    record = stats.format_breakdown.setdefault(fact.format.value, FormatRecord())
    record.matches += 1
    if fact.outcome == 'win':
        stats.wins += 1
        record.wins += 1
    elif fact.outcome == 'loss':
        stats.losses += 1
        record.losses += 1
    else:
        stats.halves += 1
        record.halves += 1

    stats.holes_won += fact.holes_won
    stats.holes_lost += fact.holes_lost
    stats.holes_halved += fact.holes_halved

    # Individual scoring only counts where a player's own ball is scored with handicap
    if fact.format.uses_handicap and fact.total_gross is not None:
        stats.total_gross += fact.total_gross
        stats.total_net += fact.total_net or 0
        stats.strokes_vs_par_gross += fact.strokes_vs_par_gross or 0
        stats.strokes_vs_par_net += fact.strokes_vs_par_net or 0
        stats.holes_played += sum(
            1 for h in fact.hole_performance[:fact.final_thru] if h.gross is not None
        )

    stats.birdies += fact.birdies
    stats.eagles += fact.eagles

    if fact.comeback_win:
        stats.comeback_wins += 1
    if fact.blown_lead:
        stats.blown_leads += 1
    if fact.was_never_behind and fact.outcome == 'win':
        stats.never_behind_wins += 1
    if fact.jekyll_and_hyde:
        stats.jekyll_and_hydes += 1
    if fact.decided_on_18 and fact.outcome == 'win':
        stats.clutch_wins += 1

    stats.drives_used += fact.drives_used or 0
    stats.balls_used += fact.balls_used or 0
    stats.balls_used_solo += fact.balls_used_solo or 0


def aggregate_player_stats(
    player_id: str,
    facts: Iterable[PlayerMatchFact],
    series: Optional[str] = None,
) -> PlayerStats:
    """
    Fold a player's facts into running totals.

    Args:
        player_id: Player to aggregate
        facts: Facts to fold (facts for other players are skipped)
        series: Only count facts from this tournament series when given

    Returns:
        PlayerStats for the player
    """
    stats = PlayerStats(player_id=player_id, series=series)
    for fact in facts:
        if fact.player_id != player_id:
            continue
        if series is not None and fact.tournament_series != series:
            continue
        _apply_fact(stats, fact)
    return stats


def aggregate_all(
    facts: Iterable[PlayerMatchFact], series: Optional[str] = None
) -> dict[str, PlayerStats]:
    """Aggregate every player that appears in the facts."""
    by_player: dict[str, list[PlayerMatchFact]] = defaultdict(list)
    for fact in facts:
        by_player[fact.player_id].append(fact)

    results = {}
    for player_id, player_facts in by_player.items():
        stats = aggregate_player_stats(player_id, player_facts, series=series)
        if stats.matches_played:
            results[player_id] = stats

    logger.debug(f'Aggregated stats for {len(results)} players')
    return results


def aggregate_by_series(facts: Iterable[PlayerMatchFact]) -> dict[tuple[str, str], PlayerStats]:
    """Aggregate per (player_id, tournament series)."""
    grouped: dict[tuple[str, str], list[PlayerMatchFact]] = defaultdict(list)
    for fact in facts:
        grouped[(fact.player_id, fact.tournament_series)].append(fact)

    return {
        key: aggregate_player_stats(key[0], group, series=key[1])
        for key, group in grouped.items()
    }


def format_breakdown_rows(stats: PlayerStats) -> list[tuple[str, str]]:
    """(format, record) rows in a fixed format order for display."""
    rows = []
    for fmt in Format:
        record = stats.format_breakdown.get(fmt.value)
        if record and record.matches:
            rows.append((fmt.value, f'{record.wins}-{record.losses}-{record.halves}'))
    return rows
