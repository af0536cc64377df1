#!/usr/bin/env python3
"""
Match-play round scorer CLI

Scores every match of a round from JSON snapshots of the store and writes a
report with match statuses, results, player facts, player stats and the
round recap.

Usage:
    python score_matches.py --round data/round.json --matches data/matches/
    python score_matches.py --round data/round.json --course data/course.json \
        --matches data/matches/ --output out/round_1.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from matchplay import (
    CourseDocument,
    MatchDocument,
    RoundDocument,
    RoundScorer,
    TournamentDocument,
)
from matchplay.config import get_config
from matchplay.logging_config import get_logger, setup_logging
from matchplay.results import format_to_par, live_status_text
from matchplay.stats import format_breakdown_rows
from matchplay.utils import load_json, load_json_safe, save_json


def load_matches(matches_path: Path) -> list[MatchDocument]:
    """Load one match file, or every *.json file in a directory (sorted by name)."""
    if matches_path.is_dir():
        paths = sorted(matches_path.glob('*.json'))
    else:
        paths = [matches_path]
    return [load_json(p, schema=MatchDocument) for p in paths]


def build_report(
    round_doc: RoundDocument,
    matches: list[MatchDocument],
    course: Optional[CourseDocument] = None,
    tournament: Optional[TournamentDocument] = None,
) -> dict[str, Any]:
    """Score a round and assemble the report written by the CLI."""
    scorer = RoundScorer(round_doc, course=course, tournament=tournament, config=get_config())
    updates = scorer.process_matches(matches)

    return {
        'round_id': round_doc.round_id,
        'format': scorer.format.value,
        'matches': [
            {
                'match_id': u.match_id,
                'status': u.status,
                'result': u.result,
                'display': live_status_text(u.status),
                'warnings': u.warnings,
            }
            for u in updates
        ],
        'facts': scorer.store.all_facts(),
        'player_stats': scorer.player_stats(),
        'recap': scorer.round_recap(matches),
    }


def main():
    parser = argparse.ArgumentParser(description="Match-play round scorer")
    parser.add_argument(
        "--round", "-r",
        required=True,
        help="Path to the round JSON document",
    )
    parser.add_argument(
        "--matches", "-m",
        required=True,
        help="Path to a match JSON file or a directory of match files",
    )
    parser.add_argument(
        "--course", "-c",
        default=None,
        help="Path to the course JSON document (par 4 per hole if omitted)",
    )
    parser.add_argument(
        "--tournament", "-t",
        default=None,
        help="Path to the tournament JSON document",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output path for the round report (defaults to out/{round_id}.json)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging (overrides log_level in the scoring config)",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Also write a log file for this run into the given directory",
    )

    args = parser.parse_args()

    round_path = Path(args.round)
    setup_logging(
        get_config(),
        level=logging.DEBUG if args.verbose else None,
        log_dir=Path(args.log_dir) if args.log_dir else None,
        run_name=round_path.stem,
    )

    matches_path = Path(args.matches)
    if not round_path.exists():
        print(f"Round file not found: {round_path}")
        sys.exit(1)
    if not matches_path.exists():
        print(f"Matches not found: {matches_path}")
        sys.exit(1)

    round_doc = load_json(round_path, schema=RoundDocument)
    matches = load_matches(matches_path)
    course = load_json_safe(args.course, schema=CourseDocument) if args.course else None
    tournament = load_json_safe(args.tournament, schema=TournamentDocument) if args.tournament else None

    print(f"Scoring {len(matches)} matches for round {round_doc.round_id or round_path.stem}...")
    report = build_report(round_doc, matches, course=course, tournament=tournament)

    print("\n" + "=" * 60)
    print("MATCHES")
    print("=" * 60)
    for entry in report['matches']:
        print(f"  {entry['match_id']}: {entry['display']}")

    print("\n" + "=" * 60)
    print("PLAYERS")
    print("=" * 60)
    for player_id, stats in sorted(report['player_stats'].items()):
        formats = ', '.join(f'{fmt} {rec}' for fmt, rec in format_breakdown_rows(stats))
        print(f"  {player_id}: {stats.record} ({stats.points:g} pts) {formats}")

    recap = report['recap']
    if recap.vs_all_records:
        print("\nVS ALL")
        for record in recap.vs_all_records:
            print(f"  {record.competitor_key}: {record.wins}-{record.losses}-{record.ties}")
    if recap.best_hole:
        hole, vs_par = recap.best_hole
        print(f"\nEasiest hole: {hole} ({vs_par:+.2f})")
    if recap.worst_hole:
        hole, vs_par = recap.worst_hole
        print(f"Hardest hole: {hole} ({vs_par:+.2f})")

    for fact in report['facts']:
        if fact.total_gross is not None and fact.strokes_vs_par_gross is not None:
            get_logger("cli").debug(
                f"{fact.player_id} shot {fact.total_gross} ({format_to_par(fact.strokes_vs_par_gross)})"
            )

    output_path = Path(args.output) if args.output else Path('out') / f"{round_doc.round_id or round_path.stem}.json"
    save_json(output_path, report)
    print(f"\nReport saved: {output_path}")


if __name__ == "__main__":
    main()
