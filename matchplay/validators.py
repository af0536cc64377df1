"""Data-quality checks for match documents.

None of these checks block scoring. They return messages for the caller to
surface upstream; the engine itself treats bad values as missing.
"""

from typing import Optional

from .constants import HOLES_PER_ROUND, MAX_HOLE_GROSS, MIN_HOLE_GROSS, SIDES
from .models import Format
from .schemas import HoleInput, MatchDocument


def validate_roster(match: MatchDocument, fmt: Optional[Format | str] = None) -> list[str]:
    """
    Validate a match roster against its format.

    Checks:
    - Player count per side
    - Empty roster slots
    - Stroke allocations outside {0, 1}
    - Same player on both sides (or twice on one side)

    Args:
        match: Match document
        fmt: Round format (defaults to the match's own format)

    Returns:
        List of validation error messages (empty if valid)
    """
    fmt = Format(fmt or match.format or Format.BEST_BALL)
    errors = []
    label = match.match_id or 'match'

    all_ids = []
    for team in SIDES:
        side = match.roster.side(team)
        if len(side) < fmt.players_per_side:
            errors.append(
                f'{label}: {team} has {len(side)} player(s) ({fmt.value} needs {fmt.players_per_side})'
            )
        elif len(side) > fmt.players_per_side:
            errors.append(
                f'{label}: {team} has {len(side)} players ({fmt.value} uses {fmt.players_per_side})'
            )

        for slot, entry in enumerate(side[:fmt.players_per_side]):
            if not entry.player_id.strip():
                errors.append(f'{label}: {team} slot {slot + 1} has no player')
                continue
            all_ids.append(entry.player_id)
            bad = [
                (i + 1, v) for i, v in enumerate(entry.strokes_received) if v not in (0, 1)
            ]
            for hole_number, value in bad:
                errors.append(
                    f'{label}: {entry.player_id} has invalid stroke value {value} on hole {hole_number}'
                )

    seen = set()
    duplicates = set()
    for player_id in all_ids:
        if player_id in seen:
            duplicates.add(player_id)
        seen.add(player_id)
    if duplicates:
        errors.append(f'{label}: duplicate players: {", ".join(sorted(duplicates))}')

    return errors


def _scores_used(hole: HoleInput, fmt: Format, team: str) -> list[Optional[int]]:
    if fmt is Format.SCRAMBLE:
        return [hole.gross_for(team)]
    if fmt is Format.SINGLES:
        return [hole.player_gross_for(team)]
    return list(hole.players_gross_for(team))


def validate_hole_inputs(match: MatchDocument, fmt: Optional[Format | str] = None) -> list[str]:
    """
    Sanity-check hole inputs.

    Checks:
    - Gross scores in a plausible range
    - Drive selections are 0 or 1
    - No drives recorded for formats that do not track them

    Returns:
        List of warning messages (empty if no issues)
    """
    fmt = Format(fmt or match.format or Format.BEST_BALL)
    warnings = []
    label = match.match_id or 'match'

    for index, hole in enumerate(match.holes[:HOLES_PER_ROUND]):
        number = index + 1
        for team in SIDES:
            for gross in _scores_used(hole, fmt, team):
                if gross is not None and not MIN_HOLE_GROSS <= gross <= MAX_HOLE_GROSS:
                    warnings.append(f'{label}: hole {number} {team} gross {gross} out of range')

            drive = hole.raw_drive_for(team)
            if drive is None:
                continue
            if not fmt.tracks_drives:
                warnings.append(f'{label}: hole {number} {team} has a drive but {fmt.value} does not track drives')
            elif drive not in (0, 1):
                warnings.append(f'{label}: hole {number} {team} drive {drive} is not a player slot')

    return warnings


def validate_match(match: MatchDocument, fmt: Optional[Format | str] = None) -> list[str]:
    """Run every match check and return all messages."""
    return validate_roster(match, fmt) + validate_hole_inputs(match, fmt)
