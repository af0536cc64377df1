"""Logging setup for scoring runs.

Engine modules log through children of the 'matchplay' logger
('matchplay.facts', 'matchplay.pipeline', ...). setup_logging() attaches the
handlers once per run; the level comes from the scoring config unless the
caller overrides it.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from .schemas import ScoringConfig

ROOT_LOGGER = 'matchplay'

FILE_FORMAT = '%(asctime)s %(levelname)-8s %(name)s [%(module)s:%(lineno)d] %(message)s'
CONSOLE_FORMAT = '%(levelname)s %(name)s: %(message)s'


def resolve_level(level: int | str) -> int:
    """Turn a level name such as 'debug' into its numeric value."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f'Unknown log level: {level}')
    return value


def run_log_path(log_dir: Path, run_name: str) -> Path:
    """Timestamped log file for one scoring run, e.g. logs/r1_20250301_101500.log."""
    stamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    return log_dir / f'{run_name}_{stamp}.log'


def setup_logging(
    config: Optional[ScoringConfig] = None,
    level: Optional[int | str] = None,
    log_dir: Optional[Path] = None,
    run_name: str = 'matchplay',
) -> logging.Logger:
    """
    Configure the 'matchplay' logger for a scoring run.

    Console output always goes to stdout. A file is written only when
    log_dir is given, named after the run (usually the round id).

    Args:
        config: Scoring config supplying log_level (defaults when omitted)
        level: Explicit level (name or number) that overrides the config
        log_dir: Directory for the run's log file
        run_name: Prefix of the log file name

    Returns:
        The configured 'matchplay' logger

    Example:
        logger = setup_logging(get_config(), log_dir=Path('logs'), run_name='r1')
    """
    config = config or ScoringConfig()
    numeric_level = resolve_level(level if level is not None else config.log_level)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(numeric_level)
    # Repeated setup replaces handlers
    logger.handlers = []

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(run_log_path(log_dir, run_name))
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    logger.debug(f'Logging at {logging.getLevelName(numeric_level)} for run {run_name}')
    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Logger under 'matchplay'; bare names such as 'facts' are prefixed."""
    if name != ROOT_LOGGER and not name.startswith(f'{ROOT_LOGGER}.'):
        name = f'{ROOT_LOGGER}.{name}'
    return logging.getLogger(name)
