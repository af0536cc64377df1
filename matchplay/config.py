"""Scoring configuration management."""

from functools import lru_cache
from pathlib import Path

from .schemas import ScoringConfig
from .utils import load_json

CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'scoring_config.json'


@lru_cache(maxsize=1)
def get_config() -> ScoringConfig:
    """
    Load scoring configuration from data/scoring_config.json.

    Configuration is cached after first load.

    Returns:
        ScoringConfig object with validated settings

    Raises:
        FileNotFoundError: If scoring_config.json doesn't exist
        ValueError: If config file has invalid structure

    Example:
        from matchplay.config import get_config
        config = get_config()
        print(f"Minimum drives: {config.min_drives_per_round}")
    """
    return load_json(CONFIG_PATH, schema=ScoringConfig)


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime.
    """
    get_config.cache_clear()
