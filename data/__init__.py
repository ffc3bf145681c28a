"""Data loading and synthetic generation utilities."""

from .forcedecks_loader import (
    DEFAULT_COLUMN_MAP,
    ForceDecksLoader,
    JumpDatasetStats,
    load_forcedecks_csv,
    rename_columns,
)
from .synthetic import (
    JumperProfile,
    profile_from_power,
    generate_jump_trials,
    generate_athlete_pool,
    generate_dataset,
    to_forcedecks_frame,
)

__all__ = [
    # ForceDecks loader
    'DEFAULT_COLUMN_MAP',
    'ForceDecksLoader',
    'JumpDatasetStats',
    'load_forcedecks_csv',
    'rename_columns',
    # Synthetic data
    'JumperProfile',
    'profile_from_power',
    'generate_jump_trials',
    'generate_athlete_pool',
    'generate_dataset',
    'to_forcedecks_frame',
]
