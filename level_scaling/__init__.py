# level_scaling/__init__.py

# This file makes the 'level_scaling' directory a Python package.
# We can also use it to define the public API of the package.

from .settings import BonusRange, LevelConfig
from .permutation import PermutationCache, build_permutation_table, get_permutation_table
from .noise import simplex_noise_2d, simplex_noise_grid
from .scorer import LevelScorer, base_level_factor, entity_level, level_at, level_grid
from .stats import StatMultipliers, multipliers_for_level, stat_multiplier
from .seeds import dimension_seed, resolve_seed

__all__ = [
    "BonusRange",
    "LevelConfig",
    "PermutationCache",
    "build_permutation_table",
    "get_permutation_table",
    "simplex_noise_2d",
    "simplex_noise_grid",
    "LevelScorer",
    "base_level_factor",
    "entity_level",
    "level_at",
    "level_grid",
    "StatMultipliers",
    "multipliers_for_level",
    "stat_multiplier",
    "dimension_seed",
    "resolve_seed",
]
