# level_scaling/stats.py

"""
================================================================================
STAT CURVES
================================================================================
Maps a level onto stat multipliers. One bounded interpolation serves all four
stats (health, attack, loot, xp); each stat only differs by its configured
(min_bonus, max_bonus) pair.

Data Contract:
---------------
- Inputs:
    - level (int), max_level (int), and a bonus pair per stat.
- Outputs:
    - Multipliers as Python floats carrying float32 precision. Each lies in
      1 + [min(min_bonus, max_bonus), max(min_bonus, max_bonus)].
- Side Effects: None (roll_loot_count draws from the generator it is given).
================================================================================
"""

from typing import NamedTuple

import numpy as np

from . import config as DEFAULTS

MINIMUM_LEVEL = DEFAULTS.MINIMUM_LEVEL
BASE_MULTIPLIER = np.float32(1.0)

STAT_NAMES = ("health", "attack", "loot", "xp")


class StatMultipliers(NamedTuple):
    health: float
    attack: float
    loot: float
    xp: float


def _clamp(value, low, high):
    return max(low, min(value, high))


def stat_multiplier(level: int, max_level: int, min_bonus: float, max_bonus: float) -> float:
    """
    Interpolates a stat multiplier between 1 + min_bonus (at level 1) and
    1 + max_bonus (at max_level). Either bound may be the larger one.
    """
    min_bonus = np.float32(min_bonus)
    max_bonus = np.float32(max_bonus)
    low = min(min_bonus, max_bonus)
    high = max(min_bonus, max_bonus)

    # No progression possible: max_level leaves no room, or we are at the floor.
    if max_level <= MINIMUM_LEVEL or level <= MINIMUM_LEVEL:
        return float(BASE_MULTIPLIER + _clamp(min_bonus, low, high))

    progress = np.float32(level - MINIMUM_LEVEL) / np.float32(max_level - MINIMUM_LEVEL)
    progress = _clamp(progress, np.float32(0.0), np.float32(1.0))

    bonus = min_bonus + progress * (max_bonus - min_bonus)
    bonus = _clamp(bonus, low, high)

    return float(BASE_MULTIPLIER + bonus)


def multipliers_for_level(level: int, config) -> StatMultipliers:
    """All four stat multipliers for a level under a LevelConfig."""
    level = max(MINIMUM_LEVEL, level)
    values = []
    for stat in STAT_NAMES:
        bonus = config.bonus_range(stat)
        values.append(stat_multiplier(level, config.max_level, bonus.min_bonus, bonus.max_bonus))
    return StatMultipliers(*values)


def modifier_value(multiplier: float):
    """
    The additive "multiply total" modifier for an attribute, or None when the
    multiplier is too close to 1.0 to be worth applying.
    """
    delta = multiplier - float(BASE_MULTIPLIER)
    if abs(delta) > DEFAULTS.MODIFIER_APPLICATION_THRESHOLD:
        return delta
    return None


def split_loot_rolls(loot_multiplier: float) -> tuple[int, float]:
    """
    Splits a loot multiplier into guaranteed full loot-table rolls and the
    chance of one extra roll. A multiplier <= 0 means no loot at all.
    """
    loot_multiplier = np.float32(loot_multiplier)
    if loot_multiplier <= 0.0:
        return 0, 0.0
    whole_rolls = int(loot_multiplier)
    fractional_chance = float(loot_multiplier - np.float32(whole_rolls))
    return whole_rolls, fractional_chance


def roll_loot_count(loot_multiplier: float, rng: np.random.Generator) -> int:
    """Number of loot-table rolls for one drop, drawing the extra roll from rng."""
    whole_rolls, fractional_chance = split_loot_rolls(loot_multiplier)
    if fractional_chance > 0.0 and rng.random() < fractional_chance:
        return whole_rolls + 1
    return whole_rolls


def scale_experience(base_xp: int, xp_multiplier: float) -> int:
    """
    Scales an experience drop. Drops that were already zero stay zero;
    anything else yields at least MINIMUM_XP_DROP.
    """
    if base_xp <= 0:
        return base_xp
    scaled = np.float32(base_xp) * np.float32(xp_multiplier)
    # Round half up, in float32 like the rest of the curve.
    scaled_xp = int(np.floor(scaled + np.float32(0.5)))
    return max(DEFAULTS.MINIMUM_XP_DROP, scaled_xp)
