# level_scaling/color_maps.py

"""
================================================================================
SHARED COLOR MAPPING UTILITIES
================================================================================
This module contains the colour tier constants and functions for converting
raw level data into RGB colour arrays.

It is designed to be a pure, stateless utility with no rendering dependencies,
allowing it to be used by any display path as well as the offline map tools.
================================================================================
"""
import numpy as np
from . import config as DEFAULTS

# --- Tier Names (Rule 1) ---
TIER_GREEN = "green"
TIER_YELLOW = "yellow"
TIER_GOLD = "gold"
TIER_RED = "red"
TIER_NEUTRAL = "neutral"

# --- Default Color Mappings ---
COLOR_MAP_TIERS = {
    TIER_GREEN: (85, 255, 85),
    TIER_YELLOW: (255, 255, 85),
    TIER_GOLD: (255, 170, 0),
    TIER_RED: (255, 85, 85),
    TIER_NEUTRAL: (255, 255, 255),
}


def level_tier(level: int, max_level: int) -> str:
    """Buckets a level by the fraction of max_level it reaches."""
    if max_level <= 0:
        return TIER_NEUTRAL
    level_percent = level / max_level
    thresholds = DEFAULTS.LEVEL_TIER_THRESHOLDS
    if level_percent < thresholds[TIER_GREEN]:
        return TIER_GREEN
    elif level_percent < thresholds[TIER_YELLOW]:
        return TIER_YELLOW
    elif level_percent < thresholds[TIER_GOLD]:
        return TIER_GOLD
    return TIER_RED


def danger_tier(attack_multiplier: float) -> str:
    """Buckets an attack multiplier into how dangerous it looks."""
    thresholds = DEFAULTS.DANGER_TIER_THRESHOLDS
    if attack_multiplier < thresholds[TIER_GREEN]:
        return TIER_GREEN
    elif attack_multiplier < thresholds[TIER_YELLOW]:
        return TIER_YELLOW
    elif attack_multiplier < thresholds[TIER_GOLD]:
        return TIER_GOLD
    return TIER_RED


# --- Color Lookup Table (LUT) Generation ---
def create_level_lut(max_level: int) -> np.ndarray:
    """
    Creates a (max_level + 1, 3) colour LUT indexed directly by level.
    Within each tier the colour is darkened toward the tier's lower edge so
    gradients inside a tier stay visible.
    """
    levels = np.arange(max_level + 1)
    lut = np.zeros((max_level + 1, 3), dtype=np.uint8)
    if max_level <= 0:
        lut[:] = COLOR_MAP_TIERS[TIER_NEUTRAL]
        return lut

    fractions = levels / max_level
    shading = 0.55 + 0.45 * np.clip(fractions, 0.0, 1.0)
    for level in levels:
        base = np.array(COLOR_MAP_TIERS[level_tier(int(level), max_level)], dtype=float)
        lut[level] = np.clip(base * shading[level], 0, 255).astype(np.uint8)
    return lut


def get_level_color_array(level_data: np.ndarray, lut: np.ndarray) -> np.ndarray:
    """
    Converts a level array to an RGB array using a pre-computed LUT.
    Levels beyond the LUT (e.g. from dimension offsets) use its last entry.
    """
    indices = np.clip(level_data, 0, len(lut) - 1).astype(np.intp)
    return lut[indices]
