# level_scaling/scorer.py

"""
================================================================================
CORE LEVEL SCORER
================================================================================
This module turns a world position into an integer difficulty level. It blends
a seeded noise field with a linear pull toward the world origin and adds a
flat per-dimension offset.

Data Contract:
---------------
- Inputs:
    - x, z: World coordinates (scalars, or NumPy arrays for level_grid).
    - dimension_id (str): Opaque dimension key, e.g. "minecraft:the_nether".
    - seed (int): World seed (see seeds.resolve_seed for the fallback).
    - config (LevelConfig): The tunables for this call.
- Outputs:
    - An int level >= 1 (or an int64 array of them).
- Side Effects: The first call for a seed builds and caches its permutation
  table. LevelScorer logs its initialization.
- Invariants: Given the same inputs, the output is deterministic, and the
  scalar and grid paths agree element for element.
================================================================================
"""

import logging
import math

import numpy as np

from . import config as DEFAULTS
from . import noise
from .permutation import PermutationCache, get_permutation_table
from .settings import LevelConfig
from .stats import StatMultipliers, multipliers_for_level

MINIMUM_LEVEL = DEFAULTS.MINIMUM_LEVEL

# Noise is in [-1, 1]. Adding 1 gives [0, 2], halving gives [0, 1].
NOISE_NORMALIZATION_ADDEND = 1.0
NOISE_NORMALIZATION_DIVISOR = 2.0


def _lerp(t, start, end):
    "Linear interpolation."
    return start + t * (end - start)


def _round_half_up(value: float) -> int:
    """Rounds to the nearest int, with .5 always going up."""
    floored = math.floor(value)
    return floored + 1 if value - floored >= 0.5 else floored


def base_level_factor(x: float, z: float, seed: int, config: LevelConfig,
                      cache: PermutationCache = None) -> float:
    """
    The noise-driven share of max_level at (x, z), within
    [min_noise_level_percentage, 1.0] for noise inside [-1, 1].
    """
    p = get_permutation_table(seed, cache)
    noise_value = noise.simplex_noise_2d(p, x / config.noise_scale, z / config.noise_scale)

    normalized_noise = (noise_value + NOISE_NORMALIZATION_ADDEND) / NOISE_NORMALIZATION_DIVISOR

    # Scale into [min_noise_level_percentage, 1.0].
    min_pct = config.min_noise_level_percentage
    return normalized_noise * (1.0 - min_pct) + min_pct


def level_at(x: float, z: float, dimension_id: str, seed: int, config: LevelConfig,
             cache: PermutationCache = None) -> int:
    """
    Calculates the level at a world position.

    Distance is measured from the fixed world origin (0, 0), not from any
    configured spawn point.

    Raises:
        ValueError: If the coordinates are not finite.
    """
    if not config.enabled:
        return MINIMUM_LEVEL

    x = float(x)
    z = float(z)
    if not (math.isfinite(x) and math.isfinite(z)):
        raise ValueError(f"Cannot score a non-finite position ({x}, {z})")

    potential_level = base_level_factor(x, z, seed, config, cache) * config.max_level
    distance_from_origin = math.sqrt(x * x + z * z)

    # Closer to the origin means closer to MINIMUM_LEVEL. A radius of 0 turns
    # the blend off.
    radius = config.spawn_influence_radius
    if radius > 0 and distance_from_origin < radius:
        final_level = _lerp(distance_from_origin / radius, MINIMUM_LEVEL, potential_level)
    else:
        final_level = potential_level

    final_level += config.dimension_offset(dimension_id)
    return max(MINIMUM_LEVEL, _round_half_up(final_level))


def level_grid(x_coords: np.ndarray, z_coords: np.ndarray, dimension_id: str, seed: int,
               config: LevelConfig, cache: PermutationCache = None) -> np.ndarray:
    """
    Vectorised level_at for coordinate arrays of any (matching) shape.
    Cells with non-finite coordinates come back as MINIMUM_LEVEL.
    """
    x = np.asarray(x_coords, dtype=np.float64)
    z = np.asarray(z_coords, dtype=np.float64)
    if x.shape != z.shape:
        raise ValueError(f"Coordinate shapes differ: {x.shape} vs {z.shape}")

    target_shape = x.shape
    if not config.enabled:
        return np.full(target_shape, MINIMUM_LEVEL, dtype=np.int64)

    # The noise kernel walks 2D arrays; flatten everything else onto one row.
    x2 = x.reshape(1, -1)
    z2 = z.reshape(1, -1)

    # Non-finite cells are scored at the origin and overwritten at the end.
    finite = np.isfinite(x2) & np.isfinite(z2)
    x2 = np.where(finite, x2, 0.0)
    z2 = np.where(finite, z2, 0.0)

    # 1. Noise factor, exactly as base_level_factor computes it per point.
    p = get_permutation_table(seed, cache)
    noise_values = noise.simplex_noise_grid(p, x2 / config.noise_scale, z2 / config.noise_scale)
    normalized_noise = (noise_values + NOISE_NORMALIZATION_ADDEND) / NOISE_NORMALIZATION_DIVISOR
    min_pct = config.min_noise_level_percentage
    potential_level = (normalized_noise * (1.0 - min_pct) + min_pct) * config.max_level

    # 2. Spawn blend.
    distance_from_origin = np.sqrt(x2 * x2 + z2 * z2)
    radius = config.spawn_influence_radius
    if radius > 0:
        inside = distance_from_origin < radius
        blended = _lerp(distance_from_origin / radius, MINIMUM_LEVEL, potential_level)
        final_level = np.where(inside, blended, potential_level)
    else:
        final_level = potential_level

    # 3. Dimension offset and rounding (half up, like _round_half_up).
    final_level = final_level + config.dimension_offset(dimension_id)
    floored = np.floor(final_level)
    rounded = floored + ((final_level - floored) >= 0.5)
    rounded = np.where(finite, rounded, MINIMUM_LEVEL)

    return np.maximum(MINIMUM_LEVEL, rounded).astype(np.int64).reshape(target_shape)


def entity_level(entity_id: str, x: float, z: float, dimension_id: str, seed: int,
                 config: LevelConfig, cache: PermutationCache = None) -> int:
    """Level for an entity of the given type; blacklisted types stay at the minimum."""
    if not config.enabled or entity_id in config.mob_blacklist:
        return MINIMUM_LEVEL
    return level_at(x, z, dimension_id, seed, config, cache)


class LevelScorer:
    """
    Binds one configuration and a permutation cache so callers can score
    positions without threading the config through every call.
    Holds no mutable state of its own and is safe to share across threads.
    """
    def __init__(self, config, logger: logging.Logger = None, cache: PermutationCache = None):
        """
        Initializes the level scorer.

        Args:
            config (dict | LevelConfig): User-defined parameters to override
                defaults, or a ready-made LevelConfig.
            logger (logging.Logger, optional): The logger instance for all output.
            cache (PermutationCache, optional): A permutation cache to share.
                If None, the process-wide cache is used.
        """
        self.logger = logger or logging.getLogger(__name__)
        self.logger.info("LevelScorer initializing...")

        if isinstance(config, LevelConfig):
            self.settings = config
        else:
            self.settings = LevelConfig.from_dict(config, self.logger)
        self.cache = cache

        self.logger.info(
            f"LevelScorer initialized: max_level={self.settings.max_level}, "
            f"noise_scale={self.settings.noise_scale}, "
            f"spawn_influence_radius={self.settings.spawn_influence_radius}, "
            f"enabled={self.settings.enabled}"
        )

    def base_factor(self, x: float, z: float, seed: int) -> float:
        return base_level_factor(x, z, seed, self.settings, self.cache)

    def level_at(self, x: float, z: float, dimension_id: str, seed: int) -> int:
        return level_at(x, z, dimension_id, seed, self.settings, self.cache)

    def level_grid(self, x_coords: np.ndarray, z_coords: np.ndarray, dimension_id: str, seed: int) -> np.ndarray:
        return level_grid(x_coords, z_coords, dimension_id, seed, self.settings, self.cache)

    def entity_level(self, entity_id: str, x: float, z: float, dimension_id: str, seed: int) -> int:
        return entity_level(entity_id, x, z, dimension_id, seed, self.settings, self.cache)

    def multipliers(self, level: int) -> StatMultipliers:
        return multipliers_for_level(level, self.settings)

    def get_coordinate_grid(self, center_x, center_z, resolution_w, resolution_h, blocks_per_pixel):
        """
        Generates a coordinate grid centred on a world position, one sample
        per pixel centre. Returns (x_grid, z_grid) shaped (height, width).
        """
        half_w = (resolution_w - 1) / 2.0
        half_h = (resolution_h - 1) / 2.0
        x_coords = center_x + (np.arange(resolution_w) - half_w) * blocks_per_pixel
        z_coords = center_z + (np.arange(resolution_h) - half_h) * blocks_per_pixel
        return np.meshgrid(x_coords, z_coords)
