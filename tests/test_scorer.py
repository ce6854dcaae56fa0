import logging
import math

import numpy as np
import pytest

from level_scaling.scorer import (
    LevelScorer,
    base_level_factor,
    entity_level,
    level_at,
    level_grid,
)
from level_scaling.seeds import dimension_seed
from level_scaling.settings import LevelConfig

SEED = 12345
OVERWORLD = "minecraft:overworld"


def _round_half_up(value):
    return math.floor(value + 0.5)


# --- Reference scenarios ---

def test_scenario_a_far_from_spawn(scenario_config, cache):
    factor = base_level_factor(5000.0, 0.0, SEED, scenario_config, cache)
    assert factor == pytest.approx(0.87720278722356793, rel=1e-12)
    assert level_at(5000.0, 0.0, OVERWORLD, SEED, scenario_config, cache) == 88


def test_scenario_b_origin_is_level_one(scenario_config, cache):
    assert level_at(0.0, 0.0, OVERWORLD, SEED, scenario_config, cache) == 1


@pytest.mark.parametrize("x, z, expected", [
    (-7321.5, 9876.25, 41),
    (2000.0, 1000.0, 30),      # inside the spawn radius
    (1750.0, 0.0, 29),
    (1e7, -3e6, 77),
])
def test_reference_levels(scenario_config, cache, x, z, expected):
    assert level_at(x, z, OVERWORLD, SEED, scenario_config, cache) == expected


def test_dimension_offset_is_added(cache):
    config = LevelConfig(dimension_level_offsets={"minecraft:the_nether": 10})
    assert level_at(5000.0, 0.0, "minecraft:the_nether", SEED, config, cache) == 98
    assert level_at(5000.0, 0.0, OVERWORLD, SEED, config, cache) == 88


def test_fallback_dimension_seed(scenario_config, cache):
    seed = dimension_seed(OVERWORLD)
    assert seed == -672727247
    assert base_level_factor(5000.0, 0.0, seed, scenario_config, cache) == pytest.approx(
        0.65148129961584511, rel=1e-12
    )
    assert level_at(5000.0, 0.0, OVERWORLD, seed, scenario_config, cache) == 65


# --- Properties ---

@pytest.mark.parametrize("x, z", [
    (0.0, 0.0), (1.0, -1.0), (3499.9, 0.0), (3500.0, 0.0), (-12000.5, 4400.0),
    (1e9, 1e9), (-3e12, 2e12),
])
def test_level_is_at_least_one(cache, x, z):
    for offset in (0, -50, -1000):
        config = LevelConfig(dimension_level_offsets={OVERWORLD: offset})
        assert level_at(x, z, OVERWORLD, SEED, config, cache) >= 1


def test_base_factor_range(scenario_config, cache):
    rng = np.random.default_rng(11)
    for x, z in rng.uniform(-1e6, 1e6, size=(200, 2)):
        factor = base_level_factor(x, z, SEED, scenario_config, cache)
        # Noise stays inside [-1, 1] in practice, so the factor stays in range.
        assert 0.25 <= factor <= 1.0


@pytest.mark.parametrize("offset", [0, 3, 10, -1, -5])
def test_origin_ignores_noise(cache, offset):
    config = LevelConfig(spawn_influence_radius=500.0, dimension_level_offsets={OVERWORLD: offset})
    for seed in (1, 2, SEED, -99):
        assert level_at(0.0, 0.0, OVERWORLD, seed, config, cache) == max(1, 1 + offset)


@pytest.mark.parametrize("offset", [0, 7, -30])
def test_outside_radius_uses_potential_directly(cache, offset):
    config = LevelConfig(spawn_influence_radius=1000.0, dimension_level_offsets={OVERWORLD: offset})
    for x, z in [(1000.0, 0.0), (0.0, -1000.0), (5000.0, 7000.0), (-800.0, 900.0)]:
        factor = base_level_factor(x, z, SEED, config, cache)
        expected = max(1, _round_half_up(factor * config.max_level + offset))
        assert level_at(x, z, OVERWORLD, SEED, config, cache) == expected


def test_inside_radius_blends_toward_one(cache):
    config = LevelConfig(spawn_influence_radius=4000.0, dimension_level_offsets={})
    x, z = 1200.0, 1600.0   # distance 2000, halfway
    potential = base_level_factor(x, z, SEED, config, cache) * config.max_level
    expected = max(1, _round_half_up(1 + 0.5 * (potential - 1)))
    assert level_at(x, z, OVERWORLD, SEED, config, cache) == expected


def test_zero_radius_skips_blending(cache):
    config = LevelConfig(spawn_influence_radius=0.0, dimension_level_offsets={})
    assert level_at(100.0, 100.0, OVERWORLD, SEED, config, cache) == 58
    factor = base_level_factor(0.0, 0.0, SEED, config, cache)
    assert level_at(0.0, 0.0, OVERWORLD, SEED, config, cache) == _round_half_up(factor * 100)


def test_distance_is_measured_from_world_origin(cache):
    config = LevelConfig(spawn_influence_radius=10000.0, dimension_level_offsets={})
    # A point next to (0, 0) is pulled almost all the way down to level 1.
    near = level_at(10.0, 0.0, OVERWORLD, SEED, config, cache)
    assert near <= 2


def test_disabled_config_always_returns_one(cache):
    config = LevelConfig(enabled=False)
    assert level_at(5000.0, 0.0, OVERWORLD, SEED, config, cache) == 1
    assert entity_level("minecraft:zombie", 5000.0, 0.0, OVERWORLD, SEED, config, cache) == 1
    grid = level_grid(np.array([[5000.0, 9000.0]]), np.array([[0.0, 1.0]]), OVERWORLD, SEED, config, cache)
    assert grid.tolist() == [[1, 1]]


def test_repeated_calls_are_identical(scenario_config, cache):
    results = {level_at(6543.21, -1234.5, OVERWORLD, SEED, scenario_config, cache) for _ in range(5)}
    assert len(results) == 1
    assert len(cache) == 1


def test_non_finite_coordinates_raise(scenario_config, cache):
    with pytest.raises(ValueError):
        level_at(float("nan"), 0.0, OVERWORLD, SEED, scenario_config, cache)
    with pytest.raises(ValueError):
        level_at(float("inf"), 0.0, OVERWORLD, SEED, scenario_config, cache)


# --- Entities ---

def test_blacklisted_entities_stay_at_one(scenario_config, cache):
    assert entity_level("minecraft:wither", 5000.0, 0.0, OVERWORLD, SEED, scenario_config, cache) == 1
    assert entity_level("minecraft:zombie", 5000.0, 0.0, OVERWORLD, SEED, scenario_config, cache) == 88


# --- Grid (display) path ---

def test_grid_matches_scalar_path(cache):
    config = LevelConfig(spawn_influence_radius=3500.0, dimension_level_offsets={"minecraft:the_end": 20})
    xs, zs = np.meshgrid(np.linspace(-9000, 9000, 37), np.linspace(-7000, 7000, 29))
    for dimension in (OVERWORLD, "minecraft:the_end"):
        grid = level_grid(xs, zs, dimension, SEED, config, cache)
        assert grid.shape == xs.shape
        assert grid.dtype == np.int64
        for i in range(xs.shape[0]):
            for j in range(xs.shape[1]):
                assert grid[i, j] == level_at(xs[i, j], zs[i, j], dimension, SEED, config, cache)


def test_grid_accepts_one_dimensional_input(scenario_config, cache):
    xs = np.array([0.0, 5000.0, -7321.5])
    zs = np.array([0.0, 0.0, 9876.25])
    assert level_grid(xs, zs, OVERWORLD, SEED, scenario_config, cache).tolist() == [1, 88, 41]


def test_grid_nan_cells_fall_back_to_minimum(scenario_config, cache):
    grid = level_grid(np.array([[np.nan, 5000.0]]), np.array([[0.0, 0.0]]), OVERWORLD, SEED, scenario_config, cache)
    assert grid.tolist() == [[1, 88]]


def test_grid_shape_mismatch(scenario_config, cache):
    with pytest.raises(ValueError):
        level_grid(np.zeros((2, 2)), np.zeros((2, 3)), OVERWORLD, SEED, scenario_config, cache)


# --- LevelScorer ---

def test_level_scorer_from_dict(cache, caplog):
    with caplog.at_level(logging.INFO):
        scorer = LevelScorer({"dimension_level_offsets": {}}, logging.getLogger("test"), cache=cache)
    assert "LevelScorer initialized" in caplog.text
    assert scorer.level_at(5000.0, 0.0, OVERWORLD, SEED) == 88
    assert scorer.base_factor(5000.0, 0.0, SEED) == pytest.approx(0.87720278722356793, rel=1e-12)
    assert scorer.entity_level("minecraft:marker", 5000.0, 0.0, OVERWORLD, SEED) == 1


def test_level_scorer_accepts_level_config(scenario_config, cache):
    scorer = LevelScorer(scenario_config, cache=cache)
    assert scorer.settings is scenario_config
    multipliers = scorer.multipliers(1)
    assert multipliers.health == pytest.approx(0.25)


def test_coordinate_grid_is_centred():
    scorer = LevelScorer({})
    x_grid, z_grid = scorer.get_coordinate_grid(100.0, -50.0, 5, 3, 10.0)
    assert x_grid.shape == (3, 5)
    assert x_grid[0].tolist() == [80.0, 90.0, 100.0, 110.0, 120.0]
    assert z_grid[:, 0].tolist() == [-60.0, -50.0, -40.0]


def test_negative_offset_clamps_to_minimum(offset_config, cache):
    assert level_at(5000.0, 0.0, "test:sunken", SEED, offset_config, cache) == 1
    assert level_at(5000.0, 0.0, "minecraft:the_nether", SEED, offset_config, cache) == 98
    assert level_at(5000.0, 0.0, "test:unlisted", SEED, offset_config, cache) == 88
