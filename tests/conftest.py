"""Shared fixtures for the level scaling tests."""

import pytest

from level_scaling.permutation import PermutationCache
from level_scaling.settings import LevelConfig


@pytest.fixture
def cache():
    """A fresh cache so tests never depend on each other's tables."""
    return PermutationCache()


@pytest.fixture
def scenario_config():
    """The reference configuration: defaults without dimension offsets."""
    return LevelConfig(
        max_level=100,
        noise_scale=2048.0,
        min_noise_level_percentage=0.25,
        spawn_influence_radius=3500,
        dimension_level_offsets={},
    )


@pytest.fixture
def offset_config():
    return LevelConfig(
        dimension_level_offsets={"minecraft:the_nether": 10, "test:sunken": -200},
    )
