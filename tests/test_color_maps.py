import numpy as np
import pytest

from level_scaling import color_maps


@pytest.mark.parametrize("level, max_level, expected", [
    (1, 100, "green"),
    (29, 100, "green"),
    (30, 100, "yellow"),
    (59, 100, "yellow"),
    (60, 100, "gold"),
    (80, 100, "red"),
    (120, 100, "red"),
    (5, 0, "neutral"),
])
def test_level_tier(level, max_level, expected):
    assert color_maps.level_tier(level, max_level) == expected


@pytest.mark.parametrize("multiplier, expected", [
    (0.25, "green"),
    (1.29, "green"),
    (1.3, "yellow"),
    (2.0, "gold"),
    (3.0, "red"),
    (6.0, "red"),
])
def test_danger_tier(multiplier, expected):
    assert color_maps.danger_tier(multiplier) == expected


def test_level_lut_shape_and_tiers():
    lut = color_maps.create_level_lut(100)
    assert lut.shape == (101, 3)
    assert lut.dtype == np.uint8
    # Higher levels in the same tier are drawn brighter.
    assert lut[29].sum() > lut[1].sum()
    # Red tier dominates the red channel.
    assert lut[100][0] > lut[100][1]


def test_level_color_array_clips_out_of_range_levels():
    lut = color_maps.create_level_lut(10)
    levels = np.array([[1, 10, 35]])
    colors = color_maps.get_level_color_array(levels, lut)
    assert colors.shape == (1, 3, 3)
    assert np.array_equal(colors[0, 2], lut[10])
