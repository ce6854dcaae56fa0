import pytest

from level_scaling.seeds import (
    dimension_seed,
    string_hash_31,
    resolve_seed,
    split_dimension_id,
    wrap_int64,
)


@pytest.mark.parametrize("text, expected", [
    ("", 0),
    ("a", 97),
    ("hello", 99162322),
    ("polygenelubricants", -2**31),
])
def test_string_hash(text, expected):
    assert string_hash_31(text) == expected


@pytest.mark.parametrize("dimension_id, expected", [
    ("minecraft:overworld", -672727247),
    ("minecraft:the_nether", 1344729049),
    ("minecraft:the_end", -1277684736),
    ("overworld", -672727247),
])
def test_dimension_seed(dimension_id, expected):
    assert dimension_seed(dimension_id) == expected


def test_split_dimension_id():
    assert split_dimension_id("mod:deep:caves") == ("mod", "deep:caves")
    assert split_dimension_id("the_end") == ("minecraft", "the_end")


def test_wrap_int64():
    assert wrap_int64(2**63) == -(2**63)
    assert wrap_int64(-1) == -1
    assert wrap_int64(2**64 + 5) == 5


def test_resolve_seed_prefers_world_seed():
    assert resolve_seed("minecraft:the_end", 12345) == 12345
    assert resolve_seed("minecraft:the_end", 0) == 0
    assert resolve_seed("minecraft:the_end") == -1277684736
