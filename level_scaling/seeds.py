# level_scaling/seeds.py

"""
Seed helpers.

The noise field is keyed by a signed 64-bit seed. On the server this is the
world seed. Where no world seed is available (e.g. a client predicting levels
for display), a deterministic seed is derived from the dimension identifier
instead, so every client agrees on the same field for a given dimension.
"""

from . import config as DEFAULTS

_UINT64_MASK = 0xFFFFFFFFFFFFFFFF
_UINT32_MASK = 0xFFFFFFFF


def wrap_int64(value: int) -> int:
    """Wraps an arbitrary Python int onto the signed 64-bit range."""
    value &= _UINT64_MASK
    return value - (1 << 64) if value >= (1 << 63) else value


def _wrap_int32(value: int) -> int:
    value &= _UINT32_MASK
    return value - (1 << 32) if value >= (1 << 31) else value


def string_hash_31(text: str) -> int:
    """The classic 31-polynomial string hash, as a signed 32-bit int."""
    h = 0
    # Hash over UTF-16 code units so identifiers hash the same as on the game side.
    data = text.encode('utf-16-be')
    for i in range(0, len(data), 2):
        h = (31 * h + ((data[i] << 8) | data[i + 1])) & _UINT32_MASK
    return _wrap_int32(h)


def split_dimension_id(dimension_id: str) -> tuple[str, str]:
    """Splits 'namespace:path', defaulting the namespace to 'minecraft'."""
    if ':' in dimension_id:
        namespace, path = dimension_id.split(':', 1)
        return namespace, path
    return DEFAULTS.DEFAULT_DIMENSION_NAMESPACE, dimension_id


def dimension_seed(dimension_id: str) -> int:
    """
    Derives the fallback seed for a dimension from its identifier.
    Matches the namespaced-identifier hash: 31 * hash(namespace) + hash(path).
    """
    namespace, path = split_dimension_id(dimension_id)
    return _wrap_int32(31 * string_hash_31(namespace) + string_hash_31(path))


def resolve_seed(dimension_id: str, world_seed: int = None) -> int:
    """Returns the world seed if known, otherwise the dimension fallback seed."""
    if world_seed is not None:
        return wrap_int64(world_seed)
    return dimension_seed(dimension_id)
