# level_scaling/permutation.py

"""
================================================================================
SEEDED PERMUTATION TABLES
================================================================================
This module derives the 256-entry permutation table that hashes lattice
coordinates into gradient indices for the noise sampler, and caches one table
per seed for the lifetime of the process.

Data Contract:
---------------
- Inputs:
    - seed (int): Any int; it is wrapped onto the signed 64-bit range.
- Outputs:
    - A read-only NumPy int64 array of length 256, a bijection on [0, 255].
- Side Effects: The cache logs each new table at DEBUG level.
- Invariants: The same seed always yields the same table, on every platform.
  The shuffle favours reproducibility, not statistical quality.
================================================================================
"""

import logging
import threading

import numpy as np

from .seeds import wrap_int64

logger = logging.getLogger(__name__)

PERMUTATION_TABLE_SIZE = 256

# Textbook 64-bit linear congruential step: seed = seed * M + C (mod 2^64).
LCG_MULTIPLIER = 6364136223846793005
LCG_INCREMENT = 1442695040888963407
# Number of LCG steps applied to the raw seed before shuffling begins.
SEED_PREMIX_ROUNDS = 3
# Offset added to the running seed when picking each shuffle index.
SEED_SHUFFLE_OFFSET = 31


def _lcg_step(seed: int) -> int:
    return wrap_int64(seed * LCG_MULTIPLIER + LCG_INCREMENT)


def build_permutation_table(seed: int) -> np.ndarray:
    """Builds the permutation table for a seed with a Fisher-Yates shuffle."""
    source = list(range(PERMUTATION_TABLE_SIZE))
    table = [0] * PERMUTATION_TABLE_SIZE

    seed = wrap_int64(seed)
    for _ in range(SEED_PREMIX_ROUNDS):
        seed = _lcg_step(seed)

    for i in range(PERMUTATION_TABLE_SIZE - 1, -1, -1):
        seed = _lcg_step(seed)
        # Python's % already lands in [0, i] for a positive divisor, which is
        # the truncated remainder corrected by +(i + 1) when negative.
        r = wrap_int64(seed + SEED_SHUFFLE_OFFSET) % (i + 1)
        table[i] = source[r]
        source[r] = source[i]

    p = np.array(table, dtype=np.int64)
    p.flags.writeable = False
    return p


class PermutationCache:
    """
    Thread-safe, build-once-per-seed cache of permutation tables.
    Tables are inserted fully built, so readers never see a partial table.
    """
    def __init__(self, builder=build_permutation_table):
        self._builder = builder
        self._tables = {}
        self._lock = threading.Lock()

    def get(self, seed: int) -> np.ndarray:
        key = wrap_int64(seed)
        table = self._tables.get(key)
        if table is not None:
            return table

        with self._lock:
            # Another thread may have built it while we waited for the lock.
            table = self._tables.get(key)
            if table is None:
                table = self._builder(key)
                self._tables[key] = table
                logger.debug(f"Built permutation table for seed {key} ({len(self._tables)} cached).")
        return table

    def clear(self):
        with self._lock:
            self._tables.clear()

    def __contains__(self, seed: int) -> bool:
        return wrap_int64(seed) in self._tables

    def __len__(self) -> int:
        return len(self._tables)


_DEFAULT_CACHE = PermutationCache()


def default_cache() -> PermutationCache:
    """Returns the process-wide cache used when callers do not supply one."""
    return _DEFAULT_CACHE


def get_permutation_table(seed: int, cache: PermutationCache = None) -> np.ndarray:
    if cache is None:
        cache = _DEFAULT_CACHE
    return cache.get(seed)
