"""NumPy bulk draws.

The generators themselves are sequential, so words are still produced one
``next_ulong`` at a time; what this module vectorizes is the conversion. The
sparse float paths reinterpret the shifted words in place with ``.view``
instead of packing each value through ``struct``, and give results
bit-identical to the scalar ``next_sparse_float`` / ``next_sparse_double``.
"""

from __future__ import annotations

import numpy as np

from .base import EnhancedRandom

_FLOAT_ONE_BITS = np.uint32(0x3F800000)
_DOUBLE_ONE_BITS = np.uint64(0x3FF0000000000000)


def next_ulongs(rng: EnhancedRandom, n: int) -> np.ndarray:
    """``n`` successive ``next_ulong`` draws as a uint64 array."""
    return np.fromiter(
        (rng.next_ulong() for _ in range(n)), dtype=np.uint64, count=n
    )


def previous_ulongs(rng: EnhancedRandom, n: int) -> np.ndarray:
    """``n`` successive ``previous_ulong`` draws as a uint64 array."""
    return np.fromiter(
        (rng.previous_ulong() for _ in range(n)), dtype=np.uint64, count=n
    )


def sparse_doubles(rng: EnhancedRandom, n: int) -> np.ndarray:
    """float64 values in [0, 1) from the top 52 bits of each draw."""
    words = next_ulongs(rng, n)
    bits = (words >> np.uint64(12)) | _DOUBLE_ONE_BITS
    return bits.view(np.float64) - 1.0


def sparse_floats(rng: EnhancedRandom, n: int) -> np.ndarray:
    """float32 values in [0, 1) from the top 23 bits of each draw."""
    words = next_ulongs(rng, n)
    bits = (words >> np.uint64(41)).astype(np.uint32) | _FLOAT_ONE_BITS
    return bits.view(np.float32) - np.float32(1.0)


def next_bytes(rng: EnhancedRandom, length: int) -> bytes:
    """Same bytes as ``rng.next_bytes(length)``, via one little-endian buffer."""
    words = next_ulongs(rng, -(-length // 8))
    return words.astype("<u8").tobytes()[:length]


def words_array(rng: EnhancedRandom) -> np.ndarray:
    """The full state of ``rng`` as a uint64 array, in index order."""
    return np.array(
        [rng.select_state(i) for i in range(rng.state_count)],
        dtype=np.uint64,
    )
