"""64-bit word helpers shared by every generator in the package.

Python ints are unbounded, so all arithmetic on state words is reduced with
``MASK64`` by the caller. The helpers here cover the operations that are not
a single masked expression:

  * ``rotate_left_64`` / ``rotate_right_64``: bitwise rotations.
  * ``to_signed_64`` / ``to_signed_32``: two's-complement views, for the
    ``next_long`` / ``next_int`` family in ``base.py``.
  * ``rate_gamma`` / ``fix_gamma``: the validity test and deterministic
    repair applied to odd "stream" words such as ``TraceRandom.state_f``.

A gamma's rating is the largest distance from 32 among the popcounts of the
value, its Gray code, its multiplicative inverse mod 2**64, and the Gray code
of that inverse. A well-mixed gamma has each of those close to half its bits
set. ``fix_gamma`` forces the value odd and then walks an LCG over the
candidates until one rates at or below the threshold; the LCG increment grows
each round so the walk never cycles.
"""

from __future__ import annotations

MASK64 = 0xFFFFFFFFFFFFFFFF
MASK32 = 0xFFFFFFFF

# Multiplier of the walk used by fix_gamma (an MCG multiplier with good
# spectral properties mod 2**64).
_GAMMA_WALK_MUL = 0xD1342543DE82EF95


def rotate_left_64(value: int, amount: int) -> int:
    """Rotate a 64-bit word left by ``amount`` bits."""
    amount &= 63
    value &= MASK64
    return ((value << amount) | (value >> (64 - amount))) & MASK64


def rotate_right_64(value: int, amount: int) -> int:
    """Rotate a 64-bit word right by ``amount`` bits."""
    amount &= 63
    value &= MASK64
    return ((value >> amount) | (value << (64 - amount))) & MASK64


def to_signed_64(value: int) -> int:
    value &= MASK64
    return value - (1 << 64) if value >> 63 else value


def to_signed_32(value: int) -> int:
    value &= MASK32
    return value - (1 << 32) if value >> 31 else value


def popcount(value: int) -> int:
    return bin(value & MASK64).count("1")


def inverse_64(value: int) -> int:
    """Multiplicative inverse of an odd word mod 2**64."""
    return pow(value | 1, -1, 1 << 64)


def rate_gamma(gamma: int) -> int:
    """Rate how far ``gamma`` is from an ideal stream constant (lower is better).

    The value is forced odd before rating, matching ``fix_gamma``.
    """
    gamma = (gamma | 1) & MASK64
    inverse = inverse_64(gamma)
    return max(
        abs(popcount(gamma) - 32),
        abs(popcount(gamma ^ (gamma >> 1)) - 32),
        abs(popcount(inverse) - 32),
        abs(popcount(inverse ^ (inverse >> 1)) - 32),
    )


def fix_gamma(gamma: int, threshold: int = 1) -> int:
    """Return an odd word that rates at most ``threshold`` by ``rate_gamma``.

    Values that already satisfy the threshold (after being made odd) are
    returned unchanged, so fixing is idempotent. Odd inputs below 2**29 are
    all mapped to distinct results.

    The Gray code of an odd word always has an odd popcount, so no odd word
    rates below 1; thresholds below 1 are raised to 1.
    """
    threshold = max(threshold, 1)
    gamma = (gamma | 1) & MASK64
    add = 0
    while rate_gamma(gamma) > threshold:
        add += 2
        gamma = (gamma * _GAMMA_WALK_MUL + add) & MASK64
    return gamma
