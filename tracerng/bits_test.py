"""Tests for rotations and the gamma rating/fixing helpers."""

from __future__ import annotations

import pytest

from .bits import (
    MASK64,
    fix_gamma,
    inverse_64,
    popcount,
    rate_gamma,
    rotate_left_64,
    rotate_right_64,
    to_signed_32,
    to_signed_64,
)
from .trace import TraceRandom

# --- rotations ---


def test_rotate_left_moves_high_bits_to_low():
    assert rotate_left_64(0x8000000000000001, 1) == 0x0000000000000003
    assert rotate_left_64(0x0123456789ABCDEF, 52) == 0xDEF0123456789ABC


def test_rotate_right_inverts_rotate_left():
    rng = TraceRandom(7)
    for amount in (0, 1, 12, 32, 52, 63):
        value = rng.next_ulong()
        assert rotate_right_64(rotate_left_64(value, amount), amount) == value


def test_rotate_by_zero_and_64_is_identity():
    assert rotate_left_64(0xDEADBEEF, 0) == 0xDEADBEEF
    assert rotate_left_64(0xDEADBEEF, 64) == 0xDEADBEEF
    assert rotate_right_64(0xDEADBEEF, 64) == 0xDEADBEEF


def test_rotations_mask_oversized_input():
    assert rotate_left_64(1 << 64 | 1, 1) == 2


# --- signed views ---


def test_signed_views():
    assert to_signed_64(MASK64) == -1
    assert to_signed_64(1 << 63) == -(1 << 63)
    assert to_signed_64(5) == 5
    assert to_signed_32(0xFFFFFFFF) == -1
    assert to_signed_32(0x1_7FFFFFFF) == 0x7FFFFFFF


# --- gamma ---


def test_inverse_64():
    for g in (1, 3, 0x9E3779B97F4A7C15, MASK64):
        assert (g * inverse_64(g)) & MASK64 == 1


def test_rate_gamma_of_degenerate_values_is_high():
    # 1 has a single bit set, far from 32.
    assert rate_gamma(1) == 31
    assert rate_gamma(MASK64) == 32


@pytest.mark.parametrize(
    "raw, fixed",
    [
        (0, 0x3E94C4F905E9E465),
        (1, 0x3E94C4F905E9E465),
        (2, 0x74D662EF93358117),
        (3, 0x74D662EF93358117),
        (4, 0xB490B0FE4C7C356B),
        (6, 0xCF5CB0F5309D47C1),
        (MASK64, 0x6EC28C25E4F4BC79),
    ],
)
def test_fix_gamma_known_values(raw, fixed):
    assert fix_gamma(raw, 1) == fixed


def test_fix_gamma_result_is_odd_and_rated():
    rng = TraceRandom(99)
    for _ in range(200):
        fixed = fix_gamma(rng.next_ulong(), 1)
        assert fixed & 1 == 1
        assert rate_gamma(fixed) <= 1
        assert 0 <= fixed <= MASK64


def test_fix_gamma_is_idempotent():
    rng = TraceRandom(100)
    for _ in range(50):
        fixed = fix_gamma(rng.next_ulong())
        assert fix_gamma(fixed) == fixed


def test_fix_gamma_keeps_acceptable_odd_values():
    # Produced by fix_gamma(1), so already acceptable.
    good = 0x3E94C4F905E9E465
    assert rate_gamma(good) <= 1
    assert fix_gamma(good) == good


def test_fix_gamma_small_odd_inputs_are_distinct():
    fixed = [fix_gamma(v, 1) for v in range(1, 4096, 2)]
    assert len(set(fixed)) == len(fixed)


def test_fix_gamma_looser_threshold_accepts_more():
    rng = TraceRandom(5)
    for _ in range(50):
        raw = rng.next_ulong()
        fixed = fix_gamma(raw, 4)
        assert rate_gamma(fixed) <= 4


def test_odd_words_never_rate_below_one():
    # The Gray code of an odd word has an odd popcount, never 32.
    rng = TraceRandom(6)
    for _ in range(500):
        g = rng.next_ulong() | 1
        assert popcount(g ^ (g >> 1)) % 2 == 1
        assert rate_gamma(g) >= 1


@pytest.mark.parametrize("threshold", [0, -3])
def test_fix_gamma_thresholds_below_one_act_as_one(threshold):
    assert fix_gamma(12345, threshold) == fix_gamma(12345, 1)
    assert rate_gamma(fix_gamma(12345, threshold)) == 1


def test_popcount():
    assert popcount(0) == 0
    assert popcount(MASK64) == 64
    assert popcount(0xF0F0) == 8
