"""Trace: a six-word invertible generator (tag ``TrcR``).

The state is five unconstrained 64-bit words ``a..e`` plus a stream word
``f``. Each step is a "medium-chaotic" update of the five words, where every
new word is computed from the previous snapshot only:

    a' = a + 0x9E3779B97F4A7C15
    b' = a ^ e
    c' = b + d
    d' = rotl(c, 52)
    e' = b - c          (the output)

``a`` is a Weyl sequence, which alone guarantees a period of at least 2**64.
Every line is individually invertible given the others, so ``step_backward``
recovers the previous snapshot exactly and returns the output that the
undone step produced.

The stream word ``f`` is constrained to an odd value that rates at most 1 by
``fix_gamma``; it is set by seeding and exposed through the state accessors,
but the step function never reads it.

Seeding expands one 64-bit seed through an XLCG followed by the three rounds
of the MX3 unary hash, writing one state word between rounds.

Not for cryptographic use. Jump-ahead (``skip``) and ``leap`` are not
supported.
"""

from __future__ import annotations

import logging

from .base import (
    EnhancedRandom,
    make_seed,
    sparse_double_from_bits,
    sparse_float_from_bits,
)
from .bits import MASK64, rotate_left_64, rotate_right_64
from .types import TraceState

logger = logging.getLogger(__name__)

GOLDEN_GAMMA = 0x9E3779B97F4A7C15
ROTATION = 52

_XLCG_XOR = 0x1C69B3F74AC4AE35
_XLCG_MUL = 0x3C79AC492BA7B653
_MX3_MUL = 0xBEA225F9EB34556D
_MASK_A = 0xC6BC279692B5C323
_MASK_B = 0xD3833E804F4C574B


def seed_state(seed: int) -> TraceState:
    """Expand one 64-bit seed into a full state; same seed, same state."""
    s = (((seed & MASK64) ^ _XLCG_XOR) * _XLCG_MUL) & MASK64
    a = s ^ (~_MASK_A & MASK64)
    s ^= s >> 32
    b = s ^ _MASK_B
    s = (s * _MX3_MUL) & MASK64
    s ^= s >> 29
    c = s ^ (~_MASK_B & MASK64)
    s = (s * _MX3_MUL) & MASK64
    s ^= s >> 32
    d = s ^ _MASK_A
    s = (s * _MX3_MUL) & MASK64
    s ^= s >> 29
    e = s
    s ^= ((s * s) & MASK64) | 7
    s ^= s >> 27
    # TraceState fixes f on construction.
    return TraceState(a, b, c, d, e, s ^ _MX3_MUL)


def step_forward(state: TraceState) -> int:
    """Advance ``a..e`` one step in place and return the new ``e``."""
    fa, fb, fc, fd, fe = state.a, state.b, state.c, state.d, state.e
    state.a = (fa + GOLDEN_GAMMA) & MASK64
    state.b = fa ^ fe
    state.c = (fb + fd) & MASK64
    state.d = rotate_left_64(fc, ROTATION)
    state.e = (fb - fc) & MASK64
    return state.e


def step_backward(state: TraceState) -> int:
    """Undo one ``step_forward`` in place; returns what that step returned."""
    fb, fc, fd, fe = state.b, state.c, state.d, state.e
    state.a = (state.a - GOLDEN_GAMMA) & MASK64
    state.c = rotate_right_64(fd, ROTATION)
    state.b = (state.c + fe) & MASK64
    state.d = (fc - state.b) & MASK64
    state.e = fb ^ state.a
    return fe


class TraceRandom(EnhancedRandom):
    """Six-state generator with an exact inverse.

    ``TraceRandom()`` draws every word from ``make_seed``;
    ``TraceRandom(seed)`` expands one seed; ``TraceRandom(a, b, c, d, e, f)``
    uses the words verbatim except ``f``, which is fixed to satisfy the
    stream constraint.
    """

    def __init__(self, *args: int) -> None:
        if not args:
            self._state = TraceState(*(make_seed() for _ in range(6)))
        elif len(args) == 1:
            self._state = seed_state(args[0])
        elif len(args) == 6:
            self._state = TraceState(*args)
        else:
            raise TypeError(
                "TraceRandom() takes no arguments, one seed, or six state "
                f"words ({len(args)} given)"
            )

    @staticmethod
    def from_state(state: TraceState) -> TraceRandom:
        """A generator starting from a copy of ``state``."""
        return TraceRandom(*state.words())

    @property
    def state(self) -> TraceState:
        """The live state record; mutating it mutates the generator."""
        return self._state

    # --- capabilities ---

    @property
    def default_tag(self) -> str:
        return "TrcR"

    @property
    def state_count(self) -> int:
        return 6

    @property
    def supports_read_access(self) -> bool:
        return True

    @property
    def supports_write_access(self) -> bool:
        return True

    @property
    def supports_skip(self) -> bool:
        return False

    @property
    def supports_leap(self) -> bool:
        return False

    @property
    def supports_previous(self) -> bool:
        return True

    # --- state words ---

    @property
    def state_a(self) -> int:
        return self._state.a

    @state_a.setter
    def state_a(self, value: int) -> None:
        self._state.a = value & MASK64

    @property
    def state_b(self) -> int:
        return self._state.b

    @state_b.setter
    def state_b(self, value: int) -> None:
        self._state.b = value & MASK64

    @property
    def state_c(self) -> int:
        return self._state.c

    @state_c.setter
    def state_c(self, value: int) -> None:
        self._state.c = value & MASK64

    @property
    def state_d(self) -> int:
        return self._state.d

    @state_d.setter
    def state_d(self, value: int) -> None:
        self._state.d = value & MASK64

    @property
    def state_e(self) -> int:
        return self._state.e

    @state_e.setter
    def state_e(self, value: int) -> None:
        self._state.e = value & MASK64

    @property
    def state_f(self) -> int:
        return self._state.f

    @state_f.setter
    def state_f(self, value: int) -> None:
        self._state.set_word(5, value)

    def select_state(self, selection: int) -> int:
        return self._state.get_word(selection)

    def set_selected_state(self, selection: int, value: int) -> None:
        self._state.set_word(selection, value)

    def set_state(self, *states: int) -> None:
        """Assign all six words; ``f`` is fixed to satisfy its constraint."""
        if len(states) != 6:
            raise TypeError(
                f"set_state() takes six state words ({len(states)} given)"
            )
        self._state = TraceState(*states)

    def seed(self, seed: int) -> None:
        logger.debug(
            "Reseeding %s with 0x%016X", self.default_tag, seed & MASK64
        )
        self._state = seed_state(seed)

    # --- generation ---

    def next_ulong(self) -> int:
        return step_forward(self._state)

    def previous_ulong(self) -> int:
        return step_backward(self._state)

    def next_sparse_float(self) -> float:
        return sparse_float_from_bits(step_forward(self._state))

    def next_sparse_double(self) -> float:
        return sparse_double_from_bits(step_forward(self._state))

    def copy(self) -> TraceRandom:
        return TraceRandom.from_state(self._state)

    def __repr__(self) -> str:
        words = ", ".join(f"0x{w:016X}" for w in self._state.words())
        return f"TraceRandom({words})"
