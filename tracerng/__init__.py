"""Trace: a fast, invertible, non-cryptographic 64-bit generator."""

from .base import EnhancedRandom, make_seed
from .bits import fix_gamma, rate_gamma, rotate_left_64, rotate_right_64
from .reversing import ReversingWrapper
from .trace import TraceRandom, seed_state, step_backward, step_forward
from .types import RunParams, TraceState

__all__ = [
    "EnhancedRandom",
    "ReversingWrapper",
    "RunParams",
    "TraceRandom",
    "TraceState",
    "fix_gamma",
    "make_seed",
    "rate_gamma",
    "rotate_left_64",
    "rotate_right_64",
    "seed_state",
    "step_backward",
    "step_forward",
]
