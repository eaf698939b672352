"""Run an invertible generator backwards.

``ReversingWrapper`` swaps ``next_ulong`` and ``previous_ulong`` of the
generator it wraps, without copying it. Every derived method in ``base.py``
consumes a fixed number of draws, so making the same calls through the
wrapper after making them on the wrapped generator walks the state back to
where it started, with the raw draws replayed in reverse order.
"""

from __future__ import annotations

from .base import EnhancedRandom
from .bits import MASK64

REVERSED_PREFIX = "R"


class ReversingWrapper(EnhancedRandom):
    def __init__(self, wrapped: EnhancedRandom) -> None:
        if not wrapped.supports_previous:
            raise TypeError(
                f"Can only reverse generators that support previous_ulong(), "
                f"and {type(wrapped).__name__} does not"
            )
        self.wrapped = wrapped

    @property
    def default_tag(self) -> str:
        return REVERSED_PREFIX + self.wrapped.default_tag

    @property
    def state_count(self) -> int:
        return self.wrapped.state_count

    @property
    def supports_read_access(self) -> bool:
        return self.wrapped.supports_read_access

    @property
    def supports_write_access(self) -> bool:
        return self.wrapped.supports_write_access

    @property
    def supports_skip(self) -> bool:
        return self.wrapped.supports_skip

    @property
    def supports_leap(self) -> bool:
        return False

    @property
    def supports_previous(self) -> bool:
        return True

    def select_state(self, selection: int) -> int:
        return self.wrapped.select_state(selection)

    def set_selected_state(self, selection: int, value: int) -> None:
        self.wrapped.set_selected_state(selection, value)

    def set_state(self, *states: int) -> None:
        self.wrapped.set_state(*states)

    def seed(self, seed: int) -> None:
        self.wrapped.seed(seed)

    def next_ulong(self) -> int:
        return self.wrapped.previous_ulong()

    def previous_ulong(self) -> int:
        return self.wrapped.next_ulong()

    def skip(self, distance: int) -> int:
        return self.wrapped.skip(-distance & MASK64)

    def copy(self) -> ReversingWrapper:
        return ReversingWrapper(self.wrapped.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReversingWrapper):
            return NotImplemented
        return self.wrapped == other.wrapped

    def __repr__(self) -> str:
        return f"ReversingWrapper({self.wrapped!r})"
