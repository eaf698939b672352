"""Abstract generator contract shared by every generator in the package.

A concrete generator supplies ``next_ulong`` (64 random bits), seeding, a
state count with indexed state access, capability flags and a copy
operation. Everything else here is derived from ``next_ulong``:

  * **Integers**: ``next_bits``, ``next_int``/``next_uint`` (32-bit views),
    ``next_long`` (signed 64-bit), and the bounded forms
    ``next_ulong_bounded``, ``next_long_bounded``, ``next_int_bounded`` and
    ``next_int_range``. Bounded draws use one ``next_ulong`` and a high
    multiply, never rejection, so each call consumes exactly one draw.
  * **Floats**: ``next_float`` (24 bits), ``next_double`` (53 bits),
    ``next_inclusive_double``, and the "sparse" variants that fuse random
    mantissa bits with the exponent of 1.0 and subtract 1.
  * **Sequences**: ``next_bytes``, ``shuffle``, ``random_element``,
    ``random_index``.
  * **Serialization**: ``string_serialize`` / ``string_deserialize`` in the
    form ``TAG`W0~W1~...`` with uppercase unpadded hex words, built on
    ``select_state`` / ``set_selected_state``. Tag lookup lives in
    ``serializer.py``.

Every derived method consumes a fixed number of draws, which is what lets
``ReversingWrapper`` rewind the state after any sequence of calls.

Optional capabilities (``previous_ulong``, ``skip``, ``leap``, state access)
raise ``NotImplementedError`` unless a subclass overrides them; callers check
the ``supports_*`` flags first.
"""

from __future__ import annotations

import math
import random
import re
import struct
from abc import ABC, abstractmethod
from collections.abc import MutableSequence, Sequence
from typing import TypeVar

from .bits import MASK32, MASK64, to_signed_32, to_signed_64

T = TypeVar("T")

FLOAT_ADJUST = 2.0**-24
DOUBLE_ADJUST = 2.0**-53

_FLOAT_ONE_BITS = 0x3F800000
_DOUBLE_ONE_BITS = 0x3FF0000000000000

_HEX_WORD = re.compile(r"[0-9A-Fa-f]{1,16}")

# OS-seeded source for make_seed(); only used when no seed is given.
_seeding_random = random.Random()


def make_seed() -> int:
    """A random 64-bit word, for generators constructed without a seed."""
    return _seeding_random.getrandbits(64)


def sparse_float_from_bits(value: int) -> float:
    """Map the top 23 bits of a 64-bit word to a float32 in ``[0, 1)``."""
    bits = ((value & MASK64) >> 41) | _FLOAT_ONE_BITS
    return struct.unpack("<f", struct.pack("<I", bits))[0] - 1.0


def sparse_double_from_bits(value: int) -> float:
    """Map the top 52 bits of a 64-bit word to a double in ``[0, 1)``."""
    bits = ((value & MASK64) >> 12) | _DOUBLE_ONE_BITS
    return struct.unpack("<d", struct.pack("<Q", bits))[0] - 1.0


def _mul_high_approx(rand: int, bound: int) -> int:
    """High 64 bits of ``rand * bound``, without the low-by-low partial product.

    Matches the three-partial-product form used across implementations of
    this contract, so bounded draws agree bit-for-bit.
    """
    rand_low = rand & MASK32
    rand_high = rand >> 32
    bound_low = bound & MASK32
    bound_high = bound >> 32
    return (
        ((rand_high * bound_low) >> 32)
        + ((rand_low * bound_high) >> 32)
        + rand_high * bound_high
    ) & MASK64


class EnhancedRandom(ABC):
    # --- required by subclasses ---

    @abstractmethod
    def next_ulong(self) -> int:
        """64 random bits as a non-negative int."""

    @abstractmethod
    def seed(self, seed: int) -> None:
        """Reset the whole state from one 64-bit seed."""

    @property
    @abstractmethod
    def state_count(self) -> int: ...

    @property
    @abstractmethod
    def default_tag(self) -> str: ...

    @property
    @abstractmethod
    def supports_read_access(self) -> bool: ...

    @property
    @abstractmethod
    def supports_write_access(self) -> bool: ...

    @property
    @abstractmethod
    def supports_skip(self) -> bool: ...

    @property
    @abstractmethod
    def supports_previous(self) -> bool: ...

    @property
    def supports_leap(self) -> bool:
        return False

    @abstractmethod
    def copy(self) -> EnhancedRandom:
        """Independent duplicate with identical state."""

    # --- optional capabilities ---

    def select_state(self, selection: int) -> int:
        raise NotImplementedError(
            f"{type(self).__name__} does not support select_state()"
        )

    def set_selected_state(self, selection: int, value: int) -> None:
        """Set one state word; generators without write access reseed."""
        self.seed(value)

    def set_state(self, *states: int) -> None:
        """Assign state words in index order; missing trailing words are kept."""
        for i, value in enumerate(states[: self.state_count]):
            self.set_selected_state(i, value)

    def skip(self, distance: int) -> int:
        raise NotImplementedError(
            f"{type(self).__name__} does not support skip()"
        )

    def leap(self) -> int:
        raise NotImplementedError(
            f"{type(self).__name__} does not support leap()"
        )

    def previous_ulong(self) -> int:
        """Step back one draw and return what ``next_ulong`` produced there.

        The default goes through ``skip(-1)``, which most generators lack.
        """
        return self.skip(MASK64)

    # --- integers ---

    def next_long(self) -> int:
        return to_signed_64(self.next_ulong())

    def next_bits(self, bits: int) -> int:
        """The top ``bits`` bits (1..64) of one draw."""
        if not 1 <= bits <= 64:
            raise ValueError(f"bits must be between 1 and 64, got {bits}")
        return self.next_ulong() >> (64 - bits)

    def next_uint(self) -> int:
        return self.next_ulong() & MASK32

    def next_int(self) -> int:
        return to_signed_32(self.next_ulong())

    def next_ulong_bounded(self, inner: int, outer: int | None = None) -> int:
        """Unsigned draw in ``[inner, outer)``, or ``[0, inner)`` with one arg.

        If ``outer < inner`` the range becomes ``(outer, inner]``.
        """
        if outer is None:
            inner, outer = 0, inner
        rand = self.next_ulong()
        inner &= MASK64
        outer &= MASK64
        if outer < inner:
            inner, outer = (outer + 1) & MASK64, (inner + 1) & MASK64
        bound = (outer - inner) & MASK64
        return (inner + _mul_high_approx(rand, bound)) & MASK64

    def next_long_bounded(self, inner: int, outer: int | None = None) -> int:
        """Signed draw in ``[inner, outer)``, or ``[0, inner)`` with one arg.

        If ``outer < inner`` the range becomes ``(outer, inner]``.
        """
        if outer is None:
            inner, outer = 0, inner
        rand = self.next_ulong()
        if outer < inner:
            i2 = (outer + 1) & MASK64
            o2 = (inner + 1) & MASK64
        else:
            i2 = inner & MASK64
            o2 = outer & MASK64
        bound = (o2 - i2) & MASK64
        return to_signed_64(i2 + _mul_high_approx(rand, bound))

    def next_int_bounded(self, outer: int) -> int:
        """Draw in ``[0, outer)``; negative ``outer`` gives ``(outer, 0]``."""
        outer = to_signed_32(outer)
        value = (outer * (self.next_ulong() & MASK32)) >> 32
        return value + 1 if value < 0 else value

    def next_int_range(self, inner: int, outer: int) -> int:
        """32-bit draw in ``[inner, outer)``; see ``next_long_bounded``."""
        return to_signed_32(self.next_long_bounded(inner, outer))

    def next_bool(self) -> bool:
        return bool(self.next_ulong() >> 63)

    # --- floats ---

    def next_float(self) -> float:
        """Uniform in ``[0, 1)`` with 24 bits of precision."""
        return (self.next_ulong() >> 40) * FLOAT_ADJUST

    def next_double(self) -> float:
        """Uniform in ``[0, 1)`` with 53 bits of precision."""
        return (self.next_ulong() >> 11) * DOUBLE_ADJUST

    def next_double_range(self, inner: float, outer: float) -> float:
        """Uniform in ``[inner, outer)`` (or ``(outer, inner]`` if reversed)."""
        d = inner + self.next_double() * (outer - inner)
        if d >= outer and outer > inner:
            return math.nextafter(outer, -math.inf)
        if d <= outer and outer < inner:
            return math.nextafter(outer, math.inf)
        return d

    def next_inclusive_double(self) -> float:
        """Uniform in ``[0, 1]``."""
        return self.next_ulong_bounded(0x20000000000001) * DOUBLE_ADJUST

    def next_sparse_float(self) -> float:
        return sparse_float_from_bits(self.next_ulong())

    def next_sparse_double(self) -> float:
        return sparse_double_from_bits(self.next_ulong())

    # --- sequences ---

    def next_bytes(self, length: int) -> bytes:
        """``length`` random bytes, low byte of each draw first."""
        out = bytearray()
        while len(out) < length:
            word = self.next_ulong()
            out += word.to_bytes(8, "little")[: length - len(out)]
        return bytes(out)

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Fisher-Yates shuffle in place; consumes ``len(items) - 1`` draws."""
        for i in range(len(items) - 1, 0, -1):
            j = self.next_int_range(0, i + 1)
            items[i], items[j] = items[j], items[i]

    def random_index(self, items: Sequence[T]) -> int:
        if not items:
            raise ValueError("Cannot pick an index from an empty sequence")
        return self.next_int_bounded(len(items))

    def random_element(self, items: Sequence[T]) -> T:
        return items[self.random_index(items)]

    # --- serialization ---

    def string_serialize(self, tag: str | None = None) -> str:
        """Serialize as ``TAG`W0~W1~...`` using uppercase unpadded hex."""
        words = "~".join(
            f"{self.select_state(i):X}" for i in range(self.state_count)
        )
        return f"{tag if tag is not None else self.default_tag}`{words}`"

    def string_deserialize(self, data: str) -> EnhancedRandom:
        """Load state words from ``string_serialize`` output; returns self."""
        words = parse_serialized_words(data)
        if len(words) != self.state_count:
            raise ValueError(
                f"Expected {self.state_count} state words, got {len(words)}"
            )
        for i, word in enumerate(words):
            self.set_selected_state(i, word)
        return self

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return all(
            self.select_state(i) == other.select_state(i)
            for i in range(self.state_count)
        )


def split_serialized(data: str) -> tuple[str, str]:
    """Split ``TAG`body`` into ``(tag, body)``."""
    start = data.find("`")
    end = data.rfind("`")
    if start < 0 or end <= start:
        raise ValueError(f"Malformed serialized generator: {data!r}")
    return data[:start], data[start + 1 : end]


def parse_serialized_words(data: str) -> list[int]:
    """State words of ``TAG`W0~W1~...``; each word is 1-16 hex digits."""
    _, body = split_serialized(data)
    if not body:
        return []
    words = body.split("~")
    for word in words:
        if not _HEX_WORD.fullmatch(word):
            raise ValueError(
                f"Malformed state word {word!r} in serialized generator: "
                f"{data!r}"
            )
    return [int(word, 16) for word in words]

