"""Data types for generator state and run configuration.

Both types round-trip through plain dicts so they can live in JSON files.
State words are written as ``"0x..."`` hex strings (JSON numbers lose
precision above 2**53) and read back from either hex strings or ints.
"""

from __future__ import annotations

from dataclasses import dataclass

from .bits import MASK64, fix_gamma

WORD_NAMES = ("a", "b", "c", "d", "e", "f")


def parse_word(value: int | str) -> int:
    """Parse a state word from an int or a decimal/``0x`` hex string."""
    if isinstance(value, str):
        value = int(value, 0)
    elif not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"State words must be ints or strings, got {value!r}")
    return value & MASK64


def format_word(value: int) -> str:
    return f"0x{value:016X}"


@dataclass
class TraceState:
    """The six words of a Trace generator.

    ``a`` through ``e`` are unconstrained. ``f`` is the stream word and is
    always stored fixed by ``fix_gamma`` with a threshold of 1. Assign it
    through ``set_word(5, ...)`` or construct a new state to keep that
    invariant; ``__post_init__`` applies it on construction.
    """

    a: int = 0
    b: int = 0
    c: int = 0
    d: int = 0
    e: int = 0
    f: int = 1

    def __post_init__(self) -> None:
        self.a &= MASK64
        self.b &= MASK64
        self.c &= MASK64
        self.d &= MASK64
        self.e &= MASK64
        self.f = fix_gamma(self.f, 1)

    def get_word(self, index: int) -> int:
        """Word by position; 0..4 are ``a..e``, anything else is ``f``."""
        if index == 0:
            return self.a
        if index == 1:
            return self.b
        if index == 2:
            return self.c
        if index == 3:
            return self.d
        if index == 4:
            return self.e
        return self.f

    def set_word(self, index: int, value: int) -> None:
        """Write a word by position; ``f`` is fixed by ``fix_gamma``."""
        value &= MASK64
        if index == 0:
            self.a = value
        elif index == 1:
            self.b = value
        elif index == 2:
            self.c = value
        elif index == 3:
            self.d = value
        elif index == 4:
            self.e = value
        else:
            self.f = fix_gamma(value, 1)

    def words(self) -> tuple[int, int, int, int, int, int]:
        return (self.a, self.b, self.c, self.d, self.e, self.f)

    def copy(self) -> TraceState:
        # f already satisfies its constraint, so fix_gamma keeps it as-is.
        return TraceState(*self.words())

    @staticmethod
    def from_dict(d: dict) -> TraceState:
        return TraceState(
            *(parse_word(d.get(name, 0)) for name in WORD_NAMES[:5]),
            f=parse_word(d.get("f", 1)),
        )

    def to_dict(self) -> dict:
        return {
            name: format_word(word)
            for name, word in zip(WORD_NAMES, self.words())
        }


OUTPUT_FORMATS = ("hex", "dec", "double", "float")


@dataclass
class RunParams:
    """Configuration for one batch of draws, as used by the CLI."""

    seed: int | None = None
    state: TraceState | None = None
    count: int = 10
    format: str = "hex"
    reverse: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.count, int) or isinstance(self.count, bool):
            raise ValueError(f"count must be an integer, got {self.count!r}")
        if not isinstance(self.format, str):
            raise ValueError(f"format must be a string, got {self.format!r}")
        if not isinstance(self.reverse, bool):
            raise ValueError(
                f"reverse must be true or false, got {self.reverse!r}"
            )
        if self.format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format {self.format!r}; "
                f"expected one of {', '.join(OUTPUT_FORMATS)}"
            )
        if self.count < 0:
            raise ValueError(f"count must be non-negative, got {self.count}")

    @staticmethod
    def from_dict(d: dict) -> RunParams:
        if not isinstance(d, dict):
            raise ValueError(
                f"Run parameters must be a JSON object, got {type(d).__name__}"
            )
        seed = d.get("seed")
        st = d.get("state")
        if st is not None and not isinstance(st, dict):
            raise ValueError(
                f"state must be a JSON object, got {type(st).__name__}"
            )
        return RunParams(
            seed=(parse_word(seed) if seed is not None else None),
            state=(TraceState.from_dict(st) if st else None),
            count=d.get("count", 10),
            format=d.get("format", "hex"),
            reverse=d.get("reverse", False),
        )

    def to_dict(self) -> dict:
        d: dict = {
            "count": self.count,
            "format": self.format,
            "reverse": self.reverse,
        }
        if self.seed is not None:
            d["seed"] = format_word(self.seed)
        if self.state is not None:
            d["state"] = self.state.to_dict()
        return d

    def make_rng(self):
        """Build the generator this run draws from.

        An explicit ``state`` wins over ``seed``; with neither, the generator
        is randomly seeded.
        """
        from .trace import TraceRandom

        if self.state is not None:
            return TraceRandom.from_state(self.state)
        if self.seed is not None:
            return TraceRandom(self.seed)
        return TraceRandom()
