"""Command line front end for the Trace generator.

Usage:
    tracerng emit --seed 42 --count 5                 # hex words
    tracerng emit --seed 42 --count 5 --format double # sparse doubles
    tracerng emit --seed 42 --count 5 --reverse       # walk backwards
    tracerng state --seed 42                          # state as JSON
    tracerng serialize --seed 42 --steps 3            # TrcR`...` string
    tracerng deserialize 'TrcR`...`' --count 3        # draws from a string
    tracerng run params.json                          # RunParams file
    tracerng check                                    # conformance vectors
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from . import serializer
from .conformance import run_all
from .reversing import ReversingWrapper
from .types import OUTPUT_FORMATS, RunParams, parse_word


def _non_negative(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(
            f"must be non-negative, got {value}"
        )
    return value


def _format_draw(rng, fmt: str) -> str:
    if fmt == "double":
        return repr(rng.next_sparse_double())
    if fmt == "float":
        return repr(rng.next_sparse_float())
    value = rng.next_ulong()
    if fmt == "dec":
        return str(value)
    return f"0x{value:016X}"


def _emit(params: RunParams) -> None:
    rng = params.make_rng()
    if params.reverse:
        rng = ReversingWrapper(rng)
    for _ in range(params.count):
        print(_format_draw(rng, params.format))


def cmd_emit(args) -> int:
    _emit(
        RunParams(
            seed=args.seed,
            count=args.count,
            format=args.format,
            reverse=args.reverse,
        )
    )
    return 0


def cmd_state(args) -> int:
    rng = RunParams(seed=args.seed).make_rng()
    print(json.dumps(rng.state.to_dict(), indent=2))
    return 0


def cmd_serialize(args) -> int:
    serializer.register_defaults()
    rng = RunParams(seed=args.seed).make_rng()
    for _ in range(args.steps):
        rng.next_ulong()
    print(serializer.serialize(rng))
    return 0


def cmd_deserialize(args) -> int:
    serializer.register_defaults()
    try:
        rng = serializer.deserialize(args.data)
    except ValueError as e:
        print(f"Could not deserialize: {e}", file=sys.stderr)
        return 1
    for _ in range(args.count):
        print(_format_draw(rng, args.format))
    return 0


def cmd_run(args) -> int:
    try:
        with open(args.params) as f:
            params = RunParams.from_dict(json.load(f))
    except (OSError, json.JSONDecodeError, ValueError) as e:
        print(f"Could not load {args.params}: {e}", file=sys.stderr)
        return 1
    _emit(params)
    return 0


def cmd_check(args) -> int:
    passed, failed = run_all(verbose=args.verbose)
    print(f"\n{passed} passed, {failed} failed")
    return 0 if failed == 0 else 1


def _add_format(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="hex",
        help="Output format (default: hex)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tracerng",
        description="Draw from and inspect the Trace generator",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("emit", help="Print successive draws")
    p.add_argument("--seed", type=parse_word, default=None)
    p.add_argument("--count", type=_non_negative, default=10)
    _add_format(p)
    p.add_argument(
        "--reverse",
        action="store_true",
        help="Draw with previous_ulong instead of next_ulong",
    )
    p.set_defaults(func=cmd_emit)

    p = sub.add_parser("state", help="Print the seeded state as JSON")
    p.add_argument("--seed", type=parse_word, required=True)
    p.set_defaults(func=cmd_state)

    p = sub.add_parser("serialize", help="Print a serialized generator")
    p.add_argument("--seed", type=parse_word, required=True)
    p.add_argument(
        "--steps",
        type=_non_negative,
        default=0,
        help="Advance this many draws before serializing",
    )
    p.set_defaults(func=cmd_serialize)

    p = sub.add_parser(
        "deserialize", help="Draw from a serialized generator"
    )
    p.add_argument("data", type=str)
    p.add_argument("--count", type=_non_negative, default=10)
    _add_format(p)
    p.set_defaults(func=cmd_deserialize)

    p = sub.add_parser("run", help="Draw using a JSON RunParams file")
    p.add_argument("params", type=Path)
    p.set_defaults(func=cmd_run)

    p = sub.add_parser("check", help="Run the conformance vectors")
    p.set_defaults(func=cmd_check)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
