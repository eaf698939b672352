"""Tests for the tracerng command line."""

from __future__ import annotations

import json

import pytest

from . import serializer
from .base_test import SEED_0_SERIALIZED
from .cli import build_parser, main
from .conformance import SCENARIOS
from .trace import TraceRandom


@pytest.fixture(autouse=True)
def clean_registry():
    serializer.unregister_all()
    yield
    serializer.unregister_all()


def _lines(capsys) -> list[str]:
    return capsys.readouterr().out.splitlines()


def test_emit_hex(capsys):
    assert main(["emit", "--seed", "0", "--count", "2"]) == 0
    assert _lines(capsys) == ["0x9318D7AF4A986DA3", "0x3D2E6FE92564E8D4"]


def test_emit_accepts_hex_seed(capsys):
    main(["emit", "--seed", "0x2A", "--count", "1"])
    assert _lines(capsys) == [f"0x{TraceRandom(42).next_ulong():016X}"]


def test_emit_formats(capsys):
    main(["emit", "--seed", "5", "--count", "3", "--format", "dec"])
    rng = TraceRandom(5)
    assert _lines(capsys) == [str(rng.next_ulong()) for _ in range(3)]

    main(["emit", "--seed", "5", "--count", "3", "--format", "double"])
    rng = TraceRandom(5)
    assert _lines(capsys) == [
        repr(rng.next_sparse_double()) for _ in range(3)
    ]


def test_emit_reverse(capsys):
    main(["emit", "--seed", "0", "--count", "3", "--reverse"])
    rng = TraceRandom(0)
    assert _lines(capsys) == [
        f"0x{rng.previous_ulong():016X}" for _ in range(3)
    ]


def test_emit_without_seed(capsys):
    assert main(["emit", "--count", "4"]) == 0
    assert len(_lines(capsys)) == 4


def test_negative_count_is_rejected():
    with pytest.raises(SystemExit):
        main(["emit", "--count", "-1"])


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_state(capsys):
    assert main(["state", "--seed", "0"]) == 0
    state = json.loads(capsys.readouterr().out)
    assert state["a"] == "0xBF05996BF07B15F3"
    assert state["f"] == "0x010F5DE2EDCD1357"


def test_serialize(capsys):
    assert main(["serialize", "--seed", "0"]) == 0
    assert _lines(capsys) == [SEED_0_SERIALIZED]


def test_serialize_after_steps(capsys):
    main(["serialize", "--seed", "0", "--steps", "2"])
    rng = TraceRandom(0)
    rng.next_ulong()
    rng.next_ulong()
    assert _lines(capsys) == [rng.string_serialize()]


def test_deserialize(capsys):
    assert main(["deserialize", SEED_0_SERIALIZED, "--count", "1"]) == 0
    assert _lines(capsys) == ["0x9318D7AF4A986DA3"]


def test_deserialize_bad_input(capsys):
    assert main(["deserialize", "Nope`1~2`"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Could not deserialize" in captured.err


def test_run_params_file(tmp_path, capsys):
    path = tmp_path / "params.json"
    path.write_text(json.dumps({"seed": "0x0", "count": 2, "format": "dec"}))
    assert main(["run", str(path)]) == 0
    rng = TraceRandom(0)
    assert _lines(capsys) == [str(rng.next_ulong()) for _ in range(2)]


def test_run_with_state(tmp_path, capsys):
    path = tmp_path / "params.json"
    state = TraceRandom(9).state.to_dict()
    path.write_text(json.dumps({"seed": 1, "state": state, "count": 1}))
    main(["run", str(path)])
    assert _lines(capsys) == [f"0x{TraceRandom(9).next_ulong():016X}"]


def test_run_missing_file(tmp_path, capsys):
    assert main(["run", str(tmp_path / "missing.json")]) == 1
    assert "Could not load" in capsys.readouterr().err


def test_run_invalid_params(tmp_path, capsys):
    path = tmp_path / "params.json"
    path.write_text(json.dumps({"format": "octal"}))
    assert main(["run", str(path)]) == 1
    assert "Could not load" in capsys.readouterr().err


@pytest.mark.parametrize(
    "params",
    [
        {"seed": 1, "count": "3"},
        {"seed": 1, "reverse": "yes"},
        {"seed": [1]},
        [1, 2],
    ],
)
def test_run_wrongly_typed_params(tmp_path, capsys, params):
    path = tmp_path / "params.json"
    path.write_text(json.dumps(params))
    assert main(["run", str(path)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Could not load" in captured.err


def test_run_invalid_json(tmp_path, capsys):
    path = tmp_path / "params.json"
    path.write_text("{not json")
    assert main(["run", str(path)]) == 1


def test_check(capsys):
    assert main(["check"]) == 0
    out = capsys.readouterr().out
    assert f"{len(SCENARIOS)} passed, 0 failed" in out
