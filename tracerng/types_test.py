"""Tests for TraceState and RunParams."""

from __future__ import annotations

import json

import pytest

from .bits import MASK64
from .trace import TraceRandom, seed_state
from .types import RunParams, TraceState, format_word, parse_word

# --- words ---


def test_parse_word():
    assert parse_word(10) == 10
    assert parse_word("10") == 10
    assert parse_word("0xff") == 255
    assert parse_word(-1) == MASK64


def test_format_word_pads_to_16_digits():
    assert format_word(255) == "0x00000000000000FF"


# --- TraceState ---


def test_default_state_has_fixed_stream():
    state = TraceState()
    assert state.words() == (0, 0, 0, 0, 0, 0x3E94C4F905E9E465)


def test_construction_masks_words():
    state = TraceState(-1, 1 << 64, 0, 0, 0, 1)
    assert state.a == MASK64
    assert state.b == 0


def test_get_and_set_word():
    state = TraceState(1, 2, 3, 4, 5, 1)
    assert [state.get_word(i) for i in range(6)] == list(state.words())
    state.set_word(2, 99)
    assert state.c == 99
    state.set_word(7, 2)
    assert state.f == 0x74D662EF93358117


def test_copy_is_independent():
    state = seed_state(0)
    dup = state.copy()
    dup.set_word(0, 0)
    assert state.a != 0
    assert dup.f == state.f


def test_dict_round_trip():
    state = seed_state(90)
    d = state.to_dict()
    assert set(d) == {"a", "b", "c", "d", "e", "f"}
    assert all(v.startswith("0x") for v in d.values())
    assert TraceState.from_dict(d) == state
    assert TraceState.from_dict(json.loads(json.dumps(d))) == state


def test_from_dict_accepts_ints_and_defaults():
    state = TraceState.from_dict({"a": 5, "c": "0x10"})
    assert state.words()[:5] == (5, 0, 16, 0, 0)
    assert state.f == 0x3E94C4F905E9E465


# --- RunParams ---


def test_run_params_defaults():
    params = RunParams()
    assert params.count == 10
    assert params.format == "hex"
    assert params.reverse is False


def test_run_params_rejects_unknown_format():
    with pytest.raises(ValueError):
        RunParams(format="octal")


def test_run_params_rejects_negative_count():
    with pytest.raises(ValueError):
        RunParams(count=-1)


def test_run_params_dict_round_trip():
    params = RunParams(seed=7, count=3, format="double", reverse=True)
    loaded = RunParams.from_dict(json.loads(json.dumps(params.to_dict())))
    assert loaded == params


def test_run_params_state_round_trip():
    params = RunParams(state=seed_state(3), count=2)
    assert RunParams.from_dict(params.to_dict()) == params


def test_run_params_from_dict_validates():
    with pytest.raises(ValueError):
        RunParams.from_dict({"format": "nope"})


def test_make_rng_prefers_state_over_seed():
    params = RunParams(seed=1, state=seed_state(2))
    assert params.make_rng() == TraceRandom(2)


def test_make_rng_from_seed():
    assert RunParams(seed=16).make_rng() == TraceRandom(16)
    assert RunParams.from_dict({"seed": "0x10"}).make_rng() == TraceRandom(16)


def test_make_rng_does_not_share_state():
    params = RunParams(state=seed_state(4))
    params.make_rng().next_ulong()
    assert params.make_rng() == TraceRandom(4)


def test_make_rng_without_seed_is_random():
    rng = RunParams().make_rng()
    assert isinstance(rng, TraceRandom)


@pytest.mark.parametrize(
    "d",
    [
        {"count": "3"},
        {"count": 2.5},
        {"count": True},
        {"format": 1},
        {"reverse": "yes"},
        {"seed": 1.5},
        {"seed": [1]},
        {"state": [1, 2, 3]},
        {"state": {"a": 1.0}},
    ],
)
def test_run_params_from_dict_rejects_wrong_types(d):
    with pytest.raises(ValueError):
        RunParams.from_dict(d)


@pytest.mark.parametrize("d", [[1, 2], "seed", 3, None])
def test_run_params_from_dict_requires_object(d):
    with pytest.raises(ValueError):
        RunParams.from_dict(d)


def test_parse_word_rejects_non_words():
    for value in (1.0, None, True):
        with pytest.raises(ValueError):
            parse_word(value)
