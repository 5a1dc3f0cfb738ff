"""
Tests for sampled five-element input generation.
"""

from __future__ import annotations

import pathlib
import sys

import numpy as np
import pytest

# Ensure `src/` is importable when running `pytest` from the repo root
_REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from sortfive.datasets import SUPPORTED_DISTS, make_input


def test_random_respects_inclusive_range() -> None:
    rng = np.random.default_rng(0)
    for _ in range(50):
        a = make_input({"dist": "random", "params": {"range": [-3, 3]}}, rng)
        assert len(a) == 5
        assert all(isinstance(x, int) for x in a)
        assert all(-3 <= x <= 3 for x in a)


def test_random_is_reproducible_for_a_seed() -> None:
    spec = {"dist": "random", "params": {"range": [0, 1000]}}
    a = make_input(spec, np.random.default_rng(42))
    b = make_input(spec, np.random.default_rng(42))
    assert a == b


def test_few_uniques_limits_distinct_values() -> None:
    rng = np.random.default_rng(1)
    for _ in range(50):
        a = make_input({"dist": "few_uniques", "params": {"k": 2, "range": [10, 20]}}, rng)
        assert len(a) == 5
        assert len(set(a)) <= 2
        assert all(10 <= x <= 20 for x in a)


def test_few_uniques_k_capped_by_range() -> None:
    a = make_input({"dist": "few_uniques", "params": {"k": 5, "range": [7, 7]}}, np.random.default_rng(0))
    assert a == [7, 7, 7, 7, 7]


def test_deterministic_dists() -> None:
    rng = np.random.default_rng(0)
    assert make_input({"dist": "sorted"}, rng) == [0, 1, 2, 3, 4]
    assert make_input({"dist": "reversed", "params": None}, rng) == [4, 3, 2, 1, 0]


@pytest.mark.parametrize(
    "spec",
    [
        {"dist": "gaussian"},
        {},
        {"dist": "random"},
        {"dist": "random", "params": {"range": [5, 1]}},
        {"dist": "random", "params": {"range": [0, 1.5]}},
        {"dist": "few_uniques", "params": {}},
        {"dist": "few_uniques", "params": {"k": 0}},
    ],
)
def test_invalid_specs_rejected(spec) -> None:
    with pytest.raises(ValueError):
        make_input(spec, np.random.default_rng(0))


def test_spec_must_be_a_dict() -> None:
    with pytest.raises(ValueError, match="must be a dict"):
        make_input(["random"], np.random.default_rng(0))  # type: ignore[arg-type]


def test_supported_dists() -> None:
    assert SUPPORTED_DISTS == {"random", "few_uniques", "sorted", "reversed"}
