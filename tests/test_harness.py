"""
End-to-end tests for the exhaustive and sampled validation harness.

What we check:
- 120 sorts per strategy, zero failures, histogram sums to 120
- Average comparisons inside [5, 7)
- Failures are collected across the whole run instead of stopping it
- Aggregates merge and serialize
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

import sortfive.bench.harness as harness
from sortfive import AggregateStats, Strategy, enumerate_and_validate, sample_and_validate
from sortfive.bench import measure_sort_call
from sortfive.validate import FailureKind


@pytest.mark.parametrize("strategy", list(Strategy))
def test_exhaustive_run_is_clean(strategy: Strategy) -> None:
    stats = enumerate_and_validate([1, 2, 3, 4, 5], strategy=strategy)
    assert stats.ok
    assert stats.sorts == 120
    assert stats.histogram.total == 120
    assert stats.histogram.nonzero() == {6: 8, 7: 112}
    assert stats.comparisons == 8 * 6 + 112 * 7
    assert 5 <= stats.avg_comparisons < 7
    assert stats.swaps > 0


def test_exhaustive_run_accepts_any_distinct_values() -> None:
    stats = enumerate_and_validate(["e", "b", "d", "a", "c"], strategy="centralized_reference")
    assert stats.ok
    assert stats.sorts == 120
    assert stats.strategy == "centralized_reference"


def test_swap_minimizing_has_lower_average_swaps() -> None:
    a = enumerate_and_validate([1, 2, 3, 4, 5], strategy=Strategy.CENTRALIZED_REFERENCE)
    b = enumerate_and_validate([1, 2, 3, 4, 5], strategy=Strategy.SWAP_MINIMIZING)
    assert b.avg_swaps < a.avg_swaps
    assert (a.swaps, b.swaps) == (600, 552)
    assert a.avg_comparisons == b.avg_comparisons


def test_exhaustive_run_accepts_unhashable_values() -> None:
    stats = enumerate_and_validate([[1], [2], [3], [4], [5]])
    assert stats.ok
    assert stats.sorts == 120
    assert stats.histogram.total == 120


def test_on_sort_sees_every_arrangement() -> None:
    seen = []
    enumerate_and_validate([1, 2, 3, 4, 5], on_sort=lambda rec, out: seen.append(tuple(rec["input"])))
    assert len(seen) == 120
    assert len(set(seen)) == 120


@pytest.mark.parametrize("base", [[1, 2, 3, 4], [1, 2, 3, 4, 5, 6]])
def test_wrong_base_size_rejected(base) -> None:
    with pytest.raises(ValueError, match="exactly 5"):
        enumerate_and_validate(base)


@pytest.mark.parametrize("bound", [16, 20, -1])
def test_bound_outside_histogram_rejected(bound: int) -> None:
    with pytest.raises(ValueError, match="bound must be"):
        enumerate_and_validate([1, 2, 3, 4, 5], bound=bound)
    with pytest.raises(ValueError, match="bound must be"):
        sample_and_validate({"dist": "sorted"}, np.random.default_rng(0), 1, bound=bound)


def test_failures_do_not_stop_the_run(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(*, strategy, a):
        return {
            "strategy": "swap_minimizing",
            "input": list(a),
            "output": list(a),
            "comparisons": 9,
            "swaps": 0,
            "elapsed_ns": 0,
        }

    monkeypatch.setattr(harness, "measure_sort_call", broken)
    stats = enumerate_and_validate([1, 2, 3, 4, 5])
    assert stats.sorts == 120
    kinds = [f.kind for f in stats.failures]
    assert kinds.count(FailureKind.BOUND_EXCEEDED) == 120
    # Only the already-sorted arrangement survives an identity "sort"
    assert kinds.count(FailureKind.ORDERING_VIOLATION) == 119
    assert stats.histogram.total == 0
    assert not stats.ok


def test_merge_and_to_dict() -> None:
    a = enumerate_and_validate([1, 2, 3, 4, 5], strategy="swap_minimizing")
    b = enumerate_and_validate([10, 20, 30, 40, 50], strategy="swap_minimizing")
    a.merge(b)
    d = a.to_dict()
    assert d["sorts"] == 240
    assert d["failures"] == 0
    assert d["histogram"] == {6: 16, 7: 224}

    with pytest.raises(ValueError, match="cannot merge"):
        a.merge(AggregateStats(strategy="centralized_reference"))


def test_empty_stats_averages_are_zero() -> None:
    s = AggregateStats(strategy="swap_minimizing")
    assert s.avg_comparisons == 0.0
    assert s.avg_swaps == 0.0


def test_measure_sort_call_reports_counts() -> None:
    a = [5, 4, 3, 2, 1]
    rec = measure_sort_call(strategy="swap_minimizing", a=a)
    assert a == [5, 4, 3, 2, 1]
    assert rec["input"] == [5, 4, 3, 2, 1]
    assert rec["output"] == [1, 2, 3, 4, 5]
    assert rec["comparisons"] == 7
    assert rec["swaps"] == 4
    assert rec["elapsed_ns"] >= 0


@pytest.mark.parametrize("strategy", list(Strategy))
def test_sampled_run_with_ties_is_clean(strategy: Strategy) -> None:
    rng = np.random.default_rng(7)
    spec = {"dist": "few_uniques", "params": {"k": 2, "range": [0, 5]}}
    stats = sample_and_validate(spec, rng, 300, strategy=strategy)
    assert stats.ok
    assert stats.sorts == 300
    assert stats.histogram.total == 300


def test_sampled_run_rejects_negative_count() -> None:
    with pytest.raises(ValueError):
        sample_and_validate({"dist": "sorted"}, np.random.default_rng(0), -1)
