"""
Exhaustive and sampled validation of the five-slot decision trees.

`enumerate_and_validate` walks every arrangement of the base values, sorts a
copy of each with the chosen strategy, runs the oracle on it and folds the
result into an `AggregateStats`. A failing arrangement is recorded and the
walk continues, so one run reports every failing case.

Public API (stable):
    AggregateStats
    enumerate_and_validate(base_values, *, strategy=..., bound=7, on_sort=None) -> AggregateStats
    sample_and_validate(spec, rng, count, *, strategy=..., bound=7, on_sort=None) -> AggregateStats

`on_sort(record, outcome)` is called after every sort with the
`measure_sort_call` record and the oracle `Outcome`; the runner uses it to
stream per-sort lines to disk.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

import numpy as np

from sortfive.bench.measure import measure_sort_call
from sortfive.datasets import iter_permutations, make_input
from sortfive.network import (
    COMPARISON_BOUND,
    DEFAULT_STRATEGY,
    SLOT_COUNT,
    Strategy,
    resolve_strategy,
)
from sortfive.validate import ComparisonHistogram, Failure, Outcome, check_bound, validate

OnSort = Callable[[Dict[str, Any], Outcome], Any]

__all__ = ["AggregateStats", "enumerate_and_validate", "sample_and_validate"]


@dataclass
class AggregateStats:
    strategy: str
    sorts: int = 0
    comparisons: int = 0
    swaps: int = 0
    failures: List[Failure] = field(default_factory=list)
    histogram: ComparisonHistogram = field(default_factory=ComparisonHistogram)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def avg_comparisons(self) -> float:
        return self.comparisons / self.sorts if self.sorts else 0.0

    @property
    def avg_swaps(self) -> float:
        return self.swaps / self.sorts if self.sorts else 0.0

    def add(self, record: Dict[str, Any], outcome: Outcome) -> None:
        self.sorts += 1
        self.comparisons += int(record["comparisons"])
        self.swaps += int(record["swaps"])
        self.failures.extend(outcome.failures)

    def merge(self, other: "AggregateStats") -> None:
        """Fold another run of the same strategy into this one."""
        if other.strategy != self.strategy:
            raise ValueError(
                f"cannot merge stats for {other.strategy!r} into {self.strategy!r}"
            )
        self.sorts += other.sorts
        self.comparisons += other.comparisons
        self.swaps += other.swaps
        self.failures.extend(other.failures)
        self.histogram.merge(other.histogram)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "strategy": self.strategy,
            "sorts": self.sorts,
            "comparisons": self.comparisons,
            "swaps": self.swaps,
            "avg_comparisons": self.avg_comparisons,
            "avg_swaps": self.avg_swaps,
            "failures": len(self.failures),
            "histogram": self.histogram.nonzero(),
        }


def enumerate_and_validate(
    base_values: Sequence[Any],
    *,
    strategy: Union[Strategy, str] = DEFAULT_STRATEGY,
    bound: int = COMPARISON_BOUND,
    on_sort: Optional[OnSort] = None,
) -> AggregateStats:
    """
    Sort and validate every arrangement of `base_values` (120 for five values).

    Raises
    ------
    ValueError
        If `base_values` does not hold exactly five values, the strategy is
        unknown, or `bound` falls outside the histogram range.
    """
    _validate_base(base_values)
    check_bound(bound)
    return _run(iter_permutations(base_values), resolve_strategy(strategy), bound, on_sort)


def sample_and_validate(
    spec: Dict[str, Any],
    rng: np.random.Generator,
    count: int,
    *,
    strategy: Union[Strategy, str] = DEFAULT_STRATEGY,
    bound: int = COMPARISON_BOUND,
    on_sort: Optional[OnSort] = None,
) -> AggregateStats:
    """Sort and validate `count` inputs drawn with `make_input(spec, rng)`."""
    if not isinstance(count, int) or count < 0:
        raise ValueError(f"count must be a nonnegative int; got {count!r}")
    check_bound(bound)
    inputs = (make_input(spec, rng) for _ in range(count))
    return _run(inputs, resolve_strategy(strategy), bound, on_sort)


# ------------------------- helpers ------------------------- #


def _validate_base(base_values: Sequence[Any]) -> None:
    if len(base_values) != SLOT_COUNT:
        raise ValueError(
            f"base_values must hold exactly {SLOT_COUNT} values; got {len(base_values)}"
        )


def _run(
    inputs: Iterable[Sequence[Any]],
    strategy: Strategy,
    bound: int,
    on_sort: Optional[OnSort],
) -> AggregateStats:
    stats = AggregateStats(strategy=strategy.value)
    for arrangement in inputs:
        record = measure_sort_call(strategy=strategy, a=arrangement)
        outcome = validate(
            record["input"],
            record["output"],
            record["comparisons"],
            bound=bound,
            histogram=stats.histogram,
        )
        stats.add(record, outcome)
        if on_sort is not None:
            on_sort(record, outcome)
    return stats
