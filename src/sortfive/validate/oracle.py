"""
Validation oracle for the five-slot decision trees.

Given the original arrangement, the sorted result and the comparison count of
one sort, `validate` reports every defect it finds rather than stopping at the
first, and on success records the comparison count in a histogram.

Failure kinds:
- BOUND_EXCEEDED:      more comparisons than the bound (7 for five values)
- ORDERING_VIOLATION:  the result is not nondecreasing
- CONTENT_MISMATCH:    the result is not a permutation of the original

Any failure means the decision tree is wrong; inputs are never "bad". The
oracle does no I/O: reporting is left to the runner.

Public API (stable):
    FailureKind, Failure, Outcome, ComparisonHistogram
    validate(original, sorted_result, comparisons_used, *, bound=7, histogram=None) -> Outcome
    check_bound(bound) -> None
    oracle_sort(a) -> list
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sortfive.network import COMPARISON_BOUND

from .properties import (
    first_nondecreasing_violation_index,
    is_permutation,
    unmatched_values,
)

HISTOGRAM_BINS = 16

__all__ = [
    "HISTOGRAM_BINS",
    "FailureKind",
    "Failure",
    "Outcome",
    "ComparisonHistogram",
    "check_bound",
    "validate",
    "oracle_sort",
]


class FailureKind(str, Enum):
    BOUND_EXCEEDED = "bound_exceeded"
    ORDERING_VIOLATION = "ordering_violation"
    CONTENT_MISMATCH = "content_mismatch"


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    original: Tuple[Any, ...]
    result: Tuple[Any, ...]
    comparisons: int
    detail: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "original": list(self.original),
            "result": list(self.result),
            "comparisons": self.comparisons,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class Outcome:
    comparisons: int
    failures: Tuple[Failure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def kinds(self) -> List[FailureKind]:
        return [f.kind for f in self.failures]


@dataclass
class ComparisonHistogram:
    """Frequency of comparison counts 0..HISTOGRAM_BINS-1 across validated sorts."""

    counts: List[int] = field(default_factory=lambda: [0] * HISTOGRAM_BINS)

    def record(self, comparisons: int) -> None:
        if not 0 <= comparisons < HISTOGRAM_BINS:
            raise ValueError(
                f"comparison count {comparisons} outside histogram range [0, {HISTOGRAM_BINS})"
            )
        self.counts[comparisons] += 1

    def merge(self, other: "ComparisonHistogram") -> None:
        for i, c in enumerate(other.counts):
            self.counts[i] += c

    @property
    def total(self) -> int:
        return sum(self.counts)

    def nonzero(self) -> Dict[int, int]:
        """Return {comparison_count: frequency} for the populated bins only."""
        return {i: c for i, c in enumerate(self.counts) if c}


def check_bound(bound: int) -> None:
    """Reject bounds whose passing counts the histogram could not record."""
    if not isinstance(bound, int) or not 0 <= bound < HISTOGRAM_BINS:
        raise ValueError(
            f"bound must be an int in [0, {HISTOGRAM_BINS}); got {bound!r}"
        )


def validate(
    original: Sequence[Any],
    sorted_result: Sequence[Any],
    comparisons_used: int,
    *,
    bound: int = COMPARISON_BOUND,
    histogram: Optional[ComparisonHistogram] = None,
) -> Outcome:
    """
    Check one sort; record its comparison count in `histogram` if it passed.

    Parameters
    ----------
    original : Sequence
        The arrangement handed to the sort (before sorting).
    sorted_result : Sequence
        What the sort produced.
    comparisons_used : int
        Comparisons the sort reported.
    bound : int
        Maximum comparisons allowed.
    histogram : ComparisonHistogram | None
        Updated only when every check passes.

    Returns
    -------
    Outcome
        All failures found, in check order (bound, ordering, content).

    Raises
    ------
    ValueError
        If `bound` falls outside the histogram range.
    """
    check_bound(bound)
    orig = tuple(original)
    out = tuple(sorted_result)
    failures: List[Failure] = []

    if comparisons_used > bound:
        failures.append(
            Failure(
                FailureKind.BOUND_EXCEEDED,
                orig,
                out,
                comparisons_used,
                f"used {comparisons_used} comparisons; bound is {bound}",
            )
        )

    i = first_nondecreasing_violation_index(out)
    if i is not None:
        failures.append(
            Failure(
                FailureKind.ORDERING_VIOLATION,
                orig,
                out,
                comparisons_used,
                f"not nondecreasing at i={i}: {out[i]!r} > {out[i + 1]!r}",
            )
        )

    if not is_permutation(orig, out):
        failures.append(
            Failure(
                FailureKind.CONTENT_MISMATCH,
                orig,
                out,
                comparisons_used,
                _content_detail(orig, out),
            )
        )

    if not failures and histogram is not None:
        histogram.record(comparisons_used)

    return Outcome(comparisons=comparisons_used, failures=tuple(failures))


def oracle_sort(a: Sequence[Any]) -> List[Any]:
    """Ground truth: built-in `sorted`, which never mutates `a`."""
    return sorted(a)


def _content_detail(orig: Tuple[Any, ...], out: Tuple[Any, ...]) -> str:
    only_orig, only_out = unmatched_values(orig, out)
    return f"only in original: {only_orig!r}; only in result: {only_out!r}"
