"""
Validation utilities public API.

Re-exports:
    - Oracle:
        FailureKind, Failure, Outcome
        ComparisonHistogram, HISTOGRAM_BINS
        check_bound, validate
        oracle_sort

    - Property checks:
        is_nondecreasing
        first_nondecreasing_violation_index
        is_permutation
        unmatched_values
"""

from .oracle import (
    HISTOGRAM_BINS,
    ComparisonHistogram,
    Failure,
    FailureKind,
    Outcome,
    check_bound,
    oracle_sort,
    validate,
)
from .properties import (
    first_nondecreasing_violation_index,
    is_nondecreasing,
    is_permutation,
    unmatched_values,
)

__all__ = [
    "HISTOGRAM_BINS",
    "ComparisonHistogram",
    "Failure",
    "FailureKind",
    "Outcome",
    "check_bound",
    "oracle_sort",
    "validate",
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "unmatched_values",
]
