"""
Property helpers for checking a sorted result.

Used by the oracle to classify failures and by the tests directly.

Public API (stable):
    is_nondecreasing(xs: Sequence) -> bool
    first_nondecreasing_violation_index(xs: Sequence) -> int | None
    is_permutation(a: Sequence, b: Sequence) -> bool
    unmatched_values(a: Sequence, b: Sequence) -> tuple[list, list]

Notes
-----
- Only `<` is used for ordering checks, matching what the decision trees
  require of their values.
- Multiset checks count hashable values and fall back to pairing values by
  `==` when any value is unhashable (e.g. lists).
"""

from __future__ import annotations

from collections import Counter
from typing import Any, List, Optional, Sequence, Tuple

__all__ = [
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "unmatched_values",
]


def is_nondecreasing(xs: Sequence[Any]) -> bool:
    """Return True iff no xs[i+1] < xs[i]."""
    return first_nondecreasing_violation_index(xs) is None


def first_nondecreasing_violation_index(xs: Sequence[Any]) -> Optional[int]:
    """
    Return the first index i where xs[i+1] < xs[i], or None if nondecreasing.

    Useful for precise error messages:
        i = first_nondecreasing_violation_index(out)
        assert i is None, f"not nondecreasing at i={i}: {out[i]} > {out[i+1]}"
    """
    for i in range(len(xs) - 1):
        if xs[i + 1] < xs[i]:
            return i
    return None


def is_permutation(a: Sequence[Any], b: Sequence[Any]) -> bool:
    """Return True iff `a` and `b` contain exactly the same multiset of values."""
    if len(a) != len(b):
        return False
    try:
        return Counter(a) == Counter(b)
    except TypeError:
        only_a, only_b = _pair_by_equality(a, b)
        return not only_a and not only_b


def unmatched_values(a: Sequence[Any], b: Sequence[Any]) -> Tuple[List[Any], List[Any]]:
    """
    Return (values only in `a`, values only in `b`), counting multiplicity.

    Two empty lists mean `a` and `b` hold the same multiset.
    """
    try:
        diff = Counter(a)
        diff.subtract(Counter(b))
    except TypeError:
        return _pair_by_equality(a, b)
    only_a = [k for k, d in diff.items() for _ in range(d)]
    only_b = [k for k, d in diff.items() for _ in range(-d)]
    return only_a, only_b


def _pair_by_equality(a: Sequence[Any], b: Sequence[Any]) -> Tuple[List[Any], List[Any]]:
    remaining = list(b)
    only_a: List[Any] = []
    for x in a:
        for i, y in enumerate(remaining):
            if x == y:
                del remaining[i]
                break
        else:
            only_a.append(x)
    return only_a, remaining
