"""
Counting comparator/exchanger over a fixed set of slots.

Every comparison and every exchange the decision tree performs goes through a
`CountingSlots` instance, so the counts it reports are exact. A fresh instance
is created per sort; nothing here is process-global.

Public API (stable):
    CountingSlots(a: MutableSequence)
        .less_than(i, j) -> bool
        .exchange(i, j) -> None
        .counts() -> SortCounts
    SortCounts(comparisons: int, swaps: int)
"""

from __future__ import annotations

from typing import Any, MutableSequence, NamedTuple

__all__ = ["CountingSlots", "SortCounts"]


class SortCounts(NamedTuple):
    comparisons: int
    swaps: int


class CountingSlots:
    """Slot view over a mutable sequence that tallies comparisons and swaps."""

    __slots__ = ("_a", "comparisons", "swaps")

    def __init__(self, a: MutableSequence[Any]) -> None:
        self._a = a
        self.comparisons = 0
        self.swaps = 0

    def less_than(self, i: int, j: int) -> bool:
        """Return True iff the value at slot i precedes the value at slot j."""
        self.comparisons += 1
        return self._a[i] < self._a[j]

    def exchange(self, i: int, j: int) -> None:
        self.swaps += 1
        a = self._a
        a[i], a[j] = a[j], a[i]

    def counts(self) -> SortCounts:
        return SortCounts(self.comparisons, self.swaps)

    def __repr__(self) -> str:
        return (
            f"CountingSlots({list(self._a)!r}, comparisons={self.comparisons}, "
            f"swaps={self.swaps})"
        )
