"""
Decision-tree sorting network public API.

Re-export so callers can write:
    from sortfive.network import sort5, Strategy
"""

from .counting import CountingSlots, SortCounts
from .decision_tree import (
    COMPARISON_BOUND,
    DEFAULT_STRATEGY,
    SLOT_COUNT,
    Strategy,
    resolve_strategy,
    sort,
    sort5,
)

__all__ = [
    "CountingSlots",
    "SortCounts",
    "COMPARISON_BOUND",
    "DEFAULT_STRATEGY",
    "SLOT_COUNT",
    "Strategy",
    "resolve_strategy",
    "sort",
    "sort5",
]
