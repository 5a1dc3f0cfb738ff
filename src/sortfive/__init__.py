"""
sortfive: sort five values in at most seven comparisons, and prove it.

Core entry points:
    from sortfive import sort5, enumerate_and_validate, Strategy
"""

from sortfive.bench.harness import AggregateStats, enumerate_and_validate, sample_and_validate
from sortfive.network import COMPARISON_BOUND, DEFAULT_STRATEGY, SortCounts, Strategy, sort, sort5

__version__ = "0.1.0"

__all__ = [
    "AggregateStats",
    "enumerate_and_validate",
    "sample_and_validate",
    "COMPARISON_BOUND",
    "DEFAULT_STRATEGY",
    "SortCounts",
    "Strategy",
    "sort",
    "sort5",
]
