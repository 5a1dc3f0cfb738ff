"""
Validation harness and experiment runner.

Re-export the harness so callers can write:
    from sortfive.bench import enumerate_and_validate
"""

from .harness import AggregateStats, enumerate_and_validate, sample_and_validate
from .measure import measure_sort_call

__all__ = [
    "AggregateStats",
    "enumerate_and_validate",
    "sample_and_validate",
    "measure_sort_call",
]
