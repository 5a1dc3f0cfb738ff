"""
Single-call measurement for the five-slot decision trees.

We run exactly one `sort5` per call on a fresh copy of the input and record the
comparisons and swaps it reports, plus wall time from a monotonic
high-resolution clock. Copying happens outside the timed block.

Public API (stable):
    measure_sort_call(...) -> dict

Returned dict schema:
    {
        "strategy": str,
        "input": list,          # arrangement handed to the sort
        "output": list,         # arrangement after sorting
        "comparisons": int,
        "swaps": int,
        "elapsed_ns": int,
    }
"""

from __future__ import annotations

import time
from typing import Any, Dict, Sequence, Union

from sortfive.network import Strategy, resolve_strategy, sort5

__all__ = ["measure_sort_call"]


def measure_sort_call(
    *,
    strategy: Union[Strategy, str],
    a: Sequence[Any],
) -> Dict[str, Any]:
    """
    Sort a copy of `a` with the chosen decision tree and report what it did.

    Parameters
    ----------
    strategy : Strategy | str
        Decision tree to run.
    a : Sequence
        Five comparable values. Never mutated.

    Returns
    -------
    dict
        See module docstring for exact schema.
    """
    strat = resolve_strategy(strategy)
    original = list(a)
    work = list(a)

    t0 = time.perf_counter_ns()
    counts = sort5(work, strategy=strat)
    t1 = time.perf_counter_ns()

    return {
        "strategy": strat.value,
        "input": original,
        "output": work,
        "comparisons": counts.comparisons,
        "swaps": counts.swaps,
        "elapsed_ns": int(t1 - t0),
    }
