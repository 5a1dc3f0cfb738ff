"""
Sort exactly five values in place using at most seven comparisons.

Two decision trees are implemented; both sort by binary insertion into a
sorted reference chain and share the same comparison bound:

- Strategy.CENTRALIZED_REFERENCE:
    Sort the pairs (p1, p2) and (p3, p4), merge their minima so that
    p1 < p3 < p4 and p1 < p2, binary-insert p5 into (p1, p3, p4), then
    binary-insert p2 into the upper three of the resulting 4-chain.

- Strategy.SWAP_MINIMIZING:
    Sort the pairs (p1, p2) and (p4, p5), build the chain at (p1, p4, p5),
    and binary-insert the central p3 so the 4-chain lands on (p1, p3, p4, p5)
    with fewer exchanges. p2 is then inserted exactly as above.

In both trees, if the element inserted into the 3-chain becomes the new
minimum, the old minimum is shifted into p3. Since p1 < p2 was established
before that shift, p3 < p2 is already known and the final comparison is
skipped. Without this elision the worst case would be eight comparisons.

Public API (stable):
    Strategy
    DEFAULT_STRATEGY
    COMPARISON_BOUND
    sort5(a: MutableSequence, *, strategy=DEFAULT_STRATEGY) -> SortCounts
    sort(a: list, *, config: dict | None = None) -> list

Conventions:
- `sort5` mutates `a` in place; `sort` never mutates its input.
- Values only need to support `<`. Ties are accepted and still produce a
  nondecreasing result, with no stability guarantee.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, MutableSequence, Optional, Union

from .counting import CountingSlots, SortCounts

__all__ = [
    "Strategy",
    "DEFAULT_STRATEGY",
    "COMPARISON_BOUND",
    "SLOT_COUNT",
    "resolve_strategy",
    "sort5",
    "sort",
]

SLOT_COUNT = 5
COMPARISON_BOUND = 7

# Slot indices
P1, P2, P3, P4, P5 = range(SLOT_COUNT)


class Strategy(str, Enum):
    CENTRALIZED_REFERENCE = "centralized_reference"
    SWAP_MINIMIZING = "swap_minimizing"


DEFAULT_STRATEGY = Strategy.SWAP_MINIMIZING


def resolve_strategy(strategy: Union[Strategy, str]) -> Strategy:
    """Accept a Strategy or its string value; raise ValueError otherwise."""
    if isinstance(strategy, Strategy):
        return strategy
    try:
        return Strategy(strategy)
    except ValueError as e:
        raise ValueError(
            f"Unknown strategy: {strategy!r}. Supported: {[s.value for s in Strategy]}"
        ) from e


def _sort5_centralized_reference(s: CountingSlots) -> None:
    if s.less_than(P2, P1):
        s.exchange(P1, P2)
    if s.less_than(P4, P3):
        s.exchange(P3, P4)

    # Reference chain p1 < p3 < p4; p1 < p2, p2 unplaced against p3/p4
    if s.less_than(P3, P1):
        s.exchange(P1, P3)
        s.exchange(P2, P4)

    # Binary-insert p5 into (p1, p3, p4)
    p1_moved = False
    if s.less_than(P5, P3):
        p1_moved = s.less_than(P5, P1)
        if p1_moved:
            s.exchange(P1, P5)
        s.exchange(P3, P5)
        s.exchange(P4, P5)
    elif s.less_than(P5, P4):
        s.exchange(P4, P5)

    _insert_p2(s, p1_moved)


def _sort5_swap_minimizing(s: CountingSlots) -> None:
    if s.less_than(P2, P1):
        s.exchange(P1, P2)
    if s.less_than(P5, P4):
        s.exchange(P4, P5)

    # Reference chain p1 < p4 < p5; p1 < p2, p3 still loose
    if s.less_than(P4, P1):
        s.exchange(P1, P4)
        s.exchange(P2, P5)

    # Binary-insert p3, leaving the 4-chain at (p1, p3, p4, p5)
    # Ties with p4 take the branch that leaves p3 in place
    p1_moved = False
    if s.less_than(P4, P3):
        s.exchange(P3, P4)
        if s.less_than(P5, P4):
            s.exchange(P4, P5)
    else:
        p1_moved = s.less_than(P3, P1)
        if p1_moved:
            s.exchange(P1, P3)

    _insert_p2(s, p1_moved)


def _insert_p2(s: CountingSlots, p1_moved: bool) -> None:
    # Chain p1 < p3 < p4 < p5 and p1 < p2: place p2 among (p3, p4, p5)
    if s.less_than(P4, P2):
        s.exchange(P2, P4)
        s.exchange(P2, P3)
        if s.less_than(P5, P4):
            s.exchange(P4, P5)
    elif p1_moved or s.less_than(P3, P2):
        s.exchange(P2, P3)


_TREES = {
    Strategy.CENTRALIZED_REFERENCE: _sort5_centralized_reference,
    Strategy.SWAP_MINIMIZING: _sort5_swap_minimizing,
}


def sort5(
    a: MutableSequence[Any], *, strategy: Union[Strategy, str] = DEFAULT_STRATEGY
) -> SortCounts:
    """
    Sort the five slots of `a` in place.

    Parameters
    ----------
    a : MutableSequence
        Exactly five mutually comparable values.
    strategy : Strategy | str
        Which decision tree to run.

    Returns
    -------
    SortCounts
        (comparisons, swaps) performed by this call. Comparisons never exceed
        COMPARISON_BOUND.

    Raises
    ------
    ValueError
        If `a` does not hold exactly five values or the strategy is unknown.
    """
    if len(a) != SLOT_COUNT:
        raise ValueError(f"sort5 needs exactly {SLOT_COUNT} values; got {len(a)}")
    tree = _TREES[resolve_strategy(strategy)]
    slots = CountingSlots(a)
    tree(slots)
    return slots.counts()


def sort(a: List[Any], *, config: Optional[Dict[str, Any]] = None) -> List[Any]:
    """
    Return a sorted copy of the five values in `a`.

    `config["strategy"]` selects the decision tree (default: DEFAULT_STRATEGY).
    """
    if config is None:
        config = {}
    out = list(a)
    sort5(out, strategy=config.get("strategy", DEFAULT_STRATEGY))
    return out
