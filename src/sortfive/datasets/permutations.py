"""
Exhaustive permutation generation by recursive exchange-and-undo.

Starting at `pos`, each element at or after `pos` is exchanged into `pos`,
the tail is permuted recursively, and the exchange is undone before the next
candidate is tried. Every one of the N! arrangements is produced exactly once,
depth-first, in a deterministic order that is close to, but not exactly,
lexicographic.

Public API (stable):
    MAX_PERMUTE
    generate_permutations(items, emit, pos=0) -> None
    iter_permutations(items) -> Iterator[tuple]

Conventions:
- `generate_permutations` works on the caller's sequence and hands that same
  sequence to `emit`; callers that keep an arrangement must copy it. When it
  returns, `items` is back in its original arrangement.
- `iter_permutations` never touches its input and yields immutable tuples.
- Inputs of MAX_PERMUTE or more items are rejected to bound recursion depth.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, MutableSequence, Tuple

MAX_PERMUTE = 20

__all__ = ["MAX_PERMUTE", "generate_permutations", "iter_permutations"]


def generate_permutations(
    items: MutableSequence[Any],
    emit: Callable[[MutableSequence[Any]], Any],
    pos: int = 0,
) -> None:
    """
    Call `emit(items)` once for every arrangement of `items[pos:]`.

    Raises
    ------
    ValueError
        If `items` holds MAX_PERMUTE or more values.
    """
    _validate_len(len(items))
    _permute(items, pos, emit)


def iter_permutations(items: Iterable[Any]) -> Iterator[Tuple[Any, ...]]:
    """Lazily yield every arrangement of `items` as a tuple."""
    work = list(items)
    _validate_len(len(work))
    return _walk(work, 0)


# ------------------------- helpers ------------------------- #


def _validate_len(n: int) -> None:
    if n >= MAX_PERMUTE:
        raise ValueError(
            f"refusing to permute {n} items; must be fewer than {MAX_PERMUTE}"
        )


def _permute(a: MutableSequence[Any], pos: int, emit: Callable[..., Any]) -> None:
    n = len(a)
    if pos >= n - 1:
        emit(a)
        return
    for i in range(pos, n):
        a[pos], a[i] = a[i], a[pos]
        _permute(a, pos + 1, emit)
        a[pos], a[i] = a[i], a[pos]


def _walk(a: list, pos: int) -> Iterator[Tuple[Any, ...]]:
    n = len(a)
    if pos >= n - 1:
        yield tuple(a)
        return
    for i in range(pos, n):
        a[pos], a[i] = a[i], a[pos]
        yield from _walk(a, pos + 1)
        a[pos], a[i] = a[i], a[pos]
