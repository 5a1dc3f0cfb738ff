"""
Sampled five-element inputs for spot-checking the decision trees.

The exhaustive run covers every ordering of five distinct values; these
generators add randomized inputs, including ones with repeated values, which
the exhaustive run never produces.

Currently implemented:
- dist == "random":
    Five integers drawn uniformly from an inclusive range.

- dist == "few_uniques":
    Choose up to k distinct integer values (uniform over an inclusive range),
    then fill the five slots by sampling indices in [0, k) uniformly.

- dist == "sorted":
    Deterministic [0, 1, 2, 3, 4].

- dist == "reversed":
    Deterministic [4, 3, 2, 1, 0].

Public API (stable):
    make_input(spec: dict, rng: numpy.random.Generator) -> list[int]

Conventions:
- Ranges in params["range"] are **inclusive** on both ends.
- "sorted" and "reversed" ignore params and RNG.
- Returns a Python `list[int]` (the decision trees stay NumPy-agnostic).
- The caller supplies the RNG (for reproducibility across runs).
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np

from sortfive.network import SLOT_COUNT

SUPPORTED_DISTS = {
    "random",
    "few_uniques",
    "sorted",
    "reversed",
}
__all__ = ["SUPPORTED_DISTS", "make_input"]


def make_input(spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate one five-element integer input according to `spec`.

    Parameters
    ----------
    spec : dict
        Distribution specification.

        Random:
            {
                "dist": "random",
                "params": { "range": [min_int, max_int] }  # inclusive
            }

        Few-uniques:
            {
                "dist": "few_uniques",
                "params": {
                    "k": 2,                                # desired #unique values (>=1)
                    "range": [min_int, max_int]            # optional; inclusive; default [0, 9]
                }
            }

        Sorted / Reversed:
            { "dist": "sorted" }  /  { "dist": "reversed" }

    rng : numpy.random.Generator
        Random number generator owned by the caller (seeded upstream).

    Returns
    -------
    list[int]
        A list of five integers consistent with `spec`.

    Raises
    ------
    ValueError
        If the spec is invalid or the distribution is unsupported.
    """
    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist", None)
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )

    params = spec.get("params", None) or {}

    if dist == "random":
        lo, hi = _parse_range(params, required=True, default=(0, 0))
        # Generator.integers is half-open; +1 makes the upper bound inclusive.
        arr = rng.integers(lo, hi + 1, size=SLOT_COUNT, dtype=np.int64)
        return arr.tolist()

    if dist == "few_uniques":
        k = _parse_k(params)
        lo, hi = _parse_range(params, required=False, default=(0, 9))
        actual_k = int(min(k, SLOT_COUNT, hi - lo + 1))
        # Draw without replacement through the caller's RNG to keep runs reproducible
        values = rng.choice(np.arange(lo, hi + 1), size=actual_k, replace=False)
        idxs = rng.integers(0, actual_k, size=SLOT_COUNT)
        return [int(values[int(t)]) for t in idxs]

    if dist == "sorted":
        return list(range(SLOT_COUNT))

    if dist == "reversed":
        return list(range(SLOT_COUNT - 1, -1, -1))

    raise ValueError(f"Unhandled dataset dist: {dist!r}")


# ------------------------- helpers ------------------------- #


def _parse_range(
    params: Dict[str, Any], *, required: bool, default: Tuple[int, int]
) -> Tuple[int, int]:
    """
    Parse params["range"] == [min_int, max_int] (both inclusive).

    Returns `default` when absent and not required.
    """
    if "range" not in params:
        if required:
            raise ValueError("params.range must be provided as [min, max] (inclusive)")
        return default
    spec = params["range"]
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError("params.range must be a 2-element list/tuple [min, max]")
    lo_raw, hi_raw = spec
    if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
        raise ValueError("params.range values must be integers")
    lo, hi = int(lo_raw), int(hi_raw)
    if lo > hi:
        raise ValueError(f"params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _parse_k(params: Dict[str, Any]) -> int:
    if "k" not in params:
        raise ValueError("few_uniques.params.k must be provided (int >= 1)")
    k = params["k"]
    if not isinstance(k, int) or k < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    return k


def _is_int_like(x: Any) -> bool:
    # Accept Python ints and NumPy integer types
    return isinstance(x, (int, np.integer))
