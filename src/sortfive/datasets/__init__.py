"""
Datasets package public API.

Re-export the input generators so callers can write:
    from sortfive.datasets import iter_permutations, make_input
"""

from .generators import SUPPORTED_DISTS, make_input
from .permutations import MAX_PERMUTE, generate_permutations, iter_permutations

__all__ = [
    "SUPPORTED_DISTS",
    "make_input",
    "MAX_PERMUTE",
    "generate_permutations",
    "iter_permutations",
]
