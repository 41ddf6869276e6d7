"""Ratio series and pair snapshot computation."""

from .loader import load_benchmark_pairs, load_pair_quotes, load_ratio
from .pairs import pair_quote
from .reconcile import common_start, ratio_bar, reconcile_ratio

__all__ = [
    "common_start",
    "load_benchmark_pairs",
    "load_pair_quotes",
    "load_ratio",
    "pair_quote",
    "ratio_bar",
    "reconcile_ratio",
]
