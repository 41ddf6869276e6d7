"""Pair-level loading: parse, fetch legs concurrently, reconcile."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from pairratio.data.base import HistoryProvider
from pairratio.data.ranges import range_for_interval
from pairratio.domain.models import (
    Benchmark,
    PairQuote,
    PairSymbol,
    Quote,
    Series,
    normalize_interval,
)

from .pairs import benchmark_pair_quote, pair_quote, unique_leg_symbols
from .reconcile import reconcile_ratio


async def load_ratio(
    pair_identifier: str | PairSymbol,
    interval: str,
    provider: HistoryProvider,
) -> Series:
    """Fetch both legs of ``pair_identifier`` and return their ratio series.

    The pair is validated before any fetch. Leg failures propagate unchanged.
    """
    pair = (
        pair_identifier
        if isinstance(pair_identifier, PairSymbol)
        else PairSymbol.parse(pair_identifier)
    )
    interval = normalize_interval(interval)
    range_ = range_for_interval(interval)
    numerator, denominator = await asyncio.gather(
        provider.fetch_series(pair.numerator, range_, interval),
        provider.fetch_series(pair.denominator, range_, interval),
    )
    return reconcile_ratio(numerator, denominator)


async def load_pair_quotes(
    pairs: Sequence[PairSymbol],
    provider: HistoryProvider,
) -> list[PairQuote]:
    """Quote every unique leg once and build a snapshot per pair."""
    symbols = unique_leg_symbols(list(pairs))
    quotes = await asyncio.gather(*(provider.fetch_quote(symbol) for symbol in symbols))
    by_symbol = dict(zip(symbols, quotes))
    return [
        pair_quote(pair, by_symbol[pair.numerator], by_symbol[pair.denominator])
        for pair in pairs
    ]


async def load_benchmark_pairs(
    symbol: str,
    benchmarks: Sequence[Benchmark],
    provider: HistoryProvider,
) -> tuple[Quote, list[PairQuote]]:
    """Quote ``symbol`` and snapshot its ratio against each benchmark."""
    stock, *benchmark_quotes = await asyncio.gather(
        provider.fetch_quote(symbol),
        *(provider.fetch_quote(benchmark.symbol) for benchmark in benchmarks),
    )
    return stock, [
        benchmark_pair_quote(stock, benchmark, benchmark_quote)
        for benchmark, benchmark_quote in zip(benchmarks, benchmark_quotes)
    ]
