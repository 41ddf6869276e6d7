"""Point-in-time pair ratios from quotes."""

from __future__ import annotations

from pairratio.domain.models import Benchmark, PairQuote, PairSymbol, Quote


def pair_quote(
    pair: PairSymbol,
    numerator: Quote,
    denominator: Quote,
    display_name: str | None = None,
) -> PairQuote:
    """Combine two quotes; a zero denominator price yields a ratio of 0."""
    ratio = numerator.price / denominator.price if denominator.price != 0 else 0.0
    return PairQuote(
        symbol=str(pair),
        display_name=display_name or str(pair),
        ratio=ratio,
        numerator_price=numerator.price,
        denominator_price=denominator.price,
    )


def benchmark_pair_quote(stock: Quote, benchmark: Benchmark, benchmark_quote: Quote) -> PairQuote:
    """Ratio of a stock against one benchmark, named after both instruments."""
    return pair_quote(
        PairSymbol(numerator=stock.symbol, denominator=benchmark.symbol),
        stock,
        benchmark_quote,
        display_name=f"{stock.name} / {benchmark.name}",
    )


def unique_leg_symbols(pairs: list[PairSymbol]) -> list[str]:
    """Leg symbols across ``pairs`` in first-seen order, without duplicates."""
    symbols: list[str] = []
    seen: set[str] = set()
    for pair in pairs:
        for symbol in (pair.numerator, pair.denominator):
            if symbol in seen:
                continue
            seen.add(symbol)
            symbols.append(symbol)
    return symbols
