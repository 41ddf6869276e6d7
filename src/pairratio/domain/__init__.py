"""Domain models."""

from .models import Bar, Benchmark, Interval, PairQuote, PairSymbol, Quote, Series

__all__ = ["Bar", "Benchmark", "Interval", "PairQuote", "PairSymbol", "Quote", "Series"]
