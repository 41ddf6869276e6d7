"""Core price and pair domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Self

from pairratio.errors import InvalidPairFailure


class Interval(StrEnum):
    """Supported sampling intervals, valued by the upstream chart tokens."""

    DAY = "1d"
    WEEK = "1wk"
    MONTH = "1mo"


_INTERVAL_ALIASES = {
    "1d": Interval.DAY,
    "1 day": Interval.DAY,
    "1day": Interval.DAY,
    "day": Interval.DAY,
    "daily": Interval.DAY,
    "1wk": Interval.WEEK,
    "1w": Interval.WEEK,
    "1 week": Interval.WEEK,
    "1week": Interval.WEEK,
    "week": Interval.WEEK,
    "weekly": Interval.WEEK,
    "1mo": Interval.MONTH,
    "1 month": Interval.MONTH,
    "1month": Interval.MONTH,
    "month": Interval.MONTH,
    "monthly": Interval.MONTH,
}


def normalize_interval(value: str) -> str:
    """Map human interval aliases onto chart tokens; unknown tokens pass through."""
    candidate = " ".join(value.strip().lower().split())
    interval = _INTERVAL_ALIASES.get(candidate)
    if interval is None:
        return value.strip()
    return interval.value


@dataclass(frozen=True)
class Bar:
    """One OHLCV observation; timestamp is epoch milliseconds."""

    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


Series = tuple[Bar, ...]


@dataclass(frozen=True)
class PairSymbol:
    """Numerator/denominator legs of a ratio pair."""

    numerator: str
    denominator: str

    @classmethod
    def parse(cls, value: str) -> Self:
        """Parse ``"NUM/DEN"``; both sides must be non-empty after trimming."""
        if "/" not in value:
            raise InvalidPairFailure(value)
        numerator, denominator = value.split("/", 1)
        numerator = numerator.strip()
        denominator = denominator.strip()
        if not numerator or not denominator or "/" in denominator:
            raise InvalidPairFailure(value)
        return cls(numerator=numerator, denominator=denominator)

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


@dataclass(frozen=True)
class Benchmark:
    """Named benchmark instrument."""

    symbol: str
    name: str


@dataclass(frozen=True)
class Quote:
    """Latest price snapshot for one instrument."""

    symbol: str
    name: str
    price: float
    change: float
    percent_change: float
    timestamp: int


@dataclass(frozen=True)
class PairQuote:
    """Point-in-time ratio of two quotes."""

    symbol: str
    display_name: str
    ratio: float
    numerator_price: float
    denominator_price: float
