"""Custom exceptions for clearer error handling across the package."""

from __future__ import annotations


class PairRatioError(Exception):
    """Base exception for all package-specific errors."""


class ConfigError(PairRatioError):
    """Raised when environment configuration is invalid."""


class FetchFailure(PairRatioError):
    """Raised when the market-data request fails at the transport or HTTP level."""

    def __init__(self, symbol: str, detail: str, status_code: int | None = None) -> None:
        super().__init__(f"Failed to fetch {symbol}: {detail}")
        self.symbol = symbol
        self.status_code = status_code


class NoDataFailure(PairRatioError):
    """Raised when a successful response carries no usable series for the symbol."""

    def __init__(self, symbol: str, message: str | None = None) -> None:
        super().__init__(message or f"No historical data available for {symbol}")
        self.symbol = symbol


class InvalidPairFailure(PairRatioError, ValueError):
    """Raised when a pair identifier does not split into two non-empty symbols."""

    def __init__(self, pair: str) -> None:
        super().__init__(f"Invalid pair symbol: {pair!r}")
        self.pair = pair


class InvalidSymbolError(PairRatioError, ValueError):
    """Raised when user input cannot be turned into a market symbol."""
