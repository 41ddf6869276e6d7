"""Market data provider contract."""

from __future__ import annotations

from typing import Protocol

from pairratio.domain.models import Quote, Series


class HistoryProvider(Protocol):
    """Interface for historical series and quote retrieval."""

    async def fetch_series(self, symbol: str, range_: str, interval: str) -> Series:
        """Return the normalized OHLCV series for ``symbol``."""

    async def fetch_quote(self, symbol: str) -> Quote:
        """Return the latest price snapshot for ``symbol``."""
