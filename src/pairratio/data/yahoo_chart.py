"""Yahoo Finance chart API provider."""

from __future__ import annotations

import logging
import time
from typing import Any
from urllib.parse import quote

import httpx

from pairratio.domain.models import Quote, Series, normalize_interval
from pairratio.errors import FetchFailure

from .chart_payload import parse_quote, parse_series

logger = logging.getLogger(__name__)

DEFAULT_CHART_BASE_URL = "https://query1.finance.yahoo.com/v8/finance/chart"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0 Safari/537.36"
)


class YahooChartProvider:
    """Fetch OHLCV series and quotes from the v8 chart endpoint.

    Each call opens its own ``httpx.AsyncClient`` so concurrent fetches share
    no state. Pass ``transport`` to route requests elsewhere (tests use
    ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_CHART_BASE_URL,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport

    async def fetch_series(self, symbol: str, range_: str, interval: str) -> Series:
        payload = await self._get_chart(
            symbol,
            {"interval": normalize_interval(interval), "range": range_},
        )
        series = parse_series(payload, symbol)
        logger.debug("fetched %s bars for %s (%s/%s)", len(series), symbol, interval, range_)
        return series

    async def fetch_quote(self, symbol: str) -> Quote:
        payload = await self._get_chart(symbol, {"interval": "1d", "range": "1d"})
        return parse_quote(payload, symbol, now_ms=int(time.time() * 1000))

    def chart_url(self, symbol: str) -> str:
        return f"{self.base_url}/{quote(symbol.strip(), safe='')}"

    async def _get_chart(self, symbol: str, params: dict[str, str]) -> Any:
        url = self.chart_url(symbol)
        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        ) as client:
            try:
                response = await client.get(url, params=params)
            except httpx.HTTPError as exc:
                raise FetchFailure(symbol, str(exc) or type(exc).__name__) from exc
        if not response.is_success:
            detail = f"{response.status_code} {response.reason_phrase}".strip()
            raise FetchFailure(symbol, detail, status_code=response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise FetchFailure(symbol, "response body is not valid JSON") from exc
