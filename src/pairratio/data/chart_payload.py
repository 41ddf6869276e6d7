"""Parse chart API payloads into normalized series and quotes."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pairratio.domain.models import Bar, Quote, Series
from pairratio.errors import NoDataFailure

OHLC_FIELDS = ("open", "high", "low", "close")


def build_bars(
    timestamps: Sequence[Any],
    columns: Mapping[str, Sequence[Any] | None],
) -> Series:
    """Build bars row by row from parallel columns.

    ``timestamps`` are epoch seconds. A row is emitted only when all four OHLC
    values are present; any other row is dropped. A missing volume becomes 0.
    Rows whose timestamp does not advance past the previous bar are skipped.
    """
    bars: list[Bar] = []
    for index, raw_ts in enumerate(timestamps):
        if raw_ts is None:
            continue
        timestamp = int(raw_ts) * 1000
        if bars and timestamp <= bars[-1].timestamp:
            continue
        values = [_value_at(columns.get(name), index) for name in OHLC_FIELDS]
        if any(value is None for value in values):
            continue
        open_, high, low, close = (float(value) for value in values)
        volume = _value_at(columns.get("volume"), index)
        bars.append(
            Bar(
                timestamp=timestamp,
                open=open_,
                high=high,
                low=low,
                close=close,
                volume=float(volume) if volume else 0.0,
            )
        )
    return tuple(bars)


def chart_result(payload: Any, symbol: str) -> dict[str, Any]:
    """Return ``chart.result[0]`` or raise ``NoDataFailure``."""
    chart = payload.get("chart") if isinstance(payload, dict) else None
    results = chart.get("result") if isinstance(chart, dict) else None
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        raise NoDataFailure(symbol)
    return results[0]


def parse_series(payload: Any, symbol: str) -> Series:
    """Extract the normalized series for ``symbol`` from a chart payload."""
    result = chart_result(payload, symbol)
    timestamps = result.get("timestamp")
    if not isinstance(timestamps, list):
        raise NoDataFailure(symbol)
    indicators = result.get("indicators") or {}
    quotes = indicators.get("quote") or [{}]
    columns = quotes[0] if isinstance(quotes[0], dict) else {}
    return build_bars(timestamps, columns)


def parse_quote(payload: Any, symbol: str, now_ms: int) -> Quote:
    """Extract the latest price snapshot for ``symbol`` from a chart payload."""
    try:
        result = chart_result(payload, symbol)
    except NoDataFailure as exc:
        raise NoDataFailure(symbol, f"Could not get data for {symbol}") from exc
    meta = result.get("meta") or {}
    raw_price = meta.get("regularMarketPrice")
    if raw_price is None:
        raise NoDataFailure(symbol, f"Could not get data for {symbol}")
    price = float(raw_price)
    previous_close = float(meta.get("previousClose") or meta.get("chartPreviousClose") or price)
    change = price - previous_close
    percent_change = change / previous_close * 100.0 if previous_close else 0.0
    return Quote(
        symbol=symbol,
        name=str(meta.get("shortName") or meta.get("longName") or symbol),
        price=price,
        change=change,
        percent_change=percent_change,
        timestamp=now_ms,
    )


def _value_at(column: Sequence[Any] | None, index: int) -> Any | None:
    if column is None or index >= len(column):
        return None
    return column[index]
