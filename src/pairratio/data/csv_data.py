"""CSV-backed history provider for offline runs."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from pairratio.domain.models import Bar, Quote, Series
from pairratio.errors import NoDataFailure


class CsvHistoryProvider:
    """Load OHLCV series from ``<data_dir>/<SYMBOL>.csv`` files.

    The file is the series: the requested range and interval are ignored.
    """

    date_column_candidates = ("date", "datetime", "timestamp")

    def __init__(self, data_dir: str) -> None:
        self.data_dir = Path(data_dir)

    async def fetch_series(self, symbol: str, range_: str, interval: str) -> Series:
        _ = (range_, interval)
        return self.load_series(symbol)

    async def fetch_quote(self, symbol: str) -> Quote:
        series = self.load_series(symbol)
        if not series:
            raise NoDataFailure(symbol, f"Could not get data for {symbol}")
        last = series[-1]
        previous_close = series[-2].close if len(series) > 1 else last.close
        change = last.close - previous_close
        return Quote(
            symbol=symbol,
            name=symbol,
            price=last.close,
            change=change,
            percent_change=change / previous_close * 100.0 if previous_close else 0.0,
            timestamp=last.timestamp,
        )

    def load_series(self, symbol: str) -> Series:
        path = self._resolve_path(symbol)
        if path is None:
            raise NoDataFailure(symbol, f"No CSV found for {symbol} under {self.data_dir}")
        frame = self._normalize_csv(pd.read_csv(path), symbol)
        return tuple(
            Bar(
                timestamp=int(ts.value // 1_000_000),
                open=float(row.open),
                high=float(row.high),
                low=float(row.low),
                close=float(row.close),
                volume=float(row.volume),
            )
            for ts, row in zip(frame.index, frame.itertuples(index=False))
        )

    def _resolve_path(self, symbol: str) -> Path | None:
        bare_symbol = symbol.strip()
        for candidate in (
            self.data_dir / f"{bare_symbol.upper()}.csv",
            self.data_dir / f"{bare_symbol.lower()}.csv",
        ):
            if candidate.exists():
                return candidate
        return None

    def _normalize_csv(self, frame: pd.DataFrame, symbol: str) -> pd.DataFrame:
        lower_to_original = {str(column).strip().lower(): column for column in frame.columns}
        date_column = self._pick_date_column(lower_to_original, symbol)
        rename_map = self._build_ohlcv_rename_map(lower_to_original, symbol)
        normalized = frame.rename(columns=rename_map)
        normalized.index = pd.to_datetime(normalized[date_column], utc=True)
        normalized = normalized.sort_index()
        if "volume" not in normalized.columns:
            normalized["volume"] = 0.0
        normalized = normalized[["open", "high", "low", "close", "volume"]].copy()
        normalized = normalized.apply(pd.to_numeric, errors="coerce")
        normalized = normalized.dropna(subset=["open", "high", "low", "close"])
        normalized["volume"] = normalized["volume"].fillna(0.0)
        normalized = normalized[~normalized.index.duplicated(keep="last")]
        if normalized.empty:
            raise NoDataFailure(symbol, f"{symbol}: data has no valid OHLCV rows")
        return normalized

    def _pick_date_column(self, lower_to_original: dict[str, str], symbol: str) -> str:
        for candidate in self.date_column_candidates:
            if candidate in lower_to_original:
                return lower_to_original[candidate]
        candidates = ", ".join(self.date_column_candidates)
        raise NoDataFailure(
            symbol, f"{symbol}: CSV missing date column. Expected one of: {candidates}"
        )

    @staticmethod
    def _build_ohlcv_rename_map(
        lower_to_original: dict[str, str],
        symbol: str,
    ) -> dict[str, str]:
        rename_map: dict[str, str] = {}
        for name in ("open", "high", "low", "close"):
            source = lower_to_original.get(name)
            if source is None:
                raise NoDataFailure(symbol, f"{symbol}: CSV missing required column '{name}'")
            rename_map[source] = name
        volume_source = lower_to_original.get("volume")
        if volume_source is not None:
            rename_map[volume_source] = "volume"
        return rename_map
