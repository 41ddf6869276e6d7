"""Tests for local CSV history provider."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pandas as pd
import pytest

from pairratio.data.csv_data import CsvHistoryProvider
from pairratio.errors import NoDataFailure


def _ms(day: str) -> int:
    return int(pd.Timestamp(day, tz="UTC").timestamp() * 1000)


def test_csv_provider_parses_ohlcv_and_drops_incomplete_rows(tmp_path: Path) -> None:
    (tmp_path / "SPY.csv").write_text(
        "\n".join(
            [
                "Date,Open,High,Low,Close,Volume",
                "2026-01-05,101,102,100,101.5,",
                "2026-01-02,100,101,99,100.5,1000000",
                "2026-01-03,100.5,102,100,,1100000",
            ]
        ),
        encoding="utf-8",
    )
    provider = CsvHistoryProvider(data_dir=str(tmp_path))

    series = asyncio.run(provider.fetch_series("spy", "2y", "1d"))

    assert [bar.timestamp for bar in series] == [_ms("2026-01-02"), _ms("2026-01-05")]
    assert series[0].close == 100.5
    assert series[0].volume == 1_000_000
    assert series[1].volume == 0.0


def test_csv_provider_without_volume_column(tmp_path: Path) -> None:
    (tmp_path / "GLD.csv").write_text(
        "date,open,high,low,close\n2026-01-02,180,181,179,180.5\n", encoding="utf-8"
    )

    series = CsvHistoryProvider(data_dir=str(tmp_path)).load_series("GLD")

    assert len(series) == 1
    assert series[0].volume == 0.0


def test_csv_provider_quote_uses_last_two_rows(tmp_path: Path) -> None:
    (tmp_path / "QQQ.csv").write_text(
        "date,open,high,low,close,volume\n"
        "2026-01-02,400,401,399,400,10\n"
        "2026-01-05,400,411,399,410,12\n",
        encoding="utf-8",
    )

    quote = asyncio.run(CsvHistoryProvider(data_dir=str(tmp_path)).fetch_quote("QQQ"))

    assert quote.price == 410.0
    assert quote.change == pytest.approx(10.0)
    assert quote.percent_change == pytest.approx(2.5)
    assert quote.timestamp == _ms("2026-01-05")


def test_csv_provider_missing_file_raises_no_data(tmp_path: Path) -> None:
    with pytest.raises(NoDataFailure, match="No CSV found for IBIT"):
        asyncio.run(CsvHistoryProvider(data_dir=str(tmp_path)).fetch_series("IBIT", "2y", "1d"))


def test_csv_provider_missing_columns_raise_no_data(tmp_path: Path) -> None:
    (tmp_path / "BAD.csv").write_text("when,close\n2026-01-02,1\n", encoding="utf-8")

    with pytest.raises(NoDataFailure, match="date column"):
        CsvHistoryProvider(data_dir=str(tmp_path)).load_series("BAD")
