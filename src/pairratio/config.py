"""Environment and CLI runtime configuration."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from typing import Any, Self

from dotenv import load_dotenv

from pairratio.data.yahoo_chart import DEFAULT_CHART_BASE_URL, DEFAULT_USER_AGENT
from pairratio.domain.models import Benchmark, PairSymbol, normalize_interval
from pairratio.errors import ConfigError, InvalidPairFailure

DEFAULT_TRADING_PAIRS = ("QQQ/GLD", "IBIT/GLD", "IBIT/QQQ")
DEFAULT_US_BENCHMARKS = (
    Benchmark(symbol="QQQ", name="QQQ"),
    Benchmark(symbol="GLD", name="GLD"),
    Benchmark(symbol="IBIT", name="IBIT"),
)
DEFAULT_CN_BENCHMARKS = (
    Benchmark(symbol="510300.SS", name="沪深300ETF"),
    Benchmark(symbol="510050.SS", name="上证50ETF"),
    Benchmark(symbol="159949.SZ", name="创业板50ETF"),
)
DATA_SOURCES = {"yahoo", "csv"}


def _load_json_array(value: str, field_name: str) -> list[Any]:
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{field_name} must be a JSON array: {exc.msg}") from exc
    if not isinstance(parsed, list) or not parsed:
        raise ConfigError(f"{field_name} must be a non-empty JSON array")
    return parsed


def parse_trading_pairs(value: str | None) -> tuple[PairSymbol, ...]:
    """Parse a JSON array of ``"A/B"`` strings; symbols are upper-cased."""
    if not value:
        raw_pairs: list[Any] = list(DEFAULT_TRADING_PAIRS)
    else:
        raw_pairs = _load_json_array(value, "TRADING_PAIRS")
    pairs: list[PairSymbol] = []
    for raw in raw_pairs:
        if not isinstance(raw, str):
            raise ConfigError(f"TRADING_PAIRS entries must be strings, got {raw!r}")
        try:
            pair = PairSymbol.parse(raw)
        except InvalidPairFailure as exc:
            raise ConfigError(f"TRADING_PAIRS: {exc}") from exc
        pairs.append(
            PairSymbol(numerator=pair.numerator.upper(), denominator=pair.denominator.upper())
        )
    return tuple(pairs)


def parse_benchmarks(
    value: str | None,
    default: tuple[Benchmark, ...],
    field_name: str,
) -> tuple[Benchmark, ...]:
    """Parse a JSON array of ``{"symbol": ..., "name": ...}`` objects."""
    if not value:
        return default
    benchmarks: list[Benchmark] = []
    for item in _load_json_array(value, field_name):
        if not isinstance(item, dict):
            raise ConfigError(f"{field_name} entries must be objects, got {item!r}")
        symbol = str(item.get("symbol") or "").strip()
        if not symbol:
            raise ConfigError(f"{field_name} entries require a symbol")
        name = str(item.get("name") or "").strip() or symbol
        benchmarks.append(Benchmark(symbol=symbol, name=name))
    return tuple(benchmarks)


def _parse_number(value: str | None, default: str, field_name: str) -> float:
    text = (value or default).strip()
    try:
        return float(text)
    except ValueError as exc:
        raise ConfigError(f"{field_name} must be a number, got {text!r}") from exc


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings, built once and passed explicitly."""

    trading_pairs: tuple[PairSymbol, ...] = field(
        default_factory=lambda: parse_trading_pairs(None)
    )
    us_benchmarks: tuple[Benchmark, ...] = DEFAULT_US_BENCHMARKS
    cn_benchmarks: tuple[Benchmark, ...] = DEFAULT_CN_BENCHMARKS
    chart_base_url: str = DEFAULT_CHART_BASE_URL
    request_timeout_seconds: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    data_source: str = "yahoo"
    historical_data_dir: str = "historical_data"
    default_interval: str = "1d"
    refresh_minutes: int = 30
    reports_dir: str = "reports"
    log_level: str = "INFO"
    log_file: str | None = None

    @classmethod
    def from_env(cls) -> Self:
        """Create settings from environment variables (and ``.env``)."""
        load_dotenv()
        refresh_minutes = _parse_number(os.getenv("REFRESH_MINUTES"), "30", "REFRESH_MINUTES")
        raw = cls(
            trading_pairs=parse_trading_pairs(os.getenv("TRADING_PAIRS")),
            us_benchmarks=parse_benchmarks(
                os.getenv("US_BENCHMARK_ETFS"), DEFAULT_US_BENCHMARKS, "US_BENCHMARK_ETFS"
            ),
            cn_benchmarks=parse_benchmarks(
                os.getenv("CN_BENCHMARK_ETFS"), DEFAULT_CN_BENCHMARKS, "CN_BENCHMARK_ETFS"
            ),
            chart_base_url=str(os.getenv("CHART_BASE_URL", DEFAULT_CHART_BASE_URL)).strip(),
            request_timeout_seconds=_parse_number(
                os.getenv("REQUEST_TIMEOUT_SECONDS"), "10", "REQUEST_TIMEOUT_SECONDS"
            ),
            user_agent=str(os.getenv("USER_AGENT", DEFAULT_USER_AGENT)).strip(),
            data_source=str(os.getenv("DATA_SOURCE", "yahoo")).strip().lower(),
            historical_data_dir=str(os.getenv("HISTORICAL_DATA_DIR", "historical_data")).strip(),
            default_interval=normalize_interval(os.getenv("INTERVAL", "1d")),
            refresh_minutes=int(refresh_minutes),
            reports_dir=str(os.getenv("REPORTS_DIR", "reports")).strip(),
            log_level=str(os.getenv("LOG_LEVEL", "INFO")).strip().upper(),
            log_file=str(os.getenv("LOG_FILE", "")).strip() or None,
        )
        return raw.validate()

    def with_overrides(self, **kwargs: object) -> Self:
        """Return a new settings object with updated values."""
        updated = replace(self, **kwargs)
        return updated.validate()

    def validate(self) -> Self:
        """Validate settings fields."""
        if not self.trading_pairs:
            raise ConfigError("TRADING_PAIRS must list at least one pair")
        if not self.us_benchmarks or not self.cn_benchmarks:
            raise ConfigError("Benchmark lists must not be empty")
        if self.request_timeout_seconds <= 0:
            raise ConfigError("REQUEST_TIMEOUT_SECONDS must be positive")
        if self.refresh_minutes <= 0:
            raise ConfigError("REFRESH_MINUTES must be positive")
        if self.data_source not in DATA_SOURCES:
            supported = ", ".join(sorted(DATA_SOURCES))
            raise ConfigError(f"DATA_SOURCE must be one of: {supported}")
        if not self.chart_base_url:
            raise ConfigError("CHART_BASE_URL must not be empty")
        return self
