"""Runtime wiring for ratio charts and pair snapshots."""

from __future__ import annotations

import asyncio
import signal
from pathlib import Path

from pairratio.config import Settings
from pairratio.data.base import HistoryProvider
from pairratio.data.csv_data import CsvHistoryProvider
from pairratio.data.symbols import to_cn_symbol, to_us_symbol
from pairratio.data.yahoo_chart import YahooChartProvider
from pairratio.domain.models import PairSymbol, Series, normalize_interval
from pairratio.errors import PairRatioError
from pairratio.logging.logger import HumanLogger
from pairratio.logging.report import write_ratio_report
from pairratio.ratio.loader import load_benchmark_pairs, load_pair_quotes, load_ratio
from pairratio.schedule import RefreshScheduler


def build_history_provider(settings: Settings) -> HistoryProvider:
    """Select history provider from the configured data source."""
    if settings.data_source == "csv":
        return CsvHistoryProvider(data_dir=settings.historical_data_dir)
    return YahooChartProvider(
        base_url=settings.chart_base_url,
        timeout=settings.request_timeout_seconds,
        user_agent=settings.user_agent,
    )


def default_report_path(settings: Settings, pair: PairSymbol, interval: str) -> str:
    """Report file named after the pair legs and interval."""
    stem = f"{pair.numerator}_{pair.denominator}_{interval}".replace("/", "_")
    return str(Path(settings.reports_dir) / f"{stem}.html")


async def refresh_ratio(
    pair: PairSymbol,
    interval: str,
    provider: HistoryProvider,
    report_path: str,
    human_logger: HumanLogger,
) -> Series:
    """Load one ratio series, log it, and rewrite its report."""
    series = await load_ratio(pair, interval, provider)
    human_logger.ratio(str(pair), interval, series)
    write_ratio_report(series, str(pair), interval, report_path)
    human_logger.report(report_path)
    return series


def show_ratio(
    settings: Settings,
    pair_identifier: str,
    interval: str | None = None,
    report_path: str | None = None,
    provider: HistoryProvider | None = None,
) -> int:
    """Load a ratio series once and write its report."""
    human_logger = HumanLogger(level=settings.log_level, log_file=settings.log_file)
    try:
        pair = PairSymbol.parse(pair_identifier)
        resolved_interval = normalize_interval(interval or settings.default_interval)
        asyncio.run(
            refresh_ratio(
                pair,
                resolved_interval,
                provider or build_history_provider(settings),
                report_path or default_report_path(settings, pair, resolved_interval),
                human_logger,
            )
        )
    except (PairRatioError, OSError) as exc:
        human_logger.error(str(exc))
        return 1
    return 0


def watch_ratio(
    settings: Settings,
    pair_identifier: str,
    interval: str | None = None,
    report_path: str | None = None,
    provider: HistoryProvider | None = None,
    max_runs: int | None = None,
) -> int:
    """Refresh a ratio report on wall-clock boundaries until interrupted.

    On POSIX, ``SIGUSR1`` requests an immediate refresh.
    """
    human_logger = HumanLogger(level=settings.log_level, log_file=settings.log_file)
    try:
        pair = PairSymbol.parse(pair_identifier)
    except PairRatioError as exc:
        human_logger.error(str(exc))
        return 1
    resolved_interval = normalize_interval(interval or settings.default_interval)
    resolved_provider = provider or build_history_provider(settings)
    resolved_report = report_path or default_report_path(settings, pair, resolved_interval)

    async def refresh() -> None:
        try:
            await refresh_ratio(
                pair, resolved_interval, resolved_provider, resolved_report, human_logger
            )
        except (PairRatioError, OSError) as exc:
            human_logger.error(str(exc))
        human_logger.refresh_scheduled(scheduler.next_run_at())

    scheduler = RefreshScheduler(refresh, period_minutes=settings.refresh_minutes)

    async def main() -> None:
        loop = asyncio.get_running_loop()
        if hasattr(signal, "SIGUSR1"):
            loop.add_signal_handler(signal.SIGUSR1, scheduler.trigger)
        await scheduler.run(max_runs=max_runs)

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
    return 0


def show_quotes(settings: Settings, provider: HistoryProvider | None = None) -> int:
    """Log snapshot ratios for every configured trading pair."""
    human_logger = HumanLogger(level=settings.log_level, log_file=settings.log_file)
    try:
        pair_quotes = asyncio.run(
            load_pair_quotes(settings.trading_pairs, provider or build_history_provider(settings))
        )
    except PairRatioError as exc:
        human_logger.error(str(exc))
        return 1
    for pair_quote in pair_quotes:
        human_logger.pair(pair_quote)
    return 0


def show_benchmarks(
    settings: Settings,
    symbol: str,
    market: str = "us",
    provider: HistoryProvider | None = None,
) -> int:
    """Log snapshot ratios of one stock against the market's benchmark set."""
    human_logger = HumanLogger(level=settings.log_level, log_file=settings.log_file)
    try:
        if market == "cn":
            resolved_symbol = to_cn_symbol(symbol)
            benchmarks = settings.cn_benchmarks
        else:
            resolved_symbol = to_us_symbol(symbol)
            benchmarks = settings.us_benchmarks
        stock_quote, pair_quotes = asyncio.run(
            load_benchmark_pairs(
                resolved_symbol, benchmarks, provider or build_history_provider(settings)
            )
        )
    except PairRatioError as exc:
        human_logger.error(str(exc))
        return 1
    human_logger.quote(stock_quote)
    for pair_quote in pair_quotes:
        human_logger.pair(pair_quote)
    return 0
