"""Concise human-readable run logger."""

from __future__ import annotations

import logging
import math
from datetime import UTC, datetime

from pairratio.domain.models import PairQuote, Quote, Series

from .report import displayable

LOGGER_NAME = "pairratio"


def setup_logger(log_level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """Configure and return the package logger.

    Logs are written to console, plus an optional file if ``log_file`` is set.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.propagate = False

    if logger.handlers:
        return logger

    formatter = logging.Formatter("%(asctime)s | %(message)s", "%Y-%m-%d %H:%M:%S")

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


class HumanLogger:
    """Console logger with fixed line types."""

    def __init__(self, level: str = "INFO", log_file: str | None = None) -> None:
        self._logger = setup_logger(level, log_file)

    def ratio(self, pair: str, interval: str, bars: Series) -> None:
        if not bars:
            self.no_data(pair, interval)
            return None
        last = bars[-1]
        parts = [f"ratio | {pair} | {interval} | bars {len(bars)}{self._span(bars)}"]
        parts.append(f"close {self._format_ratio(last.close)}")
        parts.append(f"range {self._format_ratio(last.low)}-{self._format_ratio(last.high)}")
        non_finite = len(bars) - len(displayable(bars))
        if non_finite:
            parts.append(f"non_finite {non_finite}")
        self._logger.info(" | ".join(parts))

    def no_data(self, pair: str, interval: str) -> None:
        self._logger.info("no data | %s | %s", pair, interval)

    def quote(self, quote: Quote) -> None:
        self._logger.info(
            "quote | %s | $%s | %s (%s)",
            quote.symbol,
            f"{quote.price:,.3f}",
            f"{quote.change:+,.3f}",
            f"{quote.percent_change:+.2f}%",
        )

    def pair(self, pair_quote: PairQuote) -> None:
        parts = [f"pair | {pair_quote.symbol} | ratio {self._format_ratio(pair_quote.ratio)}"]
        if pair_quote.display_name != pair_quote.symbol:
            parts.append(pair_quote.display_name)
        parts.append(
            f"num ${pair_quote.numerator_price:,.3f} | den ${pair_quote.denominator_price:,.3f}"
        )
        self._logger.info(" | ".join(parts))

    def refresh_scheduled(self, at: datetime) -> None:
        self._logger.info("refresh | next at %s", at.strftime("%Y-%m-%d %H:%M"))

    def report(self, path: str) -> None:
        self._logger.info("report | %s", path)

    def error(self, message: str) -> None:
        self._logger.error("error | %s", message)

    @staticmethod
    def _format_ratio(value: float) -> str:
        if not math.isfinite(value):
            return str(value)
        return f"{value:.6f}".rstrip("0").rstrip(".") or "0"

    @staticmethod
    def _span(bars: Series) -> str:
        if not bars:
            return ""
        first = datetime.fromtimestamp(bars[0].timestamp / 1000, tz=UTC).date()
        last = datetime.fromtimestamp(bars[-1].timestamp / 1000, tz=UTC).date()
        return f" | {first} .. {last}"
