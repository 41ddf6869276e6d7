"""Market data provider implementations."""

from .base import HistoryProvider
from .csv_data import CsvHistoryProvider
from .ranges import range_for_interval
from .yahoo_chart import YahooChartProvider

__all__ = [
    "HistoryProvider",
    "CsvHistoryProvider",
    "YahooChartProvider",
    "range_for_interval",
]
