"""Logging and report helpers."""

from .logger import HumanLogger, setup_logger
from .report import build_ratio_figure, series_to_frame, write_ratio_report

__all__ = [
    "HumanLogger",
    "build_ratio_figure",
    "setup_logger",
    "series_to_frame",
    "write_ratio_report",
]
