"""Interval-dependent lookback ranges for chart requests."""

from __future__ import annotations

from pairratio.domain.models import Interval, normalize_interval

RANGE_TWO_YEARS = "2y"
RANGE_TEN_YEARS = "10y"
RANGE_MAX = "max"

# The chart endpoint silently coarsens the interval when the range is too
# long for it, so finer intervals must stay on shorter ranges.
_RANGE_BY_INTERVAL = {
    Interval.DAY.value: RANGE_TWO_YEARS,
    Interval.WEEK.value: RANGE_TEN_YEARS,
    Interval.MONTH.value: RANGE_MAX,
}


def range_for_interval(interval: str) -> str:
    """Return the lookback range token paired with ``interval``."""
    return _RANGE_BY_INTERVAL.get(normalize_interval(interval), RANGE_TWO_YEARS)
