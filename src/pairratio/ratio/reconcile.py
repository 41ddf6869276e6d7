"""Ratio series reconciliation.

Aligns a numerator and a denominator series on shared timestamps and derives
synthetic OHLC bars for ``numerator / denominator``.
"""

from __future__ import annotations

import math

from pairratio.domain.models import Bar, Series


def common_start(numerator: Series, denominator: Series) -> int:
    """Return the later of the two first timestamps; an empty side counts as 0."""
    numerator_first = numerator[0].timestamp if numerator else 0
    denominator_first = denominator[0].timestamp if denominator else 0
    return max(numerator_first, denominator_first)


def ratio_bar(numerator: Bar, denominator: Bar) -> Bar:
    """Combine two bars at the same timestamp into one ratio bar.

    High and low pair each leg's extreme with the opposite extreme of the
    other leg, then clamp by the ratio open and close. Intrabar co-occurrence
    is unknown from OHLC alone, so the bounds are an approximation.
    """
    ratio_open = _divide(numerator.open, denominator.open)
    ratio_close = _divide(numerator.close, denominator.close)
    ratio_high = _ieee_max(
        _divide(numerator.high, denominator.low),
        _divide(numerator.high, denominator.high),
        ratio_open,
        ratio_close,
    )
    ratio_low = _ieee_min(
        _divide(numerator.low, denominator.high),
        _divide(numerator.low, denominator.low),
        ratio_open,
        ratio_close,
    )
    return Bar(
        timestamp=numerator.timestamp,
        open=ratio_open,
        high=ratio_high,
        low=ratio_low,
        close=ratio_close,
        volume=numerator.volume,
    )


def reconcile_ratio(numerator: Series, denominator: Series) -> Series:
    """Return the ratio series of ``numerator`` over ``denominator``.

    Numerator bars before the common start, or without a denominator bar at
    the exact same timestamp, are skipped. Output keeps numerator order.
    Zero denominators yield non-finite values instead of errors.
    """
    start = common_start(numerator, denominator)
    denominator_by_ts = {bar.timestamp: bar for bar in denominator}
    bars: list[Bar] = []
    for numerator_bar in numerator:
        if numerator_bar.timestamp < start:
            continue
        denominator_bar = denominator_by_ts.get(numerator_bar.timestamp)
        if denominator_bar is None:
            continue
        bars.append(ratio_bar(numerator_bar, denominator_bar))
    return tuple(bars)


def _divide(numerator: float, denominator: float) -> float:
    # IEEE-754 division: x/0 is a signed infinity, 0/0 is nan.
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _ieee_max(*values: float) -> float:
    if any(math.isnan(value) for value in values):
        return math.nan
    return max(values)


def _ieee_min(*values: float) -> float:
    if any(math.isnan(value) for value in values):
        return math.nan
    return min(values)
