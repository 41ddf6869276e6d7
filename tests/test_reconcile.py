from __future__ import annotations

import math

import pytest

from pairratio.domain.models import Bar
from pairratio.ratio.reconcile import common_start, ratio_bar, reconcile_ratio


def _bar(ts: int, close: float, volume: float = 100.0) -> Bar:
    return Bar(timestamp=ts, open=close, high=close, low=close, close=close, volume=volume)


def _ohlc(ts: int, o: float, h: float, low: float, c: float, volume: float = 0.0) -> Bar:
    return Bar(timestamp=ts, open=o, high=h, low=low, close=c, volume=volume)


SAMPLE = (
    _ohlc(1_000, 10.0, 12.0, 9.0, 11.0, 500),
    _ohlc(2_000, 11.0, 11.5, 10.2, 10.4, 0),
    _ohlc(3_000, 10.4, 13.1, 10.1, 12.9, 750),
    _ohlc(5_000, 12.9, 13.0, 12.0, 12.2, 320),
)


def test_ratio_starts_at_later_series_and_skips_unmatched_timestamps() -> None:
    numerator = (_bar(1, 10.0), _bar(2, 20.0), _bar(3, 30.0))
    denominator = (_bar(2, 5.0), _bar(3, 5.0), _bar(4, 5.0))

    ratio = reconcile_ratio(numerator, denominator)

    assert [bar.timestamp for bar in ratio] == [2, 3]
    assert [bar.close for bar in ratio] == [4.0, 6.0]


def test_common_start_uses_later_first_timestamp_and_zero_for_empty() -> None:
    assert common_start((_bar(5, 1.0),), (_bar(9, 1.0),)) == 9
    assert common_start((_bar(5, 1.0),), ()) == 5
    assert common_start((), ()) == 0


def test_self_ratio_is_all_ones_with_numerator_volume() -> None:
    ratio = reconcile_ratio(SAMPLE, SAMPLE)

    assert len(ratio) == len(SAMPLE)
    for source, bar in zip(SAMPLE, ratio):
        assert bar.timestamp == source.timestamp
        assert bar.open == pytest.approx(1.0)
        assert bar.close == pytest.approx(1.0)
        assert bar.volume == source.volume
    # high/low cross the extremes, so only the clamp bounds are exact here
    assert all(bar.low <= 1.0 <= bar.high for bar in ratio)


def test_self_ratio_of_flat_bars_is_exactly_one() -> None:
    flat = (_bar(1, 3.0, 10), _bar(2, 7.0, 0), _bar(3, 0.5, 42))

    ratio = reconcile_ratio(flat, flat)

    assert [(bar.open, bar.high, bar.low, bar.close) for bar in ratio] == [(1.0, 1.0, 1.0, 1.0)] * 3
    assert [bar.volume for bar in ratio] == [10, 0, 42]


def test_output_is_ordered_subsequence_of_numerator() -> None:
    denominator = (_bar(1_000, 2.0), _bar(3_000, 2.0), _bar(4_000, 2.0), _bar(5_000, 2.0))

    ratio = reconcile_ratio(SAMPLE, denominator)

    timestamps = [bar.timestamp for bar in ratio]
    assert timestamps == [1_000, 3_000, 5_000]
    assert timestamps == sorted(set(timestamps))
    assert set(timestamps) <= {bar.timestamp for bar in SAMPLE}
    missing_in_denominator = 1
    assert len(ratio) == len(SAMPLE) - missing_in_denominator


def test_high_low_combine_opposite_extremes() -> None:
    numerator = _ohlc(1, 10.0, 12.0, 9.0, 11.0, 900)
    denominator = _ohlc(1, 5.0, 6.0, 4.0, 5.0, 77)

    bar = ratio_bar(numerator, denominator)

    assert bar.open == pytest.approx(2.0)
    assert bar.close == pytest.approx(2.2)
    assert bar.high == pytest.approx(3.0)
    assert bar.low == pytest.approx(1.5)
    assert bar.volume == 900


def test_high_low_are_clamped_by_open_and_close() -> None:
    numerator = _ohlc(1, 10.0, 10.0, 10.0, 10.0)
    denominator = _ohlc(1, 4.0, 5.0, 5.0, 5.0)

    bar = ratio_bar(numerator, denominator)

    assert bar.open == pytest.approx(2.5)
    assert bar.high == pytest.approx(2.5)
    assert bar.low == pytest.approx(2.0)


def test_close_is_reciprocal_when_legs_are_swapped() -> None:
    other = (
        _ohlc(1_000, 50.0, 51.0, 49.0, 50.5),
        _ohlc(2_000, 50.5, 52.0, 50.0, 51.7),
        _ohlc(3_000, 51.7, 53.0, 51.0, 52.2),
        _ohlc(5_000, 52.2, 52.5, 50.1, 50.9),
    )

    forward = reconcile_ratio(SAMPLE, other)
    backward = {bar.timestamp: bar for bar in reconcile_ratio(other, SAMPLE)}

    assert forward
    for bar in forward:
        assert bar.close == pytest.approx(1.0 / backward[bar.timestamp].close)


def test_empty_inputs_produce_empty_series() -> None:
    assert reconcile_ratio((), SAMPLE) == ()
    assert reconcile_ratio(SAMPLE, ()) == ()


def test_zero_denominator_yields_non_finite_values_not_errors() -> None:
    numerator = (_bar(1, 4.0), _ohlc(2, 0.0, 1.0, 0.0, 0.0))
    denominator = (_bar(1, 0.0), _bar(2, 0.0))

    ratio = reconcile_ratio(numerator, denominator)

    assert len(ratio) == 2
    first, second = ratio
    assert first.open == math.inf
    assert first.close == math.inf
    assert first.high == math.inf
    assert first.low == math.inf
    assert math.isnan(second.open)
    assert math.isnan(second.close)
    assert math.isnan(second.high)
    assert math.isnan(second.low)


def test_reconcile_is_deterministic() -> None:
    denominator = (_bar(1_000, 2.0), _bar(2_000, 4.0), _bar(5_000, 8.0))

    assert reconcile_ratio(SAMPLE, denominator) == reconcile_ratio(SAMPLE, denominator)
