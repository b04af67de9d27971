"""Tests for trend and volatility classification.

**Feature: coinsight**
"""

import math
from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from coinsight.analysis import (
    calculate_period_change,
    calculate_volatility,
    classify,
    detect_trend,
)
from coinsight.indicators import annotate
from coinsight.models import AnnotatedCandle, Trend


def create_series(closes: list[float]) -> list[AnnotatedCandle]:
    """Create annotated daily candles closing at the given prices."""
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    candles = [
        AnnotatedCandle(
            timestamp=start + timedelta(days=i),
            open=close,
            high=close,
            low=close,
            close=close,
        )
        for i, close in enumerate(closes)
    ]
    return annotate(candles)


def zigzag(start: float, up: float, down: float, steps: int) -> list[float]:
    """Alternate a rise and a fall, starting with the rise."""
    closes = [start]
    for i in range(steps):
        closes.append(closes[-1] + (up if i % 2 == 0 else -down))
    return closes


class TestInsufficientData:
    """
    **Feature: coinsight, Property 11: Insufficient Data**

    *For any* series shorter than five candles the classification is
    "Insufficient data" with zero volatility and zero change.
    """

    @given(closes=st.lists(st.floats(min_value=1.0, max_value=1000.0), max_size=4))
    @settings(max_examples=50)
    def test_short_series(self, closes: list[float]):
        result = classify(create_series(closes))
        assert result.trend == Trend.INSUFFICIENT_DATA
        assert result.volatility == 0.0
        assert result.period_change == 0.0


class TestTrendDetection:
    """
    **Feature: coinsight, Property 12: Trend Rules**

    Uptrend needs a rising EMA and RSI above 55; downtrend needs a falling
    EMA and RSI below 45; anything else is sideways.
    """

    def test_rising_series_is_uptrend(self):
        assert detect_trend(create_series([100.0 + i for i in range(30)])) == Trend.UPTREND

    def test_falling_series_is_downtrend(self):
        assert detect_trend(create_series([200.0 - i for i in range(30)])) == Trend.DOWNTREND

    def test_flat_series_is_sideways(self):
        assert detect_trend(create_series([100.0] * 30)) == Trend.SIDEWAYS

    def test_rising_with_moderate_rsi(self):
        series = create_series(zigzag(100.0, 2.0, 1.0, 40))
        assert series[-1].rsi14 == pytest.approx(200 / 3)
        assert detect_trend(series) == Trend.UPTREND

    def test_oscillation_is_sideways(self):
        series = create_series(zigzag(100.0, 1.0, 1.0, 40))
        assert series[-1].rsi14 == pytest.approx(50.0)
        assert detect_trend(series) == Trend.SIDEWAYS

    def test_missing_indicators_are_sideways(self):
        # Too short for EMA 20 and RSI 14
        assert detect_trend(create_series([100.0 + i for i in range(10)])) == Trend.SIDEWAYS

    @given(closes=st.lists(st.floats(min_value=1.0, max_value=1000.0), min_size=5, max_size=60))
    @settings(max_examples=100, deadline=None)
    def test_trend_consistent_with_indicators(self, closes: list[float]):
        series = create_series(closes)
        trend = detect_trend(series)
        latest, previous = series[-1], series[-5]

        if trend == Trend.UPTREND:
            assert latest.ema20 is not None and latest.rsi14 is not None
            assert latest.ema20 > (previous.ema20 or 0.0)
            assert latest.rsi14 > 55
        elif trend == Trend.DOWNTREND:
            assert latest.ema20 < (previous.ema20 or 0.0)
            assert (latest.rsi14 if latest.rsi14 is not None else 50.0) < 45
        else:
            assert trend == Trend.SIDEWAYS


class TestVolatility:
    """
    **Feature: coinsight, Property 13: Annualized Volatility**

    Volatility is the population standard deviation of log returns
    scaled by the square root of 252, and never negative.
    """

    def test_constant_prices(self):
        assert calculate_volatility(create_series([100.0] * 10)) == 0.0

    def test_known_value(self):
        series = create_series([100.0, 110.0, 100.0])
        assert calculate_volatility(series) == pytest.approx(math.log(1.1) * math.sqrt(252))

    def test_single_return_has_no_spread(self):
        assert calculate_volatility(create_series([100.0, 110.0])) == 0.0

    @pytest.mark.parametrize("count", [0, 1])
    def test_too_short(self, count: int):
        assert calculate_volatility(create_series([100.0] * count)) == 0.0

    def test_zero_close_skipped(self):
        series = create_series([100.0, 0.0, 100.0, 110.0, 100.0])
        # Only the 100 -> 110 -> 100 steps count
        assert calculate_volatility(series) == pytest.approx(math.log(1.1) * math.sqrt(252))

    @given(closes=st.lists(st.floats(min_value=0.01, max_value=1e6), min_size=5, max_size=60))
    @settings(max_examples=100, deadline=None)
    def test_non_negative(self, closes: list[float]):
        assert classify(create_series(closes)).volatility >= 0.0


class TestPeriodChange:
    """Percentage change from the first close to the last."""

    def test_rise(self):
        assert calculate_period_change(create_series([100.0, 105.0, 110.0])) == pytest.approx(10.0)

    def test_fall(self):
        assert calculate_period_change(create_series([200.0, 150.0])) == pytest.approx(-25.0)

    def test_zero_first_close(self):
        assert calculate_period_change(create_series([0.0, 10.0])) == 0.0

    def test_single_candle(self):
        assert calculate_period_change(create_series([10.0])) == 0.0

    def test_classify_reports_change(self):
        result = classify(create_series([100.0 + i for i in range(30)]))
        assert result.trend == Trend.UPTREND
        assert result.period_change == pytest.approx(29.0)
