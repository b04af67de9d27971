"""Tests for rule-based commentary.

**Feature: coinsight**
"""

from datetime import datetime, timedelta, timezone

import pytest

from coinsight.analysis import (
    classify,
    describe_timeframe,
    interpret_bollinger,
    interpret_rsi,
    summarize_series,
    unavailable_report,
)
from coinsight.analysis.commentary import ema_position, horizon_note, volatility_band
from coinsight.indicators import annotate
from coinsight.models import (
    AnnotatedCandle,
    Candle,
    Horizon,
    TimeframeCode,
    TimeframeReport,
    get_timeframe,
)


def create_series(closes: list[float]) -> list[AnnotatedCandle]:
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return annotate([
        Candle(timestamp=start + timedelta(days=i), open=c, high=c, low=c, close=c)
        for i, c in enumerate(closes)
    ])


def zigzag(start: float, up: float, down: float, steps: int) -> list[float]:
    closes = [start]
    for i in range(steps):
        closes.append(closes[-1] + (up if i % 2 == 0 else -down))
    return closes


def create_report(closes: list[float], code: TimeframeCode = TimeframeCode.H24) -> TimeframeReport:
    candles = create_series(closes)
    result = classify(candles)
    return TimeframeReport(
        timeframe=code,
        label=get_timeframe(code).label,
        candles=tuple(candles),
        trend=result.trend,
        volatility=result.volatility,
        period_change=result.period_change,
        source="test",
    )


class TestInterpretations:
    """Signal text and color for indicator readings."""

    @pytest.mark.parametrize("value,expected", [
        (None, ("No Data", "dim")),
        (75.0, ("Overbought", "red")),
        (25.0, ("Oversold", "green")),
        (60.0, ("Bullish", "green")),
        (40.0, ("Bearish", "red")),
        (50.0, ("Neutral", "yellow")),
    ])
    def test_rsi(self, value, expected):
        assert interpret_rsi(value) == expected

    @pytest.mark.parametrize("price,expected", [
        (111.0, "Above Upper Band"),
        (89.0, "Below Lower Band"),
        (105.0, "Within Bands (upper half)"),
        (95.0, "Within Bands (lower half)"),
        (100.0, "At Middle Band"),
    ])
    def test_bollinger(self, price: float, expected: str):
        assert interpret_bollinger(price, 110.0, 100.0, 90.0)[0] == expected

    def test_bollinger_without_bands(self):
        assert interpret_bollinger(100.0, None, None, None) == ("Bands Unavailable", "dim")

    def test_ema_position(self):
        series = create_series([100.0 + i for i in range(25)])
        assert ema_position(series[-1]) == "above"
        assert ema_position(series[0]) is None

    @pytest.mark.parametrize("volatility,expected", [
        (0.8, "high"), (0.3, "moderate"), (0.2, "low"), (0.0, "low"),
    ])
    def test_volatility_band(self, volatility: float, expected: str):
        assert volatility_band(volatility) == expected

    def test_every_horizon_has_note(self):
        for horizon in Horizon:
            assert horizon_note(horizon)


class TestDescribeTimeframe:
    """Paragraph describing one timeframe report."""

    def test_unavailable(self):
        report = unavailable_report(get_timeframe("30m"), "offline")
        assert describe_timeframe(report) == "Data for the 30m timeframe is not available."

    def test_rising_series(self):
        text = describe_timeframe(create_report([100.0 + i for i in range(30)]))

        assert text.startswith("24h analysis: the trend is uptrend")
        assert "+29.00%" in text
        assert "overbought" in text
        assert "above the EMA-20" in text
        assert horizon_note(Horizon.SWING) in text

    def test_short_series_without_rsi(self):
        text = describe_timeframe(create_report([100.0, 101.0], code=TimeframeCode.YEAR1))
        assert "RSI is not available yet." in text
        assert horizon_note(Horizon.LONG_TERM) in text


class TestSummarizeSeries:
    """Multi-line summary ending in a trading hint."""

    def test_empty(self):
        assert summarize_series([], "BTC", "24h") == "Unable to analyze BTC at this time."

    def test_buy_hint(self):
        text = summarize_series(create_series(zigzag(100.0, 2.0, 1.0, 40)), "BTC", "1h")

        assert text.splitlines()[0] == "BTC Analysis (1h)"
        assert "Trend: Uptrend" in text
        assert text.splitlines()[-1].startswith("Hint: BUY")

    def test_sell_hint(self):
        text = summarize_series(create_series(zigzag(200.0, 1.0, 2.0, 40)), "ETH", "24h")
        assert "Trend: Downtrend" in text
        assert text.splitlines()[-1].startswith("Hint: SELL")

    def test_wait_on_extreme_rsi(self):
        text = summarize_series(create_series([100.0 + i for i in range(30)]), "SOL", "24h")
        assert text.splitlines()[-1].startswith("Hint: WAIT")

    def test_hold_on_mixed_signals(self):
        text = summarize_series(create_series(zigzag(100.0, 1.0, 1.0, 40)), "ADA", "24h")
        assert "Trend: Sideways" in text
        assert text.splitlines()[-1].startswith("Hint: HOLD")
