"""Trend and volatility classification of an annotated series."""

import math
from typing import Sequence

from coinsight.models import AnnotatedCandle, Candle, Classification, Trend

MIN_CANDLES = 5
TRADING_DAYS = 252

RSI_BULLISH = 55
RSI_BEARISH = 45


def detect_trend(candles: Sequence[AnnotatedCandle]) -> Trend:
    """Classify the trend from EMA slope and RSI level.

    Compares the latest candle against the fifth-from-last. A missing EMA
    counts as 0 and a missing RSI as 50 for this comparison.
    """
    if len(candles) < MIN_CANDLES:
        return Trend.INSUFFICIENT_DATA

    latest = candles[-1]
    previous = candles[-MIN_CANDLES]

    latest_ema = latest.ema20 if latest.ema20 is not None else 0.0
    previous_ema = previous.ema20 if previous.ema20 is not None else 0.0
    latest_rsi = latest.rsi14 if latest.rsi14 is not None else 50.0

    if latest_ema > previous_ema and latest_rsi > RSI_BULLISH:
        return Trend.UPTREND
    elif latest_ema < previous_ema and latest_rsi < RSI_BEARISH:
        return Trend.DOWNTREND
    else:
        return Trend.SIDEWAYS


def calculate_volatility(candles: Sequence[Candle]) -> float:
    """Annualized standard deviation of close-to-close log returns.

    Steps involving a non-positive close are skipped.
    """
    if len(candles) < 2:
        return 0.0

    returns = [
        math.log(current.close / previous.close)
        for previous, current in zip(candles, candles[1:])
        if previous.close > 0 and current.close > 0
    ]
    if not returns:
        return 0.0

    mean = sum(returns) / len(returns)
    variance = sum((r - mean) ** 2 for r in returns) / len(returns)

    return math.sqrt(variance) * math.sqrt(TRADING_DAYS)


def calculate_period_change(candles: Sequence[Candle]) -> float:
    """Percentage change from the first close to the last."""
    if len(candles) < 2:
        return 0.0

    first = candles[0].close
    last = candles[-1].close
    if first == 0:
        return 0.0

    return (last - first) / first * 100


def classify(candles: Sequence[AnnotatedCandle]) -> Classification:
    """Derive trend, volatility and period change for a series.

    Fewer than five candles is reported as insufficient data with zero
    volatility and zero change.
    """
    if len(candles) < MIN_CANDLES:
        return Classification(trend=Trend.INSUFFICIENT_DATA, volatility=0.0, period_change=0.0)

    return Classification(
        trend=detect_trend(candles),
        volatility=calculate_volatility(candles),
        period_change=calculate_period_change(candles),
    )
