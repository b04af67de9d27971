"""Attach indicator values to a candle series."""

import math
from typing import Optional, Sequence

from coinsight.indicators.technical import (
    calculate_bollinger_bands,
    calculate_ema,
    calculate_rsi,
)
from coinsight.models import AnnotatedCandle, Candle

EMA_PERIOD = 20
RSI_PERIOD = 14
BB_PERIOD = 20
BB_STD = 2.0


def _defined(value: float) -> Optional[float]:
    """Map the NaN marker to None."""
    return None if math.isnan(value) else value


def annotate(
    candles: Sequence[Candle],
    ema_period: int = EMA_PERIOD,
    rsi_period: int = RSI_PERIOD,
    bb_period: int = BB_PERIOD,
    bb_std: float = BB_STD,
) -> list[AnnotatedCandle]:
    """Compute EMA, RSI and Bollinger Bands for every candle.

    The result is a new list; OHLCV values are copied unchanged and
    indicators that lack history are left as None.

    Args:
        candles: Candles in ascending time order.
        ema_period: EMA period (default 20).
        rsi_period: RSI period (default 14).
        bb_period: Bollinger Band period (default 20).
        bb_std: Bollinger Band standard deviation multiplier (default 2.0).

    Returns:
        List of annotated candles, one per input candle.
    """
    closes = [c.close for c in candles]

    ema = calculate_ema(closes, ema_period)
    rsi = calculate_rsi(closes, rsi_period)
    upper, middle, lower = calculate_bollinger_bands(closes, bb_period, bb_std)

    return [
        AnnotatedCandle(
            timestamp=candle.timestamp,
            open=candle.open,
            high=candle.high,
            low=candle.low,
            close=candle.close,
            volume=candle.volume,
            ema20=_defined(ema[i]),
            rsi14=_defined(rsi[i]),
            bb_upper=_defined(upper[i]),
            bb_middle=_defined(middle[i]),
            bb_lower=_defined(lower[i]),
        )
        for i, candle in enumerate(candles)
    ]


def compute_series(candles: Sequence[Candle]) -> list[AnnotatedCandle]:
    """Annotate candles with the default indicator set.

    This is the entry point used by chart and commentary consumers.
    """
    return annotate(candles)
