"""Candle construction from raw samples."""

from datetime import datetime, timedelta
from typing import Optional, Sequence

from coinsight.models import AggregationMode, Candle, Sample, TimeframeConfig
from coinsight.models.sample import floor_timestamp


def _make_candle(bucket_start: datetime, bucket: list[Sample]) -> Candle:
    prices = [s.price for s in bucket]
    return Candle(
        timestamp=bucket_start,
        open=prices[0],
        high=max(prices),
        low=min(prices),
        close=prices[-1],
        volume=sum(s.volume for s in bucket),
    )


def aggregate(samples: Sequence[Sample], bucket: timedelta) -> list[Candle]:
    """Bucket samples into fixed-duration OHLCV candles.

    Samples must already be in ascending time order; they are not sorted
    here.

    Args:
        samples: Samples in ascending time order.
        bucket: Candle duration.

    Returns:
        Candles in ascending time order. Empty input gives an empty list.

    Raises:
        ValueError: If ``bucket`` is not positive or samples go back in time.
    """
    if bucket <= timedelta(0):
        raise ValueError(f"Bucket duration must be positive, got {bucket}")

    result: list[Candle] = []
    current: list[Sample] = []
    current_start = None

    for sample in samples:
        start = floor_timestamp(sample.timestamp, bucket)

        if current_start is None:
            current_start = start
        elif start < current_start:
            raise ValueError(
                f"Samples must be sorted by timestamp: {sample.timestamp.isoformat()} "
                f"falls before bucket {current_start.isoformat()}"
            )
        elif start > current_start:
            result.append(_make_candle(current_start, current))
            current = []
            current_start = start

        current.append(sample)

    if current:
        result.append(_make_candle(current_start, current))

    return result


def _merge(first: Candle, second: Candle, timestamp: datetime) -> Candle:
    return Candle(
        timestamp=timestamp,
        open=first.open,
        high=max(first.high, second.high),
        low=min(first.low, second.low),
        close=second.close,
        volume=first.volume + second.volume,
    )


def halve(candles: Sequence[Candle], window: Optional[timedelta] = None) -> list[Candle]:
    """Merge pairs of candles into candles twice as long.

    Without ``window`` consecutive pairs are merged by position and a
    trailing unpaired candle is emitted on its own. With ``window`` only
    candles sharing the same window start are merged, and each result is
    stamped with that window start, so gaps never pull candles from
    different windows together.
    """
    result: list[Candle] = []

    if window is None:
        for i in range(0, len(candles), 2):
            first = candles[i]
            if i + 1 < len(candles):
                result.append(_merge(first, candles[i + 1], first.timestamp))
            else:
                result.append(first.model_copy())
        return result

    for candle in candles:
        start = floor_timestamp(candle.timestamp, window)
        if result and result[-1].timestamp == start:
            result[-1] = _merge(result[-1], candle, start)
        else:
            result.append(candle.model_copy(update={"timestamp": start}))

    return result


def from_price_points(samples: Sequence[Sample]) -> list[Candle]:
    """Build candles from a feed that supplies one price per period.

    Each candle opens at the previous sample's price and closes at its
    own, so the first sample only seeds the next open.
    """
    result = []

    for previous, sample in zip(samples, samples[1:]):
        result.append(Candle(
            timestamp=sample.timestamp,
            open=previous.price,
            high=max(previous.price, sample.price),
            low=min(previous.price, sample.price),
            close=sample.price,
            volume=sample.volume,
        ))

    return result


def build_candles(samples: Sequence[Sample], config: TimeframeConfig) -> list[Candle]:
    """Turn source samples into candles the way the timeframe requires."""
    if config.mode is AggregationMode.BUCKET:
        return aggregate(samples, config.bucket)
    if config.mode is AggregationMode.HALVE:
        return halve(aggregate(samples, config.bucket / 2), window=config.bucket)
    if config.mode is AggregationMode.POINTS:
        return from_price_points(samples)
    raise ValueError(f"Unhandled aggregation mode: {config.mode}")
