"""Timeframe configuration table.

The nine supported timeframes are fixed at import time. Each entry says
how much history to request from a source, at which native resolution,
and how the returned samples are turned into candles.
"""

from datetime import timedelta
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union

from pydantic import BaseModel, Field


class UnsupportedTimeframeError(ValueError):
    """Raised when a timeframe code is not in the timeframe table."""


class TimeframeCode(str, Enum):
    """Supported timeframe codes."""

    M15 = "15m"
    M30 = "30m"
    H1 = "1h"
    H12 = "12h"
    H24 = "24h"
    D7 = "7d"
    D30 = "30d"
    MONTH6 = "6M"
    YEAR1 = "1Y"

    @classmethod
    def parse(cls, value: Union[str, "TimeframeCode"]) -> "TimeframeCode":
        """Parse a timeframe code.

        Exact codes are tried first, then a case-insensitive match
        (so ``1y`` and ``6m`` resolve to ``1Y`` and ``6M``).

        Raises:
            UnsupportedTimeframeError: If the code is unknown.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            pass
        lowered = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        supported = ", ".join(member.value for member in cls)
        raise UnsupportedTimeframeError(
            f"Unsupported timeframe: {value!r}. Must be one of: {supported}"
        )


class AggregationMode(str, Enum):
    """How source samples become candles."""

    BUCKET = "bucket"  # floor timestamps into fixed buckets
    HALVE = "halve"  # bucket at half the duration, then merge pairs per window
    POINTS = "points"  # one candle per price point, open = previous close


class Horizon(str, Enum):
    """Trading horizon a timeframe is suited to."""

    SCALPING = "scalping"
    DAY_TRADING = "day_trading"
    SWING = "swing"
    POSITION = "position"
    LONG_TERM = "long_term"


class TimeframeConfig(BaseModel):
    """Static description of one timeframe."""

    code: TimeframeCode = Field(..., description="Timeframe code")
    label: str = Field(..., description="Human readable duration")
    days: int = Field(..., gt=0, description="History span requested from sources")
    points: int = Field(..., gt=0, description="Target number of candles")
    mode: AggregationMode = Field(..., description="Candle construction mode")
    bucket: timedelta = Field(..., description="Duration of one output candle")
    sample_interval: timedelta = Field(..., description="Native sample spacing")
    coingecko_interval: Optional[str] = Field(
        default=None, description="CoinGecko market_chart interval (None = automatic)"
    )
    coingecko_days: Optional[int] = Field(
        default=None, gt=0, description="CoinGecko history span when it must differ from days"
    )
    coincap_interval: str = Field(..., description="CoinCap history interval")
    horizon: Horizon = Field(..., description="Trading horizon")

    model_config = {"frozen": True}

    @property
    def samples_per_candle(self) -> int:
        """Number of native samples that make up one candle."""
        if self.mode is AggregationMode.POINTS:
            return 1
        return max(1, int(self.bucket / self.sample_interval))

    @property
    def coingecko_span(self) -> int:
        """Days of history to request from CoinGecko.

        CoinGecko only serves 5-minute data for ranges up to one day, so
        intraday timeframes that need it ask for a shorter span.
        """
        return self.coingecko_days or self.days


_MINUTE = timedelta(minutes=1)
_HOUR = timedelta(hours=1)
_DAY = timedelta(days=1)


TIMEFRAMES: Mapping[TimeframeCode, TimeframeConfig] = MappingProxyType({
    config.code: config
    for config in (
        TimeframeConfig(
            code=TimeframeCode.M15, label="15 Minutes", days=1, points=96,
            mode=AggregationMode.BUCKET, bucket=15 * _MINUTE, sample_interval=5 * _MINUTE,
            coincap_interval="m5", horizon=Horizon.SCALPING,
        ),
        TimeframeConfig(
            code=TimeframeCode.M30, label="30 Minutes", days=2, points=96,
            mode=AggregationMode.BUCKET, bucket=30 * _MINUTE, sample_interval=5 * _MINUTE,
            coingecko_days=1, coincap_interval="m5", horizon=Horizon.SCALPING,
        ),
        TimeframeConfig(
            code=TimeframeCode.H1, label="1 Hour", days=7, points=168,
            mode=AggregationMode.POINTS, bucket=_HOUR, sample_interval=_HOUR,
            coincap_interval="h1", horizon=Horizon.DAY_TRADING,
        ),
        TimeframeConfig(
            code=TimeframeCode.H12, label="12 Hours", days=30, points=60,
            mode=AggregationMode.HALVE, bucket=12 * _HOUR, sample_interval=_HOUR,
            coincap_interval="h1", horizon=Horizon.SWING,
        ),
        TimeframeConfig(
            code=TimeframeCode.H24, label="24 Hours", days=30, points=30,
            mode=AggregationMode.POINTS, bucket=_DAY, sample_interval=_DAY,
            coingecko_interval="daily", coincap_interval="d1", horizon=Horizon.SWING,
        ),
        TimeframeConfig(
            code=TimeframeCode.D7, label="7 Days", days=180, points=26,
            mode=AggregationMode.POINTS, bucket=_DAY, sample_interval=_DAY,
            coingecko_interval="daily", coincap_interval="d1", horizon=Horizon.POSITION,
        ),
        TimeframeConfig(
            code=TimeframeCode.D30, label="30 Days", days=365, points=12,
            mode=AggregationMode.POINTS, bucket=_DAY, sample_interval=_DAY,
            coingecko_interval="daily", coincap_interval="d1", horizon=Horizon.POSITION,
        ),
        TimeframeConfig(
            code=TimeframeCode.MONTH6, label="6 Months", days=1095, points=6,
            mode=AggregationMode.POINTS, bucket=_DAY, sample_interval=_DAY,
            coingecko_interval="daily", coincap_interval="d1", horizon=Horizon.LONG_TERM,
        ),
        TimeframeConfig(
            code=TimeframeCode.YEAR1, label="1 Year", days=1825, points=5,
            mode=AggregationMode.POINTS, bucket=_DAY, sample_interval=_DAY,
            coingecko_interval="daily", coincap_interval="d1", horizon=Horizon.LONG_TERM,
        ),
    )
})


def get_timeframe(code: Union[str, TimeframeCode]) -> TimeframeConfig:
    """Look up the configuration for a timeframe code.

    Raises:
        UnsupportedTimeframeError: If the code is unknown.
    """
    return TIMEFRAMES[TimeframeCode.parse(code)]
