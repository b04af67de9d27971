"""Candle (OHLCV) and indicator data models."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from coinsight.models.sample import ensure_utc


class Candle(BaseModel):
    """Represents a single OHLCV candle."""

    timestamp: datetime = Field(..., description="Bucket start time (UTC)")
    open: float = Field(..., ge=0, description="Opening price")
    high: float = Field(..., ge=0, description="High price")
    low: float = Field(..., ge=0, description="Low price")
    close: float = Field(..., ge=0, description="Closing price")
    volume: float = Field(default=0.0, ge=0, description="Traded volume")

    model_config = {"frozen": True}

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @model_validator(mode="after")
    def _check_range(self) -> "Candle":
        if self.high < max(self.open, self.close):
            raise ValueError(f"high {self.high} is below open/close")
        if self.low > min(self.open, self.close):
            raise ValueError(f"low {self.low} is above open/close")
        return self


class IndicatorSet(BaseModel):
    """Indicator values attached to one candle.

    ``None`` means the indicator window has not filled yet. It is never
    a stand-in for zero.
    """

    ema20: Optional[float] = Field(default=None, description="20-period EMA")
    rsi14: Optional[float] = Field(default=None, description="14-period RSI (0-100)")
    bb_upper: Optional[float] = Field(default=None, description="Upper Bollinger Band")
    bb_middle: Optional[float] = Field(default=None, description="Bollinger mean (SMA)")
    bb_lower: Optional[float] = Field(default=None, description="Lower Bollinger Band")

    model_config = {"frozen": True}


class AnnotatedCandle(Candle):
    """A candle carrying its computed indicator values."""

    ema20: Optional[float] = Field(default=None, description="20-period EMA")
    rsi14: Optional[float] = Field(default=None, description="14-period RSI (0-100)")
    bb_upper: Optional[float] = Field(default=None, description="Upper Bollinger Band")
    bb_middle: Optional[float] = Field(default=None, description="Bollinger mean (SMA)")
    bb_lower: Optional[float] = Field(default=None, description="Lower Bollinger Band")

    @property
    def indicators(self) -> IndicatorSet:
        """Indicator fields as a standalone set."""
        return IndicatorSet(
            ema20=self.ema20,
            rsi14=self.rsi14,
            bb_upper=self.bb_upper,
            bb_middle=self.bb_middle,
            bb_lower=self.bb_lower,
        )

    def to_candle(self) -> Candle:
        """Strip the indicator fields."""
        return Candle(
            timestamp=self.timestamp,
            open=self.open,
            high=self.high,
            low=self.low,
            close=self.close,
            volume=self.volume,
        )
