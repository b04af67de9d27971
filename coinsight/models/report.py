"""Analysis result data models."""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from coinsight.models.candle import AnnotatedCandle
from coinsight.models.sample import Sample
from coinsight.models.timeframe import TimeframeCode


class Trend(str, Enum):
    """Directional classification of a series."""

    UPTREND = "Uptrend"
    DOWNTREND = "Downtrend"
    SIDEWAYS = "Sideways"
    INSUFFICIENT_DATA = "Insufficient data"
    UNKNOWN = "Unknown"


class Sentiment(str, Enum):
    """Overall cross-timeframe sentiment."""

    BULLISH = "Bullish"
    SLIGHTLY_BULLISH = "Slightly Bullish"
    NEUTRAL = "Neutral"
    SLIGHTLY_BEARISH = "Slightly Bearish"
    BEARISH = "Bearish"


class RiskLevel(str, Enum):
    """Risk bucket derived from average volatility."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Recommendation(str, Enum):
    """Trading recommendation."""

    BUY = "Buy"
    SELL = "Sell"
    HOLD = "Hold"
    WAIT = "Wait"


class Classification(BaseModel):
    """Trend and volatility metrics for one series."""

    trend: Trend = Field(..., description="Trend label")
    volatility: float = Field(default=0.0, ge=0, description="Annualized volatility")
    period_change: float = Field(default=0.0, description="Close-to-close change in percent")

    model_config = {"frozen": True}


class SourceResult(BaseModel):
    """Samples returned by the source resolution policy, with provenance."""

    samples: tuple[Sample, ...] = Field(..., description="Samples, ascending by time")
    source: str = Field(..., description="Name of the source that produced them")
    synthetic: bool = Field(default=False, description="True when generated, not fetched")

    model_config = {"frozen": True}


class TimeframeReport(BaseModel):
    """Analysis of one timeframe."""

    timeframe: TimeframeCode = Field(..., description="Timeframe code")
    label: str = Field(..., description="Human readable duration")
    candles: tuple[AnnotatedCandle, ...] = Field(default=(), description="Annotated candles")
    trend: Trend = Field(..., description="Trend label")
    volatility: float = Field(default=0.0, ge=0, description="Annualized volatility")
    period_change: float = Field(default=0.0, description="Change over the series in percent")
    source: Optional[str] = Field(default=None, description="Source of the samples")
    synthetic: bool = Field(default=False, description="Whether samples were generated")
    error: Optional[str] = Field(default=None, description="Why data is unavailable")

    model_config = {"frozen": True}

    @property
    def available(self) -> bool:
        """Whether this timeframe produced any candles."""
        return len(self.candles) > 0


class Synthesis(BaseModel):
    """Cross-timeframe reduction of trend and volatility."""

    overall_sentiment: Sentiment = Field(..., description="Overall sentiment")
    risk_level: RiskLevel = Field(..., description="Risk level")
    recommendation: Recommendation = Field(..., description="Trading recommendation")

    model_config = {"frozen": True}


class MultiTimeframeAnalysis(BaseModel):
    """Reports for every timeframe plus their synthesis."""

    symbol: str = Field(..., min_length=1, description="Ticker symbol, upper case")
    coin_id: str = Field(..., min_length=1, description="Resolved asset identifier")
    generated_at: datetime = Field(..., description="Analysis time")
    reports: tuple[TimeframeReport, ...] = Field(..., description="One report per timeframe")
    synthesis: Synthesis = Field(..., description="Overall sentiment, risk and recommendation")

    model_config = {"frozen": True}

    def report(self, timeframe: TimeframeCode) -> Optional[TimeframeReport]:
        """Find the report for a timeframe."""
        for item in self.reports:
            if item.timeframe == timeframe:
                return item
        return None
