"""Data models for coinsight."""

from coinsight.models.sample import Sample
from coinsight.models.candle import AnnotatedCandle, Candle, IndicatorSet
from coinsight.models.timeframe import (
    TIMEFRAMES,
    AggregationMode,
    Horizon,
    TimeframeCode,
    TimeframeConfig,
    UnsupportedTimeframeError,
    get_timeframe,
)
from coinsight.models.report import (
    Classification,
    MultiTimeframeAnalysis,
    Recommendation,
    RiskLevel,
    Sentiment,
    SourceResult,
    Synthesis,
    TimeframeReport,
    Trend,
)

__all__ = [
    "AggregationMode",
    "AnnotatedCandle",
    "Candle",
    "Classification",
    "Horizon",
    "IndicatorSet",
    "MultiTimeframeAnalysis",
    "Recommendation",
    "RiskLevel",
    "Sample",
    "Sentiment",
    "SourceResult",
    "Synthesis",
    "TIMEFRAMES",
    "TimeframeCode",
    "TimeframeConfig",
    "TimeframeReport",
    "Trend",
    "UnsupportedTimeframeError",
    "get_timeframe",
]
