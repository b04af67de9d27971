"""Candle construction, classification and multi-timeframe synthesis."""

from coinsight.analysis.aggregator import (
    aggregate,
    build_candles,
    from_price_points,
    halve,
)
from coinsight.analysis.classifier import (
    calculate_period_change,
    calculate_volatility,
    classify,
    detect_trend,
)
from coinsight.analysis.commentary import (
    describe_timeframe,
    interpret_bollinger,
    interpret_rsi,
    summarize_series,
)
from coinsight.analysis.synthesizer import (
    MultiTimeframeSynthesizer,
    reduce_reports,
    synthesize_multi_timeframe,
    unavailable_report,
)

__all__ = [
    "MultiTimeframeSynthesizer",
    "aggregate",
    "build_candles",
    "calculate_period_change",
    "calculate_volatility",
    "classify",
    "describe_timeframe",
    "detect_trend",
    "from_price_points",
    "halve",
    "interpret_bollinger",
    "interpret_rsi",
    "reduce_reports",
    "summarize_series",
    "synthesize_multi_timeframe",
    "unavailable_report",
]
