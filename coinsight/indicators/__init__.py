"""Technical indicators module."""

from coinsight.indicators.technical import (
    calculate_bollinger_bands,
    calculate_ema,
    calculate_rsi,
    calculate_sma,
)
from coinsight.indicators.series import annotate, compute_series

__all__ = [
    "annotate",
    "calculate_bollinger_bands",
    "calculate_ema",
    "calculate_rsi",
    "calculate_sma",
    "compute_series",
]
