"""coinsight - technical analysis signals for crypto assets."""

from coinsight.analysis import MultiTimeframeSynthesizer, synthesize_multi_timeframe
from coinsight.indicators import compute_series

__version__ = "0.1.0"

__all__ = [
    "MultiTimeframeSynthesizer",
    "compute_series",
    "synthesize_multi_timeframe",
]
