"""Market data sources for coinsight."""

from coinsight.sources.base import BaseSource, SourceError, SymbolNotFoundError
from coinsight.sources.coincap import CoinCapSource
from coinsight.sources.coingecko import CoinGeckoSource
from coinsight.sources.resolver import SourceResolver, call_with_timeout
from coinsight.sources.symbols import COIN_IDS, get_coin_id
from coinsight.sources.synthetic import SyntheticGenerator

__all__ = [
    "BaseSource",
    "COIN_IDS",
    "CoinCapSource",
    "CoinGeckoSource",
    "SourceError",
    "SourceResolver",
    "SymbolNotFoundError",
    "SyntheticGenerator",
    "call_with_timeout",
    "get_coin_id",
]
