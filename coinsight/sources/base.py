"""Base market data source interface for coinsight."""

from abc import ABC, abstractmethod
from typing import Optional

from coinsight.models import Sample, TimeframeConfig


class SourceError(Exception):
    """Raised when a data source cannot serve a request."""


class SymbolNotFoundError(ValueError):
    """Raised when a ticker symbol cannot be mapped to an asset id."""


class BaseSource(ABC):
    """Abstract base class for price feeds.

    Implementations (CoinGecko, CoinCap, ...) return raw samples and
    leave candle construction to the aggregator.
    """

    name: str = "source"

    @abstractmethod
    def fetch_samples(self, coin_id: str, config: TimeframeConfig) -> list[Sample]:
        """Get price samples covering a timeframe's history span.

        Args:
            coin_id: Asset identifier (e.g. "bitcoin").
            config: Timeframe to fetch history for.

        Returns:
            Samples in ascending time order. May be empty.

        Raises:
            SourceError: If the source cannot be reached or replies with
                an error.
        """
        pass

    @abstractmethod
    def lookup_coin_id(self, symbol: str) -> Optional[str]:
        """Find the asset id for a ticker symbol.

        Args:
            symbol: Ticker symbol (e.g. "BTC").

        Returns:
            Asset id, or None if the source does not list the symbol.

        Raises:
            SourceError: If the source cannot be reached.
        """
        pass
