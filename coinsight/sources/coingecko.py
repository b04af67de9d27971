"""CoinGecko market data source."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import requests

from coinsight.models import Sample, TimeframeConfig
from coinsight.sources.base import BaseSource, SourceError

logger = logging.getLogger(__name__)


class CoinGeckoSource(BaseSource):
    """Price history from the CoinGecko public API."""

    name = "coingecko"
    BASE_URL = "https://api.coingecko.com/api/v3"

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the CoinGecko source.

        Args:
            api_key: Optional demo API key sent as ``x-cg-demo-api-key``.
            timeout: Per-request timeout in seconds.
            session: HTTP session to reuse.
        """
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get_headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": "coinsight/0.1",
        }
        if self.api_key:
            headers["x-cg-demo-api-key"] = self.api_key
        return headers

    def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        url = f"{self.BASE_URL}{path}"
        try:
            response = self.session.get(
                url, params=params, headers=self._get_headers(), timeout=self.timeout
            )
        except requests.RequestException as e:
            raise SourceError(f"CoinGecko request failed: {e}") from e

        if response.status_code != 200:
            raise SourceError(f"CoinGecko returned HTTP {response.status_code} for {path}")

        try:
            return response.json()
        except ValueError as e:
            raise SourceError(f"CoinGecko returned invalid JSON for {path}") from e

    def fetch_samples(self, coin_id: str, config: TimeframeConfig) -> list[Sample]:
        """Get price samples from ``/coins/{id}/market_chart``.

        Volumes are paired with prices by position; a missing volume
        counts as 0.
        """
        params: dict[str, Any] = {"vs_currency": "usd", "days": config.coingecko_span}
        if config.coingecko_interval:
            params["interval"] = config.coingecko_interval

        data = self._get(f"/coins/{coin_id}/market_chart", params=params)
        prices = data.get("prices") or []
        volumes = data.get("total_volumes") or []

        samples = []
        for i, point in enumerate(prices):
            if len(point) < 2 or point[1] is None:
                continue
            volume = volumes[i][1] if i < len(volumes) and volumes[i][1] is not None else 0.0
            samples.append(Sample(
                timestamp=datetime.fromtimestamp(point[0] / 1000, tz=timezone.utc),
                price=float(point[1]),
                volume=float(volume),
            ))

        samples.sort(key=lambda s: s.timestamp)
        logger.debug("CoinGecko returned %d samples for %s/%s", len(samples), coin_id, config.code.value)
        return samples

    def lookup_coin_id(self, symbol: str) -> Optional[str]:
        """Search ``/coins/list`` for a coin with this ticker symbol."""
        coins = self._get("/coins/list")
        wanted = symbol.lower()
        try:
            for coin in coins:
                if str(coin.get("symbol", "")).lower() == wanted:
                    return coin.get("id")
        except (AttributeError, TypeError) as e:
            raise SourceError(f"CoinGecko returned an unexpected coin list: {e}") from e
        return None
