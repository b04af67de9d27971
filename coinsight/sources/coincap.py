"""CoinCap market data source."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

import requests

from coinsight.models import Sample, TimeframeConfig
from coinsight.sources.base import BaseSource, SourceError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CoinCapSource(BaseSource):
    """Price history from the CoinCap API.

    CoinCap history carries no volume, so samples have volume 0.
    """

    name = "coincap"
    BASE_URL = "https://api.coincap.io/v2"

    def __init__(
        self,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """Initialize the CoinCap source.

        Args:
            timeout: Per-request timeout in seconds.
            session: HTTP session to reuse.
            clock: Returns the current time; the history window ends there.
        """
        self.timeout = timeout
        self.session = session or requests.Session()
        self.clock = clock

    def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        url = f"{self.BASE_URL}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise SourceError(f"CoinCap request failed: {e}") from e

        if response.status_code != 200:
            raise SourceError(f"CoinCap returned HTTP {response.status_code} for {path}")

        try:
            return response.json()
        except ValueError as e:
            raise SourceError(f"CoinCap returned invalid JSON for {path}") from e

    def fetch_samples(self, coin_id: str, config: TimeframeConfig) -> list[Sample]:
        """Get price samples from ``/assets/{id}/history``."""
        end = self.clock()
        start = end - timedelta(days=config.days)
        params = {
            "interval": config.coincap_interval,
            "start": int(start.timestamp() * 1000),
            "end": int(end.timestamp() * 1000),
        }

        data = self._get(f"/assets/{coin_id}/history", params=params)

        samples = []
        for row in data.get("data") or []:
            price = row.get("priceUsd")
            if price is None or row.get("time") is None:
                continue
            samples.append(Sample(
                timestamp=datetime.fromtimestamp(row["time"] / 1000, tz=timezone.utc),
                price=float(price),
            ))

        samples.sort(key=lambda s: s.timestamp)
        logger.debug("CoinCap returned %d samples for %s/%s", len(samples), coin_id, config.code.value)
        return samples

    def lookup_coin_id(self, symbol: str) -> Optional[str]:
        """Search ``/assets`` for an asset with this ticker symbol."""
        data = self._get("/assets", params={"search": symbol})
        wanted = symbol.lower()
        try:
            for asset in data.get("data") or []:
                if str(asset.get("symbol", "")).lower() == wanted:
                    return asset.get("id")
        except (AttributeError, TypeError) as e:
            raise SourceError(f"CoinCap returned an unexpected asset list: {e}") from e
        return None
