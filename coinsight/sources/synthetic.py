"""Synthetic price series used when every real source fails."""

import math
import random
import zlib
from datetime import datetime, timezone
from typing import Callable

from coinsight.models import Sample, TimeframeConfig
from coinsight.models.sample import floor_timestamp

# Nominal prices for the demo series
BASE_PRICES = {
    "bitcoin": 45000.0,
    "ethereum": 2500.0,
}
DEFAULT_BASE_PRICE = 100.0

MAX_CANDLES = 100


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SyntheticGenerator:
    """Generates a plausible, reproducible price series.

    Prices follow a slow sine wave around a nominal base price with up to
    ±5% noise. The noise is drawn from a generator seeded with the coin id
    and timeframe, so the same inputs and clock give the same series.
    """

    name = "synthetic"

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self.clock = clock

    def generate(self, coin_id: str, config: TimeframeConfig) -> list[Sample]:
        """Generate samples ending at the current time.

        Enough samples are produced for ``min(points, 100)`` candles once
        the timeframe's aggregation is applied.
        """
        seed = zlib.crc32(f"{coin_id}:{config.code.value}".encode("utf-8"))
        rng = random.Random(seed)

        base_price = BASE_PRICES.get(coin_id, DEFAULT_BASE_PRICE)
        count = min(config.points, MAX_CANDLES) * config.samples_per_candle + 1
        end = floor_timestamp(self.clock(), config.sample_interval)

        samples = []
        for i in range(count - 1, -1, -1):
            noise = (rng.random() - 0.5) * 0.1
            price = base_price * (1 + math.sin(i * 0.1) * 0.15 + noise)
            samples.append(Sample(
                timestamp=end - i * config.sample_interval,
                price=price,
                volume=rng.random() * 1_000_000,
            ))

        return samples
