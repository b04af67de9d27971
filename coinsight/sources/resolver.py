"""Ordered source fallback with a synthetic last resort."""

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from functools import partial
from typing import Callable, Optional, Sequence, TypeVar, Union

from coinsight.models import SourceResult, TimeframeCode, get_timeframe
from coinsight.sources.base import BaseSource
from coinsight.sources.synthetic import SyntheticGenerator

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT = 15.0


def call_with_timeout(func: Callable[[], T], timeout: float) -> T:
    """Run ``func`` on a worker thread and wait at most ``timeout`` seconds.

    Raises:
        TimeoutError: If the call does not finish in time. The pending
            call is cancelled and its thread is not waited for.
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="coinsight-source")
    future = executor.submit(func)
    try:
        return future.result(timeout=timeout)
    except FutureTimeoutError:
        future.cancel()
        raise TimeoutError(f"call did not finish within {timeout:g}s") from None
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


class SourceResolver:
    """Fetches samples from the first source that returns any.

    Sources are tried strictly in rank order, each bounded by ``timeout``
    seconds. A source that raises, times out or returns nothing is
    skipped. When none succeeds the synthetic generator supplies the
    series and the result is flagged as synthetic.
    """

    def __init__(
        self,
        sources: Sequence[BaseSource],
        generator: Optional[SyntheticGenerator] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.sources = list(sources)
        self.generator = generator or SyntheticGenerator()
        self.timeout = timeout

    def resolve(self, coin_id: str, timeframe: Union[str, TimeframeCode]) -> SourceResult:
        """Get samples for an asset and timeframe.

        Raises:
            UnsupportedTimeframeError: If the timeframe is unknown.
        """
        config = get_timeframe(timeframe)

        for source in self.sources:
            logger.debug("Fetching %s/%s from %s", coin_id, config.code.value, source.name)
            try:
                samples = call_with_timeout(
                    partial(source.fetch_samples, coin_id, config), self.timeout
                )
            except TimeoutError:
                logger.warning(
                    "%s timed out after %gs for %s/%s",
                    source.name, self.timeout, coin_id, config.code.value,
                )
                continue
            except Exception as e:
                logger.warning("%s failed for %s/%s: %s", source.name, coin_id, config.code.value, e)
                continue

            if samples:
                return SourceResult(samples=tuple(samples), source=source.name, synthetic=False)

            logger.debug("%s returned no data for %s/%s", source.name, coin_id, config.code.value)

        logger.warning(
            "All sources failed for %s/%s, using synthetic data", coin_id, config.code.value
        )
        samples = self.generator.generate(coin_id, config)
        return SourceResult(samples=tuple(samples), source=self.generator.name, synthetic=True)
