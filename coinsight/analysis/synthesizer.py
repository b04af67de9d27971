"""Multi-timeframe analysis and cross-timeframe synthesis.

Each timeframe runs the same chain (resolve samples, build candles,
annotate, classify) independently on a bounded thread pool. A timeframe
that fails or runs past its deadline is reported as unavailable; the
rest of the analysis still completes.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence, Union

from coinsight.analysis.aggregator import build_candles
from coinsight.analysis.classifier import classify
from coinsight.indicators import annotate
from coinsight.models import (
    TIMEFRAMES,
    MultiTimeframeAnalysis,
    Recommendation,
    RiskLevel,
    Sentiment,
    Synthesis,
    TimeframeCode,
    TimeframeConfig,
    TimeframeReport,
    Trend,
    get_timeframe,
)
from coinsight.sources import SourceResolver, get_coin_id

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = len(TIMEFRAMES)
DEFAULT_TASK_TIMEOUT = 60.0

SENTIMENT_MARGIN = 2
HIGH_RISK_VOLATILITY = 0.4
LOW_RISK_VOLATILITY = 0.15


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def unavailable_report(config: TimeframeConfig, error: str) -> TimeframeReport:
    """Placeholder report for a timeframe whose analysis failed."""
    return TimeframeReport(
        timeframe=config.code,
        label=config.label,
        candles=(),
        trend=Trend.UNKNOWN,
        volatility=0.0,
        period_change=0.0,
        error=error,
    )


def reduce_reports(reports: Sequence[TimeframeReport]) -> Synthesis:
    """Combine per-timeframe trends and volatility into one outlook.

    Only timeframes that produced candles take part.

    Args:
        reports: Timeframe reports, in any order.

    Returns:
        Overall sentiment, risk level and recommendation.
    """
    available = [r for r in reports if r.available]

    bullish = sum(1 for r in available if r.trend == Trend.UPTREND)
    bearish = sum(1 for r in available if r.trend == Trend.DOWNTREND)

    if bullish > bearish + SENTIMENT_MARGIN:
        sentiment = Sentiment.BULLISH
    elif bearish > bullish + SENTIMENT_MARGIN:
        sentiment = Sentiment.BEARISH
    elif bullish > bearish:
        sentiment = Sentiment.SLIGHTLY_BULLISH
    elif bearish > bullish:
        sentiment = Sentiment.SLIGHTLY_BEARISH
    else:
        sentiment = Sentiment.NEUTRAL

    avg_volatility = sum(r.volatility for r in available) / len(available) if available else 0.0

    if avg_volatility > HIGH_RISK_VOLATILITY:
        risk = RiskLevel.HIGH
    elif avg_volatility < LOW_RISK_VOLATILITY:
        risk = RiskLevel.LOW
    else:
        risk = RiskLevel.MEDIUM

    if sentiment == Sentiment.BULLISH and risk != RiskLevel.HIGH:
        recommendation = Recommendation.BUY
    elif sentiment == Sentiment.BEARISH and risk != RiskLevel.HIGH:
        recommendation = Recommendation.SELL
    elif risk == RiskLevel.HIGH:
        recommendation = Recommendation.WAIT
    else:
        recommendation = Recommendation.HOLD

    return Synthesis(overall_sentiment=sentiment, risk_level=risk, recommendation=recommendation)


class MultiTimeframeSynthesizer:
    """Runs the analysis chain for every timeframe and reduces the results."""

    def __init__(
        self,
        resolver: SourceResolver,
        max_workers: int = DEFAULT_MAX_WORKERS,
        task_timeout: float = DEFAULT_TASK_TIMEOUT,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """Initialize the synthesizer.

        Args:
            resolver: Source resolution policy supplying samples.
            max_workers: Number of timeframes analysed at once.
            task_timeout: Seconds to wait for the timeframe tasks before
                reporting the unfinished ones as unavailable.
            clock: Returns the analysis timestamp.
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.resolver = resolver
        self.max_workers = max_workers
        self.task_timeout = task_timeout
        self.clock = clock

    def analyze_timeframe(
        self, coin_id: str, timeframe: Union[str, TimeframeCode]
    ) -> TimeframeReport:
        """Analyse a single timeframe.

        Raises:
            UnsupportedTimeframeError: If the timeframe is unknown.
        """
        config = get_timeframe(timeframe)
        result = self.resolver.resolve(coin_id, config.code)

        candles = annotate(build_candles(result.samples, config))
        classification = classify(candles)

        return TimeframeReport(
            timeframe=config.code,
            label=config.label,
            candles=tuple(candles),
            trend=classification.trend,
            volatility=classification.volatility,
            period_change=classification.period_change,
            source=result.source,
            synthetic=result.synthetic,
        )

    def synthesize(self, symbol: str) -> MultiTimeframeAnalysis:
        """Analyse every timeframe for a symbol and combine the results.

        Raises:
            SymbolNotFoundError: If the symbol cannot be resolved.
        """
        coin_id = get_coin_id(symbol, self.resolver.sources)
        logger.debug("Analysing %s (%s) across %d timeframes", symbol, coin_id, len(TIMEFRAMES))

        executor = ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="coinsight-timeframe"
        )
        try:
            futures = {
                code: executor.submit(self.analyze_timeframe, coin_id, code)
                for code in TIMEFRAMES
            }
            done, _ = wait(futures.values(), timeout=self.task_timeout)

            reports = []
            for code, future in futures.items():
                config = TIMEFRAMES[code]
                if future not in done:
                    future.cancel()
                    logger.warning("%s analysis for %s timed out", code.value, coin_id)
                    reports.append(unavailable_report(
                        config, f"Timed out after {self.task_timeout:g}s"
                    ))
                    continue
                try:
                    reports.append(future.result())
                except Exception as e:
                    logger.error("%s analysis for %s failed: %s", code.value, coin_id, e, exc_info=True)
                    reports.append(unavailable_report(config, str(e)))
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        return MultiTimeframeAnalysis(
            symbol=symbol.strip().upper(),
            coin_id=coin_id,
            generated_at=self.clock(),
            reports=tuple(reports),
            synthesis=reduce_reports(reports),
        )


def synthesize_multi_timeframe(
    symbol: str, synthesizer: Optional[MultiTimeframeSynthesizer] = None
) -> MultiTimeframeAnalysis:
    """Run a multi-timeframe analysis, building the synthesizer from config if needed."""
    if synthesizer is None:
        from coinsight.config import build_synthesizer, load_settings

        synthesizer = build_synthesizer(load_settings())
    return synthesizer.synthesize(symbol)
