"""Rule-based commentary built from indicator values."""

from typing import Optional, Sequence

from coinsight.analysis.classifier import detect_trend
from coinsight.models import AnnotatedCandle, Horizon, TimeframeReport, Trend, get_timeframe


def interpret_rsi(value: Optional[float]) -> tuple[str, str]:
    """Interpret RSI value and return signal and color.

    Args:
        value: RSI value (0-100), or None when not available.

    Returns:
        Tuple of (signal_text, color).
    """
    if value is None:
        return "No Data", "dim"
    if value > 70:
        return "Overbought", "red"
    elif value < 30:
        return "Oversold", "green"
    elif value > 55:
        return "Bullish", "green"
    elif value < 45:
        return "Bearish", "red"
    else:
        return "Neutral", "yellow"


def interpret_bollinger(
    price: float,
    upper: Optional[float],
    middle: Optional[float],
    lower: Optional[float],
) -> tuple[str, str]:
    """Interpret price position relative to the Bollinger Bands.

    Returns:
        Tuple of (signal_text, color).
    """
    if upper is None or middle is None or lower is None:
        return "Bands Unavailable", "dim"
    if price > upper:
        return "Above Upper Band", "red"
    elif price < lower:
        return "Below Lower Band", "green"
    elif price > middle:
        return "Within Bands (upper half)", "yellow"
    elif price < middle:
        return "Within Bands (lower half)", "yellow"
    else:
        return "At Middle Band", "dim"


def ema_position(candle: AnnotatedCandle) -> Optional[str]:
    """Whether the close is "above" or "below" the EMA, None without an EMA."""
    if candle.ema20 is None:
        return None
    return "above" if candle.close > candle.ema20 else "below"


def volatility_band(volatility: float) -> str:
    """Label an annualized volatility as high, moderate or low."""
    if volatility > 0.5:
        return "high"
    elif volatility > 0.2:
        return "moderate"
    return "low"


def horizon_note(horizon: Horizon) -> str:
    """Describe what a trading horizon is used for."""
    if horizon is Horizon.SCALPING:
        return ("This very short timeframe suits scalping and day trading; "
                "watch support and resistance closely.")
    elif horizon is Horizon.DAY_TRADING:
        return ("This timeframe suits day trading, with steadier signals than "
                "the shorter timeframes.")
    elif horizon is Horizon.SWING:
        return "Daily-scale analysis shows the medium-term trend used for swing trading."
    elif horizon is Horizon.POSITION:
        return "This medium-term view shows the underlying trend for positioning."
    elif horizon is Horizon.LONG_TERM:
        return "This long-term view helps identify market cycles and investment opportunities."
    raise ValueError(f"Unhandled horizon: {horizon}")


def describe_timeframe(report: TimeframeReport) -> str:
    """Write a short paragraph about one timeframe report."""
    code = report.timeframe.value
    if not report.available:
        return f"Data for the {code} timeframe is not available."

    latest = report.candles[-1]
    sign = "+" if report.period_change >= 0 else ""
    parts = [
        f"{code} analysis: the trend is {report.trend.value.lower()} with a price change "
        f"of {sign}{report.period_change:.2f}% over the period."
    ]

    rsi = latest.rsi14
    if rsi is None:
        parts.append("RSI is not available yet.")
    elif rsi > 70:
        parts.append(f"RSI {rsi:.2f} signals overbought conditions and a possible pullback.")
    elif rsi < 30:
        parts.append(f"RSI {rsi:.2f} signals oversold conditions and a possible rebound.")
    else:
        parts.append(f"RSI {rsi:.2f} is in the balanced zone.")

    position = ema_position(latest)
    if position is not None:
        momentum = "bullish" if position == "above" else "bearish"
        parts.append(f"Price is {position} the EMA-20, showing short-term {momentum} momentum.")

    band = volatility_band(report.volatility)
    parts.append(f"Volatility is {band} ({report.volatility * 100:.2f}%).")

    parts.append(horizon_note(get_timeframe(report.timeframe).horizon))
    return " ".join(parts)


def summarize_series(
    candles: Sequence[AnnotatedCandle], symbol: str, timeframe: str
) -> str:
    """Summarize an annotated series: price, trend, RSI, EMA and a hint.

    Returns:
        Multi-line summary text.
    """
    if not candles:
        return f"Unable to analyze {symbol} at this time."

    latest = candles[-1]
    previous = candles[max(0, len(candles) - 7)]
    change = (latest.close - previous.close) / previous.close * 100 if previous.close else 0.0
    trend = detect_trend(candles)
    rsi = latest.rsi14 if latest.rsi14 is not None else 50.0
    position = ema_position(latest) or "above"

    lines = [
        f"{symbol} Analysis ({timeframe})",
        f"Price: {latest.close:.6f}",
        f"Change: {'+' if change >= 0 else ''}{change:.2f}% from the previous period",
        f"Trend: {trend.value}",
    ]

    if trend == Trend.UPTREND:
        lines.append("The market is showing bullish momentum.")
    elif trend == Trend.DOWNTREND:
        lines.append("The market is in a bearish phase.")
    else:
        lines.append("The market is consolidating sideways.")

    signal, _ = interpret_rsi(rsi)
    lines.append(f"RSI (14): {rsi:.2f} ({signal})")
    lines.append(f"EMA-20: price is trading {position} the 20-period EMA")

    if trend == Trend.UPTREND and rsi < 70 and position == "above":
        lines.append("Hint: BUY - indicators align for a bullish outlook.")
    elif trend == Trend.DOWNTREND and rsi > 30 and position == "below":
        lines.append("Hint: SELL - bearish indicators suggest further downside.")
    elif rsi > 70 or rsi < 30:
        lines.append("Hint: WAIT - extreme RSI, wait for a better entry.")
    else:
        lines.append("Hint: HOLD - mixed signals.")

    return "\n".join(lines)
