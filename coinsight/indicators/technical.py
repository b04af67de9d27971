"""Technical indicator calculations.

Every function takes a list of prices and returns a list of the same
length. Slots where the indicator window has not filled yet hold NaN.
"""

import math


def calculate_sma(prices: list[float], period: int) -> list[float]:
    """Calculate Simple Moving Average.

    Args:
        prices: List of price values (typically close prices)
        period: Number of periods for the moving average

    Returns:
        List of SMA values. First (period-1) values will be NaN.
    """
    if len(prices) < period or period < 1:
        return [float('nan')] * len(prices)

    result = [float('nan')] * (period - 1)

    for i in range(period - 1, len(prices)):
        window = prices[i - period + 1:i + 1]
        result.append(sum(window) / period)

    return result


def calculate_ema(prices: list[float], period: int = 20) -> list[float]:
    """Calculate Exponential Moving Average.

    The first defined value (index ``period - 1``) is the SMA of the first
    ``period`` prices.

    Args:
        prices: List of price values
        period: Number of periods for the EMA (default 20)

    Returns:
        List of EMA values. First (period-1) values will be NaN.
    """
    if len(prices) < period or period < 1:
        return [float('nan')] * len(prices)

    result = [float('nan')] * (period - 1)
    multiplier = 2 / (period + 1)

    # First EMA is SMA
    result.append(sum(prices[:period]) / period)

    for i in range(period, len(prices)):
        ema = (prices[i] - result[-1]) * multiplier + result[-1]
        result.append(ema)

    return result


def calculate_rsi(prices: list[float], period: int = 14) -> list[float]:
    """Calculate Relative Strength Index.

    Uses a simple rolling mean of gains and losses over the trailing
    ``period`` price changes, not Wilder's smoothing. When the mean loss
    is zero the RSI saturates at 100.

    Args:
        prices: List of price values (typically close prices)
        period: RSI period (default 14)

    Returns:
        List of RSI values (0-100). First `period` values will be NaN.
    """
    if len(prices) < period + 1 or period < 1:
        return [float('nan')] * len(prices)

    changes = [prices[i] - prices[i - 1] for i in range(1, len(prices))]
    gains = [max(0.0, c) for c in changes]
    losses = [max(0.0, -c) for c in changes]

    result = [float('nan')] * period

    # changes[j] is the step into prices[j + 1]
    for j in range(period - 1, len(changes)):
        avg_gain = sum(gains[j - period + 1:j + 1]) / period
        avg_loss = sum(losses[j - period + 1:j + 1]) / period

        if avg_loss == 0:
            result.append(100.0)
        else:
            rs = avg_gain / avg_loss
            result.append(100 - (100 / (1 + rs)))

    return result


def calculate_bollinger_bands(
    prices: list[float],
    period: int = 20,
    std_dev: float = 2.0
) -> tuple[list[float], list[float], list[float]]:
    """Calculate Bollinger Bands.

    Uses the population standard deviation of the window.

    Args:
        prices: List of price values
        period: SMA period (default 20)
        std_dev: Standard deviation multiplier (default 2.0)

    Returns:
        Tuple of (upper_band, middle_band, lower_band)
    """
    if len(prices) < period or period < 1:
        nan_list = [float('nan')] * len(prices)
        return nan_list, nan_list.copy(), nan_list.copy()

    middle_band = calculate_sma(prices, period)
    upper_band = [float('nan')] * len(prices)
    lower_band = [float('nan')] * len(prices)

    for i in range(period - 1, len(prices)):
        window = prices[i - period + 1:i + 1]
        mean = middle_band[i]

        variance = sum((x - mean) ** 2 for x in window) / period
        std = math.sqrt(variance)

        upper_band[i] = mean + (std_dev * std)
        lower_band[i] = mean - (std_dev * std)

    return upper_band, middle_band, lower_band
