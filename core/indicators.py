"""
Indicator engine: SMA, EMA, RSI, MACD and Bollinger Bands over a CandleSeries.

Every function here is pure: it reads the series it is given, allocates a
fresh result and keeps no state between calls, so calling it twice with the
same input yields bit-identical output.

Warmup behaviour differs on purpose:
  * SMA / Bollinger wait for a full window (first point at index period-1).
  * RSI waits for ``period`` deltas (first point at index period).
  * EMA seeds from the very first value and emits one point per input, so
    MACD covers the whole series once there are at least ``slow`` candles.
    The first ~``slow`` MACD values are skewed by that seeding; this is kept
    as-is for compatibility with previously generated signals.

Not having enough candles is never an error: the result is just shorter,
down to an empty tuple.
"""

import logging
import math
from typing import List, Sequence, Tuple

from core.models import (
    BOLLINGER_PERIOD,
    BOLLINGER_STD_DEV,
    MACD_FAST,
    MACD_SIGNAL,
    MACD_SLOW,
    RSI_PERIOD,
    SMA_PERIOD,
    BollingerPoint,
    CandleSeries,
    IndicatorConfig,
    IndicatorSet,
    LinePoint,
    MacdSeries,
)

logger = logging.getLogger(__name__)


def _check_period(period: int, name: str = "period") -> None:
    if period < 1:
        raise ValueError(f"{name} must be >= 1, got {period}")


def _is_flat(window: Sequence[float]) -> bool:
    return max(window) == min(window)


def _window_mean(closes: Sequence[float], end: int, period: int) -> float:
    window = closes[end - period + 1:end + 1]
    # sum/period drifts for prices with no exact binary form (0.1 * 20 / 20).
    if _is_flat(window):
        return float(window[0])
    return sum(window) / period


def sma(series: CandleSeries, period: int = SMA_PERIOD) -> Tuple[LinePoint, ...]:
    """Simple moving average of closes; ``len(series) - period + 1`` points."""
    _check_period(period)
    closes = series.closes
    times = series.times
    if len(closes) < period:
        return ()
    return tuple(
        LinePoint(times[i], _window_mean(closes, i, period))
        for i in range(period - 1, len(closes))
    )


def ema(values: Sequence[float], period: int) -> List[float]:
    """
    Exponential moving average seeded with the first value.

    ``k = 2 / (period + 1)``; one output per input, no warmup gap.
    """
    _check_period(period)
    if not values:
        return []
    k = 2.0 / (period + 1)
    result = [float(values[0])]
    for value in values[1:]:
        result.append(value * k + result[-1] * (1 - k))
    return result


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    # No losses in the window (flat windows included) reads as fully overbought.
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


def rsi(series: CandleSeries, period: int = RSI_PERIOD) -> Tuple[LinePoint, ...]:
    """Relative Strength Index with Wilder smoothing; ``len(series) - period`` points."""
    _check_period(period)
    closes = series.closes
    times = series.times
    if len(closes) <= period:
        return ()

    gains = 0.0
    losses = 0.0
    for i in range(1, period + 1):
        change = closes[i] - closes[i - 1]
        if change > 0:
            gains += change
        else:
            losses -= change
    avg_gain = gains / period
    avg_loss = losses / period

    points = [LinePoint(times[period], _rsi_value(avg_gain, avg_loss))]
    for i in range(period + 1, len(closes)):
        change = closes[i] - closes[i - 1]
        current_gain = change if change > 0 else 0.0
        current_loss = -change if change < 0 else 0.0
        avg_gain = (avg_gain * (period - 1) + current_gain) / period
        avg_loss = (avg_loss * (period - 1) + current_loss) / period
        points.append(LinePoint(times[i], _rsi_value(avg_gain, avg_loss)))
    return tuple(points)


def macd(
    series: CandleSeries,
    fast: int = MACD_FAST,
    slow: int = MACD_SLOW,
    signal: int = MACD_SIGNAL,
) -> MacdSeries:
    """MACD line, signal line and histogram, all on the same timestamps."""
    _check_period(fast, "fast")
    _check_period(slow, "slow")
    _check_period(signal, "signal")
    closes = series.closes
    times = series.times
    if len(closes) < slow:
        return MacdSeries()

    ema_fast = ema(closes, fast)
    ema_slow = ema(closes, slow)
    macd_values = [f - s for f, s in zip(ema_fast, ema_slow)]
    signal_values = ema(macd_values, signal)

    # Anchor to the tail of the candle series.
    offset = len(times) - len(signal_values)
    macd_offset = len(macd_values) - len(signal_values)

    macd_line = []
    signal_line = []
    histogram = []
    for i, signal_value in enumerate(signal_values):
        time = times[offset + i]
        macd_value = macd_values[macd_offset + i]
        macd_line.append(LinePoint(time, macd_value))
        signal_line.append(LinePoint(time, signal_value))
        histogram.append(LinePoint(time, macd_value - signal_value))
    return MacdSeries(tuple(macd_line), tuple(signal_line), tuple(histogram))


def bollinger_bands(
    series: CandleSeries,
    period: int = BOLLINGER_PERIOD,
    std_dev: float = BOLLINGER_STD_DEV,
) -> Tuple[BollingerPoint, ...]:
    """SMA-centred bands at ± ``std_dev`` population standard deviations."""
    _check_period(period)
    closes = series.closes
    times = series.times
    if len(closes) < period:
        return ()

    points = []
    for i in range(period - 1, len(closes)):
        window = closes[i - period + 1:i + 1]
        middle = _window_mean(closes, i, period)
        if _is_flat(window):
            sigma = 0.0
        else:
            sigma = math.sqrt(sum((c - middle) ** 2 for c in window) / period)
        points.append(
            BollingerPoint(
                time=times[i],
                upper=middle + std_dev * sigma,
                middle=middle,
                lower=middle - std_dev * sigma,
            )
        )
    return tuple(points)


def compute_indicators(series: CandleSeries, config: IndicatorConfig = IndicatorConfig()) -> IndicatorSet:
    """Run every enabled indicator over *series* with the fixed periods."""
    result = IndicatorSet(
        sma=sma(series, SMA_PERIOD) if config.sma else None,
        rsi=rsi(series, RSI_PERIOD) if config.rsi else None,
        macd=macd(series, MACD_FAST, MACD_SLOW, MACD_SIGNAL) if config.macd else None,
        bollinger=bollinger_bands(series, BOLLINGER_PERIOD, BOLLINGER_STD_DEV) if config.bollinger else None,
    )
    logger.debug(
        "[ENGINE] %d candles -> sma=%s rsi=%s macd=%s bollinger=%s",
        len(series),
        None if result.sma is None else len(result.sma),
        None if result.rsi is None else len(result.rsi),
        None if result.macd is None else len(result.macd),
        None if result.bollinger is None else len(result.bollinger),
    )
    return result
