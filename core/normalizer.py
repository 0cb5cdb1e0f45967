"""
Kline normalizer: turns raw provider records into a CandleSeries.

Binance klines are fixed-shape arrays:
    [openTimeMs, open, high, low, close, volume, closeTimeMs, ...]
with the price/volume fields encoded as strings. Only indices 0-5 are read.
"""

import logging
import math
from typing import Any, Iterable, Sequence

import pandas as pd

from core.errors import MalformedRecord
from core.models import Candle, CandleSeries

logger = logging.getLogger(__name__)

_PRICE_FIELDS = ("open", "high", "low", "close", "volume")


def _parse_float(value: Any, index: int, name: str) -> float:
    if isinstance(value, bool):
        raise MalformedRecord(f"Record {index}: field '{name}' is not numeric ({value!r})", index, name)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise MalformedRecord(
            f"Record {index}: field '{name}' is not numeric ({value!r})", index, name
        ) from None
    if not math.isfinite(number):
        raise MalformedRecord(f"Record {index}: field '{name}' is not finite ({value!r})", index, name)
    return number


def _parse_open_time(value: Any, index: int) -> int:
    if isinstance(value, bool):
        raise MalformedRecord(f"Record {index}: open time is not an integer ({value!r})", index, "time")
    try:
        millis = int(value)
    except (TypeError, ValueError):
        raise MalformedRecord(
            f"Record {index}: open time is not an integer ({value!r})", index, "time"
        ) from None
    # Milliseconds to seconds, truncating toward zero.
    if millis < 0:
        return -(-millis // 1000)
    return millis // 1000


def normalize_record(record: Sequence[Any], index: int = 0) -> Candle:
    """Convert one raw kline into a Candle."""
    if not isinstance(record, (list, tuple)) or len(record) < 6:
        raise MalformedRecord(f"Record {index}: expected at least 6 fields, got {record!r}", index)

    open_, high, low, close, volume = (
        _parse_float(record[i + 1], index, name) for i, name in enumerate(_PRICE_FIELDS)
    )
    return Candle(
        time=_parse_open_time(record[0], index),
        open=open_,
        high=high,
        low=low,
        close=close,
        volume=volume,
    )


def normalize_klines(raw: Iterable[Sequence[Any]]) -> CandleSeries:
    """
    Normalize an ordered sequence of raw klines.

    Any bad record aborts the whole series; callers never receive a partial
    CandleSeries.
    """
    candles = [normalize_record(record, i) for i, record in enumerate(raw)]

    for i in range(1, len(candles)):
        if candles[i].time <= candles[i - 1].time:
            raise MalformedRecord(
                f"Record {i}: time {candles[i].time} does not follow {candles[i - 1].time}",
                i,
                "time",
            )

    for i, c in enumerate(candles):
        if not (c.low <= min(c.open, c.close) and max(c.open, c.close) <= c.high):
            # Providers occasionally publish slightly inconsistent bars; keep them.
            logger.warning("[KLINES] Record %d has inconsistent high/low (%s)", i, c)

    logger.debug("[KLINES] Normalized %d records", len(candles))
    return CandleSeries(candles)


def series_to_frame(series: CandleSeries) -> pd.DataFrame:
    """Return an OHLCV DataFrame (Open/High/Low/Close/Volume) indexed by UTC timestamp."""
    if series.is_empty():
        return pd.DataFrame(columns=["Open", "High", "Low", "Close", "Volume"])

    df = pd.DataFrame(
        {
            "Open": [c.open for c in series],
            "High": [c.high for c in series],
            "Low": [c.low for c in series],
            "Close": [c.close for c in series],
            "Volume": [c.volume for c in series],
        },
        index=pd.to_datetime(list(series.times), unit="s", utc=True),
    )
    df.index.name = "Timestamp"
    return df
