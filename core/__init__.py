"""Core market-data, indicator, rendering and payload utilities."""

from .indicators import bollinger_bands, compute_indicators, ema, macd, rsi, sma
from .normalizer import normalize_klines, normalize_record, series_to_frame
from .payload import AiPreferences, SignalRequest, assemble_signal_request
from .timeframes import TimeframeAnalyzer, additional_chart_uris, timeframe_key

__all__ = [
    "bollinger_bands",
    "compute_indicators",
    "ema",
    "macd",
    "rsi",
    "sma",
    "normalize_klines",
    "normalize_record",
    "series_to_frame",
    "AiPreferences",
    "SignalRequest",
    "assemble_signal_request",
    "TimeframeAnalyzer",
    "additional_chart_uris",
    "timeframe_key",
]
