"""
Data fetching utilities for the interactive chart.
"""

import streamlit as st

from config import KLINES_LIMIT, SYMBOLS
from core.models import CandleSeries
from core.normalizer import normalize_klines
from core.providers import get_provider


def get_all_symbols(selected: str = "") -> list[str]:
    """Configured symbols, plus ``selected`` if it is a custom one."""
    symbols = list(SYMBOLS)
    if selected and selected not in symbols:
        symbols.append(selected)
    return symbols


@st.cache_data(ttl=60, show_spinner=False)
def _fetch_klines(symbol: str, interval: str, limit: int) -> list:
    return get_provider().get_klines(symbol, interval, limit)


def get_candle_series(symbol: str, interval: str, limit: int = KLINES_LIMIT) -> CandleSeries:
    """Latest candles for the live chart; raw klines are cached for a minute."""
    return normalize_klines(_fetch_klines(symbol, interval, limit))
