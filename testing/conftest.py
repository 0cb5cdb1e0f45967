"""Shared test fixtures and fakes."""

import math
import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from core.errors import UpstreamUnavailable
from core.models import Candle, CandleSeries
from core.providers.base import MarketDataProvider
from core.rendering import Renderer

BASE_TIME_MS = 1_700_000_000_000
HOUR_MS = 3_600_000


def make_kline(open_time_ms: int, close: float, spread: float = 1.0, volume: float = 10.0) -> list:
    """Binance-shaped kline with string prices, as the REST API returns them."""
    open_ = close - spread / 2
    return [
        open_time_ms,
        f"{open_:.8f}",
        f"{max(open_, close) + spread:.8f}",
        f"{min(open_, close) - spread:.8f}",
        f"{close:.8f}",
        f"{volume:.8f}",
        open_time_ms + HOUR_MS - 1,
        "0",
        100,
        "0",
        "0",
        "0",
    ]


def make_klines(closes, start_ms: int = BASE_TIME_MS, step_ms: int = HOUR_MS) -> list:
    return [make_kline(start_ms + i * step_ms, c) for i, c in enumerate(closes)]


def make_series(closes, start: int = BASE_TIME_MS // 1000, step: int = 3600) -> CandleSeries:
    return CandleSeries(
        Candle(time=start + i * step, open=c, high=c + 1, low=c - 1, close=c, volume=1.0)
        for i, c in enumerate(closes)
    )


def wavy_closes(n: int, base: float = 30_000.0) -> list:
    """Deterministic up/down price path with both gains and losses."""
    return [base + 400 * math.sin(i / 7.0) + 150 * math.cos(i / 3.0) + 2 * i for i in range(n)]


class FakeProvider(MarketDataProvider):
    """Serves canned klines per interval; an Exception value is raised instead."""

    def __init__(self, responses: dict):
        self.responses = responses
        self.calls = []

    def get_klines(self, symbol, interval, limit):
        self.calls.append((symbol, interval, limit))
        if interval not in self.responses:
            raise UpstreamUnavailable(f"no data for {interval}")
        response = self.responses[interval]
        if isinstance(response, Exception):
            raise response
        return response

    def get_name(self):
        return "fake"


class FakeRenderer(Renderer):
    """Returns a data-URI that encodes the chart title, no image library involved."""

    def __init__(self):
        self.titles = []

    def snapshot(self, series, indicators, title=""):
        self.titles.append(title)
        return f"data:image/png;base64,{title.replace(' ', '_')}"


@pytest.fixture
def flat_series():
    """30 candles with a constant close of 100.0."""
    return make_series([100.0] * 30)


@pytest.fixture
def rising_series():
    return make_series([100.0 + i for i in range(40)])


@pytest.fixture
def klines_300():
    return make_klines(wavy_closes(300))


@pytest.fixture
def fake_renderer():
    return FakeRenderer()
