"""
Multi-timeframe aggregation.

The primary timeframe must succeed; additional timeframes are best effort.
They are fetched concurrently and joined with "settle all": a failure on one
timeframe is logged and recorded, the others still make it into the bundle.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional

from config import KLINES_LIMIT, MAX_TIMEFRAME_WORKERS
from core.indicators import compute_indicators
from core.models import IndicatorConfig, MultiTimeframeBundle, TimeframeResult
from core.normalizer import normalize_klines
from core.providers.base import MarketDataProvider
from core.rendering import Renderer
from core.request_tracker import RequestToken, RequestTracker

logger = logging.getLogger(__name__)

CHART_URI_PREFIX = "chartDataUri_"


def timeframe_key(label: str) -> str:
    """Timeframe label with every whitespace character removed (" 1 d " -> "1d")."""
    return "".join(label.split())


def additional_chart_uris(bundle: MultiTimeframeBundle) -> Dict[str, str]:
    """Map ``chartDataUri_<key>`` to each successful additional timeframe's snapshot."""
    return {
        f"{CHART_URI_PREFIX}{key}": result.chart_data_uri
        for key, result in bundle.additional.items()
    }


class TimeframeAnalyzer:
    """Fetch, normalize, compute and render one symbol across several timeframes."""

    def __init__(
        self,
        provider: MarketDataProvider,
        renderer: Renderer,
        indicator_config: Optional[IndicatorConfig] = None,
        limit: int = KLINES_LIMIT,
        tracker: Optional[RequestTracker] = None,
        max_workers: int = MAX_TIMEFRAME_WORKERS,
    ):
        self.provider = provider
        self.renderer = renderer
        self.indicator_config = indicator_config or IndicatorConfig()
        self.limit = limit
        self.tracker = tracker
        self.max_workers = max(1, max_workers)

    def analyze(self, symbol: str, timeframe: str) -> TimeframeResult:
        """Run one timeframe end to end. Errors propagate to the caller."""
        key = timeframe_key(timeframe)
        raw = self.provider.get_klines(symbol, key, self.limit)
        series = normalize_klines(raw)
        indicators = compute_indicators(series, self.indicator_config)
        uri = self.renderer.snapshot(series, indicators, title=f"{symbol} {key}")
        logger.info("[TIMEFRAMES] %s %s: %d candles analyzed", symbol, key, len(series))
        return TimeframeResult(key, series, indicators, uri)

    def _additional_keys(self, primary_key: str, additional: Iterable[str]) -> List[str]:
        keys: List[str] = []
        for label in additional:
            key = timeframe_key(label)
            if not key or key == primary_key or key in keys:
                continue
            keys.append(key)
        return keys

    def collect(
        self,
        symbol: str,
        primary: str,
        additional: Iterable[str] = (),
        token: Optional[RequestToken] = None,
    ) -> MultiTimeframeBundle:
        """
        Analyze ``primary`` plus every distinct additional timeframe.

        Raises:
            Whatever the primary timeframe raises.
            StaleRequestDiscarded: if ``token`` was superseded while the
                additional timeframes were in flight.
        """
        primary_result = self.analyze(symbol, primary)
        keys = self._additional_keys(primary_result.timeframe, additional)

        results: Dict[str, TimeframeResult] = {}
        failures: Dict[str, str] = {}
        if keys:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(keys))) as executor:
                futures = {key: executor.submit(self.analyze, symbol, key) for key in keys}
                # Wait for every future; one failure must not abort the rest.
                for key in keys:
                    try:
                        results[key] = futures[key].result()
                    except Exception as e:
                        failures[key] = f"{type(e).__name__}: {e}"
                        logger.warning("[TIMEFRAMES] %s %s skipped: %s", symbol, key, failures[key])

        if self.tracker is not None:
            self.tracker.ensure_current(token)

        logger.info(
            "[TIMEFRAMES] %s: primary %s, %d additional ok, %d failed",
            symbol,
            primary_result.timeframe,
            len(results),
            len(failures),
        )
        return MultiTimeframeBundle(primary_result, results, failures)
