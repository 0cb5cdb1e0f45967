"""Binance REST implementation of MarketDataProvider."""

import logging
from typing import Any, List, Optional

import requests

from core.errors import MalformedRecord, UpstreamUnavailable

from .base import MarketDataProvider, SUPPORTED_INTERVALS

logger = logging.getLogger(__name__)


class BinanceProvider(MarketDataProvider):
    """Polls ``/api/v3/klines`` on one Binance-compatible host."""

    def __init__(
        self,
        base_url: str = "https://api.binance.com",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def get_klines(self, symbol: str, interval: str, limit: int) -> List[List[Any]]:
        if interval not in SUPPORTED_INTERVALS:
            raise ValueError(f"Unsupported interval {interval!r}; expected one of {sorted(SUPPORTED_INTERVALS)}")

        params = {"symbol": symbol.upper(), "interval": interval, "limit": limit}
        url = f"{self.base_url}/api/v3/klines"

        try:
            resp = self._session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise UpstreamUnavailable(f"{self.get_name()}: request failed: {exc}") from exc

        if not resp.ok:
            raise UpstreamUnavailable(
                f"{self.get_name()}: failed to fetch klines for {symbol} {interval}: "
                f"{resp.status_code} {resp.reason}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise MalformedRecord(f"{self.get_name()}: response is not JSON") from exc

        if not isinstance(data, list):
            raise MalformedRecord(f"{self.get_name()}: expected a list of klines, got {type(data).__name__}")

        logger.info("[KLINES] %s %s: %d klines from %s", symbol, interval, len(data), self.base_url)
        return data

    def get_name(self) -> str:
        return f"binance({self.base_url})"
