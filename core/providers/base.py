"""Abstract base classes for market data providers."""

from abc import ABC, abstractmethod
from typing import Any, List

# Binance kline intervals accepted by the klines endpoint.
SUPPORTED_INTERVALS = frozenset({
    "1m", "3m", "5m", "15m", "30m",
    "1h", "2h", "4h", "6h", "8h", "12h",
    "1d", "3d", "1w", "1M",
})


class MarketDataProvider(ABC):
    """Abstract base class for candle (klines) sources."""

    @abstractmethod
    def get_klines(self, symbol: str, interval: str, limit: int) -> List[List[Any]]:
        """
        Get raw klines, oldest first.

        Parameters:
            symbol: Trading pair (e.g., "BTCUSDT")
            interval: Kline interval (e.g., "15m", "1h", "4h", "1d", "1w")
            limit: Maximum number of klines to return

        Returns:
            List of fixed-shape records
            ``[openTimeMs, open, high, low, close, volume, closeTimeMs, ...]``

        Raises:
            UpstreamUnavailable: network failure or non-2xx response
            MalformedRecord: response body is not a list of records
        """

    @abstractmethod
    def get_name(self) -> str:
        """Return provider name for logging."""
