"""Cache interface used in front of the market-data providers."""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


def klines_key(symbol: str, interval: str, limit: int) -> str:
    """Cache key for one klines request; symbols are case-insensitive on Binance."""
    return f"klines:{symbol.upper()}:{interval}:{limit}"


class CacheProvider(ABC):
    """Key/value store with optional per-entry expiry.

    ``None`` is reserved to mean "missing", so it cannot be cached.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the live value for ``key`` or None."""

    @abstractmethod
    def set(self, key: str, value: Any, ttl: Optional[timedelta] = None) -> None:
        """Store ``value``; without ``ttl`` it lives until cleared."""

    @abstractmethod
    def invalidate(self, key: str) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    def get_or_fetch(
        self,
        key: str,
        fetch_fn: Callable[[], T],
        ttl: Optional[timedelta] = None,
    ) -> T:
        """Return the cached value for *key*, or call ``fetch_fn()`` and cache its result.

        Exceptions from ``fetch_fn`` propagate and nothing is cached.
        """
        cached = self.get(key)
        if cached is not None:
            return cached

        value = fetch_fn()
        if value is not None:
            self.set(key, value, ttl)
        return value
