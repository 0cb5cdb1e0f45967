"""TTL cache in front of another provider."""

from datetime import timedelta
from typing import Any, List

from core.cache import CacheProvider, klines_key

from .base import MarketDataProvider


class CachedProvider(MarketDataProvider):
    """Serves repeated klines requests from a cache for ``ttl``."""

    def __init__(self, provider: MarketDataProvider, cache: CacheProvider, ttl: timedelta):
        self.provider = provider
        self.cache = cache
        self.ttl = ttl

    def get_klines(self, symbol: str, interval: str, limit: int) -> List[List[Any]]:
        return self.cache.get_or_fetch(
            klines_key(symbol, interval, limit),
            lambda: self.provider.get_klines(symbol, interval, limit),
            self.ttl,
        )

    def get_name(self) -> str:
        return f"Cached[{self.provider.get_name()}]"
