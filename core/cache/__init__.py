"""TTL caching for klines requests."""

from .base import CacheProvider, klines_key
from .config import CACHE_TTL_KLINES
from .memory import InMemoryCache

__all__ = ["CacheProvider", "InMemoryCache", "CACHE_TTL_KLINES", "klines_key", "get_cache", "set_cache"]

# Shared by every CachedProvider built through create_default_provider()
_default_cache: CacheProvider = InMemoryCache()


def get_cache() -> CacheProvider:
    return _default_cache


def set_cache(cache: CacheProvider) -> None:
    """Swap the shared cache (e.g. for a fresh one in tests)."""
    global _default_cache
    _default_cache = cache
