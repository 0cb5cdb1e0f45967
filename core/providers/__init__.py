"""
Market data providers with automatic fallback chains.

Hosts are tried in the order configured in ``BINANCE_BASE_URLS``; an optional
TTL cache sits in front of the chain when ``KLINES_CACHE_SECONDS`` > 0.
"""

from config import BINANCE_BASE_URLS, HTTP_TIMEOUT_SECONDS

from core.cache import CACHE_TTL_KLINES, get_cache

from .base import MarketDataProvider, SUPPORTED_INTERVALS
from .binance_provider import BinanceProvider
from .cached_provider import CachedProvider
from .composite_provider import CompositeProvider


def create_default_provider() -> MarketDataProvider:
    """
    Create the default provider chain based on configuration.

    Returns:
        A single BinanceProvider, or a CompositeProvider when several hosts
        are configured, wrapped in a CachedProvider if caching is enabled.
    """
    providers = [BinanceProvider(url, timeout=HTTP_TIMEOUT_SECONDS) for url in BINANCE_BASE_URLS]

    provider: MarketDataProvider
    if len(providers) == 1:
        provider = providers[0]
    else:
        provider = CompositeProvider(providers)

    if CACHE_TTL_KLINES.total_seconds() > 0:
        provider = CachedProvider(provider, get_cache(), CACHE_TTL_KLINES)
    return provider


# Global instance for convenience
_default_provider = None


def get_provider() -> MarketDataProvider:
    """
    Get or create the default market data provider.

    Returns:
        The configured MarketDataProvider instance
    """
    global _default_provider
    if _default_provider is None:
        _default_provider = create_default_provider()
    return _default_provider


__all__ = [
    "MarketDataProvider",
    "SUPPORTED_INTERVALS",
    "BinanceProvider",
    "CachedProvider",
    "CompositeProvider",
    "create_default_provider",
    "get_provider",
]
