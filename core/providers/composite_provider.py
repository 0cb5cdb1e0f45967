"""Composite provider implementing fallback chain pattern."""

import logging
from typing import Any, List

from core.errors import ChartAlchemistError, UpstreamUnavailable

from .base import MarketDataProvider

logger = logging.getLogger(__name__)


class CompositeProvider(MarketDataProvider):
    """Chain of responsibility pattern for data providers with automatic fallback."""

    def __init__(self, providers: List[MarketDataProvider]):
        """
        Initialize with a list of providers to try in order.

        Parameters:
            providers: List of MarketDataProvider instances, ordered by preference
        """
        if not providers:
            raise ValueError("CompositeProvider needs at least one provider")
        self.providers = providers

    def get_klines(self, symbol: str, interval: str, limit: int) -> List[List[Any]]:
        """Try each provider in order until one succeeds."""
        errors = []

        for provider in self.providers:
            try:
                result = provider.get_klines(symbol, interval, limit)
                logger.debug("[PROVIDER] Klines success: %s", provider.get_name())
                return result
            except ChartAlchemistError as e:
                error_msg = f"{provider.get_name()} failed: {e}"
                errors.append(error_msg)
                logger.warning("[PROVIDER] %s", error_msg)

        raise UpstreamUnavailable(f"All providers failed for {symbol} {interval}: {'; '.join(errors)}")

    def get_name(self) -> str:
        """Return composite provider name with list of sub-providers."""
        provider_names = ", ".join(p.get_name() for p in self.providers)
        return f"Composite[{provider_names}]"
