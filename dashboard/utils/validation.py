"""
API validation utilities for checking service connectivity.
"""

import logging

import openai

from config import OPENAI_API_KEY

logger = logging.getLogger(__name__)


def is_openai_valid() -> bool:
    """Check if OpenAI API key is configured and valid."""
    if not OPENAI_API_KEY:
        return False

    try:
        client = openai.OpenAI(api_key=OPENAI_API_KEY)
        # Simple test call to verify API key works
        client.models.list()
        return True
    except openai.OpenAIError as e:
        logger.info("[VALIDATION] OpenAI key check failed: %s", e)
        return False


def is_binance_reachable(provider) -> bool:
    """One tiny klines request through the configured provider chain."""
    try:
        provider.get_klines("BTCUSDT", "1d", 1)
        return True
    except Exception as e:
        logger.info("[VALIDATION] Market data check failed: %s", e)
        return False
