"""LLM context building - separates data gathering from prompt text."""

from .formatters import (
    format_economic_events,
    format_failures,
    format_fundamentals,
    format_market_snapshot,
    format_timeframe_snapshot,
)

__all__ = [
    "format_economic_events",
    "format_failures",
    "format_fundamentals",
    "format_market_snapshot",
    "format_timeframe_snapshot",
]
