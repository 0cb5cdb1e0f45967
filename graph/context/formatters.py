"""Formatting helpers for converting pipeline data to LLM- and human-friendly text."""

from typing import Dict, Optional

from core.models import MultiTimeframeBundle, TimeframeResult
from graph.chains.fundamentals import EconomicEvents, FundamentalAnalysis


def format_fundamentals(analysis: Optional[FundamentalAnalysis]) -> Optional[str]:
    """Collapse a FundamentalAnalysis into the single summary string the signal prompt takes."""
    if analysis is None:
        return None
    return analysis.as_summary()


def format_economic_events(events: Optional[EconomicEvents]) -> Optional[str]:
    if events is None or not events.event_summary:
        return None
    return events.event_summary


def format_timeframe_snapshot(result: TimeframeResult) -> str:
    """One line per timeframe: last close plus the latest reading of each indicator."""
    if result.series.is_empty():
        return f"{result.timeframe}: no candles"

    last = result.series[-1]
    parts = [f"{result.timeframe}: close {last.close:,.2f}"]
    ind = result.indicators
    if ind.sma:
        parts.append(f"SMA {ind.sma[-1].value:,.2f}")
    if ind.rsi:
        parts.append(f"RSI {ind.rsi[-1].value:.1f}")
    if ind.macd is not None and len(ind.macd):
        parts.append(f"MACD hist {ind.macd.histogram[-1].value:+.4f}")
    if ind.bollinger:
        band = ind.bollinger[-1]
        parts.append(f"BB {band.lower:,.2f}-{band.upper:,.2f}")
    return "  |  ".join(parts)


def format_market_snapshot(bundle: MultiTimeframeBundle) -> str:
    lines = [format_timeframe_snapshot(bundle.primary)]
    lines.extend(format_timeframe_snapshot(result) for result in bundle.additional.values())
    lines.extend(format_failures(bundle.failures))
    return "\n".join(lines)


def format_failures(failures: Dict[str, str]) -> list:
    return [f"{timeframe}: unavailable ({reason})" for timeframe, reason in failures.items()]
