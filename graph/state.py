"""
Graph state definition for the signal pipeline.
Flows through every node in the LangGraph.
"""

from typing import Dict, List, Optional, TypedDict

from core.models import MultiTimeframeBundle
from core.payload import AiPreferences
from core.request_tracker import RequestToken


class GraphState(TypedDict, total=False):
    """
    Attributes:
        symbol:                 Trading pair being analyzed (e.g. "BTCUSDT").
        primary_timeframe:      Timeframe the signal is based on (e.g. "4h").
        additional_timeframes:  Context timeframes rendered alongside the primary.
        include_fundamentals:   Whether to gather fundamental / macro context.
        preferences:            Risk profile and detail level for the signal.
        token:                  Request token; a stale one aborts the run.
        bundle:                 Candles, indicators and snapshots per timeframe.
        timeframe_failures:     Additional timeframes that could not be built.
        fundamental_summary:    One-paragraph fundamental outlook (or None).
        economic_summary:       Upcoming macro events summary (or None).
        analysis:               TradeSignalAnalysis as a plain dict.
        error:                  User-facing error message when the run failed.
    """

    symbol: str
    primary_timeframe: str
    additional_timeframes: List[str]
    include_fundamentals: bool
    preferences: AiPreferences
    token: Optional[RequestToken]
    bundle: Optional[MultiTimeframeBundle]
    timeframe_failures: Dict[str, str]
    fundamental_summary: Optional[str]
    economic_summary: Optional[str]
    analysis: Optional[dict]
    error: Optional[str]
