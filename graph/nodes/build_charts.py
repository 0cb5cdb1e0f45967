"""
Node: Fetch candles for every requested timeframe, compute indicators and
render the chart snapshots the signal step looks at.
"""

import logging
from typing import Any, Dict

from core.errors import StaleRequestDiscarded
from core.timeframes import TimeframeAnalyzer
from graph.state import GraphState

logger = logging.getLogger(__name__)


def build_charts(state: GraphState, analyzer: TimeframeAnalyzer) -> Dict[str, Any]:
    logger.info("---BUILD CHARTS---")
    symbol = state["symbol"]
    primary = state["primary_timeframe"]

    try:
        bundle = analyzer.collect(
            symbol,
            primary,
            state.get("additional_timeframes") or [],
            token=state.get("token"),
        )
    except StaleRequestDiscarded:
        raise
    except Exception as e:
        logger.error("[CHARTS] %s %s failed: %s", symbol, primary, e)
        return {"bundle": None, "timeframe_failures": {}, "error": f"Failed to load chart data: {e}"}

    return {"bundle": bundle, "timeframe_failures": dict(bundle.failures)}
