"""
Node: Assemble the signal request from the chart bundle plus context and ask
the vision model for a structured trade signal.
"""

import logging
from typing import Any, Callable, Dict, Optional

from langchain_core.runnables import Runnable

from core.errors import describe_analysis_error
from core.payload import AiPreferences, assemble_signal_request
from core.request_tracker import RequestTracker
from graph.consts import TRADE_SIGNAL
from graph.state import GraphState

logger = logging.getLogger(__name__)


def generate_signal(
    state: GraphState,
    get_chain: Callable[[str], Runnable],
    tracker: Optional[RequestTracker] = None,
) -> Dict[str, Any]:
    logger.info("---GENERATE SIGNAL---")
    bundle = state.get("bundle")
    if state.get("error") or bundle is None:
        return {"analysis": None}

    # Skip the model call entirely for a superseded request.
    if tracker is not None:
        tracker.ensure_current(state.get("token"))

    request = assemble_signal_request(
        bundle,
        state.get("preferences") or AiPreferences(),
        fundamental_summary=state.get("fundamental_summary"),
        economic_summary=state.get("economic_summary"),
    )

    try:
        result = get_chain(TRADE_SIGNAL).invoke(request)
        if result is None:
            raise ValueError("No output received from analysis prompt")
    except Exception as e:
        logger.error("[SIGNAL] %s: %s", state["symbol"], e)
        return {"analysis": None, "error": describe_analysis_error(e)}

    if result.trade_signal is None:
        logger.info("[SIGNAL] %s: no clear setup", state["symbol"])
    else:
        logger.info("[SIGNAL] %s: entry %s, stop %s", state["symbol"],
                    result.trade_signal.entry_price_range, result.trade_signal.stop_loss)
    return {"analysis": result.model_dump()}
