"""
Node: Run the fundamental-analysis and economic-events chains in parallel.

Uses ChainOrchestrator for concurrent execution with timeout handling; every
chain has a deterministic fallback so this node never fails the run.
"""

import logging
from datetime import date
from typing import Any, Callable, Dict

from langchain_core.runnables import Runnable, RunnableLambda

from config import CONTEXT_TIMEOUT_SECONDS
from graph.chains.fundamentals import (
    fallback_economic_events,
    fallback_fundamental_analysis,
    is_valid_economic_events,
    is_valid_fundamental_analysis,
)
from graph.consts import ECONOMIC_EVENTS, FUNDAMENTAL_ANALYSIS
from graph.context import format_economic_events, format_fundamentals
from graph.orchestrator import ChainExecutionConfig, ChainOrchestrator
from graph.state import GraphState

logger = logging.getLogger(__name__)


def gather_context(
    state: GraphState,
    get_chain: Callable[[str], Runnable],
    orchestrator: ChainOrchestrator,
) -> Dict[str, Any]:
    logger.info("---GATHER CONTEXT---")
    if not state.get("include_fundamentals", True):
        return {"fundamental_summary": None, "economic_summary": None}

    symbol = state["symbol"]
    today = date.today()
    chains = []
    # Building a chain can fail (e.g. missing API key); fall back per chain.
    for config, name, inputs in (
        (
            ChainExecutionConfig(
                name="fundamentals",
                timeout=CONTEXT_TIMEOUT_SECONDS,
                fallback_value=fallback_fundamental_analysis(symbol),
                validator=is_valid_fundamental_analysis,
            ),
            FUNDAMENTAL_ANALYSIS,
            {"symbol": symbol},
        ),
        (
            ChainExecutionConfig(
                name="economic_events",
                timeout=CONTEXT_TIMEOUT_SECONDS,
                fallback_value=fallback_economic_events(symbol, today),
                validator=is_valid_economic_events,
            ),
            ECONOMIC_EVENTS,
            {"symbol": symbol, "weekday": today.strftime("%A"), "today": today.isoformat()},
        ),
    ):
        try:
            chains.append((config, get_chain(name), inputs))
        except Exception as e:
            logger.warning("[CONTEXT] %s chain unavailable (%s) → fallback", name, e)
            chains.append((config, _fallback_runnable(config.fallback_value), inputs))

    results = orchestrator.execute_parallel(chains)
    return {
        "fundamental_summary": format_fundamentals(results.get("fundamentals")),
        "economic_summary": format_economic_events(results.get("economic_events")),
    }


def _fallback_runnable(value: Any) -> Runnable:
    return RunnableLambda(lambda _inputs: value)
