"""
LangGraph workflow for the signal pipeline.

Pipeline: START → {BUILD_CHARTS, GATHER_CONTEXT} (parallel) → GENERATE_SIGNAL → END
"""

import logging
from functools import partial
from typing import Callable, Iterable, Optional

from langchain_core.runnables import Runnable
from langgraph.graph import END, START, StateGraph

from config import (
    ADDITIONAL_TIMEFRAMES,
    CHART_HEIGHT,
    CHART_THEME,
    CHART_WIDTH,
    CONTEXT_TIMEOUT_SECONDS,
    INCLUDE_FUNDAMENTALS,
    PRIMARY_TIMEFRAME,
)
from core.models import IndicatorConfig
from core.payload import AiPreferences
from core.providers import get_provider
from core.rendering import PlotlyRenderer
from core.request_tracker import RequestToken, RequestTracker
from core.timeframes import TimeframeAnalyzer

from .chains import ChainFactory
from .consts import BUILD_CHARTS, GATHER_CONTEXT, GENERATE_SIGNAL
from .nodes import build_charts, gather_context, generate_signal
from .orchestrator import ChainOrchestrator
from .state import GraphState

logger = logging.getLogger(__name__)


def create_analyzer(
    indicator_config: Optional[IndicatorConfig] = None,
    tracker: Optional[RequestTracker] = None,
) -> TimeframeAnalyzer:
    """Analyzer wired to the configured provider chain and the PNG renderer."""
    return TimeframeAnalyzer(
        get_provider(),
        PlotlyRenderer(CHART_WIDTH, CHART_HEIGHT, CHART_THEME),
        indicator_config,
        tracker=tracker,
    )


def build_graph(
    analyzer: TimeframeAnalyzer,
    get_chain: Callable[[str], Runnable] = ChainFactory.get_chain,
    orchestrator: Optional[ChainOrchestrator] = None,
    tracker: Optional[RequestTracker] = None,
):
    """Compile the workflow around the given collaborators."""
    orchestrator = orchestrator or ChainOrchestrator(default_timeout=CONTEXT_TIMEOUT_SECONDS)
    tracker = tracker if tracker is not None else analyzer.tracker

    workflow = StateGraph(GraphState)

    # Add nodes
    workflow.add_node(BUILD_CHARTS, partial(build_charts, analyzer=analyzer))
    workflow.add_node(GATHER_CONTEXT, partial(gather_context, get_chain=get_chain, orchestrator=orchestrator))
    workflow.add_node(GENERATE_SIGNAL, partial(generate_signal, get_chain=get_chain, tracker=tracker))

    # Charts and context are independent: fan out, then join on the signal step
    workflow.add_edge(START, BUILD_CHARTS)
    workflow.add_edge(START, GATHER_CONTEXT)
    workflow.add_edge([BUILD_CHARTS, GATHER_CONTEXT], GENERATE_SIGNAL)
    workflow.add_edge(GENERATE_SIGNAL, END)

    return workflow.compile()


def run_analysis(
    symbol: str,
    primary_timeframe: str = PRIMARY_TIMEFRAME,
    additional_timeframes: Iterable[str] = ADDITIONAL_TIMEFRAMES,
    preferences: Optional[AiPreferences] = None,
    include_fundamentals: bool = INCLUDE_FUNDAMENTALS,
    token: Optional[RequestToken] = None,
    app=None,
) -> GraphState:
    """
    Run the whole pipeline once and return the final state.

    ``state["analysis"]`` holds the TradeSignalAnalysis dict on success,
    ``state["error"]`` the user-facing message otherwise.

    Raises:
        StaleRequestDiscarded: if ``token`` was superseded mid-run.
    """
    additional = list(additional_timeframes)
    app = app or build_graph(create_analyzer())
    logger.info("[GRAPH] %s %s (+%s)", symbol, primary_timeframe, ",".join(additional) or "-")
    return app.invoke(
        {
            "symbol": symbol.upper(),
            "primary_timeframe": primary_timeframe,
            "additional_timeframes": additional,
            "include_fundamentals": include_fundamentals,
            "preferences": preferences or AiPreferences(),
            "token": token,
            "error": None,
        }
    )
