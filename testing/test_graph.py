"""
Tests for the signal graph: charts + context fan-out joined on the signal step.

The market-data provider, renderer and every chain are fakes.

Usage:
    pytest testing/test_graph.py -v
"""

import pytest
from langchain_core.runnables import RunnableLambda

from conftest import FakeProvider, FakeRenderer, make_klines, wavy_closes
from core.errors import StaleRequestDiscarded, UpstreamUnavailable
from core.models import IndicatorConfig
from core.payload import AiPreferences, SignalRequest
from core.request_tracker import RequestTracker
from core.timeframes import TimeframeAnalyzer
from graph.chains import EconomicEvents, FundamentalAnalysis, TradeSignal, TradeSignalAnalysis
from graph.consts import ECONOMIC_EVENTS, FUNDAMENTAL_ANALYSIS, TRADE_SIGNAL
from graph.graph import build_graph, run_analysis

KLINES = make_klines(wavy_closes(120))

SIGNAL = TradeSignalAnalysis(
    analysis_summary="Higher timeframes trend up; 4h pulled back to support.",
    trade_signal=TradeSignal(
        entry_price_range="29,800 - 30,000",
        take_profit_levels=["30,600", "31,200"],
        stop_loss="29,400",
    ),
)


class FakeChains:
    """Stands in for ChainFactory.get_chain and records what the signal chain saw."""

    def __init__(self, signal=SIGNAL, signal_error=None, context_error=None):
        self.requests = []
        self.signal = signal
        self.signal_error = signal_error
        self.context_error = context_error

    def _signal(self, request: SignalRequest):
        self.requests.append(request)
        if self.signal_error:
            raise self.signal_error
        return self.signal

    def _context(self, value):
        def run(_inputs):
            if self.context_error:
                raise self.context_error
            return value
        return RunnableLambda(run)

    def __call__(self, name):
        if name == TRADE_SIGNAL:
            return RunnableLambda(self._signal)
        if name == FUNDAMENTAL_ANALYSIS:
            return self._context(FundamentalAnalysis(
                regulatory_news="Clear rules.",
                institutional_adoption="ETF inflows.",
                market_sentiment="Bullish",
                overall_summary="Constructive outlook.",
            ))
        if name == ECONOMIC_EVENTS:
            return self._context(EconomicEvents(event_summary="CPI release on Wednesday."))
        raise KeyError(name)


def _app(chains, responses=None, tracker=None):
    provider = FakeProvider(responses or {"4h": KLINES, "1d": KLINES, "1h": KLINES})
    analyzer = TimeframeAnalyzer(provider, FakeRenderer(), IndicatorConfig(), tracker=tracker)
    return build_graph(analyzer, get_chain=chains)


class TestPipeline:
    def test_full_run(self):
        chains = FakeChains()
        state = run_analysis(
            "btcusdt", "4h", ["1d", "1h"],
            AiPreferences(risk_profile="conservative"),
            include_fundamentals=True,
            app=_app(chains),
        )

        assert state["error"] is None
        assert state["analysis"]["trade_signal"]["stop_loss"] == "29,400"
        assert state["fundamental_summary"].startswith("Constructive outlook.")
        assert state["economic_summary"] == "CPI release on Wednesday."

        request = chains.requests[0]
        assert request.risk_profile == "conservative"
        assert request.fundamental_analysis_summary.startswith("Constructive outlook.")
        assert set(request.additional_charts()) == {"chartDataUri_1d", "chartDataUri_1h"}

    def test_without_fundamentals(self):
        chains = FakeChains()
        state = run_analysis("BTCUSDT", "4h", [], include_fundamentals=False, app=_app(chains))

        assert state["fundamental_summary"] is None
        assert state["economic_summary"] is None
        assert chains.requests[0].to_payload().keys() >= {"chartDataUri", "ohlcData", "indicatorData"}
        assert "fundamentalAnalysisSummary" not in chains.requests[0].to_payload()

    def test_context_failure_falls_back(self):
        chains = FakeChains(context_error=RuntimeError("rate limited"))
        state = run_analysis("BTCUSDT", "4h", [], include_fundamentals=True, app=_app(chains))

        assert state["fundamental_summary"].startswith("Bitcoin maintains strong fundamental support")
        assert state["economic_summary"].startswith("Economic considerations for the next 48 hours")
        assert state["analysis"] is not None

    def test_no_trade_signal(self):
        chains = FakeChains(signal=TradeSignalAnalysis(analysis_summary="Timeframes conflict."))
        state = run_analysis("BTCUSDT", "4h", [], include_fundamentals=False, app=_app(chains))

        assert state["analysis"]["trade_signal"] is None
        assert state["error"] is None

    def test_failed_context_timeframe_is_reported(self):
        chains = FakeChains()
        responses = {"4h": KLINES, "1d": UpstreamUnavailable("timeout")}
        state = run_analysis("BTCUSDT", "4h", ["1d"], include_fundamentals=False, app=_app(chains, responses))

        assert "1d" in state["timeframe_failures"]
        assert chains.requests[0].additional_charts() == {}
        assert state["analysis"] is not None


class TestFailures:
    def test_primary_chart_failure_skips_signal(self):
        chains = FakeChains()
        responses = {"4h": UpstreamUnavailable("geo-blocked")}
        state = run_analysis("BTCUSDT", "4h", [], include_fundamentals=False, app=_app(chains, responses))

        assert state["analysis"] is None
        assert state["error"].startswith("Failed to load chart data")
        assert chains.requests == []

    def test_model_unavailable(self):
        chains = FakeChains(signal_error=RuntimeError("503 UNAVAILABLE"))
        state = run_analysis("BTCUSDT", "4h", [], include_fundamentals=False, app=_app(chains))

        assert state["analysis"] is None
        assert state["error"] == "Failed to get analysis: The AI model is currently unavailable. Please try again later."

    def test_stale_request_is_discarded(self):
        tracker = RequestTracker()
        stale = tracker.begin()
        tracker.begin()
        chains = FakeChains()

        with pytest.raises(StaleRequestDiscarded):
            run_analysis(
                "BTCUSDT", "4h", ["1d"],
                include_fundamentals=False,
                token=stale,
                app=_app(chains, tracker=tracker),
            )
        assert chains.requests == []
