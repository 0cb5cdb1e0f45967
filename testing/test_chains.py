"""
Tests for chain configuration, prompt assembly and the context fallbacks.

Usage:
    pytest testing/test_chains.py -v
"""

from datetime import date

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from graph.chains import (
    CHAIN_CONFIGS,
    ChainConfig,
    ChainFactory,
    EconomicEvents,
    FundamentalAnalysis,
    build_signal_messages,
    fallback_economic_events,
    fallback_fundamental_analysis,
    is_valid_economic_events,
    is_valid_fundamental_analysis,
)
from graph.consts import ECONOMIC_EVENTS, FUNDAMENTAL_ANALYSIS, TRADE_SIGNAL
from core.payload import SignalRequest


def _request(**overrides):
    data = {
        "chartDataUri": "data:image/png;base64,PRIMARY",
        "ohlcData": "[]",
        "indicatorData": "{}",
        "riskProfile": "moderate",
        "detailedAnalysis": True,
        "chartDataUri_1d": "data:image/png;base64,DAILY",
        "chartDataUri_1h": "data:image/png;base64,HOURLY",
    }
    data.update(overrides)
    return SignalRequest(**data)


# ── Registry / factory ──────────────────────────────────────────────────────


class TestFactory:
    def test_registry(self):
        assert set(CHAIN_CONFIGS) == {TRADE_SIGNAL, FUNDAMENTAL_ANALYSIS, ECONOMIC_EVENTS}
        assert CHAIN_CONFIGS[TRADE_SIGNAL].output_type == "vision"

    def test_unknown_chain(self):
        with pytest.raises(KeyError):
            ChainFactory.build_chain_by_name("news_sentiment")

    def test_string_chain(self, monkeypatch):
        monkeypatch.setattr(
            ChainFactory, "build_llm", staticmethod(lambda config: FakeListChatModel(responses=["Bullish."]))
        )
        config = ChainConfig(
            name="echo",
            output_type="string",
            system_prompt="You are terse.",
            human_prompt_template="Symbol: {symbol}",
        )
        assert ChainFactory.build_chain(config).invoke({"symbol": "BTCUSDT"}) == "Bullish."

    def test_unknown_output_type(self, monkeypatch):
        monkeypatch.setattr(
            ChainFactory, "build_llm", staticmethod(lambda config: FakeListChatModel(responses=["x"]))
        )
        with pytest.raises(ValueError):
            ChainFactory.build_chain(ChainConfig(name="bad", output_type="xml"))


# ── Trade-signal prompt ─────────────────────────────────────────────────────


class TestSignalMessages:
    def test_images_in_order(self):
        system, human = build_signal_messages(_request())

        assert isinstance(system, SystemMessage)
        assert isinstance(human, HumanMessage)
        urls = [part["image_url"]["url"] for part in human.content if part["type"] == "image_url"]
        assert urls == [
            "data:image/png;base64,PRIMARY",
            "data:image/png;base64,DAILY",
            "data:image/png;base64,HOURLY",
        ]
        texts = [part["text"] for part in human.content if part["type"] == "text"]
        assert "1 Day Chart:" in texts
        assert "1 Hour Chart:" in texts

    @pytest.mark.parametrize("profile,ratio", [("conservative", "1:1.5"), ("moderate", "1:2"), ("aggressive", "1:3")])
    def test_risk_guidance(self, profile, ratio):
        system, _ = build_signal_messages(_request(riskProfile=profile))
        assert ratio in system.content
        assert profile in system.content

    def test_detail_level(self):
        detailed, _ = build_signal_messages(_request(detailedAnalysis=True))
        brief, _ = build_signal_messages(_request(detailedAnalysis=False))
        assert "step-by-step breakdown" in detailed.content
        assert "brief, concise summary" in brief.content

    def test_optional_context(self):
        _, bare = build_signal_messages(_request())
        _, full = build_signal_messages(
            _request(fundamentalAnalysisSummary="Strong ETF inflows.", economicEventsSummary="CPI on Thursday.")
        )
        assert "Fundamental Analysis Summary" not in bare.content[-1]["text"]
        assert "Strong ETF inflows." in full.content[-1]["text"]
        assert "CPI on Thursday." in full.content[-1]["text"]


# ── Fallbacks ────────────────────────────────────────────────────────────────


class TestFundamentalFallback:
    @pytest.mark.parametrize(
        "symbol,needle",
        [
            ("BTCUSDT", "Bitcoin"),
            ("ETHUSDT", "Ethereum"),
            ("SOLUSDT", "layer-1"),
            ("DOGEUSDT", "Mixed"),
        ],
    )
    def test_per_asset(self, symbol, needle):
        analysis = fallback_fundamental_analysis(symbol)
        assert needle in analysis.as_summary()

    def test_validity(self):
        good = fallback_fundamental_analysis("BTCUSDT")
        bad = FundamentalAnalysis(
            regulatory_news="Error retrieving news",
            institutional_adoption="Error retrieving data",
            market_sentiment="Unknown",
            overall_summary="Unable to retrieve",
        )
        assert is_valid_fundamental_analysis(good)
        assert not is_valid_fundamental_analysis(bad)


class TestEconomicEventsFallback:
    def test_monday_first_week(self):
        events = fallback_economic_events("BTCUSDT", date(2024, 1, 1)).event_summary
        assert events.startswith("Economic considerations for the next 48 hours:")
        assert "Market open after weekend" in events
        assert "First week of month" in events
        assert "cryptocurrency news" in events

    def test_friday_mid_month_altcoin(self):
        events = fallback_economic_events("XRPUSDT", date(2024, 3, 15)).event_summary
        assert "End of trading week" in events
        assert "First week of month" not in events
        assert "cryptocurrency news" not in events
        assert events.endswith("session overlaps.")

    def test_validity(self):
        assert is_valid_economic_events(EconomicEvents(event_summary="FOMC on Wednesday."))
        assert not is_valid_economic_events(EconomicEvents(event_summary="Could not retrieve calendar"))
        assert not is_valid_economic_events(EconomicEvents(event_summary=""))
