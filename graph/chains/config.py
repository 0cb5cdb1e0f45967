"""
Chain configurations for the signal pipeline.

Defines the prompts and output types for each chain in a data-driven format,
so the factory can build any of them by name.
"""

from dataclasses import dataclass
from typing import Callable, Literal, Optional, Type

from pydantic import BaseModel

from config import LLM_MODEL, LLM_TEMPERATURE
from graph.chains.fundamentals import EconomicEvents, FundamentalAnalysis
from graph.chains.trade_signal import TradeSignalAnalysis, build_signal_messages
from graph.consts import ECONOMIC_EVENTS, FUNDAMENTAL_ANALYSIS, TRADE_SIGNAL


@dataclass
class ChainConfig:
    """Configuration for building an LLM chain."""

    name: str  # Chain identifier (e.g., "trade_signal")
    output_type: Literal["string", "structured", "vision"]
    system_prompt: str = ""  # Unused for vision chains
    human_prompt_template: str = ""  # Human message template with {variables}
    structured_model: Optional[Type[BaseModel]] = None
    message_builder: Optional[Callable] = None  # vision: input -> list of messages
    llm_model: str = LLM_MODEL
    temperature: float = LLM_TEMPERATURE


FUNDAMENTAL_ANALYSIS_CONFIG = ChainConfig(
    name=FUNDAMENTAL_ANALYSIS,
    output_type="structured",
    system_prompt=(
        "You are a financial news analyst for the cryptocurrency market. Based on your knowledge of "
        "current market trends and typical patterns, provide a fundamental analysis of the asset. "
        "Focus on general market conditions and known factors rather than specific breaking news. "
        "If you cannot determine specific trends, give general context about the asset class and "
        "what typically influences it."
    ),
    human_prompt_template=(
        "Symbol: {symbol}\n\n"
        "Summarize: 1) the regulatory environment, 2) institutional adoption, "
        "3) likely market sentiment, 4) a one-sentence overall outlook."
    ),
    structured_model=FundamentalAnalysis,
)

ECONOMIC_EVENTS_CONFIG = ChainConfig(
    name=ECONOMIC_EVENTS,
    output_type="structured",
    system_prompt=(
        "You are a financial analyst. Identify potential market-moving economic events in the next "
        "48 hours: FOMC decisions, CPI/PPI releases, Non-Farm Payrolls, GDP, crypto regulatory "
        "hearings, major earnings, central bank announcements. If it is a typical low-impact period, "
        "state \"No major economic events are typically scheduled during this period that are likely "
        "to significantly impact the market.\""
    ),
    human_prompt_template=(
        "Symbol: {symbol}\n"
        "Today is {weekday}, {today}.\n\n"
        "Summarize the events to monitor and their likely impact."
    ),
    structured_model=EconomicEvents,
)

TRADE_SIGNAL_CONFIG = ChainConfig(
    name=TRADE_SIGNAL,
    output_type="vision",
    structured_model=TradeSignalAnalysis,
    message_builder=build_signal_messages,
)

# Registry of all chain configurations
CHAIN_CONFIGS = {
    FUNDAMENTAL_ANALYSIS: FUNDAMENTAL_ANALYSIS_CONFIG,
    ECONOMIC_EVENTS: ECONOMIC_EVENTS_CONFIG,
    TRADE_SIGNAL: TRADE_SIGNAL_CONFIG,
}
