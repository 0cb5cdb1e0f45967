from .config import CHAIN_CONFIGS, ChainConfig
from .factory import ChainFactory
from .fundamentals import (
    EconomicEvents,
    FundamentalAnalysis,
    fallback_economic_events,
    fallback_fundamental_analysis,
    is_valid_economic_events,
    is_valid_fundamental_analysis,
)
from .trade_signal import TradeSignal, TradeSignalAnalysis, build_signal_messages

__all__ = [
    "CHAIN_CONFIGS",
    "ChainConfig",
    "ChainFactory",
    "EconomicEvents",
    "FundamentalAnalysis",
    "fallback_economic_events",
    "fallback_fundamental_analysis",
    "is_valid_economic_events",
    "is_valid_fundamental_analysis",
    "TradeSignal",
    "TradeSignalAnalysis",
    "build_signal_messages",
]
