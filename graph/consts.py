"""Node / chain name constants for the signal graph."""

BUILD_CHARTS = "build_charts"
GATHER_CONTEXT = "gather_context"
GENERATE_SIGNAL = "generate_signal"

# Chain registry keys
TRADE_SIGNAL = "trade_signal"
FUNDAMENTAL_ANALYSIS = "fundamental_analysis"
ECONOMIC_EVENTS = "economic_events"
