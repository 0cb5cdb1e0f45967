"""
Trade-signal chain.
Consumes the assembled SignalRequest (chart snapshots + OHLC/indicator JSON +
risk profile + optional context) and returns a structured TradeSignalAnalysis.
"""

from typing import List, Optional

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from pydantic import BaseModel, Field

from core.payload import SignalRequest
from core.timeframes import CHART_URI_PREFIX


class TradeSignal(BaseModel):
    """Entry, targets and invalidation for one setup."""

    entry_price_range: str = Field(description="The recommended entry price range.")
    take_profit_levels: List[str] = Field(description="The recommended take profit levels.")
    stop_loss: str = Field(
        description="The recommended stop loss level, ensuring an appropriate "
        "risk/reward ratio for the given risk profile."
    )


class TradeSignalAnalysis(BaseModel):
    """Structured output of the decision step."""

    analysis_summary: str = Field(
        description="A step-by-step summary of the candlestick chart analysis, "
        "including trend, support/resistance, and key patterns."
    )
    trade_signal: Optional[TradeSignal] = Field(
        default=None,
        description="Omitted when no clear opportunity exists or timeframes conflict.",
    )


TIMEFRAME_TITLES = {
    "1w": "1 Week Chart",
    "1d": "1 Day Chart",
    "4h": "4 Hour Chart",
    "1h": "1 Hour Chart",
    "15m": "15 Minute Chart",
}

RISK_GUIDANCE = {
    "conservative": (
        "Focus on strong confirmation signals, wider stop losses placed at major structural "
        "levels, and more achievable take profit levels. Lower risk-to-reward is acceptable "
        "(e.g., 1:1.5)."
    ),
    "moderate": (
        "A balanced approach. Look for clear signals with good confirmation. Use logical stop "
        "losses and aim for a risk-to-reward ratio of at least 1:2."
    ),
    "aggressive": (
        "Willing to enter trades on early signals or weaker confirmations. Use tighter stop "
        "losses to maximize potential reward, and set more ambitious take profit levels, "
        "aiming for a risk-to-reward ratio of 1:3 or higher."
    ),
}

SYSTEM_PROMPT = """You are an expert crypto currency chart analyst using multi-timeframe analysis. \
Your trading style adapts to the user's risk profile: {risk_profile}.

You will be given a primary chart and possibly several charts from other timeframes.

**Analysis Process:**
1. **Establish Overall Trend (Higher Timeframes):** Start with the longest timeframe chart provided \
to determine the macro trend (uptrend, downtrend, or consolidation).
2. **Identify Key Levels (All Timeframes):** Pinpoint major support and resistance levels across all \
charts. Levels that appear on multiple timeframes are more significant.
3. **Analyze the Primary Chart:** Analyze its candlestick patterns (engulfing, doji, hammer), momentum \
(RSI and MACD from the provided data) and its position relative to the key levels.
4. **Consider Context:** When fundamental or economic-event summaries are provided, use them to \
strengthen conviction in a technical signal or to exercise caution when they contradict it.
5. **Synthesize and Summarize:** Explain how the higher timeframe context shapes your read of the \
primary timeframe. {detail_instruction}
6. **Generate a Trade Signal:** If a high-probability setup exists where timeframes align, give a \
clear signal based on the primary chart, tailored to the '{risk_profile}' profile: {risk_guidance}

If no clear opportunity exists or timeframes conflict, say so and leave the trade signal empty.

Use the OHLC and indicator data as the source for precise price points on the primary chart. \
Use the chart images for visual confirmation."""

DETAILED = "Provide a detailed, step-by-step breakdown."
BRIEF = "Provide a brief, concise summary."


def _image_part(uri: str) -> dict:
    return {"type": "image_url", "image_url": {"url": uri}}


def build_signal_messages(request: SignalRequest) -> List[BaseMessage]:
    """Render a SignalRequest as a system prompt plus one multimodal human message."""
    system = SYSTEM_PROMPT.format(
        risk_profile=request.risk_profile,
        risk_guidance=RISK_GUIDANCE[request.risk_profile],
        detail_instruction=DETAILED if request.detailed_analysis else BRIEF,
    )

    content: List[dict] = [{"type": "text", "text": "Primary Chart:"}, _image_part(request.chart_data_uri)]
    for key, uri in request.additional_charts().items():
        timeframe = key[len(CHART_URI_PREFIX):]
        title = TIMEFRAME_TITLES.get(timeframe, f"{timeframe} Chart")
        content.append({"type": "text", "text": f"{title}:"})
        content.append(_image_part(uri))

    text = (
        f"Primary Chart OHLC Data:\n{request.ohlc_data}\n\n"
        f"Primary Chart Technical Indicator Data:\n{request.indicator_data}"
    )
    if request.fundamental_analysis_summary:
        text += f"\n\nFundamental Analysis Summary:\n{request.fundamental_analysis_summary}"
    if request.economic_events_summary:
        text += f"\n\nUpcoming Economic Events:\n{request.economic_events_summary}"
    content.append({"type": "text", "text": text})

    return [SystemMessage(content=system), HumanMessage(content=content)]
