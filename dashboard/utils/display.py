"""
Rendering helpers for analysis results, shared by the Analysis and History pages.
"""

import streamlit as st

RISK_BADGES = {
    "conservative": "🛡️ Conservative",
    "moderate": "⚖️ Moderate",
    "aggressive": "🔥 Aggressive",
}


def render_trade_signal(signal: dict | None) -> None:
    if not signal:
        st.info("No clear trade setup: timeframes are conflicting or confirmation is missing.")
        return

    c1, c2 = st.columns(2)
    with c1:
        st.metric("Entry", signal.get("entry_price_range", "-"))
    with c2:
        st.metric("Stop Loss", signal.get("stop_loss", "-"))

    levels = signal.get("take_profit_levels") or []
    if levels:
        st.markdown("**Take Profit**")
        for i, level in enumerate(levels, start=1):
            st.markdown(f"- TP{i}: {level}")


def render_analysis(analysis: dict) -> None:
    """Summary + trade signal of one TradeSignalAnalysis dict."""
    st.markdown("### Trade Signal")
    render_trade_signal(analysis.get("trade_signal"))

    with st.expander("📝 Analysis", expanded=True):
        st.markdown(analysis.get("analysis_summary", "N/A"))
