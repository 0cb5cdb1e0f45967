"""
Page: Analysis: live chart with indicators and on-demand AI trade signal.
"""

import time

import streamlit as st

from config import OPENAI_API_KEY, TIMEFRAMES
from core.errors import ChartAlchemistError
from core.charts import build_chart_figure
from core.indicators import compute_indicators
from core.models import IndicatorConfig
from dashboard.core.session import (
    get_analysis_slot,
    get_chart_settings,
    refresh_history,
    update_chart_settings,
)
from dashboard.utils.data import get_all_symbols, get_candle_series
from dashboard.utils.display import RISK_BADGES, render_analysis
from dashboard.utils.storage import save_chart_settings
from graph.context import format_failures

INDICATOR_OPTIONS = ["all", "sma", "rsi", "macd", "bollinger", "none"]

settings = get_chart_settings()
slot = get_analysis_slot()

st.markdown("## Chart Analysis")

# ── Controls ────────────────────────────────────────────────────────────────
c1, c2, c3, c4 = st.columns([2, 1, 1, 1])
with c1:
    symbols = get_all_symbols(settings["symbol"])
    symbol = st.selectbox("Symbol", symbols, index=symbols.index(settings["symbol"]))
with c2:
    primary = st.selectbox(
        "Timeframe",
        TIMEFRAMES,
        index=TIMEFRAMES.index(settings["primary_timeframe"]) if settings["primary_timeframe"] in TIMEFRAMES else 0,
    )
with c3:
    indicator = st.selectbox(
        "Indicators",
        INDICATOR_OPTIONS,
        index=INDICATOR_OPTIONS.index(settings["indicator"]) if settings["indicator"] in INDICATOR_OPTIONS else 0,
    )
with c4:
    st.write("")
    analyze_btn = st.button(
        "Analyze",
        type="primary",
        width="stretch",
        disabled=not OPENAI_API_KEY,
        help=None if OPENAI_API_KEY else "Set OPENAI_API_KEY in your .env file.",
    )

changes = {"symbol": symbol, "primary_timeframe": primary, "indicator": indicator}
if any(settings[k] != v for k, v in changes.items()):
    update_chart_settings(**changes)
    save_chart_settings(changes)
    settings = get_chart_settings()

# ── Live chart ──────────────────────────────────────────────────────────────
try:
    series = get_candle_series(symbol, primary)
    indicators = compute_indicators(series, IndicatorConfig.from_selection(indicator))
    fig = build_chart_figure(
        series,
        indicators,
        title=f"{symbol} {primary}",
        display_timezone=settings.get("display_timezone"),
    )
    st.plotly_chart(fig, width="stretch")

    if len(series):
        last = series[-1]
        s1, s2, s3, s4 = st.columns(4)
        with s1:
            st.metric("Close", f"{last.close:,.4f}")
        with s2:
            st.metric("Range High", f"{max(c.high for c in series):,.4f}")
        with s3:
            st.metric("Range Low", f"{min(c.low for c in series):,.4f}")
        with s4:
            st.metric("Candles", len(series))
except (ChartAlchemistError, ValueError) as e:
    st.error(f"Failed to load chart data: {e}")

# ── AI signal ───────────────────────────────────────────────────────────────
if analyze_btn:
    slot.start(dict(settings), st.session_state.preferences)

st.caption(
    f"Risk profile: {RISK_BADGES.get(st.session_state.preferences.risk_profile, '')}  ·  "
    f"Context timeframes: {', '.join(settings['additional_timeframes']) or 'none'}"
)


@st.fragment
def _signal_panel() -> None:
    if slot.running:
        with st.spinner("Analyzing charts…"):
            time.sleep(1.0)
        st.rerun(scope="fragment")
        return

    state = slot.state
    if state is None:
        st.info("Press **Analyze** to generate a trade signal for the current chart.")
        return

    if slot.error:
        st.error(slot.error)
        return

    failures = state.get("timeframe_failures") or {}
    for line in format_failures(failures):
        st.warning(line)

    render_analysis(state["analysis"])

    if st.session_state.get("_history_seen") != id(state):
        st.session_state._history_seen = id(state)
        refresh_history()


_signal_panel()
