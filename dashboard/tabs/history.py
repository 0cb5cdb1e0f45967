"""
Page: History: the most recent saved analyses, newest first.
"""

import base64
from datetime import datetime

import streamlit as st

from config import HISTORY_LIMIT
from dashboard.core.session import refresh_history
from dashboard.utils.display import render_analysis
from dashboard.utils.storage import clear_history

st.markdown("## Analysis History")
st.caption(f"The last {HISTORY_LIMIT} analyses are kept.")

history = st.session_state.history

col_l, col_r = st.columns([4, 1])
with col_r:
    if st.button("Clear history", width="stretch", disabled=not history):
        clear_history()
        refresh_history()
        st.rerun()

if not history:
    st.info("No analyses yet. Run one from the **Analysis** page.")
    st.stop()


def _label(entry: dict) -> str:
    try:
        ts = datetime.fromisoformat(entry["timestamp"]).strftime("%Y-%m-%d %H:%M UTC")
    except (KeyError, ValueError):
        ts = entry.get("timestamp", "?")
    subject = " ".join(p for p in (entry.get("symbol"), entry.get("timeframe")) if p)
    return f"{ts}  ·  {subject}" if subject else ts


for entry in history:
    with st.expander(_label(entry)):
        chart = entry.get("chartImage", "")
        if chart.startswith("data:image/png;base64,"):
            st.image(base64.b64decode(chart.split(",", 1)[1]))
        render_analysis(entry.get("analysis") or {})
