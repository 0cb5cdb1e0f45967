"""
ChartAlchemist: Streamlit Dashboard
====================================
Multi-page app coordinator: sidebar, session state, and navigation.

Run with:
    streamlit run dashboard/app.py
"""

import sys
from pathlib import Path

# Ensure the package root is importable when launched with `streamlit run`
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st

from config import LLM_MODEL, LOG_LEVEL, OPENAI_API_KEY
from core.log import setup_logging
from core.providers import get_provider
from dashboard.core.session import init_session_state
from dashboard.utils.validation import is_binance_reachable, is_openai_valid

setup_logging(LOG_LEVEL)

# ── Page Config ──────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="ChartAlchemist",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ── Session State ────────────────────────────────────────────────────────────
init_session_state()


@st.cache_data(ttl=300, show_spinner=False)
def _service_status() -> tuple[bool, bool]:
    return is_openai_valid(), is_binance_reachable(get_provider())


# ── Navigation ───────────────────────────────────────────────────────────────
_TABS_DIR = Path(__file__).resolve().parent / "tabs"

pages = [
    st.Page(str(_TABS_DIR / "analysis.py"), title="Analysis", url_path="analysis", default=True),
    st.Page(str(_TABS_DIR / "history.py"), title="History", url_path="history"),
    st.Page(str(_TABS_DIR / "settings.py"), title="Settings", url_path="settings"),
]

# ── Sidebar ──────────────────────────────────────────────────────────────────
with st.sidebar:
    st.markdown("# ChartAlchemist")
    st.caption("Multi-timeframe charting & AI trade signals")
    st.divider()

pg = st.navigation(pages)

with st.sidebar:
    st.markdown("### Status")
    openai_ok, market_ok = _service_status()
    col_s1, col_s2 = st.columns(2)
    with col_s1:
        st.checkbox("OpenAI", value=openai_ok, disabled=True)
    with col_s2:
        st.checkbox("Binance", value=market_ok, disabled=True)
    if not OPENAI_API_KEY:
        st.warning("Set `OPENAI_API_KEY` in your `.env` file to enable analysis.")
    st.caption(f"Model: {LLM_MODEL}")

pg.run()
