"""
Session state management and initialization for the dashboard.
"""

import streamlit as st

from dashboard.core.analysis import AnalysisSlot
from dashboard.utils.storage import load_chart_settings, load_history, load_preferences


def init_session_state() -> None:
    """Initialize dashboard session state variables."""
    # ── Background analysis slot (owns the request tracker) ────────────
    if "analysis_slot" not in st.session_state:
        st.session_state.analysis_slot = AnalysisSlot()

    # ── Persisted settings ──────────────────────────────────────────────
    if "chart_settings" not in st.session_state:
        st.session_state.chart_settings = load_chart_settings()

    if "preferences" not in st.session_state:
        st.session_state.preferences = load_preferences()

    # ── History ─────────────────────────────────────────────────────────
    if "history" not in st.session_state:
        st.session_state.history = load_history()


def get_analysis_slot() -> AnalysisSlot:
    return st.session_state.analysis_slot


def get_chart_settings() -> dict:
    return st.session_state.chart_settings


def update_chart_settings(**changes) -> None:
    st.session_state.chart_settings = {**st.session_state.chart_settings, **changes}


def refresh_history() -> None:
    st.session_state.history = load_history()
