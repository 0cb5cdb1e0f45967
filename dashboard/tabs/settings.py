"""
Page: Settings: AI preferences and multi-timeframe options.
"""

import streamlit as st

from config import TIMEFRAMES
from core.payload import AiPreferences
from dashboard.core.session import get_chart_settings, update_chart_settings
from dashboard.utils.storage import save_chart_settings, save_preferences
from dashboard.utils.timezones import TIMEZONE_OPTIONS, resolve_timezone

RISK_PROFILES = ["conservative", "moderate", "aggressive"]

settings = get_chart_settings()
preferences: AiPreferences = st.session_state.preferences

st.markdown("## Settings")

with st.form("settings_form"):
    st.markdown("### AI Preferences")
    risk_profile = st.radio(
        "Risk profile",
        RISK_PROFILES,
        index=RISK_PROFILES.index(preferences.risk_profile),
        horizontal=True,
        help="Conservative aims for ~1:1.5 reward/risk, moderate for 1:2, aggressive for 1:3 or more.",
    )
    detailed = st.toggle("Detailed step-by-step analysis", value=preferences.detailed_analysis)

    st.markdown("### Multi-Timeframe Analysis")
    additional = st.multiselect(
        "Additional timeframes",
        TIMEFRAMES,
        default=[tf for tf in settings["additional_timeframes"] if tf in TIMEFRAMES],
        help="Rendered alongside the primary chart for higher-timeframe context. "
        "The primary timeframe is skipped automatically.",
    )
    include_fundamentals = st.toggle(
        "Include fundamental & economic context",
        value=settings["include_fundamentals"],
    )

    st.markdown("### Display")
    current_tz = resolve_timezone(settings.get("display_timezone", "UTC"))
    timezone = st.selectbox(
        "Chart timezone",
        TIMEZONE_OPTIONS,
        index=TIMEZONE_OPTIONS.index(current_tz) if current_tz in TIMEZONE_OPTIONS else 0,
    )

    submitted = st.form_submit_button("Save", type="primary")

if submitted:
    new_preferences = AiPreferences(risk_profile=risk_profile, detailed_analysis=detailed)
    save_preferences(new_preferences)
    st.session_state.preferences = new_preferences

    changes = {
        "additional_timeframes": additional,
        "include_fundamentals": include_fundamentals,
        "display_timezone": timezone,
    }
    update_chart_settings(**changes)
    save_chart_settings(changes)
    st.success("Settings saved.")
