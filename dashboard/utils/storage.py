"""
File storage and persistence utilities for the dashboard.

Everything lives as JSON under ``DATA_DIR``: analysis history (newest first),
AI preferences and chart settings.
"""

import json
import logging
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from config import (
    ADDITIONAL_TIMEFRAMES,
    DATA_DIR,
    DEFAULT_DETAILED_ANALYSIS,
    DEFAULT_RISK_PROFILE,
    DEFAULT_SYMBOL,
    HISTORY_LIMIT,
    INCLUDE_FUNDAMENTALS,
    PRIMARY_TIMEFRAME,
)
from core.payload import AiPreferences

logger = logging.getLogger(__name__)

# ── Persistent Storage ──────────────────────────────────────────────────────
_HISTORY_FILE = DATA_DIR / "analysis_history.json"
_PREFERENCES_FILE = DATA_DIR / "ai_preferences.json"
_CHART_SETTINGS_FILE = DATA_DIR / "chart_settings.json"

_history_lock = threading.Lock()

DEFAULT_CHART_SETTINGS: Dict[str, Any] = {
    "symbol": DEFAULT_SYMBOL,
    "primary_timeframe": PRIMARY_TIMEFRAME,
    "additional_timeframes": list(ADDITIONAL_TIMEFRAMES),
    "include_fundamentals": INCLUDE_FUNDAMENTALS,
    "indicator": "all",
    "display_timezone": "UTC",
}


def _read_json(path: Path, default: Any) -> Any:
    if not path.exists():
        return default
    try:
        with open(path, "r") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("[STORAGE] Could not read %s: %s", path.name, e)
        return default


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)


# ── Analysis history ────────────────────────────────────────────────────────

def load_history() -> List[dict]:
    """Load saved analyses, newest first."""
    history = _read_json(_HISTORY_FILE, [])
    return history if isinstance(history, list) else []


def save_history(history: List[dict]) -> None:
    _write_json(_HISTORY_FILE, history[:HISTORY_LIMIT])


def make_history_entry(analysis: dict, chart_image: str, symbol: str = "", timeframe: str = "") -> dict:
    return {
        "id": uuid.uuid4().hex,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "symbol": symbol,
        "timeframe": timeframe,
        "analysis": analysis,
        "chartImage": chart_image,
    }


def append_history(entry: dict) -> List[dict]:
    """Prepend ``entry`` and keep only the newest ``HISTORY_LIMIT`` analyses."""
    with _history_lock:
        history = [entry] + load_history()
        history = history[:HISTORY_LIMIT]
        save_history(history)
    return history


def clear_history() -> None:
    with _history_lock:
        save_history([])


# ── AI preferences ──────────────────────────────────────────────────────────

def load_preferences() -> AiPreferences:
    data = _read_json(_PREFERENCES_FILE, None)
    if isinstance(data, dict):
        try:
            return AiPreferences(**data)
        except ValidationError as e:
            logger.warning("[STORAGE] Ignoring invalid preferences: %s", e)
    return AiPreferences(risk_profile=DEFAULT_RISK_PROFILE, detailed_analysis=DEFAULT_DETAILED_ANALYSIS)


def save_preferences(preferences: AiPreferences) -> None:
    _write_json(_PREFERENCES_FILE, preferences.model_dump())


# ── Chart settings ──────────────────────────────────────────────────────────

def load_chart_settings() -> Dict[str, Any]:
    """Saved settings merged over the defaults; unknown keys are dropped."""
    settings = dict(DEFAULT_CHART_SETTINGS)
    saved = _read_json(_CHART_SETTINGS_FILE, {})
    if isinstance(saved, dict):
        settings.update({k: v for k, v in saved.items() if k in DEFAULT_CHART_SETTINGS})
    return settings


def save_chart_settings(settings: Dict[str, Any], base: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Merge ``settings`` over ``base`` (or the stored settings) and persist the result."""
    merged = dict(base if base is not None else load_chart_settings())
    merged.update({k: v for k, v in settings.items() if k in DEFAULT_CHART_SETTINGS})
    _write_json(_CHART_SETTINGS_FILE, merged)
    return merged
