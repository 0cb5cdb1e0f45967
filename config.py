"""
Central configuration for ChartAlchemist.
All tunables live here so they're easy to find and override via env vars.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _csv(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


# ── Paths ────────────────────────────────────────────────────────────────────
BASE_DIR = Path(__file__).parent          # project root
DATA_DIR = Path(os.getenv("DATA_DIR", str(BASE_DIR / "data")))

# ── OpenAI ───────────────────────────────────────────────────────────────────
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
LLM_MODEL = os.getenv("LLM_MODEL", "gpt-4o")  # must accept image input
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.0"))

# ── Market data (Binance klines) ─────────────────────────────────────────────
# Tried in order; the first host that answers wins.
BINANCE_BASE_URLS = _csv("BINANCE_BASE_URLS", "https://api.binance.com,https://api.binance.us")
KLINES_LIMIT = int(os.getenv("KLINES_LIMIT", "300"))
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))
KLINES_CACHE_SECONDS = int(os.getenv("KLINES_CACHE_SECONDS", "0"))  # 0 disables the cache

# ── Symbols & timeframes ─────────────────────────────────────────────────────
DEFAULT_SYMBOL = os.getenv("DEFAULT_SYMBOL", "BTCUSDT")
SYMBOLS = _csv("SYMBOLS", "BTCUSDT,ETHUSDT,SOLUSDT,XRPUSDT,DOGEUSDT")
TIMEFRAMES = _csv("TIMEFRAMES", "15m,1h,4h,1d,1w")
PRIMARY_TIMEFRAME = os.getenv("PRIMARY_TIMEFRAME", "4h")
ADDITIONAL_TIMEFRAMES = _csv("ADDITIONAL_TIMEFRAMES", "1d,1h")

# ── Analysis ─────────────────────────────────────────────────────────────────
INCLUDE_FUNDAMENTALS = os.getenv("INCLUDE_FUNDAMENTALS", "true").lower() == "true"
DEFAULT_RISK_PROFILE = os.getenv("DEFAULT_RISK_PROFILE", "moderate")
DEFAULT_DETAILED_ANALYSIS = os.getenv("DEFAULT_DETAILED_ANALYSIS", "true").lower() == "true"
MAX_TIMEFRAME_WORKERS = int(os.getenv("MAX_TIMEFRAME_WORKERS", "4"))
CONTEXT_TIMEOUT_SECONDS = float(os.getenv("CONTEXT_TIMEOUT_SECONDS", "30"))
RUN_INTERVAL_SECONDS = int(os.getenv("RUN_INTERVAL_SECONDS", "900"))  # 15 minutes

# ── Chart snapshots ──────────────────────────────────────────────────────────
CHART_WIDTH = int(os.getenv("CHART_WIDTH", "1200"))
CHART_HEIGHT = int(os.getenv("CHART_HEIGHT", "800"))
CHART_THEME = os.getenv("CHART_THEME", "dark")

# ── History ──────────────────────────────────────────────────────────────────
HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "50"))

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
