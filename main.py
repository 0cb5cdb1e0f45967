"""
Command-line entry point for ChartAlchemist.

• Runs the signal pipeline once for one symbol (or on a schedule with --loop).
• Each cycle:  fetch klines for the primary + context timeframes
               compute indicators and render chart snapshots
               gather fundamental / macro context (optional)
               ask the vision model for a trade signal
• Prints the signal as JSON and appends it to the shared analysis history.
"""

import sys
from pathlib import Path

# Ensure the package root is importable when launched as a script
_ROOT = Path(__file__).resolve().parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import argparse
import json
import logging
import time
from datetime import datetime, timezone

from config import (
    ADDITIONAL_TIMEFRAMES,
    DEFAULT_DETAILED_ANALYSIS,
    DEFAULT_RISK_PROFILE,
    DEFAULT_SYMBOL,
    INCLUDE_FUNDAMENTALS,
    LOG_LEVEL,
    PRIMARY_TIMEFRAME,
    RUN_INTERVAL_SECONDS,
)
from core.log import setup_logging
from core.models import IndicatorConfig
from core.payload import AiPreferences
from dashboard.utils.storage import append_history, make_history_entry
from graph.context import format_market_snapshot
from graph.graph import build_graph, create_analyzer, run_analysis

logger = logging.getLogger("main")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Multi-timeframe chart analysis and AI trade signals.")
    parser.add_argument("--symbol", default=DEFAULT_SYMBOL, help="Trading pair, e.g. BTCUSDT")
    parser.add_argument("--timeframe", default=PRIMARY_TIMEFRAME, help="Primary timeframe, e.g. 4h")
    parser.add_argument(
        "--extra",
        default=",".join(ADDITIONAL_TIMEFRAMES),
        help="Comma-separated context timeframes ('' for none)",
    )
    parser.add_argument(
        "--risk",
        choices=["conservative", "moderate", "aggressive"],
        default=DEFAULT_RISK_PROFILE,
    )
    parser.add_argument("--indicator", default="all", help="all, none, sma, rsi, macd or bollinger")
    parser.add_argument("--brief", action="store_true", default=not DEFAULT_DETAILED_ANALYSIS,
                        help="Brief summary instead of a step-by-step breakdown")
    parser.add_argument("--no-fundamentals", action="store_true", default=not INCLUDE_FUNDAMENTALS)
    parser.add_argument("--no-history", action="store_true", help="Don't append results to the history file")
    parser.add_argument("--loop", action="store_true", help=f"Repeat every {RUN_INTERVAL_SECONDS}s")
    return parser.parse_args(argv)


def run_cycle(args: argparse.Namespace, app) -> int:
    """Run the pipeline once. Returns a process exit code."""
    extra = [tf.strip() for tf in args.extra.split(",") if tf.strip()]
    preferences = AiPreferences(risk_profile=args.risk, detailed_analysis=not args.brief)

    state = run_analysis(
        args.symbol,
        args.timeframe,
        extra,
        preferences,
        include_fundamentals=not args.no_fundamentals,
        app=app,
    )

    bundle = state.get("bundle")
    if bundle is not None:
        print(format_market_snapshot(bundle))

    if state.get("error"):
        print(f"❌ {state['error']}")
        return 1

    print(json.dumps(state["analysis"], indent=2))

    if not args.no_history:
        append_history(
            make_history_entry(
                state["analysis"],
                bundle.primary.chart_data_uri,
                symbol=args.symbol.upper(),
                timeframe=bundle.primary.timeframe,
            )
        )
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(LOG_LEVEL)

    app = build_graph(create_analyzer(IndicatorConfig.from_selection(args.indicator)))

    print("🚀 ChartAlchemist started")
    print(f"   Symbol: {args.symbol.upper()}  |  Primary: {args.timeframe}  |  Context: {args.extra or 'none'}")
    print(f"   Risk profile: {args.risk}")
    print()

    if not args.loop:
        return run_cycle(args, app)

    while True:
        print(f"\n⏰ Cycle start: {datetime.now(timezone.utc).isoformat()}")
        try:
            run_cycle(args, app)
        except Exception:
            logger.exception("Cycle failed")

        print(f"\n💤 Sleeping {RUN_INTERVAL_SECONDS}s until next cycle…")
        time.sleep(RUN_INTERVAL_SECONDS)


if __name__ == "__main__":
    sys.exit(main())
