"""
Background analysis runs for the dashboard.

Streamlit reruns the page script on every interaction, so the pipeline runs
on a worker thread and hands its result to an AnalysisSlot. The slot's
RequestTracker makes sure only the most recently started run can publish.
"""

import logging
import threading
from typing import Any, Dict, Optional

from core.errors import StaleRequestDiscarded, describe_analysis_error
from core.models import IndicatorConfig
from core.payload import AiPreferences
from core.request_tracker import RequestToken, RequestTracker
from dashboard.utils.storage import append_history, make_history_entry
from graph.graph import build_graph, create_analyzer, run_analysis

logger = logging.getLogger(__name__)


class AnalysisSlot:
    """Holds the latest published analysis for one browser session."""

    def __init__(self, tracker: Optional[RequestTracker] = None, runner=None, save_history: bool = True):
        self.tracker = tracker or RequestTracker()
        self._runner = runner or self._run_pipeline
        self._save_history = save_history
        self._lock = threading.Lock()
        self._pending: Optional[RequestToken] = None
        self.state: Optional[Dict[str, Any]] = None
        self.error: Optional[str] = None

    @property
    def running(self) -> bool:
        with self._lock:
            return self._pending is not None and self.tracker.is_current(self._pending)

    def start(self, settings: Dict[str, Any], preferences: AiPreferences, background: bool = True) -> RequestToken:
        """Begin a run; any run still in flight becomes stale."""
        token = self.tracker.begin(f"{settings['symbol']} {settings['primary_timeframe']}")
        with self._lock:
            self._pending = token
        if background:
            thread = threading.Thread(
                target=self._execute,
                args=(token, settings, preferences),
                daemon=True,
                name=f"analysis-{token.generation}",
            )
            thread.start()
        else:
            self._execute(token, settings, preferences)
        return token

    def _run_pipeline(self, token: RequestToken, settings: Dict[str, Any], preferences: AiPreferences) -> Dict[str, Any]:
        analyzer = create_analyzer(IndicatorConfig.from_selection(settings.get("indicator", "all")), self.tracker)
        return run_analysis(
            settings["symbol"],
            settings["primary_timeframe"],
            settings.get("additional_timeframes") or [],
            preferences,
            include_fundamentals=settings.get("include_fundamentals", True),
            token=token,
            app=build_graph(analyzer),
        )

    def _execute(self, token: RequestToken, settings: Dict[str, Any], preferences: AiPreferences) -> None:
        try:
            state = self._runner(token, settings, preferences)
        except StaleRequestDiscarded as e:
            logger.info("[ANALYSIS] %s", e)
            return
        except Exception as e:
            logger.exception("[ANALYSIS] Run #%s crashed", token.generation)
            state = {"analysis": None, "error": describe_analysis_error(e)}

        with self._lock:
            accepted = self.tracker.accept(token, state)
            if accepted is None:
                return
            self._pending = None
            self.state = accepted
            self.error = accepted.get("error")

        if self._save_history and accepted.get("analysis") and accepted.get("bundle") is not None:
            bundle = accepted["bundle"]
            append_history(
                make_history_entry(
                    accepted["analysis"],
                    bundle.primary.chart_data_uri,
                    symbol=settings["symbol"],
                    timeframe=bundle.primary.timeframe,
                )
            )
