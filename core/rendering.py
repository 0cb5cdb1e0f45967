"""
Render/export sink: turns a series plus its indicators into a PNG data-URI.

The decision step only ever sees the data-URI string, so any backend that can
produce PNG bytes can stand in for PlotlyRenderer (tests use a fake).
"""

import base64
import logging
from abc import ABC, abstractmethod

from core.charts import build_chart_figure
from core.models import CandleSeries, IndicatorSet

logger = logging.getLogger(__name__)


def to_data_uri(png_bytes: bytes, mime: str = "image/png") -> str:
    """Encode raw image bytes as ``data:<mime>;base64,<payload>``."""
    encoded = base64.b64encode(png_bytes).decode("ascii")
    return f"data:{mime};base64,{encoded}"


class Renderer(ABC):
    """Snapshot a chart to a PNG data-URI."""

    @abstractmethod
    def snapshot(self, series: CandleSeries, indicators: IndicatorSet, title: str = "") -> str:
        pass


class PlotlyRenderer(Renderer):
    """Static PNG export of the dashboard figure through kaleido."""

    def __init__(self, width: int = 1200, height: int = 800, theme: str = "dark"):
        self.width = width
        self.height = height
        self.theme = theme

    def snapshot(self, series: CandleSeries, indicators: IndicatorSet, title: str = "") -> str:
        fig = build_chart_figure(series, indicators, title=title, theme=self.theme)
        fig.update_layout(height=self.height, width=self.width, transition_duration=0)
        png = fig.to_image(format="png", width=self.width, height=self.height, scale=1)
        logger.debug("[RENDER] %s: %d bytes (%dx%d)", title or "chart", len(png), self.width, self.height)
        return to_data_uri(png)
