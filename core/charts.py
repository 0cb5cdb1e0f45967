"""
Chart building: candlesticks plus indicator overlays/panes as a Plotly figure.

Used both for the interactive dashboard chart and for the PNG snapshots sent
to the decision step.
"""

from typing import Optional

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from core.models import (
    BOLLINGER_PERIOD,
    RSI_PERIOD,
    SMA_PERIOD,
    CandleSeries,
    IndicatorSet,
)
from core.normalizer import series_to_frame

UP_COLOR = "#3366FF"
DOWN_COLOR = "#EF4444"
GRID_COLOR = "rgba(197, 203, 206, 0.2)"

_THEMES = {
    "dark": {"template": "plotly_dark", "font_color": "#D1D5DB"},
    "light": {"template": "plotly_white", "font_color": "#1F2937"},
}


def _to_datetimes(times, display_timezone: Optional[str]) -> pd.DatetimeIndex:
    index = pd.to_datetime(list(times), unit="s", utc=True)
    if display_timezone:
        index = index.tz_convert(display_timezone)
    return index


def build_chart_figure(
    series: CandleSeries,
    indicators: IndicatorSet,
    title: str = "",
    theme: str = "dark",
    display_timezone: Optional[str] = None,
    show_volume: bool = True,
) -> go.Figure:
    """Create a candlestick chart with SMA/Bollinger overlays and RSI/MACD panes."""
    lower_panes = []
    if show_volume:
        lower_panes.append("Volume")
    if indicators.rsi is not None:
        lower_panes.append(f"RSI ({RSI_PERIOD})")
    if indicators.macd is not None:
        lower_panes.append("MACD")

    rows = 1 + len(lower_panes)
    row_heights = [0.55] + [0.45 / len(lower_panes)] * len(lower_panes) if lower_panes else [1.0]
    fig = make_subplots(
        rows=rows,
        cols=1,
        shared_xaxes=True,
        vertical_spacing=0.03,
        subplot_titles=(title or "Price", *lower_panes),
        row_heights=row_heights,
    )
    pane_row = {name: i + 2 for i, name in enumerate(lower_panes)}

    df = series_to_frame(series)
    if display_timezone and not df.empty:
        df.index = df.index.tz_convert(display_timezone)

    # ── Price pane ──────────────────────────────────────────────────────
    fig.add_trace(
        go.Candlestick(
            x=df.index,
            open=df["Open"],
            high=df["High"],
            low=df["Low"],
            close=df["Close"],
            name="Price",
            increasing_line_color=UP_COLOR,
            decreasing_line_color=DOWN_COLOR,
            increasing_fillcolor=UP_COLOR,
            decreasing_fillcolor=DOWN_COLOR,
        ),
        row=1,
        col=1,
    )

    if indicators.bollinger:
        x = _to_datetimes((p.time for p in indicators.bollinger), display_timezone)
        fig.add_trace(
            go.Scatter(
                x=x, y=[p.upper for p in indicators.bollinger], mode="lines",
                name=f"BB Upper ({BOLLINGER_PERIOD})", line=dict(color="rgba(41, 182, 246, 0.8)", width=1),
            ),
            row=1, col=1,
        )
        fig.add_trace(
            go.Scatter(
                x=x, y=[p.lower for p in indicators.bollinger], mode="lines",
                name=f"BB Lower ({BOLLINGER_PERIOD})", line=dict(color="rgba(41, 182, 246, 0.8)", width=1),
                fill="tonexty", fillcolor="rgba(41, 182, 246, 0.08)",
            ),
            row=1, col=1,
        )

    if indicators.sma:
        fig.add_trace(
            go.Scatter(
                x=_to_datetimes((p.time for p in indicators.sma), display_timezone),
                y=[p.value for p in indicators.sma],
                mode="lines",
                name=f"SMA ({SMA_PERIOD})",
                line=dict(color="orange", width=2),
            ),
            row=1, col=1,
        )

    # ── Volume pane ─────────────────────────────────────────────────────
    if "Volume" in pane_row and not df.empty:
        bar_colors = [UP_COLOR if c >= o else DOWN_COLOR for o, c in zip(df["Open"], df["Close"])]
        fig.add_trace(
            go.Bar(x=df.index, y=df["Volume"], name="Volume", marker_color=bar_colors, opacity=0.6),
            row=pane_row["Volume"], col=1,
        )

    # ── RSI pane ────────────────────────────────────────────────────────
    rsi_name = f"RSI ({RSI_PERIOD})"
    if rsi_name in pane_row:
        row = pane_row[rsi_name]
        fig.add_trace(
            go.Scatter(
                x=_to_datetimes((p.time for p in indicators.rsi), display_timezone),
                y=[p.value for p in indicators.rsi],
                mode="lines",
                name=rsi_name,
                line=dict(color="purple", width=2),
            ),
            row=row, col=1,
        )
        for level in (30, 70):
            fig.add_hline(y=level, line_dash="dot", line_color="grey", opacity=0.6, row=row, col=1)
        fig.update_yaxes(range=[0, 100], row=row, col=1)

    # ── MACD pane ───────────────────────────────────────────────────────
    if "MACD" in pane_row:
        row = pane_row["MACD"]
        points = indicators.macd.points()
        x = _to_datetimes((p.time for p in points), display_timezone)
        fig.add_trace(
            go.Bar(
                x=x, y=[p.histogram for p in points], name="Histogram",
                marker_color=[p.histogram_color for p in points],
            ),
            row=row, col=1,
        )
        fig.add_trace(
            go.Scatter(x=x, y=[p.macd_line for p in points], mode="lines", name="MACD",
                       line=dict(color="blue", width=2)),
            row=row, col=1,
        )
        fig.add_trace(
            go.Scatter(x=x, y=[p.signal_line for p in points], mode="lines", name="Signal",
                       line=dict(color="red", width=2)),
            row=row, col=1,
        )

    # Layout styling
    style = _THEMES.get(theme, _THEMES["dark"])
    timezone_display = f"Time ({display_timezone})" if display_timezone else "Time (UTC)"
    fig.update_layout(
        title=title,
        template=style["template"],
        font=dict(color=style["font_color"]),
        height=600 + 150 * max(0, rows - 2),
        showlegend=True,
        xaxis_rangeslider_visible=False,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        margin=dict(l=40, r=20, t=60, b=40),
    )
    fig.update_xaxes(gridcolor=GRID_COLOR, type="date")
    fig.update_xaxes(title_text=timezone_display, row=rows, col=1)
    fig.update_yaxes(gridcolor=GRID_COLOR)
    fig.update_yaxes(title_text="Price", row=1, col=1)

    return fig
