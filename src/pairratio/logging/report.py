"""Per-pair Plotly ratio chart report."""

from __future__ import annotations

import math
from pathlib import Path

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from pairratio.domain.models import Bar, Series

COLUMNS = ["open", "high", "low", "close", "volume"]


def series_to_frame(series: Series) -> pd.DataFrame:
    """Convert a series into a frame with a UTC datetime index."""
    if not series:
        return pd.DataFrame(columns=COLUMNS, index=pd.DatetimeIndex([], tz="UTC"))
    frame = pd.DataFrame(
        [[bar.open, bar.high, bar.low, bar.close, bar.volume] for bar in series],
        columns=COLUMNS,
        index=pd.to_datetime([bar.timestamp for bar in series], unit="ms", utc=True),
    )
    frame.index.name = "timestamp"
    return frame


def displayable(series: Series) -> Series:
    """Drop bars carrying non-finite OHLC values (zero-priced denominators)."""
    return tuple(bar for bar in series if _is_finite(bar))


def build_ratio_figure(series: Series, pair: str, interval: str) -> go.Figure:
    """Candlestick + volume figure of the displayable bars of ``series``."""
    title = f"{pair} ratio ({interval})"

    frame = series_to_frame(displayable(series))
    if frame.empty:
        figure = go.Figure()
        figure.update_layout(
            title=title,
            annotations=[
                {
                    "text": "no data",
                    "showarrow": False,
                    "xref": "paper",
                    "yref": "paper",
                    "x": 0.5,
                    "y": 0.5,
                }
            ],
        )
        return figure

    figure = make_subplots(
        rows=2, cols=1, shared_xaxes=True, row_heights=[0.75, 0.25], vertical_spacing=0.03
    )
    figure.add_trace(
        go.Candlestick(
            x=frame.index,
            open=frame["open"],
            high=frame["high"],
            low=frame["low"],
            close=frame["close"],
            name=pair,
        ),
        row=1,
        col=1,
    )
    figure.add_trace(go.Bar(x=frame.index, y=frame["volume"], name="volume"), row=2, col=1)
    figure.update_layout(title=title, xaxis_rangeslider_visible=False, showlegend=False)
    return figure


def write_ratio_report(series: Series, pair: str, interval: str, output_html_path: str) -> Path:
    """Render the ratio figure of ``series`` to standalone HTML."""
    output = Path(output_html_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    build_ratio_figure(series, pair, interval).write_html(str(output), include_plotlyjs="cdn")
    return output


def _is_finite(bar: Bar) -> bool:
    return all(math.isfinite(value) for value in (bar.open, bar.high, bar.low, bar.close))
