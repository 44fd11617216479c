from __future__ import annotations
import logging
import math
from pathlib import Path

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from catalog_nlp.messages import pipeline_messages as msg

logger = logging.getLogger(__name__)


def top_n_bar(
    df: pd.DataFrame,
    group: str,
    label: str,
    value: str,
    n: int = 10,
    title: str = "",
    cols: int = 3,
) -> go.Figure:
    """One horizontal bar panel per group, showing its top-n rows by value."""
    groups = list(pd.unique(df[group]))
    rows = max(1, math.ceil(len(groups) / cols))
    fig = make_subplots(
        rows=rows,
        cols=cols,
        subplot_titles=[str(g) for g in groups],
        horizontal_spacing=0.15,
        vertical_spacing=min(0.08, 1 / max(rows, 2)),
    )

    for i, g in enumerate(groups):
        sub = df.loc[df[group] == g].nlargest(n, value).iloc[::-1]
        fig.add_trace(
            go.Bar(
                x=sub[value],
                y=sub[label].astype(str),
                orientation="h",
                name=str(g),
                marker_color="steelblue",
            ),
            row=i // cols + 1,
            col=i % cols + 1,
        )

    fig.update_layout(
        height=max(400, 300 * rows),
        title_text=title,
        showlegend=False,
        margin=dict(t=80, b=40),
    )
    return fig


def histogram(
    df: pd.DataFrame, column: str, title: str = "", log_y: bool = False, bins: int = 25
) -> go.Figure:
    fig = go.Figure(
        go.Histogram(x=df[column], nbinsx=bins, marker_color="darkorange")
    )
    fig.update_layout(
        title_text=title,
        xaxis_title=column,
        yaxis_title="count",
        showlegend=False,
    )
    if log_y:
        fig.update_yaxes(type="log")
    return fig


def save_figure(fig: go.Figure, path: str | Path) -> Path:
    output_file = Path(path)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(str(output_file), include_plotlyjs="cdn")
    logger.info(msg.REPORT_SAVED.format(path=output_file))
    return output_file
