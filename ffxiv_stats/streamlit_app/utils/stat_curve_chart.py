"""
Stat Curve Chart Component

Creates interactive Plotly charts showing how one derived value moves as its
stat changes around the current value. Steps in the line are the breakpoints;
the current value and its nearest breakpoints are marked.
"""

from decimal import Decimal
from typing import Optional

import pandas as pd
import plotly.graph_objects as go

from stat_display import format_value
from stat_engine import Breakpoints, StatEngine

STAT_COLUMN = "stat_value"
# Column suffix holding the exact Decimal string of a derived value
EXACT_SUFFIX = "_exact"


def exact_column(key: str) -> str:
    return f"{key}{EXACT_SUFFIX}"


def build_curve_frame(engine: StatEngine, window: int = 60) -> pd.DataFrame:
    """
    Evaluate every derived value for stat values in current ± window.

    Uses the full evaluation (intermediates included), so values without
    breakpoints can be charted too.

    Returns:
        DataFrame with a stat_value column, one float column per derived
        value key for plotting, and one exact string column per key
    """
    current = engine.current_value
    rows = []
    for offset in range(-window, window + 1):
        stat_value = current + offset
        row = {STAT_COLUMN: int(stat_value)}
        for spec, result in engine.evaluate(stat_value):
            row[spec.name] = float(result)
            row[exact_column(spec.name)] = str(result)
        rows.append(row)
    return pd.DataFrame(rows)


def create_stat_curve_chart(
    frame: pd.DataFrame,
    engine: StatEngine,
    key: str,
    height: int = 280,
) -> go.Figure:
    """
    Step chart of one derived value across the frame's stat range.

    Args:
        frame: Output of build_curve_frame()
        engine: The stat engine the frame was built from
        key: Derived value key (column) to plot

    Returns:
        Plotly Figure object ready for display with st.plotly_chart()
    """
    spec, result = next((s, r) for s, r in engine.evaluate() if s.name == key)
    current = engine.current_value

    # Only the charted value is searched, and only where it has breakpoints
    breakpoints: Optional[Breakpoints] = None
    if spec.has_breakpoints and engine.above_minimum:
        breakpoints = engine.find_breakpoints(spec, result)

    y_values = frame[key] * 100 if spec.is_percent else frame[key]
    y_label = f"{spec.display_name} (%)" if spec.is_percent else spec.display_name

    hover_texts = [
        f"<b>{spec.display_name}</b><br>"
        f"{engine.name}: {stat}<br>"
        f"Value: {format_value(Decimal(text), spec.is_percent)}"
        for stat, text in zip(frame[STAT_COLUMN], frame[exact_column(key)])
    ]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=frame[STAT_COLUMN],
        y=y_values,
        mode='lines',
        line=dict(color='#00d4ff', width=2, shape='hv'),
        hovertext=hover_texts,
        hoverinfo='text',
        name=spec.display_name,
    ))

    fig.add_vline(x=float(current), line=dict(color='#ffd700', dash='dash'),
                  annotation_text="current", annotation_position="top")

    if breakpoints is not None:
        for label, stat in (("next lowest", breakpoints.lesser), ("next highest", breakpoints.greater)):
            fig.add_vline(x=float(stat), line=dict(color='#888', dash='dot'),
                          annotation_text=label, annotation_position="bottom")

    fig.update_layout(
        height=height,
        margin=dict(l=40, r=20, t=30, b=40),
        xaxis_title=engine.name,
        yaxis_title=y_label,
        showlegend=False,
        plot_bgcolor='#1a1a2e',
        paper_bgcolor='#1a1a2e',
        font=dict(color='#ccc'),
    )
    return fig
