"""
Chart and table builders for the dashboard page.
"""

import io
from typing import Optional

import pandas as pd
import plotly.graph_objects as go

from housing_dashboard.config import NOTES_PREVIEW_CHARS
from housing_dashboard.models import FredSeries

LINE_COLOR = "#3c8dbc"


def build_time_series_chart(series: Optional[FredSeries], name: Optional[str] = None) -> go.Figure:
    """Create the interactive line chart for a series."""
    fig = go.Figure()

    if series is None or series.empty:
        fig.add_annotation(
            text="Please load data to view visualization",
            x=0.5,
            y=0.5,
            xref="paper",
            yref="paper",
            showarrow=False,
            font=dict(size=18, color="gray"),
        )
        fig.update_xaxes(visible=False)
        fig.update_yaxes(visible=False)
        return fig

    title = name or series.title or series.series_id
    units = series.units or "Value"

    fig.add_trace(go.Scatter(
        x=series.dates,
        y=series.values,
        mode='lines+markers',
        name=series.series_id,
        line=dict(color=LINE_COLOR, width=2),
        marker=dict(color=LINE_COLOR, size=4, opacity=0.6),
        hovertemplate='%{x|%Y-%m-%d}<br>%{y}<extra></extra>'
    ))

    caption = f"Source: FRED, {series.title}" if series.title else "Source: FRED"
    fig.add_annotation(
        text=caption,
        x=1,
        y=-0.15,
        xref="paper",
        yref="paper",
        xanchor="right",
        showarrow=False,
        font=dict(size=10, color="gray"),
    )

    fig.update_layout(
        title=title,
        xaxis_title="Date",
        yaxis_title=units,
        hovermode='x unified',
        height=440,
        template="plotly_white",
        showlegend=False,
    )

    return fig


def build_data_table(series: Optional[FredSeries]) -> pd.DataFrame:
    """
    Prepare observations for the raw data tab: newest first, values
    rounded to 4 decimals.
    """
    if series is None or series.empty:
        return pd.DataFrame({"Date": pd.Series(dtype="object"), "Value": pd.Series(dtype="float64")})

    table = pd.DataFrame({
        "Date": series.dates.dt.strftime("%Y-%m-%d"),
        "Value": series.values.round(4),
    })
    return table.sort_values("Date", ascending=False).reset_index(drop=True)


def build_excel_export(table: pd.DataFrame, sheet_name: str = "data") -> bytes:
    """Write a display table to an in-memory .xlsx workbook."""
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as xl:
        table.to_excel(xl, sheet_name=sheet_name, index=False)
    return buf.getvalue()


def truncate_notes(notes: Optional[str], limit: int = NOTES_PREVIEW_CHARS) -> str:
    """Shorten series notes for the information panel."""
    if not notes:
        return ""
    if len(notes) > limit:
        return notes[:limit] + "..."
    return notes
