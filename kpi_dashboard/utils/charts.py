"""Plotly chart builders for the KPI page."""

from __future__ import annotations

from typing import Any, Dict, List

import plotly.graph_objects as go

from kpi_dashboard.utils.constants import KPI_LABELS, SEASON_COLORS
from kpi_dashboard.utils.types import ChartRow

_BG       = "#0D1117"
_GRID     = "#3D4450"
_TEXT     = "#E6EDF3"
_SUB_TEXT = "#8B949E"


def _base_layout(**kwargs) -> dict:
    base = dict(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        font=dict(color=_TEXT, family="DM Sans, Inter, sans-serif"),
        margin=dict(l=44, r=44, t=52, b=44),
    )
    base.update(kwargs)
    return base


def kpi_label(kpi: str) -> str:
    return KPI_LABELS.get(kpi, kpi)


def chart_config(kpi: str) -> Dict[str, Any]:
    """Declarative description of the grouped KPI bar chart."""
    return {
        "x_field": "teamName",
        "y_field": kpi,
        "series_field": "year",
        "barmode": "group",
        "x_title": "Team",
        "y_title": kpi_label(kpi),
        "legend_prefix": "Season ",
        "colors": list(SEASON_COLORS),
        "corner_radius": 20,
        "label_position": "outside",
    }


# ---------------------------------------------------------------------------
# Grouped bar chart: teams on x, one bar per season
# ---------------------------------------------------------------------------

def kpi_grouped_bar(rows: List[ChartRow], kpi: str, title: str = "") -> go.Figure:
    """
    Grouped bars for aggregated chart rows.

    rows: output of order_chart_rows (already in display order)
    kpi: field plotted on the y axis
    """
    cfg = chart_config(kpi)
    x_field, y_field, series_field = cfg["x_field"], cfg["y_field"], cfg["series_field"]

    if not rows:
        fig = go.Figure()
        fig.update_layout(
            **_base_layout(title=dict(text=title or cfg["y_title"], font=dict(size=14))),
            annotations=[dict(
                text="No data for the selected filters",
                showarrow=False,
                font=dict(size=14, color=_SUB_TEXT),
                xref="paper",
                yref="paper",
                x=0.5,
                y=0.5,
            )],
            height=400,
        )
        return fig

    team_order = list(dict.fromkeys(row[x_field] for row in rows))
    seasons = list(dict.fromkeys(str(row.get(series_field, "")) for row in rows))
    colors = cfg["colors"]

    fig = go.Figure()
    for i, season in enumerate(seasons):
        season_rows = [row for row in rows if str(row.get(series_field, "")) == season]
        values = [row[y_field] for row in season_rows]
        fig.add_trace(
            go.Bar(
                x=[row[x_field] for row in season_rows],
                y=values,
                name=f"{cfg['legend_prefix']}{season}",
                marker_color=colors[i % len(colors)],
                text=[f"{v:g}" if isinstance(v, (int, float)) else str(v) for v in values],
                textposition=cfg["label_position"],
                cliponaxis=False,
            )
        )

    fig.update_layout(
        **_base_layout(title=dict(text=title or cfg["y_title"], font=dict(size=16))),
        barmode=cfg["barmode"],
        barcornerradius=cfg["corner_radius"],
        xaxis=dict(
            title=cfg["x_title"],
            gridcolor=_GRID,
            categoryorder="array",
            categoryarray=team_order,
        ),
        yaxis=dict(title=cfg["y_title"], gridcolor=_GRID, zeroline=False),
        legend=dict(
            orientation="h",
            yanchor="bottom",
            y=1.02,
            xanchor="center",
            x=0.5,
            font=dict(size=12),
        ),
        height=max(420, 40 * len(team_order) + 200),
    )
    return fig
