"""Plotly figures for the dashboard."""

from __future__ import annotations

import plotly.graph_objects as go

from skillgap_radar.dashboard.views import RadarPoint

REQUIRED_COLOR = "#818cf8"
OBSERVED_COLOR = "#34d399"

_THEME_COLORS = {
    "dark": {"font": "#9ca3af", "grid": "#4b5563", "template": "plotly_dark"},
    "light": {"font": "#374151", "grid": "#d1d5db", "template": "plotly_white"},
}


def build_radar_figure(points: list[RadarPoint], theme: str = "dark") -> go.Figure:
    """Required vs observed levels on a 0-5 polar axis."""
    colors = _THEME_COLORS.get(theme, _THEME_COLORS["dark"])
    subjects = [p.subject for p in points]
    # close the polygon by repeating the first vertex
    closed = subjects + subjects[:1]

    fig = go.Figure()
    for name, values, color in (
        ("Required Level", [p.required for p in points], REQUIRED_COLOR),
        ("Observed Level", [p.observed for p in points], OBSERVED_COLOR),
    ):
        fig.add_trace(go.Scatterpolar(
            r=values + values[:1],
            theta=closed,
            name=name,
            fill="toself",
            opacity=0.6,
            line={"color": color, "width": 2},
        ))

    fig.update_layout(
        template=colors["template"],
        paper_bgcolor="rgba(0,0,0,0)",
        polar={
            "bgcolor": "rgba(0,0,0,0)",
            "radialaxis": {"range": [0, 5], "showticklabels": False, "gridcolor": colors["grid"]},
            "angularaxis": {"tickfont": {"color": colors["font"], "size": 12},
                            "gridcolor": colors["grid"]},
        },
        legend={"orientation": "h", "y": -0.1},
        height=400,
        margin={"l": 40, "r": 40, "t": 20, "b": 40},
    )
    return fig
