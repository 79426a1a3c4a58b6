from typing import List, Mapping, Optional

import plotly.graph_objects as go

from .config import (
    MAP_CENTER,
    MAP_STYLE,
    MAP_ZOOM,
    MARKER_COLOR,
    MARKER_SELECTED_COLOR,
    TREND_LINE_COLOR,
)
from .pipeline import LocationCoordinate, SeriesPoint


# ============================================================
# Configuration / constants
# ============================================================

HOVER_TEMPLATE_TREND = "%{x}<br>%{fullData.name}: %{y:.2f} %{customdata}<extra></extra>"

HOVER_TEMPLATE_MAP = "<b>%{text}</b><br>Click to select<extra></extra>"

DARK_LAYOUT = dict(
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    font=dict(color="#ffffff", size=12),
)


# ============================================================
# Helper functions
# ============================================================


def _marker_colors(ids: List[str], selected: Optional[str]) -> List[str]:
    """
    Red for the selected site, blue for every other site.
    """
    return [MARKER_SELECTED_COLOR if i == selected else MARKER_COLOR for i in ids]


# ============================================================
# Main plotting functions
# ============================================================


def create_trend_plot(
    points: List[SeriesPoint],
    parameter_label: str,
    *,
    unit: str = "",
    line_color: str = TREND_LINE_COLOR,
    height: int = 350,
) -> go.Figure:
    """
    Line chart of one series, broken wherever a point has no value.

    Parameters
    ----------
    points : List[SeriesPoint]
        Ordered points; ``None`` values render as gaps, not zeros.
    parameter_label : str
        Trace name shown in the hover label.
    unit : str, default ""
        Unit appended to hover values.
    line_color : str
        Colour of the line and its markers.
    height : int, default 350
        Figure height in pixels.

    Returns
    -------
    go.Figure
    """
    labels = [p.label for p in points]
    values = [p.value for p in points]

    fig = go.Figure(
        go.Scatter(
            x=labels,
            y=values,
            mode="lines+markers",
            line=dict(width=3, color=line_color, shape="spline"),
            marker=dict(size=10, color=line_color),
            connectgaps=False,
            name=parameter_label,
            customdata=[unit] * len(points),
            hovertemplate=HOVER_TEMPLATE_TREND,
        )
    )

    fig.update_xaxes(type="category", showgrid=False, color="#ffffff")
    fig.update_yaxes(
        gridcolor="rgba(255,255,255,0.1)",
        griddash="dash",
        zeroline=False,
        color="#ffffff",
    )
    fig.update_layout(
        height=height,
        margin=dict(t=20, l=50, r=20, b=40),
        showlegend=False,
        hoverlabel=dict(bgcolor="rgba(0,0,0,0.8)", font_color="#ffffff"),
        **DARK_LAYOUT,
    )
    return fig


def create_location_map(
    locations: Mapping[str, LocationCoordinate],
    selected: Optional[str] = None,
    *,
    height: int = 384,
) -> go.Figure:
    """
    Map of every monitoring site on OpenStreetMap tiles.

    The selected site is drawn in red.  Each marker carries its location id
    in ``customdata`` so a click handler can select it.
    """
    ids = list(locations)
    coords = [locations[i] for i in ids]

    fig = go.Figure(
        go.Scattermap(
            lat=[c.lat for c in coords],
            lon=[c.lng for c in coords],
            mode="markers",
            marker=dict(size=14, color=_marker_colors(ids, selected)),
            text=[c.name or i for i, c in zip(ids, coords)],
            customdata=ids,
            hovertemplate=HOVER_TEMPLATE_MAP,
            name="Monitoring locations",
        )
    )
    fig.update_layout(
        map=dict(
            style=MAP_STYLE,
            center=dict(lat=MAP_CENTER[0], lon=MAP_CENTER[1]),
            zoom=MAP_ZOOM,
        ),
        height=height,
        margin=dict(t=0, l=0, r=0, b=0),
        showlegend=False,
    )
    return fig
