from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

import plotly.graph_objects as go

from pendelview.scene import GridLayer, Marker, RenderFrame


def _grid_segments(layer: GridLayer, left: float, right: float, top: float, bottom: float) -> Tuple[List[Optional[float]], List[Optional[float]]]:
    # one trace per layer: segments separated by None
    xs: List[Optional[float]] = []
    ys: List[Optional[float]] = []
    for x in layer.xs:
        xs += [x, x, None]
        ys += [top, bottom, None]
    for y in layer.ys:
        xs += [left, right, None]
        ys += [y, y, None]
    return xs, ys


def _marker_trace(markers: Iterable[Marker]) -> go.Scatter:
    markers = list(markers)
    return go.Scatter(
        x=[m.x for m in markers],
        y=[m.y for m in markers],
        mode="markers",
        # plotly sizes markers by diameter in px
        marker=dict(size=[2.0 * m.radius for m in markers], color=[m.color for m in markers], line=dict(width=0)),
        hoverinfo="skip",
        showlegend=False,
    )


def build_figure(frame: RenderFrame) -> go.Figure:
    """Plotly figure of one frame, in world coordinates with y pointing down."""
    b = frame.bounds
    theme = frame.theme
    fig = go.Figure()

    # grid
    for layer in (frame.minor_grid, frame.major_grid):
        gx, gy = _grid_segments(layer, b.left, b.right, b.top, b.bottom)
        fig.add_trace(go.Scatter(x=gx, y=gy, mode="lines", line=dict(color=layer.color, width=layer.width), hoverinfo="skip", showlegend=False))

    # trail
    if len(frame.trail) > 1:
        fig.add_trace(go.Scatter(
            x=[p[0] for p in frame.trail],
            y=[p[1] for p in frame.trail],
            mode="lines",
            line=dict(color=theme.trail, width=frame.trail_width),
            hoverinfo="skip",
            showlegend=False,
        ))

    # rods
    fig.add_trace(go.Scatter(
        x=[p[0] for p in frame.linkage],
        y=[p[1] for p in frame.linkage],
        mode="lines",
        line=dict(color=theme.arms, width=frame.linkage_width),
        hoverinfo="skip",
        showlegend=False,
    ))

    # bobs, then the pivot on top
    fig.add_trace(_marker_trace(frame.bobs))
    fig.add_trace(_marker_trace([frame.pivot]))

    fig.update_layout(
        width=int(frame.width),
        height=int(frame.height),
        paper_bgcolor=theme.background,
        plot_bgcolor=theme.background,
        margin=dict(l=0, r=0, t=0, b=0),
        xaxis=dict(range=[b.left, b.right], visible=False, fixedrange=True),
        # screen y grows downwards
        yaxis=dict(range=[b.bottom, b.top], visible=False, fixedrange=True),
        dragmode=False,
    )
    return fig
