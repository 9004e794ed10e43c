"""Plotly rendering of the expandable stats chart."""

from __future__ import annotations

from typing import List

import numpy as np
import plotly.graph_objects as go

from statwheel.utils.constants import BACKGROUND_RING_OPACITY, CENTER_DISC_RADIUS, CHART_EXTENT
from statwheel.utils.data import format_stat_value
from statwheel.utils.expandable_chart import ExpandableStatsChart, RenderedWedge
from statwheel.utils.geometry import background_rings, is_pie_slice
from statwheel.utils.labels import LabelDecision

_BG       = "#0D1117"
_CARD     = "#161B22"
_GRID     = "#3D4450"
_TEXT     = "#E6EDF3"
_SUB_TEXT = "#8B949E"
_GOLD     = "#C9A840"

HIT_TRACE_NAME = "stat-targets"


def _base_layout(**kwargs) -> dict:
    base = dict(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        font=dict(color=_TEXT, family="DM Sans, Inter, sans-serif"),
        margin=dict(l=10, r=10, t=10, b=10),
    )
    base.update(kwargs)
    return base


def _plotly_angle(rotation: float) -> float:
    """Plotly wants text angles in (-180, 180]."""
    angle = ((rotation + 180) % 360) - 180
    return 180.0 if angle == -180 else angle


def _tooltip_text(chart: ExpandableStatsChart, wedge: RenderedWedge) -> str:
    category = chart.tree.index.root_category(wedge.node.id)
    value = format_stat_value(wedge.node.value, suffix=wedge.node.suffix)
    header = f"{category.name}<br>" if category is not None and category.id != wedge.node.id else ""
    return f"{header}<b>{wedge.node.name}</b><br>{value}"


def _wedge_trace(chart: ExpandableStatsChart, wedge: RenderedWedge) -> go.Scatter:
    xs, ys = wedge.shape.outline()
    pie_slice = is_pie_slice(wedge.node.level, chart.variant)
    return go.Scatter(
        x=xs,
        y=ys,
        mode="lines",
        fill="toself",
        fillcolor=wedge.color,
        opacity=wedge.fill_opacity,
        line=dict(color=_CARD if pie_slice else _BG, width=2.5 if pie_slice else 1.5),
        name=wedge.node.name,
        customdata=[wedge.node.id] * len(xs),
        text=_tooltip_text(chart, wedge),
        hoverinfo="text",
        hoveron="fills+points",
        showlegend=False,
    )


def _hit_trace(chart: ExpandableStatsChart, wedges: List[RenderedWedge]) -> go.Scatter:
    """Near-invisible markers at wedge centres so clicks can be reported as point selections."""
    targets = [w for w in wedges if w.drawable]
    mids = np.array([w.shape.mid_angle for w in targets])
    radii = np.array([(w.shape.inner_radius + w.shape.outer_radius) / 2 for w in targets])
    return go.Scatter(
        x=radii * np.cos(mids) if len(targets) else [],
        y=radii * np.sin(mids) if len(targets) else [],
        mode="markers",
        marker=dict(size=18, color=_TEXT, opacity=0.01),
        customdata=[w.node.id for w in targets],
        text=[_tooltip_text(chart, w) for w in targets],
        hoverinfo="text",
        name=HIT_TRACE_NAME,
        showlegend=False,
    )


def _label_annotation(label: LabelDecision) -> dict:
    text = f"<b>{label.text}</b>" if label.font_weight >= 700 else label.text
    return dict(
        x=label.x,
        y=label.y,
        text=text,
        showarrow=False,
        textangle=_plotly_angle(label.rotation),
        font=dict(size=label.font_size, color="white"),
        xanchor="center",
        yanchor="middle",
    )


def expandable_stats_figure(chart: ExpandableStatsChart, height: int = 520) -> go.Figure:
    """Sunburst figure for the chart's current drill, hover and label state.

    Coordinates follow screen space (y grows downward), so the y axis is reversed.
    """
    wedges = chart.render_wedges()
    fig = go.Figure()

    for ring in background_rings(chart.variant):
        xs, ys = ring.outline()
        fig.add_trace(go.Scatter(
            x=xs, y=ys, mode="lines", fill="toself",
            fillcolor=_GRID, opacity=BACKGROUND_RING_OPACITY,
            line=dict(width=0), hoverinfo="skip", showlegend=False,
        ))

    for wedge in wedges:
        if wedge.drawable:
            fig.add_trace(_wedge_trace(chart, wedge))

    fig.add_trace(_hit_trace(chart, wedges))

    annotations = [_label_annotation(label) for label in chart.labels(wedges)]
    shapes = []
    if chart.variant == "doughnut":
        shapes.append(dict(
            type="circle",
            x0=-CENTER_DISC_RADIUS, y0=-CENTER_DISC_RADIUS,
            x1=CENTER_DISC_RADIUS, y1=CENTER_DISC_RADIUS,
            fillcolor=_CARD, line=dict(color=_GRID, width=2),
        ))
        annotations.append(dict(x=0, y=-10, text="TOTAL", showarrow=False,
                                font=dict(size=9, color=_SUB_TEXT)))
        annotations.append(dict(x=0, y=12, text=f"<b>{format_stat_value(chart.total, missing='0')}</b>",
                                showarrow=False, font=dict(size=18, color=_GOLD)))

    fig.update_layout(
        **_base_layout(),
        xaxis=dict(range=[-CHART_EXTENT, CHART_EXTENT], visible=False, fixedrange=True),
        yaxis=dict(range=[CHART_EXTENT, -CHART_EXTENT], visible=False, fixedrange=True,
                   scaleanchor="x", scaleratio=1),
        shapes=shapes,
        annotations=annotations,
        showlegend=False,
        hovermode="closest",
        dragmode=False,
        height=height,
    )
    return fig
