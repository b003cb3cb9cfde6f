# charts.py
"""
Plotly figures for a SimulationResult.

These only read the engine's output; none of them change simulation state.
"""

from typing import Dict, Optional

import plotly.graph_objects as go

from engine import ReplacementPolicy, SimulationResult, Step
from utils import EMPTY_COLOR, FAULT_COLOR, HIT_COLOR, get_color


def frame_labels(step: Step):
    """Label every frame of a step as "F{i}: P{page}" or "F{i}: Free"."""
    return [
        f"F{i}: " + (f"P{page}" if page is not None else "Free")
        for i, page in enumerate(step.frames)
    ]


def frames_figure(step: Step) -> go.Figure:
    """
    Bar chart of the physical frames after one step.

    The frame holding the referenced page is colored by hit/fault, other
    occupied frames are green and empty frames gray.
    """
    x = []      # Frame indices
    y = []      # Bar heights (all 1 for uniform display)
    colors = []

    for i, page in enumerate(step.frames):
        if i == step.frame:
            colors.append(get_color(step.fault))
        elif page is None:
            colors.append(EMPTY_COLOR)
        else:
            colors.append("lightgreen")
        x.append(i)
        y.append(1)

    text = frame_labels(step)

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=x,
        y=y,
        text=text,
        marker_color=colors,
        hovertext=text,
        hoverinfo='text'
    ))
    fig.update_layout(
        height=150,
        showlegend=False,
        yaxis=dict(showticklabels=False)
    )
    return fig


def timeline_figure(result: SimulationResult, current: Optional[int] = None) -> go.Figure:
    """One marker per reference, red for faults and blue for hits."""
    steps = result.history
    sizes = [28 if s.index == current else 18 for s in steps]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=[s.index + 1 for s in steps],
        y=[0] * len(steps),
        mode="markers+text",
        text=[str(s.page) for s in steps],
        textposition="middle center",
        marker=dict(size=sizes, color=[get_color(s.fault) for s in steps]),
        hovertext=[
            f"#{s.index + 1} page {s.page}: "
            + ("FAULT" if s.fault else "HIT")
            + (f", evicted {s.replaced}" if s.replaced is not None else "")
            for s in steps
        ],
        hoverinfo="text",
    ))
    fig.update_layout(
        height=160,
        showlegend=False,
        yaxis=dict(visible=False),
        xaxis=dict(title="Reference", dtick=1),
    )
    return fig


def stats_figure(result: SimulationResult) -> go.Figure:
    """Hits vs faults doughnut."""
    fig = go.Figure()
    fig.add_trace(go.Pie(
        labels=["Hits", "Faults"],
        values=[result.hits, result.faults],
        hole=0.7,
        marker=dict(colors=[HIT_COLOR, FAULT_COLOR]),
        sort=False,
    ))
    fig.update_layout(height=300, title="Hits vs Faults")
    return fig


def comparison_figure(results: Dict[ReplacementPolicy, SimulationResult]) -> go.Figure:
    """Grouped bars of faults and hits for each policy."""
    names = [policy.value for policy in results]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        name="Faults",
        x=names,
        y=[r.faults for r in results.values()],
        marker_color=FAULT_COLOR,
        text=[r.faults for r in results.values()],
    ))
    fig.add_trace(go.Bar(
        name="Hits",
        x=names,
        y=[r.hits for r in results.values()],
        marker_color=HIT_COLOR,
        text=[r.hits for r in results.values()],
    ))
    fig.update_layout(barmode="group", height=350, title="Policy Comparison")
    return fig
