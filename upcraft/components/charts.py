"""Plotly figures. Pure functions of their inputs, so a rerun with new data redraws."""

from typing import List, Sequence

import plotly.graph_objects as go

CURRENT_COLOR = "#6366F1"
TARGET_COLOR = "#F59E0B"
GAP_COLORS = {"none": "#10B981", "small": "#34D399", "moderate": "#FBBF24", "large": "#EF4444"}


def _empty_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(text=message, showarrow=False, x=0.5, y=0.5, xref="paper", yref="paper")
    fig.update_layout(xaxis=dict(visible=False), yaxis=dict(visible=False), height=260)
    return fig


def radar_chart(rows: Sequence, title: str = "") -> go.Figure:
    """Current vs target proficiency, one spoke per skill. Rows need name/current/target."""
    if len(rows) < 3:
        # a polygon needs three spokes; fall back to bars
        return gap_bar_chart(rows, title=title)

    names = [r.name for r in rows]
    # close the polygon
    theta = names + names[:1]
    current = [r.current for r in rows]
    target = [r.target for r in rows]

    fig = go.Figure()
    fig.add_trace(go.Scatterpolar(
        r=target + target[:1], theta=theta, name="Target",
        fill="toself", line=dict(color=TARGET_COLOR), opacity=0.35,
    ))
    fig.add_trace(go.Scatterpolar(
        r=current + current[:1], theta=theta, name="Current",
        fill="toself", line=dict(color=CURRENT_COLOR), opacity=0.6,
    ))
    fig.update_layout(
        title=title or None,
        polar=dict(radialaxis=dict(visible=True, range=[0, 100])),
        showlegend=True,
        margin=dict(l=30, r=30, t=40 if title else 20, b=20),
        height=380,
    )
    return fig


def gap_bar_chart(rows: Sequence, title: str = "") -> go.Figure:
    """Horizontal bars: current level, with the remaining gap stacked on top."""
    if not rows:
        return _empty_figure("No skills to chart yet")

    ordered = sorted(rows, key=lambda r: max(0, r.target - r.current))
    names = [r.name for r in ordered]
    gaps = [max(0, r.target - r.current) for r in ordered]
    severities = [getattr(r, "severity", "moderate") for r in ordered]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        y=names, x=[r.current for r in ordered], name="Current",
        orientation="h", marker_color=CURRENT_COLOR,
    ))
    fig.add_trace(go.Bar(
        y=names, x=gaps, name="Gap",
        orientation="h", marker_color=[GAP_COLORS.get(s, TARGET_COLOR) for s in severities],
    ))
    fig.update_layout(
        title=title or None,
        barmode="stack",
        xaxis=dict(range=[0, 100], title="Proficiency"),
        height=max(240, 36 * len(names) + 80),
        margin=dict(l=10, r=10, t=40 if title else 20, b=30),
    )
    return fig


def progress_gauge(percent: int, title: str = "Overall progress") -> go.Figure:
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=max(0, min(100, percent)),
        number=dict(suffix="%"),
        title=dict(text=title),
        gauge=dict(
            axis=dict(range=[0, 100]),
            bar=dict(color=CURRENT_COLOR),
            steps=[
                dict(range=[0, 40], color="#FEE2E2"),
                dict(range=[40, 75], color="#FEF3C7"),
                dict(range=[75, 100], color="#D1FAE5"),
            ],
        ),
    ))
    fig.update_layout(height=240, margin=dict(l=20, r=20, t=50, b=10))
    return fig


def skill_progress_bars(skills: List) -> go.Figure:
    """Per-skill resource completion from ProgressStats.skills."""
    if not skills:
        return _empty_figure("No tracked resources yet")
    fig = go.Figure(go.Bar(
        x=[s.percent for s in skills],
        y=[s.skill_name for s in skills],
        orientation="h",
        text=[f"{s.completed}/{s.total}" for s in skills],
        textposition="auto",
        marker_color=CURRENT_COLOR,
    ))
    fig.update_layout(
        xaxis=dict(range=[0, 100], title="% resources completed"),
        yaxis=dict(autorange="reversed"),
        height=max(220, 34 * len(skills) + 70),
        margin=dict(l=10, r=10, t=20, b=30),
    )
    return fig
