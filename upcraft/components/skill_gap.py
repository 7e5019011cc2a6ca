"""
Skill gap
=========
Gap arithmetic is display-only: target minus current, floored at zero.
Works on anything carrying ``current_level`` / ``target_level`` (UserSkill,
the dashboard's skill-gap rows).
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Iterable, List

import streamlit as st

from ..exceptions import ApiError
from .common import clamp_level, client, query, show_state, user_id
from . import charts


@dataclass
class GapRow:
    name: str
    category: str
    current: int
    target: int

    @property
    def gap(self) -> int:
        return skill_gap(self.current, self.target)

    @property
    def percentage(self) -> int:
        return level_percentage(self.current, self.target)

    @property
    def severity(self) -> str:
        return gap_severity(self.gap)


def skill_gap(current, target) -> int:
    return max(0, clamp_level(target) - clamp_level(current))


def level_percentage(current, target) -> int:
    """How far current is toward target, 0-100. A zero target counts as reached."""
    current, target = clamp_level(current), clamp_level(target)
    if target == 0:
        return 100
    return min(100, round(current / target * 100))


def gap_severity(gap: int) -> str:
    if gap <= 0:
        return "none"
    if gap < 15:
        return "small"
    if gap < 35:
        return "moderate"
    return "large"


def to_rows(skills: Iterable) -> List[GapRow]:
    rows = []
    for s in skills:
        name = getattr(s, "skill_name", None) or getattr(s, "name", "Unknown Skill")
        rows.append(GapRow(
            name=name,
            category=getattr(s, "category", None) or "uncategorized",
            current=clamp_level(s.current_level),
            target=clamp_level(s.target_level),
        ))
    return rows


def sort_by_gap(rows: List[GapRow]) -> List[GapRow]:
    """Largest gap first; ties by name for a stable layout."""
    return sorted(rows, key=lambda r: (-r.gap, r.name.lower()))


def group_by_category(rows: Iterable[GapRow]) -> "OrderedDict[str, List[GapRow]]":
    groups: Dict[str, List[GapRow]] = {}
    for r in rows:
        groups.setdefault(r.category, []).append(r)
    return OrderedDict(sorted(groups.items(), key=lambda kv: kv[0]))


def readiness(rows: List[GapRow]) -> int:
    if not rows:
        return 0
    return round(sum(r.percentage for r in rows) / len(rows))


def summary(rows: List[GapRow]) -> dict:
    open_gaps = [r for r in rows if r.gap > 0]
    return {
        "skills": len(rows),
        "open_gaps": len(open_gaps),
        "total_gap": sum(r.gap for r in open_gaps),
        "largest": sort_by_gap(open_gaps)[0].name if open_gaps else None,
        "readiness": readiness(rows),
    }


# ── Views ───────────────────────────────────────────────────────────────────

_SEVERITY_ICON = {"none": "✅", "small": "🟢", "moderate": "🟡", "large": "🔴"}


def render_gap_list(rows: List[GapRow], limit: int = None):
    for r in sort_by_gap(rows)[:limit]:
        st.markdown(
            f"{_SEVERITY_ICON[r.severity]} **{r.name}** "
            f"<small>{r.category}</small> · {r.current} → {r.target} (gap {r.gap})",
            unsafe_allow_html=True,
        )
        st.progress(r.percentage / 100)


def render_skill_gap_section():
    uid = user_id()
    remote = query(f"/api/users/{uid}/skills", lambda: client().list_user_skills(uid), spinner="Loading your skills...")

    st.markdown("### Skill gaps")
    if not show_state(remote, "No skills assessed yet. Run the assessment to see your gaps."):
        return

    rows = to_rows(remote.data)
    info = summary(rows)
    c1, c2, c3 = st.columns(3)
    c1.metric("Readiness", f"{info['readiness']}%")
    c2.metric("Open gaps", info["open_gaps"])
    c3.metric("Biggest gap", info["largest"] or "—")

    tab_chart, tab_list, tab_advice = st.tabs(["Chart", "By category", "Learning advice"])
    with tab_chart:
        st.plotly_chart(charts.gap_bar_chart(rows), use_container_width=True)
    with tab_list:
        for category, items in group_by_category(rows).items():
            with st.expander(f"{category.replace('_', ' ').title()} ({len(items)})"):
                render_gap_list(items)
    with tab_advice:
        render_learning_advice(sort_by_gap(rows))


def render_learning_advice(rows: List[GapRow]):
    """Ask the AI how to close one gap, tuned to the learner's style and time."""
    if not rows:
        return
    with st.form("learning_advice"):
        by_name = {r.name: r for r in rows}
        name = st.selectbox("Skill", list(by_name))
        style = st.selectbox("Learning style", ["hands-on", "video", "reading", "mixed"])
        time_available = st.selectbox("Time per week", ["2 hours", "5 hours", "10 hours", "20+ hours"])
        if not st.form_submit_button("Get advice"):
            return
    row = by_name[name]
    try:
        with st.spinner(f"Asking about {name}..."):
            advice = client().skill_learning_advice(
                name, current_level=row.current, target_level=row.target,
                learning_style=style, time_available=time_available,
            )
    except ApiError as e:
        st.toast(f"No advice right now: {e.message}", icon="⚠️")
        return
    st.markdown(advice or "_No advice returned._")


def render_ai_gap_analysis(career_goal_id: int):
    """On-demand AI analysis; not cached since each run is a fresh model call."""
    if not st.button("🔍 Analyse my gaps with AI", key=f"ai_gap_{career_goal_id}"):
        return
    try:
        with st.spinner("Analysing your skill gaps..."):
            analysis = client().skill_gap_analysis(career_goal_id)
    except ApiError as e:
        st.toast(f"Gap analysis failed: {e.message}", icon="⚠️")
        return

    st.metric("Overall readiness", f"{clamp_level(analysis.overall_readiness)}%")
    for g in analysis.skill_gaps:
        st.markdown(
            f"- **{g.skill_name}** — {g.current_level} → {g.required_level} "
            f"(priority: {g.priority})"
        )
    if analysis.recommendations:
        st.markdown("**Recommendations**")
        for rec in analysis.recommendations:
            st.markdown(f"- {rec}")
