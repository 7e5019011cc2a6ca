"""Dashboard page: everything from one GET /api/users/:id/dashboard call."""

import streamlit as st

from ..models.dashboard import DashboardData, DashboardUser
from .common import clamp_level, client, fmt_date, query, user_id
from . import charts, learning, skill_gap


def greeting(user: DashboardUser) -> str:
    if user.greeting:
        return user.greeting
    first = (user.name or "").split()
    return f"Hello, {first[0]}!" if first else "Hello!"


def fmt_percent(value) -> str:
    return "—" if value is None else f"{value}%"


def render_stats(data: DashboardData):
    s = data.stats
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Overall progress", fmt_percent(s.overall_progress))
    c2.metric("Skills validated", s.skills_validated)
    c3.metric("Learning time", s.learning_time)
    c4.metric("Resources completed", s.resources_completed)


def render_goal(data: DashboardData):
    goal = data.career_goal
    with st.container(border=True):
        st.markdown("#### 🎯 Career goal")
        if goal is None:
            st.caption("No goal set yet. Add one on the Career page.")
            return
        st.markdown(f"**{goal.title}**" + (f" · {goal.timeline}" if goal.timeline else ""))
        if goal.readiness is None:
            st.caption("Readiness unknown until your skills have target levels.")
            return
        st.progress(clamp_level(goal.readiness) / 100, text=f"{goal.readiness}% ready")


def render_gaps(data: DashboardData, limit: int = 5):
    rows = skill_gap.to_rows(data.skill_gaps)
    with st.container(border=True):
        st.markdown("#### ⚡ Skill gaps")
        if not rows:
            st.caption("Assess your skills to see where to focus.")
            return
        skill_gap.render_gap_list(rows, limit=limit)
    st.plotly_chart(charts.radar_chart(skill_gap.sort_by_gap(rows)[:8], title="Current vs target"),
                    use_container_width=True)


def render_path_summary(data: DashboardData):
    path = data.learning_path
    with st.container(border=True):
        st.markdown("#### 🗺️ Learning path")
        if path is None:
            st.caption("No learning path yet.")
            return
        done, total, pct = learning.path_progress(path)
        st.markdown(f"**{path.title}** · {len(path.modules)} modules · {learning.total_hours(path)} h")
        st.progress(pct / 100, text=f"{done} / {total} resources")


def render_recent(data: DashboardData):
    with st.container(border=True):
        st.markdown("#### 🗂 Recent activity")
        if not data.recent_activities:
            st.caption("Nothing yet.")
        for a in data.recent_activities:
            st.markdown(f"**{a.label}** {a.description} <small>{fmt_date(a.created_at)}</small>",
                        unsafe_allow_html=True)


def render_dashboard():
    uid = user_id()
    remote = query(f"/api/users/{uid}/dashboard", lambda: client().get_dashboard(uid), spinner="Loading dashboard...")
    if remote.error:
        st.error(f"Couldn't load the dashboard: {remote.error.message}")
        return
    if remote.data is None:
        st.info("No dashboard data for this user yet.")
        return
    data: DashboardData = remote.data

    st.markdown(f"# {greeting(data.user)} 👋")
    if data.user.role:
        st.caption(data.user.role)
    render_stats(data)

    left, right = st.columns([3, 2])
    with left:
        render_gaps(data)
    with right:
        render_goal(data)
        render_path_summary(data)
        render_recent(data)
