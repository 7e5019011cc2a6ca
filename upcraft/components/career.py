"""
Career
======
Role catalogue, side-by-side role comparison, progression paths and the
user's career goals.

Skill names are compared case-insensitively: roles list required skills as
free text, user skills come from the skills table.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

import streamlit as st

from ..exceptions import ApiError
from ..logging_config import get_logger
from ..models import CareerGoal, Role
from .common import client, fmt_date, invalidate, query, show_state, user_id

log = get_logger(__name__)


def _norm(name: str) -> str:
    return " ".join(name.split()).lower()


@dataclass
class RoleComparison:
    current: Role
    target: Role
    shared: List[str] = field(default_factory=list)
    to_acquire: List[str] = field(default_factory=list)
    no_longer_needed: List[str] = field(default_factory=list)


def compare_roles(current: Role, target: Role) -> RoleComparison:
    """Skills both roles require, and what moving to ``target`` adds or drops. Target's spelling wins."""
    have = {_norm(s) for s in current.required_skills}
    need = {_norm(s) for s in target.required_skills}
    return RoleComparison(
        current=current,
        target=target,
        shared=[s for s in target.required_skills if _norm(s) in have],
        to_acquire=[s for s in target.required_skills if _norm(s) not in have],
        no_longer_needed=[s for s in current.required_skills if _norm(s) not in need],
    )


def match_percentage(user_skill_names: Iterable[str], role: Role) -> int:
    """Share of the role's required skills the user already has, 0-100."""
    required = {_norm(s) for s in role.required_skills}
    if not required:
        return 0
    owned = {_norm(s) for s in user_skill_names}
    return round(len(required & owned) / len(required) * 100)


def missing_skills(user_skill_names: Iterable[str], role: Role) -> List[str]:
    owned = {_norm(s) for s in user_skill_names}
    return [s for s in role.required_skills if _norm(s) not in owned]


def rank_roles(user_skill_names: Iterable[str], roles: List[Role]) -> List[tuple]:
    """(role, match %) best match first; ties go to higher demand."""
    names = list(user_skill_names)
    scored = [(r, match_percentage(names, r)) for r in roles]
    return sorted(scored, key=lambda rs: (-rs[1], -(rs[0].demand_score or 0), rs[0].title))


def latest_goal(goals: List[CareerGoal]) -> Optional[CareerGoal]:
    if not goals:
        return None
    dated = [g for g in goals if g.created_at]
    return max(dated, key=lambda g: g.created_at) if dated else goals[-1]


# ── Views ───────────────────────────────────────────────────────────────────

def _fmt_salary(value) -> str:
    return f"${value:,.0f}" if value else "—"


def render_role_card(role: Role, match: int = None):
    st.markdown(f"#### {role.title}")
    bits = [b for b in [role.level, role.industry, role.role_type] if b]
    if bits:
        st.caption(" · ".join(bits))
    if role.description:
        st.write(role.description)
    c1, c2, c3 = st.columns(3)
    c1.metric("Avg. salary", _fmt_salary(role.average_salary))
    c2.metric("Growth", f"{role.growth_rate:g}%" if role.growth_rate is not None else "—")
    c3.metric("Match" if match is not None else "Demand",
              f"{match}%" if match is not None else (f"{role.demand_score}/10" if role.demand_score else "—"))
    if role.required_skills:
        st.markdown("**Required skills:** " + ", ".join(role.required_skills))


def render_recommendations(role: Role, user_skills: list):
    if not st.button(f"💡 What should I learn for {role.title}?", key=f"rec_{role.id}"):
        return
    try:
        with st.spinner("Thinking about your next skills..."):
            text = client().skill_recommendations(role.title, user_skills)
    except ApiError as e:
        st.toast(f"No recommendations right now: {e.message}", icon="⚠️")
        return
    st.markdown(text or "_No recommendations returned._")


def render_comparison(roles: List[Role], user_skill_names: List[str]):
    st.markdown("### Compare roles")
    titles = [r.title for r in roles]
    c1, c2 = st.columns(2)
    with c1:
        cur = st.selectbox("Current role", titles, key="cmp_current")
    with c2:
        tgt = st.selectbox("Target role", titles, index=min(1, len(titles) - 1), key="cmp_target")

    current, target = roles[titles.index(cur)], roles[titles.index(tgt)]
    cmp = compare_roles(current, target)

    c1, c2, c3 = st.columns(3)
    with c1:
        st.markdown("**Shared**")
        for s in cmp.shared or ["—"]:
            st.markdown(f"- {s}")
    with c2:
        st.markdown("**To acquire**")
        for s in cmp.to_acquire or ["—"]:
            st.markdown(f"- {s}")
    with c3:
        st.metric(f"Your match for {target.title}", f"{match_percentage(user_skill_names, target)}%")

    path_q = query(f"/api/career/paths/role/{target.id}", lambda: client().get_career_path(target.id))
    info = path_q.data
    if info is not None:
        st.markdown("**Typical progression**")
        if info.steps:
            st.markdown(" → ".join(f"**{s}**" if _norm(s) == _norm(target.title) else s for s in info.steps))
        if info.next_role:
            years = f" in ~{info.years_to_progress} years" if info.years_to_progress else ""
            st.caption(f"Next step: {info.next_role}{years}")
        if info.skills_to_acquire:
            st.caption("Skills for the next step: " + ", ".join(info.skills_to_acquire))


def render_goals(roles: List[Role]):
    uid = user_id()
    remote = query(f"/api/users/{uid}/career-goals", lambda: client().list_career_goals(uid))

    st.markdown("### Career goals")
    if remote.error:
        st.error(f"Couldn't load goals: {remote.error.message}")
    for g in remote.data or []:
        with st.expander(f"🎯 {g.title} · {g.timeline_months} months"):
            if g.description:
                st.write(g.description)
            if g.target_date:
                st.caption(f"Target date {fmt_date(g.target_date)}")
            with st.form(f"goal_{g.id}"):
                title = st.text_input("Title", g.title, key=f"goal_title_{g.id}")
                months = st.number_input("Timeline (months)", 1, 120, max(1, min(120, g.timeline_months)), key=f"goal_months_{g.id}")
                if st.form_submit_button("Update"):
                    _save_goal(uid, g.id, {"title": title, "timelineMonths": int(months)})

    role_by_title = {r.title: r for r in roles}
    with st.form("new_goal", clear_on_submit=True):
        st.markdown("**New goal**")
        target = st.selectbox("Target role", ["—"] + list(role_by_title))
        title = st.text_input("Goal", placeholder="Become a Security Analyst")
        months = st.number_input("Timeline (months)", 1, 120, 6)
        description = st.text_area("Notes", height=80)
        if not st.form_submit_button("Add goal"):
            return

    role = role_by_title.get(target)
    title = title.strip() or (f"Become a {role.title}" if role else "")
    if not title:
        st.warning("Give your goal a title or pick a target role.")
        return
    goal = CareerGoal(
        user_id=uid,
        title=title,
        description=description or None,
        timeline_months=int(months),
        target_role_id=role.id if role else None,
    )
    try:
        client().create_career_goal(goal)
    except ApiError as e:
        st.toast(f"Couldn't create goal: {e.message}", icon="⚠️")
        return
    log.info("created career goal %r for user %s", title, uid)
    invalidate(f"/api/users/{uid}/career-goals", f"/api/users/{uid}/dashboard")
    st.toast("Career goal added", icon="🎯")
    st.rerun()


def _save_goal(uid: int, goal_id: int, changes: dict):
    try:
        client().update_career_goal(goal_id, changes)
    except ApiError as e:
        st.toast(f"Couldn't update goal: {e.message}", icon="⚠️")
        return
    invalidate(f"/api/users/{uid}/career-goals", f"/api/users/{uid}/dashboard")
    st.toast("Goal updated", icon="✅")
    st.rerun()


def render_career():
    uid = user_id()
    roles_q = query("/api/interview/roles", lambda: client().list_roles(), spinner="Loading roles...")
    skills_q = query(f"/api/users/{uid}/skills", lambda: client().list_user_skills(uid))
    names = [s.skill_name for s in skills_q.data or []]

    roles = roles_q.data or []
    if show_state(roles_q, "No roles in the catalogue yet."):
        tab_match, tab_compare = st.tabs(["Best matches", "Compare"])
        with tab_match:
            for role, pct in rank_roles(names, roles)[:5]:
                with st.container(border=True):
                    render_role_card(role, match=pct)
                    gaps = missing_skills(names, role)
                    if gaps:
                        st.caption("Missing: " + ", ".join(gaps))
                    render_recommendations(role, skills_q.data or [])
        with tab_compare:
            render_comparison(roles, names)

    render_goals(roles)
