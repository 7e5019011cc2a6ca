"""Progress tracker: overall gauge, per-skill completion, activity feed, validations."""

from typing import List

import streamlit as st

from ..config import settings
from ..exceptions import ApiError
from ..models import Skill, SkillValidation, UserActivity
from ..models.skill import VALIDATION_TYPES
from .common import client, fmt_date, invalidate, query, show_state, user_id
from . import charts

_ACTIVITY_ICON = {
    "completed_resource": "🎓",
    "started_resource": "▶️",
    "updated_skill": "📈",
    "validated_skill": "🏅",
    "set_career_goal": "🎯",
}


def newest_first(activities: List[UserActivity], limit: int = None) -> List[UserActivity]:
    """Newest first, trimmed to ``limit``. Undated entries sort last."""
    ordered = sorted(
        activities,
        key=lambda a: a.created_at.timestamp() if a.created_at else float("-inf"),
        reverse=True,
    )
    return ordered[:limit] if limit else ordered


def validation_summary(validations: List[SkillValidation], skills: List[Skill]) -> List[dict]:
    names = {s.id: s.name for s in skills}
    rows = []
    for v in sorted(validations, key=lambda v: v.validated_at.timestamp() if v.validated_at else 0, reverse=True):
        rows.append({
            "skill": names.get(v.skill_id, f"Skill #{v.skill_id}"),
            "type": v.validation_type.replace("_", " "),
            "score": v.score,
            "date": fmt_date(v.validated_at),
        })
    return rows


# ── Views ───────────────────────────────────────────────────────────────────

def render_activity_feed(limit: int = None):
    uid = user_id()
    limit = limit or settings.UPCRAFT_ACTIVITY_LIMIT
    remote = query(
        f"/api/users/{uid}/activities?limit={limit}",
        lambda: client().list_activities(uid, limit=limit),
    )
    st.markdown("### Recent activity")
    if not show_state(remote, "No activity yet."):
        return
    for a in newest_first(remote.data, limit):
        icon = _ACTIVITY_ICON.get(a.activity_type, "•")
        st.markdown(f"{icon} **{a.label}** {a.description}  \n<small>{fmt_date(a.created_at)}</small>",
                    unsafe_allow_html=True)


def render_validations():
    uid = user_id()
    val_q = query(f"/api/users/{uid}/validations", lambda: client().list_validations(uid))
    skills_q = query("/api/skills", lambda: client().list_skills())
    skills = skills_q.data or []

    st.markdown("### Skill validations")
    if show_state(val_q, "No validated skills yet."):
        st.dataframe(validation_summary(val_q.data, skills), use_container_width=True, hide_index=True)

    if not skills:
        return
    with st.form("new_validation", clear_on_submit=True):
        by_name = {s.name: s.id for s in skills}
        skill_name = st.selectbox("Skill", sorted(by_name))
        vtype = st.selectbox("How was it validated?", VALIDATION_TYPES, format_func=lambda t: t.replace("_", " ").title())
        score = st.slider("Score", 0, 100, 70, 5)
        evidence = st.text_input("Evidence (link or note)")
        if not st.form_submit_button("Add validation"):
            return

    try:
        client().create_validation(SkillValidation(
            user_id=uid,
            skill_id=by_name[skill_name],
            validation_type=vtype,
            score=score,
            evidence=evidence or None,
        ))
    except ApiError as e:
        st.toast(f"Couldn't save validation: {e.message}", icon="⚠️")
        return
    invalidate(f"/api/users/{uid}/validations", f"/api/users/{uid}/dashboard", f"/api/users/{uid}/activities")
    st.toast(f"{skill_name} validated", icon="🏅")
    st.rerun()


def render_progress():
    uid = user_id()
    remote = query(f"/api/users/{uid}/progress", lambda: client().get_progress(uid), spinner="Loading progress...")

    if remote.error:
        st.error(f"Couldn't load progress: {remote.error.message}")
    elif remote.data is not None:
        stats = remote.data
        c1, c2 = st.columns([1, 2])
        with c1:
            st.plotly_chart(charts.progress_gauge(stats.overall_percent), use_container_width=True)
        with c2:
            st.plotly_chart(charts.skill_progress_bars(stats.skills), use_container_width=True)

    render_activity_feed()
    render_validations()
