"""Learning resource catalogue with type and skill filters."""

from typing import List, Set

import streamlit as st

from ..models import LearningResource, Skill
from ..models.learning import RESOURCE_TYPES
from .common import client, fmt_minutes, query, show_state, user_id
from .learning import toggle_completed

_TYPE_ICON = {
    "course": "🎓", "workshop": "🛠️", "assessment": "📝", "video": "🎬",
    "article": "📄", "book": "📚", "project": "🧪",
}


def resources_key(resource_type: str = None, skill_id: int = None) -> str:
    if resource_type:
        return f"/api/learning-resources/type/{resource_type}"
    if skill_id is not None:
        return f"/api/learning-resources/skill/{skill_id}"
    return "/api/learning-resources"


def filter_resources(resources: List[LearningResource], free_only: bool = False,
                     difficulty: str = None, search: str = "") -> List[LearningResource]:
    """Client-side refinements on top of whatever the server filtered."""
    search = search.strip().lower()
    out = []
    for r in resources:
        if free_only and not r.is_free:
            continue
        if difficulty and (r.difficulty or "").lower() != difficulty.lower():
            continue
        if search and search not in f"{r.title} {r.description or ''} {r.provider or ''}".lower():
            continue
        out.append(r)
    return sorted(out, key=lambda r: (-(r.rating or 0), r.title.lower()))


def render_resource(r: LearningResource, done: bool):
    uid = user_id()
    with st.container(border=True):
        c1, c2 = st.columns([5, 1])
        with c1:
            title = f"[{r.title}]({r.url})" if r.url else r.title
            st.markdown(f"{_TYPE_ICON.get(r.resource_type, '•')} **{title}**")
            meta = [r.provider, r.difficulty, fmt_minutes(r.duration),
                    f"★ {r.rating:.1f}" if r.rating else None, "free" if r.is_free else "paid"]
            st.caption(" · ".join(m for m in meta if m and m != "—"))
            if r.description:
                st.write(r.description)
        with c2:
            key = f"res_{r.id}"
            st.checkbox("Done", value=done, key=key, on_change=toggle_completed, args=(uid, r.id, key))


def render_resources():
    uid = user_id()
    skills_q = query("/api/skills", lambda: client().list_skills())
    skills: List[Skill] = skills_q.data or []

    c1, c2, c3 = st.columns(3)
    with c1:
        rtype = st.selectbox("Type", ["All"] + RESOURCE_TYPES, format_func=str.title)
    with c2:
        skill_names = {s.name: s.id for s in skills}
        skill = st.selectbox("Skill", ["All"] + sorted(skill_names))
    with c3:
        difficulty = st.selectbox("Difficulty", ["Any", "beginner", "intermediate", "advanced"], format_func=str.title)
    search = st.text_input("Search", placeholder="title, provider...")
    free_only = st.toggle("Free only")

    # the server filters by one dimension; type wins, skill is applied locally
    resource_type = None if rtype == "All" else rtype
    skill_id = None if skill == "All" else skill_names[skill]
    key = resources_key(resource_type, None if resource_type else skill_id)
    remote = query(key, lambda: client().list_resources(resource_type, None if resource_type else skill_id),
                   spinner="Loading resources...")

    if not show_state(remote, "No resources match these filters."):
        return

    items = remote.data
    if resource_type and skill_id is not None:
        items = [r for r in items if r.covers_skill(skill_id)]
    items = filter_resources(items, free_only, None if difficulty == "Any" else difficulty, search)

    progress_q = query(f"/api/users/{uid}/progress", lambda: client().get_progress(uid))
    completed: Set[int] = progress_q.data.completed_ids if progress_q.data else set()

    st.caption(f"{len(items)} resources · {sum(1 for r in items if r.id in completed)} completed")
    if not items:
        st.info("No resources match these filters.")
    for r in items:
        render_resource(r, r.id in completed)
