"""
Learning paths
==============
Paths are lists of modules; each module references catalogue resources by id.
A resource counts as done when the path says so or when the progress endpoint
lists it as completed.
"""

from typing import Dict, Iterable, List, Optional, Set, Tuple

import streamlit as st

from ..exceptions import ApiError
from ..logging_config import get_logger
from ..models import CompletionInput, LearningPath, LearningResource, Module, ResourceRef, UserProgress
from .common import client, fmt_minutes, invalidate, query, show_state, user_id

log = get_logger(__name__)


def _percent(done: int, total: int) -> int:
    return round(done / total * 100) if total else 0


def is_done(ref, completed_ids: Set[int] = frozenset()) -> bool:
    return ref.completed or ref.id in completed_ids


def module_progress(module: Module, completed_ids: Set[int] = frozenset()) -> Tuple[int, int, int]:
    """(completed, total, percent) over the module's resource refs."""
    total = len(module.resources)
    done = sum(1 for r in module.resources if is_done(r, completed_ids))
    return done, total, _percent(done, total)


def path_progress(path: LearningPath, completed_ids: Set[int] = frozenset()) -> Tuple[int, int, int]:
    done = total = 0
    for m in path.modules:
        d, t, _ = module_progress(m, completed_ids)
        done += d
        total += t
    return done, total, _percent(done, total)


def total_hours(path: LearningPath) -> float:
    return round(sum(m.estimated_hours or 0 for m in path.modules), 1)


def index_resources(resources: Iterable[LearningResource]) -> Dict[int, LearningResource]:
    return {r.id: r for r in resources}


def resolve_module(module: Module, catalogue: Dict[int, LearningResource]) -> List[Tuple[ResourceRef, Optional[LearningResource]]]:
    """Pair each ref with its catalogue entry; None when the catalogue doesn't know the id."""
    return [(ref, catalogue.get(ref.id)) for ref in module.resources]


def next_resource(path: LearningPath, completed_ids: Set[int] = frozenset()) -> Optional[int]:
    """Id of the first unfinished resource in path order."""
    for m in path.modules:
        for ref in m.resources:
            if not is_done(ref, completed_ids):
                return ref.id
    return None


def progress_keys(uid: int) -> Tuple[str, ...]:
    return (
        f"/api/users/{uid}/progress",
        f"/api/users/{uid}/dashboard",
        f"/api/users/{uid}/activities",
        f"/api/users/{uid}/learning-paths",
    )


def set_completed(uid: int, resource_id: int, done: bool, details: CompletionInput = None) -> bool:
    try:
        if done:
            client().complete_resource(uid, resource_id, details)
        else:
            client().uncomplete_resource(uid, resource_id)
    except ApiError as e:
        st.toast(f"Couldn't update resource: {e.message}", icon="⚠️")
        return False
    invalidate(*progress_keys(uid))
    return True


def toggle_completed(uid: int, resource_id: int, key: str):
    """``on_change`` callback for a Done checkbox; fires only when the user flips it."""
    if not set_completed(uid, resource_id, bool(st.session_state[key])):
        # drop the widget state so the box shows the server value again
        del st.session_state[key]


def record_progress(uid: int, resource_id: int, percent: int) -> bool:
    try:
        client().record_progress(UserProgress(
            user_id=uid, resource_id=resource_id, progress=percent, completed=percent >= 100,
        ))
    except ApiError as e:
        st.toast(f"Couldn't save progress: {e.message}", icon="⚠️")
        return False
    invalidate(*progress_keys(uid))
    return True


# ── Views ───────────────────────────────────────────────────────────────────

def _render_resource(uid: int, path_id, ref_id: int, res: Optional[LearningResource], done: bool):
    key = f"lp{path_id}_r{ref_id}"
    c1, c2 = st.columns([5, 1])
    with c1:
        if res is None:
            st.markdown(f"Resource #{ref_id} <small>(not in catalogue)</small>", unsafe_allow_html=True)
        else:
            title = f"[{res.title}]({res.url})" if res.url else res.title
            meta = " · ".join(x for x in [res.resource_type, res.provider, fmt_minutes(res.duration)] if x and x != "—")
            st.markdown(f"{'✅' if done else '⬜'} {title}  \n<small>{meta}</small>", unsafe_allow_html=True)
    with c2:
        st.checkbox("Done", value=done, key=key, on_change=toggle_completed, args=(uid, ref_id, key))


def render_path(path: LearningPath, catalogue: Dict[int, LearningResource], completed_ids: Set[int]):
    uid = user_id()
    done, total, pct = path_progress(path, completed_ids)
    st.markdown(f"### {path.title}")
    if path.description:
        st.caption(path.description)
    c1, c2, c3 = st.columns(3)
    c1.metric("Progress", f"{pct}%")
    c2.metric("Resources", f"{done} / {total}")
    c3.metric("Estimated time", f"{total_hours(path)} h")
    st.progress(pct / 100)

    up_next = next_resource(path, completed_ids)
    if up_next is not None:
        res = catalogue.get(up_next)
        with st.form(f"progress_{path.id}_{up_next}"):
            st.markdown(f"**Up next:** {res.title if res else f'Resource #{up_next}'}")
            percent = st.slider("How far along are you?", 0, 100, 0, 10)
            if st.form_submit_button("Save progress") and record_progress(uid, up_next, percent):
                st.rerun()

    for i, m in enumerate(path.modules, 1):
        m_done, m_total, m_pct = module_progress(m, completed_ids)
        with st.expander(f"{i}. {m.title} · {m_done}/{m_total} · {m.estimated_hours:g} h", expanded=m_pct < 100 and i == 1):
            if m.description:
                st.caption(m.description)
            for ref, res in resolve_module(m, catalogue):
                _render_resource(uid, path.id, ref.id, res, is_done(ref, completed_ids))


def render_generate(career_goal_id: int):
    if not st.button("✨ Generate a learning path", key=f"gen_path_{career_goal_id}"):
        return
    uid = user_id()
    try:
        with st.spinner("Building your path, this can take a minute..."):
            path = client().generate_learning_path(career_goal_id)
    except ApiError as e:
        st.toast(f"Couldn't generate a path: {e.message}", icon="⚠️")
        return
    log.info("generated learning path %s for goal %s", path.id, career_goal_id)
    invalidate(f"/api/users/{uid}/learning-paths", f"/api/users/{uid}/dashboard")
    st.toast(f"New path: {path.title}", icon="✨")
    st.rerun()


def render_learning_paths():
    uid = user_id()
    paths_q = query(f"/api/users/{uid}/learning-paths", lambda: client().list_learning_paths(uid),
                    spinner="Loading learning paths...")
    catalogue_q = query("/api/learning-resources", lambda: client().list_resources())
    progress_q = query(f"/api/users/{uid}/progress", lambda: client().get_progress(uid))
    goals_q = query(f"/api/users/{uid}/career-goals", lambda: client().list_career_goals(uid))

    goals = goals_q.data or []
    if goals:
        render_generate(goals[-1].id)

    if not show_state(paths_q, "No learning path yet. Generate one from your career goal."):
        return
    if catalogue_q.error:
        st.warning("Resource details are unavailable right now.")

    catalogue = index_resources(catalogue_q.data or [])
    completed_ids = progress_q.data.completed_ids if progress_q.data else set()

    paths: List[LearningPath] = paths_q.data
    if len(paths) > 1:
        titles = [p.title for p in paths]
        chosen = st.selectbox("Path", titles, index=len(titles) - 1)
        paths = [paths[titles.index(chosen)]]
    render_path(paths[0], catalogue, completed_ids)
