"""
Skill assessment form
=====================
One current/target slider pair per skill, grouped by category. Submitting
fans out one POST /api/user-skills per skill in parallel; the requests are
independent, so a partial failure leaves the saved rows saved and reports the
rest.
"""

from collections import OrderedDict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import streamlit as st

from ..api_client import ApiClient
from ..config import settings
from ..exceptions import ApiError
from ..logging_config import get_logger
from ..models import Skill, UserSkill, UserSkillInput
from .common import clamp_level, client, invalidate, query, show_state, user_id

log = get_logger(__name__)

DEFAULT_TARGET = 80
SLIDER_STEP = 5

Levels = Tuple[int, int]  # (current, target)


@dataclass
class SubmissionResult:
    saved: List[UserSkill] = field(default_factory=list)
    failed: Dict[int, str] = field(default_factory=dict)     # skill_id -> error message
    rejected: List[int] = field(default_factory=list)        # invalid rows never sent

    @property
    def ok(self) -> bool:
        return not self.failed and not self.rejected


def initial_levels(skills: List[Skill], user_skills: List[UserSkill]) -> Dict[int, Levels]:
    """Pre-fill sliders from what the user already recorded."""
    existing = {us.skill_id: us for us in user_skills}
    levels = {}
    for s in skills:
        us = existing.get(s.id)
        if us is None:
            levels[s.id] = (0, DEFAULT_TARGET)
        else:
            # a stored target of 0 means "never set" and gets the default too
            levels[s.id] = (clamp_level(us.current_level), clamp_level(us.target_level) or DEFAULT_TARGET)
    return levels


def group_skills(skills: List[Skill]) -> "OrderedDict[str, List[Skill]]":
    groups: Dict[str, List[Skill]] = {}
    for s in skills:
        groups.setdefault(s.category or "uncategorized", []).append(s)
    return OrderedDict((k, sorted(v, key=lambda s: s.name.lower())) for k, v in sorted(groups.items()))


def build_submissions(uid: int, levels: Dict[int, Levels]) -> Tuple[List[UserSkillInput], List[int]]:
    """Split slider values into payloads and rows rejected because target < current."""
    payloads, rejected = [], []
    for skill_id, (current, target) in levels.items():
        current, target = clamp_level(current), clamp_level(target)
        if target < current:
            rejected.append(skill_id)
            continue
        payloads.append(UserSkillInput(
            user_id=uid,
            skill_id=skill_id,
            current_level=current,
            target_level=target,
            notes="",
        ))
    return payloads, rejected


def submit_assessment(api: ApiClient, payloads: List[UserSkillInput], workers: int = None) -> SubmissionResult:
    """POST every payload concurrently. No ordering between requests."""
    result = SubmissionResult()
    if not payloads:
        return result

    workers = max(1, min(workers or settings.UPCRAFT_ASSESSMENT_WORKERS, len(payloads)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {pool.submit(api.save_user_skill, p): p.skill_id for p in payloads}
        for future, skill_id in futures.items():
            try:
                result.saved.append(future.result())
            except ApiError as e:
                result.failed[skill_id] = e.message

    log.info("assessment submitted: %d saved, %d failed", len(result.saved), len(result.failed))
    return result


# ── View ────────────────────────────────────────────────────────────────────

def _skill_source(role_id: int = None):
    if role_id:
        return f"/api/skills/role/{role_id}", lambda: client().list_role_skills(role_id)
    return "/api/skills", lambda: client().list_skills()


def render_assessment_form(role_id: int = None):
    uid = user_id()
    key, fetcher = _skill_source(role_id)
    skills_q = query(key, fetcher, spinner="Loading skills...")
    mine_q = query(f"/api/users/{uid}/skills", lambda: client().list_user_skills(uid))

    if not show_state(skills_q, "No skills available to assess for this role."):
        return
    if mine_q.error:
        st.warning("Couldn't load your saved levels; sliders start from zero.")

    skills: List[Skill] = skills_q.data
    defaults = initial_levels(skills, mine_q.data or [])
    names = {s.id: s.name for s in skills}

    with st.form("skill_assessment"):
        levels: Dict[int, Levels] = {}
        for category, items in group_skills(skills).items():
            st.markdown(f"#### {category.replace('_', ' ').title()}")
            for s in items:
                cur0, tgt0 = defaults[s.id]
                st.markdown(f"**{s.name}**" + (f" <small>— {s.description}</small>" if s.description else ""),
                            unsafe_allow_html=True)
                c1, c2 = st.columns(2)
                with c1:
                    cur = st.slider("Current", 0, 100, cur0, SLIDER_STEP, key=f"cur_{s.id}")
                with c2:
                    tgt = st.slider("Target", 0, 100, tgt0, SLIDER_STEP, key=f"tgt_{s.id}")
                levels[s.id] = (cur, tgt)
        submitted = st.form_submit_button("Save assessment")

    if not submitted:
        return

    payloads, rejected = build_submissions(uid, levels)
    with st.spinner(f"Saving {len(payloads)} skills..."):
        result = submit_assessment(client(), payloads)
    result.rejected = rejected

    if result.saved:
        invalidate(f"/api/users/{uid}/skills", f"/api/users/{uid}/dashboard")

    if result.ok:
        st.toast("Skills updated successfully. Your skill assessment has been saved.", icon="✅")
        return
    for skill_id in rejected:
        st.warning(f"{names.get(skill_id, skill_id)}: target can't be below current level, not saved.")
    for skill_id, msg in result.failed.items():
        st.error(f"{names.get(skill_id, skill_id)}: {msg}")
    if result.saved:
        st.info(f"{len(result.saved)} of {len(payloads)} skills were saved.")
