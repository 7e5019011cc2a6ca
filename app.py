"""Upcraft: Streamlit web app"""

import sys
from pathlib import Path

# ── Path setup ────────────────────────────────────────────────────────────────
ROOT = Path(__file__).parent
sys.path.insert(0, str(ROOT))

# ── Streamlit must be imported before any st.* calls ─────────────────────────
import streamlit as st

st.set_page_config(
    page_title="Upcraft",
    page_icon="🧭",
    layout="wide",
    initial_sidebar_state="expanded",
)

from dotenv import load_dotenv
load_dotenv(ROOT / ".env")

from upcraft.config import settings
from upcraft.logging_config import setup_logging
from upcraft.components import (
    render_ai_gap_analysis,
    render_assessment_form,
    render_career,
    render_chat,
    render_coach,
    render_dashboard,
    render_learning_paths,
    render_practice,
    render_progress,
    render_resources,
    render_skill_gap_section,
)
from upcraft.components.common import cache, client, query

setup_logging(settings.UPCRAFT_LOG_LEVEL)


# ── Session-state defaults ────────────────────────────────────────────────────
_DEFAULTS: dict = {
    "page":        "dashboard",
    "user_id":     settings.UPCRAFT_USER_ID,
    "role_id":     None,
}

_PAGES = [
    ("dashboard",  "🏠 Dashboard"),
    ("assessment", "🧪 Assessment"),
    ("learning",   "🗺️ Learning path"),
    ("progress",   "📈 Progress"),
    ("resources",  "📚 Resources"),
    ("practice",   "📝 Practice"),
    ("career",     "🎯 Career"),
    ("advisor",    "💬 Advisor"),
]


def _init_state():
    for k, v in _DEFAULTS.items():
        if k not in st.session_state:
            st.session_state[k] = v


# ── Routing helpers ───────────────────────────────────────────────────────────
def _nav(page: str):
    st.session_state["page"] = page
    st.rerun()


# ══════════════════════════════════════════════════════════════════════════════
# PAGE: Assessment
# ══════════════════════════════════════════════════════════════════════════════
def page_assessment():
    st.markdown("# 🧪 Skill assessment")

    uid = st.session_state["user_id"]
    roles = query("/api/interview/roles", lambda: client().list_roles()).data or []
    goals = query(f"/api/users/{uid}/career-goals", lambda: client().list_career_goals(uid)).data or []

    titles = ["All skills"] + [r.title for r in roles]
    current = next((r.title for r in roles if r.id == st.session_state["role_id"]), "All skills")
    chosen = st.selectbox("Assess for role", titles, index=titles.index(current))
    st.session_state["role_id"] = None if chosen == "All skills" else roles[titles.index(chosen) - 1].id

    tab_form, tab_gaps = st.tabs(["Assess", "Gaps"])
    with tab_form:
        render_assessment_form(st.session_state["role_id"])
    with tab_gaps:
        render_skill_gap_section()
        if goals:
            st.markdown("---")
            render_ai_gap_analysis(goals[-1].id)


# ══════════════════════════════════════════════════════════════════════════════
# PAGE: Learning path
# ══════════════════════════════════════════════════════════════════════════════
def page_learning():
    st.markdown("# 🗺️ Learning path")
    render_learning_paths()


def page_progress():
    st.markdown("# 📈 Your progress")
    render_progress()


def page_resources():
    st.markdown("# 📚 Resources")
    render_resources()


def page_practice():
    st.markdown("# 📝 Practice skills")
    render_practice()


def page_career():
    st.markdown("# 🎯 Career")
    render_career()


# ══════════════════════════════════════════════════════════════════════════════
# PAGE: Advisor
# ══════════════════════════════════════════════════════════════════════════════
def page_advisor():
    st.markdown("# 💬 Skill advisor")
    chat_col, coach_col = st.columns([3, 2])
    with chat_col:
        render_chat()
    with coach_col:
        render_coach()


# ══════════════════════════════════════════════════════════════════════════════
# Navigation
# ══════════════════════════════════════════════════════════════════════════════
def _render_nav():
    with st.sidebar:
        st.markdown("## 🧭 Upcraft")
        for page, label in _PAGES:
            if st.button(label, key=f"nav_{page}", use_container_width=True,
                         type="primary" if st.session_state["page"] == page else "secondary"):
                _nav(page)
        st.markdown("---")
        if st.button("↻ Refresh data", key="nav_refresh", use_container_width=True):
            cache().clear()
            st.rerun()
        st.caption(f"User #{st.session_state['user_id']} · {settings.UPCRAFT_API_BASE_URL}")


# ══════════════════════════════════════════════════════════════════════════════
# Entry point
# ══════════════════════════════════════════════════════════════════════════════
_ROUTES = {
    "dashboard":  render_dashboard,
    "assessment": page_assessment,
    "learning":   page_learning,
    "progress":   page_progress,
    "resources":  page_resources,
    "practice":   page_practice,
    "career":     page_career,
    "advisor":    page_advisor,
}


def main():
    _init_state()
    _render_nav()
    _ROUTES.get(st.session_state["page"], render_dashboard)()


main()
