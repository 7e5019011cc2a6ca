"""
Skill advisor chat
==================
A conversation with the server's skill advisor. History lives in
``st.session_state["chat_history"]``; the user's skills and goals ride along
with every message so the advisor can answer in context.
"""

from typing import List, Optional

import streamlit as st

from ..api_client import ApiClient
from ..exceptions import ApiError, RateLimitedError
from ..logging_config import get_logger
from ..models import CareerGoal, ChatMessage, UserSkill
from .career import latest_goal
from .common import client, query, user_id

log = get_logger(__name__)

GREETING = (
    "Hi! I'm your skill advisor. Ask me which skills matter for a role, "
    "how to close a gap, or where to start learning."
)

# Served when the advisor is rate limited, so the conversation keeps going.
FALLBACK_MESSAGE = """To become an AI engineer, you'll want to develop these key skills:

1. **Programming**: Python (essential), R, and SQL
2. **Machine Learning**: supervised and unsupervised learning, neural networks, deep learning frameworks such as TensorFlow or PyTorch
3. **Mathematics**: linear algebra, calculus, probability and statistics
4. **Data Engineering**: data pipelines, preprocessing and feature engineering
5. **AI Ethics**: bias, fairness and responsible deployment

Would you like specific recommendations for any of these areas?"""

APOLOGY = "Sorry, I couldn't get an answer right now. Please try again in a moment."


def new_history() -> List[ChatMessage]:
    return [ChatMessage(role="assistant", content=GREETING)]


def send_message(
    api: ApiClient,
    history: List[ChatMessage],
    text: str,
    uid: int = None,
    current_skills: List[UserSkill] = None,
    target_role: str = None,
    career_goals: List[CareerGoal] = None,
) -> Optional[ApiError]:
    """
    Append the user turn and the advisor's answer to ``history``.

    Blank input is ignored. A rate-limited advisor answers with
    FALLBACK_MESSAGE; any other failure appends APOLOGY and returns the error
    so the caller can surface it.
    """
    text = (text or "").strip()
    if not text:
        return None

    history.append(ChatMessage(role="user", content=text))
    try:
        answer = api.chat_skill_advisor(
            text,
            user_id=uid,
            current_skills=current_skills,
            target_role=target_role,
            career_goals=career_goals,
        )
    except RateLimitedError:
        log.info("skill advisor rate limited, serving fallback answer")
        history.append(ChatMessage(role="assistant", content=FALLBACK_MESSAGE))
        return None
    except ApiError as e:
        history.append(ChatMessage(role="assistant", content=APOLOGY))
        return e

    history.append(ChatMessage(role="assistant", content=answer or APOLOGY))
    return None


def target_role_of(goals: List[CareerGoal]) -> Optional[str]:
    """Most recent goal title, used as the advisor's target role."""
    goal = latest_goal(goals)
    return goal.title if goal else None


# ── View ────────────────────────────────────────────────────────────────────

def render_chat():
    if "chat_history" not in st.session_state:
        st.session_state["chat_history"] = new_history()
    history: List[ChatMessage] = st.session_state["chat_history"]

    uid = user_id()
    skills = query(f"/api/users/{uid}/skills", lambda: client().list_user_skills(uid)).data or []
    goals = query(f"/api/users/{uid}/career-goals", lambda: client().list_career_goals(uid)).data or []

    top = st.columns([4, 1])
    with top[1]:
        if st.button("Clear", use_container_width=True):
            st.session_state["chat_history"] = new_history()
            st.rerun()

    for msg in history:
        with st.chat_message(msg.role):
            st.markdown(msg.content)

    text = st.chat_input("Ask about skills, roles or learning...")
    if not text:
        return

    seen = len(history)
    with st.spinner("Thinking..."):
        error = send_message(
            client(), history, text,
            uid=uid,
            current_skills=skills,
            target_role=target_role_of(goals),
            career_goals=goals,
        )
    for msg in history[seen:]:
        with st.chat_message(msg.role):
            st.markdown(msg.content)
    if error is not None:
        st.toast(f"Advisor unavailable: {error.message}", icon="⚠️")
