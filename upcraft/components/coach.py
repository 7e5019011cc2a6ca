"""AI coach card: latest advice plus a box to ask a follow-up."""

import streamlit as st

from ..exceptions import ApiError
from .common import client, invalidate, query, show_state, user_id


def coach_key(uid: int) -> str:
    return f"/api/users/{uid}/ai-coach"


def ask(uid: int, text: str) -> bool:
    text = (text or "").strip()
    if not text:
        return False
    try:
        client().ask_coach(uid, text)
    except ApiError as e:
        st.toast(f"Coach couldn't answer: {e.message}", icon="⚠️")
        return False
    invalidate(coach_key(uid))
    st.toast("Question sent to your coach", icon="💬")
    return True


def render_coach():
    uid = user_id()
    remote = query(coach_key(uid), lambda: client().get_coach(uid), spinner="Asking your coach...")

    st.markdown("### 🧭 AI coach")
    if show_state(remote, "Your coach has nothing to say yet. Ask a question below."):
        coach = remote.data
        st.markdown(coach.message)
        if coach.advice:
            st.info(coach.advice)
        if coach.next_steps:
            st.markdown("**Next steps**")
            for step in coach.next_steps:
                diff = f" · difficulty {step.difficulty}/5" if step.difficulty else ""
                st.markdown(f"- **{step.action}**{diff}")
                if step.rationale:
                    st.caption(step.rationale)
        if coach.focus_areas:
            st.markdown("**Focus areas:** " + ", ".join(coach.focus_areas))
        for tip in coach.suggestions:
            st.markdown(f"- {tip}")
        if coach.challenge_question:
            st.markdown(f"🤔 *{coach.challenge_question}*")
        if coach.encouragement:
            st.success(coach.encouragement)

    with st.form("coach_query", clear_on_submit=True):
        text = st.text_input("Ask your coach")
        if st.form_submit_button("Ask") and ask(uid, text):
            st.rerun()
