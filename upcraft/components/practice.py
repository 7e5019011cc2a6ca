"""
Practice
========
Multiple-choice quizzes per skill. Questions come from the server when it has
them for the skill, otherwise from the built-in bank. Scores stay in the
browser session; nothing is written back.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import streamlit as st

from ..exceptions import NotFoundError
from ..logging_config import get_logger
from ..models import QuizQuestion, Skill, SkillAssessment
from .common import client, query, show_state
from .question_bank import QUESTION_BANK

log = get_logger(__name__)

ALL = "all"

# (minimum percent, band, proficiency level), highest first
_BANDS = [
    (90, "excellent", "proficient"),
    (70, "good", "advanced"),
    (50, "average", "intermediate"),
    (0, "needs_improvement", "beginner"),
]

_BAND_TEXT = {
    "excellent": ("Excellent work!", "You have a strong mastery of {skill}. Keep up the great work!"),
    "good": ("Good job!", "You have a solid understanding of {skill}. A bit more practice will make you an expert."),
    "average": ("You're making progress", "You have a basic understanding of {skill}. Keep practicing to improve."),
    "needs_improvement": ("Keep practicing", "{skill} might be challenging, but don't give up! Review the material and try again."),
}


@dataclass
class QuestionResult:
    question: QuizQuestion
    selected: Optional[str] = None

    @property
    def correct(self) -> bool:
        return self.selected is not None and self.selected == self.question.correct_answer


@dataclass
class QuizScore:
    results: List[QuestionResult] = field(default_factory=list)

    @property
    def correct(self) -> int:
        return sum(1 for r in self.results if r.correct)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def answered(self) -> int:
        return sum(1 for r in self.results if r.selected is not None)

    @property
    def ratio(self) -> float:
        return self.correct / self.total * 100 if self.total else 0.0

    @property
    def percent(self) -> int:
        return round(self.ratio)


def score_quiz(questions: List[QuizQuestion], answers: Dict[int, Optional[str]]) -> QuizScore:
    """Grade ``answers`` (question id -> option id). Unanswered questions count as wrong."""
    return QuizScore([QuestionResult(q, answers.get(q.id)) for q in questions])


def _band_row(ratio: float) -> Tuple[int, str, str]:
    return next(row for row in _BANDS if ratio >= row[0])


def result_band(ratio: float) -> str:
    """Band for an unrounded percentage; 89.6 is still "good"."""
    return _band_row(ratio)[1]


def proficiency_level(ratio: float) -> str:
    return _band_row(ratio)[2]


def result_text(ratio: float, skill_name: str) -> Tuple[str, str]:
    title, message = _BAND_TEXT[result_band(ratio)]
    return title, message.format(skill=skill_name)


def practice_categories(skills: List[Skill]) -> List[str]:
    return [ALL] + sorted({s.category or "uncategorized" for s in skills})


def filter_by_category(skills: List[Skill], category: str) -> List[Skill]:
    if category == ALL:
        return list(skills)
    return [s for s in skills if (s.category or "uncategorized") == category]


def bank_questions(skill_name: str) -> List[QuizQuestion]:
    rows = QUESTION_BANK.get(" ".join(skill_name.split()).lower(), [])
    return [QuizQuestion.model_validate(r) for r in rows]


def pick_questions(skill: Skill, assessment: Optional[SkillAssessment]) -> List[QuizQuestion]:
    """Server questions win; the built-in bank covers skills the server has nothing for."""
    if assessment is not None and assessment.questions:
        return assessment.questions
    return bank_questions(skill.name)


# ── Views ───────────────────────────────────────────────────────────────────

def _answer_key(skill_id: int, question_id: int) -> str:
    return f"pq_{skill_id}_{question_id}"


def _reset_answers(skill_id: int, questions: List[QuizQuestion]):
    st.session_state.pop("practice_answers", None)
    for q in questions:
        st.session_state.pop(_answer_key(skill_id, q.id), None)


def _submit_quiz(skill: Skill, questions: List[QuizQuestion]):
    answers = {q.id: st.session_state.get(_answer_key(skill.id, q.id)) for q in questions}
    score = score_quiz(questions, answers)
    log.info("practice %r: %d/%d", skill.name, score.correct, score.total)
    st.session_state["practice_answers"] = answers
    st.toast(f"You scored {score.correct} out of {score.total}", icon="📝")


def render_skill_cards(skills: List[Skill]):
    categories = practice_categories(skills)
    tabs = st.tabs([c.replace("_", " ").title() for c in categories])
    for tab, category in zip(tabs, categories):
        with tab:
            items = filter_by_category(skills, category)
            if not items:
                st.info("No skills found in this category.")
            cols = st.columns(3)
            for i, s in enumerate(items):
                with cols[i % 3].container(border=True):
                    st.markdown(f"**{s.name}**")
                    st.caption((s.category or "uncategorized").title())
                    if s.description:
                        st.write(s.description)
                    if st.button("Practice", key=f"practice_{category}_{s.id}", use_container_width=True):
                        st.session_state["practice_skill"] = s.id
                        st.session_state.pop("practice_answers", None)
                        st.rerun()


def render_result(skill: Skill, score: QuizScore):
    title, message = result_text(score.ratio, skill.name)
    with st.container(border=True):
        st.markdown(f"### {title}")
        st.metric("Score", f"{score.correct} / {score.total}", f"{score.percent}%", delta_color="off")
        st.progress(score.percent / 100)
        st.write(message)
        st.caption(f"Proficiency: {proficiency_level(score.ratio).title()}")
        if score.answered < score.total:
            st.caption(f"{score.total - score.answered} unanswered")
    for i, r in enumerate(score.results, 1):
        mark = "✅" if r.correct else "❌"
        with st.expander(f"{mark} {i}. {r.question.question}"):
            picked = r.question.option_text(r.selected) if r.selected else "no answer"
            st.markdown(f"Your answer: {picked}  \nCorrect: {r.question.option_text(r.question.correct_answer)}")
            if r.question.explanation:
                st.caption(r.question.explanation)


def render_quiz(skill: Skill):
    remote = query(f"/api/assessment/skill/{skill.id}", lambda: client().get_skill_assessment(skill.id),
                   spinner="Loading questions...")
    if remote.error is not None and not isinstance(remote.error, NotFoundError):
        st.warning(f"Couldn't load questions from the server: {remote.error.message}")
    questions = pick_questions(skill, remote.data)

    if st.button("← Back to skills", key="practice_back"):
        _reset_answers(skill.id, questions)
        st.session_state["practice_skill"] = None
        st.rerun()

    st.markdown(f"## {skill.name}")
    if not questions:
        st.info("No practice questions for this skill yet.")
        return

    answers = st.session_state.get("practice_answers")
    if answers is not None:
        render_result(skill, score_quiz(questions, answers))
        if st.button("Try again", key="practice_retry"):
            _reset_answers(skill.id, questions)
            st.rerun()
        return

    with st.form(f"quiz_{skill.id}"):
        for i, q in enumerate(questions, 1):
            st.markdown(f"**{i}. {q.question}**")
            st.radio(
                q.question,
                [o.id for o in q.options],
                format_func=q.option_text,
                index=None,
                key=_answer_key(skill.id, q.id),
                label_visibility="collapsed",
            )
        st.form_submit_button("Submit answers", on_click=_submit_quiz, args=(skill, questions))


def render_practice():
    skills_q = query("/api/skills", lambda: client().list_skills(), spinner="Loading skills...")
    if not show_state(skills_q, "No skills to practice yet."):
        return
    skills: List[Skill] = skills_q.data

    chosen = next((s for s in skills if s.id == st.session_state.get("practice_skill")), None)
    if chosen is None:
        st.caption("Test your knowledge and reinforce your learning with short quizzes.")
        render_skill_cards(skills)
    else:
        render_quiz(chosen)
