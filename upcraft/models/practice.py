from typing import List, Optional

from pydantic import field_validator

from .base import ApiModel


class QuizOption(ApiModel):
    id: str
    text: str


class QuizQuestion(ApiModel):
    id: int
    question: str
    options: List[QuizOption] = []
    correct_answer: str
    explanation: Optional[str] = None
    skill_id: Optional[int] = None
    difficulty: str = "beginner"

    @field_validator("correct_answer", mode="before")
    @classmethod
    def _answer_id(cls, v):
        return str(v)

    def option_text(self, option_id: str) -> str:
        return next((o.text for o in self.options if o.id == option_id), "")


class SkillAssessment(ApiModel):
    """GET /api/assessment/skill/:id."""

    skill_id: Optional[int] = None
    skill_name: str = ""
    questions: List[QuizQuestion] = []
