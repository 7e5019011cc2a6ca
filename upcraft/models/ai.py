from typing import List, Optional

from .base import ApiModel


class GapItem(ApiModel):
    skill_id: Optional[int] = None
    skill_name: str
    current_level: int = 0
    required_level: int = 0
    priority: str = "medium"


class SkillGapAnalysis(ApiModel):
    career_goal: Optional[str] = None
    overall_readiness: int = 0
    skill_gaps: List[GapItem] = []
    recommendations: List[str] = []


class NextStep(ApiModel):
    action: str
    rationale: Optional[str] = None
    difficulty: Optional[int] = None


class CoachResponse(ApiModel):
    message: str = ""
    advice: Optional[str] = None
    encouragement: Optional[str] = None
    next_steps: List[NextStep] = []
    challenge_question: Optional[str] = None
    suggestions: List[str] = []
    focus_areas: List[str] = []


class ChatMessage(ApiModel):
    role: str          # "user" | "assistant"
    content: str
