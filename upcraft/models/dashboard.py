from typing import List, Optional

from pydantic import Field, field_validator

from .activity import UserActivity
from .base import ApiModel
from .learning import LearningPath


def _round_percent(v):
    # the server divides by targetLevel; a 0 target serialises as null
    if v is None:
        return None
    return round(float(v))


class DashboardUser(ApiModel):
    id: int
    name: str
    role: Optional[str] = None
    greeting: Optional[str] = None


class DashboardStats(ApiModel):
    overall_progress: Optional[int] = 0
    skills_validated: str = "0 / 0"
    learning_time: str = "0.0 hours"
    resources_completed: str = "0 / 0"

    @field_validator("overall_progress", mode="before")
    @classmethod
    def _percent(cls, v):
        return _round_percent(v)


class DashboardSkillGap(ApiModel):
    id: int
    name: str
    category: str = "uncategorized"
    current_level: int = 0
    target_level: int = 0
    percentage: Optional[int] = 0

    @field_validator("percentage", mode="before")
    @classmethod
    def _percent(cls, v):
        return _round_percent(v)


class DashboardGoal(ApiModel):
    id: int
    title: str
    timeline: Optional[str] = None
    readiness: Optional[int] = 0

    @field_validator("readiness", mode="before")
    @classmethod
    def _percent(cls, v):
        return _round_percent(v)


class DashboardData(ApiModel):
    user: DashboardUser
    stats: DashboardStats = Field(default_factory=DashboardStats)
    skill_gaps: List[DashboardSkillGap] = []
    career_goal: Optional[DashboardGoal] = None
    learning_path: Optional[LearningPath] = None
    recent_activities: List[UserActivity] = []
