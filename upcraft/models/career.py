from datetime import datetime
from typing import Dict, List, Optional

from pydantic import field_validator

from .base import ApiModel


class CareerGoal(ApiModel):
    id: Optional[int] = None
    user_id: int
    title: str
    description: Optional[str] = None
    timeline_months: int = 6
    target_date: Optional[datetime] = None
    current_role_id: Optional[int] = None
    target_role_id: Optional[int] = None
    created_at: Optional[datetime] = None


class Role(ApiModel):
    """An interview role; doubles as the target role of a career goal."""

    id: int
    title: str
    description: Optional[str] = None
    required_skills: List[str] = []
    required_skill_levels: Dict[str, float] = {}
    industry: Optional[str] = None
    level: Optional[str] = None          # junior, mid, senior, ...
    role_type: Optional[str] = None      # technical, business, creative, ...
    average_salary: Optional[float] = None
    growth_rate: Optional[float] = None
    demand_score: Optional[int] = None   # 1-10

    @field_validator("required_skills", "required_skill_levels", mode="before")
    @classmethod
    def _none_to_empty(cls, v, info):
        if v is None:
            return {} if info.field_name == "required_skill_levels" else []
        return v


class CareerPathInfo(ApiModel):
    id: Optional[int] = None
    role_id: int
    previous_role: Optional[str] = None
    next_role: Optional[str] = None
    years_to_progress: Optional[int] = None
    skills_to_acquire: List[str] = []
    typical_transition_path: Optional[str] = None

    @field_validator("skills_to_acquire", mode="before")
    @classmethod
    def _none_to_list(cls, v):
        return v or []

    @property
    def steps(self) -> List[str]:
        """Transition path string split on its arrows into role names."""
        if not self.typical_transition_path:
            return []
        return [s.strip() for s in self.typical_transition_path.replace("->", "→").split("→") if s.strip()]
