from datetime import datetime
from typing import List, Optional, Set

from pydantic import field_validator, model_validator

from .base import ApiModel


RESOURCE_TYPES = ["course", "workshop", "assessment", "video", "article", "book", "project"]


class LearningResource(ApiModel):
    id: int
    title: str
    description: Optional[str] = None
    resource_type: str = "course"
    url: Optional[str] = None
    duration: Optional[int] = None       # minutes
    provider: Optional[str] = None
    skill_ids: List[str] = []
    difficulty: Optional[str] = None     # beginner, intermediate, advanced
    rating: Optional[float] = None       # 0.0 - 5.0
    is_free: bool = True
    prerequisites: List[str] = []

    @field_validator("skill_ids", "prerequisites", mode="before")
    @classmethod
    def _stringify(cls, v):
        # skillIds is a text[] column; older rows carry ints
        return [str(x) for x in (v or [])]

    def covers_skill(self, skill_id: int) -> bool:
        return str(skill_id) in self.skill_ids


class ResourceRef(ApiModel):
    id: int
    completed: bool = False


class Module(ApiModel):
    id: int
    title: str
    description: Optional[str] = None
    estimated_hours: float = 0
    resources: List[ResourceRef] = []

    @field_validator("resources", mode="before")
    @classmethod
    def _none_to_list(cls, v):
        return v or []


class LearningPath(ApiModel):
    id: Optional[int] = None
    user_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    modules: List[Module] = []


class SkillProgress(ApiModel):
    skill_id: int
    skill_name: str
    completed: int = 0
    total: int = 0
    percent: int = 0


class UserProgress(ApiModel):
    id: Optional[int] = None
    user_id: int
    resource_id: Optional[int] = None
    progress: int = 0                    # 0-100
    completed: bool = False
    score: Optional[int] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class ProgressStats(ApiModel):
    """
    GET /api/users/:id/progress.

    Older servers answer with the bare list of progress rows; that list lands
    in ``legacy_progress`` and the summary fields keep their defaults.
    """

    overall_percent: int = 0
    skills: List[SkillProgress] = []
    legacy_progress: List[UserProgress] = []

    @model_validator(mode="before")
    @classmethod
    def _wrap_rows(cls, data):
        if isinstance(data, list):
            return {"legacyProgress": data}
        return data

    @property
    def completed_ids(self) -> Set[int]:
        return {p.resource_id for p in self.legacy_progress if p.resource_id is not None and p.completed}

    def is_completed(self, resource_id: int) -> bool:
        return resource_id in self.completed_ids


class CompletionInput(ApiModel):
    """Optional body for POST /api/users/:id/resources/:rid/complete."""

    rating: Optional[int] = None         # 1-5
    feedback: Optional[str] = None
    time_spent_minutes: Optional[int] = None
