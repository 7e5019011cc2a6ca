from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import ApiModel


class Skill(ApiModel):
    id: int
    name: str
    category: str = "uncategorized"
    description: Optional[str] = None


class UserSkill(ApiModel):
    id: Optional[int] = None
    user_id: Optional[int] = None
    skill_id: int
    current_level: int = 0        # 0-100
    target_level: int = 0         # 0-100
    notes: Optional[str] = None
    last_assessed: Optional[datetime] = None
    # Joined from the skills table by GET /api/users/:id/skills
    skill_name: str = "Unknown Skill"
    category: str = "uncategorized"


class UserSkillInput(ApiModel):
    """Body of POST /api/user-skills (the server upserts on userId + skillId)."""

    user_id: int
    skill_id: int
    current_level: int = Field(ge=0, le=100)
    target_level: int = Field(ge=0, le=100)
    notes: Optional[str] = None


class SkillValidation(ApiModel):
    id: Optional[int] = None
    user_id: int
    skill_id: int
    validation_type: str          # assessment, project, certification, peer_review, self_assessment
    score: Optional[int] = None
    validated_at: Optional[datetime] = None
    evidence: Optional[str] = None
    validated_by: Optional[int] = None


VALIDATION_TYPES = ["assessment", "project", "certification", "peer_review", "self_assessment"]
