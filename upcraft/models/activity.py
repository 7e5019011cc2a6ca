from datetime import datetime
from typing import Any, Dict, Optional

from .base import ApiModel


ACTIVITY_TYPES = {
    "completed_resource": "Completed resource",
    "started_resource": "Started resource",
    "updated_skill": "Updated skill",
    "validated_skill": "Validated skill",
    "set_career_goal": "Set career goal",
}


class UserActivity(ApiModel):
    id: Optional[int] = None
    user_id: Optional[int] = None
    activity_type: str
    description: str
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None

    @property
    def label(self) -> str:
        return ACTIVITY_TYPES.get(self.activity_type, self.activity_type.replace("_", " ").capitalize())
