from .activity import UserActivity
from .ai import ChatMessage, CoachResponse, SkillGapAnalysis
from .career import CareerGoal, CareerPathInfo, Role
from .dashboard import DashboardData
from .learning import (
    CompletionInput,
    LearningPath,
    LearningResource,
    Module,
    ProgressStats,
    ResourceRef,
    UserProgress,
)
from .practice import QuizOption, QuizQuestion, SkillAssessment
from .skill import Skill, SkillValidation, UserSkill, UserSkillInput

__all__ = [
    "Skill", "UserSkill", "UserSkillInput", "SkillValidation",
    "CareerGoal", "Role", "CareerPathInfo",
    "LearningResource", "LearningPath", "Module", "ResourceRef",
    "ProgressStats", "UserProgress", "CompletionInput",
    "UserActivity", "DashboardData",
    "SkillGapAnalysis", "CoachResponse", "ChatMessage",
    "QuizOption", "QuizQuestion", "SkillAssessment",
]
