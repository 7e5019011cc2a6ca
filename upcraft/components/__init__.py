from .assessment import render_assessment_form
from .career import render_career
from .chatbot import render_chat
from .coach import render_coach
from .dashboard import render_dashboard
from .learning import render_learning_paths
from .practice import render_practice
from .progress import render_progress
from .resources import render_resources
from .skill_gap import render_ai_gap_analysis, render_skill_gap_section

__all__ = [
    "render_assessment_form",
    "render_career",
    "render_chat",
    "render_coach",
    "render_dashboard",
    "render_learning_paths",
    "render_practice",
    "render_progress",
    "render_resources",
    "render_ai_gap_analysis",
    "render_skill_gap_section",
]
