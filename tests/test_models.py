import pytest
from pydantic import ValidationError

from upcraft.models import (
    CoachResponse,
    DashboardData,
    ProgressStats,
    SkillGapAnalysis,
    UserActivity,
    UserSkillInput,
)


def test_user_skill_input_bounds():
    with pytest.raises(ValidationError):
        UserSkillInput(user_id=1, skill_id=1, current_level=-5, target_level=80)
    with pytest.raises(ValidationError):
        UserSkillInput(user_id=1, skill_id=1, current_level=10, target_level=101)


def test_payload_drops_none_and_uses_camel_case():
    payload = UserSkillInput(user_id=1, skill_id=2, current_level=0, target_level=80).to_payload()
    assert payload == {"userId": 1, "skillId": 2, "currentLevel": 0, "targetLevel": 80}


def test_unknown_server_fields_are_kept():
    activity = UserActivity.model_validate({"activityType": "badge_earned", "description": "x", "badge": "gold"})
    assert activity.label == "Badge earned"
    assert activity.model_extra == {"badge": "gold"}


def test_dashboard_defaults_when_sections_missing():
    data = DashboardData.model_validate({"user": {"id": 1, "name": "Sam"}})
    assert data.stats.skills_validated == "0 / 0"
    assert data.stats.learning_time == "0.0 hours"
    assert data.skill_gaps == []
    assert data.career_goal is None


def test_progress_stats_shape():
    stats = ProgressStats.model_validate({
        "overallPercent": 40,
        "skills": [{"skillId": 1, "skillName": "Python", "completed": 2, "total": 5, "percent": 40}],
    })
    assert stats.skills[0].skill_name == "Python"
    assert stats.legacy_progress == []
    assert stats.completed_ids == set()


def test_coach_response_next_steps():
    coach = CoachResponse.model_validate({
        "message": "Keep going",
        "nextSteps": [{"action": "Finish module 2", "rationale": "It unlocks labs", "difficulty": 2}],
        "challengeQuestion": "What is a SIEM?",
    })
    assert coach.next_steps[0].difficulty == 2
    assert coach.challenge_question == "What is a SIEM?"


def test_gap_analysis_defaults():
    analysis = SkillGapAnalysis.model_validate({})
    assert analysis.overall_readiness == 0
    assert analysis.skill_gaps == [] and analysis.recommendations == []


def test_dashboard_percentages_are_rounded_or_null():
    data = DashboardData.model_validate({
        "user": {"id": 1, "name": "Sam"},
        "stats": {"overallProgress": 66.6},
        "skillGaps": [{"id": 1, "name": "SQL", "percentage": None}],
        "careerGoal": {"id": 2, "title": "Analyst", "readiness": 12.4},
    })
    assert data.stats.overall_progress == 67
    assert data.skill_gaps[0].percentage is None
    assert data.career_goal.readiness == 12
