import pytest

from upcraft.components.skill_gap import (
    GapRow,
    gap_severity,
    group_by_category,
    level_percentage,
    readiness,
    skill_gap,
    sort_by_gap,
    summary,
    to_rows,
)
from upcraft.models import UserSkill
from upcraft.models.dashboard import DashboardSkillGap


@pytest.mark.parametrize("current,target,gap", [
    (40, 80, 40),
    (80, 80, 0),
    (90, 60, 0),
    (0, 100, 100),
])
def test_skill_gap_is_floored_at_zero(current, target, gap):
    assert skill_gap(current, target) == gap


@pytest.mark.parametrize("current,target,pct", [
    (40, 80, 50),
    (1, 3, 33),
    (0, 0, 100),
    (50, 0, 100),
    (90, 60, 100),
])
def test_level_percentage(current, target, pct):
    assert level_percentage(current, target) == pct


def test_gap_severity_bands():
    assert [gap_severity(g) for g in (0, 14, 15, 34, 35)] == ["none", "small", "moderate", "moderate", "large"]


def test_to_rows_accepts_user_skills_and_dashboard_rows():
    rows = to_rows([
        UserSkill(skill_id=1, current_level=30, target_level=70, skill_name="SQL", category="technical"),
        DashboardSkillGap(id=2, name="Leadership", category="soft", current_level=50, target_level=60),
    ])
    assert [(r.name, r.category, r.gap) for r in rows] == [("SQL", "technical", 40), ("Leadership", "soft", 10)]


def test_sort_and_group():
    rows = [
        GapRow("b", "tech", 50, 60),
        GapRow("a", "tech", 50, 60),
        GapRow("c", "soft", 0, 90),
    ]
    assert [r.name for r in sort_by_gap(rows)] == ["c", "a", "b"]
    assert list(group_by_category(rows)) == ["soft", "tech"]


def test_readiness_and_summary():
    rows = [GapRow("SQL", "tech", 40, 80), GapRow("Git", "tech", 80, 80)]
    assert readiness(rows) == 75
    assert readiness([]) == 0

    info = summary(rows)
    assert info["open_gaps"] == 1
    assert info["total_gap"] == 40
    assert info["largest"] == "SQL"


def test_summary_without_gaps():
    assert summary([])["largest"] is None
