from upcraft.components import charts
from upcraft.components.skill_gap import GapRow
from upcraft.models.learning import SkillProgress


ROWS = [
    GapRow("Python", "technical", 40, 80),
    GapRow("SQL", "technical", 70, 70),
    GapRow("Leadership", "soft", 20, 60),
]


def test_radar_closes_polygon():
    fig = charts.radar_chart(ROWS)

    names = [t.name for t in fig.data]
    assert names == ["Target", "Current"]
    current = fig.data[1]
    assert list(current.r) == [40, 70, 20, 40]
    assert list(current.theta) == ["Python", "SQL", "Leadership", "Python"]
    assert tuple(fig.layout.polar.radialaxis.range) == (0, 100)


def test_radar_redraws_from_new_inputs():
    before = charts.radar_chart(ROWS)
    after = charts.radar_chart([GapRow(r.name, r.category, r.current + 10, r.target) for r in ROWS])
    assert list(after.data[1].r) != list(before.data[1].r)


def test_radar_with_two_skills_falls_back_to_bars():
    fig = charts.radar_chart(ROWS[:2])
    assert all(t.type == "bar" for t in fig.data)


def test_gap_bars_stack_current_and_gap():
    fig = charts.gap_bar_chart(ROWS)
    current, gap = fig.data
    # smallest gap first so the largest ends up on top
    assert list(current.y) == ["SQL", "Python", "Leadership"]
    assert list(gap.x) == [0, 40, 40]
    assert fig.layout.barmode == "stack"


def test_empty_inputs_give_placeholder_figures():
    assert len(charts.gap_bar_chart([]).data) == 0
    assert len(charts.skill_progress_bars([]).data) == 0
    assert charts.gap_bar_chart([]).layout.annotations[0].text == "No skills to chart yet"


def test_gauge_is_clamped():
    assert charts.progress_gauge(140).data[0].value == 100
    assert charts.progress_gauge(-5).data[0].value == 0


def test_skill_progress_bars_labels():
    fig = charts.skill_progress_bars([SkillProgress(skill_id=1, skill_name="Python", completed=2, total=4, percent=50)])
    assert list(fig.data[0].text) == ["2/4"]
    assert list(fig.data[0].x) == [50]
