from upcraft.components.resources import filter_resources, resources_key
from upcraft.models import LearningResource


CATALOGUE = [
    LearningResource(id=1, title="SQL Basics", provider="Coursera", difficulty="beginner", rating=4.2, is_free=True),
    LearningResource(id=2, title="Advanced SQL", provider="Udemy", difficulty="advanced", rating=4.8, is_free=False),
    LearningResource(id=3, title="Python for Analysts", description="Pandas and SQL together",
                     difficulty="Intermediate", rating=None, is_free=True),
    LearningResource(id=4, title="apache spark", provider="Databricks", difficulty="advanced", rating=4.2),
]


def _ids(resources):
    return [r.id for r in resources]


def test_no_filters_sorts_by_rating_then_title():
    assert _ids(filter_resources(CATALOGUE)) == [2, 4, 1, 3]


def test_free_only():
    assert _ids(filter_resources(CATALOGUE, free_only=True)) == [4, 1, 3]


def test_difficulty_is_case_insensitive():
    assert _ids(filter_resources(CATALOGUE, difficulty="intermediate")) == [3]
    assert _ids(filter_resources(CATALOGUE, difficulty="ADVANCED")) == [2, 4]


def test_search_matches_title_description_and_provider():
    assert _ids(filter_resources(CATALOGUE, search="  sql ")) == [2, 1, 3]
    assert _ids(filter_resources(CATALOGUE, search="udemy")) == [2]
    assert filter_resources(CATALOGUE, search="rust") == []


def test_filters_combine():
    assert _ids(filter_resources(CATALOGUE, free_only=True, difficulty="beginner", search="sql")) == [1]


def test_resources_key_prefers_type_over_skill():
    assert resources_key() == "/api/learning-resources"
    assert resources_key("video", 3) == "/api/learning-resources/type/video"
    assert resources_key(skill_id=3) == "/api/learning-resources/skill/3"
