"""
View tests: drive the real Streamlit widgets with AppTest against the fake backend
and count what reaches the server.
"""
import json

import httpx
import pytest
from streamlit.testing.v1 import AppTest

from upcraft.api_client import ApiClient


def _app(script, backend) -> AppTest:
    at = AppTest.from_function(script, default_timeout=10)
    at.session_state["user_id"] = 1
    at.session_state["api_client"] = ApiClient(
        base_url="http://upcraft.test",
        timeout=5,
        ai_timeout=10,
        transport=httpx.MockTransport(backend.handler),
    )
    return at.run()


def _calls(backend, method, path):
    return [r for r in backend.requests if r.method == method and r.url.path == path]


def _button(at, label):
    return next(b for b in at.button if b.label == label)


class ServerProgress:
    """Completion state for one user, served the way the progress endpoint does (bare list)."""

    def __init__(self, fail=False):
        self.done = set()
        self.fail = fail

    def rows(self, request):
        return [{"userId": 1, "resourceId": rid, "progress": 100, "completed": True} for rid in sorted(self.done)]

    def toggle(self, request):
        if self.fail:
            return 500, {"message": "db down"}
        rid = int(request.url.path.split("/")[-2])
        if request.method == "POST":
            self.done.add(rid)
        else:
            self.done.discard(rid)
        return {}


# ── Scripts ─────────────────────────────────────────────────────────────────

def resources_page():
    from upcraft.components.resources import render_resources
    render_resources()


def learning_page():
    from upcraft.components.learning import render_learning_paths
    render_learning_paths()


def assessment_page():
    from upcraft.components.assessment import render_assessment_form
    render_assessment_form()


def goals_section():
    from upcraft.components.career import render_goals
    render_goals([])


def validations_section():
    from upcraft.components.progress import render_validations
    render_validations()


def coach_panel():
    from upcraft.components.coach import render_coach
    render_coach()


def chat_panel():
    from upcraft.components.chatbot import render_chat
    render_chat()


def practice_page():
    from upcraft.components.practice import render_practice
    render_practice()


def dashboard_page():
    from upcraft.components.dashboard import render_dashboard
    render_dashboard()


# ── Resources & learning: completion checkboxes ────────────────────────────

@pytest.fixture
def catalogue_backend(backend):
    progress = ServerProgress()
    backend.progress = progress
    backend.add("GET", "/api/skills", [])
    backend.add("GET", "/api/learning-resources", [
        {"id": 9, "title": "Networking 101", "resourceType": "course", "isFree": True},
        {"id": 10, "title": "Linux basics", "resourceType": "video", "isFree": True},
    ])
    backend.add("GET", "/api/users/1/progress", progress.rows)
    for rid in (9, 10):
        backend.add("POST", f"/api/users/1/resources/{rid}/complete", progress.toggle)
        backend.add("DELETE", f"/api/users/1/resources/{rid}/complete", progress.toggle)
    return backend


def test_checking_a_resource_sends_one_completion(catalogue_backend):
    at = _app(resources_page, catalogue_backend)
    assert not at.exception
    assert at.checkbox(key="res_9").value is False

    at.checkbox(key="res_9").check().run()
    at.run()

    assert not at.exception
    assert len(_calls(catalogue_backend, "POST", "/api/users/1/resources/9/complete")) == 1
    assert at.checkbox(key="res_9").value is True
    assert catalogue_backend.progress.done == {9}


def test_unchecking_a_resource_sends_one_delete(catalogue_backend):
    catalogue_backend.progress.done.add(10)
    at = _app(resources_page, catalogue_backend)
    assert at.checkbox(key="res_10").value is True

    at.checkbox(key="res_10").uncheck().run()
    at.run()

    assert len(_calls(catalogue_backend, "DELETE", "/api/users/1/resources/10/complete")) == 1
    assert _calls(catalogue_backend, "POST", "/api/users/1/resources/10/complete") == []
    assert catalogue_backend.progress.done == set()


def test_failed_completion_restores_the_checkbox(catalogue_backend):
    catalogue_backend.progress.fail = True
    at = _app(resources_page, catalogue_backend)

    at.checkbox(key="res_9").check().run()
    at.run()

    assert not at.exception
    assert len(_calls(catalogue_backend, "POST", "/api/users/1/resources/9/complete")) == 1
    assert at.checkbox(key="res_9").value is False


def test_learning_path_checkbox_completes_once(catalogue_backend):
    catalogue_backend.add("GET", "/api/users/1/learning-paths", [{
        "id": 1, "userId": 1, "title": "Become a Network Engineer",
        "modules": [{"id": 1, "title": "Foundations", "estimatedHours": 4,
                     "resources": [{"id": 9, "completed": False}, {"id": 10, "completed": False}]}],
    }])
    catalogue_backend.add("GET", "/api/users/1/career-goals", [])
    at = _app(learning_page, catalogue_backend)
    assert not at.exception

    at.checkbox(key="lp1_r9").check().run()
    at.run()

    assert not at.exception
    assert len(_calls(catalogue_backend, "POST", "/api/users/1/resources/9/complete")) == 1
    assert at.checkbox(key="lp1_r9").value is True
    assert at.checkbox(key="lp1_r10").value is False
    assert at.metric[1].value == "1 / 2"


# ── Forms ───────────────────────────────────────────────────────────────────

def test_assessment_form_posts_every_skill_once(backend):
    backend.add("GET", "/api/skills", [
        {"id": 1, "name": "Python", "category": "technical"},
        {"id": 2, "name": "SQL", "category": "technical"},
    ])
    backend.add("GET", "/api/users/1/skills", [])
    backend.add("POST", "/api/user-skills", lambda req: {"id": 100, **json.loads(req.content)})
    at = _app(assessment_page, backend)
    assert at.slider(key="tgt_1").value == 80

    at.slider(key="cur_1").set_value(40)
    at.slider(key="tgt_1").set_value(90)
    _button(at, "Save assessment").click().run()
    at.run()

    assert not at.exception
    bodies = sorted(backend.bodies("POST", "/api/user-skills"), key=lambda b: b["skillId"])
    assert bodies == [
        {"userId": 1, "skillId": 1, "currentLevel": 40, "targetLevel": 90, "notes": ""},
        {"userId": 1, "skillId": 2, "currentLevel": 0, "targetLevel": 80, "notes": ""},
    ]


def test_new_goal_form_creates_one_goal(backend):
    backend.add("GET", "/api/users/1/career-goals", [])
    backend.add("POST", "/api/career-goals", lambda req: {"id": 5, **json.loads(req.content)})
    at = _app(goals_section, backend)

    at.text_input[0].set_value("Become a Data Analyst")
    at.number_input[0].set_value(9)
    _button(at, "Add goal").click().run()
    at.run()

    assert not at.exception
    [body] = backend.bodies("POST", "/api/career-goals")
    assert body["userId"] == 1
    assert body["title"] == "Become a Data Analyst"
    assert body["timelineMonths"] == 9


def test_new_goal_without_title_or_role_is_not_sent(backend):
    backend.add("GET", "/api/users/1/career-goals", [])
    at = _app(goals_section, backend)

    _button(at, "Add goal").click().run()

    assert _calls(backend, "POST", "/api/career-goals") == []
    assert at.warning[0].value == "Give your goal a title or pick a target role."


def test_validation_form_posts_once(backend):
    backend.add("GET", "/api/users/1/validations", [])
    backend.add("GET", "/api/skills", [{"id": 3, "name": "Python", "category": "technical"}])
    backend.add("POST", "/api/skill-validations", lambda req: {"id": 1, **json.loads(req.content)})
    at = _app(validations_section, backend)

    _button(at, "Add validation").click().run()
    at.run()

    assert not at.exception
    assert backend.bodies("POST", "/api/skill-validations") == [
        {"userId": 1, "skillId": 3, "validationType": "assessment", "score": 70},
    ]


def test_coach_question_is_posted_once(backend):
    backend.add("GET", "/api/users/1/ai-coach", {"message": "Keep going", "suggestions": ["Practice SQL daily"]})
    backend.add("POST", "/api/users/1/ai-coach", {"ok": True})
    at = _app(coach_panel, backend)
    assert not at.exception

    at.text_input[0].set_value("How do I learn SQL?")
    _button(at, "Ask").click().run()
    at.run()

    assert not at.exception
    assert backend.bodies("POST", "/api/users/1/ai-coach") == [{"query": "How do I learn SQL?"}]


def test_chat_message_is_sent_once_and_rendered(backend):
    backend.add("GET", "/api/users/1/skills", [])
    backend.add("GET", "/api/users/1/career-goals", [])
    backend.add("POST", "/api/chat/skill-advisor", {"response": "Start with SQL."})
    at = _app(chat_panel, backend)
    assert len(at.chat_message) == 1

    at.chat_input[0].set_value("What should I learn first?").run()
    at.run()

    assert not at.exception
    assert len(_calls(backend, "POST", "/api/chat/skill-advisor")) == 1
    assert [m.markdown[0].value for m in at.chat_message][-2:] == ["What should I learn first?", "Start with SQL."]


# ── Practice & dashboard ────────────────────────────────────────────────────

def test_practice_quiz_from_builtin_bank(backend):
    backend.add("GET", "/api/skills", [{"id": 1, "name": "JavaScript", "category": "technical"}])
    at = _app(practice_page, backend)

    _button(at, "Practice").click().run()
    assert at.radio(key="pq_1_1").value is None

    at.radio(key="pq_1_1").set_value("c")
    at.radio(key="pq_1_2").set_value("c")
    at.radio(key="pq_1_3").set_value("a")
    _button(at, "Submit answers").click().run()

    assert not at.exception
    assert at.metric[0].value == "2 / 3"
    assert at.markdown.values.count("### You're making progress") == 1

    _button(at, "Try again").click().run()
    assert at.radio(key="pq_1_1").value is None


def test_dashboard_tolerates_null_percentages(backend):
    backend.add("GET", "/api/users/1/dashboard", {
        "user": {"id": 1, "name": "Sam Lee"},
        "stats": {"overallProgress": None, "skillsValidated": "0 / 1", "learningTime": "0.0 hours",
                  "resourcesCompleted": "0 / 0"},
        "skillGaps": [{"id": 1, "name": "Python", "category": "technical", "currentLevel": 40,
                       "targetLevel": 0, "percentage": None}],
        "careerGoal": {"id": 1, "title": "Security Analyst", "readiness": None},
    })
    at = _app(dashboard_page, backend)

    assert not at.exception
    assert at.metric[0].value == "—"
