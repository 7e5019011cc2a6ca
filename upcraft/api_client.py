"""
REST client for the Upcraft backend
====================================
Every view talks to the server through this module. The backend owns all
persistence and every AI call; this side only shapes requests and parses
responses into the DTOs in ``upcraft.models``.

Endpoint groups:
  skills        GET  /api/skills, /api/skills/category/:c, /api/skills/role/:roleId
  user skills   GET  /api/users/:id/skills          POST /api/user-skills
  goals         GET  /api/users/:id/career-goals    POST /api/career-goals
                PATCH /api/career-goals/:id
  resources     GET  /api/learning-resources[/type/:t | /skill/:id]
  paths         GET  /api/users/:id/learning-paths, /api/learning-paths/:id
  progress      GET  /api/users/:id/progress        POST /api/user-progress
                POST|DELETE /api/users/:id/resources/:rid/complete
  activity      GET  /api/users/:id/activities?limit=N
  validations   GET  /api/users/:id/validations     POST /api/skill-validations
  practice      GET  /api/assessment/skill/:id
  dashboard     GET  /api/users/:id/dashboard
  roles         GET  /api/interview/roles[/:id], /api/career/paths/role/:roleId
  AI (slow)     POST /api/ai/generate-learning-path, /api/ai/skill-gap-analysis,
                     /api/ai/skill-recommendations, /api/ai/skill-learning-advice,
                     /api/chat/skill-advisor
                GET|POST /api/users/:id/ai-coach
"""

from typing import Any, List, Optional, Type, TypeVar

import httpx
import pydantic

from .config import settings
from .exceptions import ApiUnavailableError, ResponseFormatError, error_for_status
from .logging_config import get_logger
from .models import (
    CareerGoal,
    CareerPathInfo,
    CoachResponse,
    CompletionInput,
    DashboardData,
    LearningPath,
    LearningResource,
    ProgressStats,
    Role,
    Skill,
    SkillAssessment,
    SkillGapAnalysis,
    SkillValidation,
    UserActivity,
    UserProgress,
    UserSkill,
    UserSkillInput,
)

log = get_logger(__name__)

M = TypeVar("M", bound=pydantic.BaseModel)


class ApiClient:
    def __init__(
        self,
        base_url: str = None,
        timeout: float = None,
        ai_timeout: float = None,
        transport: httpx.BaseTransport = None,
    ):
        self.timeout = settings.UPCRAFT_REQUEST_TIMEOUT if timeout is None else timeout
        self.ai_timeout = settings.UPCRAFT_AI_TIMEOUT if ai_timeout is None else ai_timeout
        self._http = httpx.Client(
            base_url=(base_url or settings.UPCRAFT_API_BASE_URL).rstrip("/"),
            timeout=self.timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def close(self):
        self._http.close()

    # ── Transport ──────────────────────────────────────────────────────────

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict = None,
        timeout: float = None,
    ) -> Any:
        """Send one request; return the decoded JSON body (None when empty) or raise ApiError."""
        try:
            response = self._http.request(
                method,
                path,
                json=json,
                params=params,
                timeout=self.timeout if timeout is None else timeout,
            )
        except httpx.TransportError as e:
            log.warning("%s %s failed: %s", method, path, e)
            raise ApiUnavailableError(f"Could not reach the Upcraft server ({e.__class__.__name__})", path=path) from e

        log.debug("%s %s -> %s", method, path, response.status_code)

        if response.is_error:
            message = _error_message(response)
            log.warning("%s %s -> %s %s", method, path, response.status_code, message)
            raise error_for_status(response.status_code, message, path=path)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            log.warning("%s %s -> %s with a non-JSON body", method, path, response.status_code)
            raise ResponseFormatError("The server sent a response that is not JSON", response.status_code, path) from e

    def get(self, path: str, **kwargs) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("POST", path, json=json if json is not None else {}, **kwargs)

    def patch(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("PATCH", path, json=json if json is not None else {}, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self.request("DELETE", path, **kwargs)

    # ── Skills ─────────────────────────────────────────────────────────────

    def list_skills(self, category: str = None) -> List[Skill]:
        path = f"/api/skills/category/{category}" if category else "/api/skills"
        return _parse_list(Skill, self.get(path), path)

    def list_role_skills(self, role_id: int) -> List[Skill]:
        path = f"/api/skills/role/{role_id}"
        return _parse_list(Skill, self.get(path), path)

    def list_user_skills(self, user_id: int) -> List[UserSkill]:
        path = f"/api/users/{user_id}/skills"
        return _parse_list(UserSkill, self.get(path), path)

    def save_user_skill(self, data: UserSkillInput) -> UserSkill:
        return _parse(UserSkill, self.post("/api/user-skills", data.to_payload()), "/api/user-skills")

    # ── Career goals ───────────────────────────────────────────────────────

    def list_career_goals(self, user_id: int) -> List[CareerGoal]:
        path = f"/api/users/{user_id}/career-goals"
        return _parse_list(CareerGoal, self.get(path), path)

    def create_career_goal(self, goal: CareerGoal) -> CareerGoal:
        return _parse(CareerGoal, self.post("/api/career-goals", goal.to_payload()), "/api/career-goals")

    def update_career_goal(self, goal_id: int, changes: dict) -> CareerGoal:
        path = f"/api/career-goals/{goal_id}"
        return _parse(CareerGoal, self.patch(path, changes), path)

    # ── Learning resources & paths ─────────────────────────────────────────

    def list_resources(self, resource_type: str = None, skill_id: int = None) -> List[LearningResource]:
        if resource_type:
            path = f"/api/learning-resources/type/{resource_type}"
        elif skill_id is not None:
            path = f"/api/learning-resources/skill/{skill_id}"
        else:
            path = "/api/learning-resources"
        return _parse_list(LearningResource, self.get(path), path)

    def list_learning_paths(self, user_id: int) -> List[LearningPath]:
        path = f"/api/users/{user_id}/learning-paths"
        return _parse_list(LearningPath, self.get(path), path)

    def get_learning_path(self, path_id: int) -> LearningPath:
        path = f"/api/learning-paths/{path_id}"
        return _parse(LearningPath, self.get(path), path)

    def generate_learning_path(self, career_goal_id: int) -> LearningPath:
        path = "/api/ai/generate-learning-path"
        data = self.post(path, {"careerGoalId": career_goal_id}, timeout=self.ai_timeout)
        return _parse(LearningPath, data, path)

    # ── Progress ───────────────────────────────────────────────────────────

    def get_progress(self, user_id: int) -> ProgressStats:
        """Progress summary; servers that return the raw progress rows are accepted too."""
        path = f"/api/users/{user_id}/progress"
        data = self.get(path)
        return _parse(ProgressStats, {} if data is None else data, path)

    def record_progress(self, progress: UserProgress) -> UserProgress:
        return _parse(UserProgress, self.post("/api/user-progress", progress.to_payload()), "/api/user-progress")

    def complete_resource(self, user_id: int, resource_id: int, details: CompletionInput = None) -> Any:
        body = details.to_payload() if details else {}
        return self.post(f"/api/users/{user_id}/resources/{resource_id}/complete", body)

    def uncomplete_resource(self, user_id: int, resource_id: int) -> Any:
        return self.delete(f"/api/users/{user_id}/resources/{resource_id}/complete")

    # ── Activity & validations ─────────────────────────────────────────────

    def list_activities(self, user_id: int, limit: int = None) -> List[UserActivity]:
        path = f"/api/users/{user_id}/activities"
        params = {"limit": limit} if limit else None
        return _parse_list(UserActivity, self.get(path, params=params), path)

    def list_validations(self, user_id: int) -> List[SkillValidation]:
        path = f"/api/users/{user_id}/validations"
        return _parse_list(SkillValidation, self.get(path), path)

    def create_validation(self, validation: SkillValidation) -> SkillValidation:
        path = "/api/skill-validations"
        return _parse(SkillValidation, self.post(path, validation.to_payload()), path)

    # ── Practice ───────────────────────────────────────────────────────────

    def get_skill_assessment(self, skill_id: int) -> Optional[SkillAssessment]:
        """Multiple-choice questions for one skill; None when the server has none."""
        path = f"/api/assessment/skill/{skill_id}"
        data = self.get(path)
        return _parse(SkillAssessment, data, path) if data else None

    # ── Dashboard ──────────────────────────────────────────────────────────

    def get_dashboard(self, user_id: int) -> Optional[DashboardData]:
        path = f"/api/users/{user_id}/dashboard"
        data = self.get(path)
        return _parse(DashboardData, data, path) if data else None

    # ── Roles & career paths ───────────────────────────────────────────────

    def list_roles(self) -> List[Role]:
        return _parse_list(Role, self.get("/api/interview/roles"), "/api/interview/roles")

    def get_role(self, role_id: int) -> Role:
        path = f"/api/interview/roles/{role_id}"
        return _parse(Role, self.get(path), path)

    def get_career_path(self, role_id: int) -> Optional[CareerPathInfo]:
        path = f"/api/career/paths/role/{role_id}"
        data = self.get(path)
        return _parse(CareerPathInfo, data, path) if data else None

    # ── AI ─────────────────────────────────────────────────────────────────

    def skill_gap_analysis(self, career_goal_id: int) -> SkillGapAnalysis:
        path = "/api/ai/skill-gap-analysis"
        data = self.post(path, {"careerGoalId": career_goal_id}, timeout=self.ai_timeout)
        return _parse(SkillGapAnalysis, data, path)

    def skill_recommendations(self, target_role: str, current_skills: List[UserSkill]) -> str:
        data = self.post(
            "/api/ai/skill-recommendations",
            {"targetRole": target_role, "currentSkills": [s.to_payload() for s in current_skills]},
            timeout=self.ai_timeout,
        )
        return (data or {}).get("recommendations", "")

    def skill_learning_advice(
        self,
        skill_name: str,
        current_level: int = None,
        target_level: int = None,
        learning_style: str = None,
        time_available: str = None,
    ) -> str:
        body = {
            "skillName": skill_name,
            "currentLevel": current_level,
            "targetLevel": target_level,
            "learningStyle": learning_style,
            "timeAvailable": time_available,
        }
        data = self.post(
            "/api/ai/skill-learning-advice",
            {k: v for k, v in body.items() if v is not None},
            timeout=self.ai_timeout,
        )
        return (data or {}).get("advice", "")

    def chat_skill_advisor(
        self,
        message: str,
        user_id: int = None,
        current_skills: List[UserSkill] = None,
        target_role: str = None,
        career_goals: List[CareerGoal] = None,
    ) -> str:
        body = {
            "message": message,
            "userId": user_id,
            "currentSkills": [s.to_payload() for s in current_skills or []],
            "targetRole": target_role,
            "careerGoals": [g.to_payload() for g in career_goals or []],
        }
        data = self.post("/api/chat/skill-advisor", body, timeout=self.ai_timeout)
        return (data or {}).get("response") or ""

    def get_coach(self, user_id: int) -> Optional[CoachResponse]:
        path = f"/api/users/{user_id}/ai-coach"
        data = self.get(path, timeout=self.ai_timeout)
        return _parse(CoachResponse, data, path) if data else None

    def ask_coach(self, user_id: int, query: str) -> Any:
        return self.post(f"/api/users/{user_id}/ai-coach", {"query": query}, timeout=self.ai_timeout)


def _parse(model: Type[M], data: Any, path: str) -> M:
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        log.warning("%s: unexpected %s payload: %s", path, model.__name__, e.errors()[:3])
        raise ResponseFormatError(f"Unexpected {model.__name__} data from the server", path=path) from e


def _parse_list(model: Type[M], data: Any, path: str) -> List[M]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise ResponseFormatError(f"Expected a list of {model.__name__} from the server", path=path)
    return [_parse(model, item, path) for item in data]


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    if isinstance(body, dict):
        return body.get("message") or body.get("error") or response.reason_phrase
    return response.reason_phrase


_client: Optional[ApiClient] = None


def get_client() -> ApiClient:
    global _client
    if _client is None:
        _client = ApiClient()
    return _client
