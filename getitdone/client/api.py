"""HTTP client for the get IT done API."""
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import logging

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:4000"


class ApiError(Exception):
    """A request failed; ``message`` comes from the server when it sent one."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def read_json(response: httpx.Response) -> Any:
    """Decode a response body; empty or non-JSON bodies read as None."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def error_message(payload: Any, fallback: str) -> str:
    """Message from ``{"error": {"message"}}`` or ``{"message"}``, else ``fallback``."""
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if payload.get("message"):
            return str(payload["message"])
    return fallback


def _path(resource: str, item_id: Optional[str] = None) -> str:
    if item_id is None:
        return f"/api/{resource}"
    return f"/api/{resource}/{quote(str(item_id), safe='')}"


class GetItDoneClient:
    """
    Thin synchronous client; one method per endpoint.

    Every failure (transport or non-2xx status) is raised as ApiError.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "GetItDoneClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, fallback: str, **kwargs) -> Any:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiError(f"{fallback}: {e}") from e

        payload = read_json(response)
        if response.is_error:
            raise ApiError(error_message(payload, fallback), response.status_code)
        return payload

    def _list(self, resource: str, key: str, fallback: str, params: Optional[Dict[str, Any]] = None) -> List[dict]:
        payload = self._request("GET", _path(resource), fallback, params=params)
        return (payload or {}).get(key) or []

    def _get(self, resource: str, key: str, item_id: str, fallback: str) -> Optional[dict]:
        payload = self._request("GET", _path(resource, item_id), fallback)
        return (payload or {}).get(key)

    def _create(self, resource: str, key: str, body: Dict[str, Any], fallback: str) -> Optional[dict]:
        payload = self._request("POST", _path(resource), fallback, json=body)
        return (payload or {}).get(key)

    def _update(self, resource: str, key: str, item_id: str, patch: Dict[str, Any], fallback: str) -> Optional[dict]:
        payload = self._request("PATCH", _path(resource, item_id), fallback, json=patch)
        return (payload or {}).get(key)

    def _delete(self, resource: str, item_id: str, fallback: str) -> None:
        self._request("DELETE", _path(resource, item_id), fallback)

    # Health and stats

    def health(self) -> Optional[dict]:
        return self._request("GET", _path("health"), "Failed to reach server")

    def get_stats(self) -> Optional[dict]:
        payload = self._request("GET", _path("stats"), "Failed to load statistics")
        return (payload or {}).get("stats")

    # Tasks

    def list_tasks(
        self,
        view: Optional[str] = None,
        project_id: Optional[str] = None,
        category_id: Optional[str] = None,
        goal_id: Optional[str] = None,
        status: Optional[str] = None,
        priority: Optional[int] = None,
        tag: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> List[dict]:
        """List tasks; unset criteria are left out of the query string."""
        params = {
            "view": view,
            "projectId": project_id,
            "categoryId": category_id,
            "goalId": goal_id,
            "status": status,
            "priority": priority,
            "tag": tag,
            "search": search,
            "sortBy": sort_by,
            "sortOrder": sort_order,
        }
        params = {k: v for k, v in params.items() if v not in (None, "")}
        return self._list("tasks", "tasks", "Failed to load tasks", params=params)

    def get_task(self, task_id: str) -> Optional[dict]:
        return self._get("tasks", "task", task_id, "Failed to load task")

    def create_task(self, task: Dict[str, Any]) -> Optional[dict]:
        return self._create("tasks", "task", task, "Failed to create task")

    def update_task(self, task_id: str, patch: Dict[str, Any]) -> Optional[dict]:
        return self._update("tasks", "task", task_id, patch, "Failed to update task")

    def delete_task(self, task_id: str) -> None:
        self._delete("tasks", task_id, "Failed to delete task")

    # Projects

    def list_projects(self) -> List[dict]:
        return self._list("projects", "projects", "Failed to load projects")

    def create_project(self, project: Dict[str, Any]) -> Optional[dict]:
        return self._create("projects", "project", project, "Failed to create project")

    def update_project(self, project_id: str, patch: Dict[str, Any]) -> Optional[dict]:
        return self._update("projects", "project", project_id, patch, "Failed to update project")

    def delete_project(self, project_id: str) -> None:
        self._delete("projects", project_id, "Failed to delete project")

    # Categories

    def list_categories(self) -> List[dict]:
        return self._list("categories", "categories", "Failed to load categories")

    def create_category(self, category: Dict[str, Any]) -> Optional[dict]:
        return self._create("categories", "category", category, "Failed to create category")

    def update_category(self, category_id: str, patch: Dict[str, Any]) -> Optional[dict]:
        return self._update("categories", "category", category_id, patch, "Failed to update category")

    def delete_category(self, category_id: str) -> None:
        self._delete("categories", category_id, "Failed to delete category")

    # Goals

    def list_goals(self) -> List[dict]:
        return self._list("goals", "goals", "Failed to load goals")

    def create_goal(self, goal: Dict[str, Any]) -> Optional[dict]:
        return self._create("goals", "goal", goal, "Failed to create goal")

    def update_goal(self, goal_id: str, patch: Dict[str, Any]) -> Optional[dict]:
        return self._update("goals", "goal", goal_id, patch, "Failed to update goal")

    def delete_goal(self, goal_id: str) -> None:
        self._delete("goals", goal_id, "Failed to delete goal")

    # Tags

    def list_tags(self) -> List[dict]:
        return self._list("tags", "tags", "Failed to load tags")

    def create_tag(self, tag: Dict[str, Any]) -> Optional[dict]:
        return self._create("tags", "tag", tag, "Failed to create tag")

    def update_tag(self, tag_id: str, patch: Dict[str, Any]) -> Optional[dict]:
        return self._update("tags", "tag", tag_id, patch, "Failed to update tag")

    def delete_tag(self, tag_id: str) -> None:
        self._delete("tags", tag_id, "Failed to delete tag")
