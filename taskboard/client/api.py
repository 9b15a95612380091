"""HTTP client for the Taskboard API.

``ApiClient`` owns the httpx connection and the bearer token; the three
services wrap the endpoints and return the same Pydantic models the server
responds with.
"""

import logging
from typing import Any

import httpx
from pydantic import BaseModel

from taskboard.schemas.project_schema import ProjectCreate, ProjectOut, ProjectUpdate
from taskboard.schemas.task_schema import TaskCreate, TaskOut, TaskUpdate
from taskboard.schemas.user_schema import AuthResponse, UserOut

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3000"


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class ApiClient:
    def __init__(self, base_url: str = DEFAULT_API_URL, http: httpx.Client | None = None,
                 timeout: float = 10.0):
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self.token: str | None = None

    def close(self) -> None:
        self._http.close()

    def request(self, method: str, path: str, **kwargs) -> Any:
        headers = dict(kwargs.pop("headers", None) or {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            resp = self._http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(0, f"Could not reach the server: {exc}")

        if resp.is_error:
            try:
                message = resp.json().get("error")
            except ValueError:
                message = None
            raise ApiError(resp.status_code, message or resp.reason_phrase)
        return resp.json()


def _body(data: BaseModel | dict) -> dict:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", exclude_unset=True)
    return data


class AuthService:
    def __init__(self, api: ApiClient):
        self.api = api
        self.current_user: UserOut | None = None

    def _store(self, data: dict) -> AuthResponse:
        auth = AuthResponse.model_validate(data)
        self.api.token = auth.token
        self.current_user = auth.user
        return auth

    def login(self, email: str, password: str) -> AuthResponse:
        return self._store(self.api.request(
            "POST", "/api/auth/login", json={"email": email, "password": password}
        ))

    def register(self, email: str, password: str, name: str) -> AuthResponse:
        return self._store(self.api.request(
            "POST", "/api/auth/register",
            json={"email": email, "password": password, "name": name},
        ))

    def logout(self) -> None:
        self.api.token = None
        self.current_user = None

    def get_token(self) -> str | None:
        return self.api.token

    @property
    def is_authenticated(self) -> bool:
        return self.api.token is not None


class ProjectService:
    def __init__(self, api: ApiClient):
        self.api = api

    def get_projects(self) -> list[ProjectOut]:
        return [ProjectOut.model_validate(p) for p in self.api.request("GET", "/api/projects")]

    def create_project(self, project: ProjectCreate | dict) -> ProjectOut:
        return ProjectOut.model_validate(
            self.api.request("POST", "/api/projects", json=_body(project))
        )

    def update_project(self, project_id: str, project: ProjectUpdate | dict) -> ProjectOut:
        return ProjectOut.model_validate(
            self.api.request("PUT", f"/api/projects/{project_id}", json=_body(project))
        )

    def delete_project(self, project_id: str) -> str:
        return self.api.request("DELETE", f"/api/projects/{project_id}")["message"]


class TaskService:
    def __init__(self, api: ApiClient):
        self.api = api

    def get_tasks(self, project_id: str | None = None, status: str | None = None,
                  priority: str | None = None) -> list[TaskOut]:
        # Enum members are sent by value; str() of a str-Enum is its qualified name.
        params = {k: getattr(v, "value", v) for k, v in
                  (("project_id", project_id), ("status", status), ("priority", priority)) if v}
        return [TaskOut.model_validate(t) for t in self.api.request("GET", "/api/tasks", params=params)]

    def create_task(self, task: TaskCreate | dict) -> TaskOut:
        return TaskOut.model_validate(self.api.request("POST", "/api/tasks", json=_body(task)))

    def update_task(self, task_id: str, task: TaskUpdate | dict) -> TaskOut:
        return TaskOut.model_validate(
            self.api.request("PUT", f"/api/tasks/{task_id}", json=_body(task))
        )

    def delete_task(self, task_id: str) -> str:
        return self.api.request("DELETE", f"/api/tasks/{task_id}")["message"]
