"""Form-bound view models for the Taskboard client.

Each view keeps only what its last successful call returned. Local lists are
changed after the server confirms a mutation and are kept newest-first by the
server's ``created_at``, so they read the same as a fresh load.
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from email_validator import EmailNotValidError, validate_email
from pydantic import ValidationError

from taskboard.client.api import ApiError, AuthService, ProjectService, TaskService
from taskboard.models.project import DEFAULT_COLOR
from taskboard.models.task import TaskPriority, TaskStatus
from taskboard.schemas.project_schema import ProjectCreate, ProjectOut, ProjectUpdate
from taskboard.schemas.task_schema import TaskCreate, TaskOut, TaskUpdate

logger = logging.getLogger(__name__)

COLOR_OPTIONS = [
    "#3B82F6", "#EF4444", "#10B981", "#F59E0B",
    "#8B5CF6", "#EC4899", "#06B6D4", "#84CC16",
]

PASSWORD_MIN_LENGTH = 6
PROJECT_NAME_MIN_LENGTH = 2

T = TypeVar("T", ProjectOut, TaskOut)


def newest_first(items: list[T]) -> list[T]:
    return sorted(items, key=lambda item: item.created_at, reverse=True)


def upsert(items: list[T], item: T) -> list[T]:
    return newest_first([i for i in items if i.id != item.id] + [item])


def _email_error(email: str) -> str | None:
    if not email:
        return "Email is required"
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return "Enter a valid email address"
    return None


# ---------------------------------------------------------------------------
# Auth forms
# ---------------------------------------------------------------------------

class LoginView:
    failure_message = "Login failed"

    def __init__(self, auth: AuthService):
        self.auth = auth
        self.email = ""
        self.password = ""
        self.loading = False
        self.error = ""

    def field_errors(self) -> dict[str, str]:
        errors = {}
        email_error = _email_error(self.email)
        if email_error:
            errors["email"] = email_error
        if not self.password:
            errors["password"] = "Password is required"
        elif len(self.password) < PASSWORD_MIN_LENGTH:
            errors["password"] = f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
        return errors

    @property
    def is_valid(self) -> bool:
        return not self.field_errors()

    def _call(self):
        return self.auth.login(self.email, self.password)

    def submit(self) -> bool:
        """Returns True once the user is signed in."""
        if not self.is_valid or self.loading:
            return False
        self.loading = True
        self.error = ""
        try:
            self._call()
        except ApiError as exc:
            self.error = exc.message or self.failure_message
            return False
        finally:
            self.loading = False
        return True


class RegisterView(LoginView):
    failure_message = "Registration failed"

    def __init__(self, auth: AuthService):
        super().__init__(auth)
        self.name = ""

    def field_errors(self) -> dict[str, str]:
        errors = super().field_errors()
        if not self.name.strip():
            errors["name"] = "Name is required"
        return errors

    def _call(self):
        return self.auth.register(self.email, self.password, self.name.strip())


# ---------------------------------------------------------------------------
# Project list
# ---------------------------------------------------------------------------

class ProjectListView:
    """Project grid with a create/edit form.

    Results are reported through the ``on_*`` callbacks, which the dashboard
    wires to its own handlers.
    """

    def __init__(
        self,
        projects: ProjectService,
        on_created: Callable[[ProjectOut], None] | None = None,
        on_updated: Callable[[ProjectOut], None] | None = None,
        on_deleted: Callable[[str], None] | None = None,
        on_form_closed: Callable[[], None] | None = None,
    ):
        self.service = projects
        self.on_created = on_created or (lambda p: None)
        self.on_updated = on_updated or (lambda p: None)
        self.on_deleted = on_deleted or (lambda pid: None)
        self.on_form_closed = on_form_closed or (lambda: None)

        self.editing_project: ProjectOut | None = None
        self.loading = False
        self.error = ""
        self.reset_form()

    def reset_form(self) -> None:
        self.form = {"name": "", "description": "", "color": DEFAULT_COLOR}
        self.editing_project = None
        self.error = ""

    def select_color(self, color: str) -> None:
        if color not in COLOR_OPTIONS:
            raise ValueError(f"Unknown color {color!r}")
        self.form["color"] = color

    def edit_project(self, project: ProjectOut) -> None:
        self.editing_project = project
        self.form = {
            "name": project.name,
            "description": project.description,
            "color": project.color,
        }

    def field_errors(self) -> dict[str, str]:
        name = self.form["name"].strip()
        if not name:
            return {"name": "Project name is required"}
        if len(name) < PROJECT_NAME_MIN_LENGTH:
            return {"name": f"Project name must be at least {PROJECT_NAME_MIN_LENGTH} characters"}
        return {}

    def submit(self) -> ProjectOut | None:
        if self.field_errors() or self.loading:
            return None
        self.loading = True
        self.error = ""
        try:
            if self.editing_project:
                project = self.service.update_project(
                    self.editing_project.id, ProjectUpdate(**self.form)
                )
                self.on_updated(project)
            else:
                project = self.service.create_project(ProjectCreate(**self.form))
                self.on_created(project)
        except ApiError as exc:
            self.error = exc.message
            logger.error("Failed to save project: %s", exc.message)
            return None
        finally:
            self.loading = False
        self.close_form()
        return project

    def delete_project(self, project_id: str) -> bool:
        try:
            self.service.delete_project(project_id)
        except ApiError as exc:
            self.error = exc.message
            logger.error("Failed to delete project: %s", exc.message)
            return False
        self.on_deleted(project_id)
        return True

    def close_form(self) -> None:
        self.reset_form()
        self.on_form_closed()


# ---------------------------------------------------------------------------
# Task board
# ---------------------------------------------------------------------------

class TaskBoardView:
    def __init__(
        self,
        tasks: TaskService,
        get_projects: Callable[[], list[ProjectOut]],
        get_tasks: Callable[[], list[TaskOut]],
        on_created: Callable[[TaskOut], None] | None = None,
        on_updated: Callable[[TaskOut], None] | None = None,
        on_deleted: Callable[[str], None] | None = None,
    ):
        self.service = tasks
        self._get_projects = get_projects
        self._get_tasks = get_tasks
        self.on_created = on_created or (lambda t: None)
        self.on_updated = on_updated or (lambda t: None)
        self.on_deleted = on_deleted or (lambda tid: None)
        self.project_filter: str | None = None
        self.error = ""

    def columns(self) -> dict[TaskStatus, list[TaskOut]]:
        board = {status: [] for status in TaskStatus}
        for task in self._get_tasks():
            if self.project_filter and task.project_id != self.project_filter:
                continue
            board[task.status].append(task)
        return board

    def project_for(self, task: TaskOut) -> ProjectOut | None:
        return next((p for p in self._get_projects() if p.id == task.project_id), None)

    def _run(self, action: str, fn):
        self.error = ""
        try:
            return fn()
        except ApiError as exc:
            self.error = exc.message
            logger.error("Failed to %s: %s", action, exc.message)
            return None
        except ValidationError as exc:
            # Bad field values never reach the server.
            self.error = "; ".join(err["msg"] for err in exc.errors())
            return None

    def create_task(self, title: str, project_id: str, description: str = "",
                    priority: TaskPriority = TaskPriority.MEDIUM,
                    status: TaskStatus = TaskStatus.NOT_STARTED, due_date=None) -> TaskOut | None:
        if not title.strip() or not project_id:
            self.error = "Title and project are required"
            return None
        task = self._run("create task", lambda: self.service.create_task(TaskCreate(
            title=title, project_id=project_id, description=description,
            priority=priority, status=status, due_date=due_date,
        )))
        if task is not None:
            self.on_created(task)
        return task

    def update_task(self, task_id: str, **fields) -> TaskOut | None:
        task = self._run("update task", lambda: self.service.update_task(task_id, TaskUpdate(**fields)))
        if task is not None:
            self.on_updated(task)
        return task

    def move_task(self, task: TaskOut, status: TaskStatus) -> TaskOut | None:
        if task.status == status:
            return task
        return self.update_task(task.id, status=status)

    def delete_task(self, task_id: str) -> bool:
        if self._run("delete task", lambda: self.service.delete_task(task_id)) is None:
            return False
        self.on_deleted(task_id)
        return True


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

class DashboardView:
    TABS = ("projects", "board")

    def __init__(self, auth: AuthService, projects: ProjectService, tasks: TaskService):
        self.auth = auth
        self.project_service = projects
        self.task_service = tasks

        self.projects: list[ProjectOut] = []
        self.tasks: list[TaskOut] = []
        self.active_tab = "projects"
        self.show_project_form = False

        self.project_list = ProjectListView(
            projects,
            on_created=self.on_project_created,
            on_updated=self.on_project_updated,
            on_deleted=self.on_project_deleted,
            on_form_closed=self.close_project_form,
        )
        self.task_board = TaskBoardView(
            tasks,
            get_projects=lambda: self.projects,
            get_tasks=lambda: self.tasks,
            on_created=self.on_task_created,
            on_updated=self.on_task_updated,
            on_deleted=self.on_task_deleted,
        )

    @property
    def current_user(self):
        return self.auth.current_user

    def load(self) -> None:
        self.load_projects()
        self.load_tasks()

    def load_projects(self) -> None:
        try:
            self.projects = newest_first(self.project_service.get_projects())
        except ApiError as exc:
            logger.error("Failed to load projects: %s", exc.message)

    def load_tasks(self) -> None:
        try:
            self.tasks = newest_first(self.task_service.get_tasks())
        except ApiError as exc:
            logger.error("Failed to load tasks: %s", exc.message)

    def select_tab(self, tab: str) -> None:
        if tab not in self.TABS:
            raise ValueError(f"Unknown tab {tab!r}")
        self.active_tab = tab

    def open_project_form(self) -> None:
        self.project_list.reset_form()
        self.show_project_form = True

    def close_project_form(self) -> None:
        self.show_project_form = False

    def tasks_by_status(self, status: TaskStatus | str) -> list[TaskOut]:
        status = TaskStatus(status)
        return [t for t in self.tasks if t.status == status]

    def stats(self) -> dict[str, int]:
        counts = {"projects": len(self.projects)}
        for status in TaskStatus:
            counts[status.value] = len(self.tasks_by_status(status))
        return counts

    def on_project_created(self, project: ProjectOut) -> None:
        self.projects = upsert(self.projects, project)
        self.show_project_form = False

    def on_project_updated(self, project: ProjectOut) -> None:
        self.projects = upsert(self.projects, project)

    def on_project_deleted(self, project_id: str) -> None:
        self.projects = [p for p in self.projects if p.id != project_id]
        self.tasks = [t for t in self.tasks if t.project_id != project_id]

    def on_task_created(self, task: TaskOut) -> None:
        self.tasks = upsert(self.tasks, task)

    def on_task_updated(self, task: TaskOut) -> None:
        self.tasks = upsert(self.tasks, task)

    def on_task_deleted(self, task_id: str) -> None:
        self.tasks = [t for t in self.tasks if t.id != task_id]

    def logout(self) -> None:
        self.auth.logout()
        self.projects = []
        self.tasks = []
