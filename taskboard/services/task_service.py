import logging

from sqlalchemy.orm import Session

from taskboard.core.database import store_operation
from taskboard.core.errors import NotFoundError, ValidationError
from taskboard.models.project import Project
from taskboard.models.task import Task, TaskPriority, TaskStatus
from taskboard.models.user import utcnow
from taskboard.schemas.task_schema import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


def _parse_filter(enum_cls, raw: str | None, label: str):
    if not raw:
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ValidationError(f"Invalid {label} '{raw}' (expected one of: {allowed})")


def list_tasks(
    db: Session,
    user_id: str,
    project_id: str | None = None,
    status: str | None = None,
    priority: str | None = None,
) -> list[Task]:
    status_value = _parse_filter(TaskStatus, status, "status")
    priority_value = _parse_filter(TaskPriority, priority, "priority")

    query = db.query(Task).filter(Task.user_id == user_id)
    if project_id:
        query = query.filter(Task.project_id == project_id)
    if status_value is not None:
        query = query.filter(Task.status == status_value.value)
    if priority_value is not None:
        query = query.filter(Task.priority == priority_value.value)

    with store_operation(db, "Failed to fetch tasks"):
        return query.order_by(Task.created_at.desc()).all()


def get_task(db: Session, user_id: str, task_id: str) -> Task:
    with store_operation(db, "Failed to fetch task"):
        task = db.query(Task).filter(Task.id == task_id, Task.user_id == user_id).first()
    if task is None:
        raise NotFoundError("Task not found")
    return task


def create_task(db: Session, user_id: str, payload: TaskCreate) -> Task:
    if not payload.title or not payload.title.strip() or not payload.project_id:
        raise ValidationError("Title and project_id are required")

    with store_operation(db, "Failed to create task"):
        project = (
            db.query(Project)
            .filter(Project.id == payload.project_id, Project.user_id == user_id)
            .first()
        )
        if project is None:
            raise NotFoundError("Project not found")

        now = utcnow()
        task = Task(
            title=payload.title.strip(),
            description=payload.description or "",
            status=(payload.status or TaskStatus.NOT_STARTED).value,
            priority=(payload.priority or TaskPriority.MEDIUM).value,
            due_date=payload.due_date,
            project_id=project.id,
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )
        db.add(task)
        db.commit()
        db.refresh(task)

    logger.info("Created task id=%s project=%s user=%s", task.id, task.project_id, user_id)
    return task


def update_task(db: Session, user_id: str, task_id: str, payload: TaskUpdate) -> Task:
    changes = payload.model_dump(exclude_unset=True)
    if "title" in changes and (not changes["title"] or not changes["title"].strip()):
        raise ValidationError("Title is required")

    with store_operation(db, "Failed to update task"):
        task = db.query(Task).filter(Task.id == task_id, Task.user_id == user_id).first()
        if task is None:
            raise NotFoundError("Task not found")

        if "title" in changes:
            task.title = changes["title"].strip()
        if "description" in changes:
            task.description = changes["description"] or ""
        if changes.get("status") is not None:
            task.status = changes["status"].value
        if changes.get("priority") is not None:
            task.priority = changes["priority"].value
        if "due_date" in changes:
            task.due_date = changes["due_date"]
        task.updated_at = max(utcnow(), task.updated_at)

        db.commit()
        db.refresh(task)

    return task


def delete_task(db: Session, user_id: str, task_id: str) -> None:
    with store_operation(db, "Failed to delete task"):
        removed = (
            db.query(Task)
            .filter(Task.id == task_id, Task.user_id == user_id)
            .delete(synchronize_session=False)
        )
        if removed == 0:
            raise NotFoundError("Task not found")
        db.commit()
