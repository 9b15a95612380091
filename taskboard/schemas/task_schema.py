from pydantic import BaseModel
from datetime import date, datetime

from taskboard.models.task import TaskPriority, TaskStatus


class TaskCreate(BaseModel):
    title: str | None = None
    project_id: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None


class TaskUpdate(BaseModel):
    """Partial update: only fields present in the body are applied."""

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None


class TaskOut(BaseModel):
    id: str
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    due_date: date | None
    project_id: str
    user_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
