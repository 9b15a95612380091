import enum
from sqlalchemy import Column, Date, String, Text, TIMESTAMP, ForeignKey
from taskboard.core.database import Base
from taskboard.models.user import new_id, utcnow


class TaskStatus(str, enum.Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class TaskPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    # Stored as the enum values so the table stays readable from plain SQL.
    status = Column(String, nullable=False, default=TaskStatus.NOT_STARTED.value)
    priority = Column(String, nullable=False, default=TaskPriority.MEDIUM.value)
    due_date = Column(Date, nullable=True)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(TIMESTAMP, default=utcnow, nullable=False)
    updated_at = Column(TIMESTAMP, default=utcnow, nullable=False)
