import logging

from sqlalchemy.orm import Session

from taskboard.core.database import store_operation
from taskboard.core.errors import NotFoundError, ValidationError
from taskboard.models.project import DEFAULT_COLOR, Project
from taskboard.models.task import Task
from taskboard.schemas.project_schema import ProjectCreate, ProjectUpdate

logger = logging.getLogger(__name__)


def _owned(db: Session, user_id: str, project_id: str) -> Project | None:
    return (
        db.query(Project)
        .filter(Project.id == project_id, Project.user_id == user_id)
        .first()
    )


def list_projects(db: Session, user_id: str) -> list[Project]:
    with store_operation(db, "Failed to fetch projects"):
        return (
            db.query(Project)
            .filter(Project.user_id == user_id)
            .order_by(Project.created_at.desc())
            .all()
        )


def get_project(db: Session, user_id: str, project_id: str) -> Project:
    with store_operation(db, "Failed to fetch project"):
        project = _owned(db, user_id, project_id)
    if project is None:
        raise NotFoundError("Project not found")
    return project


def create_project(db: Session, user_id: str, payload: ProjectCreate) -> Project:
    if not payload.name or not payload.name.strip():
        raise ValidationError("Project name is required")

    project = Project(
        name=payload.name.strip(),
        description=payload.description or "",
        color=payload.color or DEFAULT_COLOR,
        user_id=user_id,
    )
    with store_operation(db, "Failed to create project"):
        db.add(project)
        db.commit()
        db.refresh(project)

    logger.info("Created project id=%s user=%s", project.id, user_id)
    return project


def update_project(db: Session, user_id: str, project_id: str, payload: ProjectUpdate) -> Project:
    changes = payload.model_dump(exclude_unset=True)
    if "name" in changes and (not changes["name"] or not changes["name"].strip()):
        raise ValidationError("Project name is required")

    with store_operation(db, "Failed to update project"):
        # Ownership is part of the lookup: another user's project is "not found".
        project = _owned(db, user_id, project_id)
        if project is None:
            raise NotFoundError("Project not found")

        if "name" in changes:
            project.name = changes["name"].strip()
        if "description" in changes:
            project.description = changes["description"] or ""
        if "color" in changes:
            project.color = changes["color"] or DEFAULT_COLOR

        db.commit()
        db.refresh(project)

    return project


def delete_project(db: Session, user_id: str, project_id: str) -> None:
    """Delete a project and all of its tasks in one transaction."""
    with store_operation(db, "Failed to delete project"):
        project = _owned(db, user_id, project_id)
        if project is None:
            raise NotFoundError("Project not found")

        removed = (
            db.query(Task)
            .filter(Task.project_id == project_id)
            .delete(synchronize_session=False)
        )
        db.delete(project)
        db.commit()

    logger.info("Deleted project id=%s with %d task(s)", project_id, removed)
