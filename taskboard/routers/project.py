from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from taskboard.core.database import get_db
from taskboard.core.security import get_current_user
from taskboard.schemas.project_schema import MessageOut, ProjectCreate, ProjectOut, ProjectUpdate
from taskboard.services import project_service

router = APIRouter(prefix="/api/projects", tags=["Projects"])

# ---------------------------------------------------------------------------
# List / create
# ---------------------------------------------------------------------------
@router.get("", response_model=list[ProjectOut])
def get_all_projects(
    db: Session = Depends(get_db),
    user=Depends(get_current_user)
):
    return project_service.list_projects(db, user["sub"])


@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user)
):
    return project_service.create_project(db, user["sub"], payload)

# ---------------------------------------------------------------------------
# Single project
# ---------------------------------------------------------------------------
@router.get("/{project_id}", response_model=ProjectOut)
def get_project(
    project_id: str,
    db: Session = Depends(get_db),
    user=Depends(get_current_user)
):
    return project_service.get_project(db, user["sub"], project_id)


@router.put("/{project_id}", response_model=ProjectOut)
def update_project(
    project_id: str,
    payload: ProjectUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user)
):
    return project_service.update_project(db, user["sub"], project_id, payload)


@router.delete("/{project_id}", response_model=MessageOut)
def delete_project(
    project_id: str,
    db: Session = Depends(get_db),
    user=Depends(get_current_user)
):
    project_service.delete_project(db, user["sub"], project_id)
    return {"message": "Project deleted successfully"}
