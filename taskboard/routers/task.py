from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from taskboard.core.database import get_db
from taskboard.core.security import get_current_user
from taskboard.schemas.project_schema import MessageOut
from taskboard.schemas.task_schema import TaskCreate, TaskOut, TaskUpdate
from taskboard.services import task_service

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


@router.get("", response_model=list[TaskOut])
def get_tasks(
    project_id: str | None = Query(None),
    status: str | None = Query(None),
    priority: str | None = Query(None),
    db: Session = Depends(get_db),
    user=Depends(get_current_user)
):
    return task_service.list_tasks(
        db, user["sub"], project_id=project_id, status=status, priority=priority
    )


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user)
):
    return task_service.create_task(db, user["sub"], payload)


@router.get("/{task_id}", response_model=TaskOut)
def get_task(
    task_id: str,
    db: Session = Depends(get_db),
    user=Depends(get_current_user)
):
    return task_service.get_task(db, user["sub"], task_id)


@router.put("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: str,
    payload: TaskUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user)
):
    return task_service.update_task(db, user["sub"], task_id, payload)


@router.delete("/{task_id}", response_model=MessageOut)
def delete_task(
    task_id: str,
    db: Session = Depends(get_db),
    user=Depends(get_current_user)
):
    task_service.delete_task(db, user["sub"], task_id)
    return {"message": "Task deleted successfully"}
