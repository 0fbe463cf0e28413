from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas.task import Task as TaskSchema, TaskCreate, TaskEnvelope, TaskUpdate
from ..services import tasks as task_service
from .auth import get_current_user

router = APIRouter()


@router.get("/tasks", response_model=List[TaskSchema])
def get_tasks(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get the caller's tasks, each with its category."""
    return task_service.list_tasks(db, current_user.id)


@router.post("/tasks", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a new task owned by the caller."""
    return {"task": task_service.create_task(db, current_user.id, task)}


@router.get("/tasks/{task_id}", response_model=TaskSchema)
def get_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return task_service.get_task(db, current_user.id, task_id)


@router.patch("/tasks/{task_id}", response_model=TaskEnvelope)
def update_task(
    task_id: str,
    task_update: TaskUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Apply a partial update to one of the caller's tasks."""
    return {"task": task_service.update_task(db, current_user.id, task_id, task_update)}


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    task_service.delete_task(db, current_user.id, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
