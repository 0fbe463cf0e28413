"""Task CRUD scoped to the authenticated owner.

Every lookup filters on both the task id and the caller's user id. A task
that exists but belongs to someone else is reported exactly like a task that
does not exist, so task ids never leak across users.

Concurrent updates to the same task are last-write-wins.
"""
from datetime import datetime, timezone
from typing import List, Optional
import logging

from sqlalchemy.orm import Session, joinedload

from ..errors import NotFoundError, ValidationError
from ..models import Category, Task
from ..schemas.task import TaskCreate, TaskUpdate
from ..validation import require_text

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"

# Fields that may be sent in an update but never as an explicit null
_NON_NULLABLE = ("title", "description", "category_id", "due_date", "status")


def _ensure_category(db: Session, category_id: Optional[str]) -> str:
    if not category_id or not str(category_id).strip():
        raise ValidationError("Category is required")
    exists = db.query(Category.id).filter(Category.id == category_id).first()
    if not exists:
        raise ValidationError("Category does not exist")
    return category_id


def _owned_task(db: Session, user_id: str, task_id: str) -> Task:
    task = (
        db.query(Task)
        .options(joinedload(Task.category))
        .filter(Task.id == task_id, Task.user_id == user_id)
        .first()
    )
    if not task:
        raise NotFoundError(TASK_NOT_FOUND)
    return task


def list_tasks(db: Session, user_id: str) -> List[Task]:
    """Return the caller's tasks, each with its category loaded."""
    return (
        db.query(Task)
        .options(joinedload(Task.category))
        .filter(Task.user_id == user_id)
        .order_by(Task.created_at.asc())
        .all()
    )


def get_task(db: Session, user_id: str, task_id: str) -> Task:
    return _owned_task(db, user_id, task_id)


def create_task(db: Session, user_id: str, data: TaskCreate) -> Task:
    task = Task(
        title=require_text(data.title, "Title"),
        description=require_text(data.description, "Description"),
        category_id=_ensure_category(db, data.category_id),
        due_date=data.due_date,
        status=data.status,
        user_id=user_id,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info("User %s created task %s", user_id, task.id)
    return task


def _validate_changes(db: Session, changes: dict) -> dict:
    """Check every present field before anything is merged into the row."""
    for field in _NON_NULLABLE:
        if field in changes and changes[field] is None:
            raise ValidationError(f"{field} cannot be null")

    if "title" in changes:
        changes["title"] = require_text(changes["title"], "Title")
    if "description" in changes:
        changes["description"] = require_text(changes["description"], "Description")
    if "category_id" in changes:
        _ensure_category(db, changes["category_id"])
    return changes


def update_task(db: Session, user_id: str, task_id: str, update: TaskUpdate) -> Task:
    task = _owned_task(db, user_id, task_id)
    changes = _validate_changes(db, update.changes())

    for field, value in changes.items():
        setattr(task, field, value)

    task.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, user_id: str, task_id: str) -> None:
    task = _owned_task(db, user_id, task_id)

    db.delete(task)
    db.commit()
    logger.info("User %s deleted task %s", user_id, task_id)
