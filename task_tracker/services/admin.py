"""Cross-user read views for administrators."""
from typing import List

from sqlalchemy.orm import Session, joinedload

from ..models import Task, User


def all_tasks(db: Session) -> List[Task]:
    """Every task, joined with its owner and category. Filtering is left to the client."""
    return (
        db.query(Task)
        .options(joinedload(Task.user), joinedload(Task.category))
        .order_by(Task.created_at.asc())
        .all()
    )


def all_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.name.asc()).all()
