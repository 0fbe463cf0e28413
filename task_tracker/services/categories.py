"""Shared category management.

Categories have no owner: any admin may edit any category.
"""
from datetime import datetime, timezone
from typing import List
import logging

from sqlalchemy.orm import Session

from ..errors import NotFoundError
from ..models import Category, Task
from ..validation import require_text

logger = logging.getLogger(__name__)


def _get_or_404(db: Session, category_id: str) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise NotFoundError("Category not found")
    return category


def list_categories(db: Session) -> List[Category]:
    return db.query(Category).order_by(Category.name.asc()).all()


def create_category(db: Session, name: str) -> Category:
    category = Category(name=require_text(name, "Name"))
    db.add(category)
    db.commit()
    db.refresh(category)
    logger.info("Created category %s", category.id)
    return category


def update_category(db: Session, category_id: str, name: str) -> Category:
    name = require_text(name, "Name")
    category = _get_or_404(db, category_id)

    category.name = name
    category.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(category)
    return category


def delete_category(db: Session, category_id: str) -> None:
    """Delete a category and detach it from any task that referenced it."""
    category = _get_or_404(db, category_id)

    try:
        db.query(Task).filter(Task.category_id == category_id).update(
            {Task.category_id: None}, synchronize_session=False
        )
        db.delete(category)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Deleted category %s", category_id)
