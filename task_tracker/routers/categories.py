from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas.category import Category as CategorySchema, CategoryCreate, CategoryEnvelope, CategoryUpdate
from ..services import categories as category_service
from .auth import get_current_admin, get_current_user

router = APIRouter()


@router.get("", response_model=List[CategorySchema])
def get_categories(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List categories. Any signed-in user needs these to file tasks."""
    return category_service.list_categories(db)


@router.post("", response_model=CategoryEnvelope, status_code=status.HTTP_201_CREATED)
def create_category(
    category: CategoryCreate,
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return {"category": category_service.create_category(db, category.name)}


@router.put("/{category_id}", response_model=CategorySchema)
def update_category(
    category_id: str,
    category: CategoryUpdate,
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return category_service.update_category(db, category_id, category.name)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: str,
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """Delete a category. Tasks that used it become uncategorised."""
    category_service.delete_category(db, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
