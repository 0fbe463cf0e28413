from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas.task import AdminDashboard
from ..schemas.user import UserSummary
from ..services import admin as admin_service
from .auth import get_current_admin

router = APIRouter()


@router.get("/dashboard", response_model=AdminDashboard)
def get_dashboard(
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """All users' tasks with owner and category joined."""
    return {"tasks": admin_service.all_tasks(db)}


@router.get("/users", response_model=List[UserSummary])
def get_users(
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return admin_service.all_users(db)
