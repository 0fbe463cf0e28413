from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from ..models import TaskStatus
from .category import CategoryRef
from .user import CamelModel, UserSummary


class TaskBase(CamelModel):
    """Base task schema with common fields."""
    title: str
    description: str
    category_id: Optional[str] = None
    due_date: date
    status: TaskStatus = TaskStatus.TODO


class TaskCreate(TaskBase):
    """Schema for creating new tasks. The owner always comes from the token."""
    category_id: str


class TaskUpdate(CamelModel):
    """Partial update.

    Only fields the client actually sent are applied; ``model_fields_set``
    tells an omitted field apart from an explicit null.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[str] = None
    due_date: Optional[date] = None
    status: Optional[TaskStatus] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class Task(TaskBase):
    """Complete task schema with all fields."""
    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime
    # Joined rows keep the capitalised include names the web client reads
    category: Optional[CategoryRef] = Field(default=None, serialization_alias="Category")


class TaskEnvelope(CamelModel):
    task: Task


class AdminTask(Task):
    """Task row on the admin dashboard, joined with its owner."""
    user: Optional[UserSummary] = Field(default=None, serialization_alias="User")


class AdminDashboard(CamelModel):
    tasks: List[AdminTask]
