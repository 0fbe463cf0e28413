from sqlmodel import SQLModel, Field, Relationship
from datetime import date, datetime, timezone
from typing import Optional
from uuid import uuid4
import enum


class TaskStatus(str, enum.Enum):
    TODO = "Todo"
    DOING = "Doing"
    DONE = "Done"


class Task(SQLModel, table=True):
    """A task owned by exactly one user.

    ``category_id`` becomes null when its category is deleted.
    """
    __tablename__ = "tasks"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    title: str
    description: str
    due_date: date
    status: TaskStatus = Field(default=TaskStatus.TODO, sa_column_kwargs={"nullable": False})
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str = Field(index=True, foreign_key="users.id")
    category_id: Optional[str] = Field(default=None, index=True, foreign_key="categories.id")

    user: Optional["User"] = Relationship(back_populates="tasks")
    category: Optional["Category"] = Relationship(back_populates="tasks")
