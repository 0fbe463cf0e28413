from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime, timezone
from typing import List
from uuid import uuid4


class Category(SQLModel, table=True):
    """Shared, admin-managed task category."""
    __tablename__ = "categories"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    name: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    tasks: List["Task"] = Relationship(back_populates="category")
