from typing import Optional

from .user import CamelModel


class CategoryBase(CamelModel):
    name: str


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(CategoryBase):
    pass


class Category(CategoryBase):
    id: str


class CategoryEnvelope(CamelModel):
    category: Category


class CategoryRef(CamelModel):
    """Category as embedded in task rows."""
    id: str
    name: Optional[str] = None
