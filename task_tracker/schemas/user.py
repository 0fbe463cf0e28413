from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional

from ..models import UserRole


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case accepted on input."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserCreate(CamelModel):
    """Registration payload. ``admin_key`` is only checked for admins."""
    name: str
    email: str
    password: str
    role: UserRole = UserRole.USER
    admin_key: Optional[str] = None


class UserLogin(CamelModel):
    email: str
    password: str


class LoginResponse(CamelModel):
    token: str
    role: UserRole
    token_type: str = "bearer"


class UserSummary(CamelModel):
    """Public view of a user. Never carries the password hash."""
    id: str
    name: str
    role: UserRole


class UserProfile(UserSummary):
    email: str


class TokenData(BaseModel):
    user_id: str
    role: UserRole


class MessageResponse(BaseModel):
    message: str
