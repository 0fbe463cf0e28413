"""Registration input policy shared by the API and the Python client."""
import re
from typing import Optional

from .errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# 8-12 chars, at least one uppercase letter, one digit and one of @$!%*?&
PASSWORD_PATTERN = re.compile(
    r"^(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,12}$"
)

EMAIL_MESSAGE = "Enter a valid email address (e.g., user@example.com)"
PASSWORD_MESSAGE = (
    "Password must be 8-12 characters, include one uppercase letter, "
    "one number, and one special character (@$!%*?&)."
)


def is_valid_email(email: Optional[str]) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def is_valid_password(password: Optional[str]) -> bool:
    return bool(password) and PASSWORD_PATTERN.match(password) is not None


def require_text(value: Optional[str], field: str) -> str:
    """Return ``value`` exactly as sent, or raise if it is missing or blank."""
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required")
    return value


def validate_registration(name: Optional[str], email: Optional[str], password: Optional[str]) -> None:
    require_text(name, "Name")
    if not is_valid_email(email):
        raise ValidationError(EMAIL_MESSAGE)
    if not is_valid_password(password):
        raise ValidationError(PASSWORD_MESSAGE)
