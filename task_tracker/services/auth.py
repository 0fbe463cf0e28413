"""Registration, login and token verification."""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

import bcrypt
from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import ACCESS_TOKEN_EXPIRE_MINUTES, ADMIN_REGISTRATION_KEY, SECRET_KEY
from ..errors import AuthenticationError, AuthorizationError, ConflictError, ValidationError
from ..models import User, UserRole
from ..schemas.user import TokenData
from ..validation import validate_registration

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass
class LoginResult:
    token: str
    role: UserRole


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    password_bytes = plain_password.encode('utf-8')[:72]
    hashed_bytes = hashed_password.encode('utf-8') if isinstance(hashed_password, str) else hashed_password
    try:
        return bcrypt.checkpw(password_bytes, hashed_bytes)
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt directly."""
    password_bytes = password.encode('utf-8')[:72]  # Truncate to 72 bytes (bcrypt limit)
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT carrying the user's id and role."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {
        "sub": str(user.id),
        "role": UserRole(user.role).value,
        "exp": expire,
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def verify(token: str) -> TokenData:
    """Decode a bearer token.

    Raises AuthenticationError when the token is malformed, signed with
    another key, expired, or missing its claims.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise AuthenticationError("Invalid or expired token")

    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or not role:
        raise AuthenticationError("Invalid or expired token")
    try:
        return TokenData(user_id=user_id, role=role)
    except PydanticValidationError:
        raise AuthenticationError("Invalid or expired token")


def register(
    db: Session,
    name: str,
    email: str,
    password: str,
    role: UserRole = UserRole.USER,
    admin_key: Optional[str] = None,
) -> User:
    """Create a new account.

    Input policy is checked first, then the admin key, then email uniqueness,
    so a rejected admin registration never touches the store.
    """
    validate_registration(name, email, password)
    try:
        role = UserRole(role)
    except ValueError:
        raise ValidationError("Role must be 'user' or 'admin'")

    if role == UserRole.ADMIN and admin_key != ADMIN_REGISTRATION_KEY:
        logger.warning("Rejected admin registration for %s: bad admin key", email)
        raise AuthorizationError("Invalid admin key")

    if db.query(User).filter(User.email == email).first():
        raise ConflictError("Email already registered")

    user = User(
        name=name.strip(),
        email=email,
        hashed_password=get_password_hash(password),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent registration claimed the email after the check above
        db.rollback()
        raise ConflictError("Email already registered")
    db.refresh(user)
    logger.info("Registered %s user %s", role.value, user.id)
    return user


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """Return the matching user, or None. Never says which part was wrong."""
    user = db.query(User).filter(User.email == email).first()
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def login(db: Session, email: str, password: str) -> LoginResult:
    user = authenticate_user(db, email, password)
    if not user:
        logger.warning("Failed login attempt")
        raise AuthenticationError(INVALID_CREDENTIALS)

    logger.info("User %s logged in", user.id)
    return LoginResult(token=create_access_token(user), role=UserRole(user.role))
