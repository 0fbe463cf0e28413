import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import AuthenticationError, AuthorizationError
from ..models import User, UserRole
from ..schemas.user import LoginResponse, MessageResponse, UserCreate, UserLogin, UserProfile
from ..services import auth as auth_service

router = APIRouter()

logger = logging.getLogger(__name__)


def _get_token_from_request(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.lower().startswith("bearer "):
        return auth_header.split(" ", 1)[1].strip() or None
    return None


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
) -> User:
    """Authenticate the request from its bearer token.

    The returned user is the stored record, so its role reflects the store
    rather than whatever the token claimed at issue time.
    """
    token = _get_token_from_request(request)
    if not token:
        raise AuthenticationError("Not authenticated")

    try:
        token_data = auth_service.verify(token)
    except AuthenticationError:
        logger.warning("Rejected token on %s %s", request.method, request.url.path)
        raise

    user = db.query(User).filter(User.id == token_data.user_id).first()
    if user is None:
        logger.warning("Token for unknown user %s", token_data.user_id)
        raise AuthenticationError("User not found")
    return user


def require_role(role: UserRole):
    """Build a dependency that admits only users holding ``role``."""
    role = UserRole(role)

    def _check_role(current_user: User = Depends(get_current_user)) -> User:
        if UserRole(current_user.role) != role:
            logger.warning("User %s denied: requires role %s", current_user.id, role.value)
            raise AuthorizationError("Access denied: insufficient role")
        return current_user

    return _check_role


get_current_admin = require_role(UserRole.ADMIN)


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    user: UserCreate,
    db: Session = Depends(get_db),
):
    """Create a new account. Admin accounts need the registration key."""
    auth_service.register(
        db,
        name=user.name,
        email=user.email,
        password=user.password,
        role=user.role,
        admin_key=user.admin_key,
    )
    return {"message": "User registered successfully"}


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
):
    """Sign in and get a bearer token plus the account role."""
    result = auth_service.login(db, credentials.email, credentials.password)
    return LoginResponse(token=result.token, role=result.role)


@router.get("/me", response_model=UserProfile)
def read_users_me(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user
