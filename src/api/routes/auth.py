"""Authentication routes.

This module handles HTTP endpoints for registration, login and the current
user's profile. It also provides the bearer-token dependencies every other
router uses to resolve and authorize the caller.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from core.database import get_db
from core.dependencies import AuthManagerDep, TokenProviderDep, UserManagerDep
from core.exceptions import ForbiddenError, UnauthorizedError
from repositories import UserRepository
from schemas.enums import UserRole
from schemas.user import (
    JwtAuthenticationResponse,
    LoginRequest,
    Principal,
    ProfileUpdateRequest,
    RegisterRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

# Missing or non-Bearer headers yield None so we can answer 401 ourselves
security = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    token_provider: TokenProviderDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Principal:
    """Resolve the caller from the ``Authorization: Bearer`` header.

    Args:
        request: Current request; the principal is attached to its state.
        token_provider: Verifies the token.
        credentials: Parsed bearer credentials, if any.
        db: Database session.

    Returns:
        The authenticated Principal.

    Raises:
        UnauthorizedError: If the token is absent, invalid or expired, or the
            user no longer exists or is inactive.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authentication required")

    email = token_provider.subject(credentials.credentials)
    user = UserRepository(db).find_by_email(email)
    if user is None or not user.active:
        raise UnauthorizedError("User not found or inactive")

    principal = Principal(id=user.id, email=user.email, role=user.role)
    request.state.principal = principal
    return principal


def require_roles(*roles: UserRole):
    """Build a dependency that admits only callers holding one of ``roles``."""

    def dependency(current_user: Principal = Depends(get_current_user)) -> Principal:
        if current_user.role not in roles:
            logger.warning(
                "User %s with role %s denied; requires one of %s",
                current_user.id,
                current_user.role.value,
                [r.value for r in roles],
            )
            raise ForbiddenError()
        return current_user

    return dependency


CurrentUser = Annotated[Principal, Depends(get_current_user)]
ContentAuthor = Annotated[
    Principal, Depends(require_roles(UserRole.INSTRUCTOR, UserRole.ADMIN))
]
Admin = Annotated[Principal, Depends(require_roles(UserRole.ADMIN))]


@router.post("/register", response_model=JwtAuthenticationResponse, summary="Register")
def register(req: RegisterRequest, auth_manager: AuthManagerDep) -> JwtAuthenticationResponse:
    """Register a new user and return a bearer token for them."""
    return auth_manager.register(req)


@router.post("/login", response_model=JwtAuthenticationResponse, summary="Log in")
def login(req: LoginRequest, auth_manager: AuthManagerDep) -> JwtAuthenticationResponse:
    """Login with email and password."""
    return auth_manager.login(req)


@router.get("/me", response_model=UserResponse, summary="Current user")
def get_current_user_info(
    current_user: CurrentUser, auth_manager: AuthManagerDep
) -> UserResponse:
    return auth_manager.get_current_user(current_user.id)


@router.get("/check-email/{email}", response_model=bool, summary="Is email registered")
def check_email_exists(email: str, auth_manager: AuthManagerDep) -> bool:
    return auth_manager.is_email_exists(email)


@router.put("/profile", response_model=UserResponse, summary="Update own profile")
def update_profile(
    req: ProfileUpdateRequest,
    current_user: CurrentUser,
    user_manager: UserManagerDep,
) -> UserResponse:
    """Update the authenticated user's embedded profile.

    Args:
        req: New profile values.
        current_user: Current authenticated user.
        user_manager: Injected UserManager instance.

    Returns:
        The updated public view.
    """
    user = user_manager.update_profile(current_user.id, req)
    return UserResponse.from_model(user)
