"""Dependency injection module for FastAPI.

This module wires the token provider, password hasher, audit clock and the
request-scoped managers. Process-wide collaborators are built once; managers
get a fresh DB session per request.
"""

from pathlib import Path
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from config import FILE_UPLOAD_DIR, JWT_EXPIRATION_MS, JWT_SECRET
from core.database import get_db
from core.security import PasswordHasher, TokenProvider
from utils import auth_manager
from utils import content_manager
from utils import course_manager
from utils import user_manager
from utils.clock import MonotonicClock

# Singletons, read-only after startup
_token_provider_instance: TokenProvider = None
_password_hasher_instance: PasswordHasher = None
_clock_instance: MonotonicClock = None


def get_token_provider() -> TokenProvider:
    """Get TokenProvider singleton instance.

    Raises:
        ConfigurationError: If the signing secret is missing or too short.
    """
    global _token_provider_instance
    if _token_provider_instance is None:
        _token_provider_instance = TokenProvider(JWT_SECRET, JWT_EXPIRATION_MS)
    return _token_provider_instance


def get_password_hasher() -> PasswordHasher:
    global _password_hasher_instance
    if _password_hasher_instance is None:
        _password_hasher_instance = PasswordHasher()
    return _password_hasher_instance


def get_clock() -> MonotonicClock:
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = MonotonicClock()
    return _clock_instance


def get_upload_dir() -> Path:
    return FILE_UPLOAD_DIR


def get_auth_manager(
    db: Session = Depends(get_db),
    token_provider: TokenProvider = Depends(get_token_provider),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    clock: MonotonicClock = Depends(get_clock),
) -> auth_manager.AuthManager:
    """Get AuthManager instance with request-scoped DB session."""
    return auth_manager.AuthManager(db, token_provider, password_hasher, clock)


def get_user_manager(
    db: Session = Depends(get_db),
    clock: MonotonicClock = Depends(get_clock),
) -> user_manager.UserManager:
    """Get UserManager instance with request-scoped DB session."""
    return user_manager.UserManager(db, clock)


def get_content_manager(
    db: Session = Depends(get_db),
    clock: MonotonicClock = Depends(get_clock),
    upload_dir: Path = Depends(get_upload_dir),
) -> content_manager.ContentManager:
    """Get ContentManager instance with request-scoped DB session."""
    return content_manager.ContentManager(db, clock, upload_dir)


def get_course_manager(
    db: Session = Depends(get_db),
    clock: MonotonicClock = Depends(get_clock),
) -> course_manager.CourseManager:
    return course_manager.CourseManager(db, clock)


def get_topic_manager(
    db: Session = Depends(get_db),
    clock: MonotonicClock = Depends(get_clock),
) -> course_manager.TopicManager:
    return course_manager.TopicManager(db, clock)


# Type aliases for dependency injection
TokenProviderDep = Annotated[TokenProvider, Depends(get_token_provider)]
AuthManagerDep = Annotated[auth_manager.AuthManager, Depends(get_auth_manager)]
UserManagerDep = Annotated[user_manager.UserManager, Depends(get_user_manager)]
ContentManagerDep = Annotated[
    content_manager.ContentManager, Depends(get_content_manager)
]
CourseManagerDep = Annotated[course_manager.CourseManager, Depends(get_course_manager)]
TopicManagerDep = Annotated[course_manager.TopicManager, Depends(get_topic_manager)]
