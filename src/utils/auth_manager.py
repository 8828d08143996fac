"""Authentication service.

Registers users, verifies credentials and issues bearer tokens.
"""

import logging
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import EmailTakenError, InvalidCredentialsError, NotFoundError
from core.security import PasswordHasher, TokenProvider
from models.user import UserModel
from repositories import UserRepository, normalize_email
from schemas.enums import resolve_role
from schemas.user import (
    JwtAuthenticationResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)


class AuthManager:
    """Handles registration, login and current-user lookups."""

    def __init__(
        self,
        db: Session,
        token_provider: TokenProvider,
        password_hasher: PasswordHasher,
        clock: Optional[Callable] = None,
    ):
        """Initialize AuthManager.

        Args:
            db: SQLAlchemy Session.
            token_provider: Issues bearer tokens.
            password_hasher: Hashes and verifies passwords.
            clock: Audit timestamp source.
        """
        self.db = db
        self.users = UserRepository(db, clock)
        self.token_provider = token_provider
        self.password_hasher = password_hasher

    def _authenticated(self, user: UserModel) -> JwtAuthenticationResponse:
        return JwtAuthenticationResponse(
            access_token=self.token_provider.issue(user.email),
            user=UserResponse.from_model(user),
        )

    def register(self, req: RegisterRequest) -> JwtAuthenticationResponse:
        """Register a new user and sign them in.

        Unrecognised roles are registered as STUDENT.

        Raises:
            EmailTakenError: If the email already belongs to a user.
        """
        email = normalize_email(req.email)
        if self.users.exists_by_email(email):
            raise EmailTakenError(email)

        user = UserModel(
            email=email,
            password_hash=self.password_hasher.hash(req.password),
            role=resolve_role(req.role),
            active=True,
            profile={
                "firstName": req.first_name,
                "lastName": req.last_name,
                "institution": req.institution,
            },
        )

        # Two requests can both pass the check above; the unique index on
        # users.email lets exactly one of them insert.
        try:
            self.users.save(user)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise EmailTakenError(email) from e

        logger.info("Registered user %s with role %s", user.id, user.role.value)
        return self._authenticated(user)

    def login(self, req: LoginRequest) -> JwtAuthenticationResponse:
        """Verify credentials of an active user.

        Raises:
            InvalidCredentialsError: For an unknown email, an inactive account
                or a wrong password alike.
        """
        user = self.users.find_active_user_by_email(req.email)
        password_ok = self.password_hasher.verify(
            req.password, user.password_hash if user else None
        )
        if user is None or not password_ok:
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()

        logger.info("User %s logged in", user.id)
        return self._authenticated(user)

    def is_email_exists(self, email: str) -> bool:
        return self.users.exists_by_email(email)

    def get_current_user(self, user_id: str) -> UserResponse:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return UserResponse.from_model(user)
