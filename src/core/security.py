"""Bearer token issuing and password hashing.

``TokenProvider`` signs stateless HS256 tokens carrying the user's email as
subject. ``PasswordHasher`` wraps bcrypt.
"""

import logging
import time
from typing import Callable, Optional

import bcrypt
from jose import JWTError, jwt

from config import (
    BCRYPT_ROUNDS,
    JWT_ALGORITHM,
    JWT_EXPIRATION_MS,
    JWT_MIN_SECRET_BYTES,
)
from core.exceptions import ConfigurationError, InvalidTokenError

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class TokenProvider:
    """Issues and verifies signed bearer tokens."""

    def __init__(
        self,
        secret: Optional[str],
        expiration_ms: int = JWT_EXPIRATION_MS,
        clock: Callable[[], float] = time.time,
        algorithm: str = JWT_ALGORITHM,
    ):
        """Initialize TokenProvider.

        Args:
            secret: Symmetric signing key.
            expiration_ms: Token lifetime in milliseconds.
            clock: Returns the current time as epoch seconds.
            algorithm: JWS algorithm name.

        Raises:
            ConfigurationError: If the secret is missing or shorter than the
                algorithm's minimum key size.
        """
        if not secret:
            raise ConfigurationError("JWT_SECRET must be set")
        if len(secret.encode("utf-8")) < JWT_MIN_SECRET_BYTES:
            raise ConfigurationError(
                f"JWT_SECRET must be at least {JWT_MIN_SECRET_BYTES} bytes long"
            )
        if expiration_ms <= 0:
            raise ConfigurationError("JWT_EXPIRATION_MS must be positive")

        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock
        self.expiration_ms = expiration_ms

    def issue(self, subject: str) -> str:
        """Create a token for ``subject``.

        Args:
            subject: The user's email.

        Returns:
            Encoded token string.
        """
        issued_at = self._clock()
        claims = {
            "sub": subject,
            "iat": round(issued_at, 3),
            "exp": round(issued_at + self.expiration_ms / 1000.0, 3),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def subject(self, token: str) -> str:
        """Validate ``token`` and return its subject.

        Raises:
            InvalidTokenError: If the signature, structure or expiry is invalid.
        """
        try:
            # Expiry is checked against our own clock so sub-second lifetimes work
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            logger.info("Rejected bearer token: %s", e)
            raise InvalidTokenError() from e

        subject = claims.get("sub")
        expires_at = claims.get("exp")
        if not subject or not isinstance(expires_at, (int, float)):
            raise InvalidTokenError()
        if self._clock() >= expires_at:
            raise InvalidTokenError("Token has expired")
        return subject

    def verify(self, token: str) -> bool:
        try:
            self.subject(token)
        except InvalidTokenError:
            return False
        return True


class PasswordHasher:
    """One-way password hashing with constant-time verification."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds
        # Compared against when the email is unknown so login timing is uniform
        self._dummy_hash = self.hash("dummy-password-for-timing")

    @staticmethod
    def _to_bytes(password: str) -> bytes:
        return password.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password.

        Returns:
            Hashed password (bcrypt hash string).
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(self._to_bytes(password), salt).decode("utf-8")

    def verify(self, password: str, hashed_password: Optional[str]) -> bool:
        """Verify a password against a bcrypt hash.

        A missing hash still costs one bcrypt comparison.

        Args:
            password: Plain text password to verify.
            hashed_password: Bcrypt hash string, or None for an unknown user.

        Returns:
            True if password matches, False otherwise.
        """
        target = hashed_password or self._dummy_hash
        try:
            matches = bcrypt.checkpw(self._to_bytes(password), target.encode("utf-8"))
        except ValueError as e:
            logger.error("Password verification error: %s", e)
            return False
        return matches and hashed_password is not None
