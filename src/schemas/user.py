"""User schema definitions.

Request DTOs for registration, login and profile updates, and the public
view of a user. No schema here carries the password hash.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from models.user import UserModel
from schemas.base import EMAIL_PATTERN, CamelModel, require_text
from schemas.enums import UserRole


class RegisterRequest(CamelModel):
    email: str = Field(description="Login email; stored lower-case.")
    password: str = Field(
        min_length=6,
        max_length=40,
        description="Plain text password, 6 to 40 characters.",
    )
    role: str = Field(description="STUDENT, INSTRUCTOR or ADMIN (case-insensitive).")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    institution: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        require_text(value, "Email is required")
        if not EMAIL_PATTERN.match(value.strip()):
            raise ValueError("Email should be valid")
        return value.strip()

    @field_validator("role")
    @classmethod
    def check_role(cls, value: str) -> str:
        return require_text(value, "Role is required")


class LoginRequest(CamelModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return require_text(value, "Email is required").strip()

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return require_text(value, "Password is required")


class ProfileUpdateRequest(CamelModel):
    first_name: str = Field(min_length=2, max_length=50)
    last_name: str = Field(min_length=2, max_length=50)
    expertise: Optional[str] = Field(default=None, max_length=100)
    bio: Optional[str] = Field(default=None, max_length=500)
    institution: Optional[str] = None
    avatar: Optional[str] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def check_names(cls, value: str) -> str:
        return require_text(value, "Name is required").strip()


class UserResponse(CamelModel):
    """Public view of a user."""

    id: str
    email: str
    role: UserRole
    active: bool = True
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    institution: Optional[str] = None
    avatar: Optional[str] = None
    bio: Optional[str] = None
    expertise: Optional[str] = None
    created_date: Optional[datetime] = None

    @classmethod
    def from_model(cls, user: UserModel) -> "UserResponse":
        profile = user.profile or {}
        return cls(
            id=user.id,
            email=user.email,
            role=user.role,
            active=user.active,
            first_name=profile.get("firstName"),
            last_name=profile.get("lastName"),
            institution=profile.get("institution"),
            avatar=profile.get("avatar"),
            bio=profile.get("bio"),
            expertise=profile.get("expertise"),
            created_date=user.created_date,
        )


class JwtAuthenticationResponse(CamelModel):
    access_token: str
    token_type: str = "Bearer"
    user: UserResponse


class Principal(BaseModel):
    """The authenticated caller resolved from a bearer token."""

    id: str
    email: str
    role: UserRole
