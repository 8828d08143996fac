"""User database model.

This module defines the User database model using SQLAlchemy. The user
profile is embedded as a JSON document.
"""

from sqlalchemy import JSON, Boolean, Column, DateTime, Enum, String

from schemas.enums import UserRole
from .base import Base, new_id


class UserModel(Base):
    """User database model."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, default=new_id)
    email = Column(String, unique=True, index=True, nullable=False)  # lower-case
    password_hash = Column(String, nullable=False)
    role = Column(Enum(UserRole, native_enum=False, length=20), nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    # firstName, lastName, avatar, bio, institution, expertise
    profile = Column(JSON, nullable=False, default=dict)
    created_date = Column(DateTime(timezone=True))
    last_modified_date = Column(DateTime(timezone=True))
