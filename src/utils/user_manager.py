"""User management utilities.

This module provides profile self-service and the admin operations on user
accounts: listing, lookup, activation and deactivation. Users are never
hard-deleted.
"""

import logging
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from models.user import UserModel
from repositories import UserRepository
from schemas.enums import UserRole
from schemas.user import ProfileUpdateRequest

logger = logging.getLogger(__name__)


class UserManager:
    """Manages user accounts and profiles using SQLAlchemy."""

    def __init__(self, db: Session, clock: Optional[Callable] = None):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
            clock: Audit timestamp source.
        """
        self.db = db
        self.users = UserRepository(db, clock)

    def get_user(self, user_id: str) -> UserModel:
        """Get a user by ID.

        Raises:
            NotFoundError: If no user has this ID.
        """
        user = self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def list_users(self, role: Optional[UserRole] = None) -> List[UserModel]:
        if role is not None:
            return self.users.find_by_role(role)
        return self.users.find_all()

    def update_profile(self, user_id: str, req: ProfileUpdateRequest) -> UserModel:
        """Overwrite the editable fields of a user's embedded profile.

        ``avatar`` and ``institution`` are only replaced when supplied.
        """
        user = self.get_user(user_id)
        profile = dict(user.profile or {})
        profile.update(
            {
                "firstName": req.first_name,
                "lastName": req.last_name,
                "expertise": req.expertise,
                "bio": req.bio,
            }
        )
        if req.avatar is not None:
            profile["avatar"] = req.avatar
        if req.institution is not None:
            profile["institution"] = req.institution
        # Reassign so the JSON column is marked dirty
        user.profile = profile

        self.users.save(user)
        self.db.commit()
        logger.info("Updated profile of user %s", user_id)
        return user

    def set_active(self, user_id: str, active: bool) -> UserModel:
        """Activate or deactivate an account.

        Deactivated users cannot log in and their tokens stop resolving.
        """
        user = self.get_user(user_id)
        user.active = active
        self.users.save(user)
        self.db.commit()
        logger.info("User %s %s", user_id, "activated" if active else "deactivated")
        return user
