from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from models.user import UserModel
from schemas.enums import UserRole
from utils.clock import MonotonicClock
from .base import delete_model, save_audited


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository:
    """Typed access to the ``users`` collection."""

    def __init__(self, db: Session, clock: Optional[Callable] = None):
        self.db = db
        self.clock = clock or MonotonicClock()

    def find_by_id(self, user_id: str) -> Optional[UserModel]:
        return self.db.get(UserModel, user_id)

    def find_by_email(self, email: str) -> Optional[UserModel]:
        return (
            self.db.query(UserModel)
            .filter(UserModel.email == normalize_email(email))
            .first()
        )

    def find_active_user_by_email(self, email: str) -> Optional[UserModel]:
        return (
            self.db.query(UserModel)
            .filter(UserModel.email == normalize_email(email), UserModel.active.is_(True))
            .first()
        )

    def exists_by_email(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def find_all(self) -> List[UserModel]:
        return self.db.query(UserModel).order_by(UserModel.created_date).all()

    def find_by_role(self, role: UserRole) -> List[UserModel]:
        return (
            self.db.query(UserModel)
            .filter(UserModel.role == role)
            .order_by(UserModel.created_date)
            .all()
        )

    def save(self, user: UserModel) -> UserModel:
        user.email = normalize_email(user.email)
        return save_audited(self.db, user, self.clock)

    def delete(self, user: UserModel) -> None:
        delete_model(self.db, user)
