from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from models.course import CourseModel
from schemas.enums import DifficultyLevel
from utils.clock import MonotonicClock
from .base import contains_ignore_case, delete_model, save_audited


class CourseRepository:
    """Typed access to the ``courses`` collection."""

    def __init__(self, db: Session, clock: Optional[Callable] = None):
        self.db = db
        self.clock = clock or MonotonicClock()

    def _query(self):
        return self.db.query(CourseModel).order_by(CourseModel.created_date)

    def find_by_id(self, course_id: str) -> Optional[CourseModel]:
        return self.db.get(CourseModel, course_id)

    def find_all(self) -> List[CourseModel]:
        return self._query().all()

    def find_by_created_by(self, user_id: str) -> List[CourseModel]:
        return self._query().filter(CourseModel.created_by == user_id).all()

    def find_by_subject(self, subject: str) -> List[CourseModel]:
        return self._query().filter(CourseModel.subject == subject).all()

    def find_by_difficulty(self, difficulty: DifficultyLevel) -> List[CourseModel]:
        return self._query().filter(CourseModel.difficulty == difficulty).all()

    def find_by_published(self, published: bool) -> List[CourseModel]:
        return self._query().filter(CourseModel.published.is_(published)).all()

    def find_by_title_containing_ignore_case(self, title: str) -> List[CourseModel]:
        return self._query().filter(contains_ignore_case(CourseModel.title, title)).all()

    def find_published_by_subject_and_difficulty(
        self, subject: str, difficulty: DifficultyLevel
    ) -> List[CourseModel]:
        return (
            self._query()
            .filter(
                CourseModel.subject == subject,
                CourseModel.difficulty == difficulty,
                CourseModel.published.is_(True),
            )
            .all()
        )

    def save(self, course: CourseModel) -> CourseModel:
        return save_audited(self.db, course, self.clock)

    def delete(self, course: CourseModel) -> None:
        delete_model(self.db, course)
