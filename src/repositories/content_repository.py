"""Repositories for learning materials and their edit history."""

from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from models.learning_material import ContentHistoryModel, LearningMaterialModel
from schemas.enums import ContentType
from utils.clock import MonotonicClock
from .base import contains_ignore_case, delete_model, save_audited


class LearningMaterialRepository:
    """Typed access to the ``learning_materials`` collection."""

    def __init__(self, db: Session, clock: Optional[Callable] = None):
        self.db = db
        self.clock = clock or MonotonicClock()

    def _query(self):
        return self.db.query(LearningMaterialModel).order_by(
            LearningMaterialModel.created_date
        )

    def find_by_id(self, material_id: str) -> Optional[LearningMaterialModel]:
        return self.db.get(LearningMaterialModel, material_id)

    def find_all(self) -> List[LearningMaterialModel]:
        return self._query().all()

    def find_by_topic_id(self, topic_id: str) -> List[LearningMaterialModel]:
        return self._query().filter(LearningMaterialModel.topic_id == topic_id).all()

    def find_by_created_by(self, user_id: str) -> List[LearningMaterialModel]:
        return self._query().filter(LearningMaterialModel.created_by == user_id).all()

    def find_by_type(self, content_type: ContentType) -> List[LearningMaterialModel]:
        return self._query().filter(LearningMaterialModel.type == content_type).all()

    def find_by_published(self, published: bool) -> List[LearningMaterialModel]:
        return self._query().filter(LearningMaterialModel.published.is_(published)).all()

    def find_by_title_containing_ignore_case(self, title: str) -> List[LearningMaterialModel]:
        return (
            self._query()
            .filter(contains_ignore_case(LearningMaterialModel.title, title))
            .all()
        )

    def find_published_by_topic_id(self, topic_id: str) -> List[LearningMaterialModel]:
        return (
            self._query()
            .filter(
                LearningMaterialModel.topic_id == topic_id,
                LearningMaterialModel.published.is_(True),
            )
            .all()
        )

    def find_published_by_type(self, content_type: ContentType) -> List[LearningMaterialModel]:
        return (
            self._query()
            .filter(
                LearningMaterialModel.type == content_type,
                LearningMaterialModel.published.is_(True),
            )
            .all()
        )

    def save(self, material: LearningMaterialModel) -> LearningMaterialModel:
        """Insert or update a material.

        Raises:
            sqlalchemy.orm.exc.StaleDataError: If another writer changed the
                row since it was loaded.
        """
        return save_audited(self.db, material, self.clock)

    def delete(self, material: LearningMaterialModel) -> None:
        delete_model(self.db, material)


class ContentHistoryRepository:
    """Append-only access to the ``content_history`` collection."""

    def __init__(self, db: Session, clock: Optional[Callable] = None):
        self.db = db
        self.clock = clock or MonotonicClock()

    def find_by_material_id_order_by_version_desc(
        self, material_id: str
    ) -> List[ContentHistoryModel]:
        return (
            self.db.query(ContentHistoryModel)
            .filter(ContentHistoryModel.material_id == material_id)
            .order_by(ContentHistoryModel.version.desc())
            .all()
        )

    def find_by_changed_by(self, user_id: str) -> List[ContentHistoryModel]:
        return (
            self.db.query(ContentHistoryModel)
            .filter(ContentHistoryModel.changed_by == user_id)
            .order_by(ContentHistoryModel.change_date.desc())
            .all()
        )

    def save(self, entry: ContentHistoryModel) -> ContentHistoryModel:
        """Insert a history row, stamping ``change_date`` on first save.

        Raises:
            sqlalchemy.exc.IntegrityError: If the (material_id, version) pair
                already exists.
        """
        if entry.change_date is None:
            entry.change_date = self.clock()
        self.db.add(entry)
        self.db.flush()
        return entry
