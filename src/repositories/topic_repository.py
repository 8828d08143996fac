from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from models.topic import TopicModel
from utils.clock import MonotonicClock
from .base import contains_ignore_case, delete_model, save_audited


class TopicRepository:
    """Typed access to the ``topics`` collection."""

    def __init__(self, db: Session, clock: Optional[Callable] = None):
        self.db = db
        self.clock = clock or MonotonicClock()

    def _query(self):
        return self.db.query(TopicModel).order_by(TopicModel.created_date)

    def find_by_id(self, topic_id: str) -> Optional[TopicModel]:
        return self.db.get(TopicModel, topic_id)

    def find_all(self) -> List[TopicModel]:
        return self._query().all()

    def find_by_course_id(self, course_id: str) -> List[TopicModel]:
        return self._query().filter(TopicModel.course_id == course_id).all()

    def find_by_name_containing_ignore_case(self, name: str) -> List[TopicModel]:
        return self._query().filter(contains_ignore_case(TopicModel.name, name)).all()

    def save(self, topic: TopicModel) -> TopicModel:
        return save_audited(self.db, topic, self.clock)

    def delete(self, topic: TopicModel) -> None:
        delete_model(self.db, topic)
