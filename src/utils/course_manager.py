"""Course and topic management.

Courses are ownership-gated: only their creator or an ADMIN may change them.
Topics are role-gated only, but must point at an existing course.
Deleting a course does not cascade to its topics or their materials.
"""

import logging
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from core.exceptions import ForbiddenError, NotFoundError, ValidationFailedError
from models.course import CourseModel
from models.topic import TopicModel
from repositories import CourseRepository, TopicRepository
from schemas.course import CourseRequest, TopicRequest
from schemas.enums import UserRole, resolve_difficulty
from utils.clock import MonotonicClock

logger = logging.getLogger(__name__)


class CourseManager:
    """Manages courses."""

    def __init__(self, db: Session, clock: Optional[Callable] = None):
        self.db = db
        self.courses = CourseRepository(db, clock or MonotonicClock())

    def get_course(self, course_id: str) -> CourseModel:
        course = self.courses.find_by_id(course_id)
        if course is None:
            raise NotFoundError("Course", course_id)
        return course

    def list_courses(self) -> List[CourseModel]:
        return self.courses.find_all()

    def list_published(self) -> List[CourseModel]:
        return self.courses.find_by_published(True)

    def list_by_difficulty(self, level: str) -> List[CourseModel]:
        """Courses of a difficulty level given by (case-insensitive) name.

        Raises:
            ValidationFailedError: If ``level`` is not a difficulty level.
        """
        try:
            difficulty = resolve_difficulty(level)
        except ValueError:
            raise ValidationFailedError(f"Unknown difficulty level: {level}")
        return self.courses.find_by_difficulty(difficulty)

    def list_by_subject(self, subject: str) -> List[CourseModel]:
        return self.courses.find_by_subject(subject)

    def list_by_creator(self, user_id: str) -> List[CourseModel]:
        return self.courses.find_by_created_by(user_id)

    def search(self, query: str) -> List[CourseModel]:
        return self.courses.find_by_title_containing_ignore_case(query)

    def can_user_modify_course(self, course: CourseModel, user_id: str, role: UserRole) -> bool:
        return role == UserRole.ADMIN or course.created_by == user_id

    def _require_modifiable(self, course_id: str, user_id: str, role: UserRole) -> CourseModel:
        course = self.get_course(course_id)
        if not self.can_user_modify_course(course, user_id, role):
            logger.warning("User %s denied write access to course %s", user_id, course_id)
            raise ForbiddenError("Unauthorized to modify this course")
        return course

    def create_course(self, req: CourseRequest, created_by: str) -> CourseModel:
        course = CourseModel(
            title=req.title,
            description=req.description,
            subject=req.subject,
            difficulty=req.difficulty,
            published=req.published,
            created_by=created_by,
        )
        self.courses.save(course)
        self.db.commit()
        logger.info("Created course %s", course.id)
        return course

    def update_course(
        self, course_id: str, req: CourseRequest, user_id: str, role: UserRole
    ) -> CourseModel:
        course = self._require_modifiable(course_id, user_id, role)
        course.title = req.title
        course.description = req.description
        course.subject = req.subject
        course.difficulty = req.difficulty
        course.published = req.published
        self.courses.save(course)
        self.db.commit()
        logger.info("Updated course %s", course_id)
        return course

    def delete_course(self, course_id: str, user_id: str, role: UserRole) -> None:
        course = self._require_modifiable(course_id, user_id, role)
        self.courses.delete(course)
        self.db.commit()
        logger.info("Deleted course %s", course_id)


class TopicManager:
    """Manages topics within courses."""

    def __init__(self, db: Session, clock: Optional[Callable] = None):
        self.db = db
        clock = clock or MonotonicClock()
        self.topics = TopicRepository(db, clock)
        self.courses = CourseRepository(db, clock)

    def _check_course(self, course_id: str) -> None:
        if self.courses.find_by_id(course_id) is None:
            raise NotFoundError("Course", course_id)

    def get_topic(self, topic_id: str) -> TopicModel:
        topic = self.topics.find_by_id(topic_id)
        if topic is None:
            raise NotFoundError("Topic", topic_id)
        return topic

    def list_topics(self) -> List[TopicModel]:
        return self.topics.find_all()

    def list_by_course(self, course_id: str) -> List[TopicModel]:
        return self.topics.find_by_course_id(course_id)

    def search(self, query: str) -> List[TopicModel]:
        return self.topics.find_by_name_containing_ignore_case(query)

    def create_topic(self, req: TopicRequest) -> TopicModel:
        self._check_course(req.course_id)
        topic = TopicModel(
            name=req.name,
            description=req.description,
            course_id=req.course_id,
        )
        self.topics.save(topic)
        self.db.commit()
        logger.info("Created topic %s in course %s", topic.id, topic.course_id)
        return topic

    def update_topic(self, topic_id: str, req: TopicRequest) -> TopicModel:
        topic = self.get_topic(topic_id)
        self._check_course(req.course_id)
        topic.name = req.name
        topic.description = req.description
        topic.course_id = req.course_id
        self.topics.save(topic)
        self.db.commit()
        logger.info("Updated topic %s", topic_id)
        return topic

    def delete_topic(self, topic_id: str) -> None:
        topic = self.get_topic(topic_id)
        self.topics.delete(topic)
        self.db.commit()
        logger.info("Deleted topic %s", topic_id)
