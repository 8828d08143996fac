from .content_repository import ContentHistoryRepository, LearningMaterialRepository
from .course_repository import CourseRepository
from .topic_repository import TopicRepository
from .user_repository import UserRepository, normalize_email

__all__ = [
    "ContentHistoryRepository",
    "CourseRepository",
    "LearningMaterialRepository",
    "TopicRepository",
    "UserRepository",
    "normalize_email",
]
