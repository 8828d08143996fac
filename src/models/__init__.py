from .base import Base
from .course import CourseModel
from .learning_material import ContentHistoryModel, LearningMaterialModel
from .topic import TopicModel
from .user import UserModel

__all__ = [
    "Base",
    "ContentHistoryModel",
    "CourseModel",
    "LearningMaterialModel",
    "TopicModel",
    "UserModel",
]
