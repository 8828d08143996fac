from sqlalchemy import Boolean, Column, DateTime, Enum, String, Text

from schemas.enums import DifficultyLevel
from .base import Base, new_id


class CourseModel(Base):
    __tablename__ = "courses"

    id = Column(String, primary_key=True, default=new_id)
    title = Column(String, index=True, nullable=False)
    description = Column(Text)
    subject = Column(String, index=True)
    difficulty = Column(Enum(DifficultyLevel, native_enum=False, length=20))
    created_by = Column(String, index=True)  # user id of the author
    created_date = Column(DateTime(timezone=True))
    last_modified_date = Column(DateTime(timezone=True))
    published = Column(Boolean, nullable=False, default=False)
