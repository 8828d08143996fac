from sqlalchemy import Column, DateTime, String, Text

from .base import Base, new_id


class TopicModel(Base):
    __tablename__ = "topics"

    id = Column(String, primary_key=True, default=new_id)
    name = Column(String, index=True, nullable=False)
    description = Column(Text)
    # Not a foreign key; existence is checked when topics are written
    course_id = Column(String, index=True, nullable=False)
    created_date = Column(DateTime(timezone=True))
    last_modified_date = Column(DateTime(timezone=True))
