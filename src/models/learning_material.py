"""Learning material and content history models."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from schemas.enums import ContentType, DifficultyLevel, FileFormat
from .base import Base, new_id


class LearningMaterialModel(Base):
    __tablename__ = "learning_materials"

    id = Column(String, primary_key=True, default=new_id)
    title = Column(String(200), index=True, nullable=False)
    type = Column(Enum(ContentType, native_enum=False, length=20), nullable=False)
    format = Column(Enum(FileFormat, native_enum=False, length=20))
    content = Column(Text)  # text, URL or server-local file path
    topic_id = Column(String, index=True, nullable=False)
    created_by = Column(String, index=True)
    created_date = Column(DateTime(timezone=True))
    last_modified_date = Column(DateTime(timezone=True))

    file_path = Column(String)
    mime_type = Column(String)
    file_size = Column(Integer)

    difficulty = Column(Enum(DifficultyLevel, native_enum=False, length=20))
    tags = Column(JSON, nullable=False, default=list)
    published = Column(Boolean, nullable=False, default=False)

    # Equals the version of the newest history row. SQLAlchemy adds
    # "WHERE version = <loaded value>" to every UPDATE and bumps it.
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


class ContentHistoryModel(Base):
    __tablename__ = "content_history"

    id = Column(String, primary_key=True, default=new_id)
    material_id = Column(String, index=True, nullable=False)
    title = Column(String(200))
    content = Column(Text)
    change_description = Column(String)
    changed_by = Column(String, index=True)
    change_date = Column(DateTime(timezone=True))
    version = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("material_id", "version", name="uq_content_history_material_version"),
    )
