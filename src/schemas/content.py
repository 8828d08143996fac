"""Learning material and content history schema definitions."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from schemas.base import CamelModel, require_text
from schemas.enums import ContentType, DifficultyLevel, FileFormat, resolve_difficulty

MAX_TAG_LENGTH = 50


class LearningMaterialRequest(CamelModel):
    title: str = Field(max_length=200)
    type: str = Field(description="Content type name, resolved case-insensitively.")
    format: Optional[str] = Field(default=None, description="FileFormat name.")
    content: Optional[str] = Field(
        default=None,
        description="Inline text, a URL, or the path returned by the upload endpoint.",
    )
    topic_id: str
    published: bool = False
    difficulty: Optional[DifficultyLevel] = None
    tags: Optional[List[str]] = None
    file_path: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = Field(default=None, ge=0)

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        return require_text(value, "Title is required").strip()

    @field_validator("type")
    @classmethod
    def check_type(cls, value: str) -> str:
        return require_text(value, "Content type is required")

    @field_validator("topic_id")
    @classmethod
    def check_topic_id(cls, value: str) -> str:
        return require_text(value, "Topic ID is required").strip()

    @field_validator("difficulty", mode="before")
    @classmethod
    def parse_difficulty(cls, value):
        if value is None or isinstance(value, DifficultyLevel):
            return value
        if isinstance(value, str) and not value.strip():
            return None
        try:
            return resolve_difficulty(str(value))
        except ValueError:
            raise ValueError(f"Unknown difficulty level: {value}")

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        """Strip, drop empties and duplicates, keep first-seen order."""
        if value is None:
            return None
        tags = []
        for tag in value:
            tag = tag.strip()
            if not tag or tag in tags:
                continue
            if len(tag) > MAX_TAG_LENGTH:
                raise ValueError(f"Tags must not exceed {MAX_TAG_LENGTH} characters")
            tags.append(tag)
        return tags


class LearningMaterialResponse(CamelModel):
    id: str
    title: str
    type: ContentType
    format: Optional[FileFormat] = None
    content: Optional[str] = None
    topic_id: str
    created_by: Optional[str] = None
    created_date: Optional[datetime] = None
    last_modified_date: Optional[datetime] = None
    file_path: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None
    difficulty: Optional[DifficultyLevel] = None
    tags: List[str] = Field(default_factory=list)
    published: bool = False
    version: int


class ContentHistoryResponse(CamelModel):
    id: str
    material_id: str
    title: Optional[str] = None
    content: Optional[str] = None
    change_description: Optional[str] = None
    changed_by: Optional[str] = None
    change_date: Optional[datetime] = None
    version: int
