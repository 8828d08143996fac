"""Course and topic schema definitions."""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from schemas.base import CamelModel, require_text
from schemas.enums import DifficultyLevel, resolve_difficulty


class CourseRequest(CamelModel):
    title: str = Field(max_length=200)
    description: Optional[str] = None
    subject: Optional[str] = None
    difficulty: Optional[DifficultyLevel] = Field(
        default=None,
        description="BEGINNER, INTERMEDIATE, ADVANCED or EXPERT (case-insensitive).",
    )
    published: bool = False

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        return require_text(value, "Title is required").strip()

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


class CourseResponse(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    subject: Optional[str] = None
    difficulty: Optional[DifficultyLevel] = None
    created_by: Optional[str] = None
    created_date: Optional[datetime] = None
    last_modified_date: Optional[datetime] = None
    published: bool = False


class TopicRequest(CamelModel):
    name: str = Field(max_length=200)
    description: Optional[str] = None
    course_id: str = Field(description="Id of the course the topic belongs to.")

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return require_text(value, "Name is required").strip()

    @field_validator("course_id")
    @classmethod
    def check_course_id(cls, value: str) -> str:
        return require_text(value, "Course ID is required").strip()


class TopicResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    course_id: str
    created_date: Optional[datetime] = None
    last_modified_date: Optional[datetime] = None
