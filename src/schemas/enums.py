"""Enumerations shared by entities and DTOs, with their predicates."""

from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    STUDENT = "STUDENT"
    INSTRUCTOR = "INSTRUCTOR"
    ADMIN = "ADMIN"


class ContentType(str, Enum):
    LECTURE = "LECTURE"
    VIDEO = "VIDEO"
    QUIZ = "QUIZ"
    EXERCISE = "EXERCISE"
    READING = "READING"
    ASSIGNMENT = "ASSIGNMENT"


class DifficultyLevel(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"


class FileFormat(str, Enum):
    """File formats of uploaded learning materials.

    Each member's value is its name; display name, MIME type and extension
    live in ``FILE_FORMAT_INFO``.
    """

    TEXT = "TEXT"
    PDF = "PDF"
    WORD = "WORD"
    POWERPOINT = "POWERPOINT"
    IMAGE_PNG = "IMAGE_PNG"
    IMAGE_JPG = "IMAGE_JPG"
    IMAGE_GIF = "IMAGE_GIF"
    IMAGE_SVG = "IMAGE_SVG"
    VIDEO_MP4 = "VIDEO_MP4"
    VIDEO_WEBM = "VIDEO_WEBM"
    VIDEO_AVI = "VIDEO_AVI"
    AUDIO_MP3 = "AUDIO_MP3"
    AUDIO_WAV = "AUDIO_WAV"
    ZIP = "ZIP"
    JSON = "JSON"
    HTML = "HTML"
    MARKDOWN = "MARKDOWN"


# (display name, MIME type, extension)
FILE_FORMAT_INFO = {
    FileFormat.TEXT: ("Text", "text/plain", ".txt"),
    FileFormat.PDF: ("PDF Document", "application/pdf", ".pdf"),
    FileFormat.WORD: (
        "Word Document",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        ".docx",
    ),
    FileFormat.POWERPOINT: (
        "PowerPoint Presentation",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        ".pptx",
    ),
    FileFormat.IMAGE_PNG: ("PNG Image", "image/png", ".png"),
    FileFormat.IMAGE_JPG: ("JPEG Image", "image/jpeg", ".jpg"),
    FileFormat.IMAGE_GIF: ("GIF Image", "image/gif", ".gif"),
    FileFormat.IMAGE_SVG: ("SVG Image", "image/svg+xml", ".svg"),
    FileFormat.VIDEO_MP4: ("MP4 Video", "video/mp4", ".mp4"),
    FileFormat.VIDEO_WEBM: ("WebM Video", "video/webm", ".webm"),
    FileFormat.VIDEO_AVI: ("AVI Video", "video/x-msvideo", ".avi"),
    FileFormat.AUDIO_MP3: ("MP3 Audio", "audio/mpeg", ".mp3"),
    FileFormat.AUDIO_WAV: ("WAV Audio", "audio/wav", ".wav"),
    FileFormat.ZIP: ("ZIP Archive", "application/zip", ".zip"),
    FileFormat.JSON: ("JSON Data", "application/json", ".json"),
    FileFormat.HTML: ("HTML Document", "text/html", ".html"),
    FileFormat.MARKDOWN: ("Markdown", "text/markdown", ".md"),
}

# Names from the earlier three-member content type set
LEGACY_CONTENT_TYPES = {
    "TEXT": ContentType.LECTURE,
    "INTERACTIVE_EXERCISE": ContentType.EXERCISE,
}


# --- UserRole predicates ---


def can_create_content(role: UserRole) -> bool:
    return role in (UserRole.INSTRUCTOR, UserRole.ADMIN)


def can_manage_users(role: UserRole) -> bool:
    return role == UserRole.ADMIN


def resolve_role(raw: Optional[str]) -> UserRole:
    """Case-insensitive role lookup; anything unrecognised becomes STUDENT."""
    try:
        return UserRole((raw or "").strip().upper())
    except ValueError:
        return UserRole.STUDENT


# --- ContentType predicates ---


def is_file_upload_required(content_type: ContentType) -> bool:
    return content_type == ContentType.VIDEO


def supports_inline_content(content_type: ContentType) -> bool:
    return content_type != ContentType.VIDEO


def resolve_content_type(raw: Optional[str]) -> ContentType:
    """Resolve a client-supplied content type name.

    Matching ignores case and treats spaces as underscores. Legacy names are
    mapped onto the current set; unknown names fall back to LECTURE.
    """
    key = (raw or "").strip().upper().replace(" ", "_")
    if key in LEGACY_CONTENT_TYPES:
        return LEGACY_CONTENT_TYPES[key]
    try:
        return ContentType(key)
    except ValueError:
        return ContentType.LECTURE


# --- DifficultyLevel ---


def resolve_difficulty(raw: str) -> DifficultyLevel:
    """Case-insensitive difficulty lookup.

    Raises:
        ValueError: If ``raw`` names no difficulty level.
    """
    return DifficultyLevel(raw.strip().upper())


# --- FileFormat predicates ---


def display_name(fmt: FileFormat) -> str:
    return FILE_FORMAT_INFO[fmt][0]


def mime_type(fmt: FileFormat) -> str:
    return FILE_FORMAT_INFO[fmt][1]


def extension(fmt: FileFormat) -> str:
    return FILE_FORMAT_INFO[fmt][2]


def is_image_format(fmt: FileFormat) -> bool:
    return fmt in (
        FileFormat.IMAGE_PNG,
        FileFormat.IMAGE_JPG,
        FileFormat.IMAGE_GIF,
        FileFormat.IMAGE_SVG,
    )


def is_video_format(fmt: FileFormat) -> bool:
    return fmt in (FileFormat.VIDEO_MP4, FileFormat.VIDEO_WEBM, FileFormat.VIDEO_AVI)


def is_audio_format(fmt: FileFormat) -> bool:
    return fmt in (FileFormat.AUDIO_MP3, FileFormat.AUDIO_WAV)


def is_document_format(fmt: FileFormat) -> bool:
    return fmt in (FileFormat.PDF, FileFormat.WORD, FileFormat.POWERPOINT)


def file_format_from_mime_type(mime: Optional[str]) -> FileFormat:
    for fmt, (_, fmt_mime, _) in FILE_FORMAT_INFO.items():
        if fmt_mime == mime:
            return fmt
    return FileFormat.TEXT


def file_format_from_extension(filename: Optional[str]) -> FileFormat:
    """Derive a format from the last extension of ``filename``.

    Returns TEXT when there is no extension or it is not in the table.
    """
    if not filename or "." not in filename:
        return FileFormat.TEXT
    ext = filename[filename.rindex("."):].lower()
    for fmt, (_, _, fmt_ext) in FILE_FORMAT_INFO.items():
        if fmt_ext == ext:
            return fmt
    return FileFormat.TEXT


def resolve_file_format(raw: Optional[str]) -> Optional[FileFormat]:
    """Case-insensitive format lookup by name; None when absent or unknown."""
    if not raw:
        return None
    try:
        return FileFormat(raw.strip().upper())
    except ValueError:
        return None
