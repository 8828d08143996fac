"""Learning content management.

CRUD on learning materials with an append-only version history, ownership
checks on writes, and storage of uploaded files.

Every material row carries a ``version`` counter that SQLAlchemy uses as an
optimistic guard: an UPDATE only applies if the row still holds the version
that was read. The history row for an edit takes the material's new version,
and both are committed together, so the history of a material is always the
contiguous range 1..n.
"""

import logging
import shutil
import uuid
from pathlib import Path
from typing import BinaryIO, Callable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy.orm import Session

from config import CONTENT_UPDATE_MAX_ATTEMPTS, FILE_UPLOAD_DIR
from core.exceptions import (
    ConcurrentUpdateError,
    ForbiddenError,
    NotFoundError,
    UploadFailedError,
)
from models.learning_material import ContentHistoryModel, LearningMaterialModel
from repositories import ContentHistoryRepository, LearningMaterialRepository
from schemas.content import LearningMaterialRequest
from schemas.enums import (
    UserRole,
    file_format_from_extension,
    resolve_content_type,
    resolve_file_format,
)
from utils.clock import MonotonicClock

logger = logging.getLogger(__name__)

CREATED_DESCRIPTION = "Content created"
UPDATED_DESCRIPTION = "Content updated"


class ContentManager:
    """Manages learning materials and their history."""

    def __init__(
        self,
        db: Session,
        clock: Optional[Callable] = None,
        upload_dir: Path = FILE_UPLOAD_DIR,
        max_attempts: int = CONTENT_UPDATE_MAX_ATTEMPTS,
    ):
        """Initialize ContentManager.

        Args:
            db: SQLAlchemy Session.
            clock: Audit timestamp source shared by both repositories.
            upload_dir: Directory receiving uploaded files.
            max_attempts: Update attempts before giving up on a contended row.
        """
        self.db = db
        clock = clock or MonotonicClock()
        self.materials = LearningMaterialRepository(db, clock)
        self.history = ContentHistoryRepository(db, clock)
        self.upload_dir = Path(upload_dir)
        self.max_attempts = max_attempts

    def _append_history(
        self, material: LearningMaterialModel, description: str, changed_by: str
    ) -> ContentHistoryModel:
        entry = ContentHistoryModel(
            material_id=material.id,
            title=material.title,
            content=material.content,
            change_description=description,
            changed_by=changed_by,
            version=material.version,
        )
        return self.history.save(entry)

    def _require(self, material_id: str) -> LearningMaterialModel:
        material = self.materials.find_by_id(material_id)
        if material is None:
            raise NotFoundError("Content", material_id)
        return material

    def _require_modifiable(
        self, material_id: str, user_id: str, role: UserRole
    ) -> LearningMaterialModel:
        material = self._require(material_id)
        if not self.can_user_modify_content(material_id, user_id, role):
            logger.warning("User %s denied write access to content %s", user_id, material_id)
            raise ForbiddenError()
        return material

    def create_content(
        self, req: LearningMaterialRequest, created_by: str
    ) -> LearningMaterialModel:
        """Create a material together with its version-1 history row."""
        material = LearningMaterialModel(
            title=req.title,
            type=resolve_content_type(req.type),
            format=resolve_file_format(req.format),
            content=req.content,
            topic_id=req.topic_id,
            created_by=created_by,
            published=req.published,
            difficulty=req.difficulty,
            tags=req.tags or [],
            file_path=req.file_path,
            mime_type=req.mime_type,
            file_size=req.file_size,
        )
        self.materials.save(material)
        self._append_history(material, CREATED_DESCRIPTION, created_by)
        self.db.commit()
        logger.info("Created content %s in topic %s", material.id, material.topic_id)
        return material

    def update_content(
        self,
        material_id: str,
        req: LearningMaterialRequest,
        user_id: str,
        role: UserRole,
    ) -> LearningMaterialModel:
        """Apply an edit and append the next history version.

        Raises:
            NotFoundError: If the material does not exist.
            ForbiddenError: If the caller may not modify it.
            ConcurrentUpdateError: If concurrent writers won every attempt.
        """
        for attempt in range(1, self.max_attempts + 1):
            material = self._require_modifiable(material_id, user_id, role)

            material.title = req.title
            material.content = req.content
            material.published = req.published
            if req.format is not None:
                material.format = resolve_file_format(req.format)
            if req.difficulty is not None:
                material.difficulty = req.difficulty
            if req.tags is not None:
                material.tags = list(req.tags)
            if req.file_path is not None:
                material.file_path = req.file_path
            if req.mime_type is not None:
                material.mime_type = req.mime_type
            if req.file_size is not None:
                material.file_size = req.file_size

            try:
                self.materials.save(material)
                self._append_history(material, UPDATED_DESCRIPTION, user_id)
                self.db.commit()
            except (StaleDataError, IntegrityError) as e:
                self.db.rollback()
                logger.warning(
                    "Concurrent edit of content %s (attempt %d/%d): %s",
                    material_id, attempt, self.max_attempts, e,
                )
                continue

            logger.info("Updated content %s to version %d", material_id, material.version)
            return material

        raise ConcurrentUpdateError(
            f"Content '{material_id}' is being edited concurrently, please retry"
        )

    def delete_content(self, material_id: str, user_id: str, role: UserRole) -> None:
        """Delete a material. Its history rows are kept."""
        material = self._require_modifiable(material_id, user_id, role)
        self.materials.delete(material)
        self.db.commit()
        logger.info("Deleted content %s", material_id)

    def get_content_by_id(self, material_id: str) -> LearningMaterialModel:
        return self._require(material_id)

    def get_all_content(self) -> List[LearningMaterialModel]:
        return self.materials.find_all()

    def get_content_by_topic(self, topic_id: str) -> List[LearningMaterialModel]:
        """Published materials of a topic."""
        return self.materials.find_published_by_topic_id(topic_id)

    def get_content_by_creator(self, user_id: str) -> List[LearningMaterialModel]:
        return self.materials.find_by_created_by(user_id)

    def search_content(self, query: str) -> List[LearningMaterialModel]:
        return self.materials.find_by_title_containing_ignore_case(query)

    def get_content_history(self, material_id: str) -> List[ContentHistoryModel]:
        """History rows of a material, newest version first.

        History outlives a deleted material, so only an id with neither a
        material nor history rows is reported as missing.
        """
        entries = self.history.find_by_material_id_order_by_version_desc(material_id)
        if not entries:
            self._require(material_id)
        return entries

    def upload_file(self, stream: BinaryIO, filename: Optional[str], user_id: str) -> str:
        """Store an uploaded file under a unique name.

        Args:
            stream: Readable binary file object.
            filename: Client-supplied name; directory parts are discarded.
            user_id: Uploader, for the log.

        Returns:
            Absolute path of the stored file.

        Raises:
            UploadFailedError: On any I/O error.
        """
        original = Path(filename or "").name or "upload"
        target = self.upload_dir / f"{uuid.uuid4()}_{original}"
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            with open(target, "xb") as out:
                shutil.copyfileobj(stream, out)
        except OSError as e:
            logger.error("Failed to store upload %s: %s", original, e)
            raise UploadFailedError() from e

        logger.info(
            "User %s uploaded %s (%s)",
            user_id, target.name, file_format_from_extension(original).value,
        )
        return str(target.resolve())

    def can_user_modify_content(
        self, material_id: str, user_id: str, role: UserRole
    ) -> bool:
        """True if the material exists and the caller is ADMIN or its INSTRUCTOR author."""
        material = self.materials.find_by_id(material_id)
        if material is None:
            return False
        if role == UserRole.ADMIN:
            return True
        return role == UserRole.INSTRUCTOR and material.created_by == user_id
