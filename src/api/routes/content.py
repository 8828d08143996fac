"""Learning content routes."""

from typing import List

from fastapi import APIRouter, File, UploadFile

from api.routes.auth import ContentAuthor
from core.dependencies import ContentManagerDep
from schemas.content import (
    ContentHistoryResponse,
    LearningMaterialRequest,
    LearningMaterialResponse,
)
from schemas.enums import ContentType

router = APIRouter(prefix="/content", tags=["Content"])


@router.get("", response_model=List[LearningMaterialResponse], summary="List all content")
def get_all_content(content_manager: ContentManagerDep):
    return content_manager.get_all_content()


@router.get("/categories", response_model=List[str], summary="Content types")
def get_categories() -> List[str]:
    return [content_type.value for content_type in ContentType]


@router.get(
    "/search", response_model=List[LearningMaterialResponse], summary="Search by title"
)
def search_content(content_manager: ContentManagerDep, query: str = ""):
    """Case-insensitive title substring search; an empty query returns all."""
    return content_manager.search_content(query)


@router.get(
    "/my-content",
    response_model=List[LearningMaterialResponse],
    summary="Content created by the caller",
)
def get_my_content(current_user: ContentAuthor, content_manager: ContentManagerDep):
    return content_manager.get_content_by_creator(current_user.id)


@router.get(
    "/topic/{topic_id}",
    response_model=List[LearningMaterialResponse],
    summary="Published content of a topic",
)
def get_content_by_topic(topic_id: str, content_manager: ContentManagerDep):
    return content_manager.get_content_by_topic(topic_id)


@router.post("/upload", response_model=str, summary="Upload a content file")
def upload_file(
    current_user: ContentAuthor,
    content_manager: ContentManagerDep,
    file: UploadFile = File(..., description="Learning material file"),
) -> str:
    """Store a file and return its server path.

    The file is not linked to any material; clients put the returned path in
    a material's ``content`` or ``filePath``.
    """
    return content_manager.upload_file(file.file, file.filename, current_user.id)


@router.get("/{material_id}", response_model=LearningMaterialResponse, summary="Get content")
def get_content_by_id(material_id: str, content_manager: ContentManagerDep):
    return content_manager.get_content_by_id(material_id)


@router.get(
    "/{material_id}/history",
    response_model=List[ContentHistoryResponse],
    summary="Version history, newest first",
)
def get_content_history(material_id: str, content_manager: ContentManagerDep):
    return content_manager.get_content_history(material_id)


@router.post("", response_model=LearningMaterialResponse, summary="Create content")
def create_content(
    req: LearningMaterialRequest,
    current_user: ContentAuthor,
    content_manager: ContentManagerDep,
):
    return content_manager.create_content(req, current_user.id)


@router.put("/{material_id}", response_model=LearningMaterialResponse, summary="Update content")
def update_content(
    material_id: str,
    req: LearningMaterialRequest,
    current_user: ContentAuthor,
    content_manager: ContentManagerDep,
):
    return content_manager.update_content(
        material_id, req, current_user.id, current_user.role
    )


@router.delete("/{material_id}", summary="Delete content")
def delete_content(
    material_id: str,
    current_user: ContentAuthor,
    content_manager: ContentManagerDep,
) -> dict:
    content_manager.delete_content(material_id, current_user.id, current_user.role)
    return {"success": True, "message": "Content deleted successfully"}
