"""Topic routes."""

from typing import List

from fastapi import APIRouter

from api.routes.auth import ContentAuthor
from core.dependencies import TopicManagerDep
from schemas.course import TopicRequest, TopicResponse

router = APIRouter(prefix="/topics", tags=["Topic"])


@router.get("", response_model=List[TopicResponse], summary="List topics")
def get_all_topics(topic_manager: TopicManagerDep):
    return topic_manager.list_topics()


@router.get("/search", response_model=List[TopicResponse], summary="Search by name")
def search_topics(topic_manager: TopicManagerDep, query: str = ""):
    return topic_manager.search(query)


@router.get(
    "/course/{course_id}", response_model=List[TopicResponse], summary="Topics of a course"
)
def get_topics_by_course(course_id: str, topic_manager: TopicManagerDep):
    return topic_manager.list_by_course(course_id)


@router.get("/{topic_id}", response_model=TopicResponse, summary="Get topic")
def get_topic_by_id(topic_id: str, topic_manager: TopicManagerDep):
    return topic_manager.get_topic(topic_id)


@router.post("", response_model=TopicResponse, summary="Create topic")
def create_topic(
    req: TopicRequest, current_user: ContentAuthor, topic_manager: TopicManagerDep
):
    return topic_manager.create_topic(req)


@router.put("/{topic_id}", response_model=TopicResponse, summary="Update topic")
def update_topic(
    topic_id: str,
    req: TopicRequest,
    current_user: ContentAuthor,
    topic_manager: TopicManagerDep,
):
    return topic_manager.update_topic(topic_id, req)


@router.delete("/{topic_id}", summary="Delete topic")
def delete_topic(
    topic_id: str, current_user: ContentAuthor, topic_manager: TopicManagerDep
) -> dict:
    topic_manager.delete_topic(topic_id)
    return {"success": True, "message": "Topic deleted successfully"}
