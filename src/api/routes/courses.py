"""Course routes."""

from typing import List

from fastapi import APIRouter

from api.routes.auth import ContentAuthor
from core.dependencies import CourseManagerDep
from schemas.course import CourseRequest, CourseResponse
from schemas.enums import DifficultyLevel

router = APIRouter(prefix="/courses", tags=["Course"])


@router.get("", response_model=List[CourseResponse], summary="List courses")
def get_all_courses(course_manager: CourseManagerDep):
    return course_manager.list_courses()


@router.get("/published", response_model=List[CourseResponse], summary="Published courses")
def get_published_courses(course_manager: CourseManagerDep):
    return course_manager.list_published()


@router.get("/difficulty-levels", response_model=List[str], summary="Difficulty levels")
def get_difficulty_levels() -> List[str]:
    return [level.value for level in DifficultyLevel]


@router.get(
    "/difficulty/{level}",
    response_model=List[CourseResponse],
    summary="Courses by difficulty",
)
def get_courses_by_difficulty(level: str, course_manager: CourseManagerDep):
    return course_manager.list_by_difficulty(level)


@router.get(
    "/subject/{subject}", response_model=List[CourseResponse], summary="Courses by subject"
)
def get_courses_by_subject(subject: str, course_manager: CourseManagerDep):
    return course_manager.list_by_subject(subject)


@router.get("/search", response_model=List[CourseResponse], summary="Search by title")
def search_courses(course_manager: CourseManagerDep, query: str = ""):
    return course_manager.search(query)


@router.get("/my-courses", response_model=List[CourseResponse], summary="Caller's courses")
def get_my_courses(current_user: ContentAuthor, course_manager: CourseManagerDep):
    return course_manager.list_by_creator(current_user.id)


@router.get("/{course_id}", response_model=CourseResponse, summary="Get course")
def get_course_by_id(course_id: str, course_manager: CourseManagerDep):
    return course_manager.get_course(course_id)


@router.post("", response_model=CourseResponse, summary="Create course")
def create_course(
    req: CourseRequest,
    current_user: ContentAuthor,
    course_manager: CourseManagerDep,
):
    return course_manager.create_course(req, current_user.id)


@router.put("/{course_id}", response_model=CourseResponse, summary="Update course")
def update_course(
    course_id: str,
    req: CourseRequest,
    current_user: ContentAuthor,
    course_manager: CourseManagerDep,
):
    """Only the course's creator or an admin may update it."""
    return course_manager.update_course(course_id, req, current_user.id, current_user.role)


@router.delete("/{course_id}", summary="Delete course")
def delete_course(
    course_id: str,
    current_user: ContentAuthor,
    course_manager: CourseManagerDep,
) -> dict:
    """Only the course's creator or an admin may delete it. Topics are kept."""
    course_manager.delete_course(course_id, current_user.id, current_user.role)
    return {"success": True, "message": "Course deleted successfully"}
