"""User management routes (ADMIN only)."""

from typing import List, Optional

from fastapi import APIRouter

from api.routes.auth import Admin
from core.dependencies import UserManagerDep
from schemas.enums import UserRole
from schemas.user import UserResponse

router = APIRouter(prefix="/users", tags=["User"])


@router.get("", response_model=List[UserResponse], summary="List users")
def list_users(
    current_user: Admin,
    user_manager: UserManagerDep,
    role: Optional[UserRole] = None,
) -> List[UserResponse]:
    return [UserResponse.from_model(u) for u in user_manager.list_users(role)]


@router.get("/{user_id}", response_model=UserResponse, summary="Get user")
def get_user(user_id: str, current_user: Admin, user_manager: UserManagerDep) -> UserResponse:
    return UserResponse.from_model(user_manager.get_user(user_id))


@router.put("/{user_id}/activate", response_model=UserResponse, summary="Activate user")
def activate_user(
    user_id: str, current_user: Admin, user_manager: UserManagerDep
) -> UserResponse:
    return UserResponse.from_model(user_manager.set_active(user_id, True))


@router.put("/{user_id}/deactivate", response_model=UserResponse, summary="Deactivate user")
def deactivate_user(
    user_id: str, current_user: Admin, user_manager: UserManagerDep
) -> UserResponse:
    """Deactivate an account; its tokens stop working immediately."""
    return UserResponse.from_model(user_manager.set_active(user_id, False))
