"""
User management endpoints for API v1.

Administrators list, create, update and delete accounts of any role.
``/by-code/{user_code}`` returns a public profile: the user and, for
provider accounts, every service they offer with its hotels (and
rooms), restaurants and coffees.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from booking_platform_api.app.core.errors import http_error
from booking_platform_api.app.core.security import ADMIN, require_roles
from booking_platform_api.app.schemas.user import RoleName, UserCreate, UserProfile, UserRead, UserUpdate
from booking_platform_api.app.services.user_service import UserService


router = APIRouter()


@router.get("/", response_model=List[UserRead])
async def list_users(
    role: Optional[RoleName] = Query(None, description="Filter by role"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    current_user: dict = Depends(require_roles(ADMIN)),
) -> List[UserRead]:
    return await UserService.list_users(role=role, limit=limit, offset=offset)


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    user: UserCreate,
    current_user: dict = Depends(require_roles(ADMIN)),
) -> UserRead:
    """Create an account with any role (admin only)."""
    try:
        return await UserService.create_user(user, current_user)
    except ValueError as e:
        raise http_error(e)


@router.get("/by-code/{user_code}", response_model=UserProfile)
async def get_user_profile(user_code: str) -> UserProfile:
    """Public profile of a user together with the services they provide."""
    try:
        return await UserService.get_profile_by_code(user_code)
    except ValueError as e:
        raise http_error(e)


@router.get("/{user_id}", response_model=UserRead)
async def get_user(user_id: int, current_user: dict = Depends(require_roles(ADMIN))) -> UserRead:
    try:
        return await UserService.get_user(user_id)
    except ValueError as e:
        raise http_error(e)


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: int,
    user: UserUpdate,
    current_user: dict = Depends(require_roles(ADMIN)),
) -> UserRead:
    """Update an account.  Switching the role to Provider creates a provider profile."""
    try:
        return await UserService.update_user(user_id, user, current_user)
    except ValueError as e:
        raise http_error(e)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, current_user: dict = Depends(require_roles(ADMIN))) -> None:
    try:
        await UserService.delete_user(user_id, current_user)
    except ValueError as e:
        raise http_error(e)
    return None
