"""Administrator profile endpoints for API v1 (admin only)."""

from typing import List

from fastapi import APIRouter, Depends, status

from booking_platform_api.app.core.errors import http_error
from booking_platform_api.app.core.security import ADMIN, require_roles
from booking_platform_api.app.schemas.provider import AdminCreate, AdminRead, AdminUpdate
from booking_platform_api.app.services.admin_service import AdminService


router = APIRouter()


@router.get("/", response_model=List[AdminRead])
async def list_admins(current_user: dict = Depends(require_roles(ADMIN))) -> List[AdminRead]:
    return await AdminService.list_admins()


@router.post("/", response_model=AdminRead, status_code=status.HTTP_201_CREATED)
async def create_admin(admin: AdminCreate, current_user: dict = Depends(require_roles(ADMIN))) -> AdminRead:
    try:
        return await AdminService.create_admin(admin, current_user)
    except ValueError as e:
        raise http_error(e)


@router.get("/{admin_id}", response_model=AdminRead)
async def get_admin(admin_id: int, current_user: dict = Depends(require_roles(ADMIN))) -> AdminRead:
    try:
        return await AdminService.get_admin(admin_id)
    except ValueError as e:
        raise http_error(e)


@router.put("/{admin_id}", response_model=AdminRead)
async def update_admin(
    admin_id: int,
    admin: AdminUpdate,
    current_user: dict = Depends(require_roles(ADMIN)),
) -> AdminRead:
    try:
        return await AdminService.update_admin(admin_id, admin, current_user)
    except ValueError as e:
        raise http_error(e)


@router.delete("/{admin_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_admin(admin_id: int, current_user: dict = Depends(require_roles(ADMIN))) -> None:
    try:
        await AdminService.delete_admin(admin_id, current_user)
    except ValueError as e:
        raise http_error(e)
    return None
