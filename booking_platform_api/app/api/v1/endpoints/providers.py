"""
Provider profile endpoints for API v1.

Administrators manage provider profiles.  A provider account may read
its own profile through ``/me`` and update it; ownership is checked by
the service layer.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from booking_platform_api.app.core.errors import http_error
from booking_platform_api.app.core.security import ADMIN, PROVIDER, require_roles
from booking_platform_api.app.schemas.provider import ProviderCreate, ProviderRead, ProviderUpdate
from booking_platform_api.app.services.provider_service import ProviderService


router = APIRouter()


@router.get("/", response_model=List[ProviderRead])
async def list_providers(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    current_user: dict = Depends(require_roles(ADMIN)),
) -> List[ProviderRead]:
    return await ProviderService.list_providers(limit=limit, offset=offset)


@router.post("/", response_model=ProviderRead, status_code=status.HTTP_201_CREATED)
async def create_provider(
    provider: ProviderCreate,
    current_user: dict = Depends(require_roles(ADMIN)),
) -> ProviderRead:
    try:
        return await ProviderService.create_provider(provider, current_user)
    except ValueError as e:
        raise http_error(e)


@router.get("/me", response_model=ProviderRead)
async def get_my_provider(current_user: dict = Depends(require_roles(PROVIDER))) -> ProviderRead:
    provider = await ProviderService.get_provider_for_user(current_user["user_id"])
    if provider is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Provider not found")
    return provider


@router.get("/{provider_id}", response_model=ProviderRead)
async def get_provider(
    provider_id: int,
    current_user: dict = Depends(require_roles(ADMIN)),
) -> ProviderRead:
    try:
        return await ProviderService.get_provider(provider_id)
    except ValueError as e:
        raise http_error(e)


@router.put("/{provider_id}", response_model=ProviderRead)
async def update_provider(
    provider_id: int,
    provider: ProviderUpdate,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> ProviderRead:
    """Update a provider profile (admin, or the provider itself)."""
    try:
        return await ProviderService.update_provider(provider_id, provider, current_user)
    except ValueError as e:
        raise http_error(e)


@router.delete("/{provider_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_provider(
    provider_id: int,
    current_user: dict = Depends(require_roles(ADMIN)),
) -> None:
    """Delete a provider and every service it owns (admin only)."""
    try:
        await ProviderService.delete_provider(provider_id, current_user)
    except ValueError as e:
        raise http_error(e)
    return None
