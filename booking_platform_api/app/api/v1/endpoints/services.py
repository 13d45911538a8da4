"""
Service endpoints for API v1.

Services are the bookable offerings of providers.  Anyone may browse
them; providers create services for themselves and administrators for
any provider.  Changes require owning the service.  Images are added
with a multipart upload of up to ten files.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from booking_platform_api.app.core.errors import http_error
from booking_platform_api.app.core.security import ADMIN, PROVIDER, require_roles
from booking_platform_api.app.schemas.service import ServiceCreate, ServiceRead, ServiceStatus, ServiceUpdate
from booking_platform_api.app.services.service_service import ServiceService


router = APIRouter()


@router.get("/", response_model=List[ServiceRead])
async def list_services(
    provider_id: Optional[int] = Query(None),
    status_filter: Optional[ServiceStatus] = Query(None, alias="status"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[ServiceRead]:
    return await ServiceService.list_services(
        provider_id=provider_id, status=status_filter, limit=limit, offset=offset
    )


@router.post("/", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
async def create_service(
    service: ServiceCreate,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> ServiceRead:
    try:
        return await ServiceService.create_service(service, current_user)
    except ValueError as e:
        raise http_error(e)


@router.get("/{service_id}", response_model=ServiceRead)
async def get_service(service_id: int) -> ServiceRead:
    try:
        return await ServiceService.get_service(service_id)
    except ValueError as e:
        raise http_error(e)


@router.put("/{service_id}", response_model=ServiceRead)
async def update_service(
    service_id: int,
    service: ServiceUpdate,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> ServiceRead:
    try:
        return await ServiceService.update_service(service_id, service, current_user)
    except ValueError as e:
        raise http_error(e)


@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_service(
    service_id: int,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> None:
    try:
        await ServiceService.delete_service(service_id, current_user)
    except ValueError as e:
        raise http_error(e)
    return None


@router.post("/{service_id}/images", response_model=ServiceRead)
async def upload_service_images(
    service_id: int,
    files: List[UploadFile] = File(..., description="Up to 10 jpg/png/gif images, 5 MB each"),
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> ServiceRead:
    try:
        return await ServiceService.add_images(service_id, files, current_user)
    except ValueError as e:
        raise http_error(e)
