"""Café offering endpoints for API v1."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from booking_platform_api.app.core.errors import http_error
from booking_platform_api.app.core.security import ADMIN, PROVIDER, require_roles
from booking_platform_api.app.schemas.coffee import CoffeeCreate, CoffeeRead, CoffeeUpdate
from booking_platform_api.app.services.coffee_service import CoffeeService


router = APIRouter()


@router.get("/", response_model=List[CoffeeRead])
async def list_coffees(
    service_id: Optional[int] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[CoffeeRead]:
    return await CoffeeService.list_coffees(service_id=service_id, limit=limit, offset=offset)


@router.post("/", response_model=CoffeeRead, status_code=status.HTTP_201_CREATED)
async def create_coffee(
    coffee: CoffeeCreate,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> CoffeeRead:
    try:
        return await CoffeeService.create_coffee(coffee, current_user)
    except ValueError as e:
        raise http_error(e)


@router.get("/{coffee_id}", response_model=CoffeeRead)
async def get_coffee(coffee_id: int) -> CoffeeRead:
    try:
        return await CoffeeService.get_coffee(coffee_id)
    except ValueError as e:
        raise http_error(e)


@router.put("/{coffee_id}", response_model=CoffeeRead)
async def update_coffee(
    coffee_id: int,
    coffee: CoffeeUpdate,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> CoffeeRead:
    try:
        return await CoffeeService.update_coffee(coffee_id, coffee, current_user)
    except ValueError as e:
        raise http_error(e)


@router.delete("/{coffee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_coffee(
    coffee_id: int,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> None:
    try:
        await CoffeeService.delete_coffee(coffee_id, current_user)
    except ValueError as e:
        raise http_error(e)
    return None


@router.post("/{coffee_id}/picture", response_model=CoffeeRead)
async def upload_coffee_picture(
    coffee_id: int,
    file: UploadFile = File(...),
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> CoffeeRead:
    try:
        return await CoffeeService.set_picture(coffee_id, file, current_user)
    except ValueError as e:
        raise http_error(e)
