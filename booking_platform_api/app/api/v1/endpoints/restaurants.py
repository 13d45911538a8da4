"""Restaurant endpoints for API v1."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from booking_platform_api.app.core.errors import http_error
from booking_platform_api.app.core.security import ADMIN, PROVIDER, require_roles
from booking_platform_api.app.schemas.restaurant import RestaurantCreate, RestaurantRead, RestaurantUpdate
from booking_platform_api.app.services.restaurant_service import RestaurantService


router = APIRouter()


@router.get("/", response_model=List[RestaurantRead])
async def list_restaurants(
    service_id: Optional[int] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[RestaurantRead]:
    return await RestaurantService.list_restaurants(service_id=service_id, limit=limit, offset=offset)


@router.post("/", response_model=RestaurantRead, status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    restaurant: RestaurantCreate,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> RestaurantRead:
    try:
        return await RestaurantService.create_restaurant(restaurant, current_user)
    except ValueError as e:
        raise http_error(e)


@router.get("/{restaurant_id}", response_model=RestaurantRead)
async def get_restaurant(restaurant_id: int) -> RestaurantRead:
    try:
        return await RestaurantService.get_restaurant(restaurant_id)
    except ValueError as e:
        raise http_error(e)


@router.put("/{restaurant_id}", response_model=RestaurantRead)
async def update_restaurant(
    restaurant_id: int,
    restaurant: RestaurantUpdate,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> RestaurantRead:
    try:
        return await RestaurantService.update_restaurant(restaurant_id, restaurant, current_user)
    except ValueError as e:
        raise http_error(e)


@router.delete("/{restaurant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_restaurant(
    restaurant_id: int,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> None:
    try:
        await RestaurantService.delete_restaurant(restaurant_id, current_user)
    except ValueError as e:
        raise http_error(e)
    return None
