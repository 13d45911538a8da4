"""
Lookup table endpoints for API v1.

Every lookup table exposes the same five routes, so routers are built
by ``build_lookup_router`` from a service class and its schemas.
Reading is public; writing is limited to ``writers`` (administrators
by default).  The module also defines the restaurant filter routes,
which bundle several lookup tables for search screens, and the
facility listing by service type.
"""

from typing import Any, List, Sequence, Type

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from booking_platform_api.app.core.errors import http_error
from booking_platform_api.app.core.security import ADMIN, PROVIDER, require_roles
from booking_platform_api.app.schemas import lookup as schemas
from booking_platform_api.app.schemas.location import LocationCreate, LocationRead, LocationUpdate
from booking_platform_api.app.services import lookup_service as services
from booking_platform_api.app.services.location_service import LocationService


def build_lookup_router(
    service: Type[services.LookupService],
    create_model: Type[BaseModel],
    update_model: Type[BaseModel],
    read_model: Type[BaseModel],
    writers: Sequence[str] = (ADMIN,),
) -> APIRouter:
    """Return an ``APIRouter`` with list/get/create/update/delete routes."""
    router = APIRouter()
    can_write = require_roles(*writers)

    @router.get("/", response_model=List[read_model])
    async def list_records(
        limit: int = Query(100, ge=1, le=1000),
        offset: int = Query(0, ge=0),
    ) -> List[Any]:
        return await service.list(limit=limit, offset=offset)

    @router.get("/{record_id}", response_model=read_model)
    async def get_record(record_id: int) -> Any:
        try:
            return await service.get(record_id)
        except ValueError as e:
            raise http_error(e)

    @router.post("/", response_model=read_model, status_code=status.HTTP_201_CREATED)
    async def create_record(
        payload: create_model,  # type: ignore[valid-type]
        current_user: dict = Depends(can_write),
    ) -> Any:
        try:
            return await service.create(payload, current_user)
        except ValueError as e:
            raise http_error(e)

    @router.put("/{record_id}", response_model=read_model)
    async def update_record(
        record_id: int,
        payload: update_model,  # type: ignore[valid-type]
        current_user: dict = Depends(can_write),
    ) -> Any:
        try:
            return await service.update(record_id, payload, current_user)
        except ValueError as e:
            raise http_error(e)

    @router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_record(record_id: int, current_user: dict = Depends(can_write)) -> None:
        try:
            await service.delete(record_id, current_user)
        except ValueError as e:
            raise http_error(e)
        return None

    return router


locations = build_lookup_router(
    LocationService, LocationCreate, LocationUpdate, LocationRead, writers=(ADMIN, PROVIDER)
)
facility_types = build_lookup_router(
    services.FacilityTypeService,
    schemas.FacilityTypeCreate,
    schemas.FacilityTypeUpdate,
    schemas.FacilityTypeRead,
)
price_categories = build_lookup_router(
    services.PriceCategoryService,
    schemas.PriceCategoryCreate,
    schemas.PriceCategoryUpdate,
    schemas.PriceCategoryRead,
)
suitabilities = build_lookup_router(
    services.SuitabilityService,
    schemas.SuitabilityCreate,
    schemas.SuitabilityUpdate,
    schemas.SuitabilityRead,
)
cuisine_types = build_lookup_router(
    services.CuisineTypeService,
    schemas.CuisineTypeCreate,
    schemas.CuisineTypeUpdate,
    schemas.CuisineTypeRead,
)
dish_types = build_lookup_router(
    services.DishTypeService,
    schemas.DishTypeCreate,
    schemas.DishTypeUpdate,
    schemas.DishTypeRead,
)
hotel_types = build_lookup_router(
    services.HotelTypeService,
    schemas.HotelTypeCreate,
    schemas.HotelTypeUpdate,
    schemas.HotelTypeRead,
)
restaurant_types = build_lookup_router(
    services.RestaurantTypeService,
    schemas.RestaurantTypeCreate,
    schemas.RestaurantTypeUpdate,
    schemas.RestaurantTypeRead,
)
coffee_types = build_lookup_router(
    services.CoffeeTypeService,
    schemas.CoffeeTypeCreate,
    schemas.CoffeeTypeUpdate,
    schemas.CoffeeTypeRead,
)

facilities = APIRouter()


@facilities.get("/service-type/{service_type}", response_model=List[schemas.FacilityRead])
async def list_facilities_by_service_type(service_type: schemas.FacilityTarget) -> List[Any]:
    """Facilities offered by rooms (``Room``) or by tables (``Table``)."""
    return await services.FacilityService.list_by_service_type(service_type)


facilities.include_router(
    build_lookup_router(
        services.FacilityService,
        schemas.FacilityCreate,
        schemas.FacilityUpdate,
        schemas.FacilityRead,
    )
)

restaurant_filters = APIRouter()


@restaurant_filters.get("/filter", response_model=schemas.RestaurantFilterOptions)
async def restaurant_filter_options() -> schemas.RestaurantFilterOptions:
    """All cuisine types, dish types and restaurant types."""
    return await services.RestaurantFilterService.filter_options()


@restaurant_filters.get("/coffee", response_model=List[schemas.CoffeeTypeRead])
async def coffee_filter_options() -> List[Any]:
    return await services.RestaurantFilterService.coffee_types()
