"""
Hotel endpoints for API v1.

Besides CRUD, hotels expose two read models for client screens:
``/details`` (hotel with its service, location and type name) and
``/filter``, a search by hotel type, price category, suitability and
room facility.  Filter parameters are comma‑separated id lists.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from booking_platform_api.app.core.errors import http_error
from booking_platform_api.app.core.security import ADMIN, PROVIDER, require_roles
from booking_platform_api.app.schemas.hotel import (
    HotelCreate,
    HotelDetail,
    HotelFilterResult,
    HotelRead,
    HotelUpdate,
)
from booking_platform_api.app.services.hotel_service import HotelService


router = APIRouter()


def parse_id_list(value: Optional[str], name: str) -> List[int]:
    """Parse ``"1,2,3"`` into ``[1, 2, 3]``; blank items are ignored."""
    if not value:
        return []
    try:
        return [int(item) for item in value.split(",") if item.strip()]
    except ValueError:
        raise ValueError(f"{name} must be a comma-separated list of ids")


@router.get("/", response_model=List[HotelRead])
async def list_hotels(
    service_id: Optional[int] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[HotelRead]:
    return await HotelService.list_hotels(service_id=service_id, limit=limit, offset=offset)


@router.get("/details", response_model=List[HotelDetail])
async def list_hotel_details() -> List[HotelDetail]:
    return await HotelService.list_details()


@router.get("/details/{hotel_code}", response_model=HotelDetail)
async def get_hotel_details(hotel_code: str) -> HotelDetail:
    try:
        return await HotelService.get_details_by_code(hotel_code)
    except ValueError as e:
        raise http_error(e)


@router.get("/filter", response_model=List[HotelFilterResult])
async def filter_hotels(
    price_categories: Optional[str] = Query(None, description="Comma-separated price category ids"),
    suitabilities: Optional[str] = Query(None, description="Comma-separated suitability ids"),
    facilities: Optional[str] = Query(None, description="Comma-separated room facility ids"),
    hotel_types: Optional[str] = Query(None, description="Comma-separated hotel type ids"),
) -> List[HotelFilterResult]:
    """Hotels matching every given filter, each with its matching rooms."""
    try:
        return await HotelService.filter_hotels(
            price_category_ids=parse_id_list(price_categories, "price_categories"),
            suitability_ids=parse_id_list(suitabilities, "suitabilities"),
            facility_ids=parse_id_list(facilities, "facilities"),
            hotel_type_ids=parse_id_list(hotel_types, "hotel_types"),
        )
    except ValueError as e:
        raise http_error(e)


@router.post("/", response_model=HotelRead, status_code=status.HTTP_201_CREATED)
async def create_hotel(
    hotel: HotelCreate,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> HotelRead:
    try:
        return await HotelService.create_hotel(hotel, current_user)
    except ValueError as e:
        raise http_error(e)


@router.get("/{hotel_id}", response_model=HotelRead)
async def get_hotel(hotel_id: int) -> HotelRead:
    try:
        return await HotelService.get_hotel(hotel_id)
    except ValueError as e:
        raise http_error(e)


@router.put("/{hotel_id}", response_model=HotelRead)
async def update_hotel(
    hotel_id: int,
    hotel: HotelUpdate,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> HotelRead:
    try:
        return await HotelService.update_hotel(hotel_id, hotel, current_user)
    except ValueError as e:
        raise http_error(e)


@router.delete("/{hotel_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_hotel(
    hotel_id: int,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> None:
    try:
        await HotelService.delete_hotel(hotel_id, current_user)
    except ValueError as e:
        raise http_error(e)
    return None
