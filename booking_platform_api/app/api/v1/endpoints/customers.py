"""Customer profile endpoints for API v1 (admin only)."""

from typing import List

from fastapi import APIRouter, Depends, Query, status

from booking_platform_api.app.core.errors import http_error
from booking_platform_api.app.core.security import ADMIN, require_roles
from booking_platform_api.app.schemas.provider import CustomerCreate, CustomerRead, CustomerUpdate
from booking_platform_api.app.services.customer_service import CustomerService


router = APIRouter()


@router.get("/", response_model=List[CustomerRead])
async def list_customers(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    current_user: dict = Depends(require_roles(ADMIN)),
) -> List[CustomerRead]:
    return await CustomerService.list_customers(limit=limit, offset=offset)


@router.post("/", response_model=CustomerRead, status_code=status.HTTP_201_CREATED)
async def create_customer(
    customer: CustomerCreate,
    current_user: dict = Depends(require_roles(ADMIN)),
) -> CustomerRead:
    try:
        return await CustomerService.create_customer(customer, current_user)
    except ValueError as e:
        raise http_error(e)


@router.get("/{customer_id}", response_model=CustomerRead)
async def get_customer(customer_id: int, current_user: dict = Depends(require_roles(ADMIN))) -> CustomerRead:
    try:
        return await CustomerService.get_customer(customer_id)
    except ValueError as e:
        raise http_error(e)


@router.put("/{customer_id}", response_model=CustomerRead)
async def update_customer(
    customer_id: int,
    customer: CustomerUpdate,
    current_user: dict = Depends(require_roles(ADMIN)),
) -> CustomerRead:
    try:
        return await CustomerService.update_customer(customer_id, customer, current_user)
    except ValueError as e:
        raise http_error(e)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(customer_id: int, current_user: dict = Depends(require_roles(ADMIN))) -> None:
    try:
        await CustomerService.delete_customer(customer_id, current_user)
    except ValueError as e:
        raise http_error(e)
    return None
