"""
Invoice endpoints for API v1.

Invoices are bookings.  Every route requires authentication; the
service layer decides who may read or change a given invoice.  The
static paths (``/orders``, ``/user/...``, ``/provider/...`` and the
revenue reports) are declared before ``/{invoice_id}`` so they are not
captured by it.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from booking_platform_api.app.core.errors import PermissionDeniedError, http_error
from booking_platform_api.app.core.security import ADMIN, PROVIDER, get_current_user, is_admin, require_roles
from booking_platform_api.app.schemas.invoice import (
    InvoiceCreate,
    InvoiceDetail,
    InvoiceRead,
    InvoiceStatusUpdate,
    InvoiceUpdate,
    RevenueReport,
)
from booking_platform_api.app.services.invoice_service import InvoiceService
from booking_platform_api.app.services.revenue_service import RevenueService


router = APIRouter()


def _check_revenue_access(user_id: int, current_user: dict) -> None:
    if user_id != current_user.get("user_id") and not is_admin(current_user):
        raise PermissionDeniedError("You can only view your own revenue")


@router.get("/", response_model=List[InvoiceRead])
async def list_invoices(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    current_user: dict = Depends(get_current_user),
) -> List[InvoiceRead]:
    """Administrators see every invoice, everyone else their own."""
    return await InvoiceService.list_invoices(current_user, limit=limit, offset=offset)


@router.post("/", response_model=InvoiceRead, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    invoice: InvoiceCreate,
    current_user: dict = Depends(get_current_user),
) -> InvoiceRead:
    try:
        return await InvoiceService.create_invoice(invoice, current_user)
    except ValueError as e:
        raise http_error(e)


@router.get("/orders", response_model=List[InvoiceDetail])
async def list_orders(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    current_user: dict = Depends(require_roles(ADMIN)),
) -> List[InvoiceDetail]:
    return await InvoiceService.list_orders(limit=limit, offset=offset)


@router.get("/user/{user_id}", response_model=List[InvoiceDetail])
async def list_user_invoices(
    user_id: int,
    current_user: dict = Depends(get_current_user),
) -> List[InvoiceDetail]:
    try:
        return await InvoiceService.list_for_user(user_id, current_user)
    except ValueError as e:
        raise http_error(e)


@router.get("/provider/{user_id}", response_model=List[InvoiceDetail])
async def list_provider_invoices(
    user_id: int,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> List[InvoiceDetail]:
    try:
        return await InvoiceService.list_for_provider(user_id, current_user)
    except ValueError as e:
        raise http_error(e)


@router.get("/revenue", response_model=RevenueReport)
async def monthly_revenue(
    user_id: int = Query(..., description="User id of the provider"),
    month: int = Query(..., description="Month number, 1-12"),
    year: Optional[int] = Query(None, description="Defaults to the current year"),
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> RevenueReport:
    """Paid revenue per room type for one month."""
    try:
        _check_revenue_access(user_id, current_user)
        return await RevenueService.monthly(user_id, month, year)
    except ValueError as e:
        raise http_error(e)


@router.get("/revenue/yearly", response_model=RevenueReport)
async def yearly_revenue(
    user_id: int = Query(...),
    year: Optional[int] = Query(None),
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> RevenueReport:
    try:
        _check_revenue_access(user_id, current_user)
        return await RevenueService.yearly(user_id, year)
    except ValueError as e:
        raise http_error(e)


@router.get("/{invoice_id}", response_model=InvoiceRead)
async def get_invoice(
    invoice_id: int,
    current_user: dict = Depends(get_current_user),
) -> InvoiceRead:
    try:
        return await InvoiceService.get_invoice(invoice_id, current_user)
    except ValueError as e:
        raise http_error(e)


@router.put("/{invoice_id}", response_model=InvoiceRead)
async def update_invoice(
    invoice_id: int,
    invoice: InvoiceUpdate,
    current_user: dict = Depends(get_current_user),
) -> InvoiceRead:
    try:
        return await InvoiceService.update_invoice(invoice_id, invoice, current_user)
    except ValueError as e:
        raise http_error(e)


@router.put("/{invoice_id}/status", response_model=InvoiceRead)
async def update_invoice_status(
    invoice_id: int,
    payload: InvoiceStatusUpdate,
    current_user: dict = Depends(get_current_user),
) -> InvoiceRead:
    try:
        return await InvoiceService.update_status(invoice_id, payload.status, current_user)
    except ValueError as e:
        raise http_error(e)


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(
    invoice_id: int,
    current_user: dict = Depends(get_current_user),
) -> None:
    try:
        await InvoiceService.delete_invoice(invoice_id, current_user)
    except ValueError as e:
        raise http_error(e)
    return None


@router.post("/{invoice_id}/pictures", response_model=InvoiceRead)
async def upload_invoice_pictures(
    invoice_id: int,
    files: List[UploadFile] = File(...),
    current_user: dict = Depends(get_current_user),
) -> InvoiceRead:
    try:
        return await InvoiceService.add_pictures(invoice_id, files, current_user)
    except ValueError as e:
        raise http_error(e)
