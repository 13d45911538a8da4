"""
Pydantic schemas for invoices and revenue reports.

An invoice records a booking made by a user: the booked service (and,
for hotel stays, the room), the quantity, the total amount, the stay
window and two independent status fields.  ``payment_status`` is
``paid`` or ``unpaid``; ``status`` is one of ``pending``,
``confirmed``, ``cancelled`` or ``used`` and may be set to any value at
any time.

Only paid invoices count towards the revenue reports, which sum
``total_amount`` per room type for a provider.
"""

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from .room import RoomBrief
from .service import ServiceBrief
from .user import UserBrief


PaymentStatus = Literal["paid", "unpaid"]
InvoiceStatus = Literal["pending", "confirmed", "cancelled", "used"]


def _check_stay(check_in: Optional[date], check_out: Optional[date]) -> None:
    if check_in is not None and check_out is not None and check_out <= check_in:
        raise ValueError("Check-out date must be after the check-in date")


class InvoiceCreate(BaseModel):
    """Schema for creating an invoice.

    ``user_id`` defaults to the caller; only administrators may issue
    an invoice on behalf of another user.  ``issue_date`` defaults to
    the current time.
    """

    invoice_code: str = Field(..., min_length=1, examples=["INV001"])
    user_id: Optional[int] = None
    service_id: int
    room_id: Optional[int] = None
    quantity: int = Field(..., ge=1)
    total_amount: float = Field(..., ge=0)
    issue_date: Optional[datetime] = None
    payment_status: PaymentStatus = "unpaid"
    check_in_date: date
    check_out_date: date
    status: InvoiceStatus = "pending"

    @model_validator(mode="after")
    def check_dates(self):
        _check_stay(self.check_in_date, self.check_out_date)
        return self


class InvoiceUpdate(BaseModel):
    quantity: Optional[int] = Field(None, ge=1)
    total_amount: Optional[float] = Field(None, ge=0)
    payment_status: Optional[PaymentStatus] = None
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    status: Optional[InvoiceStatus] = None

    @model_validator(mode="after")
    def check_dates(self):
        _check_stay(self.check_in_date, self.check_out_date)
        return self


class InvoiceStatusUpdate(BaseModel):
    status: InvoiceStatus


class InvoiceRead(BaseModel):
    id: int
    invoice_code: str
    user_id: int
    service_id: Optional[int] = None
    room_id: Optional[int] = None
    quantity: int
    total_amount: float
    issue_date: datetime
    payment_status: PaymentStatus
    check_in_date: date
    check_out_date: date
    status: InvoiceStatus
    pictures: List[str] = []
    created_at: str
    updated_at: str


class ProviderBrief(BaseModel):
    id: int
    provider_code: str
    provider_name: str


class InvoiceDetail(InvoiceRead):
    """Invoice with its references resolved for listing screens."""

    user: Optional[UserBrief] = None
    service: Optional[ServiceBrief] = None
    provider: Optional[ProviderBrief] = None
    room: Optional[RoomBrief] = None


class RevenueItem(BaseModel):
    room_type: str
    revenue: float


class RevenueReport(BaseModel):
    data: List[RevenueItem]
