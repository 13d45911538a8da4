"""
Pydantic schemas for hotel rooms.

A room belongs to one hotel and describes a room type with its stock
(``available_rooms``), the date from which it can be booked, its price
and an optional discount, the guest capacity and the facilities it
offers.  Pictures are added through the upload endpoint.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from .common import check_discount


class Capacity(BaseModel):
    adults: int = Field(..., ge=1)
    children: int = Field(..., ge=0)


class RoomCreate(BaseModel):
    room_code: str = Field(..., min_length=1, examples=["R101"])
    hotel_id: int
    room_type: str = Field(..., min_length=1, examples=["Deluxe"])
    available_rooms: int = Field(..., ge=0)
    available_date: date
    price: float = Field(..., ge=0)
    discount_price: Optional[float] = Field(None, ge=0)
    active: bool = True
    capacity: Capacity
    facility_ids: List[int] = []

    @model_validator(mode="after")
    def check_prices(self):
        check_discount(self.price, self.discount_price)
        return self


class RoomUpdate(BaseModel):
    room_type: Optional[str] = Field(None, min_length=1)
    available_rooms: Optional[int] = Field(None, ge=0)
    available_date: Optional[date] = None
    price: Optional[float] = Field(None, ge=0)
    discount_price: Optional[float] = Field(None, ge=0)
    active: Optional[bool] = None
    capacity: Optional[Capacity] = None
    facility_ids: Optional[List[int]] = None

    @model_validator(mode="after")
    def check_prices(self):
        check_discount(self.price, self.discount_price)
        return self


class RoomRead(BaseModel):
    id: int
    room_code: str
    hotel_id: int
    room_type: str
    available_rooms: int
    available_date: date
    price: float
    discount_price: Optional[float] = None
    pictures: List[str] = []
    active: bool
    capacity: Capacity
    facility_ids: List[int] = []


class RoomBrief(BaseModel):
    id: int
    room_code: str
    room_type: str
    price: float
