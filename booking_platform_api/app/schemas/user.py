"""
Pydantic models for user accounts.

Defines schemas for registering users, logging in and reading user
information.  Passwords are accepted on input only and never returned.
A user's ``role`` decides which routes it may call: ``Admin``,
``Provider`` or ``Customer``.
"""

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field

from .coffee import CoffeeRead
from .hotel import HotelWithRooms
from .restaurant import RestaurantRead
from .service import ServiceRead

RoleName = Literal["Admin", "Provider", "Customer"]


class UserBase(BaseModel):
    user_code: str = Field(..., min_length=1, examples=["U001"])
    full_name: str = Field(..., min_length=1, examples=["Nguyen Van A"])
    phone_number: str = Field(..., min_length=1, examples=["0901234567"])
    email: EmailStr = Field(..., examples=["user@example.com"])
    user_name: str = Field(..., min_length=1, examples=["nguyenvana"])
    birth_date: date = Field(..., examples=["1995-04-12"])


class UserCreate(UserBase):
    """Schema used by administrators to create any kind of account."""

    password: str = Field(..., min_length=6)
    role: RoleName = "Customer"


class UserRegister(UserBase):
    """Public self‑registration.

    Only customer and provider accounts can be self‑registered; the
    administrator role is granted by an existing administrator.
    """

    password: str = Field(..., min_length=6)
    role: Literal["Provider", "Customer"] = "Customer"


class UserUpdate(BaseModel):
    """Partial update; only provided fields are changed."""

    full_name: Optional[str] = Field(None, min_length=1)
    phone_number: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    user_name: Optional[str] = Field(None, min_length=1)
    birth_date: Optional[date] = None
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[RoleName] = None
    active: Optional[bool] = None


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserRead(UserBase):
    """Schema for reading a user from the API."""

    id: int
    role: RoleName
    active: bool

    model_config = {
        "from_attributes": True,
    }


class UserBrief(BaseModel):
    id: int
    full_name: str
    email: str


class ServiceTree(ServiceRead):
    """A provider's service with everything hanging off it."""

    hotels: List[HotelWithRooms] = []
    restaurants: List[RestaurantRead] = []
    coffees: List[CoffeeRead] = []


class UserProfile(UserRead):
    """A user and, for provider accounts, the full tree of its services."""

    services: List[ServiceTree] = []
