"""
Pydantic schemas for hotels.

A hotel hangs off a service and adds a star rating, an optional hotel
type and a room capacity.  ``HotelDetail`` is the read model used by
the details and filter endpoints: it resolves the hotel's service, the
service location and the hotel type name.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .location import LocationRead
from .room import RoomRead
from .service import ServiceRead


class HotelCreate(BaseModel):
    hotel_code: str = Field(..., min_length=1, examples=["HT001"])
    service_id: int
    hotel_type_id: Optional[int] = None
    star_rating: float = Field(..., ge=1, le=5)
    room_capacity: int = Field(..., ge=0)


class HotelUpdate(BaseModel):
    hotel_type_id: Optional[int] = None
    star_rating: Optional[float] = Field(None, ge=1, le=5)
    room_capacity: Optional[int] = Field(None, ge=0)


class HotelRead(BaseModel):
    id: int
    hotel_code: str
    service_id: int
    hotel_type_id: Optional[int] = None
    star_rating: float
    room_capacity: Optional[int] = None


class HotelWithRooms(HotelRead):
    rooms: List[RoomRead] = []


class HotelDetail(HotelRead):
    hotel_type: Optional[str] = None
    service: Optional[ServiceRead] = None
    location: Optional[LocationRead] = None


class HotelFilterResult(HotelDetail):
    """A hotel matching the filter together with its matching rooms."""

    rooms: List[RoomRead] = []
