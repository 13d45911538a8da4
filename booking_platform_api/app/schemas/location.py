"""Pydantic schemas for service locations."""

from typing import Optional

from pydantic import BaseModel, Field


class LocationCreate(BaseModel):
    location_code: str = Field(..., min_length=1, examples=["LOC001"])
    location_name: str = Field(..., min_length=1, examples=["Da Nang"])
    description: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class LocationUpdate(BaseModel):
    location_name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class LocationRead(LocationCreate):
    id: int

    model_config = {
        "from_attributes": True,
    }
