"""Pydantic schemas for café offerings."""

from typing import Optional

from pydantic import BaseModel, Field


class CoffeeCreate(BaseModel):
    coffee_code: str = Field(..., min_length=1, examples=["CF001"])
    service_id: int
    coffee_type: str = Field(..., min_length=1, examples=["Espresso"])
    average_price: float = Field(..., ge=0)


class CoffeeUpdate(BaseModel):
    coffee_type: Optional[str] = Field(None, min_length=1)
    average_price: Optional[float] = Field(None, ge=0)


class CoffeeRead(CoffeeCreate):
    id: int
    picture: Optional[str] = None
