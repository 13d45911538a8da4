"""Pydantic schemas for restaurants."""

from typing import List, Optional

from pydantic import BaseModel, Field


class RestaurantCreate(BaseModel):
    restaurant_code: str = Field(..., min_length=1, examples=["RS001"])
    service_id: int
    cuisine_type_ids: List[int] = Field(..., min_length=1)
    dish_type_ids: List[int] = []
    seating_capacity: int = Field(..., ge=1)
    restaurant_type_id: Optional[int] = None


class RestaurantUpdate(BaseModel):
    cuisine_type_ids: Optional[List[int]] = Field(None, min_length=1)
    dish_type_ids: Optional[List[int]] = None
    seating_capacity: Optional[int] = Field(None, ge=1)
    restaurant_type_id: Optional[int] = None


class RestaurantRead(BaseModel):
    id: int
    restaurant_code: str
    service_id: int
    cuisine_type_ids: List[int]
    dish_type_ids: List[int] = []
    seating_capacity: int
    restaurant_type_id: Optional[int] = None
