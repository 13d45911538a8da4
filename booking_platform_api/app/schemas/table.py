"""Pydantic schemas for restaurant tables."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .common import check_discount


class TableCreate(BaseModel):
    table_code: str = Field(..., min_length=1, examples=["TB01"])
    restaurant_id: int
    table_type: str = Field(..., min_length=1, examples=["Window, 4 seats"])
    available_date: date
    active: bool = True
    price: float = Field(..., ge=0)
    discount_price: Optional[float] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_prices(self):
        check_discount(self.price, self.discount_price)
        return self


class TableUpdate(BaseModel):
    table_type: Optional[str] = Field(None, min_length=1)
    available_date: Optional[date] = None
    active: Optional[bool] = None
    price: Optional[float] = Field(None, ge=0)
    discount_price: Optional[float] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_prices(self):
        check_discount(self.price, self.discount_price)
        return self


class TableRead(BaseModel):
    id: int
    table_code: str
    restaurant_id: int
    table_type: str
    available_date: date
    picture: Optional[str] = None
    active: bool
    price: float
    discount_price: Optional[float] = None
