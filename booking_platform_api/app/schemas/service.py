"""
Pydantic schemas for services.

A service is a bookable offering (a hotel stay, a restaurant, a café)
owned by a provider.  It carries a base price with an optional
discount, a status, a location and lists of references to facility
types, price categories and suitabilities.  Review ids are collected
automatically as reviews are written and cannot be set directly.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from .common import check_discount
from .location import LocationRead


ServiceStatus = Literal["Active", "Inactive"]


class ServiceCreate(BaseModel):
    """Schema for creating a service.

    ``provider_id`` may be omitted by provider accounts; the caller's
    own provider record is used in that case.
    """

    service_code: str = Field(..., min_length=1, examples=["SRV001"])
    provider_id: Optional[int] = None
    location_id: Optional[int] = None
    service_name: str = Field(..., min_length=1, examples=["Seaside Hotel"])
    price: float = Field(..., ge=0)
    discount_price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None
    status: ServiceStatus = "Active"
    facility_type_ids: List[int] = []
    price_category_ids: List[int] = []
    suitability_ids: List[int] = []

    @model_validator(mode="after")
    def check_prices(self):
        check_discount(self.price, self.discount_price)
        return self


class ServiceUpdate(BaseModel):
    """Partial update.

    When only one of ``price`` and ``discount_price`` is sent, the
    service layer checks the pair against the stored value.
    """

    location_id: Optional[int] = None
    service_name: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    discount_price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None
    status: Optional[ServiceStatus] = None
    facility_type_ids: Optional[List[int]] = None
    price_category_ids: Optional[List[int]] = None
    suitability_ids: Optional[List[int]] = None

    @model_validator(mode="after")
    def check_prices(self):
        check_discount(self.price, self.discount_price)
        return self


class ServiceRead(BaseModel):
    id: int
    service_code: str
    provider_id: int
    location_id: Optional[int] = None
    service_name: str
    price: float
    discount_price: Optional[float] = None
    description: Optional[str] = None
    status: ServiceStatus
    facility_type_ids: List[int] = []
    price_category_ids: List[int] = []
    suitability_ids: List[int] = []
    review_ids: List[int] = []
    images: List[str] = []
    created_at: str
    updated_at: str

    model_config = {
        "from_attributes": True,
    }


class ServiceBrief(BaseModel):
    id: int
    service_code: str
    service_name: str
    provider_id: int
    location: Optional[LocationRead] = None
