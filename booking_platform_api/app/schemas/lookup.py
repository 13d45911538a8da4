"""
Pydantic schemas for the lookup tables used to classify services.

Lookup tables are small reference collections maintained by
administrators: facility types, room/table facilities, price
categories, suitabilities, cuisine types, dish types, hotel types,
restaurant types and coffee types.  Hotel and restaurant types are
restricted to fixed lists of names.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


HOTEL_TYPES = (
    "Homestay",
    "Toàn bộ căn nhà",
    "Căn hộ",
    "Khách sạn",
    "Căn hộ dịch vụ",
    "Nhà khách / Nhà nghỉ B&B",
    "Nhà nghỉ ven đường",
    "Nhà nghỉ",
    "Inn",
    "Biệt thự",
    "Toàn bộ nhà trệt",
    "Khách sạn con nhộng",
    "Nông trại",
    "Khách sạn tình yêu",
)

RESTAURANT_TYPES = (
    "Restaurants",
    "Quick Bites",
    "Coffee & Tea",
    "Dessert",
    "Bakeries",
    "Bars & Pubs",
    "Delivery Only",
    "Specialty Food Market",
    "Dine With a Local Chef",
)

FacilityServiceType = Literal["hotel", "restaurant", "cafe"]
FacilityTarget = Literal["Room", "Table"]


# Facility types ----------------------------------------------------------

class FacilityTypeCreate(BaseModel):
    facility_type_code: str = Field(..., min_length=1, examples=["FT001"])
    name: str = Field(..., min_length=1, examples=["Swimming pool"])
    service_type: FacilityServiceType


class FacilityTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    service_type: Optional[FacilityServiceType] = None


class FacilityTypeRead(FacilityTypeCreate):
    id: int


# Facilities (attached to rooms and tables) -------------------------------

class FacilityCreate(BaseModel):
    facility_code: str = Field(..., min_length=1, examples=["FAC001"])
    name: str = Field(..., min_length=1, examples=["Air conditioning"])
    service_type: FacilityTarget


class FacilityUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    service_type: Optional[FacilityTarget] = None


class FacilityRead(FacilityCreate):
    id: int


# Price categories --------------------------------------------------------

class PriceCategoryCreate(BaseModel):
    price_category_code: str = Field(..., min_length=1, examples=["PC001"])
    cheap: float = Field(..., ge=0)
    mid_range: float = Field(..., ge=0)
    luxury: float = Field(..., ge=0)


class PriceCategoryUpdate(BaseModel):
    cheap: Optional[float] = Field(None, ge=0)
    mid_range: Optional[float] = Field(None, ge=0)
    luxury: Optional[float] = Field(None, ge=0)


class PriceCategoryRead(PriceCategoryCreate):
    id: int


# Suitabilities -----------------------------------------------------------

class SuitabilityCreate(BaseModel):
    suitability_code: str = Field(..., min_length=1, examples=["SU001"])
    name: str = Field(..., min_length=1, examples=["Family"])


class SuitabilityUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)


class SuitabilityRead(SuitabilityCreate):
    id: int


# Cuisine and dish types --------------------------------------------------

class CuisineTypeCreate(BaseModel):
    type: str = Field(..., min_length=1, examples=["Vietnamese"])


class CuisineTypeUpdate(BaseModel):
    type: Optional[str] = Field(None, min_length=1)


class CuisineTypeRead(CuisineTypeCreate):
    id: int


class DishTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, examples=["Seafood"])


class DishTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)


class DishTypeRead(DishTypeCreate):
    id: int


# Hotel and restaurant types ----------------------------------------------

def _check_member(value: Optional[str], allowed: tuple, label: str) -> Optional[str]:
    if value is not None and value not in allowed:
        raise ValueError(f"{label} must be one of: {', '.join(allowed)}")
    return value


class HotelTypeCreate(BaseModel):
    type: str = Field(..., examples=["Khách sạn"])

    @field_validator("type")
    @classmethod
    def check_type(cls, v):
        return _check_member(v, HOTEL_TYPES, "Hotel type")


class HotelTypeUpdate(HotelTypeCreate):
    pass


class HotelTypeRead(BaseModel):
    id: int
    type: str


class RestaurantTypeCreate(BaseModel):
    type: str = Field(..., examples=["Quick Bites"])

    @field_validator("type")
    @classmethod
    def check_type(cls, v):
        return _check_member(v, RESTAURANT_TYPES, "Restaurant type")


class RestaurantTypeUpdate(RestaurantTypeCreate):
    pass


class RestaurantTypeRead(BaseModel):
    id: int
    type: str


# Coffee types ------------------------------------------------------------

class CoffeeTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, examples=["Espresso"])
    description: Optional[str] = None


class CoffeeTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None


class CoffeeTypeRead(CoffeeTypeCreate):
    id: int


class RestaurantFilterOptions(BaseModel):
    """Everything a client needs to build the restaurant filter panel."""

    cuisine_types: List[CuisineTypeRead]
    dish_types: List[DishTypeRead]
    restaurant_types: List[RestaurantTypeRead]
