"""
Pydantic models for provider, administrator and customer profiles.

Each profile extends a user account with role specific data.  A
provider owns services; an administrator record stores an access
level; a customer record tracks loyalty points.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ProviderCreate(BaseModel):
    provider_code: str = Field(..., min_length=1, examples=["PROV001"])
    user_id: int = Field(..., description="Id of a user with the Provider role")
    provider_name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    service_description: Optional[str] = None


class ProviderUpdate(BaseModel):
    provider_name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = Field(None, min_length=1)
    service_description: Optional[str] = None
    active: Optional[bool] = None


class ProviderRead(BaseModel):
    id: int
    provider_code: str
    user_id: int
    provider_name: str
    address: str
    service_description: Optional[str] = None
    active: bool
    user_full_name: Optional[str] = None
    user_email: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }


class AdminCreate(BaseModel):
    admin_code: str = Field(..., min_length=1, examples=["ADM001"])
    user_id: int = Field(..., description="Id of a user with the Admin role")
    access_level: str = Field(..., min_length=1, examples=["SuperAdmin"])


class AdminUpdate(BaseModel):
    access_level: str = Field(..., min_length=1)


class AdminRead(BaseModel):
    id: int
    admin_code: str
    user_id: int
    access_level: str
    user_full_name: Optional[str] = None
    user_email: Optional[str] = None


class CustomerCreate(BaseModel):
    customer_code: str = Field(..., min_length=1, examples=["CUS001"])
    user_id: int
    loyalty_points: int = Field(0, ge=0)
    active: bool = True


class CustomerUpdate(BaseModel):
    loyalty_points: Optional[int] = Field(None, ge=0)
    active: Optional[bool] = None


class CustomerRead(BaseModel):
    id: int
    customer_code: str
    user_id: int
    loyalty_points: int
    active: bool
    user_full_name: Optional[str] = None
    user_email: Optional[str] = None
