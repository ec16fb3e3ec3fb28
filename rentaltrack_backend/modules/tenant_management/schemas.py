"""Tenant management schemas for RentalTrack.

Request dates are accepted as strings (``YYYY-MM-DD`` or any parseable date)
and canonicalized by the service layer; responses always carry
``YYYY-MM-DD``.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from ..commons.enums import ServiceType


class TenantInput(BaseModel):
    """One tenant row from the tenant form."""

    id: int | None = Field(None, description="Existing tenant to update (upsert only)")
    name: str = Field(..., min_length=1, max_length=255)
    move_in_date: str = Field(..., min_length=1)
    move_out_date: str | None = None
    contact_number: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=255)
    birthday: str | None = None
    is_primary: bool = False


class TenantsCreate(BaseModel):
    """Schema for adding tenants to a property."""

    property_address: str = Field(..., min_length=1, max_length=255)
    service_type: ServiceType | None = None
    tenants: list[TenantInput] = Field(..., min_length=1)


class TenantsUpsert(BaseModel):
    """Schema for saving the whole tenant list of a property."""

    service_type: ServiceType | None = None
    tenants: list[TenantInput] = Field(default_factory=list)


class TenantUpdate(BaseModel):
    """Schema for updating a single tenant."""

    name: str | None = Field(None, min_length=1, max_length=255)
    move_in_date: str | None = None
    move_out_date: str | None = None
    contact_number: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=255)
    birthday: str | None = None
    is_primary: bool | None = None
    service_type: ServiceType | None = None


class TenantResponse(BaseModel):
    """Schema for tenant response."""

    id: int
    property_address: str
    name: str
    move_in_date: date
    move_out_date: date | None = None
    contact_number: str | None = None
    email: str | None = None
    birthday: date | None = None
    is_primary: bool
    service_type: ServiceType | None = None
    created_at: datetime

    class Config:
        from_attributes = True
