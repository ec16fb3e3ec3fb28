"""Property management schemas for RentalTrack."""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from ..rent_management.schemas import RateIncreaseResponse
from ..tenant_management.schemas import TenantResponse
from .models import ServiceType

# ----- Owner Schemas -----


class OwnerInput(BaseModel):
    """Owner fields as entered on the landlord form."""

    name: str = Field(..., min_length=1, max_length=255)
    contact_number: str | None = Field(None, max_length=50)
    birthday: str | None = None
    residential_address: str | None = Field(None, max_length=255)


class OwnerCreate(OwnerInput):
    """Schema for adding an owner to an existing property."""

    property_address: str = Field(..., min_length=1, max_length=255)


class OwnerUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    contact_number: str | None = Field(None, max_length=50)
    birthday: str | None = None
    residential_address: str | None = Field(None, max_length=255)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value: str | None) -> str:
        # Omit the key to keep the current name; an owner always has one
        if value is None:
            raise ValueError("Owner name cannot be null")
        return value


class OwnerResponse(BaseModel):
    id: int
    property_id: int
    name: str
    contact_number: str | None = None
    birthday: date | None = None
    residential_address: str | None = None

    class Config:
        from_attributes = True


# ----- Property Schemas -----


class PropertyBase(BaseModel):
    key_number: str | None = Field(None, max_length=50)
    service_type: ServiceType | None = None
    strata_contact_number: str | None = Field(None, max_length=50)
    strata_management_company: str | None = Field(None, max_length=255)
    strata_contact_person: str | None = Field(None, max_length=255)


class PropertyCreate(PropertyBase):
    """Schema for creating a property with its owners."""

    property_address: str = Field(..., min_length=1, max_length=255)
    owners: list[OwnerInput] = Field(default_factory=list)


class PropertyUpdate(PropertyBase):
    """Schema for updating a property. The address cannot change."""


class PropertyResponse(PropertyBase):
    id: int
    property_address: str
    owners: list[OwnerResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


# ----- Reconciled view -----


class PropertyDetails(BaseModel):
    """A property joined with its owners, tenants and rate snapshot.

    ``rental_info`` is only present when the snapshot was set during the
    current tenancy.
    """

    property_address: str
    key_number: str | None = None
    service_type: ServiceType | None = None
    strata_contact_number: str | None = None
    strata_management_company: str | None = None
    strata_contact_person: str | None = None
    landlord_owners: list[OwnerResponse] = Field(default_factory=list)
    tenant: TenantResponse | None = None
    active_tenants: list[TenantResponse] = Field(default_factory=list)
    tenant_history: list[TenantResponse] = Field(default_factory=list)
    rental_info: RateIncreaseResponse | None = None
