"""Property management API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError
from ...database import get_db
from ..auth.dependencies import ReadUser, WriteUser
from ..commons import BaseResponse
from . import services
from .schemas import (
    OwnerCreate,
    OwnerResponse,
    OwnerUpdate,
    PropertyCreate,
    PropertyDetails,
    PropertyResponse,
    PropertyUpdate,
)

router = APIRouter(prefix="/properties", tags=["Properties"])
landlords_router = APIRouter(prefix="/landlords", tags=["Landlords"])
owners_router = APIRouter(prefix="/landlord-owners", tags=["Landlords"])


# ----- Reconciled property view -----


@router.get("", response_model=BaseResponse[list[PropertyDetails]])
async def list_properties(
    current_user: ReadUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get every property with its owners, tenants and current rental info."""
    details = await services.list_properties_with_details(db)
    return BaseResponse(success=True, data=details)


@router.get("/{property_address:path}", response_model=BaseResponse[PropertyDetails])
async def get_property(
    property_address: str,
    current_user: ReadUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get the reconciled view of one property."""
    details = await services.get_property_details(db, property_address)
    if details is None:
        raise NotFoundError(f"Property '{property_address}' not found")
    return BaseResponse(success=True, data=details)


# ----- Landlord (property) records -----


@landlords_router.get("", response_model=BaseResponse[list[PropertyResponse]])
async def list_landlords(
    current_user: ReadUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get every property record with its owners."""
    properties = await services.list_properties(db)
    return BaseResponse(
        success=True,
        data=[PropertyResponse.model_validate(p) for p in properties],
    )


@landlords_router.post(
    "",
    response_model=BaseResponse[PropertyResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_landlord(
    data: PropertyCreate,
    current_user: WriteUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Register a property together with its owners."""
    property_obj = await services.create_property(db, data)
    return BaseResponse(
        success=True,
        message="Property created successfully",
        data=PropertyResponse.model_validate(property_obj),
    )


@landlords_router.get(
    "/{property_address:path}/owners",
    response_model=BaseResponse[list[OwnerResponse]],
)
async def list_property_owners(
    property_address: str,
    current_user: ReadUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    owners = await services.list_owners(db, property_address)
    return BaseResponse(
        success=True,
        data=[OwnerResponse.model_validate(o) for o in owners],
    )


@landlords_router.get(
    "/{property_address:path}", response_model=BaseResponse[PropertyResponse]
)
async def get_landlord(
    property_address: str,
    current_user: ReadUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    property_obj = await services.get_property(db, property_address)
    return BaseResponse(
        success=True,
        data=PropertyResponse.model_validate(property_obj),
    )


@landlords_router.put(
    "/{property_address:path}", response_model=BaseResponse[PropertyResponse]
)
async def update_landlord(
    property_address: str,
    data: PropertyUpdate,
    current_user: WriteUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Update the property fields of a landlord record."""
    property_obj = await services.update_property(db, property_address, data)
    return BaseResponse(
        success=True,
        message="Property updated successfully",
        data=PropertyResponse.model_validate(property_obj),
    )


@landlords_router.delete(
    "/{property_address:path}", response_model=BaseResponse[None]
)
async def delete_landlord(
    property_address: str,
    current_user: WriteUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete a property with its owners, tenants and rental records."""
    await services.delete_property(db, property_address)
    return BaseResponse(success=True, message="Property deleted successfully")


# ----- Owners -----


@owners_router.post(
    "",
    response_model=BaseResponse[OwnerResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_owner(
    data: OwnerCreate,
    current_user: WriteUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Add an owner to an existing property."""
    owner = await services.create_owner(db, data)
    return BaseResponse(
        success=True,
        message="Owner added successfully",
        data=OwnerResponse.model_validate(owner),
    )


@owners_router.put("/{owner_id}", response_model=BaseResponse[OwnerResponse])
async def update_owner(
    owner_id: int,
    data: OwnerUpdate,
    current_user: WriteUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    owner = await services.update_owner(db, owner_id, data)
    return BaseResponse(
        success=True,
        message="Owner updated successfully",
        data=OwnerResponse.model_validate(owner),
    )


@owners_router.delete("/{owner_id}", response_model=BaseResponse[None])
async def delete_owner(
    owner_id: int,
    current_user: WriteUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await services.delete_owner(db, owner_id)
    return BaseResponse(success=True, message="Owner deleted successfully")
