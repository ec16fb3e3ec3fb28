"""Tenant management API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..auth.dependencies import ReadUser, WriteUser
from ..commons import BaseResponse
from . import crud, services
from .schemas import TenantResponse, TenantsCreate, TenantsUpsert, TenantUpdate

router = APIRouter(prefix="/tenants", tags=["Tenants"])


@router.get("", response_model=BaseResponse[list[TenantResponse]])
async def list_tenants(
    current_user: ReadUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get every tenant, current and past."""
    tenants = await crud.get_all_tenants(db)
    return BaseResponse(
        success=True,
        data=[TenantResponse.model_validate(t) for t in tenants],
    )


@router.post(
    "",
    response_model=BaseResponse[list[TenantResponse]],
    status_code=status.HTTP_201_CREATED,
)
async def create_tenants(
    data: TenantsCreate,
    current_user: WriteUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Add one or more tenants to a property."""
    tenants = await services.create_tenants(db, data)
    return BaseResponse(
        success=True,
        message="Tenants created successfully",
        data=[TenantResponse.model_validate(t) for t in tenants],
    )


@router.get(
    "/property/{property_address:path}",
    response_model=BaseResponse[list[TenantResponse]],
)
async def list_property_tenants(
    property_address: str,
    current_user: ReadUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get the tenants of a property, primary tenant first."""
    tenants = await crud.list_tenants_primary_first(db, property_address)
    return BaseResponse(
        success=True,
        data=[TenantResponse.model_validate(t) for t in tenants],
    )


@router.put(
    "/property/{property_address:path}",
    response_model=BaseResponse[list[TenantResponse]],
)
async def save_property_tenants(
    property_address: str,
    data: TenantsUpsert,
    current_user: WriteUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Save the tenant form of a property, updating or adding each row."""
    tenants = await services.upsert_tenants(db, property_address, data)
    return BaseResponse(
        success=True,
        message="Tenants saved successfully",
        data=[TenantResponse.model_validate(t) for t in tenants],
    )


@router.put("/{tenant_id}", response_model=BaseResponse[TenantResponse])
async def update_tenant(
    tenant_id: int,
    data: TenantUpdate,
    current_user: WriteUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    tenant = await services.update_tenant(db, tenant_id, data)
    return BaseResponse(
        success=True,
        message="Tenant updated successfully",
        data=TenantResponse.model_validate(tenant),
    )


@router.delete("/{tenant_id}", response_model=BaseResponse[None])
async def delete_tenant(
    tenant_id: int,
    current_user: WriteUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await services.delete_tenant(db, tenant_id)
    return BaseResponse(success=True, message="Tenant deleted successfully")
