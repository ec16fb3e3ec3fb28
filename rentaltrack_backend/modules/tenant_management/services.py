"""Tenant management business logic services."""

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.dates import to_date
from ...core.exceptions import NotFoundError
from ...core.logging import get_logger
from ...database import unit_of_work
from ..commons.enums import ServiceType
from ..property_management import crud as property_crud
from . import crud
from .models import Tenant
from .schemas import TenantInput, TenantsCreate, TenantsUpsert, TenantUpdate
from .tenancy import Tenancy

logger = get_logger(__name__)


def _tenant_fields(data: TenantInput, service_type: ServiceType | None) -> dict:
    """Column values for a tenant row, with every date canonicalized.

    ``service_type`` is only included when given, so saving the tenant form
    without one keeps what existing tenants already have.
    """
    tenancy = Tenancy.from_input(data.move_in_date, data.move_out_date)
    fields = {
        "name": data.name.strip(),
        "move_in_date": tenancy.move_in_date,
        "move_out_date": tenancy.move_out_date,
        "contact_number": data.contact_number or None,
        "email": data.email or None,
        "birthday": to_date(data.birthday),
        "is_primary": data.is_primary,
    }
    if service_type is not None:
        fields["service_type"] = service_type
    return fields


async def _ensure_property(db: AsyncSession, property_address: str) -> None:
    if not await property_crud.get_property_by_address(db, property_address):
        raise NotFoundError(f"Property '{property_address}' not found")


async def _get_tenant_or_404(db: AsyncSession, tenant_id: int) -> Tenant:
    tenant = await crud.get_tenant_by_id(db, tenant_id)
    if not tenant:
        raise NotFoundError(f"Tenant with ID {tenant_id} not found")
    return tenant


async def create_tenants(db: AsyncSession, data: TenantsCreate) -> list[Tenant]:
    """Add one or more tenants to an existing property.

    Raises:
        NotFoundError: If the property does not exist
        InvalidInputError: If any tenant has bad dates
    """
    await _ensure_property(db, data.property_address)

    # Validate every row before writing any of them
    rows = [_tenant_fields(t, data.service_type) for t in data.tenants]

    async with unit_of_work(db):
        tenants = [
            await crud.create_tenant(db, data.property_address, **fields)
            for fields in rows
        ]

    logger.info(
        "Tenants created",
        extra={"property_address": data.property_address, "count": len(tenants)},
    )
    return tenants


async def upsert_tenants(
    db: AsyncSession, property_address: str, data: TenantsUpsert
) -> list[Tenant]:
    """Save the tenant form of a property.

    Rows carrying an ``id`` update that tenant; rows without one are created.

    Raises:
        NotFoundError: If the property, or a referenced tenant of it, does not
            exist
    """
    await _ensure_property(db, property_address)
    rows = [(t.id, _tenant_fields(t, data.service_type)) for t in data.tenants]

    saved: list[Tenant] = []
    async with unit_of_work(db):
        for tenant_id, fields in rows:
            if tenant_id is None:
                saved.append(await crud.create_tenant(db, property_address, **fields))
                continue
            tenant = await _get_tenant_or_404(db, tenant_id)
            if tenant.property_address != property_address:
                raise NotFoundError(
                    f"Tenant with ID {tenant_id} not found at '{property_address}'"
                )
            saved.append(await crud.update_tenant(db, tenant, **fields))

    logger.info(
        "Tenants saved",
        extra={"property_address": property_address, "count": len(saved)},
    )
    return saved


async def update_tenant(db: AsyncSession, tenant_id: int, data: TenantUpdate) -> Tenant:
    """Update one tenant.

    The resulting move-in/move-out pair is validated as a whole, so moving
    the move-in date past an existing move-out date is refused too.
    """
    tenant = await _get_tenant_or_404(db, tenant_id)
    provided = data.model_dump(exclude_unset=True)

    move_in = (
        to_date(provided["move_in_date"])
        if provided.get("move_in_date")
        else tenant.move_in_date
    )
    move_out = (
        to_date(provided["move_out_date"])
        if "move_out_date" in provided
        else tenant.move_out_date
    )
    tenancy = Tenancy(move_in, move_out)

    fields = {
        key: value
        for key, value in provided.items()
        if key not in ("move_in_date", "move_out_date", "birthday")
        and value is not None
    }
    fields["move_in_date"] = tenancy.move_in_date
    fields["move_out_date"] = tenancy.move_out_date
    if "birthday" in provided:
        fields["birthday"] = to_date(provided["birthday"])

    async with unit_of_work(db):
        await crud.update_tenant(db, tenant, **fields)
    return tenant


async def delete_tenant(db: AsyncSession, tenant_id: int) -> None:
    tenant = await _get_tenant_or_404(db, tenant_id)
    async with unit_of_work(db):
        await crud.delete_tenant(db, tenant)
    logger.info("Tenant deleted", extra={"tenant_id": tenant_id})
