"""CRUD operations for tenant management module."""

from datetime import date

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Tenant


async def get_tenant_by_id(db: AsyncSession, tenant_id: int) -> Tenant | None:
    """Get a tenant by ID."""
    result = await db.execute(select(Tenant).where(Tenant.id == tenant_id))
    return result.scalar_one_or_none()


async def get_all_tenants(db: AsyncSession) -> list[Tenant]:
    """Get every tenant, grouped by property, newest move-in first."""
    result = await db.execute(
        select(Tenant).order_by(
            Tenant.property_address, Tenant.move_in_date.desc(), Tenant.id.desc()
        )
    )
    return list(result.scalars().all())


async def list_tenants(db: AsyncSession, property_address: str) -> list[Tenant]:
    """All tenants of a property, including moved-out ones, newest move-in first."""
    result = await db.execute(
        select(Tenant)
        .where(Tenant.property_address == property_address)
        .order_by(Tenant.move_in_date.desc(), Tenant.id.desc())
    )
    return list(result.scalars().all())


async def list_tenants_primary_first(
    db: AsyncSession, property_address: str
) -> list[Tenant]:
    """All tenants of a property with the primary tenant(s) first."""
    result = await db.execute(
        select(Tenant)
        .where(Tenant.property_address == property_address)
        .order_by(Tenant.is_primary.desc(), Tenant.move_in_date.desc(), Tenant.id)
    )
    return list(result.scalars().all())


async def list_active_tenants_as_of(
    db: AsyncSession, property_address: str, as_of: date
) -> list[Tenant]:
    """Tenants living at the property on ``as_of``, primary first."""
    tenants = await list_tenants_primary_first(db, property_address)
    return [t for t in tenants if t.tenancy.is_active_on(as_of)]


async def get_active_tenant(
    db: AsyncSession, property_address: str, as_of: date
) -> Tenant | None:
    """The primary tenant on ``as_of``, else the most recently moved-in one."""
    tenants = await list_active_tenants_as_of(db, property_address, as_of)
    return tenants[0] if tenants else None


async def create_tenant(db: AsyncSession, property_address: str, **kwargs) -> Tenant:
    """Create a new tenant."""
    tenant = Tenant(property_address=property_address, **kwargs)
    db.add(tenant)
    await db.flush()
    return tenant


async def update_tenant(db: AsyncSession, tenant: Tenant, **kwargs) -> Tenant:
    """Update a tenant.

    ``None`` values are written through so that optional fields such as
    ``move_out_date`` can be cleared.
    """
    for key, value in kwargs.items():
        if hasattr(tenant, key):
            setattr(tenant, key, value)
    await db.flush()
    return tenant


async def delete_tenant(db: AsyncSession, tenant: Tenant) -> None:
    await db.delete(tenant)
    await db.flush()


async def delete_tenants_for_property(db: AsyncSession, property_address: str) -> None:
    await db.execute(delete(Tenant).where(Tenant.property_address == property_address))
    await db.flush()
