"""CRUD operations for property management module."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .models import Owner, Property

# ----- Property CRUD -----


async def get_property_by_address(
    db: AsyncSession, property_address: str
) -> Property | None:
    """Get a property and its owners by address."""
    result = await db.execute(
        select(Property)
        .options(selectinload(Property.owners))
        .where(Property.property_address == property_address)
    )
    return result.scalar_one_or_none()


async def get_properties(db: AsyncSession) -> list[Property]:
    """Get all properties with their owners, ordered by address."""
    result = await db.execute(
        select(Property)
        .options(selectinload(Property.owners))
        .order_by(Property.property_address)
    )
    return list(result.scalars().all())


async def create_property(
    db: AsyncSession,
    property_address: str,
    owners: list[dict] | None = None,
    **kwargs,
) -> Property:
    """Create a new property, optionally with owners."""
    property_obj = Property(
        property_address=property_address,
        owners=[Owner(**fields) for fields in owners or []],
        **kwargs,
    )
    db.add(property_obj)
    await db.flush()
    return property_obj


async def update_property(db: AsyncSession, property_obj: Property, **kwargs) -> Property:
    """Update a property; ``None`` clears an optional field."""
    for key, value in kwargs.items():
        if hasattr(property_obj, key):
            setattr(property_obj, key, value)
    await db.flush()
    return property_obj


async def delete_property(db: AsyncSession, property_obj: Property) -> None:
    """Permanently delete a property and its owners."""
    await db.delete(property_obj)
    await db.flush()


# ----- Owner CRUD -----


async def get_owner_by_id(db: AsyncSession, owner_id: int) -> Owner | None:
    result = await db.execute(select(Owner).where(Owner.id == owner_id))
    return result.scalar_one_or_none()


async def get_owners_by_property(db: AsyncSession, property_id: int) -> list[Owner]:
    result = await db.execute(
        select(Owner).where(Owner.property_id == property_id).order_by(Owner.id)
    )
    return list(result.scalars().all())


async def get_owners_with_birthday(db: AsyncSession) -> list[Owner]:
    """Owners with a recorded birthday, with their property loaded."""
    result = await db.execute(
        select(Owner)
        .options(selectinload(Owner.property))
        .where(Owner.birthday.is_not(None))
    )
    return list(result.scalars().all())


async def create_owner(db: AsyncSession, property_id: int, **kwargs) -> Owner:
    owner = Owner(property_id=property_id, **kwargs)
    db.add(owner)
    await db.flush()
    return owner


async def update_owner(db: AsyncSession, owner: Owner, **kwargs) -> Owner:
    for key, value in kwargs.items():
        if hasattr(owner, key):
            setattr(owner, key, value)
    await db.flush()
    return owner


async def delete_owner(db: AsyncSession, owner: Owner) -> None:
    await db.delete(owner)
    await db.flush()
