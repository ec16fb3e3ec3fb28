"""Persistence interface for rental rate snapshots and history."""

from datetime import date
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import RateHistory, RateIncrease

# ----- Snapshot -----


async def get_rate_record(
    db: AsyncSession, property_address: str
) -> RateIncrease | None:
    """Get the current rate snapshot of a property."""
    result = await db.execute(
        select(RateIncrease).where(RateIncrease.property_address == property_address)
    )
    return result.scalar_one_or_none()


async def get_all_rate_records(db: AsyncSession) -> list[RateIncrease]:
    result = await db.execute(
        select(RateIncrease).order_by(RateIncrease.property_address)
    )
    return list(result.scalars().all())


async def upsert_rate_record(
    db: AsyncSession, property_address: str, fields: dict[str, Any]
) -> RateIncrease:
    """Overwrite the snapshot of a property, creating it if missing."""
    record = await get_rate_record(db, property_address)
    if record is None:
        record = RateIncrease(property_address=property_address, **fields)
        db.add(record)
    else:
        for key, value in fields.items():
            setattr(record, key, value)
    await db.flush()
    return record


# ----- History -----


async def append_rate_history(
    db: AsyncSession,
    property_address: str,
    increase_date: date,
    previous_rate: float,
    new_rate: float,
    notes: str | None = None,
) -> RateHistory:
    """Append one entry to a property's rate ledger."""
    entry = RateHistory(
        property_address=property_address,
        increase_date=increase_date,
        previous_rate=previous_rate,
        new_rate=new_rate,
        notes=notes,
    )
    db.add(entry)
    await db.flush()
    return entry


async def list_rate_history(
    db: AsyncSession, property_address: str
) -> list[RateHistory]:
    """Rate history of a property, latest increase date first."""
    result = await db.execute(
        select(RateHistory)
        .where(RateHistory.property_address == property_address)
        .order_by(RateHistory.increase_date.desc(), RateHistory.id.desc())
    )
    return list(result.scalars().all())


async def get_last_appended_history(
    db: AsyncSession, property_address: str
) -> RateHistory | None:
    """The most recently written history row, regardless of its increase date."""
    result = await db.execute(
        select(RateHistory)
        .where(RateHistory.property_address == property_address)
        .order_by(RateHistory.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def delete_rate_data(db: AsyncSession, property_address: str) -> None:
    """Remove the snapshot and the whole ledger of a property."""
    await db.execute(
        delete(RateHistory).where(RateHistory.property_address == property_address)
    )
    await db.execute(
        delete(RateIncrease).where(RateIncrease.property_address == property_address)
    )
    await db.flush()
