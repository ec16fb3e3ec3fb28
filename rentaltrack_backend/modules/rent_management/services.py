"""Rental rate engine.

Every write pairs one snapshot update with one history append inside a single
transaction, so the ledger and the snapshot can only move together.
"""

import enum
import math
import warnings
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.dates import DateInput, parse_storage_date, to_date, today_utc
from ...core.exceptions import (
    DuplicateRateRecordError,
    InconsistentStateWarning,
    InvalidInputError,
    NoRateRecordError,
    NotFoundError,
)
from ...core.logging import get_logger
from ...database import unit_of_work
from ..property_management import crud as property_crud
from ..tenant_management import crud as tenant_crud
from . import crud
from .calculations import build_increase_terms
from .models import RateHistory, RateIncrease
from .schemas import RateIncreaseUpdate

logger = get_logger(__name__)

NO_ACTIVE_TENANTS = "No active tenants"
NO_TENANT = "No tenant"
DEFAULT_INCREASE_NOTE = "Rate increase"


class RateRecordMode(str, enum.Enum):
    """How ``record_initial_rate`` treats an existing snapshot."""

    CREATE = "create"  # refuse if a snapshot exists
    OVERWRITE = "overwrite"  # new tenant, new initial rate


def _validate_rate(rate: float, field: str = "rate") -> float:
    if (
        isinstance(rate, bool)
        or not isinstance(rate, (int, float))
        or not math.isfinite(rate)
        or rate <= 0
    ):
        raise InvalidInputError(
            "Rental rate must be a positive number", field=field, value=rate
        )
    return float(rate)


def initial_rate_note(tenant_name: str | None) -> str:
    return f"Initial rental rate - Current tenant: {tenant_name or NO_TENANT}"


def increase_note(notes: str | None, tenant_names: list[str]) -> str:
    """History note of an increase, listing who lived there on the day."""
    tenant_list = ", ".join(tenant_names) if tenant_names else NO_ACTIVE_TENANTS
    return f"{notes or DEFAULT_INCREASE_NOTE}\n\nActive tenants: {tenant_list}"


async def _ensure_property(db: AsyncSession, property_address: str) -> None:
    if not await property_crud.get_property_by_address(db, property_address):
        raise NotFoundError(f"Property '{property_address}' not found")


async def record_initial_rate(
    db: AsyncSession,
    property_address: str,
    rate: float,
    start_date: str,
    mode: RateRecordMode = RateRecordMode.CREATE,
) -> RateIncrease:
    """Set the starting rent of a property.

    Args:
        db: Database session
        property_address: Property the rate applies to
        rate: Monthly rent, must be positive
        start_date: First day of the rate, ``YYYY-MM-DD``
        mode: ``CREATE`` refuses to replace an existing snapshot,
            ``OVERWRITE`` replaces it (tenant turnover)

    Returns:
        The written snapshot

    Raises:
        InvalidInputError: If the rate or date is malformed
        NotFoundError: If the property does not exist
        DuplicateRateRecordError: In ``CREATE`` mode, if a snapshot exists
    """
    rate = _validate_rate(rate, field="initial_rental_rate")
    start = parse_storage_date(start_date, field="start_date")
    await _ensure_property(db, property_address)

    existing = await crud.get_rate_record(db, property_address)
    if existing is not None and mode == RateRecordMode.CREATE:
        raise DuplicateRateRecordError(property_address)

    tenant = await tenant_crud.get_active_tenant(db, property_address, today_utc())
    terms = build_increase_terms(start, rate)

    async with unit_of_work(db):
        record = await crud.upsert_rate_record(
            db, property_address, terms.as_fields()
        )
        await crud.append_rate_history(
            db,
            property_address=property_address,
            increase_date=start,
            previous_rate=0,
            new_rate=rate,
            notes=initial_rate_note(tenant.name if tenant else None),
        )

    logger.info(
        "Initial rental rate recorded",
        extra={
            "property_address": property_address,
            "rate": rate,
            "start_date": start.isoformat(),
            "mode": mode.value,
            "replaced_existing": existing is not None,
        },
    )
    return record


async def process_increase(
    db: AsyncSession,
    property_address: str,
    increase_date: DateInput,
    new_rate: float,
    notes: str | None = None,
) -> tuple[RateIncrease, RateHistory]:
    """Apply a rent increase to a property with an existing snapshot.

    Returns:
        Tuple of (updated snapshot, appended history entry)

    Raises:
        InvalidInputError: If the rate or date is malformed
        NoRateRecordError: If the property has no snapshot yet
    """
    new_rate = _validate_rate(new_rate, field="new_rate")
    effective = to_date(increase_date)
    if effective is None:
        raise InvalidInputError("Increase date is required", field="increase_date")

    record = await crud.get_rate_record(db, property_address)
    if record is None:
        raise NoRateRecordError(property_address)

    previous_rate = record.latest_rental_rate
    tenants = await tenant_crud.list_active_tenants_as_of(
        db, property_address, effective
    )
    terms = build_increase_terms(effective, new_rate)

    async with unit_of_work(db):
        entry = await crud.append_rate_history(
            db,
            property_address=property_address,
            increase_date=effective,
            previous_rate=previous_rate,
            new_rate=new_rate,
            notes=increase_note(notes, [t.name for t in tenants]),
        )
        record = await crud.upsert_rate_record(
            db, property_address, terms.as_fields()
        )

    logger.info(
        "Rental increase processed",
        extra={
            "property_address": property_address,
            "previous_rate": previous_rate,
            "new_rate": new_rate,
            "increase_date": effective.isoformat(),
            "active_tenants": len(tenants),
        },
    )
    return record, entry


async def check_snapshot_consistency(db: AsyncSession, property_address: str) -> bool:
    """Compare a snapshot with the last history row written for the property.

    Issues an ``InconsistentStateWarning`` and returns False when they
    disagree on the latest rate or its date.
    """
    record = await crud.get_rate_record(db, property_address)
    last = await crud.get_last_appended_history(db, property_address)

    if record is None and last is None:
        return True

    if record is None or last is None:
        problem = "snapshot without history" if last is None else "history without snapshot"
    elif last.increase_date != record.latest_rate_increase_date or not math.isclose(
        last.new_rate, record.latest_rental_rate, abs_tol=0.005
    ):
        problem = (
            f"snapshot has {record.latest_rental_rate} from "
            f"{record.latest_rate_increase_date}, history ends with "
            f"{last.new_rate} from {last.increase_date}"
        )
    else:
        return True

    warnings.warn(
        f"Rental rate data for '{property_address}' is inconsistent: {problem}",
        InconsistentStateWarning,
        stacklevel=2,
    )
    return False


async def get_rate_record(db: AsyncSession, property_address: str) -> RateIncrease:
    """Get a snapshot, checking it against the ledger.

    Raises:
        NoRateRecordError: If the property has no snapshot
    """
    record = await crud.get_rate_record(db, property_address)
    if record is None:
        raise NoRateRecordError(property_address)
    await check_snapshot_consistency(db, property_address)
    return record


async def update_rate_record(
    db: AsyncSession, property_address: str, data: RateIncreaseUpdate
) -> RateIncrease:
    """Manually correct a snapshot.

    Derived values that are not given are recomputed from the resulting
    latest date and rate. No history row is written, so a correction that
    changes the latest rate will be reported by the consistency check.

    Raises:
        NoRateRecordError: If the property has no snapshot
        InvalidInputError: If a rate or date is malformed
    """
    record = await crud.get_rate_record(db, property_address)
    if record is None:
        raise NoRateRecordError(property_address)

    provided = data.model_dump(exclude_unset=True, exclude_none=True)
    fields: dict = {}
    for key, value in provided.items():
        if key.endswith("_date"):
            fields[key] = to_date(value)
            if fields[key] is None:
                raise InvalidInputError("Date cannot be empty", field=key)
        else:
            fields[key] = _validate_rate(value, field=key)

    if "latest_rate_increase_date" in fields or "latest_rental_rate" in fields:
        terms = build_increase_terms(
            fields.get("latest_rate_increase_date", record.latest_rate_increase_date),
            fields.get("latest_rental_rate", record.latest_rental_rate),
        )
        fields = {**terms.as_fields(), **fields}

    async with unit_of_work(db):
        record = await crud.upsert_rate_record(db, property_address, fields)

    logger.info(
        "Rental rate snapshot corrected",
        extra={"property_address": property_address, "fields": sorted(provided)},
    )
    return record


async def list_rate_history(db: AsyncSession, property_address: str) -> list[RateHistory]:
    """Rate ledger of a property, latest increase first."""
    return await crud.list_rate_history(db, property_address)


async def list_rate_records(db: AsyncSession) -> list[RateIncrease]:
    return await crud.get_all_rate_records(db)


def rental_info_visible(record: RateIncrease | None, move_in_date: date | None) -> bool:
    """Whether a snapshot belongs to the tenancy that started on ``move_in_date``.

    The snapshot survives tenant turnover, so a rate set before the current
    tenant moved in describes the previous tenancy and must not be shown.
    """
    if record is None or move_in_date is None:
        return False
    return record.latest_rate_increase_date >= move_in_date
