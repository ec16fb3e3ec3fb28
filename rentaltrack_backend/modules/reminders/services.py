"""Reminder list builders.

Both lists are read-only aggregates over the property, tenant and rental
rate tables; nothing here writes.
"""

from collections import defaultdict
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.dates import today_utc
from ...core.logging import get_logger
from ..property_management import crud as property_crud
from ..property_management.services import select_active_tenant
from ..rent_management import crud as rent_crud
from ..rent_management.calculations import months_between
from ..tenant_management import crud as tenant_crud
from ..tenant_management.models import Tenant
from .schemas import BirthdayReminder, RateIncreaseReminder

logger = get_logger(__name__)

UNKNOWN_SERVICE_TYPE = "Unknown"
NOT_AVAILABLE = "N/A"
LANDLORD_ROLE = "Landlord"
TENANT_ROLE = "Tenant"


async def get_rate_increase_reminders(
    db: AsyncSession,
    month: int | None = None,
    min_months_since_increase: int | None = None,
    today: date | None = None,
) -> list[RateIncreaseReminder]:
    """List properties due for a rent review, longest since increase first.

    Args:
        db: Database session
        month: Only include records whose reminder date falls in this month
        min_months_since_increase: Skip records increased more recently
        today: Reference date (defaults to the current UTC date)
    """
    today = today or today_utc()

    tenants_by_address: dict[str, list[Tenant]] = defaultdict(list)
    for tenant in await tenant_crud.get_all_tenants(db):
        tenants_by_address[tenant.property_address].append(tenant)

    reminders = []
    for record in await rent_crud.get_all_rate_records(db):
        if month and record.reminder_date.month != month:
            continue

        months = months_between(today, record.latest_rate_increase_date)
        if (
            min_months_since_increase is not None
            and months < min_months_since_increase
        ):
            continue

        tenant = select_active_tenant(
            tenants_by_address.get(record.property_address, []), today
        )
        service_type = (
            tenant.service_type.value
            if tenant is not None and tenant.service_type is not None
            else UNKNOWN_SERVICE_TYPE
        )

        reminders.append(
            RateIncreaseReminder(
                property_address=record.property_address,
                service_type=service_type,
                latest_rate_increase_date=record.latest_rate_increase_date,
                latest_rental_rate=record.latest_rental_rate,
                next_allowable_rental_increase_date=(
                    record.next_allowable_rental_increase_date
                ),
                next_allowable_rental_rate=record.next_allowable_rental_rate,
                reminder_date=record.reminder_date,
                months_since_increase=months,
            )
        )

    reminders.sort(key=lambda r: r.months_since_increase, reverse=True)
    logger.debug(
        "Rate increase reminders built",
        extra={"month": month, "count": len(reminders)},
    )
    return reminders


async def get_birthday_reminders(
    db: AsyncSession,
    month: int | None = None,
    today: date | None = None,
) -> list[BirthdayReminder]:
    """List landlords and current tenants with a birthday in ``month``.

    Tenants count when they live at the property on ``today``. Only the
    month is compared; the list is ordered by day of month.
    """
    today = today or today_utc()
    target_month = month or today.month
    owners = await property_crud.get_owners_with_birthday(db)
    tenants = [
        t
        for t in await tenant_crud.get_all_tenants(db)
        if t.birthday is not None and t.tenancy.is_active_on(today)
    ]

    reminders = [
        BirthdayReminder(
            name=owner.name,
            role=LANDLORD_ROLE,
            contact_number=owner.contact_number or NOT_AVAILABLE,
            birthday=owner.birthday,
            property_address=owner.property.property_address,
            address=owner.residential_address or NOT_AVAILABLE,
        )
        for owner in owners
        if owner.birthday.month == target_month
    ]
    reminders.extend(
        BirthdayReminder(
            name=tenant.name,
            role=TENANT_ROLE,
            contact_number=tenant.contact_number or NOT_AVAILABLE,
            birthday=tenant.birthday,
            property_address=tenant.property_address,
            address=tenant.property_address,
        )
        for tenant in tenants
        if tenant.birthday.month == target_month
    )

    reminders.sort(key=lambda r: r.birthday.day)
    return reminders
