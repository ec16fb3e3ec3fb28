"""Property management business logic services."""

from collections import defaultdict
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.dates import to_date, today_utc
from ...core.exceptions import NotFoundError, ValidationError
from ...core.logging import get_logger
from ...database import unit_of_work
from ..rent_management import crud as rent_crud
from ..rent_management import services as rent_services
from ..rent_management.models import RateIncrease
from ..rent_management.schemas import RateIncreaseResponse
from ..tenant_management import crud as tenant_crud
from ..tenant_management.models import Tenant
from ..tenant_management.schemas import TenantResponse
from . import crud
from .models import Owner, Property
from .schemas import (
    OwnerCreate,
    OwnerInput,
    OwnerResponse,
    OwnerUpdate,
    PropertyCreate,
    PropertyDetails,
    PropertyUpdate,
)

logger = get_logger(__name__)


def _owner_fields(data: OwnerInput | OwnerUpdate, partial: bool = False) -> dict:
    fields = data.model_dump(exclude_unset=partial)
    if "birthday" in fields:
        fields["birthday"] = to_date(fields["birthday"])
    if "contact_number" in fields:
        fields["contact_number"] = fields["contact_number"] or None
    return fields


async def _get_property_or_404(db: AsyncSession, property_address: str) -> Property:
    property_obj = await crud.get_property_by_address(db, property_address)
    if not property_obj:
        raise NotFoundError(f"Property '{property_address}' not found")
    return property_obj


# ----- Properties -----


async def create_property(db: AsyncSession, data: PropertyCreate) -> Property:
    """Create a property together with its owners.

    Raises:
        ValidationError: If the address is already registered
    """
    address = data.property_address.strip()
    if await crud.get_property_by_address(db, address):
        raise ValidationError("Property address already exists", field="property_address")

    async with unit_of_work(db):
        property_obj = await crud.create_property(
            db,
            property_address=address,
            owners=[_owner_fields(o) for o in data.owners],
            **data.model_dump(exclude={"property_address", "owners"}),
        )

    logger.info(
        "Property created",
        extra={"property_address": address, "owners": len(data.owners)},
    )
    return property_obj


async def update_property(
    db: AsyncSession, property_address: str, data: PropertyUpdate
) -> Property:
    property_obj = await _get_property_or_404(db, property_address)
    async with unit_of_work(db):
        await crud.update_property(
            db, property_obj, **data.model_dump(exclude_unset=True)
        )
    return property_obj


async def delete_property(db: AsyncSession, property_address: str) -> None:
    """Delete a property with its owners, tenants and rate data."""
    property_obj = await _get_property_or_404(db, property_address)
    async with unit_of_work(db):
        await rent_crud.delete_rate_data(db, property_address)
        await tenant_crud.delete_tenants_for_property(db, property_address)
        await crud.delete_property(db, property_obj)
    logger.info("Property deleted", extra={"property_address": property_address})


async def list_properties(db: AsyncSession) -> list[Property]:
    return await crud.get_properties(db)


async def get_property(db: AsyncSession, property_address: str) -> Property:
    return await _get_property_or_404(db, property_address)


# ----- Owners -----


async def list_owners(db: AsyncSession, property_address: str) -> list[Owner]:
    property_obj = await _get_property_or_404(db, property_address)
    return await crud.get_owners_by_property(db, property_obj.id)


async def create_owner(db: AsyncSession, data: OwnerCreate) -> Owner:
    property_obj = await _get_property_or_404(db, data.property_address)
    fields = _owner_fields(data)
    fields.pop("property_address")
    async with unit_of_work(db):
        owner = await crud.create_owner(db, property_obj.id, **fields)
    return owner


async def update_owner(db: AsyncSession, owner_id: int, data: OwnerUpdate) -> Owner:
    owner = await crud.get_owner_by_id(db, owner_id)
    if not owner:
        raise NotFoundError(f"Owner with ID {owner_id} not found")
    async with unit_of_work(db):
        await crud.update_owner(db, owner, **_owner_fields(data, partial=True))
    return owner


async def delete_owner(db: AsyncSession, owner_id: int) -> None:
    owner = await crud.get_owner_by_id(db, owner_id)
    if not owner:
        raise NotFoundError(f"Owner with ID {owner_id} not found")
    async with unit_of_work(db):
        await crud.delete_owner(db, owner)


# ----- Reconciled read path -----


def select_active_tenant(tenants: list[Tenant], today: date | None = None) -> Tenant | None:
    """Pick the tenant used for single-tenant display.

    Among tenants living there on ``today``, the primary one wins; otherwise
    the one who moved in most recently.
    """
    today = today or today_utc()
    active = [t for t in tenants if t.tenancy.is_active_on(today)]
    if not active:
        return None
    primary = next((t for t in active if t.is_primary), None)
    if primary is not None:
        return primary
    return max(active, key=lambda t: (t.move_in_date, t.id))


def build_property_details(
    property_obj: Property,
    tenants: list[Tenant],
    record: RateIncrease | None,
    today: date,
) -> PropertyDetails:
    """Assemble the display payload of one property.

    Args:
        property_obj: The property, with owners loaded
        tenants: Every tenant of the property, current and past
        record: The property's rate snapshot, if any
        today: Date the active tenants are determined on
    """
    history = sorted(tenants, key=lambda t: (t.move_in_date, t.id), reverse=True)
    active = [t for t in history if t.tenancy.is_active_on(today)]
    active.sort(key=lambda t: not t.is_primary)
    tenant = select_active_tenant(history, today)

    rental_info = None
    if tenant is not None and rent_services.rental_info_visible(
        record, tenant.move_in_date
    ):
        rental_info = RateIncreaseResponse.model_validate(record)

    return PropertyDetails(
        property_address=property_obj.property_address,
        key_number=property_obj.key_number,
        service_type=(
            property_obj.service_type or (tenant.service_type if tenant else None)
        ),
        strata_contact_number=property_obj.strata_contact_number,
        strata_management_company=property_obj.strata_management_company,
        strata_contact_person=property_obj.strata_contact_person,
        landlord_owners=[OwnerResponse.model_validate(o) for o in property_obj.owners],
        tenant=TenantResponse.model_validate(tenant) if tenant else None,
        active_tenants=[TenantResponse.model_validate(t) for t in active],
        tenant_history=[TenantResponse.model_validate(t) for t in history],
        rental_info=rental_info,
    )


async def get_property_details(
    db: AsyncSession, property_address: str, today: date | None = None
) -> PropertyDetails | None:
    """Reconciled view of one property, or None if it does not exist.

    ``today`` defaults to the current UTC date.
    """
    property_obj = await crud.get_property_by_address(db, property_address)
    if property_obj is None:
        return None

    tenants = await tenant_crud.list_tenants(db, property_address)
    record = await rent_crud.get_rate_record(db, property_address)
    if record is not None:
        await rent_services.check_snapshot_consistency(db, property_address)

    details = build_property_details(
        property_obj, tenants, record, today or today_utc()
    )
    logger.debug(
        "Property details assembled",
        extra={
            "property_address": property_address,
            "has_tenant": details.tenant is not None,
            "has_rental_info": details.rental_info is not None,
        },
    )
    return details


async def list_properties_with_details(
    db: AsyncSession, today: date | None = None
) -> list[PropertyDetails]:
    """Reconciled view of every property, in three queries."""
    today = today or today_utc()
    properties = await crud.get_properties(db)

    tenants_by_address: dict[str, list[Tenant]] = defaultdict(list)
    for tenant in await tenant_crud.get_all_tenants(db):
        tenants_by_address[tenant.property_address].append(tenant)

    records = {
        r.property_address: r for r in await rent_crud.get_all_rate_records(db)
    }

    return [
        build_property_details(
            p,
            tenants_by_address.get(p.property_address, []),
            records.get(p.property_address),
            today,
        )
        for p in properties
    ]
