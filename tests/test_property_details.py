"""Tests for the reconciled property view."""
from datetime import date

import pytest

from rentaltrack_backend.core.exceptions import InvalidInputError, ValidationError
from rentaltrack_backend.modules.commons.enums import ServiceType
from rentaltrack_backend.modules.property_management import services
from rentaltrack_backend.modules.property_management.schemas import (
    OwnerInput,
    PropertyCreate,
)
from rentaltrack_backend.modules.rent_management import services as rent_services
from rentaltrack_backend.modules.tenant_management import services as tenant_services
from rentaltrack_backend.modules.tenant_management.schemas import (
    TenantInput,
    TenantsCreate,
    TenantsUpsert,
)

ADDRESS = "7/21 Ocean Parade"


async def _setup_property(db, tenants, service_type=None):
    await services.create_property(
        db,
        PropertyCreate(
            property_address=ADDRESS,
            key_number="K-17",
            owners=[
                OwnerInput(name="Margaret Lee", birthday="1961-04-12"),
                OwnerInput(name="Peter Lee", contact_number="0400 111 222"),
            ],
        ),
    )
    if tenants:
        await tenant_services.create_tenants(
            db,
            TenantsCreate(
                property_address=ADDRESS,
                service_type=service_type,
                tenants=tenants,
            ),
        )


async def test_missing_property_has_no_details(db):
    assert await services.get_property_details(db, "nowhere") is None


async def test_duplicate_address_is_rejected(db):
    await _setup_property(db, [])
    with pytest.raises(ValidationError):
        await services.create_property(db, PropertyCreate(property_address=ADDRESS))


async def test_details_without_tenant_hide_rental_info(db):
    await _setup_property(db, [])
    await rent_services.record_initial_rate(db, ADDRESS, 2000, "2023-01-01")

    details = await services.get_property_details(db, ADDRESS)

    assert details.key_number == "K-17"
    assert [o.name for o in details.landlord_owners] == ["Margaret Lee", "Peter Lee"]
    assert details.landlord_owners[0].birthday == date(1961, 4, 12)
    assert details.tenant is None
    assert details.rental_info is None


async def test_rate_from_previous_tenancy_is_hidden(db):
    await _setup_property(
        db, [TenantInput(name="New Tenant", move_in_date="2023-06-01")]
    )
    await rent_services.record_initial_rate(db, ADDRESS, 1800, "2022-01-01")

    details = await services.get_property_details(db, ADDRESS)

    assert details.tenant.name == "New Tenant"
    assert details.rental_info is None


async def test_rate_from_current_tenancy_is_shown(db):
    await _setup_property(
        db,
        [TenantInput(name="Current Tenant", move_in_date="2023-06-01")],
        service_type=ServiceType.FULL_SERVICE,
    )
    await rent_services.record_initial_rate(db, ADDRESS, 2100, "2023-06-01")

    details = await services.get_property_details(db, ADDRESS)

    assert details.rental_info is not None
    assert details.rental_info.latest_rental_rate == 2100
    assert details.rental_info.next_allowable_rental_rate == 2163.0
    # Falls back to the tenant's service type when the property has none
    assert details.service_type == ServiceType.FULL_SERVICE


async def test_primary_tenant_is_selected_and_history_is_kept(db):
    await _setup_property(
        db,
        [
            TenantInput(
                name="Former", move_in_date="2020-02-01", move_out_date="2022-12-31"
            ),
            TenantInput(name="Flatmate", move_in_date="2023-03-01"),
            TenantInput(name="Lease Holder", move_in_date="2023-01-01", is_primary=True),
        ],
    )

    details = await services.get_property_details(db, ADDRESS)

    assert details.tenant.name == "Lease Holder"
    assert [t.name for t in details.active_tenants] == ["Lease Holder", "Flatmate"]
    assert [t.name for t in details.tenant_history] == [
        "Flatmate",
        "Lease Holder",
        "Former",
    ]


async def test_latest_move_in_wins_without_primary(db):
    await _setup_property(
        db,
        [
            TenantInput(name="Earlier", move_in_date="2023-01-01"),
            TenantInput(name="Later", move_in_date="2023-03-01"),
        ],
    )
    details = await services.get_property_details(db, ADDRESS)
    assert details.tenant.name == "Later"


async def test_bad_tenant_dates_write_nothing(db):
    await _setup_property(db, [])
    with pytest.raises(InvalidInputError):
        await tenant_services.create_tenants(
            db,
            TenantsCreate(
                property_address=ADDRESS,
                tenants=[
                    TenantInput(name="Fine", move_in_date="2023-01-01"),
                    TenantInput(
                        name="Broken",
                        move_in_date="2023-05-01",
                        move_out_date="2023-04-01",
                    ),
                ],
            ),
        )
    details = await services.get_property_details(db, ADDRESS)
    assert details.tenant_history == []


async def test_upsert_updates_existing_and_adds_new(db):
    await _setup_property(db, [TenantInput(name="Stays", move_in_date="2023-01-01")])
    details = await services.get_property_details(db, ADDRESS)
    existing_id = details.tenant.id

    await tenant_services.upsert_tenants(
        db,
        ADDRESS,
        TenantsUpsert(
            tenants=[
                TenantInput(
                    id=existing_id,
                    name="Stays",
                    move_in_date="2023-01-01",
                    move_out_date="2024-01-31",
                ),
                TenantInput(name="Arrives", move_in_date="2024-02-01"),
            ]
        ),
    )

    details = await services.get_property_details(db, ADDRESS)
    assert details.tenant.name == "Arrives"
    assert [t.name for t in details.tenant_history] == ["Arrives", "Stays"]
    assert details.tenant_history[1].move_out_date == date(2024, 1, 31)


async def test_list_applies_the_guard_per_property(db):
    await _setup_property(
        db, [TenantInput(name="New Tenant", move_in_date="2023-06-01")]
    )
    await rent_services.record_initial_rate(db, ADDRESS, 1800, "2022-01-01")
    await services.create_property(db, PropertyCreate(property_address="1 First Ave"))

    listing = await services.list_properties_with_details(db)

    assert [d.property_address for d in listing] == ["1 First Ave", ADDRESS]
    assert all(d.rental_info is None for d in listing)


async def test_delete_property_removes_dependent_rows(db):
    await _setup_property(db, [TenantInput(name="T", move_in_date="2023-01-01")])
    await rent_services.record_initial_rate(db, ADDRESS, 1800, "2023-01-01")

    await services.delete_property(db, ADDRESS)

    assert await services.get_property_details(db, ADDRESS) is None
    assert await rent_services.list_rate_history(db, ADDRESS) == []
    assert await rent_services.list_rate_records(db) == []


async def test_active_tenant_depends_on_the_reference_date(db):
    await _setup_property(
        db,
        [
            TenantInput(
                name="Leaving", move_in_date="2023-01-01", move_out_date="2024-06-30"
            ),
            TenantInput(name="Arriving", move_in_date="2024-07-01"),
        ],
    )
    await rent_services.record_initial_rate(db, ADDRESS, 1900, "2023-01-01")

    before = await services.get_property_details(db, ADDRESS, today=date(2024, 3, 1))
    after = await services.get_property_details(db, ADDRESS, today=date(2024, 8, 1))

    assert before.tenant.name == "Leaving"
    assert [t.name for t in before.active_tenants] == ["Leaving"]
    assert before.rental_info.latest_rental_rate == 1900
    assert after.tenant.name == "Arriving"
    assert after.rental_info is None

    listing = await services.list_properties_with_details(db, today=date(2024, 3, 1))
    assert listing[0].tenant.name == "Leaving"


async def test_upsert_without_service_type_keeps_existing_one(db):
    await _setup_property(
        db,
        [TenantInput(name="Managed", move_in_date="2023-01-01")],
        service_type=ServiceType.TENANT_REPLACEMENT,
    )
    details = await services.get_property_details(db, ADDRESS)
    existing_id = details.tenant.id

    await tenant_services.upsert_tenants(
        db,
        ADDRESS,
        TenantsUpsert(
            tenants=[
                TenantInput(
                    id=existing_id,
                    name="Managed",
                    move_in_date="2023-01-01",
                    contact_number="0411 222 333",
                )
            ]
        ),
    )

    details = await services.get_property_details(db, ADDRESS)
    assert details.tenant.contact_number == "0411 222 333"
    assert details.tenant.service_type == ServiceType.TENANT_REPLACEMENT
