"""Tests for the rate-increase and birthday reminder lists."""
from datetime import date

from rentaltrack_backend.modules.commons.enums import ServiceType
from rentaltrack_backend.modules.property_management import services as property_services
from rentaltrack_backend.modules.property_management.schemas import (
    OwnerInput,
    PropertyCreate,
)
from rentaltrack_backend.modules.reminders import services
from rentaltrack_backend.modules.rent_management import services as rent_services
from rentaltrack_backend.modules.tenant_management import services as tenant_services
from rentaltrack_backend.modules.tenant_management.schemas import (
    TenantInput,
    TenantsCreate,
)

TODAY = date(2024, 3, 1)


async def _property(db, address, owners=(), tenants=(), service_type=None):
    await property_services.create_property(
        db, PropertyCreate(property_address=address, owners=list(owners))
    )
    if tenants:
        await tenant_services.create_tenants(
            db,
            TenantsCreate(
                property_address=address,
                service_type=service_type,
                tenants=list(tenants),
            ),
        )


async def _rate_fixture(db):
    await _property(
        db,
        "A Street 1",
        tenants=[TenantInput(name="Ann", move_in_date="2023-01-01")],
        service_type=ServiceType.FULL_SERVICE,
    )
    await _property(db, "B Street 2")
    await _property(db, "C Street 3")
    await rent_services.record_initial_rate(db, "A Street 1", 2000, "2023-01-15")
    await rent_services.record_initial_rate(db, "B Street 2", 1500, "2023-06-10")
    await rent_services.record_initial_rate(db, "C Street 3", 1700, "2022-01-05")


async def test_rate_reminders_sorted_longest_since_increase_first(db):
    await _rate_fixture(db)

    reminders = await services.get_rate_increase_reminders(db, today=TODAY)

    assert [(r.property_address, r.months_since_increase) for r in reminders] == [
        ("C Street 3", 26),
        ("A Street 1", 14),
        ("B Street 2", 9),
    ]
    by_address = {r.property_address: r for r in reminders}
    assert by_address["A Street 1"].service_type == "Full-Service Management"
    assert by_address["B Street 2"].service_type == "Unknown"
    assert by_address["A Street 1"].next_allowable_rental_rate == 2060.0


async def test_rate_reminders_filtered_by_reminder_month(db):
    await _rate_fixture(db)

    september = await services.get_rate_increase_reminders(db, month=9, today=TODAY)
    february = await services.get_rate_increase_reminders(db, month=2, today=TODAY)

    assert [r.property_address for r in september] == ["C Street 3", "A Street 1"]
    assert [r.property_address for r in february] == ["B Street 2"]


async def test_rate_reminders_minimum_months(db):
    await _rate_fixture(db)

    reminders = await services.get_rate_increase_reminders(
        db, min_months_since_increase=14, today=TODAY
    )

    assert [r.property_address for r in reminders] == ["C Street 3", "A Street 1"]


async def test_rate_reminders_empty_without_records(db):
    assert await services.get_rate_increase_reminders(db, today=TODAY) == []


async def _birthday_fixture(db):
    await _property(
        db,
        "9 Birch Lane",
        owners=[
            OwnerInput(name="Margaret Lee", birthday="1961-04-12"),
            OwnerInput(
                name="Peter Lee",
                birthday="1958-05-02",
                contact_number="0400 111 222",
                residential_address="3 Hill St",
            ),
            OwnerInput(name="No Birthday"),
        ],
        tenants=[
            TenantInput(name="Tina", move_in_date="2023-01-01", birthday="1990-04-03"),
            TenantInput(
                name="Gone",
                move_in_date="2020-01-01",
                move_out_date="2022-12-31",
                birthday="1985-04-01",
            ),
            TenantInput(name="Sam", move_in_date="2023-01-01", birthday="1992-05-20"),
        ],
    )


async def test_birthday_reminders_for_month_sorted_by_day(db):
    await _birthday_fixture(db)

    reminders = await services.get_birthday_reminders(db, month=4)

    assert [(r.name, r.role) for r in reminders] == [
        ("Tina", "Tenant"),
        ("Margaret Lee", "Landlord"),
    ]
    tina, margaret = reminders
    assert tina.contact_number == "N/A"
    assert tina.address == "9 Birch Lane"
    assert margaret.address == "N/A"
    assert margaret.property_address == "9 Birch Lane"
    assert margaret.birthday == date(1961, 4, 12)


async def test_birthday_reminders_default_to_current_month(db):
    await _birthday_fixture(db)

    reminders = await services.get_birthday_reminders(db, today=date(2024, 5, 10))

    assert [(r.name, r.birthday.day) for r in reminders] == [
        ("Peter Lee", 2),
        ("Sam", 20),
    ]
    assert reminders[0].contact_number == "0400 111 222"
    assert reminders[0].address == "3 Hill St"
