"""Tests for the rental rate engine services."""
from datetime import date

import pytest

from rentaltrack_backend.core.exceptions import (
    DuplicateRateRecordError,
    InconsistentStateWarning,
    InvalidInputError,
    NoRateRecordError,
    NotFoundError,
)
from rentaltrack_backend.modules.property_management import services as property_services
from rentaltrack_backend.modules.property_management.schemas import PropertyCreate
from rentaltrack_backend.modules.rent_management import crud as rent_crud
from rentaltrack_backend.modules.rent_management import services
from rentaltrack_backend.modules.rent_management.schemas import RateIncreaseUpdate
from rentaltrack_backend.modules.rent_management.services import RateRecordMode
from rentaltrack_backend.modules.tenant_management import services as tenant_services
from rentaltrack_backend.modules.tenant_management.schemas import (
    TenantInput,
    TenantsCreate,
)

ADDRESS = "12 Harbour View Rd"


async def _add_property(db, address=ADDRESS):
    await property_services.create_property(
        db, PropertyCreate(property_address=address)
    )


async def _add_tenant(db, name, move_in, move_out=None, address=ADDRESS, primary=False):
    await tenant_services.create_tenants(
        db,
        TenantsCreate(
            property_address=address,
            tenants=[
                TenantInput(
                    name=name,
                    move_in_date=move_in,
                    move_out_date=move_out,
                    is_primary=primary,
                )
            ],
        ),
    )


async def test_initial_rate_sets_snapshot_and_history(db):
    await _add_property(db)
    await _add_tenant(db, "Alice Nguyen", "2023-01-01")

    record = await services.record_initial_rate(db, ADDRESS, 2500, "2023-01-15")

    assert record.latest_rate_increase_date == date(2023, 1, 15)
    assert record.latest_rental_rate == 2500
    assert record.next_allowable_rental_increase_date == date(2024, 1, 15)
    assert record.next_allowable_rental_rate == 2575.0
    assert record.reminder_date == date(2023, 9, 15)

    history = await services.list_rate_history(db, ADDRESS)
    assert len(history) == 1
    assert history[0].previous_rate == 0
    assert history[0].new_rate == 2500
    assert history[0].percentage_change == "N/A"
    assert history[0].notes == "Initial rental rate - Current tenant: Alice Nguyen"


async def test_initial_rate_without_tenant_notes_no_tenant(db):
    await _add_property(db)
    await services.record_initial_rate(db, ADDRESS, 1800, "2023-03-01")
    history = await services.list_rate_history(db, ADDRESS)
    assert history[0].notes == "Initial rental rate - Current tenant: No tenant"


async def test_initial_rate_requires_existing_property(db):
    with pytest.raises(NotFoundError):
        await services.record_initial_rate(db, "1 Nowhere St", 1800, "2023-03-01")


async def test_initial_rate_rejects_bad_input(db):
    await _add_property(db)
    with pytest.raises(InvalidInputError):
        await services.record_initial_rate(db, ADDRESS, 0, "2023-03-01")
    with pytest.raises(InvalidInputError):
        await services.record_initial_rate(db, ADDRESS, -5, "2023-03-01")
    with pytest.raises(InvalidInputError):
        await services.record_initial_rate(db, ADDRESS, 1800, "01/03/2023")


async def test_strict_create_refuses_second_initial_rate(db):
    await _add_property(db)
    await services.record_initial_rate(db, ADDRESS, 1800, "2023-03-01")
    with pytest.raises(DuplicateRateRecordError):
        await services.record_initial_rate(db, ADDRESS, 1900, "2024-03-01")


async def test_overwrite_replaces_snapshot_and_keeps_ledger(db):
    await _add_property(db)
    await services.record_initial_rate(db, ADDRESS, 1800, "2022-03-01")
    record = await services.record_initial_rate(
        db, ADDRESS, 2100, "2024-05-01", mode=RateRecordMode.OVERWRITE
    )

    assert record.latest_rental_rate == 2100
    assert record.latest_rate_increase_date == date(2024, 5, 1)
    history = await services.list_rate_history(db, ADDRESS)
    assert [h.new_rate for h in history] == [2100, 1800]
    assert all(h.previous_rate == 0 for h in history)
    assert await services.check_snapshot_consistency(db, ADDRESS)


async def test_process_increase_updates_snapshot_and_appends_history(db):
    await _add_property(db)
    await services.record_initial_rate(db, ADDRESS, 1850, "2023-02-01")

    record, entry = await services.process_increase(
        db, ADDRESS, "2024-02-01", 1900, notes="Annual review"
    )

    assert record.latest_rental_rate == 1900
    assert record.latest_rate_increase_date == date(2024, 2, 1)
    assert record.next_allowable_rental_increase_date == date(2025, 2, 1)
    assert record.next_allowable_rental_rate == 1957.0
    assert record.reminder_date == date(2024, 10, 1)
    assert entry.previous_rate == 1850
    assert entry.new_rate == 1900
    assert entry.percentage_change == "+2.7%"

    history = await services.list_rate_history(db, ADDRESS)
    assert [h.new_rate for h in history] == [1900, 1850]


async def test_process_increase_lists_tenants_active_on_the_day(db):
    await _add_property(db)
    await _add_tenant(db, "Old Tenant", "2021-01-01", "2023-06-30")
    await _add_tenant(db, "Bob Smith", "2023-07-01", primary=True)
    await _add_tenant(db, "Future Tenant", "2025-01-01")
    await services.record_initial_rate(db, ADDRESS, 2000, "2023-07-01")

    _, entry = await services.process_increase(db, ADDRESS, "2024-07-01", 2060)

    assert entry.notes == "Rate increase\n\nActive tenants: Bob Smith"


async def test_process_increase_without_tenants(db):
    await _add_property(db)
    await services.record_initial_rate(db, ADDRESS, 2000, "2023-07-01")
    _, entry = await services.process_increase(db, ADDRESS, "2024-07-01", 2060)
    assert entry.notes.endswith("Active tenants: No active tenants")


async def test_process_increase_without_record_fails(db):
    await _add_property(db)
    with pytest.raises(NoRateRecordError):
        await services.process_increase(db, ADDRESS, "2024-07-01", 2060)
    assert await services.list_rate_history(db, ADDRESS) == []


async def test_process_increase_rejects_bad_rate(db):
    await _add_property(db)
    await services.record_initial_rate(db, ADDRESS, 2000, "2023-07-01")
    with pytest.raises(InvalidInputError):
        await services.process_increase(db, ADDRESS, "2024-07-01", 0)
    history = await services.list_rate_history(db, ADDRESS)
    assert len(history) == 1


async def test_get_rate_record_missing(db):
    with pytest.raises(NoRateRecordError):
        await services.get_rate_record(db, ADDRESS)


async def test_manual_correction_is_reported_as_inconsistent(db):
    await _add_property(db)
    await services.record_initial_rate(db, ADDRESS, 2000, "2023-07-01")

    record = await services.update_rate_record(
        db, ADDRESS, RateIncreaseUpdate(latest_rental_rate=2200)
    )
    assert record.latest_rental_rate == 2200
    assert record.next_allowable_rental_rate == 2266.0
    assert record.latest_rate_increase_date == date(2023, 7, 1)

    with pytest.warns(InconsistentStateWarning):
        consistent = await services.check_snapshot_consistency(db, ADDRESS)
    assert consistent is False


async def test_manual_correction_keeps_explicit_derived_values(db):
    await _add_property(db)
    await services.record_initial_rate(db, ADDRESS, 2000, "2023-07-01")

    record = await services.update_rate_record(
        db,
        ADDRESS,
        RateIncreaseUpdate(reminder_date="2023-12-01"),
    )

    assert record.reminder_date == date(2023, 12, 1)
    assert record.latest_rental_rate == 2000
    assert await services.check_snapshot_consistency(db, ADDRESS)


def test_rental_info_visibility_guard():
    class Snapshot:
        latest_rate_increase_date = date(2022, 1, 1)

    assert not services.rental_info_visible(Snapshot(), date(2023, 6, 1))
    assert services.rental_info_visible(Snapshot(), date(2022, 1, 1))
    assert not services.rental_info_visible(None, date(2022, 1, 1))
    assert not services.rental_info_visible(Snapshot(), None)


class _WriteFailed(Exception):
    pass


async def _failing_write(*args, **kwargs):
    raise _WriteFailed("connection lost")


async def test_failed_snapshot_write_discards_history_entry(db, monkeypatch):
    await _add_property(db)
    await services.record_initial_rate(db, ADDRESS, 2000, "2023-07-01")
    monkeypatch.setattr(rent_crud, "upsert_rate_record", _failing_write)

    with pytest.raises(_WriteFailed):
        await services.process_increase(db, ADDRESS, "2024-07-01", 2060)

    history = await services.list_rate_history(db, ADDRESS)
    assert [(h.previous_rate, h.new_rate) for h in history] == [(0, 2000)]
    record = await rent_crud.get_rate_record(db, ADDRESS)
    assert record.latest_rental_rate == 2000
    assert record.latest_rate_increase_date == date(2023, 7, 1)


async def test_failed_history_write_discards_new_snapshot(db, monkeypatch):
    await _add_property(db)
    monkeypatch.setattr(rent_crud, "append_rate_history", _failing_write)

    with pytest.raises(_WriteFailed):
        await services.record_initial_rate(db, ADDRESS, 2000, "2023-07-01")

    assert await rent_crud.get_rate_record(db, ADDRESS) is None
    assert await services.list_rate_history(db, ADDRESS) == []


async def test_failed_history_write_keeps_overwritten_snapshot(db, monkeypatch):
    await _add_property(db)
    await services.record_initial_rate(db, ADDRESS, 1800, "2022-03-01")
    monkeypatch.setattr(rent_crud, "append_rate_history", _failing_write)

    with pytest.raises(_WriteFailed):
        await services.record_initial_rate(
            db, ADDRESS, 2100, "2024-05-01", mode=RateRecordMode.OVERWRITE
        )

    record = await rent_crud.get_rate_record(db, ADDRESS)
    assert record.latest_rental_rate == 1800
    assert record.latest_rate_increase_date == date(2022, 3, 1)
    history = await services.list_rate_history(db, ADDRESS)
    assert [h.new_rate for h in history] == [1800]
