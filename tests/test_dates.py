"""Tests for the date normalizer."""
from datetime import date, datetime, timezone

import pytest

from rentaltrack_backend.core.dates import (
    normalize,
    parse_storage_date,
    to_date,
    to_storage_string,
)
from rentaltrack_backend.core.exceptions import InvalidDateError


def test_storage_string_is_anchored_at_noon_utc():
    value = normalize("2023-01-15")
    assert value == datetime(2023, 1, 15, 12, 0, tzinfo=timezone.utc)


def test_empty_values_normalize_to_none():
    assert normalize(None) is None
    assert normalize("") is None
    assert to_date("") is None
    assert to_storage_string(None) is None


def test_storage_round_trip_keeps_calendar_day():
    for raw in ("2023-01-01", "2024-02-29", "2023-12-31"):
        assert to_storage_string(normalize(raw)) == raw


def test_naive_datetime_late_in_the_day_keeps_its_date():
    value = normalize(datetime(2023, 3, 15, 23, 30))
    assert value.hour == 12
    assert value.date() == date(2023, 3, 15)


def test_date_objects_are_accepted():
    assert to_date(date(2022, 7, 4)) == date(2022, 7, 4)


def test_free_form_strings_are_parsed():
    assert to_date("March 5, 2024") == date(2024, 3, 5)
    assert to_date("2023-1-5") == date(2023, 1, 5)


def test_impossible_calendar_date_is_rejected():
    with pytest.raises(InvalidDateError):
        normalize("2023-02-30")


def test_unparseable_string_is_rejected():
    with pytest.raises(InvalidDateError):
        normalize("not a date")


def test_parse_storage_date_is_strict():
    assert parse_storage_date("2023-06-01") == date(2023, 6, 1)
    with pytest.raises(InvalidDateError) as exc_info:
        parse_storage_date("06/01/2023", field="start_date")
    assert exc_info.value.field == "start_date"
    with pytest.raises(InvalidDateError):
        parse_storage_date("2023-13-01")
