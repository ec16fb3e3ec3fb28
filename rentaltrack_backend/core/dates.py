"""
Date normalization helpers.

Calendar dates are anchored to 12:00 UTC on their day so that converting the
value to any client timezone can never move it across a day boundary. The
storage form is always ``YYYY-MM-DD``.
"""

import re
from datetime import date, datetime, timezone

from dateutil import parser as date_parser

from .exceptions import InvalidDateError

CANONICAL_HOUR = 12
STORAGE_FORMAT = "%Y-%m-%d"
STORAGE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DateInput = str | date | datetime | None


def _anchor(year: int, month: int, day: int, value: DateInput) -> datetime:
    try:
        return datetime(year, month, day, CANONICAL_HOUR, 0, 0, 0, tzinfo=timezone.utc)
    except ValueError as e:
        raise InvalidDateError(value) from e


def normalize(value: DateInput) -> datetime | None:
    """Return ``value`` as a UTC-noon-anchored datetime.

    ``YYYY-MM-DD`` strings are split into their calendar parts and never go
    through timestamp parsing. Anything else is parsed, and its local calendar
    day is re-anchored to noon UTC.

    Raises:
        InvalidDateError: If the value cannot be read as a date
    """
    if value is None or value == "":
        return None

    if isinstance(value, str) and len(value) == 10 and "-" in value:
        try:
            year, month, day = (int(part) for part in value.split("-"))
        except ValueError as e:
            raise InvalidDateError(value) from e
        return _anchor(year, month, day, value)

    if isinstance(value, str):
        try:
            parsed: date = date_parser.parse(value)
        except (ValueError, OverflowError) as e:
            raise InvalidDateError(value) from e
    elif isinstance(value, (date, datetime)):
        parsed = value
    else:
        raise InvalidDateError(value)

    # Aware datetimes are read in the server's local zone, like naive ones
    if isinstance(parsed, datetime) and parsed.tzinfo is not None:
        parsed = parsed.astimezone()

    return _anchor(parsed.year, parsed.month, parsed.day, value)


def to_storage_string(value: datetime | None) -> str | None:
    """Format a canonical date as ``YYYY-MM-DD`` using its UTC calendar fields."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def to_date(value: DateInput) -> date | None:
    """Normalize ``value`` and return the calendar date it stands for."""
    canonical = normalize(value)
    if canonical is None:
        return None
    return canonical.date()


def parse_storage_date(value: str, field: str | None = None) -> date:
    """Strictly parse a ``YYYY-MM-DD`` string."""
    if not isinstance(value, str) or not STORAGE_PATTERN.match(value):
        raise InvalidDateError(value, field=field)
    try:
        return datetime.strptime(value, STORAGE_FORMAT).date()
    except (TypeError, ValueError) as e:
        raise InvalidDateError(value, field=field) from e


def today_utc() -> date:
    """Current calendar date in UTC."""
    return datetime.now(timezone.utc).date()
