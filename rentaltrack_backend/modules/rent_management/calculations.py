"""
Pure rental-rate arithmetic.

Month offsets use ``relativedelta``, which clamps to the end of shorter
months (2023-01-31 + 1 month is 2023-02-28). Rates round to cents with
half-up rounding.
"""

import math
from dataclasses import asdict, dataclass
from datetime import date

from dateutil.relativedelta import relativedelta

from ...config import settings


def round_currency(value: float) -> float:
    """Round to 2 decimals, halves away from zero for positive amounts."""
    return math.floor(value * 100 + 0.5) / 100


def next_allowable_date(start: date, months: int | None = None) -> date:
    """First date the rent may be raised again."""
    if months is None:
        months = settings.next_increase_months
    return start + relativedelta(months=months)


def reminder_date(start: date, months: int | None = None) -> date:
    """Date from which the property shows up as due for a rate review."""
    if months is None:
        months = settings.reminder_months
    return start + relativedelta(months=months)


def next_allowable_rate(rate: float, percent: float | None = None) -> float:
    """Highest rent allowed at the next increase."""
    if percent is None:
        percent = settings.rate_increase_percent
    return round_currency(rate * (1 + percent / 100))


def percentage_change(previous: float, new: float) -> float | None:
    """Relative change in percent, ``None`` when there is no previous rate."""
    if not previous:
        return None
    return ((new - previous) / previous) * 100


def format_percentage_change(previous: float, new: float) -> str:
    """Display form of ``percentage_change``, e.g. ``+3.0%`` or ``N/A``."""
    change = percentage_change(previous, new)
    if change is None:
        return "N/A"
    return f"{change:+.1f}%"


def months_between(later: date, earlier: date) -> int:
    """Calendar-month distance, ignoring the day of month."""
    return (later.year - earlier.year) * 12 + (later.month - earlier.month)


@dataclass(frozen=True)
class IncreaseTerms:
    """Snapshot values derived from one rate change."""

    latest_rate_increase_date: date
    latest_rental_rate: float
    next_allowable_rental_increase_date: date
    next_allowable_rental_rate: float
    reminder_date: date

    def as_fields(self) -> dict:
        return asdict(self)


def build_increase_terms(start: date, rate: float) -> IncreaseTerms:
    return IncreaseTerms(
        latest_rate_increase_date=start,
        latest_rental_rate=rate,
        next_allowable_rental_increase_date=next_allowable_date(start),
        next_allowable_rental_rate=next_allowable_rate(rate),
        reminder_date=reminder_date(start),
    )
