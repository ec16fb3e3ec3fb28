"""Validated move-in/move-out period of a tenant."""

from dataclasses import dataclass
from datetime import date

from ...core.dates import DateInput, to_date
from ...core.exceptions import InvalidInputError


@dataclass(frozen=True)
class Tenancy:
    """A tenancy period; refuses to exist when move-out precedes move-in.

    ``move_out_date`` of ``None`` means the tenant still lives there.
    """

    move_in_date: date
    move_out_date: date | None = None

    def __post_init__(self):
        if self.move_out_date is not None and self.move_out_date < self.move_in_date:
            raise InvalidInputError(
                "Move-out date cannot be before move-in date",
                field="move_out_date",
                value=self.move_out_date.isoformat(),
            )

    @classmethod
    def from_input(cls, move_in: DateInput, move_out: DateInput = None) -> "Tenancy":
        """Build a tenancy from raw request values via the date normalizer."""
        move_in_date = to_date(move_in)
        if move_in_date is None:
            raise InvalidInputError("Move-in date is required", field="move_in_date")
        return cls(move_in_date, to_date(move_out))

    def is_active_on(self, as_of: date) -> bool:
        """Moved in on or before ``as_of`` and not moved out by then."""
        if self.move_in_date > as_of:
            return False
        return self.move_out_date is None or self.move_out_date > as_of
