"""Rental rate models for RentalTrack.

``RateIncrease`` is the current snapshot, one row per property, overwritten
on every change. ``RateHistory`` is the append-only ledger behind it; every
snapshot write is paired with exactly one history row.
"""

from datetime import date

from sqlalchemy import Date, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...database import Base, TimestampMixin
from .calculations import format_percentage_change

# DECIMAL in the database, float in Python
Money = Numeric(10, 2, asdecimal=False)


class RateIncrease(TimestampMixin, Base):
    """Current rental rate snapshot of a property."""

    __tablename__ = "rental_rate_increases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    property_address: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("properties.property_address", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    latest_rate_increase_date: Mapped[date] = mapped_column(Date, nullable=False)
    latest_rental_rate: Mapped[float] = mapped_column(Money, nullable=False)
    next_allowable_rental_increase_date: Mapped[date] = mapped_column(
        Date, nullable=False
    )
    next_allowable_rental_rate: Mapped[float] = mapped_column(Money, nullable=False)
    reminder_date: Mapped[date] = mapped_column(Date, nullable=False)

    __table_args__ = (Index("ix_rental_rate_increases_reminder", "reminder_date"),)

    def __repr__(self) -> str:
        return (
            f"<RateIncrease(address={self.property_address}, "
            f"rate={self.latest_rental_rate})>"
        )


class RateHistory(TimestampMixin, Base):
    """One recorded rate change. Rows are never updated."""

    __tablename__ = "rental_rate_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    property_address: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("properties.property_address", ondelete="CASCADE"),
        nullable=False,
    )
    increase_date: Mapped[date] = mapped_column(Date, nullable=False)
    # 0 marks the initial rate of a tenancy
    previous_rate: Mapped[float] = mapped_column(Money, nullable=False, default=0)
    new_rate: Mapped[float] = mapped_column(Money, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_rental_rate_history_address", "property_address", "increase_date"),
    )

    @property
    def percentage_change(self) -> str:
        return format_percentage_change(self.previous_rate, self.new_rate)

    def __repr__(self) -> str:
        return (
            f"<RateHistory(address={self.property_address}, "
            f"{self.previous_rate} -> {self.new_rate})>"
        )
