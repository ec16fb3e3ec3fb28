"""Tenant management models for RentalTrack.

Tenants belong to a property by address and are never overwritten on
turnover: a moved-out tenant keeps its row with ``move_out_date`` set, which
is how tenant history is kept.
"""

from datetime import date

from sqlalchemy import Boolean, Date, Enum, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ...database import Base, TimestampMixin
from ..commons.enums import ServiceType
from .tenancy import Tenancy


class Tenant(TimestampMixin, Base):
    """A tenant (current or past) of a property."""

    __tablename__ = "tenants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    property_address: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("properties.property_address", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    move_in_date: Mapped[date] = mapped_column(Date, nullable=False)
    move_out_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    contact_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    birthday: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    service_type: Mapped[ServiceType | None] = mapped_column(
        Enum(ServiceType, values_callable=lambda e: [m.value for m in e]),
        nullable=True,
    )

    __table_args__ = (
        Index("ix_tenants_property_address", "property_address"),
        Index("ix_tenants_move_out_date", "move_out_date"),
    )

    @property
    def tenancy(self) -> Tenancy:
        return Tenancy(self.move_in_date, self.move_out_date)

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, name={self.name}, address={self.property_address})>"
