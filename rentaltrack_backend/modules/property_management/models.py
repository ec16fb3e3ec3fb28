"""Property management models for RentalTrack.

A property is identified by its street address; owners (landlords) hang off
it by foreign key.
"""

from datetime import date

from sqlalchemy import Date, Enum, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ...database import Base, TimestampMixin
from ..commons.enums import ServiceType


class Property(TimestampMixin, Base):
    """A managed rental property."""

    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    property_address: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False
    )
    key_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    service_type: Mapped[ServiceType | None] = mapped_column(
        Enum(ServiceType, values_callable=lambda e: [m.value for m in e]),
        nullable=True,
    )
    strata_contact_number: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )
    strata_management_company: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    strata_contact_person: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )

    # Relationships
    owners: Mapped[list["Owner"]] = relationship(
        "Owner",
        back_populates="property",
        cascade="all, delete-orphan",
        order_by="Owner.id",
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, address={self.property_address})>"


class Owner(TimestampMixin, Base):
    """Landlord owning (part of) a property."""

    __tablename__ = "landlord_owners"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    property_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    birthday: Mapped[date | None] = mapped_column(Date, nullable=True)
    residential_address: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )

    # Relationships
    property: Mapped["Property"] = relationship("Property", back_populates="owners")

    __table_args__ = (Index("ix_landlord_owners_property", "property_id"),)

    def __repr__(self) -> str:
        return f"<Owner(id={self.id}, name={self.name})>"
