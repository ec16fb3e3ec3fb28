"""Initial schema for RentalTrack

Revision ID: 0001
Revises:
Create Date: 2026-10-18

Creates all tables for:
- Auth (users, user_audit_log)
- Property Management (properties, landlord_owners)
- Tenant Management (tenants)
- Rent Management (rental_rate_increases, rental_rate_history)
"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SERVICE_TYPES = ("Full-Service Management", "Tenant Replacement Service")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    """Create all tables."""

    # =====================
    # AUTH
    # =====================

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(120), nullable=False),
        sa.Column("last_name", sa.String(120), nullable=True),
        sa.Column(
            "role",
            sa.Enum("SUPER_ADMIN", "ADMIN", "STANDARD", "READ_ONLY", name="roleslug"),
            nullable=False,
        ),
        sa.Column(
            "status",
            sa.Enum("PENDING", "ACTIVE", "INACTIVE", name="userstatus"),
            nullable=False,
        ),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "user_audit_log",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("action_type", sa.String(50), nullable=False),
        sa.Column("target_user_id", sa.Integer(), nullable=True),
        sa.Column("performed_by", sa.Integer(), nullable=True),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_audit_log_target", "user_audit_log", ["target_user_id"])
    op.create_index("ix_user_audit_log_performed_by", "user_audit_log", ["performed_by"])

    # =====================
    # PROPERTY MANAGEMENT
    # =====================

    op.create_table(
        "properties",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("property_address", sa.String(255), nullable=False),
        sa.Column("key_number", sa.String(50), nullable=True),
        sa.Column("service_type", sa.Enum(*SERVICE_TYPES, name="servicetype"), nullable=True),
        sa.Column("strata_contact_number", sa.String(50), nullable=True),
        sa.Column("strata_management_company", sa.String(255), nullable=True),
        sa.Column("strata_contact_person", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("property_address"),
    )

    op.create_table(
        "landlord_owners",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("property_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("contact_number", sa.String(50), nullable=True),
        sa.Column("birthday", sa.Date(), nullable=True),
        sa.Column("residential_address", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_landlord_owners_property", "landlord_owners", ["property_id"])

    # =====================
    # TENANT MANAGEMENT
    # =====================

    op.create_table(
        "tenants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("property_address", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("move_in_date", sa.Date(), nullable=False),
        sa.Column("move_out_date", sa.Date(), nullable=True),
        sa.Column("contact_number", sa.String(50), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("birthday", sa.Date(), nullable=True),
        sa.Column("is_primary", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("service_type", sa.Enum(*SERVICE_TYPES, name="servicetype"), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["property_address"], ["properties.property_address"], ondelete="CASCADE"
        ),
    )
    op.create_index("ix_tenants_property_address", "tenants", ["property_address"])
    op.create_index("ix_tenants_move_out_date", "tenants", ["move_out_date"])

    # =====================
    # RENT MANAGEMENT
    # =====================

    # rental_rate_increases - one snapshot row per property
    op.create_table(
        "rental_rate_increases",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("property_address", sa.String(255), nullable=False),
        sa.Column("latest_rate_increase_date", sa.Date(), nullable=False),
        sa.Column("latest_rental_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("next_allowable_rental_increase_date", sa.Date(), nullable=False),
        sa.Column("next_allowable_rental_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("reminder_date", sa.Date(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("property_address"),
        sa.ForeignKeyConstraint(
            ["property_address"], ["properties.property_address"], ondelete="CASCADE"
        ),
    )
    op.create_index(
        "ix_rental_rate_increases_reminder", "rental_rate_increases", ["reminder_date"]
    )

    # rental_rate_history - append-only ledger
    op.create_table(
        "rental_rate_history",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("property_address", sa.String(255), nullable=False),
        sa.Column("increase_date", sa.Date(), nullable=False),
        sa.Column("previous_rate", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("new_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["property_address"], ["properties.property_address"], ondelete="CASCADE"
        ),
    )
    op.create_index(
        "ix_rental_rate_history_address",
        "rental_rate_history",
        ["property_address", "increase_date"],
    )


def downgrade() -> None:
    """Drop all tables in reverse order."""

    # Drop rent management tables
    op.drop_table("rental_rate_history")
    op.drop_table("rental_rate_increases")

    # Drop tenant management tables
    op.drop_table("tenants")

    # Drop property management tables
    op.drop_table("landlord_owners")
    op.drop_table("properties")

    # Drop auth tables
    op.drop_table("user_audit_log")
    op.drop_table("users")
