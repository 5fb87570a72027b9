"""create agency directory tables

Revision ID: 20261016_0001
Revises:
Create Date: 2026-10-16 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261016_0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "agencies",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("website", sa.String(length=500), nullable=True),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("headquarters", sa.String(length=200), nullable=True),
        sa.Column("founded_year", sa.Integer(), nullable=True),
        sa.Column("employee_count", sa.String(length=20), nullable=True),
        sa.Column("company_size", sa.String(length=20), nullable=True),
        sa.Column("offers_per_diem", sa.Boolean(), nullable=False),
        sa.Column("is_union", sa.Boolean(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_claimed", sa.Boolean(), nullable=False),
        sa.Column("profile_completion_percentage", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug", name="uq_agencies_slug"),
    )
    op.create_index("ix_agencies_name", "agencies", ["name"], unique=False)
    op.create_index("ix_agencies_is_active", "agencies", ["is_active"], unique=False)

    op.create_table(
        "trades",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("slug", sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_trades_name"),
        sa.UniqueConstraint("slug", name="uq_trades_slug"),
    )

    op.create_table(
        "regions",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("code", sa.String(length=10), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_regions_name"),
        sa.UniqueConstraint("code", name="uq_regions_code"),
    )

    op.create_table(
        "agency_trades",
        sa.Column("agency_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("trade_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint(["agency_id"], ["agencies.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["trade_id"], ["trades.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("agency_id", "trade_id"),
    )
    op.create_index("ix_agency_trades_trade_id", "agency_trades", ["trade_id"], unique=False)

    op.create_table(
        "agency_regions",
        sa.Column("agency_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("region_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint(["agency_id"], ["agencies.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["region_id"], ["regions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("agency_id", "region_id"),
    )
    op.create_index("ix_agency_regions_region_id", "agency_regions", ["region_id"], unique=False)

    op.create_table(
        "profiles",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("api_token_hash", sa.String(length=64), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_profiles_email"),
        sa.UniqueConstraint("api_token_hash", name="uq_profiles_api_token_hash"),
    )
    op.create_index("ix_profiles_role", "profiles", ["role"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_profiles_role", table_name="profiles")
    op.drop_table("profiles")
    op.drop_index("ix_agency_regions_region_id", table_name="agency_regions")
    op.drop_table("agency_regions")
    op.drop_index("ix_agency_trades_trade_id", table_name="agency_trades")
    op.drop_table("agency_trades")
    op.drop_table("regions")
    op.drop_table("trades")
    op.drop_index("ix_agencies_is_active", table_name="agencies")
    op.drop_index("ix_agencies_name", table_name="agencies")
    op.drop_table("agencies")
