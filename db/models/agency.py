"""
db/models/agency.py

Agency model: one staffing agency listed in the directory.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from db.models.association import AgencyRegion, AgencyTrade


class Agency(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """
    A staffing agency profile.

    Rows created by bulk import start unclaimed with an empty completion score;
    the owning agency claims and completes the profile later.
    """

    __tablename__ = "agencies"

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    slug: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="URL-safe unique identifier derived from name",
    )

    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    headquarters: Mapped[str | None] = mapped_column(String(200), nullable=True)
    founded_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    employee_count: Mapped[str | None] = mapped_column(String(20), nullable=True)
    company_size: Mapped[str | None] = mapped_column(String(20), nullable=True)

    offers_per_diem: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_union: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_claimed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    profile_completion_percentage: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    # ── Relationships ──────────────────────────────────────────────────────────

    trade_links: Mapped[list["AgencyTrade"]] = relationship(
        "AgencyTrade",
        back_populates="agency",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    region_links: Mapped[list["AgencyRegion"]] = relationship(
        "AgencyRegion",
        back_populates="agency",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # ── Indexes ────────────────────────────────────────────────────────────────

    __table_args__ = (
        Index("ix_agencies_name", "name"),
        Index("ix_agencies_is_active", "is_active"),
    )

    def __repr__(self) -> str:
        return f"<Agency id={self.id} slug={self.slug!r}>"
