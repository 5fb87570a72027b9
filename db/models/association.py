"""
db/models/association.py

Join tables linking agencies to the trades they staff and the regions they serve.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base

if TYPE_CHECKING:
    from db.models.agency import Agency


class AgencyTrade(Base):
    __tablename__ = "agency_trades"

    agency_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("agencies.id", ondelete="CASCADE"),
        primary_key=True,
    )
    trade_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("trades.id", ondelete="CASCADE"),
        primary_key=True,
    )

    agency: Mapped["Agency"] = relationship("Agency", back_populates="trade_links")

    __table_args__ = (Index("ix_agency_trades_trade_id", "trade_id"),)


class AgencyRegion(Base):
    __tablename__ = "agency_regions"

    agency_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("agencies.id", ondelete="CASCADE"),
        primary_key=True,
    )
    region_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("regions.id", ondelete="CASCADE"),
        primary_key=True,
    )

    agency: Mapped["Agency"] = relationship("Agency", back_populates="region_links")

    __table_args__ = (Index("ix_agency_regions_region_id", "region_id"),)
