"""
app/repositories/agency_repository.py

Persistence layer for agency bulk import.

Every write commits on its own so a later failure in the same batch never
rolls back an agency that was already reported as created. Every failed
round-trip, read or write, rolls the session back so the rows after it start
from a clean transaction.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from dataclasses import asdict
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.agency_import import AgencyRecord, RegionRef, TradeRef
from app.repositories.errors import AgencyStorageError
from db.models.agency import Agency
from db.models.association import AgencyRegion, AgencyTrade
from db.models.region import Region
from db.models.trade import Trade


class AgencyImportStore(Protocol):
    """
    Storage collaborator used by the import service.

    Each method is one round-trip and raises AgencyStorageError on failure.
    """

    def list_agency_names(self) -> list[str]:
        ...

    def list_trades(self) -> list[TradeRef]:
        ...

    def list_regions(self) -> list[RegionRef]:
        ...

    def slug_exists(self, slug: str) -> bool:
        ...

    def create_agency(self, record: AgencyRecord) -> uuid.UUID | None:
        ...

    def add_agency_trades(self, agency_id: uuid.UUID, trade_ids: Sequence[uuid.UUID]) -> None:
        ...

    def add_agency_regions(self, agency_id: uuid.UUID, region_ids: Sequence[uuid.UUID]) -> None:
        ...


class AgencyRepository:
    """
    SQLAlchemy implementation of AgencyImportStore.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_agency_names(self) -> list[str]:
        try:
            return list(self._session.execute(select(Agency.name)).scalars().all())
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise AgencyStorageError.from_sqlalchemy(exc, fallback="Failed to load agency names.") from exc

    def list_trades(self) -> list[TradeRef]:
        stmt = select(Trade.id, Trade.name, Trade.slug)
        try:
            rows = self._session.execute(stmt).all()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise AgencyStorageError.from_sqlalchemy(exc, fallback="Failed to load trades.") from exc
        return [TradeRef(id=row.id, name=row.name, slug=row.slug) for row in rows]

    def list_regions(self) -> list[RegionRef]:
        stmt = select(Region.id, Region.name, Region.code)
        try:
            rows = self._session.execute(stmt).all()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise AgencyStorageError.from_sqlalchemy(exc, fallback="Failed to load regions.") from exc
        return [RegionRef(id=row.id, name=row.name, code=row.code) for row in rows]

    def slug_exists(self, slug: str) -> bool:
        stmt = select(Agency.id).where(Agency.slug == slug).limit(1)
        try:
            return self._session.execute(stmt).scalars().first() is not None
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise AgencyStorageError.from_sqlalchemy(exc, fallback="Failed to check slug availability.") from exc

    def create_agency(self, record: AgencyRecord) -> uuid.UUID | None:
        """
        Insert one agency and commit. Returns the new id.
        """

        agency = Agency(**asdict(record))
        self._session.add(agency)
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise AgencyStorageError.from_sqlalchemy(exc, fallback="Failed to create agency") from exc
        return agency.id

    def add_agency_trades(self, agency_id: uuid.UUID, trade_ids: Sequence[uuid.UUID]) -> None:
        payloads = [{"agency_id": agency_id, "trade_id": trade_id} for trade_id in dict.fromkeys(trade_ids)]
        self._insert_links(AgencyTrade, payloads, fallback="Failed to create trade associations.")

    def add_agency_regions(self, agency_id: uuid.UUID, region_ids: Sequence[uuid.UUID]) -> None:
        payloads = [{"agency_id": agency_id, "region_id": region_id} for region_id in dict.fromkeys(region_ids)]
        self._insert_links(AgencyRegion, payloads, fallback="Failed to create region associations.")

    def _insert_links(self, model: type, payloads: list[dict[str, uuid.UUID]], *, fallback: str) -> None:
        if not payloads:
            return
        stmt = insert(model).values(payloads).on_conflict_do_nothing()
        try:
            self._session.execute(stmt)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise AgencyStorageError.from_sqlalchemy(exc, fallback=fallback) from exc
