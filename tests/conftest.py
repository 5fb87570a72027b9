"""
tests/conftest.py

Shared fixtures: an in-memory agency store seeded with a small trade and
region vocabulary.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence

import pytest

from app.domain.agency_import import AgencyRecord, RegionRef, TradeRef
from app.repositories.errors import AgencyStorageError

ELECTRICIAN_ID = uuid.UUID("00000000-0000-0000-0000-0000000000e1")
WELDER_ID = uuid.UUID("00000000-0000-0000-0000-0000000000e2")
TEXAS_ID = uuid.UUID("00000000-0000-0000-0000-0000000000a1")
CALIFORNIA_ID = uuid.UUID("00000000-0000-0000-0000-0000000000a2")


class InMemoryAgencyStore:
    """
    Dict-backed AgencyImportStore. Flags switch individual round-trips to failure.
    """

    def __init__(self, *, existing_names: Sequence[str] = (), existing_slugs: Sequence[str] = ()) -> None:
        self.trades = [
            TradeRef(id=ELECTRICIAN_ID, name="Electrician", slug="electrician"),
            TradeRef(id=WELDER_ID, name="Welder", slug="welder"),
        ]
        self.regions = [
            RegionRef(id=TEXAS_ID, name="Texas", code="TX"),
            RegionRef(id=CALIFORNIA_ID, name="California", code="CA"),
        ]
        self.agencies: dict[uuid.UUID, AgencyRecord] = {}
        self.seed_names = list(existing_names)
        self.seed_slugs = set(existing_slugs)
        self.trade_links: list[tuple[uuid.UUID, uuid.UUID]] = []
        self.region_links: list[tuple[uuid.UUID, uuid.UUID]] = []

        self.fail_names = False
        self.fail_trades = False
        self.fail_regions = False
        self.fail_create_for: set[str] = set()
        self.return_no_id_for: set[str] = set()
        self.fail_trade_links = False

    def list_agency_names(self) -> list[str]:
        if self.fail_names:
            raise AgencyStorageError("connection reset")
        return self.seed_names + [record.name for record in self.agencies.values()]

    def list_trades(self) -> list[TradeRef]:
        if self.fail_trades:
            raise AgencyStorageError("connection reset")
        return list(self.trades)

    def list_regions(self) -> list[RegionRef]:
        if self.fail_regions:
            raise AgencyStorageError("connection reset")
        return list(self.regions)

    def slug_exists(self, slug: str) -> bool:
        return slug in self.seed_slugs or any(record.slug == slug for record in self.agencies.values())

    def create_agency(self, record: AgencyRecord) -> uuid.UUID | None:
        if record.name in self.fail_create_for:
            raise AgencyStorageError("value too long for type character varying(20)")
        if record.name in self.return_no_id_for:
            return None
        agency_id = uuid.uuid4()
        self.agencies[agency_id] = record
        return agency_id

    def add_agency_trades(self, agency_id: uuid.UUID, trade_ids: Sequence[uuid.UUID]) -> None:
        if self.fail_trade_links:
            raise AgencyStorageError("foreign key violation")
        self.trade_links.extend((agency_id, trade_id) for trade_id in trade_ids)

    def add_agency_regions(self, agency_id: uuid.UUID, region_ids: Sequence[uuid.UUID]) -> None:
        self.region_links.extend((agency_id, region_id) for region_id in region_ids)

    def record_by_name(self, name: str) -> AgencyRecord:
        return next(record for record in self.agencies.values() if record.name == name)


@pytest.fixture
def agency_store() -> InMemoryAgencyStore:
    return InMemoryAgencyStore()
