"""
tests/test_agency_import_service.py

Pytest unit tests for AgencyImportService against the in-memory store.

Coverage
--------
- Preview short-circuit and reference data failures
- Slug suffixing against stored and batch slugs
- Partial success: one result per row, disjoint statuses
- Duplicate names within a batch are skipped after the first
- Association failures keep the row created
- Defaults applied to created records
"""

from __future__ import annotations

import pytest

from app.domain.agency_import import CandidateRow, ImportStatus
from app.services.agency_import_service import (
    AgencyImportService,
    ReferenceDataUnavailableError,
)
from app.validators.agency_row_validator import AgencyRowValidator


@pytest.fixture
def service() -> AgencyImportService:
    return AgencyImportService(max_slug_attempts=5, validator=AgencyRowValidator(current_year=2026))


def _row(row_number: int, name: str | None, **fields) -> CandidateRow:
    return CandidateRow(row_number=row_number, name=name, **fields)


# ---------------------------------------------------------------------------
# Preview
# ---------------------------------------------------------------------------


def test_preview_empty_rows_skips_reference_lookup(service, agency_store) -> None:
    agency_store.fail_names = True

    report = service.preview(rows=[], store=agency_store)

    assert report.results == []
    assert report.summary.total == 0


def test_preview_uses_stored_names(service, agency_store) -> None:
    agency_store.seed_names = ["Acme Staffing"]

    report = service.preview(rows=[_row(2, "acme staffing")], store=agency_store)

    assert report.results[0].errors == ["Agency with this name already exists in database"]
    assert agency_store.agencies == {}


@pytest.mark.parametrize(
    "flag, message",
    [
        ("fail_names", "Failed to check existing agencies"),
        ("fail_trades", "Failed to fetch trades"),
        ("fail_regions", "Failed to fetch regions"),
    ],
)
def test_reference_data_failure_aborts_request(service, agency_store, flag, message) -> None:
    setattr(agency_store, flag, True)

    with pytest.raises(ReferenceDataUnavailableError) as ctx:
        service.import_rows(rows=[_row(2, "Acme")], store=agency_store)

    assert str(ctx.value) == message
    assert agency_store.agencies == {}


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------


def test_import_empty_rows_returns_zero_summary(service, agency_store) -> None:
    outcome = service.import_rows(rows=[], store=agency_store)

    assert outcome.results == []
    assert (outcome.summary.total, outcome.summary.created) == (0, 0)


def test_slug_collision_with_stored_agency_gets_suffix(service, agency_store) -> None:
    agency_store.seed_slugs = {"acme"}

    outcome = service.import_rows(rows=[_row(2, "Acme")], store=agency_store)

    assert outcome.results[0].status == ImportStatus.CREATED
    assert agency_store.record_by_name("Acme").slug == "acme-2"


def test_slugs_reserved_within_batch(service, agency_store) -> None:
    outcome = service.import_rows(rows=[_row(2, "Acme!"), _row(3, "Acme?")], store=agency_store)

    assert [result.status for result in outcome.results] == [ImportStatus.CREATED, ImportStatus.CREATED]
    assert agency_store.record_by_name("Acme!").slug == "acme"
    assert agency_store.record_by_name("Acme?").slug == "acme-2"


def test_exhausted_slug_attempts_fail_only_that_row(service, agency_store) -> None:
    agency_store.seed_slugs = {"acme", "acme-2", "acme-3", "acme-4", "acme-5"}

    outcome = service.import_rows(rows=[_row(2, "Acme"), _row(3, "Beta")], store=agency_store)

    assert outcome.results[0].status == ImportStatus.FAILED
    assert outcome.results[0].reason == "Unable to generate unique slug after 5 attempts"
    assert outcome.results[1].status == ImportStatus.CREATED


def test_name_without_slug_characters_fails(service, agency_store) -> None:
    outcome = service.import_rows(rows=[_row(2, "!!!")], store=agency_store)

    assert outcome.results[0].status == ImportStatus.FAILED
    assert outcome.results[0].reason == "Unable to generate slug from name"


def test_partial_success_reports_one_result_per_row(service, agency_store) -> None:
    agency_store.seed_names = ["Taken Staffing"]
    agency_store.fail_create_for = {"Broken Co"}
    agency_store.return_no_id_for = {"Ghost Co"}
    rows = [
        _row(2, "Good Co"),
        _row(3, "taken staffing"),
        _row(4, "Broken Co"),
        _row(5, "Ghost Co"),
    ]

    outcome = service.import_rows(rows=rows, store=agency_store)

    assert [result.row_number for result in outcome.results] == [2, 3, 4, 5]
    assert [result.status for result in outcome.results] == [
        ImportStatus.CREATED,
        ImportStatus.SKIPPED,
        ImportStatus.FAILED,
        ImportStatus.FAILED,
    ]
    assert outcome.results[0].agency_id is not None
    assert outcome.results[1].reason == "Agency with this name already exists"
    assert outcome.results[2].reason == "value too long for type character varying(20)"
    assert outcome.results[3].reason == "Failed to create agency"

    summary = outcome.summary
    assert summary.created + summary.skipped + summary.failed == summary.total == 4


def test_duplicate_name_in_batch_is_skipped_after_first(service, agency_store) -> None:
    outcome = service.import_rows(rows=[_row(2, "Acme"), _row(3, " ACME ")], store=agency_store)

    assert outcome.results[0].status == ImportStatus.CREATED
    assert outcome.results[1].status == ImportStatus.SKIPPED
    assert len(agency_store.agencies) == 1


def test_failed_row_does_not_reserve_name(service, agency_store) -> None:
    agency_store.return_no_id_for = {"Acme"}

    outcome = service.import_rows(rows=[_row(2, "Acme"), _row(3, "acme")], store=agency_store)

    assert outcome.results[0].status == ImportStatus.FAILED
    assert outcome.results[1].status == ImportStatus.CREATED


def test_associations_resolved_and_unknown_values_dropped(service, agency_store) -> None:
    row = _row(2, "Acme", trades=["electrician", "Welder", "Astronaut"], regions=["tx", "California", "ZZ"])

    outcome = service.import_rows(rows=[row], store=agency_store)

    agency_id = outcome.results[0].agency_id
    assert {trade_id for _, trade_id in agency_store.trade_links} == {
        trade.id for trade in agency_store.trades
    }
    assert {region_id for _, region_id in agency_store.region_links} == {
        region.id for region in agency_store.regions
    }
    assert all(linked == agency_id for linked, _ in agency_store.trade_links + agency_store.region_links)


def test_association_failure_keeps_row_created(service, agency_store) -> None:
    agency_store.fail_trade_links = True

    outcome = service.import_rows(
        rows=[_row(2, "Acme", trades=["Electrician"], regions=["TX"])],
        store=agency_store,
    )

    assert outcome.results[0].status == ImportStatus.CREATED
    assert agency_store.trade_links == []
    assert len(agency_store.region_links) == 1


def test_created_record_defaults(service, agency_store) -> None:
    row = _row(2, "Acme", founded_year="2001", website="https://acme.com")

    service.import_rows(rows=[row], store=agency_store)

    record = agency_store.record_by_name("Acme")
    assert record.founded_year == 2001
    assert record.website == "https://acme.com"
    assert record.offers_per_diem is False
    assert record.is_union is False
    assert record.is_active is True
    assert record.is_claimed is False
    assert record.profile_completion_percentage == 0


def test_out_of_range_founded_year_stored_as_null(service, agency_store) -> None:
    service.import_rows(rows=[_row(2, "Acme", founded_year="1700")], store=agency_store)

    assert agency_store.record_by_name("Acme").founded_year is None


def test_unexpected_store_error_fails_row_with_message(service, agency_store) -> None:
    def _explode(_slug: str) -> bool:
        raise RuntimeError("")

    agency_store.slug_exists = _explode

    outcome = service.import_rows(rows=[_row(2, "Acme"), _row(3, "Beta")], store=agency_store)

    assert [result.reason for result in outcome.results] == ["Unexpected error", "Unexpected error"]
    assert outcome.summary.failed == 2
