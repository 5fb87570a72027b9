"""
app/services/agency_import_service.py

Service layer for agency bulk import preview and commit.

Rows are committed one at a time and independently: a failure in one row
is reported in that row's result and never stops the rows after it. Rows
are deliberately processed sequentially so the running name and slug sets
stay correct without locking.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from functools import lru_cache

from app.config import get_bulk_import_settings
from app.domain.agency_import import (
    AgencyRecord,
    BulkImportOutcome,
    CandidateRow,
    ImportRowResult,
    ImportStatus,
    ImportSummary,
    ReferenceData,
    RegionVocabulary,
    TradeVocabulary,
    ValidationReport,
    normalize_agency_name,
)
from app.logging_utils import log_event
from app.repositories.agency_repository import AgencyImportStore
from app.repositories.errors import AgencyStorageError
from app.utils.slug import create_slug
from app.validators.agency_row_validator import AgencyRowValidator, parse_founded_year

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class AgencyImportError(Exception):
    """
    Base class for failures that abort a whole preview or import request.
    """


class ReferenceDataUnavailableError(AgencyImportError):
    """
    Raised when names, trades or regions cannot be loaded before the batch.
    """

    def __init__(self, *, resource: str, message: str) -> None:
        super().__init__(message)
        self.resource = resource


class SlugGenerationError(AgencyImportError):
    """
    Raised when no free slug is found within the attempt budget.

    Caught at the row boundary; it only fails the row that raised it.
    """


# ---------------------------------------------------------------------------
# Batch state
# ---------------------------------------------------------------------------


@dataclass
class ImportBatchState:
    """
    Accumulator threaded through the rows of one import.

    existing_names starts as the stored names and grows as rows are created;
    reserved_slugs holds every slug handed out in this batch.
    """

    existing_names: set[str]
    reserved_slugs: set[str] = field(default_factory=set)


def load_reference_data(store: AgencyImportStore) -> ReferenceData:
    """
    Fetch the lookups every row depends on. Fails the request if any is missing.
    """

    try:
        names = store.list_agency_names()
    except AgencyStorageError as exc:
        raise ReferenceDataUnavailableError(
            resource="agencies",
            message="Failed to check existing agencies",
        ) from exc

    try:
        trades = store.list_trades()
    except AgencyStorageError as exc:
        raise ReferenceDataUnavailableError(resource="trades", message="Failed to fetch trades") from exc

    try:
        regions = store.list_regions()
    except AgencyStorageError as exc:
        raise ReferenceDataUnavailableError(resource="regions", message="Failed to fetch regions") from exc

    return ReferenceData(
        existing_names=frozenset(name.lower() for name in names if name),
        trades=TradeVocabulary(trades),
        regions=RegionVocabulary(regions),
    )


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class AgencyImportService:
    """
    Coordinates preview validation and per-row agency creation.
    """

    def __init__(
        self,
        *,
        max_slug_attempts: int,
        validator: AgencyRowValidator | None = None,
    ) -> None:
        self._max_slug_attempts = max(2, max_slug_attempts)
        self._validator = validator or AgencyRowValidator()

    @property
    def max_slug_attempts(self) -> int:
        return self._max_slug_attempts

    def preview(self, *, rows: list[CandidateRow], store: AgencyImportStore) -> ValidationReport:
        """
        Validate a batch without writing anything.
        """

        if not rows:
            return ValidationReport()

        reference = load_reference_data(store)
        report = self._validator.validate_batch(rows=rows, reference=reference)
        log_event(
            logger,
            logging.INFO,
            "bulk_import_preview",
            total=report.summary.total,
            valid=report.summary.valid,
            invalid=report.summary.invalid,
            with_warnings=report.summary.with_warnings,
        )
        return report

    def import_rows(self, *, rows: list[CandidateRow], store: AgencyImportStore) -> BulkImportOutcome:
        """
        Create one agency per row, returning exactly one result per row.
        """

        if not rows:
            return BulkImportOutcome()

        reference = load_reference_data(store)
        state = ImportBatchState(existing_names=set(reference.existing_names))

        results: list[ImportRowResult] = []
        for row in rows:
            results.append(self._import_row_safely(row=row, store=store, reference=reference, state=state))

        summary = ImportSummary.from_results(results)
        log_event(
            logger,
            logging.INFO,
            "bulk_import_completed",
            total=summary.total,
            created=summary.created,
            skipped=summary.skipped,
            failed=summary.failed,
        )
        return BulkImportOutcome(results=results, summary=summary)

    # ------------------------------------------------------------------
    # Row processing
    # ------------------------------------------------------------------

    def _import_row_safely(
        self,
        *,
        row: CandidateRow,
        store: AgencyImportStore,
        reference: ReferenceData,
        state: ImportBatchState,
    ) -> ImportRowResult:
        try:
            result = self._import_row(row=row, store=store, reference=reference, state=state)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error processing import row=%s", row.row_number)
            result = ImportRowResult.failed(
                row_number=row.row_number,
                agency_name=row.name or "",
                reason=str(exc) or "Unexpected error",
            )

        if result.status != ImportStatus.CREATED:
            log_event(
                logger,
                logging.WARNING,
                "bulk_import_row_not_created",
                row_number=result.row_number,
                status=result.status,
                reason=result.reason,
            )
        return result

    def _import_row(
        self,
        *,
        row: CandidateRow,
        store: AgencyImportStore,
        reference: ReferenceData,
        state: ImportBatchState,
    ) -> ImportRowResult:
        agency_name = row.name or ""
        name_key = normalize_agency_name(agency_name)

        if name_key in state.existing_names:
            return ImportRowResult.skipped(
                row_number=row.row_number,
                agency_name=agency_name,
                reason="Agency with this name already exists",
            )

        base_slug = create_slug(agency_name)
        if not base_slug:
            return ImportRowResult.failed(
                row_number=row.row_number,
                agency_name=agency_name,
                reason="Unable to generate slug from name",
            )

        try:
            slug = self._resolve_unique_slug(base_slug=base_slug, store=store, state=state)
        except (SlugGenerationError, AgencyStorageError) as exc:
            return ImportRowResult.failed(
                row_number=row.row_number,
                agency_name=agency_name,
                reason=str(exc) or "Failed to generate slug",
            )

        record = self._build_record(row=row, slug=slug)
        try:
            agency_id = store.create_agency(record)
        except AgencyStorageError as exc:
            return ImportRowResult.failed(
                row_number=row.row_number,
                agency_name=agency_name,
                reason=str(exc) or "Failed to create agency",
            )
        if agency_id is None:
            return ImportRowResult.failed(
                row_number=row.row_number,
                agency_name=agency_name,
                reason="Failed to create agency",
            )

        state.existing_names.add(name_key)

        self._attach_trades(agency_id=agency_id, row=row, store=store, trades=reference.trades)
        self._attach_regions(agency_id=agency_id, row=row, store=store, regions=reference.regions)

        return ImportRowResult.created(
            row_number=row.row_number,
            agency_name=agency_name,
            agency_id=agency_id,
        )

    def _resolve_unique_slug(
        self,
        *,
        base_slug: str,
        store: AgencyImportStore,
        state: ImportBatchState,
    ) -> str:
        """
        Reserve base, base-2, base-3, ... up to the attempt budget.
        """

        candidates = [base_slug] + [f"{base_slug}-{n}" for n in range(2, self._max_slug_attempts + 1)]
        for candidate in candidates:
            if candidate in state.reserved_slugs:
                continue
            if store.slug_exists(candidate):
                continue
            state.reserved_slugs.add(candidate)
            return candidate

        raise SlugGenerationError(
            f"Unable to generate unique slug after {self._max_slug_attempts} attempts"
        )

    def _build_record(self, *, row: CandidateRow, slug: str) -> AgencyRecord:
        return AgencyRecord(
            name=row.name or "",
            slug=slug,
            description=row.description or None,
            website=row.website or None,
            phone=row.phone or None,
            email=row.email or None,
            headquarters=row.headquarters or None,
            founded_year=parse_founded_year(row.founded_year, current_year=self._validator.current_year),
            employee_count=row.employee_count or None,
            company_size=row.company_size or None,
            offers_per_diem=bool(row.offers_per_diem),
            is_union=bool(row.is_union),
        )

    def _attach_trades(
        self,
        *,
        agency_id: uuid.UUID,
        row: CandidateRow,
        store: AgencyImportStore,
        trades: TradeVocabulary,
    ) -> None:
        trade_ids = [trade_id for trade_id in (trades.resolve(v) for v in row.trades or []) if trade_id]
        if not trade_ids:
            return
        try:
            store.add_agency_trades(agency_id, trade_ids)
        except Exception as exc:  # noqa: BLE001
            logger.error("Error creating trade associations for agency %s: %s", agency_id, exc)

    def _attach_regions(
        self,
        *,
        agency_id: uuid.UUID,
        row: CandidateRow,
        store: AgencyImportStore,
        regions: RegionVocabulary,
    ) -> None:
        region_ids = [region_id for region_id in (regions.resolve(v) for v in row.regions or []) if region_id]
        if not region_ids:
            return
        try:
            store.add_agency_regions(agency_id, region_ids)
        except Exception as exc:  # noqa: BLE001
            logger.error("Error creating region associations for agency %s: %s", agency_id, exc)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_agency_import_service() -> AgencyImportService:
    """
    Build and cache the import service with env-driven settings.
    """

    settings = get_bulk_import_settings()
    return AgencyImportService(max_slug_attempts=settings.max_slug_attempts)
