"""
app/domain/agency_import.py

Domain models used by the agency bulk import preview and commit flows.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Iterable


class ImportStatus:
    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"


def normalize_agency_name(name: str | None) -> str:
    """
    Case- and whitespace-insensitive key used for name uniqueness checks.
    """

    if name is None:
        return ""
    return name.strip().lower()


@dataclass(frozen=True)
class CandidateRow:
    """
    One agency record submitted for preview or import.

    Optional text fields keep the submitted value as-is; trimming and
    blank handling belong to the parser and the validator.
    """

    row_number: int
    name: str | None = None
    description: str | None = None
    website: str | None = None
    phone: str | None = None
    email: str | None = None
    headquarters: str | None = None
    founded_year: str | None = None
    employee_count: str | None = None
    company_size: str | None = None
    offers_per_diem: bool | None = None
    is_union: bool | None = None
    trades: list[str] | None = None
    regions: list[str] | None = None


@dataclass(frozen=True)
class TradeRef:
    id: uuid.UUID
    name: str
    slug: str


@dataclass(frozen=True)
class RegionRef:
    id: uuid.UUID
    name: str
    code: str


class TradeVocabulary:
    """
    Case-insensitive lookup of trade ids by trade name or slug.
    """

    def __init__(self, trades: Iterable[TradeRef] = ()) -> None:
        self._ids: dict[str, uuid.UUID] = {}
        for trade in trades:
            self._ids[trade.name.lower()] = trade.id
            self._ids[trade.slug.lower()] = trade.id

    def resolve(self, value: str) -> uuid.UUID | None:
        return self._ids.get(value.strip().lower())

    def __len__(self) -> int:
        return len(self._ids)


class RegionVocabulary:
    """
    Lookup of region ids by upper-cased code (TX) or lower-cased name (texas).
    """

    def __init__(self, regions: Iterable[RegionRef] = ()) -> None:
        self._ids: dict[str, uuid.UUID] = {}
        for region in regions:
            self._ids[region.code.upper()] = region.id
            self._ids[region.name.lower()] = region.id

    def resolve(self, value: str) -> uuid.UUID | None:
        trimmed = value.strip()
        return self._ids.get(trimmed.upper()) or self._ids.get(trimmed.lower())

    def __len__(self) -> int:
        return len(self._ids)


@dataclass(frozen=True)
class ReferenceData:
    """
    Read-only lookups fetched once per request before any row is processed.
    """

    existing_names: frozenset[str]
    trades: TradeVocabulary
    regions: RegionVocabulary


@dataclass(frozen=True)
class RowValidationResult:
    """
    Preview outcome for one candidate row.
    """

    row_number: int
    errors: list[str]
    warnings: list[str]
    data: CandidateRow

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class ValidationSummary:
    total: int
    valid: int
    invalid: int
    with_warnings: int

    @classmethod
    def from_results(cls, results: list[RowValidationResult]) -> ValidationSummary:
        valid = sum(1 for result in results if result.valid)
        return cls(
            total=len(results),
            valid=valid,
            invalid=len(results) - valid,
            with_warnings=sum(1 for result in results if result.warnings),
        )


@dataclass(frozen=True)
class ValidationReport:
    results: list[RowValidationResult] = field(default_factory=list)
    summary: ValidationSummary = field(
        default_factory=lambda: ValidationSummary(total=0, valid=0, invalid=0, with_warnings=0)
    )


@dataclass(frozen=True)
class AgencyRecord:
    """
    Fully-defaulted agency payload handed to storage on import.
    """

    name: str
    slug: str
    description: str | None = None
    website: str | None = None
    phone: str | None = None
    email: str | None = None
    headquarters: str | None = None
    founded_year: int | None = None
    employee_count: str | None = None
    company_size: str | None = None
    offers_per_diem: bool = False
    is_union: bool = False
    is_active: bool = True
    is_claimed: bool = False
    profile_completion_percentage: int = 0


@dataclass(frozen=True)
class ImportRowResult:
    """
    Commit outcome for one row. Build through the classmethods so that
    exactly one of created/skipped/failed holds.
    """

    row_number: int
    agency_name: str
    status: str
    agency_id: uuid.UUID | None = None
    reason: str | None = None

    @classmethod
    def created(cls, *, row_number: int, agency_name: str, agency_id: uuid.UUID) -> ImportRowResult:
        return cls(
            row_number=row_number,
            agency_name=agency_name,
            status=ImportStatus.CREATED,
            agency_id=agency_id,
        )

    @classmethod
    def skipped(cls, *, row_number: int, agency_name: str, reason: str) -> ImportRowResult:
        return cls(
            row_number=row_number,
            agency_name=agency_name,
            status=ImportStatus.SKIPPED,
            reason=reason,
        )

    @classmethod
    def failed(cls, *, row_number: int, agency_name: str, reason: str) -> ImportRowResult:
        return cls(
            row_number=row_number,
            agency_name=agency_name,
            status=ImportStatus.FAILED,
            reason=reason,
        )


@dataclass(frozen=True)
class ImportSummary:
    total: int
    created: int
    skipped: int
    failed: int

    @classmethod
    def from_results(cls, results: list[ImportRowResult]) -> ImportSummary:
        return cls(
            total=len(results),
            created=sum(1 for r in results if r.status == ImportStatus.CREATED),
            skipped=sum(1 for r in results if r.status == ImportStatus.SKIPPED),
            failed=sum(1 for r in results if r.status == ImportStatus.FAILED),
        )


@dataclass(frozen=True)
class BulkImportOutcome:
    results: list[ImportRowResult] = field(default_factory=list)
    summary: ImportSummary = field(
        default_factory=lambda: ImportSummary(total=0, created=0, skipped=0, failed=0)
    )
