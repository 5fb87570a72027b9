"""
app/schemas/agency_import.py

Request and response schemas for the agency bulk import endpoints.
"""

from __future__ import annotations

import uuid
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from app.domain.agency_import import (
    BulkImportOutcome,
    CandidateRow,
    ImportRowResult,
    RowValidationResult,
    ValidationReport,
)
from app.domain.agency_upload import ParseResult


class AgencyImportRow(BaseModel):
    """
    One agency row in a preview or import request body.
    """

    model_config = ConfigDict(populate_by_name=True)

    row_number: int | None = Field(
        default=None,
        ge=1,
        validation_alias=AliasChoices("row_number", "_rowNumber"),
    )
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

    @field_validator("founded_year", mode="before")
    @classmethod
    def _coerce_founded_year(cls, value: object) -> object:
        # Spreadsheet exports often send the year as a number.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def to_domain(self, *, position: int) -> CandidateRow:
        """
        Build the domain row; `position` is the 1-based index in the request.

        Without an explicit row number the row is numbered as it would be in
        the uploaded sheet, header first.
        """

        return CandidateRow(
            row_number=self.row_number if self.row_number is not None else position + 1,
            name=self.name,
            description=self.description,
            website=self.website,
            phone=self.phone,
            email=self.email,
            headquarters=self.headquarters,
            founded_year=self.founded_year,
            employee_count=self.employee_count,
            company_size=self.company_size,
            offers_per_diem=self.offers_per_diem,
            is_union=self.is_union,
            trades=list(self.trades) if self.trades is not None else None,
            regions=list(self.regions) if self.regions is not None else None,
        )

    @classmethod
    def from_domain(cls, row: CandidateRow) -> AgencyImportRow:
        return cls(
            row_number=row.row_number,
            name=row.name,
            description=row.description,
            website=row.website,
            phone=row.phone,
            email=row.email,
            headquarters=row.headquarters,
            founded_year=row.founded_year,
            employee_count=row.employee_count,
            company_size=row.company_size,
            offers_per_diem=row.offers_per_diem,
            is_union=row.is_union,
            trades=row.trades,
            regions=row.regions,
        )


class AgencyImportRequest(BaseModel):
    rows: list[AgencyImportRow]

    def to_domain(self) -> list[CandidateRow]:
        return [row.to_domain(position=index) for index, row in enumerate(self.rows, start=1)]


class AgencyCommitRow(AgencyImportRow):
    """
    Row submitted for import. Unlike preview, a name is mandatory.
    """

    name: str = Field(..., min_length=1)


class AgencyCommitRequest(BaseModel):
    rows: list[AgencyCommitRow]

    def to_domain(self) -> list[CandidateRow]:
        return [row.to_domain(position=index) for index, row in enumerate(self.rows, start=1)]


# ---------------------------------------------------------------------------
# Parse
# ---------------------------------------------------------------------------


class ParseErrorResponse(BaseModel):
    message: str
    type: Literal["header", "row", "file"]
    row: int | None = None


class ParseResponse(BaseModel):
    success: bool
    rows: list[AgencyImportRow] = Field(default_factory=list)
    errors: list[ParseErrorResponse] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, result: ParseResult) -> ParseResponse:
        return cls(
            success=result.success,
            rows=[AgencyImportRow.from_domain(row) for row in result.rows],
            errors=[
                ParseErrorResponse(message=error.message, type=error.type, row=error.row)
                for error in result.errors
            ],
            warnings=list(result.warnings),
        )


# ---------------------------------------------------------------------------
# Preview
# ---------------------------------------------------------------------------


class RowValidationResponse(BaseModel):
    row_number: int
    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    data: AgencyImportRow

    @classmethod
    def from_domain(cls, result: RowValidationResult) -> RowValidationResponse:
        return cls(
            row_number=result.row_number,
            valid=result.valid,
            errors=list(result.errors),
            warnings=list(result.warnings),
            data=AgencyImportRow.from_domain(result.data),
        )


class ValidationSummaryResponse(BaseModel):
    total: int = Field(..., ge=0)
    valid: int = Field(..., ge=0)
    invalid: int = Field(..., ge=0)
    with_warnings: int = Field(..., ge=0)


class PreviewResponse(BaseModel):
    """
    API response model for a bulk import preview.
    """

    results: list[RowValidationResponse] = Field(default_factory=list)
    summary: ValidationSummaryResponse

    @classmethod
    def from_domain(cls, report: ValidationReport) -> PreviewResponse:
        return cls(
            results=[RowValidationResponse.from_domain(result) for result in report.results],
            summary=ValidationSummaryResponse(
                total=report.summary.total,
                valid=report.summary.valid,
                invalid=report.summary.invalid,
                with_warnings=report.summary.with_warnings,
            ),
        )


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------


class ImportRowResultResponse(BaseModel):
    row_number: int
    agency_name: str
    status: Literal["created", "skipped", "failed"]
    agency_id: uuid.UUID | None = None
    reason: str | None = None

    @classmethod
    def from_domain(cls, result: ImportRowResult) -> ImportRowResultResponse:
        return cls(
            row_number=result.row_number,
            agency_name=result.agency_name,
            status=result.status,
            agency_id=result.agency_id,
            reason=result.reason,
        )


class ImportSummaryResponse(BaseModel):
    total: int = Field(..., ge=0)
    created: int = Field(..., ge=0)
    skipped: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)


class ImportResponse(BaseModel):
    """
    API response model for a committed bulk import.
    """

    results: list[ImportRowResultResponse] = Field(default_factory=list)
    summary: ImportSummaryResponse

    @classmethod
    def from_domain(cls, outcome: BulkImportOutcome) -> ImportResponse:
        return cls(
            results=[ImportRowResultResponse.from_domain(result) for result in outcome.results],
            summary=ImportSummaryResponse(
                total=outcome.summary.total,
                created=outcome.summary.created,
                skipped=outcome.summary.skipped,
                failed=outcome.summary.failed,
            ),
        )
