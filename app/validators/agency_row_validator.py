"""
app/validators/agency_row_validator.py

Preview validation for bulk agency import rows.

Validation is a pure function of the row and the reference data fetched
by the caller; nothing here touches the database.
"""

from __future__ import annotations

import re
from datetime import date
from typing import AbstractSet, Any, Iterable, Mapping
from urllib.parse import urlsplit

from app.domain.agency_import import (
    CandidateRow,
    ReferenceData,
    RegionVocabulary,
    RowValidationResult,
    TradeVocabulary,
    ValidationReport,
    ValidationSummary,
    normalize_agency_name,
)

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 5000
HEADQUARTERS_MAX_LENGTH = 200
FOUNDED_YEAR_MIN = 1800

EMPLOYEE_COUNT_OPTIONS: tuple[str, ...] = (
    "1-10",
    "11-50",
    "51-100",
    "101-200",
    "201-500",
    "501-1000",
    "1001+",
)

COMPANY_SIZE_OPTIONS: tuple[str, ...] = ("Small", "Medium", "Large", "Enterprise")

ALLOWED_WEBSITE_SCHEMES = {"http", "https"}

_PHONE_PATTERN = re.compile(r"\+?[1-9][0-9]{1,14}")
_EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_FOUNDED_YEAR_PATTERN = re.compile(r"[0-9]{4}")
_FORBIDDEN_HOST_CHARACTERS = re.compile(r"[\s#%/<>?@\[\\\]^|]")


def is_valid_email(value: str | None) -> bool:
    if not value:
        return False
    return bool(_EMAIL_PATTERN.fullmatch(value.strip()))


def build_batch_name_index(rows: Iterable[CandidateRow]) -> dict[str, int]:
    """
    Map each normalized name to the row number that first used it.

    Must be built over the whole batch before any row is validated.
    """

    index: dict[str, int] = {}
    for row in rows:
        if not row.name:
            continue
        key = normalize_agency_name(row.name)
        if key not in index:
            index[key] = row.row_number
    return index


def parse_founded_year(value: str | None, *, current_year: int) -> int | None:
    """
    Return the founded year when it is a 4-digit year in range, else None.
    """

    if value is None:
        return None
    trimmed = value.strip()
    if not _FOUNDED_YEAR_PATTERN.fullmatch(trimmed):
        return None
    year = int(trimmed)
    if year < FOUNDED_YEAR_MIN or year > current_year:
        return None
    return year


class AgencyRowValidator:
    """
    Classifies candidate agency rows as valid or invalid.

    Errors block the import of a row. Warnings flag values that will be
    dropped or stored as-is and never affect validity.
    """

    def __init__(self, *, current_year: int | None = None) -> None:
        self._current_year = current_year

    @property
    def current_year(self) -> int:
        return self._current_year or date.today().year

    def validate_batch(
        self,
        *,
        rows: list[CandidateRow],
        reference: ReferenceData,
    ) -> ValidationReport:
        """
        Validate every row of one upload and aggregate the summary.
        """

        batch_name_index = build_batch_name_index(rows)
        results = [
            self.validate_row(
                row=row,
                existing_names=reference.existing_names,
                batch_name_index=batch_name_index,
                trades=reference.trades,
                regions=reference.regions,
            )
            for row in rows
        ]
        return ValidationReport(results=results, summary=ValidationSummary.from_results(results))

    def validate_row(
        self,
        *,
        row: CandidateRow,
        existing_names: AbstractSet[str],
        batch_name_index: Mapping[str, int],
        trades: TradeVocabulary,
        regions: RegionVocabulary,
    ) -> RowValidationResult:
        """
        Validate one row against the reference data.
        """

        errors: list[str] = []
        warnings: list[str] = []

        self._validate_name(
            row=row,
            existing_names=existing_names,
            batch_name_index=batch_name_index,
            errors=errors,
        )
        self._validate_max_length(
            value=row.description,
            limit=DESCRIPTION_MAX_LENGTH,
            label="Description",
            errors=errors,
        )
        self._validate_website(row.website, errors)
        self._validate_phone(row.phone, errors)
        self._validate_email(row.email, errors)
        self._validate_max_length(
            value=row.headquarters,
            limit=HEADQUARTERS_MAX_LENGTH,
            label="Headquarters",
            errors=errors,
        )
        self._validate_founded_year(row.founded_year, errors)

        self._check_employee_count(row.employee_count, warnings)
        self._check_company_size(row.company_size, warnings)
        self._check_trades(row.trades, trades, warnings)
        self._check_regions(row.regions, regions, warnings)

        return RowValidationResult(
            row_number=row.row_number,
            errors=errors,
            warnings=warnings,
            data=row,
        )

    # ------------------------------------------------------------------
    # Blocking rules
    # ------------------------------------------------------------------

    def _validate_name(
        self,
        *,
        row: CandidateRow,
        existing_names: AbstractSet[str],
        batch_name_index: Mapping[str, int],
        errors: list[str],
    ) -> None:
        if self._is_blank(row.name):
            errors.append("Name is required")
            return

        trimmed = str(row.name).strip()
        if len(trimmed) < NAME_MIN_LENGTH:
            errors.append(f"Name must be at least {NAME_MIN_LENGTH} characters")
        elif len(trimmed) > NAME_MAX_LENGTH:
            errors.append(f"Name must be less than {NAME_MAX_LENGTH} characters")

        key = trimmed.lower()
        if key in existing_names:
            errors.append("Agency with this name already exists in database")

        first_row = batch_name_index.get(key)
        if first_row is not None and first_row != row.row_number:
            errors.append(f"Duplicate name in upload (first appears in row {first_row})")

    def _validate_max_length(
        self,
        *,
        value: str | None,
        limit: int,
        label: str,
        errors: list[str],
    ) -> None:
        if value and len(value) > limit:
            errors.append(f"{label} must be less than {limit} characters")

    def _validate_website(self, value: str | None, errors: list[str]) -> None:
        if self._is_blank(value):
            return

        try:
            parsed = urlsplit(str(value).strip())
            scheme = parsed.scheme.lower()
            if scheme in ALLOWED_WEBSITE_SCHEMES and not parsed.netloc:
                # Browsers read "http:example.com" as "http://example.com".
                parsed = urlsplit(f"{scheme}://{parsed.path.lstrip('/')}")
            hostname = parsed.hostname
            parsed.port  # raises ValueError on a malformed port
        except ValueError:
            errors.append("Website must be a valid URL")
            return

        if not scheme:
            errors.append("Website must be a valid URL")
        elif scheme not in ALLOWED_WEBSITE_SCHEMES:
            errors.append("Website must start with http:// or https://")
        elif not hostname or _FORBIDDEN_HOST_CHARACTERS.search(hostname):
            errors.append("Website must be a valid URL")

    def _validate_phone(self, value: str | None, errors: list[str]) -> None:
        if self._is_blank(value):
            return
        if not _PHONE_PATTERN.fullmatch(str(value).strip()):
            errors.append("Phone must be in E.164 format (e.g., +12345678900)")

    def _validate_email(self, value: str | None, errors: list[str]) -> None:
        if self._is_blank(value):
            return
        if not is_valid_email(str(value)):
            errors.append("Email must be a valid email address")

    def _validate_founded_year(self, value: str | None, errors: list[str]) -> None:
        if self._is_blank(value):
            return

        trimmed = str(value).strip()
        if not _FOUNDED_YEAR_PATTERN.fullmatch(trimmed):
            errors.append("Founded year must be a valid 4-digit year")
            return

        current_year = self.current_year
        year = int(trimmed)
        if year < FOUNDED_YEAR_MIN or year > current_year:
            errors.append(f"Founded year must be between {FOUNDED_YEAR_MIN} and {current_year}")

    # ------------------------------------------------------------------
    # Advisory rules
    # ------------------------------------------------------------------

    def _check_employee_count(self, value: str | None, warnings: list[str]) -> None:
        if self._is_blank(value):
            return
        if str(value).strip() not in EMPLOYEE_COUNT_OPTIONS:
            warnings.append(
                f'Employee count "{value}" is not a standard value. '
                f"Valid options: {', '.join(EMPLOYEE_COUNT_OPTIONS)}"
            )

    def _check_company_size(self, value: str | None, warnings: list[str]) -> None:
        if self._is_blank(value):
            return
        if str(value).strip().capitalize() not in COMPANY_SIZE_OPTIONS:
            warnings.append(
                f'Company size "{value}" is not a standard value. '
                f"Valid options: {', '.join(COMPANY_SIZE_OPTIONS)}"
            )

    def _check_trades(
        self,
        values: list[str] | None,
        trades: TradeVocabulary,
        warnings: list[str],
    ) -> None:
        unknown = [value for value in values or [] if trades.resolve(value) is None]
        if unknown:
            warnings.append(f"Unknown trades will be skipped: {', '.join(unknown)}")

    def _check_regions(
        self,
        values: list[str] | None,
        regions: RegionVocabulary,
        warnings: list[str],
    ) -> None:
        unknown = [value for value in values or [] if regions.resolve(value) is None]
        if unknown:
            warnings.append(f"Unknown regions will be skipped: {', '.join(unknown)}")

    @staticmethod
    def _is_blank(value: Any) -> bool:
        if value is None:
            return True
        return str(value).strip() == ""
