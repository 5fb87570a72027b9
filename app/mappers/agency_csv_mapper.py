"""
app/mappers/agency_csv_mapper.py

Maps uploaded agency CSV files onto candidate rows, and renders the
downloadable import template.
"""

from __future__ import annotations

import csv
import io
import re
from typing import Any, Mapping

from app.domain.agency_import import CandidateRow
from app.domain.agency_upload import ParseError, ParseErrorType, ParseResult

AGENCY_IMPORT_COLUMNS: tuple[str, ...] = (
    "name",
    "description",
    "website",
    "phone",
    "email",
    "headquarters",
    "founded_year",
    "employee_count",
    "company_size",
    "offers_per_diem",
    "is_union",
    "trades",
    "regions",
)

_STRING_COLUMNS = {
    "name",
    "description",
    "website",
    "phone",
    "email",
    "headquarters",
    "founded_year",
    "employee_count",
    "company_size",
}
_BOOLEAN_COLUMNS = {"offers_per_diem", "is_union"}
_LIST_COLUMNS = {"trades", "regions"}

_TRUE_VALUES = {"true", "yes", "y", "1"}
_FALSE_VALUES = {"false", "no", "n", "0"}

_WHITESPACE_RUN = re.compile(r"\s+")

TEMPLATE_FILENAME = "agency-import-template.csv"

TEMPLATE_EXAMPLE_ROWS: tuple[dict[str, str], ...] = (
    {
        "name": "ABC Staffing",
        "description": "Industrial and commercial electrical staffing across the Gulf Coast",
        "website": "https://abcstaffing.com",
        "phone": "+17135550100",
        "email": "info@abcstaffing.com",
        "headquarters": "Houston, TX",
        "founded_year": "2005",
        "employee_count": "51-100",
        "company_size": "Medium",
        "offers_per_diem": "true",
        "is_union": "false",
        "trades": "Electrician,Welder,Pipefitter",
        "regions": "TX,LA,OK",
    },
    {
        "name": "Pacific Construction Workforce",
        "description": "Skilled trades for commercial builds on the West Coast",
        "website": "https://pacificworkforce.com",
        "phone": "+13105550199",
        "email": "contact@pacificworkforce.com",
        "headquarters": "Los Angeles, CA",
        "founded_year": "1998",
        "employee_count": "201-500",
        "company_size": "Large",
        "offers_per_diem": "false",
        "is_union": "true",
        "trades": "Carpenter,Plumber,HVAC Technician,Electrician",
        "regions": "CA,AZ,NV",
    },
)


class CSVHeaderValidationError(ValueError):
    """
    Raised when an upload cannot be decoded or read as CSV at all.
    """


def normalize_header(header: str) -> str:
    """
    "Founded Year " -> "founded_year".
    """

    return _WHITESPACE_RUN.sub("_", header.strip().lower())


def normalize_string(value: Any) -> str | None:
    if value is None:
        return None
    trimmed = str(value).strip()
    return trimmed or None


def normalize_boolean(value: Any) -> bool | None:
    """
    Accept yes/no, true/false, y/n and 1/0. Anything else is unknown.
    """

    if value is None:
        return None
    lowered = str(value).strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


def parse_comma_separated(value: Any) -> list[str] | None:
    if value is None or str(value).strip() == "":
        return None
    return [item.strip() for item in str(value).split(",") if item.strip()]


class AgencyCSVParser:
    """
    Reads an uploaded CSV into candidate rows.

    Row numbers follow the spreadsheet view: the header is row 1, so the
    first data row is row 2. Empty rows are skipped but still counted.
    """

    def parse_bytes(self, content: bytes) -> ParseResult:
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise CSVHeaderValidationError("CSV must be UTF-8 encoded.") from exc
        return self.parse_text(text)

    def parse_text(self, text: str) -> ParseResult:
        errors: list[ParseError] = []
        warnings: list[str] = []
        rows: list[CandidateRow] = []

        try:
            reader = csv.DictReader(io.StringIO(text, newline=""))
            headers = [header.strip() for header in reader.fieldnames or []]
            if not headers:
                return ParseResult(
                    errors=[ParseError(message="CSV header row is missing.", type=ParseErrorType.FILE)],
                )

            header_errors, header_warnings = self._validate_headers(headers)
            errors.extend(header_errors)
            warnings.extend(header_warnings)
            if header_errors:
                return ParseResult(errors=errors, warnings=warnings)

            for row_number, raw_row in enumerate(reader, start=2):
                if self._is_empty_row(raw_row):
                    continue

                candidate = self.map_row(raw_row, row_number=row_number)
                if candidate.name is None:
                    errors.append(
                        ParseError(
                            message="Missing required field: name",
                            type=ParseErrorType.ROW,
                            row=row_number,
                        )
                    )
                    continue
                rows.append(candidate)
        except csv.Error as exc:
            raise CSVHeaderValidationError(f"Invalid CSV format: {exc}") from exc

        return ParseResult(rows=rows, errors=errors, warnings=warnings)

    def map_row(self, raw_row: Mapping[str | None, Any], *, row_number: int) -> CandidateRow:
        """
        Map one raw CSV record onto a candidate row, ignoring unknown columns.
        """

        values: dict[str, Any] = {}
        for raw_key, value in raw_row.items():
            # DictReader files surplus cells under the None key.
            if raw_key is None:
                continue
            column = normalize_header(raw_key)
            if column in _STRING_COLUMNS:
                values[column] = normalize_string(value)
            elif column in _BOOLEAN_COLUMNS:
                values[column] = normalize_boolean(value)
            elif column in _LIST_COLUMNS:
                values[column] = parse_comma_separated(value)

        return CandidateRow(row_number=row_number, **values)

    def _validate_headers(self, headers: list[str]) -> tuple[list[ParseError], list[str]]:
        errors: list[ParseError] = []
        warnings: list[str] = []

        normalized = [normalize_header(header) for header in headers]
        if "name" not in normalized:
            errors.append(ParseError(message="Missing required column: name", type=ParseErrorType.HEADER))

        unrecognized = [
            header
            for header, column in zip(headers, normalized)
            if column not in AGENCY_IMPORT_COLUMNS
        ]
        if unrecognized:
            warnings.append(f"Unrecognized columns will be ignored: {', '.join(unrecognized)}")

        return errors, warnings

    @staticmethod
    def _is_empty_row(row: Mapping[str | None, Any]) -> bool:
        for value in row.values():
            if isinstance(value, list):
                if any(str(item).strip() for item in value):
                    return False
            elif value is not None and str(value).strip():
                return False
        return True


def render_import_template() -> str:
    """
    Header plus two example rows, newline separated, no trailing newline.
    """

    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer,
        fieldnames=AGENCY_IMPORT_COLUMNS,
        lineterminator="\n",
        quoting=csv.QUOTE_MINIMAL,
    )
    writer.writeheader()
    writer.writerows(TEMPLATE_EXAMPLE_ROWS)
    return buffer.getvalue().rstrip("\n")
