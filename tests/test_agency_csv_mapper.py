"""
tests/test_agency_csv_mapper.py

Pytest unit tests for AgencyCSVParser and the import template.
"""

from __future__ import annotations

import csv
import io

import pytest

from app.mappers.agency_csv_mapper import (
    AGENCY_IMPORT_COLUMNS,
    AgencyCSVParser,
    CSVHeaderValidationError,
    normalize_boolean,
    normalize_header,
    parse_comma_separated,
    render_import_template,
)


@pytest.fixture
def parser() -> AgencyCSVParser:
    return AgencyCSVParser()


def test_parses_rows_with_normalized_values(parser) -> None:
    content = (
        "\ufeffName,Website,Offers Per Diem,is_union,trades,regions\n"
        '  Acme Staffing ,https://acme.com,yes,N,"Electrician, Welder,,",TX\n'
    ).encode("utf-8")

    result = parser.parse_bytes(content)

    assert result.success is True
    assert result.errors == []
    row = result.rows[0]
    assert row.row_number == 2
    assert row.name == "Acme Staffing"
    assert row.website == "https://acme.com"
    assert row.offers_per_diem is True
    assert row.is_union is False
    assert row.trades == ["Electrician", "Welder"]
    assert row.regions == ["TX"]
    assert row.description is None


def test_missing_name_column_is_header_error(parser) -> None:
    result = parser.parse_text("website,phone\nhttps://a.com,+15555550100\n")

    assert result.success is False
    assert [(error.type, error.message) for error in result.errors] == [
        ("header", "Missing required column: name")
    ]
    assert result.rows == []


def test_unrecognized_columns_warn(parser) -> None:
    result = parser.parse_text("name,Fax Number,notes\nAcme,123,hi\n")

    assert result.success is True
    assert result.warnings == ["Unrecognized columns will be ignored: Fax Number, notes"]


def test_empty_rows_skipped_and_numbering_kept(parser) -> None:
    result = parser.parse_text("name,phone\nAcme,\n,\n\nBeta,\n")

    assert [(row.row_number, row.name) for row in result.rows] == [(2, "Acme"), (4, "Beta")]


def test_row_without_name_is_row_error(parser) -> None:
    result = parser.parse_text("name,phone\n ,+15555550100\nAcme,\n")

    assert result.success is False
    assert [(error.type, error.row, error.message) for error in result.errors] == [
        ("row", 2, "Missing required field: name")
    ]
    assert [row.name for row in result.rows] == ["Acme"]


def test_header_only_file_has_no_rows(parser) -> None:
    result = parser.parse_text("name,website\n")

    assert result.success is True
    assert result.rows == []


def test_empty_file_is_file_error(parser) -> None:
    result = parser.parse_text("")

    assert result.success is False
    assert result.errors[0].type == "file"


def test_non_utf8_bytes_rejected(parser) -> None:
    with pytest.raises(CSVHeaderValidationError):
        parser.parse_bytes(b"name\n\xff\xfe\xfa\n")


@pytest.mark.parametrize(
    "raw, expected",
    [("true", True), ("YES", True), (" y ", True), ("1", True), ("false", False), ("No", False), ("n", False), ("0", False), ("maybe", None), ("", None), (None, None)],
)
def test_normalize_boolean(raw, expected) -> None:
    assert normalize_boolean(raw) is expected


def test_helpers() -> None:
    assert normalize_header("  Founded   Year ") == "founded_year"
    assert parse_comma_separated("  ") is None
    assert parse_comma_separated("a, b ,") == ["a", "b"]


# ---------------------------------------------------------------------------
# Template
# ---------------------------------------------------------------------------


def test_template_has_headers_and_two_examples() -> None:
    content = render_import_template()

    assert not content.endswith("\n")
    records = list(csv.DictReader(io.StringIO(content)))
    assert tuple(records[0].keys()) == AGENCY_IMPORT_COLUMNS
    assert [record["name"] for record in records] == ["ABC Staffing", "Pacific Construction Workforce"]
    assert records[0]["headquarters"] == "Houston, TX"
    assert records[1]["regions"] == "CA,AZ,NV"
    assert '"Electrician,Welder,Pipefitter"' in content


def test_template_round_trips_through_parser(parser) -> None:
    result = parser.parse_text(render_import_template())

    assert result.success is True
    assert result.warnings == []
    assert result.rows[0].trades == ["Electrician", "Welder", "Pipefitter"]
    assert result.rows[1].is_union is True
