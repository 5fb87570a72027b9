"""
tests/test_agency_row_validator.py

Pytest unit tests for AgencyRowValidator.

All tests are pure Python: reference data is built in memory and the
current year is pinned so founded-year bounds are deterministic.
"""

from __future__ import annotations

import uuid

import pytest

from app.domain.agency_import import (
    CandidateRow,
    ReferenceData,
    RegionRef,
    RegionVocabulary,
    TradeRef,
    TradeVocabulary,
)
from app.validators.agency_row_validator import (
    AgencyRowValidator,
    build_batch_name_index,
    is_valid_email,
    parse_founded_year,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def validator() -> AgencyRowValidator:
    return AgencyRowValidator(current_year=2026)


@pytest.fixture
def reference() -> ReferenceData:
    return ReferenceData(
        existing_names=frozenset({"existing staffing"}),
        trades=TradeVocabulary(
            [
                TradeRef(id=uuid.uuid4(), name="Electrician", slug="electrician"),
                TradeRef(id=uuid.uuid4(), name="HVAC Technician", slug="hvac-technician"),
            ]
        ),
        regions=RegionVocabulary([RegionRef(id=uuid.uuid4(), name="Texas", code="TX")]),
    )


def _validate(validator: AgencyRowValidator, reference: ReferenceData, **fields):
    row = CandidateRow(row_number=2, **fields)
    report = validator.validate_batch(rows=[row], reference=reference)
    return report.results[0]


# ---------------------------------------------------------------------------
# Blocking rules
# ---------------------------------------------------------------------------


def test_minimal_row_is_valid(validator, reference) -> None:
    result = _validate(validator, reference, name="Acme Staffing")

    assert result.valid is True
    assert result.errors == []
    assert result.warnings == []
    assert result.row_number == 2


@pytest.mark.parametrize(
    "name, message",
    [
        (None, "Name is required"),
        ("   ", "Name is required"),
        ("A", "Name must be at least 2 characters"),
        ("A" * 201, "Name must be less than 200 characters"),
    ],
)
def test_name_rules(validator, reference, name, message) -> None:
    result = _validate(validator, reference, name=name)

    assert result.valid is False
    assert message in result.errors


def test_name_matching_stored_agency_is_rejected_case_insensitively(validator, reference) -> None:
    result = _validate(validator, reference, name="  EXISTING Staffing ")

    assert result.errors == ["Agency with this name already exists in database"]


def test_duplicate_names_in_batch_point_at_first_occurrence(validator, reference) -> None:
    rows = [
        CandidateRow(row_number=2, name="Acme"),
        CandidateRow(row_number=3, name="Other"),
        CandidateRow(row_number=4, name="ACME "),
    ]

    report = validator.validate_batch(rows=rows, reference=reference)

    assert report.results[0].valid is True
    assert report.results[2].errors == ["Duplicate name in upload (first appears in row 2)"]


def test_description_and_headquarters_length_limits(validator, reference) -> None:
    result = _validate(
        validator,
        reference,
        name="Acme",
        description="x" * 5001,
        headquarters="y" * 201,
    )

    assert "Description must be less than 5000 characters" in result.errors
    assert "Headquarters must be less than 200 characters" in result.errors


@pytest.mark.parametrize(
    "website, message",
    [
        ("ftp://acme.com", "Website must start with http:// or https://"),
        ("acme.com", "Website must be a valid URL"),
        ("https://", "Website must be a valid URL"),
        ("http://exa mple.com", "Website must be a valid URL"),
        ("http://example.com:abc", "Website must be a valid URL"),
        ("https://<acme>.com", "Website must be a valid URL"),
    ],
)
def test_website_rules(validator, reference, website, message) -> None:
    result = _validate(validator, reference, name="Acme", website=website)

    assert result.errors == [message]


@pytest.mark.parametrize(
    "website",
    ["https://acme.com", "http://acme.com:8080/jobs?q=1", "http:example.com", "HTTPS://Acme.com", "http://user@acme.com"],
)
def test_website_accepts_what_browsers_accept(validator, reference, website) -> None:
    result = _validate(validator, reference, name="Acme", website=website)

    assert result.errors == []


def test_valid_contact_fields_pass(validator, reference) -> None:
    result = _validate(
        validator,
        reference,
        name="Acme",
        website="https://acme.example.com/about",
        phone="+12345678900",
        email="ops@acme.com",
        founded_year="1999",
    )

    assert result.valid is True


@pytest.mark.parametrize("phone", ["555-1234", "+0123456", "12345678901234567"])
def test_phone_must_be_e164(validator, reference, phone) -> None:
    result = _validate(validator, reference, name="Acme", phone=phone)

    assert result.errors == ["Phone must be in E.164 format (e.g., +12345678900)"]


def test_email_must_look_like_an_address(validator, reference) -> None:
    result = _validate(validator, reference, name="Acme", email="not-an-email")

    assert result.errors == ["Email must be a valid email address"]


@pytest.mark.parametrize(
    "founded_year, message",
    [
        ("99", "Founded year must be a valid 4-digit year"),
        ("abcd", "Founded year must be a valid 4-digit year"),
        ("1799", "Founded year must be between 1800 and 2026"),
        ("2027", "Founded year must be between 1800 and 2026"),
    ],
)
def test_founded_year_rules(validator, reference, founded_year, message) -> None:
    result = _validate(validator, reference, name="Acme", founded_year=founded_year)

    assert result.errors == [message]


def test_blank_optional_fields_are_ignored(validator, reference) -> None:
    result = _validate(
        validator,
        reference,
        name="Acme",
        website="  ",
        phone="",
        email=" ",
        founded_year="",
    )

    assert result.valid is True


# ---------------------------------------------------------------------------
# Advisory rules
# ---------------------------------------------------------------------------


def test_nonstandard_employee_count_and_company_size_warn(validator, reference) -> None:
    result = _validate(validator, reference, name="Acme", employee_count="lots", company_size="huge")

    assert result.valid is True
    assert result.warnings == [
        'Employee count "lots" is not a standard value. '
        "Valid options: 1-10, 11-50, 51-100, 101-200, 201-500, 501-1000, 1001+",
        'Company size "huge" is not a standard value. Valid options: Small, Medium, Large, Enterprise',
    ]


def test_company_size_is_compared_capitalized(validator, reference) -> None:
    result = _validate(validator, reference, name="Acme", company_size="medium")

    assert result.warnings == []


def test_unknown_trades_and_regions_warn(validator, reference) -> None:
    result = _validate(
        validator,
        reference,
        name="Acme",
        trades=["electrician", "hvac-technician", "Astronaut"],
        regions=["tx", "Texas", "ZZ"],
    )

    assert result.valid is True
    assert result.warnings == [
        "Unknown trades will be skipped: Astronaut",
        "Unknown regions will be skipped: ZZ",
    ]


def test_warnings_never_change_validity(validator, reference) -> None:
    result = _validate(validator, reference, name="A", trades=["Astronaut"])

    assert result.valid is False
    assert result.warnings == ["Unknown trades will be skipped: Astronaut"]


# ---------------------------------------------------------------------------
# Summary and helpers
# ---------------------------------------------------------------------------


def test_summary_counts(validator, reference) -> None:
    rows = [
        CandidateRow(row_number=2, name="Good"),
        CandidateRow(row_number=3, name="Warned", regions=["ZZ"]),
        CandidateRow(row_number=4, name=None),
    ]

    summary = validator.validate_batch(rows=rows, reference=reference).summary

    assert (summary.total, summary.valid, summary.invalid, summary.with_warnings) == (3, 2, 1, 1)


def test_validating_the_same_batch_twice_gives_identical_reports(validator, reference) -> None:
    rows = [
        CandidateRow(row_number=2, name="Acme", website="acme.com", trades=["Electrician", "Welder"]),
        CandidateRow(row_number=3, name="acme"),
        CandidateRow(row_number=4, name="Existing Staffing", regions=["tx", "ZZ"]),
        CandidateRow(row_number=5, name=None, employee_count="lots"),
    ]
    snapshot = list(rows)

    first = validator.validate_batch(rows=rows, reference=reference)
    second = validator.validate_batch(rows=rows, reference=reference)

    assert first == second
    assert first.summary == second.summary
    assert rows == snapshot
    assert reference.existing_names == frozenset({"existing staffing"})


def test_build_batch_name_index_keeps_first_row() -> None:
    rows = [
        CandidateRow(row_number=5, name="Acme"),
        CandidateRow(row_number=6, name=None),
        CandidateRow(row_number=7, name=" acme"),
    ]

    assert build_batch_name_index(rows) == {"acme": 5}


def test_parse_founded_year() -> None:
    assert parse_founded_year(" 1999 ", current_year=2026) == 1999
    assert parse_founded_year("1700", current_year=2026) is None
    assert parse_founded_year("nineteen", current_year=2026) is None
    assert parse_founded_year(None, current_year=2026) is None


def test_is_valid_email() -> None:
    assert is_valid_email("a@b.co") is True
    assert is_valid_email(" a@b.co ") is True
    assert is_valid_email("a@b") is False
    assert is_valid_email("") is False
    assert is_valid_email(None) is False
