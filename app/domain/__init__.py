"""
app/domain package marker.
"""

from app.domain.agency_import import (
    AgencyRecord,
    BulkImportOutcome,
    CandidateRow,
    ImportRowResult,
    ImportStatus,
    ReferenceData,
    RowValidationResult,
    ValidationReport,
)
from app.domain.agency_upload import ParseError, ParseResult

__all__ = [
    "AgencyRecord",
    "BulkImportOutcome",
    "CandidateRow",
    "ImportRowResult",
    "ImportStatus",
    "ParseError",
    "ParseResult",
    "ReferenceData",
    "RowValidationResult",
    "ValidationReport",
]
