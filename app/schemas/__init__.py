"""
app/schemas package marker.
"""

from app.schemas.agency_import import (
    AgencyCommitRequest,
    AgencyCommitRow,
    AgencyImportRequest,
    AgencyImportRow,
    ImportResponse,
    ParseResponse,
    PreviewResponse,
)
from app.schemas.auth import AuthEmailRequest, AuthEmailResponse, RateLimitedResponse

__all__ = [
    "AgencyCommitRequest",
    "AgencyCommitRow",
    "AgencyImportRequest",
    "AgencyImportRow",
    "AuthEmailRequest",
    "AuthEmailResponse",
    "ImportResponse",
    "ParseResponse",
    "PreviewResponse",
    "RateLimitedResponse",
]
