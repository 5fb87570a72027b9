"""
app/services package marker.
"""

from app.services.agency_import_service import (
    AgencyImportError,
    AgencyImportService,
    ReferenceDataUnavailableError,
    SlugGenerationError,
    get_agency_import_service,
)
from app.services.auth_email_service import (
    AuthEmailSender,
    AuthEmailService,
    LoggingAuthEmailSender,
    get_auth_email_service,
)
from app.services.rate_limiter import (
    AuthRequestThrottle,
    FixedWindowRateLimiter,
    InMemoryRateLimitStore,
    RateLimitDecision,
    ThrottleDecision,
)

__all__ = [
    "AgencyImportError",
    "AgencyImportService",
    "ReferenceDataUnavailableError",
    "SlugGenerationError",
    "get_agency_import_service",
    "AuthEmailSender",
    "AuthEmailService",
    "LoggingAuthEmailSender",
    "get_auth_email_service",
    "AuthRequestThrottle",
    "FixedWindowRateLimiter",
    "InMemoryRateLimitStore",
    "RateLimitDecision",
    "ThrottleDecision",
]
