"""
app/validators package marker.
"""

from app.validators.agency_row_validator import AgencyRowValidator, is_valid_email

__all__ = [
    "AgencyRowValidator",
    "is_valid_email",
]
