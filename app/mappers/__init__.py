"""
app/mappers package marker.
"""

from app.mappers.agency_csv_mapper import (
    AGENCY_IMPORT_COLUMNS,
    AgencyCSVParser,
    CSVHeaderValidationError,
    render_import_template,
)

__all__ = [
    "AGENCY_IMPORT_COLUMNS",
    "AgencyCSVParser",
    "CSVHeaderValidationError",
    "render_import_template",
]
