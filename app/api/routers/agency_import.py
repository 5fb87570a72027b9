"""
app/api/routers/agency_import.py

Admin endpoints for the agency bulk import flow: template download, file
parsing, preview validation and import.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, UploadFile, status

from app.api.dependencies import error_detail, get_agency_store, get_csv_upload, require_admin
from app.config import BulkImportSettings, get_bulk_import_settings
from app.domain.agency_import import CandidateRow
from app.mappers.agency_csv_mapper import (
    TEMPLATE_FILENAME,
    AgencyCSVParser,
    CSVHeaderValidationError,
    render_import_template,
)
from app.repositories.agency_repository import AgencyImportStore
from app.schemas.agency_import import (
    AgencyCommitRequest,
    AgencyImportRequest,
    ImportResponse,
    ParseResponse,
    PreviewResponse,
)
from app.services.agency_import_service import (
    AgencyImportService,
    ReferenceDataUnavailableError,
    get_agency_import_service,
)

router = APIRouter(
    prefix="/admin/agencies",
    tags=["agency-import"],
    dependencies=[Depends(require_admin)],
)


def _check_row_limit(rows: list[CandidateRow], settings: BulkImportSettings) -> None:
    if len(rows) > settings.max_rows:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_detail(
                "VALIDATION_ERROR",
                f"Too many rows. Maximum {settings.max_rows} rows per import.",
            ),
        )


def _database_error(exc: ReferenceDataUnavailableError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=error_detail("DATABASE_ERROR", str(exc)),
    )


@router.get("/template")
def download_template() -> Response:
    """
    Download a CSV template with the expected headers and two example rows.
    """

    return Response(
        content=render_import_template(),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{TEMPLATE_FILENAME}"'},
    )


@router.post("/bulk-import/parse", response_model=ParseResponse)
def parse_upload(file: UploadFile = Depends(get_csv_upload)) -> ParseResponse:
    """
    Parse an uploaded CSV into candidate rows without validating them.
    """

    try:
        result = AgencyCSVParser().parse_bytes(file.file.read())
    except CSVHeaderValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_detail("VALIDATION_ERROR", str(exc)),
        ) from exc
    finally:
        file.file.close()

    return ParseResponse.from_domain(result)


@router.post("/bulk-import/preview", response_model=PreviewResponse)
def preview_import(
    payload: AgencyImportRequest,
    store: AgencyImportStore = Depends(get_agency_store),
    import_service: AgencyImportService = Depends(get_agency_import_service),
    settings: BulkImportSettings = Depends(get_bulk_import_settings),
) -> PreviewResponse:
    """
    Validate rows and report errors and warnings per row. Writes nothing.
    """

    rows = payload.to_domain()
    _check_row_limit(rows, settings)

    try:
        report = import_service.preview(rows=rows, store=store)
    except ReferenceDataUnavailableError as exc:
        raise _database_error(exc) from exc

    return PreviewResponse.from_domain(report)


@router.post("/bulk-import", response_model=ImportResponse)
def execute_import(
    payload: AgencyCommitRequest,
    store: AgencyImportStore = Depends(get_agency_store),
    import_service: AgencyImportService = Depends(get_agency_import_service),
    settings: BulkImportSettings = Depends(get_bulk_import_settings),
) -> ImportResponse:
    """
    Create agencies row by row. One row's failure never stops the others.
    """

    rows = payload.to_domain()
    _check_row_limit(rows, settings)

    try:
        outcome = import_service.import_rows(rows=rows, store=store)
    except ReferenceDataUnavailableError as exc:
        raise _database_error(exc) from exc

    return ImportResponse.from_domain(outcome)
