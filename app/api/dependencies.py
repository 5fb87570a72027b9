"""
app/api/dependencies.py

Shared FastAPI dependencies for uploads, storage and admin authorization.
"""

from __future__ import annotations

import logging

from fastapi import Depends, File, Header, HTTPException, Request, UploadFile, status
from sqlalchemy.orm import Session

from app.repositories.agency_repository import AgencyImportStore, AgencyRepository
from app.repositories.errors import ProfileLookupError
from app.repositories.profile_repository import ProfileRepository
from app.utils.client_ip import get_client_ip
from db.models.profile import Profile, ProfileRole
from db.session import get_db

logger = logging.getLogger(__name__)

CSV_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
}


def error_detail(code: str, message: str) -> dict[str, str]:
    return {"code": code, "message": message}


def get_csv_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is a CSV by extension or MIME type.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    is_csv_filename = filename.endswith(".csv")
    is_csv_content_type = content_type in CSV_CONTENT_TYPES

    if not is_csv_filename and not is_csv_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_detail("VALIDATION_ERROR", "Only CSV files are allowed."),
        )

    return file


def get_agency_store(db: Session = Depends(get_db)) -> AgencyImportStore:
    return AgencyRepository(db)


def get_profile_repository(db: Session = Depends(get_db)) -> ProfileRepository:
    return ProfileRepository(db)


def get_request_client_ip(request: Request) -> str:
    return get_client_ip(request.headers)


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def require_admin(
    authorization: str | None = Header(default=None),
    profiles: ProfileRepository = Depends(get_profile_repository),
) -> Profile:
    """
    Resolve the bearer token to a profile and require the admin role.
    """

    token = _bearer_token(authorization)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=error_detail("UNAUTHORIZED", "Authentication required"),
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        profile = profiles.get_by_api_token(token)
    except ProfileLookupError as exc:
        logger.error("Admin authorization lookup failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail("DATABASE_ERROR", "Failed to verify credentials"),
        ) from exc

    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=error_detail("UNAUTHORIZED", "Authentication required"),
            headers={"WWW-Authenticate": "Bearer"},
        )

    if profile.role != ProfileRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=error_detail("FORBIDDEN", "Admin access required"),
        )

    return profile
