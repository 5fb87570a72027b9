"""
app/repositories package marker.
"""

from app.repositories.agency_repository import AgencyImportStore, AgencyRepository
from app.repositories.errors import AgencyStorageError, DirectoryRepositoryError, ProfileLookupError
from app.repositories.profile_repository import ProfileRepository, hash_api_token

__all__ = [
    "AgencyImportStore",
    "AgencyRepository",
    "AgencyStorageError",
    "DirectoryRepositoryError",
    "ProfileLookupError",
    "ProfileRepository",
    "hash_api_token",
]
