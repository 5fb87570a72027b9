"""
Repository-layer exceptions for directory persistence.
"""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError


class DirectoryRepositoryError(Exception):
    """Base exception for directory repository failures."""


class AgencyStorageError(DirectoryRepositoryError):
    """Raised when one agency storage round-trip fails."""

    @classmethod
    def from_sqlalchemy(cls, exc: SQLAlchemyError, *, fallback: str) -> AgencyStorageError:
        """
        Wrap a driver error, keeping the database's own message when it has one.
        """

        original = getattr(exc, "orig", None)
        message = str(original).strip() if original is not None else ""
        return cls(message or fallback)


class ProfileLookupError(DirectoryRepositoryError):
    """Raised when the caller's profile cannot be read."""
