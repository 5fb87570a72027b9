"""
app/repositories/profile_repository.py

Read access to user profiles for request authorization.
"""

from __future__ import annotations

import hashlib

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.repositories.errors import ProfileLookupError
from db.models.profile import Profile


def hash_api_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class ProfileRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_api_token(self, token: str) -> Profile | None:
        """
        Resolve the profile owning a raw bearer token, or None.
        """

        stmt = select(Profile).where(Profile.api_token_hash == hash_api_token(token))
        try:
            return self._session.execute(stmt).scalars().first()
        except SQLAlchemyError as exc:
            raise ProfileLookupError("Failed to load profile.") from exc
