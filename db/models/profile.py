"""
db/models/profile.py

Profile model: the directory-side record of an authenticated user and role.
"""

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class ProfileRole:
    ADMIN = "admin"
    AGENCY_OWNER = "agency_owner"
    USER = "user"


class Profile(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """
    One user profile.

    api_token_hash holds the SHA-256 hex digest of the user's API bearer
    token; the raw token is never stored.
    """

    __tablename__ = "profiles"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    role: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=ProfileRole.USER,
        comment="admin, agency_owner, user",
    )

    api_token_hash: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        unique=True,
    )

    __table_args__ = (Index("ix_profiles_role", "role"),)

    def __repr__(self) -> str:
        return f"<Profile id={self.id} role={self.role!r}>"
