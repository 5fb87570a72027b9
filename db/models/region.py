"""
db/models/region.py

Region vocabulary. One row per US state; code is the postal abbreviation.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, UUIDPrimaryKeyMixin


class Region(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "regions"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    code: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        unique=True,
        comment="Upper-case postal code, e.g. TX",
    )

    def __repr__(self) -> str:
        return f"<Region code={self.code!r}>"
