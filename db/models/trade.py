"""
db/models/trade.py

Trade vocabulary (Electrician, Welder, ...).
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, UUIDPrimaryKeyMixin


class Trade(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "trades"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    slug: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Trade slug={self.slug!r}>"
