"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.agency import Agency
from db.models.association import AgencyRegion, AgencyTrade
from db.models.profile import Profile, ProfileRole
from db.models.region import Region
from db.models.trade import Trade

__all__ = [
    "Agency",
    "AgencyRegion",
    "AgencyTrade",
    "Profile",
    "ProfileRole",
    "Region",
    "Trade",
]
