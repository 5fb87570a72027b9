"""
app/api/routers package marker.
"""

from app.api.routers.agency_import import router as agency_import_router
from app.api.routers.auth import router as auth_router

__all__ = [
    "agency_import_router",
    "auth_router",
]
