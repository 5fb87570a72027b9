"""
app/utils package marker.
"""

from app.utils.client_ip import get_client_ip
from app.utils.slug import create_slug

__all__ = [
    "create_slug",
    "get_client_ip",
]
