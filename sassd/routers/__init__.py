"""API routers for sassd.

This module contains FastAPI routers for all API endpoints.
"""

from .cache import router as cache_router
from .status import router as status_router

__all__ = [
    "cache_router",
    "status_router",
]
