"""API models for sassd."""

from .base import CamelCaseModel
from .responses import CacheEntryResponse
from .responses import CacheStatusResponse
from .responses import StatusResponse

__all__ = [
    "CamelCaseModel",
    "CacheEntryResponse",
    "CacheStatusResponse",
    "StatusResponse",
]
