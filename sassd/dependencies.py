"""Shared dependency factories for FastAPI endpoints.

The application owns one ledger and one engine, created in create_app and
stored on app.state; these factories hand them to routers.
"""

from fastapi import Request

from sass_library.cache import DependencyLedger
from sass_library.cache import RecompilationEngine
from sass_library.config import SassSettings


def get_settings(request: Request) -> SassSettings:
    """Get the application's settings."""
    return request.app.state.settings


def get_ledger(request: Request) -> DependencyLedger:
    """Get the process-wide dependency ledger."""
    return request.app.state.ledger


def get_engine(request: Request) -> RecompilationEngine:
    """Get the recompilation engine."""
    return request.app.state.engine
