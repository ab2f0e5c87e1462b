"""Status router for sassd API.

Provides health check and status information.
"""

import logging
import time
from typing import Annotated

from fastapi import APIRouter
from fastapi import Depends

from sass_library.cache import RecompilationEngine
from sass_library.config import SassSettings

from .. import __version__
from ..dependencies import get_engine
from ..dependencies import get_settings
from ..models import StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["status"])

# Track daemon start time for uptime calculation
_start_time = time.time()


@router.get("/status", response_model=StatusResponse)
async def get_status(
    settings: Annotated[SassSettings, Depends(get_settings)],
    engine: Annotated[RecompilationEngine, Depends(get_engine)],
) -> StatusResponse:
    """Get daemon status.

    Returns:
        Daemon status including version, uptime, directories and ledger size
    """
    return StatusResponse(
        status="running",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        src=settings.src,
        dest=settings.output_dir,
        tracked_sources=len(engine.ledger),
        pending_tasks=engine.pending,
    )


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Simple health status
    """
    return {"status": "healthy"}
