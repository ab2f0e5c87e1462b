"""Thin HTTP wrapper around the dependency ledger.

Architecture: This router contains ONLY HTTP handling.
All business logic is in sass_library.cache.
"""

import logging
from typing import Annotated

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException

from sass_library.cache import DependencyLedger
from sass_library.cache import normalize_ref

from ..dependencies import get_ledger
from ..models import CacheEntryResponse
from ..models import CacheStatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/cache", tags=["cache"])


@router.get("", response_model=CacheStatusResponse)
async def get_cache_status(
    ledger: Annotated[DependencyLedger, Depends(get_ledger)],
) -> CacheStatusResponse:
    """List every tracked source with its recorded imports."""
    entries = [CacheEntryResponse(source=source, imports=imports) for source, imports in ledger.snapshot().items()]
    return CacheStatusResponse(total=len(entries), entries=entries)


@router.get("/{source_path:path}", response_model=CacheEntryResponse)
async def get_cache_entry(
    source_path: str,
    ledger: Annotated[DependencyLedger, Depends(get_ledger)],
) -> CacheEntryResponse:
    """Get the recorded imports for one source (absolute path)."""
    source = normalize_ref("/" + source_path.lstrip("/"))
    imports = ledger.lookup(source)
    if imports is None:
        raise HTTPException(status_code=404, detail=f"Source not tracked: {source}")
    return CacheEntryResponse(source=source, imports=imports)
