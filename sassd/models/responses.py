"""Response models for sassd API.

Pydantic models for API responses.
"""

from pydantic import Field

from sassd.models.base import CamelCaseModel


class StatusResponse(CamelCaseModel):
    """Daemon status.

    Attributes:
        status: Daemon status (running)
        version: sassd version
        uptime_seconds: Seconds since start
        src: Source directory
        dest: Output directory
        tracked_sources: Number of sources in the dependency ledger
        pending_tasks: Background compiles/persists still running
    """

    status: str = Field(..., description="Daemon status")
    version: str = Field(..., description="sassd version")
    uptime_seconds: float = Field(..., description="Seconds since start")
    src: str | None = Field(default=None, description="Source directory")
    dest: str | None = Field(default=None, description="Output directory")
    tracked_sources: int = Field(..., description="Sources in the dependency ledger")
    pending_tasks: int = Field(default=0, description="Background tasks still running")


class CacheEntryResponse(CamelCaseModel):
    """Ledger entry for one source.

    Attributes:
        source: Source path
        imports: Files included at the last successful compile
    """

    source: str = Field(..., description="Source path")
    imports: list[str] = Field(default_factory=list, description="Files included at last compile")


class CacheStatusResponse(CamelCaseModel):
    """Snapshot of the dependency ledger."""

    total: int = Field(..., description="Number of tracked sources")
    entries: list[CacheEntryResponse] = Field(default_factory=list, description="Tracked sources")
