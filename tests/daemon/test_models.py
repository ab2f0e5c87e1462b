"""
Unit tests for API response models.
"""

import pytest
from pydantic import ValidationError

from sassd.models import CacheEntryResponse
from sassd.models import StatusResponse


@pytest.mark.unit
class TestResponseModels:
    """Responses serialize as camelCase and are immutable."""

    def test_status_serializes_camel_case(self) -> None:
        status = StatusResponse(status="running", version="0.1.0", uptime_seconds=1.5, tracked_sources=3)

        data = status.model_dump(by_alias=True)

        assert data["uptimeSeconds"] == 1.5
        assert data["trackedSources"] == 3
        assert data["pendingTasks"] == 0

    def test_accepts_camel_case_input(self) -> None:
        status = StatusResponse(status="running", version="0.1.0", uptimeSeconds=2.0, trackedSources=0)

        assert status.uptime_seconds == 2.0

    def test_responses_are_frozen(self) -> None:
        entry = CacheEntryResponse(source="/site/a.scss", imports=["/site/_b.scss"])

        with pytest.raises(ValidationError):
            entry.source = "/site/other.scss"
