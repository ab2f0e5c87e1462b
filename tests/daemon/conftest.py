"""
Fixtures for HTTP-level tests.

The client is always used as a context manager so the application lifespan
runs and background persist tasks share one event loop across requests.
"""

from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from sass_library.config import SassSettings
from sassd.main import create_app


@pytest.fixture
def app(settings: SassSettings, fake_compiler) -> FastAPI:
    """sassd application wired to the fake compiler."""
    return create_app(settings, compiler=fake_compiler)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Create FastAPI test client."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def drain(app: FastAPI, client: TestClient):
    """Wait for the engine's background writes on the client's event loop."""

    def wait() -> None:
        client.portal.call(app.state.engine.drain)

    return wait


@pytest.fixture
def site(styles: dict[str, Path]) -> dict[str, Path]:
    return {
        "source": styles["src"] / "index.scss",
        "output": styles["dest"] / "index.css",
        "partial": styles["partial"],
    }
