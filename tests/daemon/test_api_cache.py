"""
Integration tests for the dependency ledger API.
"""

import pytest
from fastapi.testclient import TestClient


@pytest.mark.integration
class TestCacheAPI:
    """Test ledger inspection endpoints."""

    def test_empty_ledger(self, client: TestClient) -> None:
        response = client.get("/api/v1/cache")

        assert response.status_code == 200
        assert response.json() == {"total": 0, "entries": []}

    def test_lists_compiled_sources(self, client: TestClient, site) -> None:
        client.get("/index.css")

        data = client.get("/api/v1/cache").json()

        assert data["total"] == 1
        assert data["entries"] == [{"source": str(site["source"]), "imports": [str(site["partial"])]}]

    def test_get_single_entry(self, client: TestClient, site) -> None:
        client.get("/index.css")

        response = client.get(f"/api/v1/cache{site['source']}")

        assert response.status_code == 200
        assert response.json()["imports"] == [str(site["partial"])]

    def test_untracked_source_returns_404(self, client: TestClient, site) -> None:
        response = client.get(f"/api/v1/cache{site['source']}")

        assert response.status_code == 404
        assert "Source not tracked" in response.json()["detail"]

    def test_failed_compile_is_not_listed(self, client: TestClient, styles) -> None:
        (styles["src"] / "broken.scss").write_text("!error\n", encoding="utf-8")
        client.get("/broken.css")

        assert client.get("/api/v1/cache").json()["total"] == 0
