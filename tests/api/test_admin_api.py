"""
API tests for cache administration and app-level endpoints.

Tests cover:
- Cache stats after price lookups
- Cache clear
- Admin routes hidden in production
- Health and root endpoints
"""

from fastapi.testclient import TestClient

from cryptotrack.config.settings import Settings
from cryptotrack.main import create_app


class TestCacheAdminAPI:
    """Tests for /admin/cache."""

    def test_stats_after_price_lookup(self, client: TestClient):
        client.post("/crypto/prices", json={"coin_ids": ["bitcoin", "ethereum"]})

        response = client.get("/admin/cache/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["size"] == 2
        assert sorted(data["keys"]) == ["price:usd:bitcoin", "price:usd:ethereum"]
        assert data["ttl_seconds"] == 60

    def test_clear(self, client: TestClient):
        client.get("/crypto/trending")

        response = client.post("/admin/cache/clear")

        assert response.status_code == 200
        assert response.json() == {"message": "Cache cleared successfully"}
        assert client.get("/admin/cache/stats").json()["size"] == 0

    def test_admin_not_mounted_in_production(self):
        """
        GIVEN an app built with production settings
        WHEN I call the cache endpoints
        THEN they do not exist
        """
        production_app = create_app(Settings(environment="production"))
        paths = {route.path for route in production_app.routes}

        assert "/admin/cache/stats" not in paths
        assert "/admin/cache/clear" not in paths
        assert "/portfolio" in paths


class TestAppEndpoints:
    def test_health(self, client: TestClient):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_root(self, client: TestClient):
        data = client.get("/").json()

        assert data["docs"] == "/docs"
        assert data["app"] == "CryptoTrack"
