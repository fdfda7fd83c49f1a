"""
Module: test_api.py
Description: Integration tests for the bridge backend application.

Tests the assembled FastAPI app: health check, API key middleware
wiring from settings, CORS preflight and the error envelope.
"""

import pytest
from fastapi.testclient import TestClient

from bridge_backend.main import create_app


@pytest.fixture
def app(test_settings):
    """Application built from test settings, with one protected route."""
    application = create_app(test_settings)

    @application.get("/api/bridge/stats")
    async def bridge_stats():
        return {"total_locks": 0}

    @application.get("/api/boom")
    async def boom():
        raise RuntimeError("unexpected")

    return application


@pytest.fixture
def test_client(app):
    """Create FastAPI test client."""
    return TestClient(app, raise_server_exceptions=False)


class TestApiIntegration:
    """Integration tests for the assembled application."""

    def test_health_endpoint(self, test_client):
        """Test health check is public and reports settings."""
        response = test_client.get("/health")

        assert response.status_code == 200
        data = response.json()

        assert data["status"] == "ok"
        assert "Bridge backend is healthy" in data["message"]
        assert data["version"] == "0.1.0-test"
        assert data["environment"] == "test"

    def test_protected_route_requires_key(self, test_client):
        """Test the configured key is enforced on API routes."""
        response = test_client.get("/api/bridge/stats", headers={"x-api-key": "wrong"})

        assert response.status_code == 401
        assert response.json() == {
            "error": {"message": "Invalid or missing API key", "status": 401}
        }

    def test_protected_route_with_key(self, test_client):
        """Test the configured key allows access."""
        response = test_client.get("/api/bridge/stats", headers={"x-api-key": "secret123"})

        assert response.status_code == 200
        assert response.json() == {"total_locks": 0}

    def test_protected_route_from_trusted_origin(self, test_client):
        """Test a browser request from the trusted frontend."""
        response = test_client.get(
            "/api/bridge/stats",
            headers={"origin": "https://app.example.com"}
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "https://app.example.com"

    def test_cors_preflight(self, test_client):
        """Test CORS answers preflight before authorization runs."""
        response = test_client.options(
            "/api/bridge/stats",
            headers={
                "origin": "https://app.example.com",
                "access-control-request-method": "GET",
                "access-control-request-headers": "x-api-key",
            }
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "https://app.example.com"

    def test_no_key_configured_allows_all(self, test_settings):
        """Test the middleware is a no-op when no key is configured."""
        settings = test_settings.model_copy(update={"api_key": None})
        application = create_app(settings)

        @application.get("/api/bridge/stats")
        async def bridge_stats():
            return {"total_locks": 0}

        response = TestClient(application).get("/api/bridge/stats")

        assert response.status_code == 200

    def test_unhandled_error_envelope(self, test_client):
        """Test unhandled exceptions produce a structured 500."""
        response = test_client.get("/api/boom", headers={"x-api-key": "secret123"})

        assert response.status_code == 500
        assert response.json() == {
            "error": {"message": "Internal server error", "status": 500}
        }

    def test_shipped_app_is_protected(self):
        """Test the module-level app carries the API key middleware."""
        from bridge_backend.auth.middleware import ApiKeyMiddleware
        from bridge_backend.main import app as shipped_app

        assert ApiKeyMiddleware in [m.cls for m in shipped_app.user_middleware]
