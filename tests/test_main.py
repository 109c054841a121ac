"""Unit tests for the main FastAPI application."""
from fastapi.testclient import TestClient

from reading_tracker import __version__
from reading_tracker.main import app


client = TestClient(app)


class TestHealthCheck:
    """Test cases for health check endpoint."""

    def test_health_check_success(self):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == __version__
        assert "timestamp" in data


class TestRouting:

    def test_routers_are_mounted(self):
        paths = {route.path for route in app.routes}

        assert "/api/auth/login" in paths
        assert "/api/reading-plan" in paths
        assert "/api/users/{user_id}/progress/{day}" in paths
        assert "/api/admin/export" in paths

    def test_unknown_route_returns_404(self):
        response = client.get("/api/does-not-exist")

        assert response.status_code == 404
