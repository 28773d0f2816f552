"""Tests for the liveness routes."""

import pytest
from fastapi.testclient import TestClient

from gate.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client backed by a mock container."""
    return TestClient(create_app(build_test_container()))


class TestLiveness:
    """Tests for GET /."""

    def test_returns_plain_ok(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.text == "OK"
        assert response.headers["content-type"].startswith("text/plain")


class TestHealthCheck:
    """Tests for GET /health."""

    def test_reports_healthy(self, client):
        """Should report status, version and the deployed commit."""
        # Act
        response = client.get("/health")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"
        assert "git_sha" in data
        assert "timestamp" in data
        assert data["environment"] == "test"
