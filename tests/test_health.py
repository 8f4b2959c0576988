"""Tests for the health check endpoint."""

from fastapi.testclient import TestClient

from task_api.models import API_VERSION


def test_health_check(client: TestClient) -> None:
    """Test that health check returns healthy status."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": API_VERSION}
