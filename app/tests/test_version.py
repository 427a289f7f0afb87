"""
Tests for version endpoint
"""
from fastapi import status


def test_version_endpoint_returns_version_and_timezone(client):
    """Version endpoint reports service, version, environment and attendance timezone"""
    response = client.get("/api/v1/version")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()

    assert data["service"] == "attendance-tracker-backend"
    assert "version" in data
    assert data["env"] in ["local", "staging", "prod"]
    assert data["timezone"] == "UTC"


def test_version_endpoint_accessible_without_auth(client):
    """Version endpoint is accessible without authentication"""
    response = client.get("/api/v1/version")

    assert response.status_code == status.HTTP_200_OK
