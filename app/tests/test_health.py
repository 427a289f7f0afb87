"""
Tests for health endpoint
"""


def test_health_endpoint(client):
    """Health endpoint returns service status"""
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()

    assert data["status"] == "ok"
    assert data["service"] == "attendance-tracker-backend"
