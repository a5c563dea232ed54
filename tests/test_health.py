"""
Health endpoint tests using pytest-asyncio and httpx.AsyncClient.
"""

import pytest


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/api/v1/health", "/health"])
async def test_health_endpoint(test_client, path):
    """Test the health check endpoint returns expected structure."""
    response = await test_client.get(path)

    assert response.status_code == 200
    data = response.json()

    assert "status" in data
    assert data["uptime"].startswith("PT")
    assert isinstance(data["checks"], dict)
    assert "database" in data["checks"]

    # Status should be "ok" or "degraded"
    assert data["status"] in ["ok", "degraded"]
