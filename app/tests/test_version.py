"""
Tests for version endpoint
"""
from app.core.config import settings
from app.core.constants import SYSTEM_CREDIT


def test_version_endpoint(client):
    """Test version endpoint returns service metadata"""
    response = client.get("/api/v1/version")

    assert response.status_code == 200
    data = response.json()

    assert data["service"] == "workforce-ops-backend"
    assert data["version"] == (settings.VERSION or "1.0.0")
    assert data["env"] == settings.APP_ENV
    assert data["timezone"] == settings.TZ
    assert data["credit"] == SYSTEM_CREDIT
