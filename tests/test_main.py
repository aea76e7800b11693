"""
Tests for application wiring.
"""

import pytest

from neurahub.config import settings
from neurahub.database import supabase_client
from neurahub.database.supabase_client import SupabaseClient


@pytest.fixture
def created_clients(monkeypatch):
    """Record create_client calls instead of connecting."""
    calls = []

    def fake_create_client(url, key):
        calls.append(key)
        return f"client-{key}"

    monkeypatch.setattr(supabase_client, "create_client", fake_create_client)
    monkeypatch.setattr(settings, "supabase_key", "anon")
    SupabaseClient.reset_client()
    yield calls
    SupabaseClient.reset_client()


class TestSupabaseClient:
    """Test the cached Supabase clients."""

    def test_client_is_cached_until_reset(self, created_clients):
        assert SupabaseClient.get_client() is SupabaseClient.get_client()
        SupabaseClient.reset_client()
        SupabaseClient.get_client()
        assert created_clients == ["anon", "anon"]

    def test_service_client_falls_back_to_anon(self, created_clients, monkeypatch):
        monkeypatch.setattr(settings, "supabase_service_role_key", None)
        assert SupabaseClient.get_service_client() == "client-anon"

    def test_service_client_uses_service_key(self, created_clients, monkeypatch):
        monkeypatch.setattr(settings, "supabase_service_role_key", "service")
        assert SupabaseClient.get_service_client() == "client-service"


class TestApp:
    """Test the FastAPI app."""

    def test_health(self, api):
        response = api.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_security_headers(self, api):
        response = api.get("/")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_hub_routes_mounted(self, api):
        paths = set(api.app.openapi()["paths"])
        for path in (
            "/api/v1/teams",
            "/api/v1/teams/{team_id}/tasks",
            "/api/v1/teams/{team_id}/ideas",
            "/api/v1/teams/{team_id}/events/calendar",
            "/api/v1/teams/{team_id}/knowledge/folders",
            "/api/v1/teams/{team_id}/sync",
            "/api/v1/invitations",
            "/api/v1/qa/questions",
            "/api/v1/map/teams",
            "/api/v1/assistant/chat",
            "/api/v1/dashboard",
        ):
            assert path in paths
