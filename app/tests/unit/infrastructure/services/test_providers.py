"""
Unit tests for dependency injection providers.

Tests cover:
- get_settings() caching behavior
- Service graph wiring for the REST and MCP surfaces
- Dependency override pattern for testing
"""

import pytest
from unittest.mock import MagicMock, patch
from fastapi.testclient import TestClient
from fastapi import FastAPI

from infrastructure.configuration import Settings
from infrastructure.configuration.settings import VERSION
from infrastructure.services import providers
from infrastructure.services.dependencies import (
    GeolocationServiceDep,
    McpDispatcherDep,
    SettingsDep,
)
from infrastructure.services.providers import (
    get_geolocation_service,
    get_mcp_dispatcher,
    get_settings,
)
from packages.geolocate.service import GeolocationService


@pytest.fixture
def fake_geo_providers(geo_lookup):
    """Swap the database client for a fake and rebuild the dependent singletons."""
    get_geolocation_service.cache_clear()
    get_mcp_dispatcher.cache_clear()
    with patch.object(providers, "get_geo_lookup", return_value=geo_lookup):
        yield geo_lookup
    get_geolocation_service.cache_clear()
    get_mcp_dispatcher.cache_clear()


@pytest.mark.unit
class TestGetSettings:
    """Tests for get_settings() provider function."""

    @pytest.fixture(autouse=True)
    def cleanup_provider_cache(self):
        yield
        get_settings.cache_clear()

    def test_get_settings_returns_settings_instance(self):
        assert isinstance(get_settings(), Settings)

    def test_get_settings_returns_cached_instance(self):
        assert get_settings() is get_settings()

    def test_get_settings_cache_can_be_cleared(self):
        instance1 = get_settings()
        get_settings.cache_clear()
        instance2 = get_settings()
        assert instance1 is not instance2


@pytest.mark.unit
class TestServiceGraph:
    """Tests for the singletons built on top of the lookup ports."""

    def test_geolocation_service_is_singleton(self, fake_geo_providers):
        service = get_geolocation_service()

        assert isinstance(service, GeolocationService)
        assert get_geolocation_service() is service

    def test_geolocation_service_uses_geo_lookup(self, fake_geo_providers):
        get_geolocation_service().lookup_simple("8.8.8.8")

        assert fake_geo_providers.calls == ["8.8.8.8"]

    def test_mcp_dispatcher_reports_version(self, fake_geo_providers):
        dispatcher = get_mcp_dispatcher()

        assert dispatcher.server_info["version"] == VERSION

    def test_mcp_dispatcher_shares_geo_lookup(self, fake_geo_providers):
        response = get_mcp_dispatcher().dispatch(
            {
                "jsonrpc": "2.0",
                "id": 1,
                "method": "tools/call",
                "params": {"name": "geoip_lookup", "arguments": {"ip": "8.8.8.8"}},
            }
        )

        assert response["result"]["isError"] is False
        assert fake_geo_providers.calls == ["8.8.8.8"]

    def test_geo_lookup_failure_propagates(self):
        get_geolocation_service.cache_clear()
        with patch.object(
            providers, "get_geo_lookup", side_effect=FileNotFoundError("missing")
        ):
            with pytest.raises(FileNotFoundError):
                get_geolocation_service()
        get_geolocation_service.cache_clear()


@pytest.mark.unit
class TestDependencyOverridePattern:
    """Tests for FastAPI dependency override pattern."""

    def test_settings_dep_with_dependency_override(self):
        """SettingsDep can be overridden in FastAPI app."""
        app = FastAPI()

        @app.get("/config")
        def get_config(settings: SettingsDep) -> dict:
            return {"git_sha": settings.GIT_SHA}

        mock_settings = MagicMock(spec=Settings)
        mock_settings.GIT_SHA = "abc1234"
        app.dependency_overrides[get_settings] = lambda: mock_settings

        with TestClient(app) as client:
            response = client.get("/config")

        assert response.status_code == 200
        assert response.json() == {"git_sha": "abc1234"}
        app.dependency_overrides.clear()

    def test_service_deps_with_dependency_override(
        self, geolocation_service, mcp_dispatcher
    ):
        """Service dependencies resolve to the overriding instances."""
        app = FastAPI()

        @app.get("/wired")
        def wired(
            service: GeolocationServiceDep, dispatcher: McpDispatcherDep
        ) -> dict:
            return {
                "service": service is geolocation_service,
                "dispatcher": dispatcher is mcp_dispatcher,
            }

        app.dependency_overrides[get_geolocation_service] = lambda: geolocation_service
        app.dependency_overrides[get_mcp_dispatcher] = lambda: mcp_dispatcher

        with TestClient(app) as client:
            response = client.get("/wired")

        assert response.json() == {"service": True, "dispatcher": True}
        app.dependency_overrides.clear()
