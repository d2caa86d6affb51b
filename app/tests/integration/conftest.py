"""
Root-level conftest.py for integration tests.

Integration tests drive the real application (routers, middleware and CORS)
through FastAPI's TestClient. The service singletons are replaced through
``dependency_overrides`` with instances built on the fake lookup ports, so
no GeoLite2 database is needed.

The client is created without entering its context manager, so the
lifespan (which opens the database) does not run. Lifespan behaviour has
its own tests in server/test_lifespan.py.
"""

import pytest
from fastapi.testclient import TestClient

from infrastructure.configuration.infrastructure import ServerSettings
from infrastructure.services import (
    get_geolocation_service,
    get_mcp_dispatcher,
    get_settings,
)
from server.server import handler


@pytest.fixture
def app_settings(settings):
    """Settings with a fixed public base URL and version."""
    return settings.model_copy(
        update={
            "GIT_SHA": "abc1234",
            "server": ServerSettings(BASE_URL="https://geo.example.com"),
        }
    )


@pytest.fixture
def app(app_settings, geolocation_service, mcp_dispatcher):
    """The production app with service dependencies overridden."""
    handler.dependency_overrides[get_settings] = lambda: app_settings
    handler.dependency_overrides[get_geolocation_service] = lambda: geolocation_service
    handler.dependency_overrides[get_mcp_dispatcher] = lambda: mcp_dispatcher
    yield handler
    handler.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)
