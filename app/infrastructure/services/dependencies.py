"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for the service's shared dependencies.
Tests replace them through ``app.dependency_overrides`` keyed by the
provider functions.
"""

from typing import Annotated
from fastapi import Depends
from infrastructure.configuration import Settings
from infrastructure.services.providers import (
    get_settings,
    get_geolocation_service,
    get_mcp_dispatcher,
)
from packages.geolocate.service import GeolocationService
from packages.mcp.dispatcher import McpDispatcher

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# REST geolocation pipeline (validator, cache, lookup, builder)
GeolocationServiceDep = Annotated[
    GeolocationService, Depends(get_geolocation_service)
]

# JSON-RPC dispatcher for the MCP surface
McpDispatcherDep = Annotated[McpDispatcher, Depends(get_mcp_dispatcher)]

__all__ = [
    "SettingsDep",
    "GeolocationServiceDep",
    "McpDispatcherDep",
]
