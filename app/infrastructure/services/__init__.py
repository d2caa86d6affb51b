"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    SettingsDep,
    GeolocationServiceDep,
    McpDispatcherDep,
)
from infrastructure.services.providers import (
    get_settings,
    get_geo_lookup,
    get_timezone_names,
    get_timezone_details,
    get_country_reference,
    get_response_builder,
    get_result_cache,
    get_geolocation_service,
    get_mcp_dispatcher,
)

__all__ = [
    "SettingsDep",
    "GeolocationServiceDep",
    "McpDispatcherDep",
    "get_settings",
    "get_geo_lookup",
    "get_timezone_names",
    "get_timezone_details",
    "get_country_reference",
    "get_response_builder",
    "get_result_cache",
    "get_geolocation_service",
    "get_mcp_dispatcher",
]
