"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for the lookup ports, the
shared response builder and cache, and the MCP dispatcher.
"""

from functools import lru_cache

from infrastructure.clients.maxmind import MaxMindClient
from infrastructure.clients.timezone import PytzDetailsClient, TimezoneFinderClient
from infrastructure.configuration import Settings
from infrastructure.configuration.settings import VERSION
from packages.geolocate.builder import ResponseBuilder
from packages.geolocate.cache import ResultCache
from packages.geolocate.reference import StaticCountryReference
from packages.geolocate.service import GeolocationService
from packages.mcp.dispatcher import McpDispatcher
from packages.mcp.tools import GeoTools


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Infrastructure packages should use this directly:
        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/version")
        def get_version(settings: SettingsDep):
            return {"version": settings.GIT_SHA}

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_geo_lookup() -> MaxMindClient:
    """
    Get the GeoIP database client singleton.

    Opens the database on first call; the lifespan calls this at startup so
    a missing or corrupt database aborts the process before serving.

    Returns:
        MaxMindClient: Shared read-only database handle.
    """
    return MaxMindClient(settings=get_settings())


@lru_cache
def get_timezone_names() -> TimezoneFinderClient:
    """Coordinate to IANA zone resolver singleton (loads boundary data)."""
    return TimezoneFinderClient()


@lru_cache
def get_timezone_details() -> PytzDetailsClient:
    return PytzDetailsClient()


@lru_cache
def get_country_reference() -> StaticCountryReference:
    """Country metadata and language tables, read once per process."""
    return StaticCountryReference()


@lru_cache
def get_response_builder() -> ResponseBuilder:
    return ResponseBuilder(
        timezone_names=get_timezone_names(),
        timezone_details=get_timezone_details(),
        countries=get_country_reference(),
    )


@lru_cache
def get_result_cache() -> ResultCache:
    """Simple-response cache sized from settings.cache."""
    return ResultCache.from_settings(get_settings())


@lru_cache
def get_geolocation_service() -> GeolocationService:
    """
    Get the REST geolocation pipeline singleton.

    Usage:
        @router.get("/ipgeo")
        def ipgeo(service: GeolocationServiceDep):
            return service.lookup_simple("8.8.8.8")
    """
    return GeolocationService(
        geo=get_geo_lookup(),
        builder=get_response_builder(),
        cache=get_result_cache(),
    )


@lru_cache
def get_mcp_dispatcher() -> McpDispatcher:
    """
    Get the JSON-RPC dispatcher shared by the HTTP and stdio transports.

    The dispatcher reuses the geo client and response builder but never
    the result cache.
    """
    tools = GeoTools(geo=get_geo_lookup(), builder=get_response_builder())
    return McpDispatcher(
        tools=tools,
        version=VERSION,
        cache_ttl_seconds=get_settings().cache.CACHE_TTL_SECS,
    )
