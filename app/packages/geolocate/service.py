"""Geolocation pipeline behind the REST surface.

validate -> (cache get) -> lookup -> build or soft-fail default ->
(cache insert). Content negotiation stays in the routes.
"""

import structlog

from packages.geolocate.builder import ResponseBuilder
from packages.geolocate.cache import ResultCache
from packages.geolocate.ports import GeoLookupPort
from packages.geolocate.schemas import (
    IpGeoResponse,
    IpGeoResponseFull,
    TimezoneResponse,
    TimezoneResponseFull,
)
from packages.geolocate.validation import (
    validate_ip,
    validate_latitude,
    validate_longitude,
)

logger = structlog.get_logger()


class GeolocationService:
    """Stateless per request; the cache is the only shared mutable state.

    Private and loopback addresses are not rejected here. They are looked
    up like any other address and normally soft-fail to the default DTO.

    Args:
        geo: The geolocation database port.
        builder: Response composer shared with the MCP tools.
        cache: Simple-response cache.
    """

    def __init__(
        self, geo: GeoLookupPort, builder: ResponseBuilder, cache: ResultCache
    ) -> None:
        self._geo = geo
        self._builder = builder
        self._cache = cache

    def lookup_simple(self, ip: str, use_cache: bool = True) -> IpGeoResponse:
        """Simple-shape lookup.

        Args:
            ip: Address string as received (already trimmed by the caller).
            use_cache: False for protobuf-negotiated requests.

        Raises:
            GeoValidationError: INVALID_IP.
        """
        validate_ip(ip)
        log = logger.bind(operation="lookup_simple")

        if use_cache:
            cached = self._cache.get(ip)
            if cached is not None:
                log.debug("ipgeo_cache_hit")
                return cached

        result = self._geo.lookup(ip)
        response = self._builder.simple_from_lookup(result)
        log.info("ipgeo_lookup_completed", status=result.status.value)

        if use_cache:
            self._cache.insert(ip, response)
        return response

    def lookup_full(self, ip: str) -> IpGeoResponseFull:
        """Full-shape lookup; always recomputed.

        Raises:
            GeoValidationError: INVALID_IP.
        """
        validate_ip(ip)
        result = self._geo.lookup(ip)
        logger.info(
            "ipgeo_lookup_completed",
            operation="lookup_full",
            status=result.status.value,
        )
        return self._builder.full_from_lookup(ip, result)

    def timezone(self, lat: float, lon: float) -> TimezoneResponse:
        validate_latitude(lat)
        validate_longitude(lon)
        return self._builder.build_timezone(lat, lon)

    def timezone_full(self, lat: float, lon: float) -> TimezoneResponseFull:
        validate_latitude(lat)
        validate_longitude(lon)
        return self._builder.build_timezone_full(lat, lon)
