"""MaxMind GeoIP2 client for infrastructure layer.

Public API (Package Level):
- MaxMindClient: GeoLookupPort over a GeoLite2-City database

Note: Application code should import from infrastructure.services, not directly from this package.

Developer Usage (Recommended):
    from infrastructure.services import GeolocationServiceDep

    @router.get("/ipgeo")
    def ipgeo(ip: str, service: GeolocationServiceDep):
        return service.lookup_simple(ip)
"""

from infrastructure.clients.maxmind.client import MaxMindClient

__all__ = [
    "MaxMindClient",
]
