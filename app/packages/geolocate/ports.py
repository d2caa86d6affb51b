"""Contracts for the external collaborators the response builder consumes.

Production adapters live in ``infrastructure.clients``; tests inject
in-memory fakes through the same protocols.
"""

from typing import Optional, Protocol

from infrastructure.operations import OperationResult
from packages.geolocate.models import CountryMetadata, TimezoneDetail


class GeoLookupPort(Protocol):
    def lookup(self, ip: str) -> OperationResult:
        """Return SUCCESS with a GeoRecord, NOT_FOUND, or an error result."""
        ...


class TimezoneNamePort(Protocol):
    def resolve(self, lat: float, lon: float) -> Optional[str]:
        """Return the IANA zone containing the point, or None."""
        ...


class TimezoneDetailPort(Protocol):
    def details(self, name: str) -> Optional[TimezoneDetail]:
        """Return offset/DST facts for a zone name, or None if unknown."""
        ...


class CountryReferencePort(Protocol):
    def metadata(self, country_code: Optional[str]) -> Optional[CountryMetadata]:
        """Return metadata; a placeholder for unknown codes, None for no code."""
        ...

    def languages(self, country_code: Optional[str]) -> str:
        """Return the comma-separated language string, empty if unknown."""
        ...
