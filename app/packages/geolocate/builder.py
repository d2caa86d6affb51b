"""Response composition for every surface.

``ResponseBuilder`` is the only place a ``GeoRecord`` becomes a wire DTO;
the REST routes and the MCP tools both go through it.
"""

from typing import Optional

from infrastructure.operations import OperationResult
from packages.geolocate.models import CountryMetadata, GeoRecord, TimezoneDetail
from packages.geolocate.ports import (
    CountryReferencePort,
    TimezoneDetailPort,
    TimezoneNamePort,
)
from packages.geolocate.reference import flag_path
from packages.geolocate.schemas import (
    CountryMetadataInfo,
    CurrencyInfo,
    IpGeoResponse,
    IpGeoResponseFull,
    LocationInfo,
    TimeZoneInfo,
    TimeZoneInfoFull,
    TimezoneResponse,
    TimezoneResponseFull,
)


def default_simple() -> IpGeoResponse:
    """Soft-fail simple response: every field empty or null."""
    return IpGeoResponse()


def default_full(ip: str) -> IpGeoResponseFull:
    """Soft-fail full response: only the queried ip."""
    return IpGeoResponseFull(ip=ip)


def _state_code(record: GeoRecord) -> Optional[str]:
    if record.country_code and record.state_code:
        return f"{record.country_code}-{record.state_code}"
    return None


def _coordinate(value: Optional[float]) -> Optional[str]:
    return f"{value:.5f}" if value is not None else None


def _location(record: GeoRecord, meta: Optional[CountryMetadata]) -> LocationInfo:
    return LocationInfo(
        continent_code=meta.continent_code if meta else None,
        continent_name=meta.continent_name if meta else None,
        country_code2=record.country_code,
        country_code3=meta.iso_code3 if meta else None,
        country_name=record.country_name,
        country_name_official=meta.official_name if meta else None,
        country_capital=meta.capital if meta else None,
        state_prov=record.state_prov,
        state_code=_state_code(record),
        city=record.city,
        zipcode=record.postal_code,
        latitude=_coordinate(record.latitude),
        longitude=_coordinate(record.longitude),
        is_eu=meta.is_eu if meta else None,
        country_flag=flag_path(record.country_code) if record.country_code else None,
        geoname_id=str(record.geoname_id) if record.geoname_id is not None else None,
        country_emoji=meta.flag_emoji if meta else None,
    )


def _time_zone_full(detail: TimezoneDetail) -> TimeZoneInfoFull:
    return TimeZoneInfoFull(
        name=detail.name,
        offset=detail.offset_hours,
        offset_with_dst=detail.offset_with_dst_hours,
        current_time=detail.current_time,
        current_time_unix=detail.current_time_unix,
        is_dst=detail.is_dst,
        dst_savings=detail.dst_savings_hours,
        dst_exists=detail.dst_exists,
    )


class ResponseBuilder:
    """Compose lookup records with timezone and country reference data.

    Args:
        timezone_names: Resolves coordinates to an IANA zone name.
        timezone_details: Resolves a zone name to offset/DST details.
        countries: Country metadata and language tables.
    """

    def __init__(
        self,
        timezone_names: TimezoneNamePort,
        timezone_details: TimezoneDetailPort,
        countries: CountryReferencePort,
    ) -> None:
        self._timezone_names = timezone_names
        self._timezone_details = timezone_details
        self._countries = countries

    def _zone_for(self, record: GeoRecord) -> Optional[str]:
        if not record.has_coordinates:
            return None
        return self._timezone_names.resolve(record.latitude, record.longitude)

    def build_simple(self, record: GeoRecord) -> IpGeoResponse:
        """Simple shape: coordinates, city, country, zone name, languages.

        The zone lookup is skipped entirely when either coordinate is
        missing.
        """
        return IpGeoResponse(
            latitude=record.latitude,
            longitude=record.longitude,
            city=record.city or "",
            country_name=record.country_name or "",
            time_zone=TimeZoneInfo(name=self._zone_for(record) or ""),
            languages=self._countries.languages(record.country_code),
        )

    def build_full(self, ip: str, record: GeoRecord) -> IpGeoResponseFull:
        """Full shape with location, country metadata, currency and zone.

        ``country_metadata`` and ``currency`` exist exactly when the record
        has a country code (unknown codes get the placeholder metadata).
        ``time_zone`` exists exactly when both the zone name and its
        details resolve.
        """
        meta = self._countries.metadata(record.country_code)
        zone = self._zone_for(record)
        detail = self._timezone_details.details(zone) if zone else None

        return IpGeoResponseFull(
            ip=ip,
            location=_location(record, meta),
            country_metadata=(
                CountryMetadataInfo(
                    calling_code=meta.calling_code,
                    tld=meta.tld,
                    languages=list(meta.languages),
                )
                if meta
                else None
            ),
            currency=(
                CurrencyInfo(
                    code=meta.currency_code,
                    name=meta.currency_name,
                    symbol=meta.currency_symbol,
                )
                if meta
                else None
            ),
            time_zone=_time_zone_full(detail) if detail else None,
        )

    def simple_from_lookup(self, result: OperationResult) -> IpGeoResponse:
        """Build the simple shape, or the soft-fail default on any miss.

        This and ``full_from_lookup`` are the only conversions from a
        non-success lookup to a default DTO. Input validation has already
        run by the time a lookup result exists, so the remaining failures
        are "no data" rather than bad input.
        """
        if result.is_success:
            return self.build_simple(result.data)
        return default_simple()

    def full_from_lookup(self, ip: str, result: OperationResult) -> IpGeoResponseFull:
        """Build the full shape, or ``{"ip": ip}`` on any miss."""
        if result.is_success:
            return self.build_full(ip, result.data)
        return default_full(ip)

    def build_timezone(self, lat: float, lon: float) -> TimezoneResponse:
        return TimezoneResponse(timezone=self._timezone_names.resolve(lat, lon) or "")

    def build_timezone_full(self, lat: float, lon: float) -> TimezoneResponseFull:
        zone = self._timezone_names.resolve(lat, lon)
        if not zone:
            return TimezoneResponseFull()
        detail = self._timezone_details.details(zone)
        if detail is None:
            return TimezoneResponseFull(timezone=zone)
        return TimezoneResponseFull(
            timezone=zone,
            offset=detail.offset_hours,
            offset_with_dst=detail.offset_with_dst_hours,
            current_time=detail.current_time,
            current_time_unix=detail.current_time_unix,
            is_dst=detail.is_dst,
            dst_exists=detail.dst_exists,
        )
