"""Pydantic wire schemas for the geolocation API.

Field names are snake_case on the wire. Optional fields are omitted from
JSON when unset (``model_dump_json(exclude_none=True)``); the protobuf
messages in ``proto`` mirror the same optionality.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _Dto(BaseModel):
    # Cached responses are shared between requests
    model_config = ConfigDict(frozen=True)


class TimeZoneInfo(_Dto):
    """Timezone name only (simple shape)."""

    name: str = Field("", description="IANA timezone name")


class IpGeoResponse(_Dto):
    """Simple geolocation response; the cacheable unit."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "latitude": 59.3293,
                "longitude": 18.0686,
                "city": "Stockholm",
                "country_name": "Sweden",
                "time_zone": {"name": "Europe/Stockholm"},
                "languages": "sv-SE,sv",
            }
        },
    )

    latitude: Optional[float] = Field(None, description="Latitude of the location")
    longitude: Optional[float] = Field(None, description="Longitude of the location")
    city: str = Field("", description="City name (empty if unknown)")
    country_name: str = Field("", description="Country name (empty if unknown)")
    time_zone: TimeZoneInfo = Field(default_factory=TimeZoneInfo)
    languages: str = Field(
        "", description="Comma-separated language codes for the country"
    )


class LocationInfo(_Dto):
    continent_code: Optional[str] = None
    continent_name: Optional[str] = None
    country_code2: Optional[str] = None
    country_code3: Optional[str] = None
    country_name: Optional[str] = None
    country_name_official: Optional[str] = None
    country_capital: Optional[str] = None
    state_prov: Optional[str] = None
    state_code: Optional[str] = Field(None, description="State code with country prefix")
    district: Optional[str] = None
    city: Optional[str] = None
    zipcode: Optional[str] = None
    latitude: Optional[str] = Field(None, description="Latitude, 5 decimal places")
    longitude: Optional[str] = Field(None, description="Longitude, 5 decimal places")
    is_eu: Optional[bool] = None
    country_flag: Optional[str] = Field(None, description="Path to country flag SVG")
    geoname_id: Optional[str] = None
    country_emoji: Optional[str] = None


class CountryMetadataInfo(_Dto):
    calling_code: Optional[str] = None
    tld: Optional[str] = None
    languages: Optional[list[str]] = None


class CurrencyInfo(_Dto):
    code: Optional[str] = Field(None, description="ISO 4217 currency code")
    name: Optional[str] = None
    symbol: Optional[str] = None


class TimeZoneInfoFull(_Dto):
    name: Optional[str] = None
    offset: Optional[int] = Field(None, description="UTC offset in hours currently in effect")
    offset_with_dst: Optional[int] = Field(
        None, description="UTC offset in hours currently in effect"
    )
    current_time: Optional[str] = None
    current_time_unix: Optional[float] = None
    is_dst: Optional[bool] = None
    dst_savings: Optional[int] = Field(None, description="DST offset in hours")
    dst_exists: Optional[bool] = None


class IpGeoResponseFull(_Dto):
    """Full geolocation response; never cached because it embeds the time."""

    ip: Optional[str] = Field(None, description="The queried IP address")
    location: Optional[LocationInfo] = None
    country_metadata: Optional[CountryMetadataInfo] = None
    currency: Optional[CurrencyInfo] = None
    time_zone: Optional[TimeZoneInfoFull] = None


class TimezoneResponse(_Dto):
    timezone: str = Field("", description="IANA timezone name, empty if none")


class TimezoneResponseFull(_Dto):
    timezone: str = Field("", description="IANA timezone name, empty if none")
    offset: Optional[int] = None
    offset_with_dst: Optional[int] = None
    current_time: Optional[str] = None
    current_time_unix: Optional[float] = None
    is_dst: Optional[bool] = None
    dst_exists: Optional[bool] = None


class ApiError(_Dto):
    """Body of every 400 response."""

    error: str
    code: str


class BulkLookupError(_Dto):
    ip: str
    code: str
    message: str


class BulkLookupResult(_Dto):
    results: list[IpGeoResponseFull] = Field(default_factory=list)
    errors: list[BulkLookupError] = Field(default_factory=list)
