"""Internal domain records for IP geolocation.

These are produced by the lookup ports and consumed by the response
builder. They never cross the wire directly; see ``schemas`` for DTOs.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class GeoRecord:
    """A single geolocation database hit."""

    latitude: Optional[float] = None
    longitude: Optional[float] = None
    city: Optional[str] = None
    country_name: Optional[str] = None
    country_code: Optional[str] = None
    state_prov: Optional[str] = None
    state_code: Optional[str] = None
    postal_code: Optional[str] = None
    geoname_id: Optional[int] = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True)
class CountryMetadata:
    """Static reference data for one country, keyed by ISO alpha-2."""

    iso_code2: str
    iso_code3: str
    name: str
    official_name: str
    capital: str
    continent_code: str
    continent_name: str
    calling_code: str = ""
    tld: str = ""
    currency_code: str = ""
    currency_name: str = ""
    currency_symbol: str = ""
    languages: tuple[str, ...] = field(default_factory=tuple)
    is_eu: bool = False
    flag_emoji: str = ""

    @classmethod
    def unknown(cls, iso_code2: str) -> "CountryMetadata":
        """Placeholder returned for a country code missing from the table."""
        return cls(
            iso_code2=iso_code2,
            iso_code3="UNK",
            name="Unknown",
            official_name="Unknown",
            capital="Unknown",
            continent_code="XX",
            continent_name="Unknown",
            flag_emoji="\U0001f3f3\ufe0f",
        )


@dataclass(frozen=True)
class TimezoneDetail:
    """Offset and DST facts for an IANA zone at the moment of the request.

    Offsets are whole hours, truncated toward zero.
    """

    name: str
    offset_hours: int
    offset_with_dst_hours: int
    current_time: str
    current_time_unix: float
    is_dst: bool
    dst_exists: bool
    dst_savings_hours: int
