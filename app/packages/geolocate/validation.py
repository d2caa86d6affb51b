"""Input validation for addresses, coordinates and bulk requests.

Every facade validates through these functions so the error messages and
codes stay identical across REST and MCP.
"""

import ipaddress
import math
from typing import Optional, Union

from packages.geolocate.errors import ErrorCode, GeoValidationError

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

BULK_LOOKUP_MAX_IPS = 100

_PRIVATE_V4_NETWORKS = (
    ipaddress.IPv4Network("10.0.0.0/8"),
    ipaddress.IPv4Network("172.16.0.0/12"),
    ipaddress.IPv4Network("192.168.0.0/16"),
)
_BROADCAST_V4 = ipaddress.IPv4Address("255.255.255.255")


def validate_ip(value: str) -> IPAddress:
    """Parse an IPv4 or IPv6 address.

    Scoped IPv6 literals (``fe80::1%eth0``) are not addresses here.

    Raises:
        GeoValidationError: INVALID_IP when the string is not an address.
    """
    invalid = GeoValidationError(ErrorCode.INVALID_IP, f"Invalid IP address: {value}")
    try:
        address = ipaddress.ip_address(value)
    except ValueError:
        raise invalid from None
    if isinstance(address, ipaddress.IPv6Address) and address.scope_id is not None:
        raise invalid
    return address


def _format_coordinate(value: float) -> str:
    # Integral floats print without a fractional part, e.g. "91" not "91.0"
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return str(value)


def validate_latitude(lat: float) -> float:
    """Check -90 <= lat <= 90.

    Raises:
        GeoValidationError: INVALID_LATITUDE, echoing the value.
    """
    if not -90.0 <= lat <= 90.0:
        raise GeoValidationError(
            ErrorCode.INVALID_LATITUDE,
            f"Latitude must be between -90 and 90, got: {_format_coordinate(lat)}",
        )
    return lat


def validate_longitude(lon: float) -> float:
    """Check -180 <= lon <= 180.

    Raises:
        GeoValidationError: INVALID_LONGITUDE, echoing the value.
    """
    if not -180.0 <= lon <= 180.0:
        raise GeoValidationError(
            ErrorCode.INVALID_LONGITUDE,
            f"Longitude must be between -180 and 180, got: {_format_coordinate(lon)}",
        )
    return lon


def validate_bulk_size(count: int, maximum: int = BULK_LOOKUP_MAX_IPS) -> int:
    """Reject bulk requests carrying more than ``maximum`` entries."""
    if count > maximum:
        raise GeoValidationError(
            ErrorCode.BULK_LIMIT_EXCEEDED,
            f"Bulk lookup limit exceeded: {count} IPs provided, maximum is {maximum}",
        )
    return count


def is_private(ip: IPAddress) -> bool:
    """Whether an address has no meaningful geographic location.

    IPv4: loopback, RFC 1918 private, link-local, limited broadcast and
    unspecified. IPv6: loopback and unspecified only.
    """
    if isinstance(ip, ipaddress.IPv4Address):
        return (
            ip.is_loopback
            or ip.is_link_local
            or ip.is_unspecified
            or ip == _BROADCAST_V4
            or any(ip in network for network in _PRIVATE_V4_NETWORKS)
        )
    return ip.is_loopback or ip.is_unspecified


def _parse_float(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        return float(raw.strip())
    except ValueError:
        return None


def parse_latitude(raw: Optional[str]) -> float:
    """Parse and range-check a latitude query parameter."""
    value = _parse_float(raw)
    if value is None:
        raise GeoValidationError(
            ErrorCode.INVALID_LATITUDE,
            f"Latitude must be a number between -90 and 90, got: {raw or ''}",
        )
    return validate_latitude(value)


def parse_longitude(raw: Optional[str]) -> float:
    """Parse and range-check a longitude query parameter."""
    value = _parse_float(raw)
    if value is None:
        raise GeoValidationError(
            ErrorCode.INVALID_LONGITUDE,
            f"Longitude must be a number between -180 and 180, got: {raw or ''}",
        )
    return validate_longitude(value)
