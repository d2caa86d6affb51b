"""Static documentation resources served by ``resources/read``."""

import json
from typing import Any, Callable, Optional

from packages.geolocate.cache import CLIENT_CACHE_CONTROL
from packages.geolocate.validation import BULK_LOOKUP_MAX_IPS
from packages.mcp.schemas import response_schema_document

URI_PREFIX = "geoip://"
JSON_MIME_TYPE = "application/json"

RESOURCES: list[dict[str, str]] = [
    {
        "uri": f"{URI_PREFIX}schema",
        "name": "API Response Schemas",
        "description": "JSON Schema definitions for all response types",
        "mimeType": JSON_MIME_TYPE,
    },
    {
        "uri": f"{URI_PREFIX}data-source",
        "name": "Data Sources",
        "description": "Information about MaxMind GeoLite2, timezonefinder, and other data sources",
        "mimeType": JSON_MIME_TYPE,
    },
    {
        "uri": f"{URI_PREFIX}limits",
        "name": "API Limits",
        "description": f"Bulk lookup cap ({BULK_LOOKUP_MAX_IPS}), cache TTL, and operational constraints",
        "mimeType": JSON_MIME_TYPE,
    },
    {
        "uri": f"{URI_PREFIX}privacy",
        "name": "Privacy Information",
        "description": "No IP logging, no PII retention, stateless lookups",
        "mimeType": JSON_MIME_TYPE,
    },
]


def _data_source(_: int) -> dict[str, Any]:
    return {
        "title": "IP Geolocation Data Sources",
        "description": "Information about the data sources used by this API",
        "sources": {
            "ip_geolocation": {
                "name": "MaxMind GeoLite2-City",
                "description": "Free IP geolocation database providing city-level accuracy",
                "license": "CC BY-SA 4.0",
                "attribution": (
                    "This product includes GeoLite2 Data created by MaxMind,"
                    " available from https://www.maxmind.com"
                ),
                "update_frequency": "Weekly (typically Tuesday)",
                "coverage": "Global IP address space",
                "accuracy": "City-level for most IPs, country-level guaranteed",
            },
            "timezone_boundaries": {
                "name": "timezonefinder",
                "description": "Offline timezone boundary lookup for coordinates",
                "license": "MIT",
                "source_data": "Timezone boundaries derived from OpenStreetMap",
                "update_frequency": "Updated with the installed package version",
            },
            "timezone_rules": {
                "name": "pytz",
                "description": "IANA timezone database used for offsets and DST rules",
                "license": "MIT",
            },
            "country_metadata": {
                "name": "Embedded country dataset",
                "description": (
                    "Static dataset of country metadata including currencies,"
                    " languages, and calling codes"
                ),
                "fields": [
                    "Country name (common and official)",
                    "ISO 3166-1 alpha-2 and alpha-3 codes",
                    "Continent",
                    "Capital city",
                    "Currency (code, name, symbol)",
                    "Languages",
                    "Calling code",
                    "Top-level domain",
                    "EU membership status",
                    "Flag emoji",
                ],
            },
        },
    }


def _limits(cache_ttl_seconds: int) -> dict[str, Any]:
    return {
        "title": "API Limits and Constraints",
        "description": "Information about rate limits and operational constraints",
        "limits": {
            "bulk_lookup": {
                "max_ips_per_request": BULK_LOOKUP_MAX_IPS,
                "description": (
                    "Maximum number of IP addresses that can be looked up in a"
                    " single bulk request"
                ),
            },
            "cache": {
                "description": "Responses are cached to improve performance",
                "cache_ttl_seconds": cache_ttl_seconds,
                "cache_control_header": CLIENT_CACHE_CONTROL,
                "note": "IP geolocation data changes infrequently, so aggressive caching is safe",
            },
            "rate_limiting": {
                "enabled": False,
                "description": (
                    "No rate limiting is currently enforced. The API is designed"
                    " for high-throughput usage."
                ),
            },
            "coordinate_ranges": {
                "latitude": {"min": -90, "max": 90},
                "longitude": {"min": -180, "max": 180},
            },
        },
        "supported_formats": {
            "ip_addresses": ["IPv4", "IPv6"],
            "response_formats": ["simple", "full"],
            "content_types": ["application/json", "application/x-protobuf"],
        },
    }


def _privacy(_: int) -> dict[str, Any]:
    return {
        "title": "Privacy Information",
        "description": "Information about data handling and privacy practices",
        "privacy_practices": {
            "ip_logging": {
                "enabled": False,
                "description": "IP addresses are NOT logged or stored. All lookups are stateless.",
            },
            "pii_retention": {
                "enabled": False,
                "description": (
                    "No personally identifiable information is retained. Lookups are"
                    " processed in memory and results are not persisted."
                ),
            },
            "stateless_operation": {
                "description": (
                    "Each lookup is independent and stateless. No session tracking"
                    " or user identification is performed."
                ),
            },
            "data_sharing": {
                "third_parties": False,
                "description": (
                    "Query data is not shared with any third parties. All processing"
                    " happens locally using embedded databases."
                ),
            },
            "cache_behavior": {
                "description": (
                    "Responses may be cached in memory for performance. Cache entries"
                    " contain only the lookup result, not the requesting client's"
                    " information."
                ),
            },
        },
        "data_sources": {
            "note": (
                "IP geolocation data is sourced from MaxMind GeoLite2. This data maps"
                " IP addresses to approximate geographic locations but does not"
                " identify individuals."
            ),
        },
        "private_ip_handling": {
            "description": (
                "Private IP addresses (RFC 1918, loopback, link-local) are rejected"
                " by the MCP tools. These addresses have no meaningful geographic"
                " location."
            ),
        },
    }


_READERS: dict[str, Callable[[int], dict[str, Any]]] = {
    f"{URI_PREFIX}schema": lambda _: response_schema_document(),
    f"{URI_PREFIX}data-source": _data_source,
    f"{URI_PREFIX}limits": _limits,
    f"{URI_PREFIX}privacy": _privacy,
}


def read_resource(uri: str, cache_ttl_seconds: int = 3600) -> Optional[dict[str, str]]:
    """Resource contents entry for ``uri``, or None when unknown.

    Args:
        uri: A ``geoip://`` resource URI.
        cache_ttl_seconds: Server-side cache TTL reported by ``geoip://limits``.
    """
    reader = _READERS.get(uri)
    if reader is None:
        return None
    return {
        "uri": uri,
        "mimeType": JSON_MIME_TYPE,
        "text": json.dumps(reader(cache_ttl_seconds), indent=2, ensure_ascii=False),
    }
