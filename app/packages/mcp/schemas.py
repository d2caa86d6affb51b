"""Static MCP catalogs: server info, capabilities, tool input schemas.

Response schemas are generated from the pydantic DTOs in
``packages.geolocate.schemas`` so the published schema cannot drift from
what the tools return.
"""

from typing import Any

from pydantic.json_schema import models_json_schema

from packages.geolocate.schemas import (
    BulkLookupResult,
    IpGeoResponse,
    IpGeoResponseFull,
    TimezoneResponse,
    TimezoneResponseFull,
)
from packages.geolocate.validation import BULK_LOOKUP_MAX_IPS

SERVER_NAME = "ip-geolocation-mcp"
PROTOCOL_VERSION = "2024-11-05"

TOOL_LOOKUP = "geoip_lookup"
TOOL_BULK_LOOKUP = "geoip_bulk_lookup"
TOOL_LOOKUP_SELF = "geoip_lookup_self"
TOOL_TIMEZONE = "timezone_lookup"


def _format_property(detail: str) -> dict[str, Any]:
    return {
        "type": "string",
        "enum": ["simple", "full"],
        "default": "full",
        "description": f"Response format: 'simple' for {detail}, 'full' for comprehensive details",
    }


LOOKUP_INPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "ip": {"type": "string", "description": "IPv4 or IPv6 address to lookup"},
        "format": _format_property("basic data"),
    },
    "required": ["ip"],
}

BULK_LOOKUP_INPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "ips": {
            "type": "array",
            "items": {"type": "string"},
            "maxItems": BULK_LOOKUP_MAX_IPS,
            "description": f"Array of IPv4 or IPv6 addresses to lookup (max {BULK_LOOKUP_MAX_IPS})",
        },
        "format": _format_property("basic data"),
    },
    "required": ["ips"],
}

LOOKUP_SELF_INPUT_SCHEMA = {
    "type": "object",
    "properties": {"format": _format_property("basic data")},
}

TIMEZONE_INPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "lat": {
            "type": "number",
            "minimum": -90,
            "maximum": 90,
            "description": "Latitude coordinate (-90 to 90)",
        },
        "lon": {
            "type": "number",
            "minimum": -180,
            "maximum": 180,
            "description": "Longitude coordinate (-180 to 180)",
        },
        "format": _format_property("timezone name only"),
    },
    "required": ["lat", "lon"],
}

TOOLS: list[dict[str, Any]] = [
    {
        "name": TOOL_LOOKUP,
        "description": (
            "Look up geographic location for an IP address. Returns city, country,"
            " coordinates, timezone, currency, and other location metadata."
        ),
        "inputSchema": LOOKUP_INPUT_SCHEMA,
    },
    {
        "name": TOOL_BULK_LOOKUP,
        "description": (
            "Look up geographic locations for multiple IP addresses in a single"
            f" request. Maximum {BULK_LOOKUP_MAX_IPS} IPs per request. Returns"
            " results and errors separately."
        ),
        "inputSchema": BULK_LOOKUP_INPUT_SCHEMA,
    },
    {
        "name": TOOL_LOOKUP_SELF,
        "description": (
            "Look up geographic location for the caller's IP address."
            " Available via HTTP transport."
        ),
        "inputSchema": LOOKUP_SELF_INPUT_SCHEMA,
    },
    {
        "name": TOOL_TIMEZONE,
        "description": (
            "Look up IANA timezone for geographic coordinates. Returns timezone"
            " name, current offset, DST information, and current local time."
        ),
        "inputSchema": TIMEZONE_INPUT_SCHEMA,
    },
]

TOOL_NAMES = frozenset(tool["name"] for tool in TOOLS)

CAPABILITIES: dict[str, Any] = {
    "tools": {"listChanged": False},
    "resources": {"subscribe": False, "listChanged": False},
    "prompts": None,
    "logging": None,
}


def server_info(version: str) -> dict[str, str]:
    return {
        "name": SERVER_NAME,
        "version": version,
        "protocolVersion": PROTOCOL_VERSION,
    }


def response_schema_document() -> dict[str, Any]:
    """JSON Schema (draft-07 style) for every tool response type."""
    _, schema = models_json_schema(
        [
            (IpGeoResponse, "serialization"),
            (IpGeoResponseFull, "serialization"),
            (TimezoneResponse, "serialization"),
            (TimezoneResponseFull, "serialization"),
            (BulkLookupResult, "serialization"),
        ],
        ref_template="#/definitions/{model}",
    )
    return {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": "IP Geolocation API Response Schemas",
        "description": "JSON Schema definitions for all response types from the IP Geolocation API",
        "definitions": schema.get("$defs", {}),
    }
