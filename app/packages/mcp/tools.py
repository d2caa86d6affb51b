"""MCP tool handlers.

Each handler returns an MCP ``CallToolResult`` payload. Business failures
(bad input, private address, database miss) come back as ``isError: true``
results, never as JSON-RPC protocol errors. Tools never read or write the
REST result cache.
"""

import json
from typing import Any, Optional

import structlog
from pydantic import BaseModel, ConfigDict, ValidationError

from packages.geolocate.builder import ResponseBuilder
from packages.geolocate.errors import ErrorCode, GeoValidationError
from packages.geolocate.ports import GeoLookupPort
from packages.geolocate.schemas import BulkLookupError, BulkLookupResult
from packages.geolocate.validation import (
    is_private,
    validate_bulk_size,
    validate_ip,
    validate_latitude,
    validate_longitude,
)
from packages.mcp.schemas import (
    TOOL_BULK_LOOKUP,
    TOOL_LOOKUP,
    TOOL_LOOKUP_SELF,
    TOOL_TIMEZONE,
)

logger = structlog.get_logger()

NO_CALLER_IP_MESSAGE = (
    "geoip_lookup_self is not available over STDIO transport. "
    "Use geoip_lookup with an explicit IP address instead, "
    "or use the HTTP transport which provides caller IP information."
)


class _ToolArgs(BaseModel):
    # Reject type coercion such as "59.3" -> 59.3 or 123 -> "123"
    model_config = ConfigDict(strict=True)

    format: str = "full"

    @property
    def wants_simple(self) -> bool:
        return self.format == "simple"


class LookupArgs(_ToolArgs):
    ip: str


class BulkLookupArgs(_ToolArgs):
    ips: list[str]


class LookupSelfArgs(_ToolArgs):
    pass


class TimezoneArgs(_ToolArgs):
    lat: float
    lon: float


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def _text(payload: Any) -> list[dict[str, str]]:
    return [
        {"type": "text", "text": json.dumps(payload, indent=2, ensure_ascii=False)}
    ]


def error_result(code: ErrorCode, message: str) -> dict[str, Any]:
    return {
        "content": _text({"error": message, "code": code.value}),
        "isError": True,
    }


def success_result(dto: BaseModel) -> dict[str, Any]:
    payload = dto.model_dump(exclude_none=True)
    return {
        "content": _text(payload),
        "isError": False,
        "structuredContent": payload,
    }


class GeoTools:
    """Implementations of the four MCP tools.

    Args:
        geo: The geolocation database port.
        builder: Response composer shared with the REST routes.
    """

    def __init__(self, geo: GeoLookupPort, builder: ResponseBuilder) -> None:
        self._geo = geo
        self._builder = builder

    def call(
        self, name: str, arguments: Any, caller_ip: Optional[str] = None
    ) -> dict[str, Any]:
        """Run tool ``name``. The caller has already checked the name exists."""
        handlers = {
            TOOL_LOOKUP: lambda: self.lookup(arguments),
            TOOL_BULK_LOOKUP: lambda: self.bulk_lookup(arguments),
            TOOL_LOOKUP_SELF: lambda: self.lookup_self(arguments, caller_ip),
            TOOL_TIMEZONE: lambda: self.timezone_lookup(arguments),
        }
        result = handlers[name]()
        logger.info("mcp_tool_called", tool=name, is_error=result["isError"])
        return result

    def _locate(self, ip: str, simple: bool) -> BaseModel:
        """Validate, reject private addresses, look up and build.

        Raises:
            GeoValidationError: INVALID_IP, PRIVATE_IP or NOT_FOUND.
        """
        address = validate_ip(ip)
        if is_private(address):
            raise GeoValidationError(
                ErrorCode.PRIVATE_IP,
                f"Private/loopback IP address not supported: {ip}",
            )
        result = self._geo.lookup(ip)
        if result.is_not_found:
            raise GeoValidationError(ErrorCode.NOT_FOUND, result.message)
        if not result.is_success:
            raise GeoValidationError(ErrorCode.INVALID_IP, result.message)
        if simple:
            return self._builder.build_simple(result.data)
        return self._builder.build_full(ip, result.data)

    def lookup(self, arguments: Any) -> dict[str, Any]:
        try:
            args = LookupArgs.model_validate(arguments)
        except ValidationError as e:
            return error_result(ErrorCode.INVALID_IP, f"Invalid input: {_describe(e)}")
        try:
            return success_result(self._locate(args.ip, args.wants_simple))
        except GeoValidationError as e:
            return error_result(e.code, e.message)

    def bulk_lookup(self, arguments: Any) -> dict[str, Any]:
        """Look up every address independently; always the full shape.

        An oversized request fails as a whole before any lookup; otherwise
        each bad entry becomes one ``errors`` item.
        """
        try:
            args = BulkLookupArgs.model_validate(arguments)
        except ValidationError as e:
            return error_result(ErrorCode.INVALID_IP, f"Invalid input: {_describe(e)}")
        try:
            validate_bulk_size(len(args.ips))
        except GeoValidationError as e:
            return error_result(e.code, e.message)

        results = []
        errors = []
        for ip in args.ips:
            try:
                results.append(self._locate(ip, simple=False))
            except GeoValidationError as e:
                errors.append(
                    BulkLookupError(ip=ip, code=e.code.value, message=_bulk_message(e))
                )
        return success_result(BulkLookupResult(results=results, errors=errors))

    def lookup_self(self, arguments: Any, caller_ip: Optional[str]) -> dict[str, Any]:
        """Look up the transport-supplied caller address.

        Fails with STDIO_NO_CALLER_IP when the transport has no caller.
        """
        try:
            args = LookupSelfArgs.model_validate(arguments)
        except ValidationError as e:
            return error_result(ErrorCode.INVALID_IP, f"Invalid input: {_describe(e)}")
        if caller_ip is None:
            return error_result(ErrorCode.STDIO_NO_CALLER_IP, NO_CALLER_IP_MESSAGE)
        try:
            return success_result(self._locate(caller_ip, args.wants_simple))
        except GeoValidationError as e:
            return error_result(e.code, e.message)

    def timezone_lookup(self, arguments: Any) -> dict[str, Any]:
        try:
            args = TimezoneArgs.model_validate(arguments)
        except ValidationError as e:
            return error_result(
                ErrorCode.INVALID_LATITUDE, f"Invalid input: {_describe(e)}"
            )
        try:
            validate_latitude(args.lat)
            validate_longitude(args.lon)
        except GeoValidationError as e:
            return error_result(e.code, e.message)
        if args.wants_simple:
            return success_result(self._builder.build_timezone(args.lat, args.lon))
        return success_result(self._builder.build_timezone_full(args.lat, args.lon))


def _bulk_message(error: GeoValidationError) -> str:
    # Per-entry messages omit the address, which the entry already carries
    if error.code == ErrorCode.PRIVATE_IP:
        return "Private/loopback IP address not supported"
    if error.code == ErrorCode.NOT_FOUND:
        return "IP address not found in database"
    return error.message
