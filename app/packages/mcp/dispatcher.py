"""JSON-RPC 2.0 method dispatch shared by the HTTP and stdio transports."""

import json
from typing import Any, Callable, Optional, Union

import structlog

from packages.mcp import jsonrpc
from packages.mcp.jsonrpc import JsonRpcProtocolError
from packages.mcp.resources import RESOURCES, read_resource
from packages.mcp.schemas import (
    CAPABILITIES,
    PROTOCOL_VERSION,
    TOOL_NAMES,
    TOOLS,
    server_info,
)
from packages.mcp.tools import GeoTools

logger = structlog.get_logger()

Payload = Union[dict[str, Any], list[dict[str, Any]], None]


def is_notification(message: Any) -> bool:
    """A request object without an ``id`` member expects no response."""
    return isinstance(message, dict) and "id" not in message


class McpDispatcher:
    """Route JSON-RPC requests to lifecycle, tool and resource handlers.

    Args:
        tools: Tool implementations.
        version: Server version reported by ``initialize``.
        cache_ttl_seconds: Server-side cache TTL reported by ``geoip://limits``.
    """

    def __init__(
        self, tools: GeoTools, version: str, cache_ttl_seconds: int = 3600
    ) -> None:
        self._tools = tools
        self._version = version
        self._cache_ttl_seconds = cache_ttl_seconds
        self._methods: dict[str, Callable[[Any, Optional[str]], Any]] = {
            "initialize": self._initialize,
            "initialized": self._empty,
            "notifications/initialized": self._empty,
            "ping": self._empty,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
            "resources/list": self._resources_list,
            "resources/read": self._resources_read,
        }

    @property
    def server_info(self) -> dict[str, str]:
        return server_info(self._version)

    def info(self) -> dict[str, Any]:
        """Static discovery document for ``GET /mcp/info``."""
        return {
            "name": self.server_info["name"],
            "version": self._version,
            "protocol": "MCP",
            "protocolVersion": PROTOCOL_VERSION,
            "transports": ["http", "stdio"],
            "endpoints": {
                "jsonrpc": "/mcp",
                "batch": "/mcp/batch",
                "sse": "/mcp/sse",
                "info": "/mcp/info",
            },
            "capabilities": CAPABILITIES,
            "tools": TOOLS,
            "resources": RESOURCES,
        }

    def dispatch(
        self, message: Any, caller_ip: Optional[str] = None
    ) -> Optional[dict[str, Any]]:
        """Handle one request object.

        Returns:
            The response envelope, or None for a well-formed notification.
        """
        if not isinstance(message, dict):
            return jsonrpc.failure(None, jsonrpc.INVALID_REQUEST, "Invalid Request")

        request_id = message.get("id")
        if message.get("jsonrpc") != jsonrpc.JSONRPC_VERSION:
            return jsonrpc.failure(
                request_id, jsonrpc.INVALID_REQUEST, "Invalid JSON-RPC version"
            )
        method = message.get("method")
        if not isinstance(method, str):
            return jsonrpc.failure(request_id, jsonrpc.INVALID_REQUEST, "Invalid Request")

        handler = self._methods.get(method)
        if handler is None:
            response = jsonrpc.failure(
                request_id, jsonrpc.METHOD_NOT_FOUND, f"Method not found: {method}"
            )
        else:
            try:
                response = jsonrpc.success(
                    request_id, handler(message.get("params"), caller_ip)
                )
            except JsonRpcProtocolError as e:
                response = jsonrpc.failure(request_id, e.code, e.message)
            except Exception as e:
                logger.exception("mcp_method_failed", method=method, error=str(e))
                response = jsonrpc.failure(
                    request_id, jsonrpc.INTERNAL_ERROR, "Internal error"
                )

        if is_notification(message):
            return None
        return response

    def dispatch_batch(
        self, messages: list[Any], caller_ip: Optional[str] = None
    ) -> list[dict[str, Any]]:
        """Handle a batch in order, leaving out notification responses."""
        responses = []
        for message in messages:
            response = self.dispatch(message, caller_ip)
            if response is not None:
                responses.append(response)
        return responses

    def handle_payload(self, payload: Any, caller_ip: Optional[str] = None) -> Payload:
        """Dispatch a decoded body: an object, or an array treated as a batch."""
        if isinstance(payload, list):
            if not payload:
                return jsonrpc.failure(None, jsonrpc.INVALID_REQUEST, "Invalid Request")
            return self.dispatch_batch(payload, caller_ip) or None
        return self.dispatch(payload, caller_ip)

    def handle_text(
        self, text: Union[str, bytes], caller_ip: Optional[str] = None
    ) -> Payload:
        """Decode and dispatch a raw body or line; undecodable input is -32700."""
        try:
            payload = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return jsonrpc.failure(None, jsonrpc.PARSE_ERROR, "Parse error")
        return self.handle_payload(payload, caller_ip)

    def _initialize(self, params: Any, caller_ip: Optional[str]) -> dict[str, Any]:
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "serverInfo": self.server_info,
            "capabilities": CAPABILITIES,
        }

    def _empty(self, params: Any, caller_ip: Optional[str]) -> dict[str, Any]:
        return {}

    def _tools_list(self, params: Any, caller_ip: Optional[str]) -> dict[str, Any]:
        return {"tools": TOOLS}

    def _tools_call(self, params: Any, caller_ip: Optional[str]) -> dict[str, Any]:
        if not isinstance(params, dict):
            raise JsonRpcProtocolError(jsonrpc.INVALID_PARAMS, "Missing params")
        name = params.get("name")
        if not isinstance(name, str):
            raise JsonRpcProtocolError(jsonrpc.INVALID_PARAMS, "Missing tool name")
        if name not in TOOL_NAMES:
            raise JsonRpcProtocolError(jsonrpc.METHOD_NOT_FOUND, f"Unknown tool: {name}")
        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        return self._tools.call(name, arguments, caller_ip)

    def _resources_list(self, params: Any, caller_ip: Optional[str]) -> dict[str, Any]:
        return {"resources": RESOURCES}

    def _resources_read(self, params: Any, caller_ip: Optional[str]) -> dict[str, Any]:
        if not isinstance(params, dict):
            raise JsonRpcProtocolError(jsonrpc.INVALID_PARAMS, "Missing params")
        uri = params.get("uri")
        if not isinstance(uri, str):
            raise JsonRpcProtocolError(jsonrpc.INVALID_PARAMS, "Missing uri parameter")
        contents = read_resource(uri, self._cache_ttl_seconds)
        if contents is None:
            raise JsonRpcProtocolError(
                jsonrpc.INVALID_PARAMS, f"Resource not found: {uri}"
            )
        return {"contents": [contents]}
