"""Unit tests for JSON-RPC dispatch."""

import json

import pytest

from packages.mcp import jsonrpc
from tests.factories.geo import STOCKHOLM_IP


def _request(method, params=None, request_id=1):
    message = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return message


@pytest.mark.unit
def test_initialize_reports_server_info(mcp_dispatcher):
    response = mcp_dispatcher.dispatch(_request("initialize", {}))

    assert response["jsonrpc"] == "2.0"
    assert response["id"] == 1
    result = response["result"]
    assert result["protocolVersion"] == "2024-11-05"
    assert result["serverInfo"]["name"] == "ip-geolocation-mcp"
    assert result["serverInfo"]["version"] == "1.0.0"
    assert "tools" in result["capabilities"]
    assert "resources" in result["capabilities"]


@pytest.mark.unit
def test_ping_returns_empty_result(mcp_dispatcher):
    assert mcp_dispatcher.dispatch(_request("ping", request_id="abc")) == {
        "jsonrpc": "2.0",
        "id": "abc",
        "result": {},
    }


@pytest.mark.unit
def test_wrong_version_rejected_before_method_lookup(mcp_dispatcher):
    response = mcp_dispatcher.dispatch({"jsonrpc": "1.0", "id": 7, "method": "nope"})

    assert response["id"] == 7
    assert response["error"] == {
        "code": jsonrpc.INVALID_REQUEST,
        "message": "Invalid JSON-RPC version",
    }


@pytest.mark.unit
def test_missing_version_rejected(mcp_dispatcher):
    response = mcp_dispatcher.dispatch({"id": 1, "method": "ping"})

    assert response["error"]["code"] == jsonrpc.INVALID_REQUEST


@pytest.mark.unit
def test_non_object_request(mcp_dispatcher):
    response = mcp_dispatcher.dispatch("ping")

    assert response == {
        "jsonrpc": "2.0",
        "id": None,
        "error": {"code": jsonrpc.INVALID_REQUEST, "message": "Invalid Request"},
    }


@pytest.mark.unit
def test_unknown_method(mcp_dispatcher):
    response = mcp_dispatcher.dispatch(_request("tools/delete"))

    assert response["error"] == {
        "code": jsonrpc.METHOD_NOT_FOUND,
        "message": "Method not found: tools/delete",
    }


@pytest.mark.unit
def test_tools_list(mcp_dispatcher):
    tools = mcp_dispatcher.dispatch(_request("tools/list"))["result"]["tools"]

    assert [tool["name"] for tool in tools] == [
        "geoip_lookup",
        "geoip_bulk_lookup",
        "geoip_lookup_self",
        "timezone_lookup",
    ]
    for tool in tools:
        assert tool["inputSchema"]["type"] == "object"


@pytest.mark.unit
def test_tools_call_runs_tool(mcp_dispatcher):
    response = mcp_dispatcher.dispatch(
        _request("tools/call", {"name": "geoip_lookup", "arguments": {"ip": STOCKHOLM_IP}})
    )

    result = response["result"]
    assert result["isError"] is False
    assert result["structuredContent"]["ip"] == STOCKHOLM_IP


@pytest.mark.unit
def test_tools_call_passes_caller_ip(mcp_dispatcher):
    response = mcp_dispatcher.dispatch(
        _request("tools/call", {"name": "geoip_lookup_self", "arguments": {}}),
        caller_ip=STOCKHOLM_IP,
    )

    assert response["result"]["structuredContent"]["ip"] == STOCKHOLM_IP


@pytest.mark.unit
def test_tools_call_without_arguments_defaults_to_empty(mcp_dispatcher):
    response = mcp_dispatcher.dispatch(
        _request("tools/call", {"name": "geoip_lookup_self"})
    )

    body = json.loads(response["result"]["content"][0]["text"])
    assert body["code"] == "STDIO_NO_CALLER_IP"


@pytest.mark.unit
def test_tool_business_error_is_a_result_not_an_error(mcp_dispatcher):
    response = mcp_dispatcher.dispatch(
        _request("tools/call", {"name": "geoip_lookup", "arguments": {"ip": "::1"}})
    )

    assert "error" not in response
    assert response["result"]["isError"] is True


@pytest.mark.unit
def test_tools_call_unknown_tool(mcp_dispatcher):
    response = mcp_dispatcher.dispatch(_request("tools/call", {"name": "geoip_whois"}))

    assert response["error"] == {
        "code": jsonrpc.METHOD_NOT_FOUND,
        "message": "Unknown tool: geoip_whois",
    }


@pytest.mark.unit
@pytest.mark.parametrize(
    "params,message",
    [
        (None, "Missing params"),
        ({}, "Missing tool name"),
        ({"name": 3}, "Missing tool name"),
    ],
)
def test_tools_call_invalid_params(mcp_dispatcher, params, message):
    response = mcp_dispatcher.dispatch(_request("tools/call", params))

    assert response["error"] == {"code": jsonrpc.INVALID_PARAMS, "message": message}


@pytest.mark.unit
def test_resources_list(mcp_dispatcher):
    resources = mcp_dispatcher.dispatch(_request("resources/list"))["result"][
        "resources"
    ]

    assert [resource["uri"] for resource in resources] == [
        "geoip://schema",
        "geoip://data-source",
        "geoip://limits",
        "geoip://privacy",
    ]


@pytest.mark.unit
def test_resources_read(mcp_dispatcher):
    response = mcp_dispatcher.dispatch(
        _request("resources/read", {"uri": "geoip://limits"})
    )

    [contents] = response["result"]["contents"]
    assert contents["uri"] == "geoip://limits"
    assert contents["mimeType"] == "application/json"
    assert json.loads(contents["text"])


@pytest.mark.unit
def test_resources_read_unknown_uri(mcp_dispatcher):
    response = mcp_dispatcher.dispatch(
        _request("resources/read", {"uri": "geoip://secrets"})
    )

    assert response["error"] == {
        "code": jsonrpc.INVALID_PARAMS,
        "message": "Resource not found: geoip://secrets",
    }


@pytest.mark.unit
def test_resources_read_missing_uri(mcp_dispatcher):
    response = mcp_dispatcher.dispatch(_request("resources/read", {}))

    assert response["error"]["message"] == "Missing uri parameter"


@pytest.mark.unit
def test_handler_crash_becomes_internal_error(mcp_dispatcher, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("database closed")

    monkeypatch.setattr(mcp_dispatcher._tools, "call", explode)

    response = mcp_dispatcher.dispatch(
        _request("tools/call", {"name": "geoip_lookup", "arguments": {}})
    )

    assert response["error"] == {
        "code": jsonrpc.INTERNAL_ERROR,
        "message": "Internal error",
    }


@pytest.mark.unit
@pytest.mark.parametrize("method", ["notifications/initialized", "initialized", "ping"])
def test_notifications_get_no_response(mcp_dispatcher, method):
    assert mcp_dispatcher.dispatch({"jsonrpc": "2.0", "method": method}) is None


@pytest.mark.unit
def test_notification_for_unknown_method_is_silent(mcp_dispatcher):
    assert mcp_dispatcher.dispatch({"jsonrpc": "2.0", "method": "nope"}) is None


@pytest.mark.unit
def test_batch_keeps_order_and_drops_notifications(mcp_dispatcher):
    responses = mcp_dispatcher.handle_payload(
        [
            _request("ping", request_id=1),
            {"jsonrpc": "2.0", "method": "notifications/initialized"},
            _request("tools/delete", request_id=2),
        ]
    )

    assert [response["id"] for response in responses] == [1, 2]
    assert "result" in responses[0]
    assert responses[1]["error"]["code"] == jsonrpc.METHOD_NOT_FOUND


@pytest.mark.unit
def test_batch_of_only_notifications_has_no_response(mcp_dispatcher):
    payload = [{"jsonrpc": "2.0", "method": "notifications/initialized"}]

    assert mcp_dispatcher.handle_payload(payload) is None


@pytest.mark.unit
def test_empty_batch_is_invalid(mcp_dispatcher):
    response = mcp_dispatcher.handle_payload([])

    assert response["error"]["code"] == jsonrpc.INVALID_REQUEST


@pytest.mark.unit
def test_handle_text_parse_error(mcp_dispatcher):
    response = mcp_dispatcher.handle_text("{not json")

    assert response == {
        "jsonrpc": "2.0",
        "id": None,
        "error": {"code": jsonrpc.PARSE_ERROR, "message": "Parse error"},
    }


@pytest.mark.unit
def test_handle_text_accepts_bytes(mcp_dispatcher):
    response = mcp_dispatcher.handle_text(b'{"jsonrpc": "2.0", "id": 4, "method": "ping"}')

    assert response["id"] == 4


@pytest.mark.unit
def test_info_document(mcp_dispatcher):
    info = mcp_dispatcher.info()

    assert info["name"] == "ip-geolocation-mcp"
    assert info["version"] == "1.0.0"
    assert info["endpoints"]["jsonrpc"] == "/mcp"
    assert len(info["tools"]) == 4
    assert len(info["resources"]) == 4
