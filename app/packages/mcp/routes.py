"""HTTP transport for the MCP JSON-RPC surface."""

import asyncio
import json
from typing import AsyncIterator, Awaitable, Callable

from fastapi import APIRouter, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, StreamingResponse

from infrastructure.services import McpDispatcherDep
from packages.geolocate.client_ip import extract_client_ip
from packages.mcp import jsonrpc

router = APIRouter(prefix="/mcp", tags=["MCP"])

SSE_KEEPALIVE_SECONDS = 30.0


def _reply(payload) -> Response:
    # Notifications get no body
    if payload is None:
        return Response(status_code=202)
    return JSONResponse(payload)


@router.post("", summary="MCP JSON-RPC endpoint")
async def mcp_jsonrpc(request: Request, dispatcher: McpDispatcherDep) -> Response:
    """Handle one JSON-RPC request (an array body is handled as a batch)."""
    body = await request.body()
    payload = await run_in_threadpool(
        dispatcher.handle_text, body, extract_client_ip(request)
    )
    return _reply(payload)


@router.post("/batch", summary="MCP JSON-RPC batch endpoint")
async def mcp_batch(request: Request, dispatcher: McpDispatcherDep) -> Response:
    body = await request.body()
    try:
        messages = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _reply(jsonrpc.failure(None, jsonrpc.PARSE_ERROR, "Parse error"))
    if not isinstance(messages, list):
        return _reply(
            jsonrpc.failure(
                None, jsonrpc.INVALID_REQUEST, "Batch body must be a JSON array"
            )
        )
    payload = await run_in_threadpool(
        dispatcher.handle_payload, messages, extract_client_ip(request)
    )
    return _reply(payload)


async def event_stream(
    server_info: dict,
    is_disconnected: Callable[[], Awaitable[bool]],
    keepalive_seconds: float = SSE_KEEPALIVE_SECONDS,
) -> AsyncIterator[str]:
    """Server-sent events: one ``connected`` event, then keep-alive comments."""
    yield f"event: connected\ndata: {json.dumps(server_info)}\n\n"
    while not await is_disconnected():
        await asyncio.sleep(keepalive_seconds)
        yield ": ping\n\n"


@router.get("/sse", summary="MCP server-sent events stream")
async def mcp_sse(request: Request, dispatcher: McpDispatcherDep) -> StreamingResponse:
    return StreamingResponse(
        event_stream(dispatcher.server_info, request.is_disconnected),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )


@router.get("/info", summary="MCP server discovery document")
def mcp_info(dispatcher: McpDispatcherDep) -> dict:
    return dispatcher.info()
