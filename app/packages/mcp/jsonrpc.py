"""JSON-RPC 2.0 envelopes and protocol error codes."""

from typing import Any, Optional

from pydantic import BaseModel

JSONRPC_VERSION = "2.0"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class JsonRpcError(BaseModel):
    code: int
    message: str
    data: Optional[Any] = None


class JsonRpcResponse(BaseModel):
    """Response envelope. Exactly one of ``result`` and ``error`` is set."""

    jsonrpc: str = JSONRPC_VERSION
    id: Optional[Any] = None
    result: Optional[Any] = None
    error: Optional[JsonRpcError] = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            payload["error"] = self.error.model_dump(exclude_none=True)
        else:
            payload["result"] = self.result
        return payload


class JsonRpcProtocolError(Exception):
    """Raised inside method handlers to answer with an ``error`` envelope."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


def success(request_id: Any, result: Any) -> dict[str, Any]:
    return JsonRpcResponse(id=request_id, result=result).to_dict()


def failure(request_id: Any, code: int, message: str) -> dict[str, Any]:
    return JsonRpcResponse(
        id=request_id, error=JsonRpcError(code=code, message=message)
    ).to_dict()
