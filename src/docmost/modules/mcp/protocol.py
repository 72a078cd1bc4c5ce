"""
MCP - JSON-RPC 2.0 Envelopes.

Request validation and response construction. A response carries exactly
one of ``result`` or ``error`` and always echoes the request ``id``
(``null`` when the request had none or could not be read).
"""

from typing import Any

from pydantic import BaseModel, Field

from docmost.modules.mcp.errors import McpError, invalid_request

JSONRPC_VERSION = "2.0"


class JsonRpcRequest(BaseModel):
    """Envelope that passed shape validation. ``params`` is checked per method."""

    jsonrpc: str = JSONRPC_VERSION
    method: str
    params: Any = None
    id: Any = None


class JsonRpcResponse(BaseModel):
    """Response envelope."""

    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    result: Any = None
    error: dict[str, Any] | None = Field(default=None)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            payload["error"] = self.error
        else:
            payload["result"] = self.result
        return payload


def request_id_of(body: Any) -> Any:
    """Best-effort id to echo, even for envelopes that fail validation."""
    return body.get("id") if isinstance(body, dict) else None


def validate_request(body: Any) -> JsonRpcRequest:
    """
    Check envelope shape, in order: object, version, method.

    Raises:
        McpError: -32600 on the first failed check
    """
    if not isinstance(body, dict):
        raise invalid_request("Invalid Request", {"reason": "Request must be a JSON object"})
    if body.get("jsonrpc") != JSONRPC_VERSION:
        raise invalid_request("Invalid JSON-RPC version")

    method = body.get("method")
    if not isinstance(method, str) or not method.strip():
        raise invalid_request("Method is required")

    return JsonRpcRequest(method=method, params=body.get("params"), id=body.get("id"))


def make_result(request_id: Any, result: Any) -> JsonRpcResponse:
    return JsonRpcResponse(id=request_id, result=result)


def make_error(request_id: Any, error: McpError) -> JsonRpcResponse:
    return JsonRpcResponse(id=request_id, error=error.to_dict())
