"""
MCP - Error Taxonomy.

JSON-RPC 2.0 reserved codes plus the application range (-32000..-32099)
used for domain failures. ``DocmostException`` subclasses raised by domain
services are mapped into the application range with their message intact.
"""

from enum import IntEnum
from typing import Any

from docmost.exceptions import DocmostException


class McpErrorCode(IntEnum):
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # Application range
    SERVER_ERROR = -32000
    RESOURCE_NOT_FOUND = -32001
    PERMISSION_DENIED = -32002
    VALIDATION_ERROR = -32003
    RESOURCE_EXISTS = -32004


class McpError(Exception):
    """A failure that becomes the ``error`` member of a response envelope."""

    def __init__(self, code: int, message: str, data: Any = None):
        self.code = int(code)
        self.message = message
        self.data = data
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


_DOMAIN_CODES: dict[str, McpErrorCode] = {
    "NOT_FOUND": McpErrorCode.RESOURCE_NOT_FOUND,
    "WORKSPACE_NOT_FOUND": McpErrorCode.RESOURCE_NOT_FOUND,
    "UNAUTHORIZED": McpErrorCode.PERMISSION_DENIED,
    "FORBIDDEN": McpErrorCode.PERMISSION_DENIED,
    "VALIDATION_ERROR": McpErrorCode.VALIDATION_ERROR,
    "BAD_REQUEST": McpErrorCode.VALIDATION_ERROR,
    "CONFLICT": McpErrorCode.RESOURCE_EXISTS,
}


def from_domain_exception(exc: DocmostException) -> McpError:
    code = _DOMAIN_CODES.get(exc.code, McpErrorCode.SERVER_ERROR)
    data: dict[str, Any] = {"reason": exc.code}
    if exc.details:
        data["details"] = exc.details
    return McpError(code, exc.message, data)


# =============================================================================
# Constructors
# =============================================================================


def parse_error() -> McpError:
    return McpError(McpErrorCode.PARSE_ERROR, "Parse error")


def invalid_request(message: str = "Invalid Request", data: Any = None) -> McpError:
    return McpError(McpErrorCode.INVALID_REQUEST, message, data)


def method_not_found(method: str) -> McpError:
    return McpError(
        McpErrorCode.METHOD_NOT_FOUND,
        "Method not found",
        {"method": method, "reason": f"Method '{method}' is not registered"},
    )


def invalid_params(errors: list[str]) -> McpError:
    return McpError(McpErrorCode.INVALID_PARAMS, "Invalid params", {"errors": errors})


def internal_error() -> McpError:
    return McpError(McpErrorCode.INTERNAL_ERROR, "Internal error")


def permission_denied(message: str = "Permission denied", data: Any = None) -> McpError:
    return McpError(McpErrorCode.PERMISSION_DENIED, message, data)


def resource_not_found(resource_type: str, resource_id: str) -> McpError:
    return McpError(
        McpErrorCode.RESOURCE_NOT_FOUND,
        f"{resource_type} not found: {resource_id}",
        {"resource_type": resource_type, "resource_id": resource_id},
    )
