"""Docmost MCP Module - JSON-RPC 2.0 gateway over the domain services."""

from docmost.modules.mcp.dispatcher import Dispatcher
from docmost.modules.mcp.errors import McpError, McpErrorCode
from docmost.modules.mcp.registry import MethodDescriptor, MethodRegistry

__all__ = ["Dispatcher", "McpError", "McpErrorCode", "MethodDescriptor", "MethodRegistry"]
