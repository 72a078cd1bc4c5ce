"""
MCP Handlers - System.

Introspection methods. All public: they work without an API key.
"""

from datetime import datetime, timezone
from typing import Any

from docmost import __version__
from docmost.modules.mcp.context import McpContext
from docmost.modules.mcp.errors import resource_not_found
from docmost.modules.mcp.params import identifier, obj
from docmost.modules.mcp.registry import MethodDescriptor


async def ping(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    return {
        "pong": True,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
    }


async def list_methods(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    return {
        "methods": context.registry.names(),
        "categories": context.registry.categories(),
    }


async def get_method_schema(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    descriptor = context.registry.get(params["methodName"])
    if descriptor is None:
        raise resource_not_found("Method", params["methodName"])

    return {
        "name": descriptor.name,
        "description": descriptor.description,
        "category": descriptor.category,
        "permission": descriptor.permission.value,
        "public": descriptor.public,
        "parameters": dict(descriptor.params_schema),
    }


METHODS = (
    MethodDescriptor(
        name="system.ping",
        description="Check that the gateway is reachable. Returns pong with the server time.",
        params_schema=obj(),
        handler=ping,
        public=True,
    ),
    MethodDescriptor(
        name="system.listMethods",
        description="List every available method, grouped by category.",
        params_schema=obj(),
        handler=list_methods,
        public=True,
    ),
    MethodDescriptor(
        name="system.getMethodSchema",
        description="Describe one method: its parameters schema and required permission.",
        params_schema=obj({"methodName": identifier("Fully-qualified method name, e.g. page.get")}, ["methodName"]),
        handler=get_method_schema,
        public=True,
    ),
)
