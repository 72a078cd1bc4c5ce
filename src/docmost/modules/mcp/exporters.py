"""
MCP - Registry Exporters.

Pure projections of the method registry:
- ``build_tool_manifest``: function-calling manifest for LLM tool callers
- ``build_openapi_document``: OpenAPI 3.0.0 document, one path per method

Params schemas are copied verbatim from the registry, so neither output can
drift from what the dispatcher validates.
"""

import copy
from typing import Any

from docmost.config import McpSettings
from docmost.modules.mcp.registry import MethodDescriptor, MethodRegistry
from docmost.modules.mcp.schemas import ToolDefinition, ToolFunction, ToolManifest

OPENAPI_VERSION = "3.0.0"
GATEWAY_PATH = "/api/mcp"
SECURITY_SCHEME = "mcpApiKey"


# =============================================================================
# Tool manifest
# =============================================================================


def tool_definition(descriptor: MethodDescriptor) -> ToolDefinition:
    return ToolDefinition(
        function=ToolFunction(
            name=descriptor.name,
            description=descriptor.description,
            parameters=copy.deepcopy(dict(descriptor.params_schema)),
        )
    )


def build_tool_manifest(registry: MethodRegistry, settings: McpSettings) -> ToolManifest:
    return ToolManifest(
        name_for_model=settings.name_for_model,
        name_for_human=settings.name_for_human,
        description_for_model=settings.description_for_model,
        tools=[tool_definition(descriptor) for descriptor in registry],
    )


# =============================================================================
# OpenAPI
# =============================================================================


def component_name(method: str) -> str:
    """``task.moveToProject`` -> ``TaskMoveToProject``."""
    return "".join(part[:1].upper() + part[1:] for part in method.split("."))


def _ref(name: str) -> dict[str, str]:
    return {"$ref": f"#/components/schemas/{name}"}


def envelope_schemas() -> dict[str, Any]:
    """Shared JSON-RPC fragments referenced by every operation."""
    request_id = {
        "description": "Echoed unchanged in the response",
        "oneOf": [{"type": "string"}, {"type": "integer"}],
        "nullable": True,
    }
    return {
        "JsonRpcRequest": {
            "type": "object",
            "required": ["jsonrpc", "method"],
            "properties": {
                "jsonrpc": {"type": "string", "enum": ["2.0"]},
                "method": {"type": "string"},
                "params": {"type": "object"},
                "id": request_id,
            },
        },
        "JsonRpcError": {
            "type": "object",
            "required": ["code", "message"],
            "properties": {
                "code": {"type": "integer"},
                "message": {"type": "string"},
                "data": {},
            },
        },
        "JsonRpcResponse": {
            "type": "object",
            "required": ["jsonrpc", "id"],
            "description": "Carries exactly one of result or error",
            "properties": {
                "jsonrpc": {"type": "string", "enum": ["2.0"]},
                "id": request_id,
                "result": {},
                "error": _ref("JsonRpcError"),
            },
        },
    }


def _operation(descriptor: MethodDescriptor, request_schema: str) -> dict[str, Any]:
    summary = descriptor.description.split(". ", 1)[0].rstrip(".")
    return {
        "operationId": descriptor.name.replace(".", "_"),
        "summary": summary,
        "description": descriptor.description,
        "tags": [descriptor.category],
        "security": [] if descriptor.public else [{SECURITY_SCHEME: []}],
        "x-jsonrpc-method": descriptor.name,
        "x-permission": "public" if descriptor.public else descriptor.permission.value,
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": _ref(request_schema)}},
        },
        "responses": {
            "200": {
                "description": "JSON-RPC response envelope",
                "content": {"application/json": {"schema": _ref("JsonRpcResponse")}},
            }
        },
    }


def build_openapi_document(registry: MethodRegistry, settings: McpSettings) -> dict[str, Any]:
    schemas = envelope_schemas()
    paths: dict[str, Any] = {}

    for descriptor in registry:
        base = component_name(descriptor.name)
        schemas[f"{base}Params"] = copy.deepcopy(dict(descriptor.params_schema))
        schemas[f"{base}Request"] = {
            "allOf": [
                _ref("JsonRpcRequest"),
                {
                    "type": "object",
                    "properties": {
                        "method": {"type": "string", "enum": [descriptor.name]},
                        "params": _ref(f"{base}Params"),
                    },
                },
            ]
        }
        paths[descriptor.name] = {"post": _operation(descriptor, f"{base}Request")}

    return {
        "openapi": OPENAPI_VERSION,
        "info": {
            "title": settings.openapi_title,
            "version": settings.openapi_version,
            "description": settings.description_for_model,
        },
        "servers": [{"url": GATEWAY_PATH}],
        "tags": [{"name": category} for category in registry.categories()],
        "paths": paths,
        "components": {
            "schemas": schemas,
            "securitySchemes": {
                SECURITY_SCHEME: {
                    "type": "http",
                    "scheme": "bearer",
                    "description": "API key (mcp_...) from /api/api-keys/register",
                }
            },
        },
    }
