"""
MCP - Parameter Schema Constructors.

Small builders for the JSON Schema fragments methods declare. Only keywords
that mean the same thing in JSON Schema draft 7 and OpenAPI 3.0 are emitted,
so one schema serves dispatch validation, the tool manifest and OpenAPI.
"""

from datetime import datetime
from typing import Any

from docmost.core.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT
from docmost.modules.mcp.errors import invalid_params


def string(
    description: str,
    *,
    min_length: int | None = None,
    max_length: int | None = None,
    enum: list[str] | None = None,
    format: str | None = None,
) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "string", "description": description}
    if min_length is not None:
        schema["minLength"] = min_length
    if max_length is not None:
        schema["maxLength"] = max_length
    if enum is not None:
        schema["enum"] = list(enum)
    if format is not None:
        schema["format"] = format
    return schema


def integer(
    description: str,
    *,
    minimum: int | None = None,
    maximum: int | None = None,
    default: int | None = None,
) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "integer", "description": description}
    if minimum is not None:
        schema["minimum"] = minimum
    if maximum is not None:
        schema["maximum"] = maximum
    if default is not None:
        schema["default"] = default
    return schema


def boolean(description: str, *, default: bool | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "boolean", "description": description}
    if default is not None:
        schema["default"] = default
    return schema


def array(items: dict[str, Any], description: str, *, min_items: int | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "array", "items": items, "description": description}
    if min_items is not None:
        schema["minItems"] = min_items
    return schema


def obj(properties: dict[str, Any] | None = None, required: list[str] | None = None) -> dict[str, Any]:
    """Top-level params object. Unknown keys are tolerated."""
    schema: dict[str, Any] = {"type": "object", "properties": dict(properties or {})}
    if required:
        schema["required"] = list(required)
    return schema


def identifier(description: str) -> dict[str, Any]:
    return string(description, min_length=1)


def timestamp(description: str) -> dict[str, Any]:
    return string(description, format="date-time")


PAGINATION: dict[str, Any] = {
    "page": integer("Page number, starting at 1", minimum=1, default=DEFAULT_PAGE),
    "limit": integer("Items per page", minimum=1, maximum=MAX_LIMIT, default=DEFAULT_LIMIT),
}


def page_args(params: dict[str, Any]) -> tuple[int, int]:
    # Draft 7 "integer" also accepts whole-number floats such as 2.0
    return int(params.get("page", DEFAULT_PAGE)), int(params.get("limit", DEFAULT_LIMIT))


def parse_timestamp(params: dict[str, Any], key: str) -> datetime | None:
    """
    Read an ISO 8601 timestamp param.

    Raises:
        McpError: -32602 if the value does not parse
    """
    value = params.get(key)
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise invalid_params([f"{key}: {value!r} is not an ISO 8601 date-time"])
