"""
MCP - Schemas.

Pydantic models for the function-calling tool manifest.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field


class ToolFunction(BaseModel):
    name: str
    description: str
    parameters: dict[str, Any]


class ToolDefinition(BaseModel):
    """One callable tool, in function-calling form."""

    type: Literal["function"] = "function"
    function: ToolFunction


class ToolManifest(BaseModel):
    """Function-calling manifest served at ``/api/mcp/tools``."""

    schema_version: Literal["1.0"] = "1.0"
    name_for_model: str
    name_for_human: str
    description_for_model: str | None = None
    tools: list[ToolDefinition] = Field(default_factory=list)
