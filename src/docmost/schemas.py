"""
Docmost - Common Schemas.

Shared Pydantic models used across all modules.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Base Models
# =============================================================================


class CamelModel(BaseModel):
    """Model serialized with camelCase keys, as MCP clients expect."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self, **kwargs: Any) -> dict[str, Any]:
        """JSON-ready dict using the camelCase aliases."""
        return self.model_dump(mode="json", by_alias=True, **kwargs)


# =============================================================================
# Error Responses
# =============================================================================


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(default=None, description="Additional context")
    request_id: str | None = Field(default=None, description="Request ID for tracing")


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: ErrorDetail


# =============================================================================
# Pagination
# =============================================================================


class PaginationMeta(CamelModel):
    """Pagination metadata."""

    page: int = Field(ge=1)
    limit: int = Field(ge=1, le=100)
    total: int = Field(ge=0)
    has_next_page: bool = False


# =============================================================================
# Common Fields
# =============================================================================


class TimestampMixin(CamelModel):
    """Mixin for created/updated timestamps."""

    created_at: datetime
    updated_at: datetime | None = None


# =============================================================================
# Health Check
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., pattern="^(healthy|degraded)$")
    version: str
    registered_methods: int
    app_env: str | None = None
