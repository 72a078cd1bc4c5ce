"""
Docmost API Keys - Schemas.

Pydantic models for API-key registration and management.
"""

from datetime import datetime

from pydantic import Field

from docmost.schemas import CamelModel


# =============================================================================
# Request Schemas
# =============================================================================


class ApiKeyRegistration(CamelModel):
    """Bootstrap registration body."""

    name: str = Field(..., min_length=3, max_length=255)
    user_id: str = Field(..., min_length=1)
    workspace_id: str = Field(..., min_length=1)


class ApiKeyCreate(CamelModel):
    """Create a key for the calling user."""

    name: str = Field(..., min_length=3, max_length=255)


# =============================================================================
# Records
# =============================================================================


class ApiKeyRecord(CamelModel):
    """Persisted key. Only the SHA-256 hash of the secret is kept."""

    id: str
    name: str
    user_id: str
    workspace_id: str
    hashed_key: str
    key_prefix: str
    created_at: datetime
    last_used_at: datetime | None = None


# =============================================================================
# Response Schemas
# =============================================================================


class ApiKeyResponse(CamelModel):
    """Key metadata, never the secret."""

    id: str
    name: str
    user_id: str
    workspace_id: str
    key_prefix: str
    created_at: datetime
    last_used_at: datetime | None = None

    @classmethod
    def from_record(cls, record: ApiKeyRecord) -> "ApiKeyResponse":
        return cls.model_validate(record.model_dump(exclude={"hashed_key"}))


class ApiKeyCreatedResponse(CamelModel):
    """Returned once, on creation. ``key`` is not retrievable afterwards."""

    key: str
    id: str
    name: str
    message: str


class ApiKeyListResponse(CamelModel):
    """List of keys owned by the caller."""

    items: list[ApiKeyResponse]
