"""
Docmost Auth - Schemas.

Pydantic models for API-key principals with workspace roles.
"""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from docmost.schemas import CamelModel

WorkspaceRole = Literal["owner", "admin", "member", "viewer"]


class PermissionLevel(str, Enum):
    """Access level a method requires."""

    READ = "read"
    WRITE = "write"
    ADMIN = "admin"


ROLE_PERMISSIONS: dict[str, frozenset[PermissionLevel]] = {
    "viewer": frozenset({PermissionLevel.READ}),
    "member": frozenset({PermissionLevel.READ, PermissionLevel.WRITE}),
    "admin": frozenset(PermissionLevel),
    "owner": frozenset(PermissionLevel),
}


class Workspace(CamelModel):
    """Workspace model."""

    id: str
    name: str
    hostname: str | None = None
    created_at: datetime | None = None


class User(CamelModel):
    """Workspace member."""

    id: str
    email: str
    name: str | None = None
    workspace_id: str
    role: WorkspaceRole = "member"
    created_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        """Check if user has admin role."""
        return self.role in ("admin", "owner")

    def can(self, level: PermissionLevel) -> bool:
        """Check if the user's role grants ``level``."""
        return level in ROLE_PERMISSIONS.get(self.role, frozenset())


class Principal(BaseModel):
    """Caller identity resolved from an API key."""

    user: User
    workspace_id: str
    api_key_id: str = Field(..., description="Key that authenticated the request")
