"""Docmost Auth Module.

Machine clients authenticate with API keys sent as
``Authorization: Bearer mcp_<hex>``; the FastAPI dependencies that resolve
them live in ``docmost.deps``.
"""

from docmost.auth.schemas import (
    ROLE_PERMISSIONS,
    PermissionLevel,
    Principal,
    User,
    Workspace,
    WorkspaceRole,
)

__all__ = [
    "ROLE_PERMISSIONS",
    "PermissionLevel",
    "Principal",
    "User",
    "Workspace",
    "WorkspaceRole",
]
