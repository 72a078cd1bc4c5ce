"""
Docmost - Dependency Injection.

FastAPI dependencies for request context, API-key principals and workspaces.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from docmost.auth.schemas import PermissionLevel, Principal, Workspace
from docmost.exceptions import ForbiddenException, UnauthorizedException, WorkspaceNotFoundException
from docmost.modules.api_keys.service import get_api_keys_service


security = HTTPBearer(auto_error=False)


# =============================================================================
# Request Context
# =============================================================================


def get_request_id(request: Request) -> str | None:
    """Request ID assigned by the request-id middleware."""
    return getattr(request.state, "request_id", None)


def get_current_workspace(request: Request) -> Workspace:
    """Workspace resolved by the workspace middleware."""
    workspace = getattr(request.state, "workspace", None)
    if workspace is None:
        raise WorkspaceNotFoundException()
    return workspace


# =============================================================================
# Principals
# =============================================================================


async def get_optional_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Principal | None:
    if credentials is None:
        return None
    return await get_api_keys_service().authenticate(credentials.credentials)


async def get_current_principal(
    principal: Annotated[Principal | None, Depends(get_optional_principal)],
) -> Principal:
    """Require a valid API key."""
    if principal is None:
        raise UnauthorizedException("Invalid or missing API key")
    return principal


async def get_workspace_principal(
    principal: Annotated[Principal, Depends(get_current_principal)],
    workspace: Annotated[Workspace, Depends(get_current_workspace)],
) -> Principal:
    """Require an API key issued for the resolved workspace."""
    if principal.workspace_id != workspace.id:
        raise ForbiddenException("API key does not belong to this workspace")
    return principal


async def get_admin_principal(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> Principal:
    """Require an API key whose user holds the admin permission level."""
    if not principal.user.can(PermissionLevel.ADMIN):
        raise ForbiddenException("Admin role required", required_role="admin")
    return principal


CurrentPrincipal = Annotated[Principal, Depends(get_workspace_principal)]
AdminPrincipal = Annotated[Principal, Depends(get_admin_principal)]
OptionalPrincipal = Annotated[Principal | None, Depends(get_optional_principal)]
