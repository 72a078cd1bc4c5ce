"""
Workspace context resolution.

Every request outside the context exemption list is bound to a workspace
before it reaches a router. Exempt routes (the MCP gateway, bootstrap key
registration, health and docs) run with ``request.state.workspace = None``.
"""

import logging
import re
from fnmatch import fnmatchcase

from fastapi import Request
from fastapi.responses import JSONResponse

from docmost.config import get_settings
from docmost.exceptions import WorkspaceNotFoundException
from docmost.modules.workspace.service import get_workspace_service

logger = logging.getLogger(__name__)

WORKSPACE_HEADER = "X-Workspace-Id"

# Exact paths and their prefix forms.
CONTEXT_EXEMPT_PATTERNS: tuple[str, ...] = (
    "/api/mcp",
    "/api/mcp/*",
    "/api/api-keys/register",
    "/health",
    "/docs",
    "/docs/*",
    "/redoc",
    "/openapi.json",
    "/",
)

_REPEATED_SLASHES = re.compile(r"/{2,}")


def normalize_path(path: str) -> str:
    """Collapse repeated slashes and drop the trailing one."""
    path = _REPEATED_SLASHES.sub("/", path or "/")
    if len(path) > 1:
        path = path.rstrip("/")
    return path or "/"


def is_exempt_path(path: str) -> bool:
    normalized = normalize_path(path)
    return any(fnmatchcase(normalized, pattern) for pattern in CONTEXT_EXEMPT_PATTERNS)


async def resolve_workspace(request: Request, call_next):
    """Attach the request's workspace, or answer 404 if there is none."""
    if is_exempt_path(request.url.path):
        request.state.workspace = None
        return await call_next(request)

    workspace_id = request.headers.get(WORKSPACE_HEADER) or get_settings().default_workspace_id
    workspace = await get_workspace_service().get_workspace(workspace_id) if workspace_id else None

    if workspace is None:
        exc = WorkspaceNotFoundException(workspace_id)
        request_id = getattr(request.state, "request_id", None)
        logger.info(f"[{request_id}] No workspace for {request.url.path} (id={workspace_id})")
        return JSONResponse(status_code=exc.status_code, content=exc.to_content(request_id))

    request.state.workspace = workspace
    return await call_next(request)
