"""
MCP Handlers - Workspace and Users.

Read-only directory of the caller's workspace, so clients can find the user
ids that ``task.assign`` and ``task.create`` expect.
"""

from typing import Any

from docmost.auth.schemas import PermissionLevel
from docmost.core.pagination import paginate
from docmost.exceptions import WorkspaceNotFoundException
from docmost.modules.mcp.context import McpContext
from docmost.modules.mcp.params import PAGINATION, identifier, obj, page_args, string
from docmost.modules.mcp.registry import MethodDescriptor
from docmost.modules.workspace.service import get_workspace_service


async def get_workspace(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    workspace_id = context.require_workspace_id()
    service = get_workspace_service()
    workspace = await service.get_workspace(workspace_id)
    if workspace is None:
        raise WorkspaceNotFoundException(workspace_id)

    return {**workspace.to_payload(), "memberCount": len(await service.list_users(workspace_id))}


async def list_users(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    users = await get_workspace_service().search_users(context.require_workspace_id(), params.get("query"))
    return paginate(users, *page_args(params))


async def get_user(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    user = await get_workspace_service().get_user(params["userId"], context.require_workspace_id())
    return user.to_payload()


METHODS = (
    MethodDescriptor(
        name="workspace.get",
        description="Get the workspace the API key belongs to, with its member count.",
        params_schema=obj(),
        handler=get_workspace,
        permission=PermissionLevel.READ,
    ),
    MethodDescriptor(
        name="user.list",
        description="List members of the workspace, ordered by name. Use the ids as assigneeId.",
        params_schema=obj({"query": string("Case-insensitive match on name or email"), **PAGINATION}),
        handler=list_users,
        permission=PermissionLevel.READ,
    ),
    MethodDescriptor(
        name="user.get",
        description="Get a workspace member by ID.",
        params_schema=obj({"userId": identifier("User ID")}, ["userId"]),
        handler=get_user,
        permission=PermissionLevel.READ,
    ),
)
