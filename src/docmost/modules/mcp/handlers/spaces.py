"""
MCP Handlers - Spaces.
"""

from typing import Any

from docmost.auth.schemas import PermissionLevel
from docmost.core.pagination import paginate
from docmost.modules.comments.service import get_comments_service
from docmost.modules.mcp.context import McpContext
from docmost.modules.mcp.params import PAGINATION, identifier, obj, page_args, string
from docmost.modules.mcp.registry import MethodDescriptor
from docmost.modules.pages.service import get_pages_service
from docmost.modules.projects.service import get_projects_service
from docmost.modules.spaces.service import get_spaces_service
from docmost.modules.tasks.service import get_tasks_service

SPACE_ID = identifier("Space ID")


async def list_spaces(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    spaces = await get_spaces_service().list_spaces(context.require_workspace_id())
    return paginate(spaces, *page_args(params))


async def get_space(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    space = await get_spaces_service().get_space(params["spaceId"], context.require_workspace_id())
    return space.to_payload()


async def create_space(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    user = context.require_user()
    space = await get_spaces_service().create_space(
        workspace_id=user.workspace_id,
        creator_id=user.id,
        name=params["name"],
        slug=params.get("slug"),
        description=params.get("description"),
    )
    return space.to_payload()


async def update_space(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    space = await get_spaces_service().update_space(
        params["spaceId"],
        context.require_workspace_id(),
        name=params.get("name"),
        description=params.get("description"),
    )
    return space.to_payload()


async def delete_space(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    """Delete a space with its pages, comments, projects and tasks."""
    space_id = params["spaceId"]
    await get_spaces_service().delete_space(space_id, context.require_workspace_id())

    page_ids = await get_pages_service().delete_space_pages(space_id)
    await get_comments_service().delete_page_comments(page_ids)
    await get_projects_service().delete_space_projects(space_id)
    await get_tasks_service().delete_space_tasks(space_id)
    return {"success": True, "id": space_id}


METHODS = (
    MethodDescriptor(
        name="space.list",
        description="List the spaces of the workspace.",
        params_schema=obj(PAGINATION),
        handler=list_spaces,
        permission=PermissionLevel.READ,
    ),
    MethodDescriptor(
        name="space.get",
        description="Get a space by ID.",
        params_schema=obj({"spaceId": SPACE_ID}, ["spaceId"]),
        handler=get_space,
        permission=PermissionLevel.READ,
    ),
    MethodDescriptor(
        name="space.create",
        description="Create a space. The slug defaults to one derived from the name and must be unique.",
        params_schema=obj(
            {
                "name": string("Space name", min_length=1, max_length=255),
                "slug": string("URL slug", min_length=1, max_length=100),
                "description": string("Space description", max_length=1000),
            },
            ["name"],
        ),
        handler=create_space,
        permission=PermissionLevel.WRITE,
    ),
    MethodDescriptor(
        name="space.update",
        description="Rename a space or change its description.",
        params_schema=obj(
            {
                "spaceId": SPACE_ID,
                "name": string("New name", min_length=1, max_length=255),
                "description": string("New description", max_length=1000),
            },
            ["spaceId"],
        ),
        handler=update_space,
        permission=PermissionLevel.ADMIN,
    ),
    MethodDescriptor(
        name="space.delete",
        description="Delete a space and everything in it.",
        params_schema=obj({"spaceId": SPACE_ID}, ["spaceId"]),
        handler=delete_space,
        permission=PermissionLevel.ADMIN,
    ),
)
