"""
MCP Handlers - Projects.
"""

from typing import Any

from docmost.auth.schemas import PermissionLevel
from docmost.core.pagination import paginate
from docmost.modules.mcp.context import McpContext
from docmost.modules.mcp.params import PAGINATION, boolean, identifier, obj, page_args, string
from docmost.modules.mcp.registry import MethodDescriptor
from docmost.modules.projects.service import get_projects_service
from docmost.modules.tasks.service import get_tasks_service

PROJECT_ID = identifier("Project ID")
PROJECT_FIELDS = {
    "name": string("Project name", min_length=1, max_length=255),
    "description": string("Project description", max_length=2000),
    "icon": string("Emoji icon", max_length=50),
    "color": string("Board color, e.g. #3b82f6", max_length=20),
}


async def list_projects(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    projects = await get_projects_service().list_projects(
        params["spaceId"],
        context.require_workspace_id(),
        include_archived=params.get("includeArchived", False),
    )
    return paginate(projects, *page_args(params))


async def get_project(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    project = await get_projects_service().get_project(params["projectId"], context.require_workspace_id())
    return project.to_payload()


async def create_project(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    user = context.require_user()
    project = await get_projects_service().create_project(
        workspace_id=user.workspace_id,
        creator_id=user.id,
        space_id=params["spaceId"],
        name=params["name"],
        description=params.get("description"),
        icon=params.get("icon"),
        color=params.get("color"),
    )
    return project.to_payload()


async def update_project(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    project = await get_projects_service().update_project(
        params["projectId"],
        context.require_workspace_id(),
        **{key: params.get(key) for key in PROJECT_FIELDS},
    )
    return project.to_payload()


async def archive_project(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    project = await get_projects_service().set_archived(
        params["projectId"], context.require_workspace_id(), params.get("isArchived", True)
    )
    return project.to_payload()


async def delete_project(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    project_id = params["projectId"]
    await get_projects_service().delete_project(project_id, context.require_workspace_id())
    detached = await get_tasks_service().detach_project(project_id)
    return {"success": True, "id": project_id, "detachedTasks": detached}


METHODS = (
    MethodDescriptor(
        name="project.list",
        description="List the projects of a space. Archived projects are hidden unless includeArchived is set.",
        params_schema=obj(
            {
                "spaceId": identifier("Space ID"),
                "includeArchived": boolean("Include archived projects", default=False),
                **PAGINATION,
            },
            ["spaceId"],
        ),
        handler=list_projects,
        permission=PermissionLevel.READ,
    ),
    MethodDescriptor(
        name="project.get",
        description="Get a project by ID.",
        params_schema=obj({"projectId": PROJECT_ID}, ["projectId"]),
        handler=get_project,
        permission=PermissionLevel.READ,
    ),
    MethodDescriptor(
        name="project.create",
        description="Create a project board in a space.",
        params_schema=obj({"spaceId": identifier("Space ID"), **PROJECT_FIELDS}, ["spaceId", "name"]),
        handler=create_project,
        permission=PermissionLevel.WRITE,
    ),
    MethodDescriptor(
        name="project.update",
        description="Update a project's name, description, icon or color.",
        params_schema=obj({"projectId": PROJECT_ID, **PROJECT_FIELDS}, ["projectId"]),
        handler=update_project,
        permission=PermissionLevel.WRITE,
    ),
    MethodDescriptor(
        name="project.archive",
        description="Archive a project, or restore it with isArchived=false.",
        params_schema=obj(
            {"projectId": PROJECT_ID, "isArchived": boolean("Archive (true) or restore (false)", default=True)},
            ["projectId"],
        ),
        handler=archive_project,
        permission=PermissionLevel.WRITE,
    ),
    MethodDescriptor(
        name="project.delete",
        description="Delete a project. Its tasks stay in the space, detached from any board.",
        params_schema=obj({"projectId": PROJECT_ID}, ["projectId"]),
        handler=delete_project,
        permission=PermissionLevel.ADMIN,
    ),
)
