"""
MCP Handlers - Pages.
"""

from typing import Any

from docmost.auth.schemas import PermissionLevel
from docmost.core.pagination import paginate
from docmost.modules.comments.service import get_comments_service
from docmost.modules.mcp.context import McpContext
from docmost.modules.mcp.params import PAGINATION, identifier, obj, page_args, string
from docmost.modules.mcp.registry import MethodDescriptor
from docmost.modules.pages.service import get_pages_service
from docmost.modules.tasks.service import get_tasks_service

PAGE_ID = identifier("Page ID")
SPACE_ID = identifier("Space ID")


async def list_pages(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    pages = await get_pages_service().list_pages(
        params["spaceId"],
        context.require_workspace_id(),
        parent_page_id=params.get("parentPageId"),
    )
    return paginate(pages, *page_args(params))


async def get_page(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    page = await get_pages_service().get_page(params["pageId"], context.require_workspace_id())
    return page.to_payload()


async def create_page(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    user = context.require_user()
    page = await get_pages_service().create_page(
        workspace_id=user.workspace_id,
        creator_id=user.id,
        space_id=params["spaceId"],
        title=params.get("title"),
        content=params.get("content"),
        icon=params.get("icon"),
        parent_page_id=params.get("parentPageId"),
    )
    return page.to_payload()


async def update_page(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    user = context.require_user()
    page = await get_pages_service().update_page(
        params["pageId"],
        user.workspace_id,
        editor_id=user.id,
        title=params.get("title"),
        content=params.get("content"),
        icon=params.get("icon"),
    )
    return page.to_payload()


async def delete_page(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    deleted = await get_pages_service().delete_page(params["pageId"], context.require_workspace_id())
    await get_comments_service().delete_page_comments(deleted)
    unlinked = await get_tasks_service().unlink_pages(deleted)
    return {"success": True, "deleted": deleted, "unlinkedTasks": unlinked}


async def move_page(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    pages = get_pages_service()
    page = await pages.move_page(
        params["pageId"],
        context.require_workspace_id(),
        space_id=params.get("spaceId"),
        parent_page_id=params.get("parentPageId"),
    )
    # Tasks may only link pages of their own space
    await get_tasks_service().unlink_pages(pages.subtree_ids(page.id), outside_space=page.space_id)
    return page.to_payload()


async def search_pages(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    pages = await get_pages_service().search_pages(
        context.require_workspace_id(),
        params["query"],
        space_id=params.get("spaceId"),
    )
    return paginate(pages, *page_args(params))


METHODS = (
    MethodDescriptor(
        name="page.list",
        description="List the pages of a space, or the children of one page.",
        params_schema=obj(
            {"spaceId": SPACE_ID, "parentPageId": identifier("Only list children of this page"), **PAGINATION},
            ["spaceId"],
        ),
        handler=list_pages,
        permission=PermissionLevel.READ,
    ),
    MethodDescriptor(
        name="page.get",
        description="Get a page by ID, including its content.",
        params_schema=obj({"pageId": PAGE_ID}, ["pageId"]),
        handler=get_page,
        permission=PermissionLevel.READ,
    ),
    MethodDescriptor(
        name="page.create",
        description="Create a page in a space, optionally under a parent page.",
        params_schema=obj(
            {
                "spaceId": SPACE_ID,
                "title": string("Page title", max_length=500),
                "content": string("Page content (Markdown)"),
                "icon": string("Emoji icon", max_length=50),
                "parentPageId": identifier("Parent page ID"),
            },
            ["spaceId"],
        ),
        handler=create_page,
        permission=PermissionLevel.WRITE,
    ),
    MethodDescriptor(
        name="page.update",
        description="Update a page's title, content or icon.",
        params_schema=obj(
            {
                "pageId": PAGE_ID,
                "title": string("New title", max_length=500),
                "content": string("New content (Markdown)"),
                "icon": string("New emoji icon", max_length=50),
            },
            ["pageId"],
        ),
        handler=update_page,
        permission=PermissionLevel.WRITE,
    ),
    MethodDescriptor(
        name="page.delete",
        description="Delete a page together with its child pages and their comments. Tasks linking them are unlinked.",
        params_schema=obj({"pageId": PAGE_ID}, ["pageId"]),
        handler=delete_page,
        permission=PermissionLevel.WRITE,
    ),
    MethodDescriptor(
        name="page.move",
        description=(
            "Move a page under another parent and/or into another space. "
            "Without parentPageId the page becomes a root page."
        ),
        params_schema=obj(
            {
                "pageId": PAGE_ID,
                "spaceId": identifier("Target space ID"),
                "parentPageId": identifier("Target parent page ID"),
            },
            ["pageId"],
        ),
        handler=move_page,
        permission=PermissionLevel.WRITE,
    ),
    MethodDescriptor(
        name="page.search",
        description="Search pages by title or content, case-insensitively.",
        params_schema=obj(
            {"query": string("Text to search for", min_length=1), "spaceId": identifier("Limit to one space"), **PAGINATION},
            ["query"],
        ),
        handler=search_pages,
        permission=PermissionLevel.READ,
    ),
)
