"""
MCP Handlers - Comments.
"""

from typing import Any

from docmost.auth.schemas import PermissionLevel
from docmost.core.pagination import paginate
from docmost.modules.comments.service import get_comments_service
from docmost.modules.mcp.context import McpContext
from docmost.modules.mcp.params import PAGINATION, boolean, identifier, obj, page_args, string
from docmost.modules.mcp.registry import MethodDescriptor

COMMENT_ID = identifier("Comment ID")
CONTENT = string("Comment text", min_length=1)


async def list_comments(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    comments = await get_comments_service().list_comments(params["pageId"], context.require_workspace_id())
    return paginate(comments, *page_args(params))


async def get_comment(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    comment = await get_comments_service().get_comment(params["commentId"], context.require_workspace_id())
    return comment.to_payload()


async def create_comment(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    comment = await get_comments_service().create_comment(
        context.require_user(),
        page_id=params["pageId"],
        content=params["content"],
        selection=params.get("selection"),
        parent_comment_id=params.get("parentCommentId"),
    )
    return comment.to_payload()


async def update_comment(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    comment = await get_comments_service().update_comment(
        params["commentId"], context.require_user(), params["content"]
    )
    return comment.to_payload()


async def delete_comment(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    deleted = await get_comments_service().delete_comment(params["commentId"], context.require_user())
    return {"success": True, "deleted": deleted}


async def resolve_comment(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    comment = await get_comments_service().resolve_comment(
        params["commentId"], context.require_user(), resolved=params.get("resolved", True)
    )
    return comment.to_payload()


METHODS = (
    MethodDescriptor(
        name="comment.list",
        description="List the comments of a page, oldest first.",
        params_schema=obj({"pageId": identifier("Page ID"), **PAGINATION}, ["pageId"]),
        handler=list_comments,
        permission=PermissionLevel.READ,
    ),
    MethodDescriptor(
        name="comment.get",
        description="Get a comment by ID.",
        params_schema=obj({"commentId": COMMENT_ID}, ["commentId"]),
        handler=get_comment,
        permission=PermissionLevel.READ,
    ),
    MethodDescriptor(
        name="comment.create",
        description="Comment on a page, or reply to a top-level comment. Replies cannot be nested.",
        params_schema=obj(
            {
                "pageId": identifier("Page ID"),
                "content": CONTENT,
                "selection": string("Quoted page text the comment refers to", max_length=2000),
                "parentCommentId": identifier("Top-level comment to reply to"),
            },
            ["pageId", "content"],
        ),
        handler=create_comment,
        permission=PermissionLevel.WRITE,
    ),
    MethodDescriptor(
        name="comment.update",
        description="Edit a comment. Only its author may edit it.",
        params_schema=obj({"commentId": COMMENT_ID, "content": CONTENT}, ["commentId", "content"]),
        handler=update_comment,
        permission=PermissionLevel.WRITE,
    ),
    MethodDescriptor(
        name="comment.delete",
        description="Delete a comment and its replies. Authors and workspace admins may delete.",
        params_schema=obj({"commentId": COMMENT_ID}, ["commentId"]),
        handler=delete_comment,
        permission=PermissionLevel.WRITE,
    ),
    MethodDescriptor(
        name="comment.resolve",
        description="Resolve a top-level comment, or reopen it with resolved=false.",
        params_schema=obj(
            {"commentId": COMMENT_ID, "resolved": boolean("Resolve (true) or reopen (false)", default=True)},
            ["commentId"],
        ),
        handler=resolve_comment,
        permission=PermissionLevel.WRITE,
    ),
)
