"""
Docmost Comments - Service

Comments are threaded one level deep: a reply must target a top-level
comment on the same page. Only the author may edit a comment; the author or
a workspace admin may delete it.
"""

import logging
from datetime import datetime, timezone
from uuid import uuid4

from docmost.auth.schemas import User
from docmost.exceptions import ForbiddenException, NotFoundException, ValidationException
from docmost.modules.comments.schemas import Comment
from docmost.modules.pages.service import get_pages_service

logger = logging.getLogger(__name__)


class CommentsService:
    """In-memory comment store."""

    def __init__(self):
        self._comments: dict[str, Comment] = {}

    async def list_comments(self, page_id: str, workspace_id: str) -> list[Comment]:
        await get_pages_service().get_page(page_id, workspace_id)
        comments = [c for c in self._comments.values() if c.page_id == page_id]
        return sorted(comments, key=lambda c: c.created_at)

    async def get_comment(self, comment_id: str, workspace_id: str) -> Comment:
        comment = self._comments.get(comment_id)
        if comment is None or comment.workspace_id != workspace_id:
            raise NotFoundException("Comment", comment_id)
        return comment

    async def create_comment(
        self,
        user: User,
        page_id: str,
        content: str,
        selection: str | None = None,
        parent_comment_id: str | None = None,
    ) -> Comment:
        await get_pages_service().get_page(page_id, user.workspace_id)

        if parent_comment_id is not None:
            parent = await self.get_comment(parent_comment_id, user.workspace_id)
            if parent.page_id != page_id:
                raise ValidationException("Parent comment belongs to a different page")
            if parent.parent_comment_id is not None:
                raise ValidationException("You cannot reply to a reply")

        comment = Comment(
            id=str(uuid4()),
            workspace_id=user.workspace_id,
            page_id=page_id,
            parent_comment_id=parent_comment_id,
            content=content,
            selection=selection,
            creator_id=user.id,
            created_at=datetime.now(timezone.utc),
        )
        self._comments[comment.id] = comment
        return comment

    async def update_comment(self, comment_id: str, user: User, content: str) -> Comment:
        comment = await self.get_comment(comment_id, user.workspace_id)
        if comment.creator_id != user.id:
            raise ForbiddenException("You can only edit your own comments")

        comment = comment.model_copy(update={"content": content, "edited_at": datetime.now(timezone.utc)})
        self._comments[comment_id] = comment
        return comment

    async def delete_comment(self, comment_id: str, user: User) -> list[str]:
        """Delete a comment and its replies. Returns the deleted ids."""
        comment = await self.get_comment(comment_id, user.workspace_id)
        if comment.creator_id != user.id and not user.is_admin:
            raise ForbiddenException("You can only delete your own comments")

        deleted = [comment_id] + [c.id for c in self._comments.values() if c.parent_comment_id == comment_id]
        for cid in deleted:
            del self._comments[cid]
        return deleted

    async def resolve_comment(self, comment_id: str, user: User, resolved: bool = True) -> Comment:
        comment = await self.get_comment(comment_id, user.workspace_id)
        if comment.parent_comment_id is not None:
            raise ValidationException("Only top-level comments can be resolved")

        if resolved:
            changes = {"resolved_at": datetime.now(timezone.utc), "resolved_by_id": user.id}
        else:
            changes = {"resolved_at": None, "resolved_by_id": None}
        comment = comment.model_copy(update=changes)
        self._comments[comment_id] = comment
        return comment

    async def delete_page_comments(self, page_ids: list[str]) -> int:
        targets = set(page_ids)
        doomed = [cid for cid, c in self._comments.items() if c.page_id in targets]
        for cid in doomed:
            del self._comments[cid]
        return len(doomed)

    def clear(self) -> None:
        self._comments.clear()


# Singleton
_comments_service: CommentsService | None = None


def get_comments_service() -> CommentsService:
    """Get the comments service singleton."""
    global _comments_service
    if _comments_service is None:
        _comments_service = CommentsService()
    return _comments_service
