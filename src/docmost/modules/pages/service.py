"""
Docmost Pages - Service

Business logic for the page tree: creation under a parent, moves across
spaces with their subtree, cascading deletes and text search.
"""

import logging
from datetime import datetime, timezone
from uuid import uuid4

from docmost.exceptions import NotFoundException, ValidationException
from docmost.modules.pages.schemas import Page
from docmost.modules.spaces.service import get_spaces_service

logger = logging.getLogger(__name__)


class PagesService:
    """In-memory page store, scoped per workspace."""

    def __init__(self):
        self._pages: dict[str, Page] = {}

    async def list_pages(self, space_id: str, workspace_id: str, parent_page_id: str | None = None) -> list[Page]:
        """Pages of a space; only direct children of ``parent_page_id`` when given."""
        await get_spaces_service().get_space(space_id, workspace_id)
        pages = [
            p for p in self._pages.values()
            if p.space_id == space_id and (parent_page_id is None or p.parent_page_id == parent_page_id)
        ]
        return sorted(pages, key=lambda p: p.created_at)

    async def get_page(self, page_id: str, workspace_id: str) -> Page:
        page = self._pages.get(page_id)
        if page is None or page.workspace_id != workspace_id:
            raise NotFoundException("Page", page_id)
        return page

    async def create_page(
        self,
        workspace_id: str,
        creator_id: str,
        space_id: str,
        title: str | None = None,
        content: str | None = None,
        icon: str | None = None,
        parent_page_id: str | None = None,
    ) -> Page:
        await get_spaces_service().get_space(space_id, workspace_id)
        if parent_page_id is not None:
            parent = await self.get_page(parent_page_id, workspace_id)
            if parent.space_id != space_id:
                raise ValidationException("Parent page belongs to a different space")

        page = Page(
            id=str(uuid4()),
            workspace_id=workspace_id,
            space_id=space_id,
            parent_page_id=parent_page_id,
            title=title or "Untitled",
            content=content or "",
            icon=icon,
            creator_id=creator_id,
            last_updated_by_id=creator_id,
            created_at=datetime.now(timezone.utc),
        )
        self._pages[page.id] = page
        return page

    async def update_page(
        self,
        page_id: str,
        workspace_id: str,
        editor_id: str,
        title: str | None = None,
        content: str | None = None,
        icon: str | None = None,
    ) -> Page:
        page = await self.get_page(page_id, workspace_id)
        changes = {"last_updated_by_id": editor_id, "updated_at": datetime.now(timezone.utc)}
        for key, value in (("title", title), ("content", content), ("icon", icon)):
            if value is not None:
                changes[key] = value

        page = page.model_copy(update=changes)
        self._pages[page_id] = page
        return page

    def _descendant_ids(self, page_id: str) -> list[str]:
        found: list[str] = []
        frontier = [page_id]
        while frontier:
            current = frontier.pop()
            children = [p.id for p in self._pages.values() if p.parent_page_id == current]
            found.extend(children)
            frontier.extend(children)
        return found

    async def delete_page(self, page_id: str, workspace_id: str) -> list[str]:
        """Delete a page and its subtree. Returns every deleted id."""
        await self.get_page(page_id, workspace_id)
        deleted = [page_id, *self._descendant_ids(page_id)]
        for pid in deleted:
            self._pages.pop(pid, None)
        logger.info(f"Deleted page {page_id} ({len(deleted) - 1} descendants)")
        return deleted

    async def move_page(
        self,
        page_id: str,
        workspace_id: str,
        space_id: str | None = None,
        parent_page_id: str | None = None,
    ) -> Page:
        """
        Re-parent a page, optionally into another space.

        Without ``parent_page_id`` the page becomes a root page of the target
        space. The subtree follows the page across spaces.
        """
        page = await self.get_page(page_id, workspace_id)
        target_space = space_id or page.space_id

        if parent_page_id is not None:
            if parent_page_id == page_id or parent_page_id in self._descendant_ids(page_id):
                raise ValidationException("Cannot move a page under itself or one of its descendants")
            parent = await self.get_page(parent_page_id, workspace_id)
            if space_id is not None and parent.space_id != space_id:
                raise ValidationException("Parent page belongs to a different space")
            target_space = parent.space_id
        else:
            await get_spaces_service().get_space(target_space, workspace_id)

        now = datetime.now(timezone.utc)
        if target_space != page.space_id:
            for pid in self._descendant_ids(page_id):
                self._pages[pid] = self._pages[pid].model_copy(update={"space_id": target_space, "updated_at": now})

        page = page.model_copy(update={"space_id": target_space, "parent_page_id": parent_page_id, "updated_at": now})
        self._pages[page_id] = page
        return page

    def subtree_ids(self, page_id: str) -> list[str]:
        return [page_id, *self._descendant_ids(page_id)]

    async def search_pages(self, workspace_id: str, query: str, space_id: str | None = None) -> list[Page]:
        """Case-insensitive match on title or content."""
        needle = query.lower()
        results = [
            p for p in self._pages.values()
            if p.workspace_id == workspace_id
            and (space_id is None or p.space_id == space_id)
            and (needle in p.title.lower() or needle in p.content.lower())
        ]
        return sorted(results, key=lambda p: (needle not in p.title.lower(), p.title.lower()))

    async def delete_space_pages(self, space_id: str) -> list[str]:
        deleted = [pid for pid, p in self._pages.items() if p.space_id == space_id]
        for pid in deleted:
            del self._pages[pid]
        return deleted

    def clear(self) -> None:
        self._pages.clear()


# Singleton
_pages_service: PagesService | None = None


def get_pages_service() -> PagesService:
    """Get the pages service singleton."""
    global _pages_service
    if _pages_service is None:
        _pages_service = PagesService()
    return _pages_service
