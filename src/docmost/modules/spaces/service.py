"""
Docmost Spaces - Service

Business logic for spaces. Slugs are unique within a workspace.
"""

import logging
import re
from datetime import datetime, timezone
from uuid import uuid4

from docmost.exceptions import ConflictException, NotFoundException
from docmost.modules.spaces.schemas import Space

logger = logging.getLogger(__name__)

_SLUG_INVALID = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    return _SLUG_INVALID.sub("-", value.lower()).strip("-") or "space"


class SpacesService:
    """In-memory spaces store, scoped per workspace."""

    def __init__(self):
        # Structure: {space_id: space}
        self._spaces: dict[str, Space] = {}

    async def list_spaces(self, workspace_id: str) -> list[Space]:
        spaces = [s for s in self._spaces.values() if s.workspace_id == workspace_id]
        return sorted(spaces, key=lambda s: s.name.lower())

    async def get_space(self, space_id: str, workspace_id: str) -> Space:
        """
        Raises:
            NotFoundException: unknown id or a space of another workspace
        """
        space = self._spaces.get(space_id)
        if space is None or space.workspace_id != workspace_id:
            raise NotFoundException("Space", space_id)
        return space

    async def create_space(
        self,
        workspace_id: str,
        creator_id: str,
        name: str,
        slug: str | None = None,
        description: str | None = None,
    ) -> Space:
        slug = slugify(slug or name)
        if any(s.slug == slug for s in await self.list_spaces(workspace_id)):
            raise ConflictException(f"Space slug already exists: {slug}")

        space = Space(
            id=str(uuid4()),
            workspace_id=workspace_id,
            name=name,
            slug=slug,
            description=description,
            creator_id=creator_id,
            created_at=datetime.now(timezone.utc),
        )
        self._spaces[space.id] = space
        logger.info(f"Created space {space.id} ({slug}) in workspace {workspace_id}")
        return space

    async def update_space(
        self,
        space_id: str,
        workspace_id: str,
        name: str | None = None,
        description: str | None = None,
    ) -> Space:
        space = await self.get_space(space_id, workspace_id)
        changes = {"updated_at": datetime.now(timezone.utc)}
        if name is not None:
            changes["name"] = name
        if description is not None:
            changes["description"] = description

        space = space.model_copy(update=changes)
        self._spaces[space_id] = space
        return space

    async def delete_space(self, space_id: str, workspace_id: str) -> None:
        await self.get_space(space_id, workspace_id)
        del self._spaces[space_id]
        logger.info(f"Deleted space {space_id}")

    def clear(self) -> None:
        self._spaces.clear()


# Singleton
_spaces_service: SpacesService | None = None


def get_spaces_service() -> SpacesService:
    """Get the spaces service singleton."""
    global _spaces_service
    if _spaces_service is None:
        _spaces_service = SpacesService()
    return _spaces_service
