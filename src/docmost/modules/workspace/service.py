"""
Docmost Workspace - Service

Workspaces and their members. Consumed by workspace resolution, API-key
registration and the domain services that need user lookups.
"""

import logging
from datetime import datetime, timezone
from uuid import uuid4

from docmost.auth.schemas import User, Workspace, WorkspaceRole
from docmost.exceptions import ConflictException, NotFoundException

logger = logging.getLogger(__name__)


class WorkspaceService:
    """In-memory workspace directory."""

    def __init__(self):
        self._workspaces: dict[str, Workspace] = {}
        # Structure: {workspace_id: {user_id: user}}
        self._users: dict[str, dict[str, User]] = {}

    async def create_workspace(self, name: str, workspace_id: str | None = None, hostname: str | None = None) -> Workspace:
        workspace_id = workspace_id or str(uuid4())
        if workspace_id in self._workspaces:
            raise ConflictException(f"Workspace already exists: {workspace_id}")

        workspace = Workspace(
            id=workspace_id,
            name=name,
            hostname=hostname,
            created_at=datetime.now(timezone.utc),
        )
        self._workspaces[workspace_id] = workspace
        self._users[workspace_id] = {}
        logger.info(f"Created workspace {workspace_id} ({name})")
        return workspace

    async def get_workspace(self, workspace_id: str) -> Workspace | None:
        return self._workspaces.get(workspace_id)

    async def add_user(
        self,
        workspace_id: str,
        email: str,
        name: str | None = None,
        role: WorkspaceRole = "member",
        user_id: str | None = None,
    ) -> User:
        """Add a member to a workspace."""
        members = self._users.get(workspace_id)
        if members is None:
            raise NotFoundException("Workspace", workspace_id)

        email = email.lower()
        if any(member.email == email for member in members.values()):
            raise ConflictException(f"User with email {email} already exists in workspace")

        user = User(
            id=user_id or str(uuid4()),
            email=email,
            name=name,
            workspace_id=workspace_id,
            role=role,
            created_at=datetime.now(timezone.utc),
        )
        members[user.id] = user
        return user

    async def find_user(self, user_id: str, workspace_id: str) -> User | None:
        """Look up a member; None when either the user or the workspace is unknown."""
        return self._users.get(workspace_id, {}).get(user_id)

    async def list_users(self, workspace_id: str) -> list[User]:
        return list(self._users.get(workspace_id, {}).values())

    async def get_user(self, user_id: str, workspace_id: str) -> User:
        user = await self.find_user(user_id, workspace_id)
        if user is None:
            raise NotFoundException("User", user_id)
        return user

    async def search_users(self, workspace_id: str, query: str | None = None) -> list[User]:
        """Members ordered by name, optionally filtered on name or email."""
        needle = query.lower() if query else None
        users = [
            u for u in await self.list_users(workspace_id)
            if needle is None or needle in u.email or needle in (u.name or "").lower()
        ]
        return sorted(users, key=lambda u: ((u.name or u.email).lower(), u.id))

    def clear(self) -> None:
        """Drop all workspaces. Useful for testing."""
        self._workspaces.clear()
        self._users.clear()


# Singleton
_workspace_service: WorkspaceService | None = None


def get_workspace_service() -> WorkspaceService:
    """Get the workspace service singleton."""
    global _workspace_service
    if _workspace_service is None:
        _workspace_service = WorkspaceService()
    return _workspace_service
