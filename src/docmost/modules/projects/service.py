"""
Docmost Projects - Service
"""

import logging
from datetime import datetime, timezone
from uuid import uuid4

from docmost.exceptions import NotFoundException
from docmost.modules.projects.schemas import Project
from docmost.modules.spaces.service import get_spaces_service

logger = logging.getLogger(__name__)


class ProjectsService:
    """In-memory project store."""

    def __init__(self):
        self._projects: dict[str, Project] = {}

    async def list_projects(self, space_id: str, workspace_id: str, include_archived: bool = False) -> list[Project]:
        await get_spaces_service().get_space(space_id, workspace_id)
        projects = [
            p for p in self._projects.values()
            if p.space_id == space_id and (include_archived or not p.is_archived)
        ]
        return sorted(projects, key=lambda p: p.created_at)

    async def get_project(self, project_id: str, workspace_id: str) -> Project:
        project = self._projects.get(project_id)
        if project is None or project.workspace_id != workspace_id:
            raise NotFoundException("Project", project_id)
        return project

    async def create_project(
        self,
        workspace_id: str,
        creator_id: str,
        space_id: str,
        name: str,
        description: str | None = None,
        icon: str | None = None,
        color: str | None = None,
    ) -> Project:
        await get_spaces_service().get_space(space_id, workspace_id)
        project = Project(
            id=str(uuid4()),
            workspace_id=workspace_id,
            space_id=space_id,
            name=name,
            description=description,
            icon=icon,
            color=color,
            creator_id=creator_id,
            created_at=datetime.now(timezone.utc),
        )
        self._projects[project.id] = project
        return project

    async def update_project(self, project_id: str, workspace_id: str, **changes) -> Project:
        """Apply the non-None fields among name, description, icon and color."""
        project = await self.get_project(project_id, workspace_id)
        update = {k: v for k, v in changes.items() if v is not None and k in ("name", "description", "icon", "color")}
        update["updated_at"] = datetime.now(timezone.utc)

        project = project.model_copy(update=update)
        self._projects[project_id] = project
        return project

    async def set_archived(self, project_id: str, workspace_id: str, archived: bool = True) -> Project:
        project = await self.get_project(project_id, workspace_id)
        project = project.model_copy(update={"is_archived": archived, "updated_at": datetime.now(timezone.utc)})
        self._projects[project_id] = project
        return project

    async def delete_project(self, project_id: str, workspace_id: str) -> None:
        await self.get_project(project_id, workspace_id)
        del self._projects[project_id]
        logger.info(f"Deleted project {project_id}")

    async def delete_space_projects(self, space_id: str) -> list[str]:
        deleted = [pid for pid, p in self._projects.items() if p.space_id == space_id]
        for pid in deleted:
            del self._projects[pid]
        return deleted

    def clear(self) -> None:
        self._projects.clear()


# Singleton
_projects_service: ProjectsService | None = None


def get_projects_service() -> ProjectsService:
    """Get the projects service singleton."""
    global _projects_service
    if _projects_service is None:
        _projects_service = ProjectsService()
    return _projects_service
