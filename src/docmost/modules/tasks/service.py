"""
Docmost Tasks - Service

Business logic for tasks. A task's project, parent task and linked page must
all live in the task's space. Completion is derived from status: entering
``done`` stamps ``completed_at``; leaving it clears the stamp.
"""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from docmost.auth.schemas import User
from docmost.exceptions import ValidationException, NotFoundException
from docmost.modules.pages.service import get_pages_service
from docmost.modules.projects.service import get_projects_service
from docmost.modules.spaces.service import get_spaces_service
from docmost.modules.tasks.schemas import Task, TaskPriority, TaskStatus
from docmost.modules.workspace.service import get_workspace_service

logger = logging.getLogger(__name__)

_PRIORITY_RANK = {p: i for i, p in enumerate(reversed(list(TaskPriority)))}


def _completion(status: TaskStatus) -> dict[str, Any]:
    if status == TaskStatus.DONE:
        return {"is_completed": True, "completed_at": datetime.now(timezone.utc)}
    return {"is_completed": False, "completed_at": None}


class TasksService:
    """In-memory task store."""

    def __init__(self):
        self._tasks: dict[str, Task] = {}

    async def list_tasks(
        self,
        workspace_id: str,
        project_id: str | None = None,
        space_id: str | None = None,
        statuses: list[TaskStatus] | None = None,
        search_term: str | None = None,
    ) -> list[Task]:
        """Tasks of a project or a space, highest priority first."""
        if project_id is None and space_id is None:
            raise ValidationException("Either projectId or spaceId is required")
        if project_id is not None:
            await get_projects_service().get_project(project_id, workspace_id)
        if space_id is not None:
            await get_spaces_service().get_space(space_id, workspace_id)

        needle = search_term.lower() if search_term else None
        tasks = [
            t for t in self._tasks.values()
            if t.workspace_id == workspace_id
            and (project_id is None or t.project_id == project_id)
            and (space_id is None or t.space_id == space_id)
            and (not statuses or t.status in statuses)
            and (needle is None or needle in t.title.lower() or needle in (t.description or "").lower())
        ]
        return sorted(tasks, key=lambda t: (_PRIORITY_RANK[t.priority], t.created_at))

    async def get_task(self, task_id: str, workspace_id: str) -> Task:
        task = self._tasks.get(task_id)
        if task is None or task.workspace_id != workspace_id:
            raise NotFoundException("Task", task_id)
        return task

    async def _check_links(
        self,
        workspace_id: str,
        space_id: str,
        project_id: str | None = None,
        parent_task_id: str | None = None,
        page_id: str | None = None,
    ) -> None:
        if project_id is not None:
            project = await get_projects_service().get_project(project_id, workspace_id)
            if project.space_id != space_id:
                raise ValidationException("Project does not belong to the task's space")
        if parent_task_id is not None:
            parent = await self.get_task(parent_task_id, workspace_id)
            if parent.space_id != space_id:
                raise ValidationException("Parent task does not belong to the task's space")
        if page_id is not None:
            page = await get_pages_service().get_page(page_id, workspace_id)
            if page.space_id != space_id:
                raise ValidationException("Page does not belong to the task's space")

    async def _check_assignee(self, assignee_id: str, workspace_id: str) -> None:
        if await get_workspace_service().find_user(assignee_id, workspace_id) is None:
            raise ValidationException(f"Assignee is not a member of this workspace: {assignee_id}")

    async def create_task(
        self,
        user: User,
        space_id: str,
        title: str,
        description: str | None = None,
        status: TaskStatus = TaskStatus.TODO,
        priority: TaskPriority = TaskPriority.MEDIUM,
        project_id: str | None = None,
        parent_task_id: str | None = None,
        page_id: str | None = None,
        assignee_id: str | None = None,
        due_date: datetime | None = None,
        estimated_time: int | None = None,
    ) -> Task:
        workspace_id = user.workspace_id
        await get_spaces_service().get_space(space_id, workspace_id)
        await self._check_links(workspace_id, space_id, project_id, parent_task_id, page_id)
        if assignee_id is not None:
            await self._check_assignee(assignee_id, workspace_id)

        task = Task(
            id=str(uuid4()),
            workspace_id=workspace_id,
            space_id=space_id,
            project_id=project_id,
            parent_task_id=parent_task_id,
            page_id=page_id,
            title=title,
            description=description,
            status=status,
            priority=priority,
            due_date=due_date,
            assignee_id=assignee_id,
            creator_id=user.id,
            estimated_time=estimated_time,
            created_at=datetime.now(timezone.utc),
            **_completion(status),
        )
        self._tasks[task.id] = task
        return task

    async def update_task(self, task_id: str, workspace_id: str, **changes: Any) -> Task:
        """
        Apply the non-None fields among title, description, status, priority,
        due_date, estimated_time and page_id.
        """
        task = await self.get_task(task_id, workspace_id)
        allowed = ("title", "description", "status", "priority", "due_date", "estimated_time", "page_id")
        update = {k: v for k, v in changes.items() if k in allowed and v is not None}

        if "page_id" in update:
            await self._check_links(workspace_id, task.space_id, page_id=update["page_id"])
        if "status" in update and update["status"] != task.status:
            update.update(_completion(update["status"]))

        update["updated_at"] = datetime.now(timezone.utc)
        return self._save(task.model_copy(update=update))

    async def delete_task(self, task_id: str, workspace_id: str) -> list[str]:
        """Delete a task and its subtasks. Returns the deleted ids."""
        await self.get_task(task_id, workspace_id)
        deleted = [task_id]
        frontier = [task_id]
        while frontier:
            current = frontier.pop()
            children = [t.id for t in self._tasks.values() if t.parent_task_id == current]
            deleted.extend(children)
            frontier.extend(children)
        for tid in deleted:
            del self._tasks[tid]
        return deleted

    async def assign_task(self, task_id: str, workspace_id: str, assignee_id: str | None) -> Task:
        """Assign to a workspace member, or unassign with None."""
        task = await self.get_task(task_id, workspace_id)
        if assignee_id is not None:
            await self._check_assignee(assignee_id, workspace_id)
        return self._save(task.model_copy(update={"assignee_id": assignee_id, "updated_at": datetime.now(timezone.utc)}))

    async def complete_task(self, task_id: str, workspace_id: str, is_completed: bool = True) -> Task:
        task = await self.get_task(task_id, workspace_id)
        status = TaskStatus.DONE if is_completed else TaskStatus.TODO
        if task.status == status:
            return task
        update = {"status": status, "updated_at": datetime.now(timezone.utc), **_completion(status)}
        return self._save(task.model_copy(update=update))

    async def move_to_project(self, task_id: str, workspace_id: str, project_id: str | None) -> Task:
        """Move onto a project board of the same space, or off any board with None."""
        task = await self.get_task(task_id, workspace_id)
        await self._check_links(workspace_id, task.space_id, project_id=project_id)
        return self._save(task.model_copy(update={"project_id": project_id, "updated_at": datetime.now(timezone.utc)}))

    async def detach_project(self, project_id: str) -> int:
        """Take every task off a deleted project's board."""
        affected = [t for t in self._tasks.values() if t.project_id == project_id]
        for task in affected:
            self._save(task.model_copy(update={"project_id": None}))
        return len(affected)

    async def unlink_pages(self, page_ids: list[str], outside_space: str | None = None) -> int:
        """
        Clear ``page_id`` on tasks linked to ``page_ids``.

        With ``outside_space`` only tasks of other spaces are touched, which is
        what a cross-space page move needs.
        """
        targets = set(page_ids)
        affected = [
            t for t in self._tasks.values()
            if t.page_id in targets and (outside_space is None or t.space_id != outside_space)
        ]
        now = datetime.now(timezone.utc)
        for task in affected:
            self._save(task.model_copy(update={"page_id": None, "updated_at": now}))
        return len(affected)

    async def delete_space_tasks(self, space_id: str) -> list[str]:
        deleted = [tid for tid, t in self._tasks.items() if t.space_id == space_id]
        for tid in deleted:
            del self._tasks[tid]
        return deleted

    def _save(self, task: Task) -> Task:
        self._tasks[task.id] = task
        return task

    def clear(self) -> None:
        self._tasks.clear()


# Singleton
_tasks_service: TasksService | None = None


def get_tasks_service() -> TasksService:
    """Get the tasks service singleton."""
    global _tasks_service
    if _tasks_service is None:
        _tasks_service = TasksService()
    return _tasks_service
