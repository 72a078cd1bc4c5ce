"""
Docmost Tasks - Schemas.
"""

from datetime import datetime
from enum import Enum

from pydantic import Field

from docmost.schemas import TimestampMixin


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    IN_REVIEW = "in_review"
    DONE = "done"
    BLOCKED = "blocked"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Task(TimestampMixin):
    """A unit of work in a space, optionally on a project board."""

    id: str
    workspace_id: str
    space_id: str
    project_id: str | None = None
    parent_task_id: str | None = None
    page_id: str | None = None
    title: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    assignee_id: str | None = None
    creator_id: str
    estimated_time: int | None = Field(default=None, ge=0, description="Minutes")
    is_completed: bool = False
    completed_at: datetime | None = None
