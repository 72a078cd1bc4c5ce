"""
MCP Handlers - Tasks.
"""

from typing import Any

from docmost.auth.schemas import PermissionLevel
from docmost.core.pagination import paginate
from docmost.modules.mcp.context import McpContext
from docmost.modules.mcp.params import (
    PAGINATION,
    array,
    boolean,
    identifier,
    integer,
    obj,
    page_args,
    parse_timestamp,
    string,
    timestamp,
)
from docmost.modules.mcp.registry import MethodDescriptor
from docmost.modules.tasks.schemas import TaskPriority, TaskStatus
from docmost.modules.tasks.service import get_tasks_service

TASK_ID = identifier("Task ID")
STATUS = string("Task status", enum=[s.value for s in TaskStatus])
PRIORITY = string("Task priority", enum=[p.value for p in TaskPriority])
TASK_FIELDS = {
    "title": string("Task title", min_length=1, max_length=500),
    "description": string("Task description"),
    "status": STATUS,
    "priority": PRIORITY,
    "dueDate": timestamp("Due date (ISO 8601)"),
    "estimatedTime": integer("Estimated time in minutes", minimum=0),
    "pageId": identifier("Linked page ID"),
}


def _enum(enum_cls, value):
    return enum_cls(value) if value is not None else None


async def list_tasks(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    statuses = [TaskStatus(s) for s in params.get("status", [])]
    tasks = await get_tasks_service().list_tasks(
        context.require_workspace_id(),
        project_id=params.get("projectId"),
        space_id=params.get("spaceId"),
        statuses=statuses or None,
        search_term=params.get("searchTerm"),
    )
    return paginate(tasks, *page_args(params))


async def get_task(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    task = await get_tasks_service().get_task(params["taskId"], context.require_workspace_id())
    return task.to_payload()


async def create_task(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    task = await get_tasks_service().create_task(
        context.require_user(),
        space_id=params["spaceId"],
        title=params["title"],
        description=params.get("description"),
        status=TaskStatus(params.get("status", TaskStatus.TODO.value)),
        priority=TaskPriority(params.get("priority", TaskPriority.MEDIUM.value)),
        project_id=params.get("projectId"),
        parent_task_id=params.get("parentTaskId"),
        page_id=params.get("pageId"),
        assignee_id=params.get("assigneeId"),
        due_date=parse_timestamp(params, "dueDate"),
        estimated_time=params.get("estimatedTime"),
    )
    return task.to_payload()


async def update_task(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    task = await get_tasks_service().update_task(
        params["taskId"],
        context.require_workspace_id(),
        title=params.get("title"),
        description=params.get("description"),
        status=_enum(TaskStatus, params.get("status")),
        priority=_enum(TaskPriority, params.get("priority")),
        due_date=parse_timestamp(params, "dueDate"),
        estimated_time=params.get("estimatedTime"),
        page_id=params.get("pageId"),
    )
    return task.to_payload()


async def delete_task(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    deleted = await get_tasks_service().delete_task(params["taskId"], context.require_workspace_id())
    return {"success": True, "deleted": deleted}


async def assign_task(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    task = await get_tasks_service().assign_task(
        params["taskId"], context.require_workspace_id(), params.get("assigneeId")
    )
    return task.to_payload()


async def complete_task(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    task = await get_tasks_service().complete_task(
        params["taskId"], context.require_workspace_id(), params.get("isCompleted", True)
    )
    return task.to_payload()


async def move_to_project(params: dict[str, Any], context: McpContext) -> dict[str, Any]:
    task = await get_tasks_service().move_to_project(
        params["taskId"], context.require_workspace_id(), params.get("projectId")
    )
    return task.to_payload()


METHODS = (
    MethodDescriptor(
        name="task.list",
        description=(
            "List tasks of a project or a space, highest priority first. "
            "Filter by status and by a search term on title and description."
        ),
        params_schema=obj(
            {
                "projectId": identifier("Project ID"),
                "spaceId": identifier("Space ID"),
                "status": array(STATUS, "Only tasks in these statuses"),
                "searchTerm": string("Text to search for", min_length=1),
                **PAGINATION,
            }
        ),
        handler=list_tasks,
        permission=PermissionLevel.READ,
    ),
    MethodDescriptor(
        name="task.get",
        description="Get a task by ID.",
        params_schema=obj({"taskId": TASK_ID}, ["taskId"]),
        handler=get_task,
        permission=PermissionLevel.READ,
    ),
    MethodDescriptor(
        name="task.create",
        description=(
            "Create a task in a space. Status defaults to todo and priority to medium. "
            "The project, parent task and page must belong to the same space."
        ),
        params_schema=obj(
            {
                "spaceId": identifier("Space ID"),
                "projectId": identifier("Project ID"),
                "parentTaskId": identifier("Parent task ID"),
                "assigneeId": identifier("Assignee user ID"),
                **TASK_FIELDS,
            },
            ["spaceId", "title"],
        ),
        handler=create_task,
        permission=PermissionLevel.WRITE,
    ),
    MethodDescriptor(
        name="task.update",
        description="Update a task. Setting status to done marks it completed; leaving done reopens it.",
        params_schema=obj({"taskId": TASK_ID, **TASK_FIELDS}, ["taskId"]),
        handler=update_task,
        permission=PermissionLevel.WRITE,
    ),
    MethodDescriptor(
        name="task.delete",
        description="Delete a task and its subtasks.",
        params_schema=obj({"taskId": TASK_ID}, ["taskId"]),
        handler=delete_task,
        permission=PermissionLevel.WRITE,
    ),
    MethodDescriptor(
        name="task.assign",
        description="Assign a task to a workspace member. Omit assigneeId to unassign.",
        params_schema=obj({"taskId": TASK_ID, "assigneeId": identifier("Assignee user ID")}, ["taskId"]),
        handler=assign_task,
        permission=PermissionLevel.WRITE,
    ),
    MethodDescriptor(
        name="task.complete",
        description="Mark a task as done, or reopen it with isCompleted=false.",
        params_schema=obj(
            {"taskId": TASK_ID, "isCompleted": boolean("Complete (true) or reopen (false)", default=True)},
            ["taskId"],
        ),
        handler=complete_task,
        permission=PermissionLevel.WRITE,
    ),
    MethodDescriptor(
        name="task.moveToProject",
        description="Move a task onto a project board in its space. Omit projectId to take it off any board.",
        params_schema=obj({"taskId": TASK_ID, "projectId": identifier("Target project ID")}, ["taskId"]),
        handler=move_to_project,
        permission=PermissionLevel.WRITE,
    ),
)
