"""Docmost Tasks Module."""

from docmost.modules.tasks.service import TasksService, get_tasks_service

__all__ = ["TasksService", "get_tasks_service"]
