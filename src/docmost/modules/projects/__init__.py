"""Docmost Projects Module."""

from docmost.modules.projects.service import ProjectsService, get_projects_service

__all__ = ["ProjectsService", "get_projects_service"]
