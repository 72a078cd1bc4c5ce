"""Docmost Workspace Module - Workspaces and their members."""

from docmost.modules.workspace.service import WorkspaceService, get_workspace_service

__all__ = ["WorkspaceService", "get_workspace_service"]
