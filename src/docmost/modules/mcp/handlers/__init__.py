"""
MCP Handlers.

One module per domain, each exporting a ``METHODS`` tuple. ``METHOD_TABLE``
is the fixed enumeration the registry is built from.
"""

from docmost.modules.mcp.handlers import comments, pages, projects, spaces, system, tasks, users

METHOD_TABLE = (
    *system.METHODS,
    *users.METHODS,
    *spaces.METHODS,
    *pages.METHODS,
    *comments.METHODS,
    *projects.METHODS,
    *tasks.METHODS,
)

__all__ = ["METHOD_TABLE"]
