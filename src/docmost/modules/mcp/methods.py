"""
MCP - Registry construction.
"""

from functools import lru_cache

from docmost.modules.mcp.handlers import METHOD_TABLE
from docmost.modules.mcp.registry import MethodRegistry


def build_registry() -> MethodRegistry:
    return MethodRegistry(METHOD_TABLE)


@lru_cache(maxsize=1)
def get_registry() -> MethodRegistry:
    """Get the process-wide registry, built on first use."""
    return build_registry()
