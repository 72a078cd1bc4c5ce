"""
MCP - Call Context.

Ambient data handed to every handler next to its params.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from docmost.auth.schemas import Principal, User
from docmost.modules.mcp.errors import permission_denied

if TYPE_CHECKING:
    from docmost.modules.mcp.registry import MethodRegistry


@dataclass(frozen=True)
class McpContext:
    registry: "MethodRegistry"
    principal: Principal | None = None
    request_id: str | None = None

    @property
    def user(self) -> User | None:
        return self.principal.user if self.principal else None

    @property
    def workspace_id(self) -> str | None:
        return self.principal.workspace_id if self.principal else None

    def require_user(self) -> User:
        """
        Raises:
            McpError: -32002 when the call is anonymous
        """
        if self.principal is None:
            raise permission_denied("Authentication required")
        return self.principal.user

    def require_workspace_id(self) -> str:
        return self.require_user().workspace_id
