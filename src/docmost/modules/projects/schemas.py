"""
Docmost Projects - Schemas.
"""

from pydantic import Field

from docmost.schemas import TimestampMixin


class Project(TimestampMixin):
    """A task board inside a space."""

    id: str
    workspace_id: str
    space_id: str
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    icon: str | None = None
    color: str | None = None
    creator_id: str
    is_archived: bool = False
