"""
Docmost Spaces - Schemas.
"""

from pydantic import Field

from docmost.schemas import TimestampMixin


class Space(TimestampMixin):
    """A top-level container for pages and projects."""

    id: str
    workspace_id: str
    name: str = Field(..., min_length=1, max_length=255)
    slug: str
    description: str | None = None
    creator_id: str
