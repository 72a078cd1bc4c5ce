"""
Docmost Pages - Schemas.
"""

from pydantic import Field

from docmost.schemas import TimestampMixin


class Page(TimestampMixin):
    """A document inside a space. Pages nest through ``parent_page_id``."""

    id: str
    workspace_id: str
    space_id: str
    parent_page_id: str | None = None
    title: str = Field(default="Untitled", max_length=500)
    content: str = ""
    icon: str | None = None
    creator_id: str
    last_updated_by_id: str | None = None
