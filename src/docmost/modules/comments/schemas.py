"""
Docmost Comments - Schemas.
"""

from datetime import datetime

from pydantic import Field

from docmost.schemas import CamelModel


class Comment(CamelModel):
    """A comment on a page. Replies point at a top-level comment."""

    id: str
    workspace_id: str
    page_id: str
    parent_comment_id: str | None = None
    content: str = Field(..., min_length=1)
    selection: str | None = Field(default=None, description="Quoted page text the comment refers to")
    creator_id: str
    created_at: datetime
    edited_at: datetime | None = None
    resolved_at: datetime | None = None
    resolved_by_id: str | None = None
