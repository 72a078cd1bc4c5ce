"""
Offset pagination over in-memory result lists.

List methods accept ``page`` (1-based) and ``limit`` and answer with
``{"items": [...], "meta": {"page", "limit", "total", "hasNextPage"}}``.
"""

from collections.abc import Sequence
from typing import Any

from docmost.schemas import CamelModel, PaginationMeta

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100


def paginate(
    items: Sequence[CamelModel],
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
) -> dict[str, Any]:
    """Slice ``items`` and serialize the requested page."""
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_LIMIT)
    start = (page - 1) * limit
    chunk = items[start : start + limit]

    meta = PaginationMeta(
        page=page,
        limit=limit,
        total=len(items),
        has_next_page=start + limit < len(items),
    )
    return {
        "items": [item.to_payload() for item in chunk],
        "meta": meta.to_payload(),
    }
