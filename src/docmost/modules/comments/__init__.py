"""Docmost Comments Module."""

from docmost.modules.comments.service import CommentsService, get_comments_service

__all__ = ["CommentsService", "get_comments_service"]
