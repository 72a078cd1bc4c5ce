"""Docmost Pages Module."""

from docmost.modules.pages.service import PagesService, get_pages_service

__all__ = ["PagesService", "get_pages_service"]
