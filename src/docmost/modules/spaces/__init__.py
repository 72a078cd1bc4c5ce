"""Docmost Spaces Module."""

from docmost.modules.spaces.service import SpacesService, get_spaces_service

__all__ = ["SpacesService", "get_spaces_service"]
