"""Docmost Modules - All application modules."""
