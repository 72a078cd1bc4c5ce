"""Docmost - Machine Control Protocol gateway."""

__version__ = "1.0.0"
