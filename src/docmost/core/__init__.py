"""Docmost Core - Shared infrastructure for the gateway and domain modules."""
