"""
Docmost Observability Module.

Provides in-process metrics collection for gateway methods and errors.
"""

from docmost.observability.metrics import MetricsStore, get_metrics_store

__all__ = ["MetricsStore", "get_metrics_store"]
