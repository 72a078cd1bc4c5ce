"""
Docmost Metrics Store.

Process-local counters for the MCP gateway:
- per-method call counts and a rolling latency window
- per-method error counts, keyed by JSON-RPC error code
- errors that never resolved to a method (parse errors, unknown methods)
- batch sizes

Handlers may run in worker threads, so every mutation takes the store lock.
"""

from __future__ import annotations

import math
import threading
from collections import Counter, deque
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

LATENCY_WINDOW = 1000


def _percentile(ordered: list[float], fraction: float) -> float:
    """Nearest-rank percentile over an already sorted, non-empty window."""
    rank = max(1, math.ceil(fraction * len(ordered)))
    return ordered[rank - 1]


class MethodStats:
    """Counters for one registered method."""

    __slots__ = ("calls", "errors", "window", "last_called")

    def __init__(self):
        self.calls = 0
        self.errors: Counter[str] = Counter()
        self.window: deque[float] = deque(maxlen=LATENCY_WINDOW)
        self.last_called: datetime | None = None

    def observe(self, ms: float) -> None:
        self.calls += 1
        self.window.append(ms)
        self.last_called = datetime.now(timezone.utc)

    def snapshot(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "call_count": self.calls,
            "last_called": self.last_called.isoformat() if self.last_called else None,
            "errors": dict(self.errors),
        }
        if self.window:
            ordered = sorted(self.window)
            data.update(
                p50_ms=_percentile(ordered, 0.50),
                p90_ms=_percentile(ordered, 0.90),
                p99_ms=_percentile(ordered, 0.99),
                mean_ms=round(sum(ordered) / len(ordered), 3),
                max_ms=ordered[-1],
            )
        return data


class MetricsStore:
    """Gateway metrics shared by the dispatcher and the metrics endpoint."""

    def __init__(self):
        self._lock = threading.Lock()
        self.reset()

    def record_method_latency(self, method: str, ms: float) -> None:
        with self._lock:
            self._stats(method).observe(ms)

    def record_method_error(self, method: str, code: int | str) -> None:
        """Count a failed call against its method and the global tally."""
        with self._lock:
            self._stats(method).errors[str(code)] += 1
            self._errors[str(code)] += 1

    def record_error(self, code: int | str) -> None:
        """Count a failure that has no registered method to charge."""
        with self._lock:
            self._errors[str(code)] += 1

    def record_batch(self, size: int) -> None:
        with self._lock:
            self._batches += 1
            self._batch_elements += size
            self._largest_batch = max(self._largest_batch, size)

    def get_summary(self) -> dict[str, Any]:
        """JSON-ready snapshot served by ``GET /api/mcp/metrics``."""
        with self._lock:
            now = datetime.now(timezone.utc)
            return {
                "uptime_seconds": round((now - self._started_at).total_seconds(), 1),
                "collected_at": now.isoformat(),
                "calls_total": sum(s.calls for s in self._methods.values()),
                "methods": {name: stats.snapshot() for name, stats in sorted(self._methods.items())},
                "global_errors": dict(self._errors),
                "batches": {
                    "count": self._batches,
                    "elements_total": self._batch_elements,
                    "largest": self._largest_batch,
                },
            }

    def reset(self) -> None:
        with self._lock:
            self._methods: dict[str, MethodStats] = {}
            self._errors: Counter[str] = Counter()
            self._batches = 0
            self._batch_elements = 0
            self._largest_batch = 0
            self._started_at = datetime.now(timezone.utc)

    def _stats(self, method: str) -> MethodStats:
        stats = self._methods.get(method)
        if stats is None:
            stats = self._methods[method] = MethodStats()
        return stats


@lru_cache(maxsize=1)
def get_metrics_store() -> MetricsStore:
    """Get the global MetricsStore singleton."""
    return MetricsStore()
