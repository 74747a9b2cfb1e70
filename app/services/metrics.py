"""Metrics service for tracking query outcomes."""

from collections import defaultdict
from dataclasses import dataclass, field
from threading import Lock


@dataclass
class Metrics:
    """Thread-safe metrics collector for query requests."""

    _lock: Lock = field(default_factory=Lock, repr=False)
    total_queries: int = 0
    successes: int = 0
    failures: int = 0
    busy_rejections: int = 0
    sources_returned: int = 0
    total_latency_ms: float = 0.0
    _failure_kinds: dict[str, int] = field(default_factory=lambda: defaultdict(int))

    def record_success(self, latency_ms: float, source_count: int) -> None:
        """Record a successful query with latency and number of sources."""
        with self._lock:
            self.total_queries += 1
            self.successes += 1
            self.sources_returned += source_count
            self.total_latency_ms += latency_ms

    def record_failure(self, kind: str, latency_ms: float) -> None:
        """Record a failed query with its diagnostic kind."""
        with self._lock:
            self.total_queries += 1
            self.failures += 1
            self.total_latency_ms += latency_ms
            self._failure_kinds[kind] += 1

    def record_busy(self) -> None:
        """Record a submission rejected because a request was in flight."""
        with self._lock:
            self.busy_rejections += 1

    def get_stats(self) -> dict:
        """Get current statistics."""
        with self._lock:
            success_rate = (
                (self.successes / self.total_queries * 100)
                if self.total_queries > 0
                else 0.0
            )
            avg_latency = (
                (self.total_latency_ms / self.total_queries)
                if self.total_queries > 0
                else 0.0
            )
            avg_sources = (
                (self.sources_returned / self.successes)
                if self.successes > 0
                else 0.0
            )

            return {
                "total_queries": self.total_queries,
                "successes": self.successes,
                "failures": self.failures,
                "success_rate_percent": round(success_rate, 2),
                "busy_rejections": self.busy_rejections,
                "avg_latency_ms": round(avg_latency, 2),
                "avg_sources": round(avg_sources, 2),
                "failure_kinds": dict(self._failure_kinds),
            }

    def reset(self) -> None:
        """Reset all metrics."""
        with self._lock:
            self.total_queries = 0
            self.successes = 0
            self.failures = 0
            self.busy_rejections = 0
            self.sources_returned = 0
            self.total_latency_ms = 0.0
            self._failure_kinds.clear()


metrics = Metrics()
