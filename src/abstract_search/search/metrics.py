"""Latency and result-count metrics for comparing search strategies."""

from collections import defaultdict, deque
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
import time


@dataclass
class SearchMetrics:
    """Search operation metrics."""

    strategy: str
    latency_ms: float
    result_count: int
    query_terms: int = 0


@dataclass
class Timer:
    """Elapsed time of a ``track`` block, filled in when the block exits."""

    elapsed_ms: float = 0.0


class MetricsCollector:
    """Lightweight metrics collector for search operations."""

    def __init__(self, window_size: int = 1000):
        self.window_size = window_size
        self._metrics: deque[SearchMetrics] = deque(maxlen=window_size)

    @contextmanager
    def track(self) -> Iterator[Timer]:
        """Time the enclosed block in milliseconds."""
        timer = Timer()
        start = time.perf_counter()
        try:
            yield timer
        finally:
            timer.elapsed_ms = (time.perf_counter() - start) * 1000

    def record_search(self, metrics: SearchMetrics):
        """Record search operation metrics."""
        self._metrics.append(metrics)

    def get_stats(self) -> dict:
        """Per-strategy statistics over the current window."""
        by_strategy: defaultdict[str, list[SearchMetrics]] = defaultdict(list)
        for metrics in self._metrics:
            by_strategy[metrics.strategy].append(metrics)

        stats = {}
        for strategy, records in by_strategy.items():
            latencies = sorted(m.latency_ms for m in records)
            result_counts = [m.result_count for m in records]
            stats[strategy] = {
                "count": len(records),
                "latency": {
                    "mean": sum(latencies) / len(latencies),
                    "p95": latencies[int(len(latencies) * 0.95)],
                    "max": latencies[-1],
                },
                "results": {
                    "mean": sum(result_counts) / len(result_counts),
                    "empty_rate": result_counts.count(0) / len(result_counts),
                },
            }
        return stats

    def reset(self):
        """Reset all metrics."""
        self._metrics.clear()
