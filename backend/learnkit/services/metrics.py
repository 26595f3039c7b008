import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import Counter, Gauge, Histogram

# Learning operation metrics
learning_operation_counter = Counter(
    "learnkit_operation_total",
    "Count of learning instance operations",
    ["kind", "operation", "status"],  # kind: bandit|optimizer, status: success|error kind
)

learning_operation_duration_histogram = Histogram(
    "learnkit_operation_duration_seconds",
    "Duration of learning instance operations in seconds",
    ["kind", "operation"],
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5],
)

live_instances_gauge = Gauge(
    "learnkit_live_instances",
    "Current number of live learning instances",
    ["kind"],
)


# Initialize series with zero values so they appear in metrics immediately
def _initialize_metrics():
    """Initialize gauges to make them visible before any instance exists"""
    for kind in ("bandit", "optimizer"):
        live_instances_gauge.labels(kind=kind).set(0)

_initialize_metrics()


@contextmanager
def track_operation(kind: str, operation: str) -> Iterator[None]:
    """Record outcome and latency of one instance operation."""
    start_time = time.perf_counter()
    status = "success"
    try:
        yield
    except Exception as exc:
        status = getattr(exc, "kind", "error")
        raise
    finally:
        learning_operation_counter.labels(kind=kind, operation=operation, status=status).inc()
        learning_operation_duration_histogram.labels(kind=kind, operation=operation).observe(
            time.perf_counter() - start_time
        )


def set_live_instances(kind: str, count: int) -> None:
    live_instances_gauge.labels(kind=kind).set(count)
