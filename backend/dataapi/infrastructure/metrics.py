"""Request Metrics — per-endpoint outcome counters and latency summary (prometheus_client).

Invariants:
    - One counter series per (status, method); status is one of REQUEST_STATUSES
    - Latency observed in milliseconds, labelled by method
    - Each Metrics instance owns its CollectorRegistry (no global registry leakage)

Design Decisions:
    - prometheus_client metrics are thread-safe; concurrent requests increment
      without any locking in the handlers
    - Summary without quantiles: count and sum per method
"""

from prometheus_client import CollectorRegistry, Counter, Summary

NAMESPACE = "eigenda_dataapi"

STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"
STATUS_INVALID_ARGS = "invalid_args"
STATUS_NOT_FOUND = "not_found"

REQUEST_STATUSES = (
    STATUS_SUCCESS, STATUS_FAILED, STATUS_INVALID_ARGS, STATUS_NOT_FOUND,
)


class Metrics:
    """Request outcome and latency recorder shared by all request tasks."""

    def __init__(self, registry: CollectorRegistry | None = None):
        self.registry = registry or CollectorRegistry()
        self.num_requests = Counter(
            "requests",
            "the number of requests",
            labelnames=("status", "method"),
            namespace=NAMESPACE,
            registry=self.registry,
        )
        self.latency = Summary(
            "request_latency_ms",
            "latency summary in milliseconds",
            labelnames=("method",),
            namespace=NAMESPACE,
            registry=self.registry,
        )

    def increment_successful_request_num(self, method: str) -> None:
        self.num_requests.labels(status=STATUS_SUCCESS, method=method).inc()

    def increment_failed_request_num(self, method: str) -> None:
        self.num_requests.labels(status=STATUS_FAILED, method=method).inc()

    def increment_invalid_arg_request_num(self, method: str) -> None:
        self.num_requests.labels(status=STATUS_INVALID_ARGS, method=method).inc()

    def increment_not_found_request_num(self, method: str) -> None:
        self.num_requests.labels(status=STATUS_NOT_FOUND, method=method).inc()

    def observe_latency(self, method: str, latency_ms: float) -> None:
        self.latency.labels(method=method).observe(latency_ms)

    def request_count(self, method: str, status: str) -> float:
        """Current counter value for (method, status); 0 if never incremented."""
        value = self.registry.get_sample_value(
            f"{NAMESPACE}_requests_total",
            {"status": status, "method": method},
        )
        return value or 0.0

    def latency_count(self, method: str) -> float:
        value = self.registry.get_sample_value(
            f"{NAMESPACE}_request_latency_ms_count", {"method": method},
        )
        return value or 0.0
