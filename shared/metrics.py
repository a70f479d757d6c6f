"""
Shared metrics configuration for the Storefront Access Client.
"""

from typing import Any, Dict, Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest


class GatewayMetrics:
    """Prometheus metrics for gateway calls.

    Each collector owns its registry unless one is passed in, so several
    gateways can live in one process without duplicate registration.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry if registry is not None else CollectorRegistry()
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up gateway metrics."""
        self._metrics["requests_total"] = Counter(
            "storefront_requests_total",
            "Total gateway requests",
            ["method", "outcome", "status_code"],
            registry=self.registry
        )

        self._metrics["request_duration_seconds"] = Histogram(
            "storefront_request_duration_seconds",
            "Gateway request duration in seconds",
            ["method"],
            registry=self.registry
        )

        self._metrics["session_teardowns_total"] = Counter(
            "storefront_session_teardowns_total",
            "Total session teardowns after authentication failures",
            registry=self.registry
        )

    def record_request(self, method: str, success: bool, status_code: Optional[int], duration: float):
        """Record one completed gateway call."""
        self._metrics["requests_total"].labels(
            method=method,
            outcome="success" if success else "failure",
            status_code=str(status_code) if status_code is not None else "none"
        ).inc()

        self._metrics["request_duration_seconds"].labels(method=method).observe(duration)

    def record_teardown(self):
        """Record a session teardown."""
        self._metrics["session_teardowns_total"].inc()

    def sample(self, name: str, labels: Optional[Dict[str, str]] = None) -> Optional[float]:
        """Read a sample value from the registry."""
        return self.registry.get_sample_value(name, labels or {})

    def export(self) -> bytes:
        """Render the registry in Prometheus text format."""
        return generate_latest(self.registry)
