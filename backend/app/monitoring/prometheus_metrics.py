"""
Prometheus metrics module for the mentorship booking backend.

Service-operation metrics are fed by the ``@measure_operation`` decorator;
HTTP metrics by ``PrometheusMiddleware``; booking-specific counters by the
booking service. All series live in a dedicated registry.
"""

from typing import Optional, cast

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

# Create a custom registry to avoid conflicts with default metrics
REGISTRY = CollectorRegistry()

http_request_duration_seconds = Histogram(
    "mentorship_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint", "status_code"],
    registry=REGISTRY,
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_requests_total = Counter(
    "mentorship_http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"],
    registry=REGISTRY,
)

http_requests_in_progress = Gauge(
    "mentorship_http_requests_in_progress",
    "Number of HTTP requests currently being processed",
    ["method", "endpoint"],
    registry=REGISTRY,
)

service_operation_duration_seconds = Histogram(
    "mentorship_service_operation_duration_seconds",
    "Service operation duration in seconds",
    ["service", "operation"],
    registry=REGISTRY,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

service_operations_total = Counter(
    "mentorship_service_operations_total",
    "Total number of service operations",
    ["service", "operation", "status"],
    registry=REGISTRY,
)

errors_total = Counter(
    "mentorship_errors_total",
    "Total number of errors",
    ["service", "operation", "error_type"],
    registry=REGISTRY,
)

# Booking engine
booking_conflicts_total = Counter(
    "mentorship_booking_conflicts_total",
    "Booking attempts rejected because the slot was taken",
    ["source"],  # check | constraint
    registry=REGISTRY,
)

booking_lock_wait_seconds = Histogram(
    "mentorship_booking_lock_wait_seconds",
    "Time spent waiting for the per-mentor booking lock",
    ["backend"],  # advisory | local
    registry=REGISTRY,
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
)

booking_status_transitions_total = Counter(
    "mentorship_booking_status_transitions_total",
    "Applied booking status transitions",
    ["from_status", "to_status"],
    registry=REGISTRY,
)

notifications_total = Counter(
    "mentorship_notifications_total",
    "Notification dispatch outcomes",
    ["event_type", "status"],  # status: sent | error
    registry=REGISTRY,
)


class PrometheusMetrics:
    """Recording helpers plus the exposition payload for ``/metrics``."""

    @staticmethod
    def record_http_request(method: str, endpoint: str, duration: float, status_code: int) -> None:
        labels = {"method": method, "endpoint": endpoint, "status_code": str(status_code)}
        http_request_duration_seconds.labels(**labels).observe(duration)
        http_requests_total.labels(**labels).inc()

    @staticmethod
    def track_http_request_start(method: str, endpoint: str) -> None:
        http_requests_in_progress.labels(method=method, endpoint=endpoint).inc()

    @staticmethod
    def track_http_request_end(method: str, endpoint: str) -> None:
        http_requests_in_progress.labels(method=method, endpoint=endpoint).dec()

    @staticmethod
    def record_service_operation(
        service: str,
        operation: str,
        duration: float,
        status: str = "success",
        error_type: Optional[str] = None,
    ) -> None:
        """
        Record one ``@measure_operation`` call.

        Args:
            service: Service class name (e.g., 'BookingService')
            operation: Operation name (e.g., 'create_booking')
            duration: Wall time in seconds
            status: 'success' or 'error'
            error_type: Exception class name when status is 'error'
        """
        service_operation_duration_seconds.labels(service=service, operation=operation).observe(
            duration
        )
        service_operations_total.labels(service=service, operation=operation, status=status).inc()
        if status == "error" and error_type:
            errors_total.labels(service=service, operation=operation, error_type=error_type).inc()

    @staticmethod
    def inc_booking_conflict(source: str = "check") -> None:
        booking_conflicts_total.labels(source=source).inc()

    @staticmethod
    def observe_booking_lock_wait(backend: str, duration: float) -> None:
        booking_lock_wait_seconds.labels(backend=backend).observe(max(duration, 0.0))

    @staticmethod
    def inc_status_transition(from_status: str, to_status: str) -> None:
        booking_status_transitions_total.labels(
            from_status=from_status, to_status=to_status
        ).inc()

    @staticmethod
    def record_notification_outcome(event_type: str, status: str) -> None:
        notifications_total.labels(event_type=event_type, status=status).inc()

    @staticmethod
    def get_metrics() -> bytes:
        return cast(bytes, generate_latest(REGISTRY))

    @staticmethod
    def get_content_type() -> str:
        return cast(str, CONTENT_TYPE_LATEST)


prometheus_metrics = PrometheusMetrics()
