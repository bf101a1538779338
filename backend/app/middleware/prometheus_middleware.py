"""
Prometheus metrics middleware for HTTP request tracking.

Tracks request duration, status codes and in-progress requests through the
prometheus_metrics module.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..monitoring.prometheus_metrics import prometheus_metrics


def _endpoint_label(request: Request) -> str:
    # Route template keeps ULIDs out of label values: /api/bookings/{booking_id}/status
    route = request.scope.get("route")
    template = getattr(route, "path", None)
    return template or request.url.path


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to collect Prometheus metrics for HTTP requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        prometheus_metrics.track_http_request_start(method, "in_flight")

        start_time = time.time()
        try:
            response = await call_next(request)
            duration = time.time() - start_time
            prometheus_metrics.record_http_request(
                method=method,
                endpoint=_endpoint_label(request),
                duration=duration,
                status_code=response.status_code,
            )
            return response
        finally:
            prometheus_metrics.track_http_request_end(method, "in_flight")
