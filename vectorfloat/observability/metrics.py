"""Prometheus metrics & middleware for the VectorFloat service.

Collects per-endpoint request count and latency plus vector operation failures,
exposes /metrics endpoint for Prometheus.
"""
from __future__ import annotations

from fastapi import APIRouter, Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)
import time

# Prometheus metric names as constants
REQUEST_COUNT_NAME = "vectorfloat_request_total"
REQUEST_LATENCY_NAME = "vectorfloat_request_duration_seconds"
REQUEST_ERROR_COUNT_NAME = "vectorfloat_request_errors_total"
OPERATION_FAILURES_NAME = "vectorfloat_operation_failures_total"

# -----------------------------------------------------------------------------
# Metric objects
# -----------------------------------------------------------------------------
# REQUEST_COUNT: Counter for total HTTP requests, labeled by path, method, and status code.
REQUEST_COUNT = Counter(
    name=REQUEST_COUNT_NAME,
    documentation="Total HTTP requests",
    labelnames=["path", "method", "status"],
)

# REQUEST_LATENCY: Histogram for request duration (seconds), labeled by path and method.
REQUEST_LATENCY = Histogram(
    name=REQUEST_LATENCY_NAME,
    documentation="Request latency in seconds",
    labelnames=["path", "method"],
)

# REQUEST_ERROR_COUNT: Counter for error responses (status >= 400)
REQUEST_ERROR_COUNT = Counter(
    name=REQUEST_ERROR_COUNT_NAME,
    documentation="Total HTTP error responses (status >= 400)",
    labelnames=["path", "method", "status"],
)

# OPERATION_FAILURES: Counter for vector operations that reported failure
# (empty input, zero-width source range), labeled by operation name.
OPERATION_FAILURES = Counter(
    name=OPERATION_FAILURES_NAME,
    documentation="Vector operations that reported failure",
    labelnames=["operation"],
)

# -----------------------------------------------------------------------------
# ASGI middleware
# -----------------------------------------------------------------------------
# Records the start time of every HTTP request and, when the response starts,
# increments the request counters and observes the latency.
class MetricsMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        # Only instrument HTTP requests (not websockets, lifespan, etc.)
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        req = Request(scope, receive)
        started_at = time.perf_counter()

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                status_code = message["status"]
                # Use route path template if available, else fall back to the raw path
                route = scope.get("route")
                if route and hasattr(route, "path"):
                    path_template = route.path
                else:
                    path_template = scope.get("path", "")
                REQUEST_COUNT.labels(path_template, req.method, status_code).inc()
                if int(status_code) >= 400:
                    REQUEST_ERROR_COUNT.labels(path_template, req.method, status_code).inc()
                REQUEST_LATENCY.labels(path_template, req.method).observe(time.perf_counter() - started_at)
            await send(message)

        await self.app(scope, receive, send_wrapper)

# -----------------------------------------------------------------------------
# /metrics endpoint
# -----------------------------------------------------------------------------
metrics_router = APIRouter()

@metrics_router.get("/metrics")
async def metrics():
    # Expose Prometheus metrics in plaintext format (Prometheus scrapes this endpoint)
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
