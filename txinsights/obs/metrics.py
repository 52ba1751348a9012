"""Prometheus metrics utilities for the API process."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

from fastapi import APIRouter, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match

REQUEST_LATENCY_SECONDS = Histogram(
    "http_request_latency_seconds",
    "Latency of HTTP requests in seconds.",
    labelnames=("method", "path"),
)
REQUEST_COUNTER = Counter(
    "http_requests_total",
    "Total number of HTTP requests processed.",
    labelnames=("method", "path", "status"),
)
REQUEST_ERROR_COUNTER = Counter(
    "http_request_errors_total",
    "Total number of HTTP requests that resulted in server errors.",
    labelnames=("method", "path", "status"),
)
UPSTREAM_FETCH_LATENCY_SECONDS = Histogram(
    "transaction_source_fetch_latency_seconds",
    "Latency of fetches against the remote transaction source.",
)
UPSTREAM_FETCH_FAILURE_COUNTER = Counter(
    "transaction_source_fetch_failures_total",
    "Count of failed fetches against the remote transaction source.",
    labelnames=("reason",),
)


UNMATCHED_PATH_LABEL = "<unmatched>"


def _route_template(request: Request) -> str:
    """Return the matched route template, never the raw request path."""
    route = request.scope.get("route")
    if route is None:
        for candidate in request.app.router.routes:
            match, _ = candidate.matches(request.scope)
            if match == Match.FULL:
                route = candidate
                break
    return getattr(route, "path", None) or UNMATCHED_PATH_LABEL


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware that records request metrics for Prometheus scraping."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:  # type: ignore[override]
        method = request.method
        path = _route_template(request)
        start_time = time.perf_counter()
        status = "500"

        try:
            response = await call_next(request)
            status = str(response.status_code)
            if response.status_code >= 500:
                REQUEST_ERROR_COUNTER.labels(method=method, path=path, status=status).inc()
            return response
        except Exception:
            REQUEST_ERROR_COUNTER.labels(method=method, path=path, status="500").inc()
            raise
        finally:
            latency = time.perf_counter() - start_time
            REQUEST_LATENCY_SECONDS.labels(method=method, path=path).observe(latency)
            REQUEST_COUNTER.labels(method=method, path=path, status=status).inc()


metrics_router = APIRouter(tags=["observability"])


@metrics_router.get("/metrics", include_in_schema=False)
def metrics_endpoint() -> Response:
    """Expose Prometheus metrics for scraping."""
    payload = generate_latest()
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)


def record_upstream_failure(reason: str) -> None:
    """Count a failed fetch of the transaction source under ``reason``."""
    UPSTREAM_FETCH_FAILURE_COUNTER.labels(reason=reason).inc()


__all__ = [
    "PrometheusMiddleware",
    "REQUEST_COUNTER",
    "REQUEST_ERROR_COUNTER",
    "REQUEST_LATENCY_SECONDS",
    "UPSTREAM_FETCH_FAILURE_COUNTER",
    "UPSTREAM_FETCH_LATENCY_SECONDS",
    "UNMATCHED_PATH_LABEL",
    "metrics_endpoint",
    "metrics_router",
    "record_upstream_failure",
]
