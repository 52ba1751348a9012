"""Observability utilities."""

from .access_log import REQUEST_ID_HEADER, AccessLogMiddleware, AccessLogRecord
from .metrics import (
    REQUEST_COUNTER,
    REQUEST_ERROR_COUNTER,
    REQUEST_LATENCY_SECONDS,
    UPSTREAM_FETCH_FAILURE_COUNTER,
    UNMATCHED_PATH_LABEL,
    UPSTREAM_FETCH_LATENCY_SECONDS,
    PrometheusMiddleware,
    metrics_router,
    record_upstream_failure,
)
from .tracing import initialise_tracing, instrument_fastapi_app, service_span

__all__ = [
    "AccessLogMiddleware",
    "AccessLogRecord",
    "PrometheusMiddleware",
    "REQUEST_COUNTER",
    "REQUEST_ERROR_COUNTER",
    "REQUEST_ID_HEADER",
    "REQUEST_LATENCY_SECONDS",
    "UPSTREAM_FETCH_FAILURE_COUNTER",
    "UNMATCHED_PATH_LABEL",
    "UPSTREAM_FETCH_LATENCY_SECONDS",
    "initialise_tracing",
    "instrument_fastapi_app",
    "metrics_router",
    "record_upstream_failure",
    "service_span",
]
