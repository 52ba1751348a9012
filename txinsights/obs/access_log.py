"""Request access logging middleware."""
from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

REQUEST_ID_HEADER = "X-Request-ID"


@dataclass(slots=True)
class AccessLogRecord:
    """Structured log entry emitted once per request."""

    timestamp: str
    request_id: str
    method: str
    path: str
    status: int
    duration_ms: float
    customer_id: str | None
    ip_address: str | None
    query: dict[str, Any]

    def to_json(self) -> str:
        payload = {
            "timestamp": self.timestamp,
            "request_id": self.request_id,
            "method": self.method,
            "path": self.path,
            "status": self.status,
            "duration_ms": round(self.duration_ms, 2),
            "customer_id": self.customer_id,
            "ip_address": self.ip_address,
            "query": self.query,
        }
        return json.dumps(payload, default=str)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that tags requests with an id and logs their outcome."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        logger: logging.Logger | None = None,
        error_handler: Callable[[Request, Exception], Response] | None = None,
    ) -> None:
        super().__init__(app)
        self._logger = logger or logging.getLogger("access")
        self._error_handler = error_handler

    async def dispatch(self, request: Request, call_next: Callable[[Request], Any]) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.request_id = request_id
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            if self._error_handler is None:
                raise
            response = self._error_handler(request, exc)

        duration_ms = (time.perf_counter() - start) * 1000
        record = AccessLogRecord(
            timestamp=datetime.now(timezone.utc).isoformat(),
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=duration_ms,
            customer_id=request.path_params.get("customer_id"),
            ip_address=request.client.host if request.client else None,
            query=dict(request.query_params.multi_items()),
        )
        self._logger.info(record.to_json())

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


__all__ = ["AccessLogMiddleware", "AccessLogRecord", "REQUEST_ID_HEADER"]
