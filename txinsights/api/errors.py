"""Exception handlers translating failures into the service's JSON error bodies."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from txinsights.services.errors import TransactionInsightsError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong!"
ROUTE_NOT_FOUND_MESSAGE = "Route not found"


def failure_response(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "request failed",
        exc_info=exc,
        extra={"path": request.url.path, "request_id": getattr(request.state, "request_id", None)},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": GENERIC_ERROR_MESSAGE, "error": str(exc)},
    )


async def handle_service_error(request: Request, exc: TransactionInsightsError) -> JSONResponse:
    return failure_response(request, exc)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    return failure_response(request, exc)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(status_code=exc.status_code, content={"message": ROUTE_NOT_FOUND_MESSAGE})
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(application: FastAPI) -> None:
    """Install the service's exception handlers on ``application``."""
    application.add_exception_handler(TransactionInsightsError, handle_service_error)  # type: ignore[arg-type]
    application.add_exception_handler(StarletteHTTPException, handle_http_exception)  # type: ignore[arg-type]
    application.add_exception_handler(Exception, handle_unexpected_error)


__all__ = [
    "GENERIC_ERROR_MESSAGE",
    "ROUTE_NOT_FOUND_MESSAGE",
    "failure_response",
    "register_exception_handlers",
]
