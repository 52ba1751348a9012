"""FastAPI application entrypoint."""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from txinsights.api.errors import failure_response, register_exception_handlers
from txinsights.api.routes import register_routes
from txinsights.core.config import Settings, get_settings
from txinsights.core.logging import configure_logging
from txinsights.obs import (
    AccessLogMiddleware,
    PrometheusMiddleware,
    initialise_tracing,
    instrument_fastapi_app,
    metrics_router,
)


def create_application(settings: Settings | None = None) -> FastAPI:
    """Application factory used by ASGI servers and tests."""
    configure_logging()
    settings = settings or get_settings()

    if settings.enable_tracing:
        initialise_tracing(service_name=settings.app_name, endpoint=settings.otel_exporter_endpoint)

    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
    )
    application.dependency_overrides[get_settings] = lambda: settings

    application.add_middleware(AccessLogMiddleware, error_handler=failure_response)
    if settings.enable_metrics:
        application.add_middleware(PrometheusMiddleware)
        application.include_router(metrics_router)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(application)
    register_routes(application)

    if settings.enable_tracing:
        instrument_fastapi_app(application)

    return application


app = create_application()
