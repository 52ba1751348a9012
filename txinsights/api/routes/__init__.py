"""Top level API router registration."""
from fastapi import APIRouter, FastAPI

from txinsights.api.routes import customers, health, transactions


def register_routes(application: FastAPI) -> None:
    """Register all API routers with the FastAPI application."""
    api_router = APIRouter(prefix="/api")

    api_router.include_router(health.router, tags=["health"])
    api_router.include_router(transactions.router, tags=["transactions"])
    api_router.include_router(customers.router, tags=["customers"])

    application.include_router(health.root_router, tags=["health"])
    application.include_router(api_router)


__all__ = ["register_routes"]
