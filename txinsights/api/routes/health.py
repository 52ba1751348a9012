"""Welcome, health and readiness endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from txinsights.core.config import Settings, get_settings

router = APIRouter()
root_router = APIRouter()


@root_router.get("/", summary="Service welcome message")
def welcome(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    return {"message": f"Welcome to the {settings.app_name} API!"}


@router.get("/healthz", summary="Liveness check")
def health_check(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    return {"status": "ok", "service": settings.app_name}


@router.get("/readyz", summary="Readiness check")
def readiness_check(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    return {"status": "ready", "service": settings.app_name}
