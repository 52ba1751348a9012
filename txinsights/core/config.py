"""Configuration management for the Transaction Insights service."""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = Field(default="Transaction Insights")
    version: str = Field(default="0.1.0")
    docs_url: str | None = Field(default="/docs")
    redoc_url: str | None = Field(default="/redoc")
    openapi_url: str = Field(default="/openapi.json")

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    transactions_source_url: str = Field(
        default="https://cdn.seen.com/challenge/transactions-v2.json",
        description="Remote JSON document holding the full transaction list.",
    )
    transactions_source_timeout_seconds: float | None = Field(default=10.0)

    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    enable_metrics: bool = Field(default=True)
    enable_tracing: bool = Field(default=False)
    otel_exporter_endpoint: str | None = Field(default=None)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()


__all__ = ["Settings", "get_settings"]
