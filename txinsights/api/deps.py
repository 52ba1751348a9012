"""Common dependencies for API routes."""
from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends

from txinsights.core.config import Settings, get_settings
from txinsights.schemas import Transaction
from txinsights.services.transaction_source import TransactionSourceClient


def get_transaction_source(settings: Settings = Depends(get_settings)) -> Iterator[TransactionSourceClient]:
    """Yield a transaction source client for FastAPI dependencies."""

    source = TransactionSourceClient(
        settings.transactions_source_url,
        timeout=settings.transactions_source_timeout_seconds,
    )
    try:
        yield source
    finally:
        source.close()


def get_transactions(source: TransactionSourceClient = Depends(get_transaction_source)) -> list[Transaction]:
    """Fetch the full transaction list once per request."""

    return source.fetch_transactions()


__all__ = ["get_transaction_source", "get_transactions"]
