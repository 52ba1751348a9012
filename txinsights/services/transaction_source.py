"""HTTP client wrapper for the remote transaction document."""
from __future__ import annotations

import logging
import time
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from txinsights.obs import UPSTREAM_FETCH_LATENCY_SECONDS, record_upstream_failure, service_span
from txinsights.schemas import Transaction
from txinsights.services.errors import DataFormatError, UpstreamFetchError

logger = logging.getLogger(__name__)

_TRANSACTION_LIST = TypeAdapter(list[Transaction])


def parse_transactions(payload: Any) -> list[Transaction]:
    """Validate a decoded JSON document into ``Transaction`` records."""

    if not isinstance(payload, list):
        raise UpstreamFetchError(
            f"Transaction source returned {type(payload).__name__}, expected a JSON array"
        )
    try:
        return _TRANSACTION_LIST.validate_python(payload)
    except ValidationError as exc:
        raise DataFormatError(f"Malformed transaction record: {exc}") from exc


class TransactionSourceClient:
    """Synchronous wrapper around the remote transaction JSON document."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float | None = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._client = client or httpx.Client()
        self._owns_client = client is None

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "TransactionSourceClient":
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    def fetch_transactions(self) -> list[Transaction]:
        """Download and parse the full transaction list."""

        with service_span("transactions.fetch", url=self._url):
            start = time.perf_counter()
            try:
                response = self._client.get(self._url, timeout=self._timeout)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                record_upstream_failure("status")
                logger.warning("transaction source answered %s", exc.response.status_code)
                raise UpstreamFetchError(str(exc)) from exc
            except httpx.HTTPError as exc:
                record_upstream_failure("transport")
                logger.warning("transaction source unreachable: %s", exc)
                raise UpstreamFetchError(str(exc) or type(exc).__name__) from exc
            finally:
                UPSTREAM_FETCH_LATENCY_SECONDS.observe(time.perf_counter() - start)

            try:
                payload = response.json()
            except ValueError as exc:
                record_upstream_failure("decode")
                raise UpstreamFetchError("Transaction source returned invalid JSON") from exc

            transactions = parse_transactions(payload)
            logger.debug("fetched %d transactions", len(transactions))
            return transactions


__all__ = ["TransactionSourceClient", "parse_transactions"]
