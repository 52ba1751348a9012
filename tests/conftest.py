from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
import sys
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from txinsights.api.deps import get_transaction_source, get_transactions
from txinsights.main import app
from txinsights.schemas import Transaction
from txinsights.services.transaction_source import TransactionSourceClient

SOURCE_URL = "https://transactions.test/transactions.json"


def make_transaction(
    transaction_id: int,
    customer_id: int,
    *,
    authorization_code: str = "AUTH1",
    transaction_date: str = "2024-01-01T00:00:00Z",
    transaction_type: str = "POS",
    transaction_status: str = "COMPLETED",
    description: str = "Test transaction",
    amount: int | float = 100,
    **metadata: Any,
) -> dict[str, Any]:
    """Build a transaction in the upstream wire format."""

    return {
        "transactionId": transaction_id,
        "authorizationCode": authorization_code,
        "transactionDate": transaction_date,
        "customerId": customer_id,
        "transactionType": transaction_type,
        "transactionStatus": transaction_status,
        "description": description,
        "amount": amount,
        "metadata": metadata,
    }


def to_transactions(records: list[dict[str, Any]]) -> list[Transaction]:
    return [Transaction.model_validate(record) for record in records]


@pytest.fixture()
def client() -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_transactions, None)
    app.dependency_overrides.pop(get_transaction_source, None)


@pytest.fixture()
def serve_transactions(client: TestClient) -> Callable[[list[dict[str, Any]]], None]:
    """Override the fetched transaction list with fixed in-memory records."""

    def _serve(records: list[dict[str, Any]]) -> None:
        transactions = to_transactions(records)
        app.dependency_overrides[get_transactions] = lambda: transactions

    return _serve


@pytest.fixture()
def upstream(client: TestClient) -> Callable[[Callable[[httpx.Request], httpx.Response]], None]:
    """Route the transaction source through an ``httpx.MockTransport`` handler."""

    def _install(handler: Callable[[httpx.Request], httpx.Response]) -> None:
        def _source() -> Iterator[TransactionSourceClient]:
            http_client = httpx.Client(transport=httpx.MockTransport(handler))
            try:
                yield TransactionSourceClient(SOURCE_URL, client=http_client)
            finally:
                http_client.close()

        app.dependency_overrides[get_transaction_source] = _source

    return _install
