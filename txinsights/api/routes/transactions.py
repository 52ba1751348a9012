"""Transaction timeline API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from txinsights.api.deps import get_transactions
from txinsights.obs import service_span
from txinsights.schemas import AggregatedTransactionsResponse, Transaction
from txinsights.services.aggregation import aggregate_transactions

router = APIRouter(prefix="/transactions")


@router.get(
    "/{customer_id}",
    response_model=AggregatedTransactionsResponse,
    response_model_exclude_none=True,
    summary="Aggregated transaction timelines for a customer",
)
def get_customer_transactions(
    customer_id: int,
    transactions: list[Transaction] = Depends(get_transactions),
) -> AggregatedTransactionsResponse:
    with service_span("transactions.aggregate", customer_id=customer_id, input_size=len(transactions)):
        aggregated = aggregate_transactions(transactions, customer_id)
    return AggregatedTransactionsResponse(transactions=aggregated)


__all__ = ["get_customer_transactions", "router"]
