"""Customer relationship API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from txinsights.api.deps import get_transactions
from txinsights.obs import service_span
from txinsights.schemas import CustomerRelationshipResponse, Transaction
from txinsights.services.relationships import resolve_relationships

router = APIRouter(prefix="/customers")


@router.get(
    "/{customer_id}/relationships",
    response_model=CustomerRelationshipResponse,
    summary="Customers related through P2P transfers or shared devices",
)
def get_customer_relationships(
    customer_id: int,
    transactions: list[Transaction] = Depends(get_transactions),
) -> CustomerRelationshipResponse:
    with service_span("customers.relationships", customer_id=customer_id, input_size=len(transactions)):
        related = resolve_relationships(transactions, customer_id)
    return CustomerRelationshipResponse(related_customers=related)


__all__ = ["get_customer_relationships", "router"]
