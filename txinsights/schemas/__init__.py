"""Pydantic schemas package."""

from .relationship import CustomerRelationshipResponse, RelatedCustomer, RelationType
from .transaction import (
    AggregatedTransaction,
    AggregatedTransactionsResponse,
    TimelineEntry,
    Transaction,
    TransactionMetadata,
)

__all__ = [
    "AggregatedTransaction",
    "AggregatedTransactionsResponse",
    "CustomerRelationshipResponse",
    "RelatedCustomer",
    "RelationType",
    "TimelineEntry",
    "Transaction",
    "TransactionMetadata",
]
